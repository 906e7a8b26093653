"""Unit tests for subject/body extraction from generated email text."""

from subject_mailer.assistant.fallback import generate_fallback_email
from subject_mailer.presentation.extraction import extract_email_body, extract_email_subject


class TestExtractEmailSubject:

    def test_uses_subject_line(self):
        email = "Subject: Re: Your order #123\n\nHello,\n\nThanks."
        assert extract_email_subject(email, "Order") == "Re: Your order #123"

    def test_is_case_insensitive(self):
        assert extract_email_subject("SUBJECT:   Update\nBody", "x") == "Update"

    def test_takes_first_match(self):
        email = "Subject: First\n\nSubject: Second"
        assert extract_email_subject(email, "x") == "First"

    def test_defaults_to_reply_of_original(self):
        assert extract_email_subject("Hello,\n\nNo subject line here.", "Meeting") == "Re: Meeting"

    def test_subject_line_not_at_start(self):
        email = "Here is your email:\nSubject: Welcome aboard\n\nHi"
        assert extract_email_subject(email, "x") == "Welcome aboard"


class TestExtractEmailBody:

    def test_removes_subject_line_and_blank_lines(self):
        email = "Subject: Re: Hi\n\n\nHello,\n\nThanks.\n\nBest regards,\nAda"
        assert extract_email_body(email) == "Hello,\n\nThanks.\n\nBest regards,\nAda"

    def test_removes_only_first_subject_line(self):
        email = "Subject: One\n\nBody mentions Subject: Two"
        assert extract_email_body(email) == "Body mentions Subject: Two"

    def test_without_subject_line_trims(self):
        assert extract_email_body("  \nHello,\n\nThanks.  \n") == "Hello,\n\nThanks."

    def test_fallback_email_round_trip(self, make_analysis):
        email = generate_fallback_email(make_analysis(), "Follow-up on yesterday's meeting")

        assert extract_email_subject(email, "ignored") == "Re: Follow-up on yesterday's meeting"
        body = extract_email_body(email)
        assert body.startswith("Hello,")
        assert body.endswith("[Your Name]")
