"""
Deterministic fallback email generator.

Used when the drafting call fails or returns nothing. Pure function of
(SubjectAnalysis, subject): no I/O, no randomness, never raises. Text
fragments come from lookup tables keyed by the closed enums, and every enum
member has an entry.
"""

from typing import NamedTuple

from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.models.enums import IntentEnum, SentimentEnum

REVIEW_PREFIX = "[Review Needed] "
SIGNATURE = "[Your Name]"
SPAM_REVIEW_NOTE = "Note: This email was flagged for review. Please verify its legitimacy."


class Tone(NamedTuple):
    greeting: str
    openers: tuple[str, ...]  # formatted with subject=
    closing: str


SENTIMENT_TONES: dict[SentimentEnum, Tone] = {
    SentimentEnum.POSITIVE: Tone(
        greeting="Hello,",
        openers=('Thank you for your message regarding "{subject}".',),
        closing="Warm regards,",
    ),
    SentimentEnum.NEGATIVE: Tone(
        greeting="Dear Sir/Madam,",
        openers=(
            'I acknowledge your message about "{subject}".',
            "We take this matter seriously and will address it promptly.",
        ),
        closing="Sincerely,",
    ),
    SentimentEnum.NEUTRAL: Tone(
        greeting="Hello,",
        openers=('I\'m writing in response to your message about "{subject}".',),
        closing="Best regards,",
    ),
}

INTENT_NOTES: dict[IntentEnum, str | None] = {
    IntentEnum.SUPPORT: "Our support team will assist you with this matter.",
    IntentEnum.MARKETING: "Thank you for your interest in our products/services.",
    IntentEnum.SPAM: "Note: This message has been flagged for review.",
    IntentEnum.PERSONAL: None,
    IntentEnum.UNKNOWN: None,
}


def generate_fallback_email(analysis: SubjectAnalysis, subject: str) -> str:
    """
    Build a template email for the given analysis.
    
    Layout:
        Subject: [Review Needed] Re: <subject>
        
        <greeting>
        
        <paragraphs, each followed by a blank line>
        <closing>
        [Your Name]
    """
    tone = SENTIMENT_TONES[analysis.sentiment]
    
    paragraphs = [opener.format(subject=subject) for opener in tone.openers]
    intent_note = INTENT_NOTES[analysis.intent]
    if intent_note:
        paragraphs.append(intent_note)
    if analysis.is_spam:
        paragraphs.append(SPAM_REVIEW_NOTE)
    
    prefix = REVIEW_PREFIX if analysis.is_spam else ""
    body = "".join(f"{paragraph}\n\n" for paragraph in paragraphs)
    
    return f"Subject: {prefix}Re: {subject}\n\n{tone.greeting}\n\n{body}\n{tone.closing}\n{SIGNATURE}"
