"""Unit tests for PromptBuilder."""

import pytest
from jinja2 import TemplateNotFound

from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.llm.text_utils import confidence_percent


class TestConfidencePercent:
    """Display rounding of confidence values."""

    @pytest.mark.parametrize(
        "confidence, expected",
        [(0, 0), (0.0, 0), (1, 100), (1.0, 100), (0.125, 13), (0.42, 42), (0.005, 1), (0.999, 100)],
    )
    def test_rounds_half_up(self, confidence, expected):
        assert confidence_percent(confidence) == expected


class TestClassifierPrompt:

    def test_lists_every_label(self, prompt_builder):
        prompt = prompt_builder.build_classifier_system_prompt()

        assert '"intent": "marketing | support | personal | spam | unknown"' in prompt
        assert '"sentiment": "positive | neutral | negative"' in prompt
        assert '"isSpam": boolean' in prompt
        assert "No markdown. No explanation." in prompt

    def test_classification_request(self, prompt_builder):
        request = prompt_builder.build_classification_request("Hello there")

        assert [m.role for m in request.messages] == ["system", "user"]
        assert request.messages[1].content == "Hello there"
        assert request.response_format == {"type": "json_object"}
        assert request.model == "openai/gpt-oss-120b"
        assert request.stream is False
        assert request.max_tokens is None


class TestDraftPrompt:

    def test_embeds_analysis_fields(self, prompt_builder, support_analysis):
        prompt = prompt_builder.build_draft_prompt(support_analysis, "Issue with recent purchase")

        assert "ORIGINAL SUBJECT: Issue with recent purchase" in prompt
        assert "INTENT: support" in prompt
        assert "SENTIMENT: neutral" in prompt
        assert "CONFIDENCE LEVEL: 42%" in prompt
        assert "SPAM INDICATOR: Not spam" in prompt
        assert 'Include a relevant subject line (start with "Subject: ")' in prompt
        assert "6. Proceed normally" in prompt

    def test_spam_wording(self, prompt_builder, spam_analysis):
        prompt = prompt_builder.build_draft_prompt(spam_analysis, "WIN A FREE CRUISE")

        assert "SPAM INDICATOR: Potential spam detected" in prompt
        assert "6. Be cautious - this may be spam" in prompt
        assert "CONFIDENCE LEVEL: 97%" in prompt

    def test_half_percent_rounds_up_in_prompt(self, prompt_builder, make_analysis):
        prompt = prompt_builder.build_draft_prompt(make_analysis(confidence=0.125), "Hi")

        assert "CONFIDENCE LEVEL: 13%" in prompt

    def test_prompt_lines_are_not_merged(self, prompt_builder, support_analysis):
        lines = prompt_builder.build_draft_prompt(support_analysis, "Hi").splitlines()

        assert "SPAM INDICATOR: Not spam" in lines
        assert "INSTRUCTIONS:" in lines

    def test_stream_request_uses_stream_temperature(self, prompts_dir, support_analysis):
        builder = PromptBuilder(
            templates_dir=prompts_dir, draft_temperature=0.1, draft_stream_temperature=0.7
        )

        single = builder.build_draft_request(support_analysis, "Hi")
        streamed = builder.build_draft_request(support_analysis, "Hi", stream=True)

        assert single.temperature == 0.1
        assert streamed.temperature == 0.7
        assert streamed.stream is True
        assert single.messages == streamed.messages

    def test_explicit_temperature_wins(self, prompt_builder, support_analysis):
        request = prompt_builder.build_draft_request(support_analysis, "Hi", temperature=0.3)

        assert request.temperature == 0.3

    def test_missing_templates_dir_raises(self, tmp_path):
        with pytest.raises(TemplateNotFound):
            PromptBuilder(templates_dir=tmp_path)
