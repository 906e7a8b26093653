"""Unit tests for SubjectClassifier."""

import json

import pytest

from subject_mailer.assistant.classifier import SubjectClassifier
from subject_mailer.assistant.exceptions import (
    ClassificationError,
    ClassificationFailedError,
    EmptyResponseError,
    MalformedOutputError,
)
from subject_mailer.llm.exceptions import LLMAuthenticationError, LLMTimeoutError
from subject_mailer.models.enums import IntentEnum, SentimentEnum
from subject_mailer.validation import ValidationError


def make_classifier(llm_client, prompt_builder, observer=None):
    return SubjectClassifier(llm_client=llm_client, prompt_builder=prompt_builder, observer=observer)


class TestClassify:
    """Test suite for SubjectClassifier.classify()."""

    @pytest.mark.asyncio
    async def test_spam_subject_returns_model_values(self, llm_factory, prompt_builder):
        llm = llm_factory(content=json.dumps(
            {"intent": "spam", "sentiment": "positive", "isSpam": True, "confidence": 0.97}
        ))
        classifier = make_classifier(llm, prompt_builder)

        analysis = await classifier.classify("WIN A FREE CRUISE NOW!!!")

        assert analysis.intent is IntentEnum.SPAM
        assert analysis.sentiment is SentimentEnum.POSITIVE
        assert analysis.is_spam is True
        assert analysis.confidence == 0.97

    @pytest.mark.asyncio
    async def test_sends_subject_as_user_message_in_json_mode(self, llm_factory, prompt_builder):
        llm = llm_factory(content='{"intent": "support", "sentiment": "neutral", "isSpam": false, "confidence": 0.4}')
        classifier = make_classifier(llm, prompt_builder)

        await classifier.classify("Issue with recent purchase")

        assert len(llm.requests) == 1
        request = llm.requests[0]
        assert request.messages[0].role == "system"
        assert request.messages[1].role == "user"
        assert request.messages[1].content == "Issue with recent purchase"
        assert request.response_format == {"type": "json_object"}
        assert request.temperature == 0.1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   \n"])
    async def test_empty_content_raises(self, llm_factory, prompt_builder, content):
        classifier = make_classifier(llm_factory(content=content), prompt_builder)

        with pytest.raises(EmptyResponseError):
            await classifier.classify("Hello")

    @pytest.mark.asyncio
    async def test_non_json_content_raises_malformed(self, llm_factory, prompt_builder):
        classifier = make_classifier(llm_factory(content="Sure! Here is the analysis: intent=support"), prompt_builder)

        with pytest.raises(MalformedOutputError) as exc_info:
            await classifier.classify("Hello")

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert "content_snippet" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_schema_mismatch_raises_validation_error(self, llm_factory, prompt_builder):
        llm = llm_factory(content='{"intent": "bogus", "sentiment": "neutral", "isSpam": false, "confidence": 0.4}')
        classifier = make_classifier(llm, prompt_builder)

        with pytest.raises(ValidationError):
            await classifier.classify("Hello")

    @pytest.mark.asyncio
    async def test_json_array_raises_validation_error(self, llm_factory, prompt_builder):
        classifier = make_classifier(llm_factory(content="[1, 2, 3]"), prompt_builder)

        with pytest.raises(ValidationError):
            await classifier.classify("Hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            LLMTimeoutError("Request timeout after 30.0s"),
            LLMAuthenticationError("Groq rejected credentials: 401"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_provider_failure_raises_classification_failed(self, llm_factory, prompt_builder, error):
        classifier = make_classifier(llm_factory(error=error), prompt_builder)

        with pytest.raises(ClassificationFailedError) as exc_info:
            await classifier.classify("Hello")

        assert exc_info.value.__cause__ is error
        assert isinstance(exc_info.value, ClassificationError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("subject", ["", "x" * 201, None])
    async def test_invalid_subject_makes_no_call(self, llm_factory, prompt_builder, subject):
        llm = llm_factory(content="{}")
        classifier = make_classifier(llm, prompt_builder)

        with pytest.raises(ValidationError):
            await classifier.classify(subject)

        assert llm.requests == []

    @pytest.mark.asyncio
    async def test_emits_started_and_succeeded(self, llm_factory, prompt_builder, observer):
        llm = llm_factory(content='{"intent": "personal", "sentiment": "neutral", "isSpam": false, "confidence": 0.6}')
        classifier = make_classifier(llm, prompt_builder, observer)

        await classifier.classify("Follow-up on yesterday's meeting")

        assert observer.names() == ["classification_started", "classification_succeeded"]
        _, _, fields = observer.events[-1]
        assert fields["intent"] == "personal"

    @pytest.mark.asyncio
    async def test_emits_failure_event_with_reason(self, llm_factory, prompt_builder, observer):
        classifier = make_classifier(llm_factory(content="not json"), prompt_builder, observer)

        with pytest.raises(MalformedOutputError):
            await classifier.classify("Hello")

        level, event, fields = observer.events[-1]
        assert (level, event) == ("error", "classification_failed")
        assert fields["reason"] == "malformed_output"
