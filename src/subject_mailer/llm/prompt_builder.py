"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompts)
- Embedding analysis fields into the drafting instruction
- Constructing complete LLMGenerationRequest objects with sampling parameters
"""

from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from subject_mailer.llm.text_utils import confidence_percent
from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.models.enums import IntentEnum, SentimentEnum
from subject_mailer.models.llm_models import ChatMessage, LLMGenerationRequest


logger = structlog.get_logger(__name__)

JSON_OBJECT_FORMAT = {"type": "json_object"}


class PromptBuilder:
    """
    Build classification and drafting requests.

    Handles:
    - Template rendering (Jinja2)
    - Model / temperature / token limits per request type
    - JSON object response mode for classification
    """

    def __init__(
        self,
        templates_dir: Path,
        model: str = "openai/gpt-oss-120b",
        classify_temperature: float = 0.1,
        draft_temperature: float = 0.1,
        draft_stream_temperature: float = 0.1,
        draft_max_tokens: int = 1024,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates
            model: Model name used for every request
            classify_temperature: Temperature for classification
            draft_temperature: Temperature for single-shot drafting
            draft_stream_temperature: Temperature for streamed drafting
            draft_max_tokens: Completion token limit for drafting
        """
        self.templates_dir = Path(templates_dir)
        self.model = model
        self.classify_temperature = classify_temperature
        self.draft_temperature = draft_temperature
        self.draft_stream_temperature = draft_stream_temperature
        self.draft_max_tokens = draft_max_tokens

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.classifier_system_template = self.jinja_env.get_template("classifier_system.txt")
            self.drafter_system_template = self.jinja_env.get_template("drafter_system.txt")
            self.drafter_user_template = self.jinja_env.get_template("drafter_user.txt")
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_classifier_system_prompt(self) -> str:
        """Render the fixed classification instruction."""
        return self.classifier_system_template.render(
            intents=[intent.value for intent in IntentEnum],
            sentiments=[sentiment.value for sentiment in SentimentEnum],
        ).strip()

    def build_drafter_system_prompt(self) -> str:
        """Render the fixed drafting persona."""
        return self.drafter_system_template.render().strip()

    def build_draft_prompt(self, analysis: SubjectAnalysis, subject: str) -> str:
        """
        Render the drafting instruction for one analysis.

        Args:
            analysis: Validated classification
            subject: Original subject line

        Returns:
            Rendered user prompt
        """
        return self.drafter_user_template.render(
            subject=subject,
            intent=analysis.intent.value,
            sentiment=analysis.sentiment.value,
            confidence_percent=confidence_percent(analysis.confidence),
            is_spam=analysis.is_spam,
        ).strip()

    def build_classification_request(self, subject: str) -> LLMGenerationRequest:
        """
        Build the classification request.

        The subject is sent verbatim as the user message; the system message
        demands strict JSON with the four analysis fields.
        """
        system_prompt = self.build_classifier_system_prompt()

        llm_request = LLMGenerationRequest(
            messages=[
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=subject),
            ],
            model=self.model,
            temperature=self.classify_temperature,
            response_format=JSON_OBJECT_FORMAT,
            stream=False,
        )

        logger.debug(
            "Classification request built",
            model=self.model,
            system_prompt_length=len(system_prompt),
            subject_length=len(subject),
        )
        return llm_request

    def build_draft_request(
        self,
        analysis: SubjectAnalysis,
        subject: str,
        stream: bool = False,
        temperature: Optional[float] = None,
    ) -> LLMGenerationRequest:
        """
        Build the drafting request (same prompt for streamed and single-shot).

        Args:
            analysis: Validated classification
            subject: Original subject line
            stream: Whether the response will be streamed
            temperature: Override the configured temperature

        Returns:
            LLMGenerationRequest
        """
        if temperature is None:
            temperature = self.draft_stream_temperature if stream else self.draft_temperature

        user_prompt = self.build_draft_prompt(analysis, subject)

        llm_request = LLMGenerationRequest(
            messages=[
                ChatMessage(role="system", content=self.build_drafter_system_prompt()),
                ChatMessage(role="user", content=user_prompt),
            ],
            model=self.model,
            temperature=temperature,
            max_tokens=self.draft_max_tokens,
            stream=stream,
        )

        logger.debug(
            "Draft request built",
            model=self.model,
            temperature=temperature,
            max_tokens=self.draft_max_tokens,
            user_prompt_length=len(user_prompt),
            stream=stream,
        )
        return llm_request
