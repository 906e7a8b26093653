"""
FastAPI dependency injection for Subject Mailer.

Provides singleton instances of expensive resources (LLM client, prompt
builder, workspace) and factory functions for the classifier and drafter.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from subject_mailer.assistant.classifier import SubjectClassifier
from subject_mailer.assistant.drafter import EmailDrafter
from subject_mailer.config import Settings, settings
from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.groq_client import GroqClient
from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.presentation.workspace import EmailWorkspace


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton LLM client with connection pooling.
    
    Returns:
        GroqClient instance
    """
    current = get_settings()
    return GroqClient(
        api_key=current.GROQ_API_KEY.get_secret_value(),
        base_url=current.GROQ_BASE_URL,
        timeout=current.GROQ_TIMEOUT,
        max_retries=current.LLM_MAX_RETRIES,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.
    
    Loads Jinja2 templates once and reuses them across requests.
    """
    current = get_settings()
    return PromptBuilder(
        templates_dir=Path(current.PROMPT_TEMPLATES_DIR),
        model=current.GROQ_MODEL,
        classify_temperature=current.CLASSIFY_TEMPERATURE,
        draft_temperature=current.DRAFT_TEMPERATURE,
        draft_stream_temperature=current.DRAFT_STREAM_TEMPERATURE,
        draft_max_tokens=current.DRAFT_MAX_TOKENS,
    )


def get_classifier(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
) -> SubjectClassifier:
    """
    Create classifier with injected dependencies.
    
    Not cached: it's lightweight; the client and builder are singletons.
    """
    return SubjectClassifier(
        llm_client=llm_client,
        prompt_builder=prompt_builder,
        subject_max_length=get_settings().SUBJECT_MAX_LENGTH,
    )


def get_drafter(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
) -> EmailDrafter:
    """Create drafter with injected dependencies."""
    return EmailDrafter(llm_client=llm_client, prompt_builder=prompt_builder)


@lru_cache()
def get_workspace() -> EmailWorkspace:
    """
    Get the single in-memory workspace used by the web page.
    """
    llm_client = get_llm_client()
    prompt_builder = get_prompt_builder()
    return EmailWorkspace(
        classifier=get_classifier(llm_client, prompt_builder),
        drafter=get_drafter(llm_client, prompt_builder),
    )
