"""
Enumerations for Subject Mailer data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class IntentEnum(str, Enum):
    """
    Coarse classification of why an email subject was written.
    
    UNKNOWN is a valid label when the subject doesn't fit any other category.
    """
    
    MARKETING = "marketing"
    SUPPORT = "support"
    PERSONAL = "personal"
    SPAM = "spam"
    UNKNOWN = "unknown"


class SentimentEnum(str, Enum):
    """Coarse emotional tone of the subject (single-label)."""
    
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class DraftSource(str, Enum):
    """Where the text of a drafted email came from."""
    
    LLM = "llm"
    FALLBACK = "fallback"
