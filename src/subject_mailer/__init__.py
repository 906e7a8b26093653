"""
Subject Mailer: email subject analysis and reply drafting.

Classifies a free-text email subject (intent, sentiment, spam) with a hosted
LLM, validates the model's JSON against a fixed schema, and drafts a reply
email, falling back to a deterministic template when the model is unavailable.

Architecture: FastAPI app + Groq chat completions + schema validation gates
"""

__version__ = "0.1.0"
