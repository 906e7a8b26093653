"""
Integration tests for Subject Mailer.

The FastAPI app end to end through TestClient: routing, error mapping,
streaming responses and the page-backed workspace flow. The LLM client is
overridden with a scripted fake, so no Groq account is needed.
"""
