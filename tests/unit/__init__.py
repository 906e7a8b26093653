"""
Unit tests for Subject Mailer.

Components in isolation, with a scripted LLM client or httpx.MockTransport
standing in for Groq:
- Schema gates (subject input, analysis output)
- Classifier, drafter (single-shot and streamed), fallback templates
- Groq client (HTTP mapping, SSE parsing, retries)
- Prompt rendering, workspace state, subject/body extraction
"""
