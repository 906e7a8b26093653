"""
Groq client implementation for LLM inference.

Talks to Groq's OpenAI-compatible chat completions API with httpx AsyncClient.
Supports:
- JSON object response mode
- Server-sent event streaming
- Connection pooling
- Health checks via the models endpoint
"""

import asyncio
import json
import time
from typing import Any, AsyncIterator, Dict, Optional

import httpx
import structlog

from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from subject_mailer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from subject_mailer.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


def _error_for_status(status_code: int, error_text: str, model: str) -> LLMClientError:
    """Map an HTTP error status onto the LLM exception hierarchy."""
    details = {"status": status_code, "error": error_text[:500]}
    if status_code in (401, 403):
        return LLMAuthenticationError(f"Groq rejected credentials: {status_code}", details=details)
    if status_code == 429:
        return LLMRateLimitError("Groq rate limit exceeded", details=details)
    if status_code == 404:
        return LLMGenerationError(f"Model not found: {model}", details={**details, "model": model})
    if status_code >= 500:
        return LLMGenerationError(f"Groq server error: {status_code}", details=details, retryable=True)
    return LLMGenerationError(f"Groq client error: {status_code}", details=details)


class GroqClient(BaseLLMClient):
    """
    Groq-specific LLM client using httpx for async HTTP communication.

    API Endpoints:
    - POST /chat/completions: Generate completion (optionally streamed)
    - GET /models: List available models (health check)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 30.0,
        max_retries: int = 1,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Groq client.

        Args:
            api_key: Groq API key (sent as bearer token)
            base_url: API root including the /openai/v1 prefix
            timeout: Request timeout in seconds
            max_retries: Total attempts for non-streamed requests
            connection_limits: httpx connection pool limits
            transport: Custom httpx transport (tests use httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, max_retries, **kwargs)

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    @staticmethod
    def _build_payload(request: LLMGenerationRequest) -> Dict[str, Any]:
        """
        Build the chat completions payload.

        {
            "model": "openai/gpt-oss-120b",
            "messages": [{"role": "system", "content": "..."}, ...],
            "temperature": 0.1,
            "max_completion_tokens": 1024,
            "response_format": {"type": "json_object"},
            "stream": false
        }
        """
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [message.model_dump() for message in request.messages],
            "temperature": request.temperature,
            "stream": request.stream,
        }
        if request.max_tokens is not None:
            payload["max_completion_tokens"] = request.max_tokens
        if request.response_format is not None:
            payload["response_format"] = request.response_format
        return payload

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate completion using POST /chat/completions.

        Response:
        {
            "model": "openai/gpt-oss-120b",
            "choices": [{"message": {"content": "..."}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 50, "completion_tokens": 150}
        }
        """
        start_time = time.time()
        payload = self._build_payload(request.model_copy(update={"stream": False}))

        logger.info(
            "Sending chat completion request to Groq",
            model=request.model,
            message_count=len(request.messages),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            json_mode=request.response_format is not None
        )

        last_error: Optional[LLMClientError] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                client = await self._get_client()
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()

                response_data = response.json()
                latency_ms = int((time.time() - start_time) * 1000)

                choices = response_data.get("choices") or []
                first_choice = choices[0] if choices else {}
                content = (first_choice.get("message") or {}).get("content") or ""

                model_version = response_data.get("model", request.model)
                usage = response_data.get("usage") or {}
                prompt_tokens = usage.get("prompt_tokens")
                completion_tokens = usage.get("completion_tokens")

                logger.info(
                    "Groq generation successful",
                    model=model_version,
                    latency_ms=latency_ms,
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens,
                    finish_reason=first_choice.get("finish_reason"),
                    content_length=len(content),
                    attempt=attempt
                )

                llm_latency_seconds.labels(
                    model=model_version, success="true"
                ).observe(latency_ms / 1000.0)
                if prompt_tokens:
                    llm_tokens_total.labels(
                        model=model_version, token_type="prompt"
                    ).inc(prompt_tokens)
                if completion_tokens:
                    llm_tokens_total.labels(
                        model=model_version, token_type="completion"
                    ).inc(completion_tokens)

                return LLMGenerationResponse(
                    content=content,
                    model_version=model_version,
                    finish_reason=first_choice.get("finish_reason"),
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens,
                    latency_ms=latency_ms,
                    raw_metadata={
                        "id": response_data.get("id"),
                        "system_fingerprint": response_data.get("system_fingerprint"),
                    }
                )

            except httpx.TimeoutException as e:
                logger.warning(
                    "Groq request timeout",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                    error=str(e)
                )
                last_error = LLMTimeoutError(
                    f"Request timeout after {self.timeout}s",
                    details={"attempt": attempt, "timeout": self.timeout}
                )

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.error(
                    "Groq HTTP error",
                    status_code=status_code,
                    error_text=e.response.text[:500],
                    attempt=attempt
                )
                last_error = _error_for_status(status_code, e.response.text, request.model)
                if not last_error.retryable:
                    raise last_error from e

            except httpx.TransportError as e:
                logger.warning(
                    "Groq network error",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e)
                )
                last_error = LLMConnectionError(
                    f"Network error: {str(e)}",
                    details={"attempt": attempt, "error_type": type(e).__name__}
                )

            except ValueError as e:
                # response.json() failed
                logger.error("Failed to parse Groq response JSON", error=str(e), attempt=attempt)
                raise LLMGenerationError(
                    "Invalid JSON response from Groq",
                    details={"parse_error": str(e)}
                ) from e

            llm_latency_seconds.labels(model=request.model, success="false").observe(
                time.time() - start_time
            )
            if attempt < self.max_retries:
                backoff = 2 ** attempt
                logger.info("Retrying Groq request", backoff_seconds=backoff, attempt=attempt)
                await asyncio.sleep(backoff)

        if last_error:
            raise last_error
        raise LLMGenerationError("Generation failed after all retries")

    async def stream(self, request: LLMGenerationRequest) -> AsyncIterator[str]:
        """
        Stream completion text from POST /chat/completions with stream=true.

        Each server-sent event carries one chunk:
            data: {"choices": [{"delta": {"content": "Hel"}}]}
        and the stream ends with:
            data: [DONE]

        Streams are never retried; a failure mid-stream is raised to the caller.
        """
        payload = self._build_payload(request.model_copy(update={"stream": True}))
        start_time = time.time()
        chunk_count = 0

        logger.info(
            "Opening chat completion stream",
            model=request.model,
            temperature=request.temperature,
            max_tokens=request.max_tokens
        )

        try:
            client = await self._get_client()
            async with client.stream("POST", "/chat/completions", json=payload) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise _error_for_status(response.status_code, response.text, request.model)

                async for line in response.aiter_lines():
                    line = line.strip()
                    if not line.startswith(SSE_DATA_PREFIX):
                        # Blank separators and ": keep-alive" comments
                        continue

                    data = line[len(SSE_DATA_PREFIX):].strip()
                    if data == SSE_DONE:
                        break

                    event = json.loads(data)
                    if event.get("error"):
                        raise LLMGenerationError(
                            "Groq reported an error mid-stream",
                            details={"error": event["error"]}
                        )

                    choices = event.get("choices") or []
                    delta = (choices[0].get("delta") or {}) if choices else {}
                    content = delta.get("content") or ""
                    if content:
                        chunk_count += 1
                        yield content

        except httpx.TimeoutException as e:
            raise LLMTimeoutError(
                f"Stream timeout after {self.timeout}s",
                details={"chunks_received": chunk_count}
            ) from e
        except httpx.TransportError as e:
            raise LLMConnectionError(
                f"Network error during stream: {str(e)}",
                details={"chunks_received": chunk_count, "error_type": type(e).__name__}
            ) from e
        except json.JSONDecodeError as e:
            raise LLMGenerationError(
                "Invalid JSON event in Groq stream",
                details={"parse_error": str(e), "chunks_received": chunk_count}
            ) from e

        logger.info(
            "Chat completion stream finished",
            model=request.model,
            chunks=chunk_count,
            latency_ms=int((time.time() - start_time) * 1000)
        )

    async def health_check(self) -> bool:
        """
        Check Groq reachability via GET /models.

        Returns True if the provider responds with 2xx, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Groq health check passed")
            return True
        except Exception as e:
            logger.warning("Groq health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Groq client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
