"""
Upstream text-generation client for the assessment pipeline.

Calls an OpenAI-compatible chat-completions serving endpoint over httpx.
Created once per process and injected into the question generator and the
answer reviewer; it is read-only after construction.
Integrated with Langfuse for observability and tracing.
"""

import logging
from typing import Any

import httpx
from langfuse import Langfuse

from coding_assessment.config.settings import Settings, get_settings
from coding_assessment.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    Text-generation client with an explicit availability check.

    Model Selection:
    - generation endpoint: question sets (long output)
    - review endpoint: per-answer reviews (low temperature)

    Observability:
    - Langfuse span per call when tracing is configured
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client from settings."""
        self.settings = settings or get_settings()
        self._available = self.settings.llm_configured

        if self._available:
            self.client = http_client or httpx.AsyncClient(
                base_url=self.settings.llm_host.rstrip("/"),
                headers={
                    "Authorization": f"Bearer {self.settings.llm_token}",
                    "Content-Type": "application/json",
                },
                timeout=self.settings.llm_timeout_seconds,
            )
        else:
            self.client = None
            logger.warning("No upstream credentials configured; live generation unavailable")

        # Initialize Langfuse for observability
        self.langfuse = None
        if self.settings.langfuse_enabled:
            if self.settings.langfuse_secret_key and self.settings.langfuse_public_key:
                try:
                    self.langfuse = Langfuse(
                        secret_key=self.settings.langfuse_secret_key,
                        public_key=self.settings.langfuse_public_key,
                        host=self.settings.langfuse_base_url,
                    )
                    logger.info("Langfuse initialized for LLM observability")
                except Exception as e:
                    logger.warning(f"Failed to initialize Langfuse: {e}")
            else:
                logger.info("Langfuse keys not configured, tracing disabled")

    def is_available(self) -> bool:
        """Whether the upstream service is configured."""
        return self._available

    async def close(self):
        """Close the HTTP client and flush Langfuse."""
        if self.client is not None:
            await self.client.aclose()
        if self.langfuse:
            try:
                self.langfuse.flush()
            except Exception as e:
                logger.warning(f"Failed to flush Langfuse: {e}")

    # =========================================================================
    # CORE CALLS
    # =========================================================================

    def _extract_content(self, result: dict) -> str:
        """Extract text content from API response, handling list/dict formats."""
        if not isinstance(result, dict):
            raise ValueError(f"Response is not an object: {type(result).__name__}")
        choices = result.get("choices") or [{}]
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise ValueError("Response 'choices' is not a list of objects")
        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            raise ValueError("Response 'message' is not an object")
        content = message.get("content", "")

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        return content if isinstance(content, str) else str(content)

    async def complete(
        self,
        prompt: str,
        endpoint: str,
        max_tokens: int,
        temperature: float,
        trace_name: str = "llm_call",
        trace_metadata: dict | None = None,
    ) -> str:
        """
        Send a single-prompt completion request.

        Args:
            prompt: The prompt to send
            endpoint: Serving endpoint path
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature
            trace_name: Name for Langfuse span
            trace_metadata: Additional metadata for span

        Returns:
            Model response text

        Raises:
            UpstreamUnavailableError: Not configured, or the call failed
        """
        if not self._available:
            raise UpstreamUnavailableError("Upstream text-generation service is not configured")

        span = self._start_span(trace_name, trace_metadata)
        payload = {
            "messages": [
                {"role": "user", "content": prompt}
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            response = await self.client.post(endpoint, json=payload)
            response.raise_for_status()
            text = self._extract_content(response.json())
        except httpx.HTTPError as e:
            logger.error(f"Upstream API error ({trace_name}): {e}")
            self._end_span(span, {"error": str(e)})
            raise UpstreamUnavailableError(f"Upstream call failed: {e}") from e
        except (ValueError, AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error(f"Unexpected upstream response envelope ({trace_name}): {e}")
            self._end_span(span, {"error": str(e)})
            raise UpstreamUnavailableError(f"Unexpected upstream response: {e}") from e

        logger.info(f"Received upstream response ({trace_name}, {len(text)} characters)")
        self._end_span(span, {"response_length": len(text)})
        return text

    async def generate_questions(self, prompt: str) -> str:
        """Call the generation endpoint for a question set."""
        return await self.complete(
            prompt,
            endpoint=self.settings.generation_endpoint,
            max_tokens=self.settings.generation_max_tokens,
            temperature=self.settings.generation_temperature,
            trace_name="question_generation_llm",
        )

    async def review_answer(self, prompt: str, question_id: str) -> str:
        """Call the review endpoint for one answer."""
        return await self.complete(
            prompt,
            endpoint=self.settings.review_endpoint,
            max_tokens=self.settings.review_max_tokens,
            temperature=self.settings.review_temperature,
            trace_name="answer_review_llm",
            trace_metadata={"question_id": question_id},
        )

    # =========================================================================
    # TRACING
    # =========================================================================

    def _start_span(self, name: str, metadata: dict | None) -> Any:
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(name=name, metadata=metadata or {})
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(self, span: Any, output: dict) -> None:
        if span is None:
            return
        try:
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")

    def record_score(self, name: str, value: float, comment: str | None = None) -> None:
        """Log a score to Langfuse when tracing is on."""
        if not self.langfuse:
            return
        try:
            self.langfuse.create_score(name=name, value=value, comment=comment)
        except Exception as lf_err:
            logger.warning(f"Langfuse score failed: {lf_err}")
