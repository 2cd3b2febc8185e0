"""
AI Gateway Completion Client

Forwards transcripts to an OpenAI-compatible chat-completions endpoint and
normalizes its error surface.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from libs.result import Error, Result, Return
from src.app.services.completion_service import Completion, ICompletionService
from src.domain.transcript import AssistantMessage, UserMessage, with_system_preamble

logger = logging.getLogger(__name__)


class AIGatewayCompletionService(ICompletionService):
    """
    httpx-backed completion proxy.

    Behaviour:
    - Prepends the configured system prompt to every transcript
    - Always sends the session's pinned model
    - 429 -> UPSTREAM_RATE_LIMITED, 402 -> UPSTREAM_PAYMENT_REQUIRED
    - Any other non-2xx, transport failure, timeout or malformed body
      -> UPSTREAM_ERROR (details are logged, never returned)
    - tokens_consumed comes from usage.total_tokens, 0 when absent
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        system_prompt: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.system_prompt = system_prompt
        self.timeout = timeout
        self._client = client

    async def complete(
        self,
        transcript: List[Union[UserMessage, AssistantMessage]],
        model_name: str,
    ) -> Result[Completion]:
        if not self.api_key:
            logger.error("AI gateway API key is not configured")
            return Return.err(
                Error("UPSTREAM_NOT_CONFIGURED", "AI gateway is not configured")
            )

        messages = with_system_preamble(self.system_prompt, transcript)
        body = {
            "model": model_name,
            "messages": [message.model_dump() for message in messages],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._post(body, headers)
        except httpx.TimeoutException:
            logger.error(
                "AI gateway timed out after %ss (model=%s)", self.timeout, model_name
            )
            return Return.err(Error("UPSTREAM_ERROR", "AI gateway error"))
        except httpx.HTTPError as exc:
            logger.error("AI gateway transport error (model=%s): %s", model_name, exc)
            return Return.err(Error("UPSTREAM_ERROR", "AI gateway error"))

        if response.status_code == 429:
            logger.warning("AI gateway rate limited (model=%s)", model_name)
            return Return.err(
                Error(
                    "UPSTREAM_RATE_LIMITED",
                    "Rate limits exceeded, please try again later.",
                )
            )
        if response.status_code == 402:
            logger.error("AI gateway payment required (model=%s)", model_name)
            return Return.err(
                Error(
                    "UPSTREAM_PAYMENT_REQUIRED",
                    "Payment required, please add funds to your workspace.",
                )
            )
        if not response.is_success:
            logger.error(
                "AI gateway error: status=%s body=%s", response.status_code, response.text
            )
            return Return.err(Error("UPSTREAM_ERROR", "AI gateway error"))

        try:
            payload = response.json()
            content = payload["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            logger.error(
                "AI gateway returned malformed body: status=%s body=%s",
                response.status_code,
                response.text,
            )
            return Return.err(Error("UPSTREAM_ERROR", "AI gateway error"))

        if not isinstance(content, str):
            logger.error("AI gateway returned non-text content: %r", content)
            return Return.err(Error("UPSTREAM_ERROR", "AI gateway error"))

        return Return.ok(
            Completion(content=content, tokens_consumed=_total_tokens(payload))
        )

    async def _post(self, body: Dict[str, Any], headers: Dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                self.url, json=body, headers=headers, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, json=body, headers=headers)


def _total_tokens(payload: Dict[str, Any]) -> int:
    """Read upstream usage accounting; missing or bogus values count as 0"""
    usage = payload.get("usage") or {}
    try:
        total = int(usage.get("total_tokens") or 0)
    except (TypeError, ValueError, AttributeError):
        return 0
    return max(total, 0)
