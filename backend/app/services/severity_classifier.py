"""Severity classification of session events using the OpenRouter API."""
import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.constants import MAX_CLASSIFIER_FIELD, CriticalityLevel
from app.models.event import Event
from app.services.normalization import truncate
from app.utils.clock import ensure_utc
from app.utils.logger import logger

SYSTEM_PROMPT = """You are an automated incident severity classifier.

You will receive technical event logs from one user session of a web
application. Each event may include logs, stack traces, metadata and user
actions.

Decide the overall criticality of the incident:
LOW - minor issue, no visible user impact
MEDIUM - partial degradation, noticeable issues
HIGH - major malfunction, a core feature is broken
CRITICAL - crashes, data loss or security issues

Rules:
- Base the decision only on the events provided
- Answer with exactly one word: LOW, MEDIUM, HIGH or CRITICAL
- No explanation, no punctuation
"""

EVENT_TEMPLATE = """---
timestamp: {timestamp}
type: {type}
name: {name}
url: {url}
element: {element}
log: {log}
stackTrace: {stack_trace}
"""


class SeverityClassifier:
    """
    Client that asks a hosted language model how severe a session's events are.

    Without an API key ``classify`` raises ValueError instead of sending an
    unauthenticated request, so callers see a configuration error rather
    than the MEDIUM a rejected call would produce.
    """

    ALLOWED_LEVELS = frozenset({
        CriticalityLevel.LOW,
        CriticalityLevel.MEDIUM,
        CriticalityLevel.HIGH,
        CriticalityLevel.CRITICAL,
    })
    FALLBACK_LEVEL = CriticalityLevel.MEDIUM

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        reasoning: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openrouter_api_key
        self.model = model or settings.openrouter_model
        self.base_url = (base_url or settings.openrouter_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.classifier_timeout_seconds
        self.reasoning = settings.classifier_reasoning if reasoning is None else reasoning
        self.transport = transport

    def build_user_prompt(self, events: List[Event]) -> str:
        """Render the event transcript sent as the user message."""
        parts = ["Session events:\n"]
        for event in events:
            parts.append(EVENT_TEMPLATE.format(
                timestamp=ensure_utc(event.timestamp).isoformat() if event.timestamp else None,
                type=event.type.value if event.type else None,
                name=event.name,
                url=event.url,
                element=event.element,
                log=truncate(event.log, MAX_CLASSIFIER_FIELD),
                stack_trace=truncate(event.stack_trace, MAX_CLASSIFIER_FIELD),
            ))
        parts.append("\nReturn the incident criticality level.")
        return "".join(parts)

    def build_payload(self, events: List[Event]) -> Dict[str, Any]:
        """Build the chat-completions request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": self.build_user_prompt(events)},
            ],
            "reasoning": {"enabled": self.reasoning},
        }

    async def _request_completion(self, payload: Dict[str, Any]) -> Any:
        """
        Send the request and return the first choice's text.

        Returns:
            Message content, or None when the response has no choices
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            response = await client.post("/chat/completions", json=payload, headers=headers)
            if response.status_code != 200:
                logger.error(f"[CLASSIFIER] Error response {response.status_code}: {response.text[:500]}")
            response.raise_for_status()
            result = response.json()

        choices = result.get("choices") or []
        if not choices:
            return None
        message = choices[0].get("message") or {}
        return message.get("content")

    def parse_level(self, raw: Any) -> CriticalityLevel:
        """Map model output onto an allowed level, falling back to MEDIUM."""
        if raw is None:
            return self.FALLBACK_LEVEL
        if not isinstance(raw, str):
            logger.warning(f"[CLASSIFIER] Non-text criticality response: {type(raw).__name__}")
            return self.FALLBACK_LEVEL
        value = raw.strip().upper()
        try:
            level = CriticalityLevel(value)
        except ValueError:
            level = None
        if level not in self.ALLOWED_LEVELS:
            logger.warning(f"[CLASSIFIER] Unrecognized criticality response: {value[:100]!r}")
            return self.FALLBACK_LEVEL
        return level

    async def classify(self, events: List[Event]) -> CriticalityLevel:
        """
        Classify the severity of a list of events.

        Any failure of the call itself (timeout, transport or HTTP error,
        malformed or empty response) resolves to MEDIUM.

        Args:
            events: Events of one session, in chronological order

        Returns:
            One of LOW, MEDIUM, HIGH, CRITICAL

        Raises:
            ValueError: If no API key is configured
        """
        if not self.api_key:
            raise ValueError("OpenRouter API key required. Set OPENROUTER_API_KEY environment variable.")

        payload = self.build_payload(events)
        logger.info(f"[CLASSIFIER] Classifying {len(events)} events with model {self.model}")
        logger.debug(f"[CLASSIFIER] Request payload: {json.dumps(payload)[:2000]}")

        try:
            content = await asyncio.wait_for(self._request_completion(payload), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"[CLASSIFIER] Request timed out after {self.timeout}s")
            return self.FALLBACK_LEVEL
        except Exception as e:
            logger.error(f"[CLASSIFIER] Criticality analysis failed: {e}", exc_info=True)
            return self.FALLBACK_LEVEL

        if content is None:
            logger.warning("[CLASSIFIER] Empty response from model")
            return self.FALLBACK_LEVEL

        return self.parse_level(content)
