"""HTTP client for the mentor language-model service.

Calls the Generative Language ``generateContent`` REST endpoint with
``httpx``.  A single attempt is made; failures surface as typed
:class:`MentorError` subclasses and are turned into user-facing text by
:class:`~trading_journal.mentor.session.MentorSession`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import httpx

from trading_journal.core.config import MentorConfig
from trading_journal.core.errors import MentorConfigurationError, MentorServiceError
from trading_journal.journal.record import Trade

from .prompt import build_mentor_prompt

logger = logging.getLogger(__name__)

NO_ANALYSIS_TEXT = "Could not generate analysis."


@runtime_checkable
class IMentorClient(Protocol):
    async def analyze(self, trades: Sequence[Trade], balance: float) -> str:
        """Return free-text feedback on *trades*."""
        ...


class MentorClient:
    """Language-model backed trading mentor.

    Parameters
    ----------
    config : MentorConfig
        Endpoint, model, credential env var and timeout.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (e.g. ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        config: MentorConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or MentorConfig()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        base = self._config.base_url.rstrip("/")
        return f"{base}/models/{self._config.model}:generateContent"

    async def analyze(self, trades: Sequence[Trade], balance: float) -> str:
        """Ask the mentor for feedback on the most recent trades.

        Raises
        ------
        MentorConfigurationError
            If the API key environment variable is unset.
        MentorServiceError
            On transport failure, timeout, non-2xx status or an
            unreadable response body.
        """
        api_key = self._config.api_key
        if not api_key:
            raise MentorConfigurationError(
                f"{self._config.api_key_env} not set; cannot call mentor service"
            )

        prompt = build_mentor_prompt(
            trades, balance, sample_size=self._config.sample_size,
        )
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as http:
                resp = await http.post(
                    self.endpoint,
                    headers={
                        "x-goog-api-key": api_key,
                        "content-type": "application/json",
                    },
                    json=payload,
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise MentorServiceError(f"Mentor request failed: {exc}") from exc
        except ValueError as exc:
            raise MentorServiceError("Mentor response is not valid JSON") from exc

        text = extract_text(data)
        logger.info("Mentor analysis received (%d chars)", len(text))
        return text or NO_ANALYSIS_TEXT


def extract_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Raises
    ------
    MentorServiceError
        If the body does not have the ``candidates`` shape.
    """
    try:
        candidates = data["candidates"]
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts).strip()
    except (KeyError, TypeError, AttributeError) as exc:
        raise MentorServiceError("Unexpected mentor response shape") from exc
