r"""Client for an OpenAI-compatible chat-completions HTML generator.

The converter can ask an external language-model service to produce the
blog HTML directly. This module wraps that call: it builds the prompt,
posts it through a retrying ``requests`` session, and normalises the reply
into a :class:`SummaryResult`. Every transport, status, or payload problem
surfaces as :class:`SummarizerError` so the caller can fall back to the
deterministic converter.

Example
-------
>>> from blogdoc.summarizer import ChatCompletionSummarizer
>>> client = ChatCompletionSummarizer(api_key="gsk_example")  # doctest: +SKIP
>>> result = client.generate("KEY TAKEAWAYS\n- Fast")  # doctest: +SKIP
>>> result.html.startswith("<")  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import os
import re
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._constants import GENERATION_PROMPT
from .config.models import (
    DEFAULT_SUMMARIZER_ENDPOINT,
    DEFAULT_SUMMARIZER_MODEL,
    SummarizerConfig,
)

logger = logging.getLogger(__name__)

# Models often wrap the answer in a fenced ```html block.
CODE_FENCE_PATTERN = re.compile(r"^\s*```[A-Za-z]*\s*$|^\s*```\s*$", re.MULTILINE)


class SummarizerError(RuntimeError):
    """Raised when the generation service fails or returns unusable content."""


@dc.dataclass(frozen=True, slots=True)
class SummaryResult:
    """HTML produced by the service and its usage metadata.

    Attributes
    ----------
    html : str
        Trimmed HTML returned by the model.
    model : str
        Model identifier used for the request.
    total_tokens : int
        Tokens billed for the request, ``0`` when not reported.
    """

    html: str
    model: str
    total_tokens: int = 0


def build_session() -> requests.Session:
    """Return a session that retries transient server errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("POST",),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ChatCompletionSummarizer:
    """Thin wrapper around a chat-completions endpoint.

    The client is stateless apart from its session and can be reused for
    many documents.
    """

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str = DEFAULT_SUMMARIZER_ENDPOINT,
        model: str = DEFAULT_SUMMARIZER_MODEL,
        session: requests.Session | None = None,
        timeout: float = 60.0,
        temperature: float = 0.1,
        max_tokens: int = 4000,
    ) -> None:
        """Initialise the client.

        Parameters
        ----------
        api_key : str
            Bearer token for the service.
        endpoint : str, optional
            Full URL of the chat-completions endpoint.
        model : str, optional
            Model identifier sent with every request.
        session : requests.Session, optional
            Preconfigured session; defaults to :func:`build_session`.
        timeout : float, optional
            Per-request timeout in seconds.
        temperature : float, optional
            Sampling temperature.
        max_tokens : int, optional
            Upper bound on generated tokens.
        """
        if not api_key:
            msg = "An API key is required for the generation service"
            raise ValueError(msg)
        self.endpoint = endpoint
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._session = session or build_session()
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": "blogdoc/0.1",
        }

    @classmethod
    def from_config(
        cls,
        config: SummarizerConfig,
        *,
        session: requests.Session | None = None,
        environ: typ.Mapping[str, str] | None = None,
    ) -> ChatCompletionSummarizer | None:
        """Build a client from configuration, or ``None`` when disabled or keyless."""
        if not config.enabled:
            return None
        env = os.environ if environ is None else environ
        api_key = env.get(config.api_key_env, "").strip()
        if not api_key:
            logger.info("Summarizer enabled but %s is not set", config.api_key_env)
            return None
        return cls(
            api_key=api_key,
            endpoint=config.endpoint,
            model=config.model,
            session=session,
            timeout=config.timeout,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    def build_payload(self, text: str) -> dict[str, typ.Any]:
        """Return the JSON body for a generation request."""
        return {
            "model": self.model,
            "messages": [
                {"role": "user", "content": GENERATION_PROMPT.format(content=text)}
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def generate(self, text: str) -> SummaryResult:
        """Ask the service to convert ``text`` into blog HTML.

        Raises
        ------
        SummarizerError
            If the request fails, the service answers with an error status,
            or the reply carries no content.
        """
        logger.debug("Requesting HTML from %s with model %s", self.endpoint, self.model)
        try:
            response = self._session.post(
                self.endpoint,
                headers=self._headers,
                json=self.build_payload(text),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach the generation service: {exc}"
            raise SummarizerError(msg) from exc

        if response.status_code >= HTTPStatus.BAD_REQUEST:
            snippet = response.text[:200]
            msg = f"Generation service failed with status {response.status_code}: {snippet}"
            raise SummarizerError(msg)

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            msg = "Generation service response was not valid JSON"
            raise SummarizerError(msg) from exc

        html = _extract_content(payload)
        if not html:
            msg = "Generation service returned no content"
            raise SummarizerError(msg)
        usage = payload.get("usage") or {}
        tokens = usage.get("total_tokens") if isinstance(usage, dict) else None
        return SummaryResult(
            html=html,
            model=str(payload.get("model") or self.model),
            total_tokens=tokens if isinstance(tokens, int) else 0,
        )


def _extract_content(payload: object) -> str:
    """Return the first choice's message content, or ``""``."""
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        return ""
    return CODE_FENCE_PATTERN.sub("", content).strip()


__all__ = [
    "ChatCompletionSummarizer",
    "SummarizerError",
    "SummaryResult",
    "build_session",
]
