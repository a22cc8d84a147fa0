"""Provider clients and the summarize call — plain HTTP via requests.

Each provider is a strategy that knows how to build its request
(``build_request``) and where its completion text lives in a successful
response (``parse_completion``).  ``summarize`` selects the provider by id,
sends exactly one request, and maps the outcome onto ``SummaryResult`` or a
``SummarizeError`` subclass.  There is no retry.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from docsum.log import redact
from docsum.models import (
    Config,
    EmptyCompletion,
    MissingInput,
    ProviderHttpError,
    SummaryRequest,
    SummaryResult,
    UnsupportedProvider,
)
from docsum.prompts import TEMPERATURE, build_summary_prompt, max_output_tokens

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Provider strategies
# ---------------------------------------------------------------------------


@dataclass
class ProviderRequest:
    """Everything needed for one ``requests.post`` call."""

    url: str
    json: dict
    headers: dict = field(default_factory=dict)
    params: dict = field(default_factory=dict)


class Provider:
    """Base strategy.  Subclasses set ``label`` and implement both hooks."""

    label = ""

    def build_request(
        self, prompt: str, api_key: str, max_tokens: int, config: Config
    ) -> ProviderRequest:
        raise NotImplementedError

    def parse_completion(self, data: Any) -> str | None:
        raise NotImplementedError


class OpenAIProvider(Provider):
    """Chat-completions endpoint with bearer-token auth."""

    label = "OpenAI"

    def build_request(
        self, prompt: str, api_key: str, max_tokens: int, config: Config
    ) -> ProviderRequest:
        return ProviderRequest(
            url=config.openai_url,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            json={
                "model": config.openai_model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": TEMPERATURE,
            },
        )

    def parse_completion(self, data: Any) -> str | None:
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None


class GeminiProvider(Provider):
    """generateContent endpoint with the API key as a query parameter."""

    label = "Gemini"

    def build_request(
        self, prompt: str, api_key: str, max_tokens: int, config: Config
    ) -> ProviderRequest:
        return ProviderRequest(
            url=config.gemini_url_template.format(model=config.gemini_model),
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": TEMPERATURE,
                    "maxOutputTokens": max_tokens,
                },
            },
        )

    def parse_completion(self, data: Any) -> str | None:
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None


PROVIDERS: dict[str, Provider] = {
    "openai": OpenAIProvider(),
    "gemini": GeminiProvider(),
}


def get_provider(provider_id: str) -> Provider:
    """Look up a provider strategy by id.

    Raises:
        UnsupportedProvider: if *provider_id* is not registered.
    """
    try:
        return PROVIDERS[provider_id]
    except KeyError:
        raise UnsupportedProvider(f"Unsupported AI provider: {provider_id!r}") from None


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def summarize(request: SummaryRequest, config: Config) -> SummaryResult:
    """Send one summarization request and return the trimmed completion.

    Raises:
        MissingInput:        empty source text or blank API key.
        UnsupportedProvider: unknown ``request.provider_id``.
        ProviderHttpError:   non-2xx response or transport failure.
        EmptyCompletion:     2xx response without completion text.
    """
    if not request.source_text or not request.api_key.strip():
        raise MissingInput("Please upload a document and enter your API key.")

    provider = get_provider(request.provider_id)
    max_tokens = max_output_tokens(request.length_class)
    prompt = build_summary_prompt(request.source_text, request.length_class)
    outgoing = provider.build_request(prompt, request.api_key.strip(), max_tokens, config)

    logger.info(
        "Calling %s  length=%s  max_tokens=%d", provider.label, request.length_class, max_tokens
    )
    logger.debug(
        "Prompt size: %s chars (~%s tokens)", f"{len(prompt):,}", f"{len(prompt) // 4:,}"
    )
    t0 = time.monotonic()
    try:
        response = requests.post(
            outgoing.url,
            headers=outgoing.headers,
            params=outgoing.params or None,
            json=outgoing.json,
            timeout=config.timeout_s,
        )
    except requests.RequestException as e:
        raise ProviderHttpError(
            f"{provider.label} request failed: {redact(str(e))}", provider=provider.label
        ) from e
    elapsed = time.monotonic() - t0
    logger.info("Response received (%.1fs, status %d)", elapsed, response.status_code)

    if not 200 <= response.status_code < 300:
        raise ProviderHttpError(
            _error_message(response, provider.label),
            provider=provider.label,
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError:
        data = None

    text = provider.parse_completion(data)
    if not isinstance(text, str) or not text.strip():
        raise EmptyCompletion("Failed to generate summary")

    summary = text.strip()
    logger.info("Summary received: %s chars", f"{len(summary):,}")
    return SummaryResult(text=summary)


def _error_message(response: requests.Response, label: str) -> str:
    """Message from the ``{"error": {"message": ...}}`` envelope, or a generic one."""
    fallback = f"{label} API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    error = body.get("error")
    if not isinstance(error, dict):
        return fallback
    message = error.get("message")
    if isinstance(message, str) and message:
        return message
    return fallback
