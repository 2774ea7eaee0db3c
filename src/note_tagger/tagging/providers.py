"""
Chat-completion backends used to propose tags.

Two providers are supported, OpenAI and Claude. They are a closed set: each
one is a ProviderBackend record holding its endpoint, model and the two
functions that translate a GenerationRequest into an HTTP payload and pull
the reply text back out of the JSON response. Adding a provider means adding
a Provider member and one record in BACKENDS.

Example:
    client = ProviderClient()
    config = ProviderConfig(provider=Provider.OPENAI, api_key="sk-...",
                            model=OPENAI_MODEL)
    result = client.generate("# Meeting notes\\n...", config)
    if result.ok:
        print(result.tags)
    else:
        print(result.error)
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from ..errors import ConfigError, NoteTaggerError, ProviderError
from .reply_parser import parse_model_reply


# Only the start of a note is sent to the provider
MAX_CONTENT_CHARS = 4000
MAX_TOKENS = 100
OPENAI_TEMPERATURE = 0.3
DEFAULT_TIMEOUT = 30.0

OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL = "gpt-3.5-turbo"

CLAUDE_ENDPOINT = "https://api.anthropic.com/v1/messages"
CLAUDE_MODEL = "claude-3-haiku-20240307"
ANTHROPIC_VERSION = "2023-06-01"


class Provider(str, Enum):
    """Supported text-generation backends."""
    OPENAI = "openai"
    CLAUDE = "claude"


@dataclass(frozen=True)
class ProviderConfig:
    """Everything a backend needs for one call."""
    provider: Provider
    api_key: str
    model: str
    min_tags: int = 2
    max_tags: int = 5
    custom_prompt: str = ""
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class GenerationRequest:
    """Bounded prompt sent to a provider."""
    instruction: str
    body: str
    min_tags: int
    max_tags: int


@dataclass
class GenerationResult:
    """Tags proposed by a provider, or the reason there are none."""
    tags: List[str] = field(default_factory=list)
    error: Optional[str] = None
    exception: Optional[NoteTaggerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Headers = Dict[str, str]
Payload = Dict[str, Any]


@dataclass(frozen=True)
class ProviderBackend:
    """Translation functions and constants for one provider."""
    provider: Provider
    display_name: str
    endpoint: str
    model: str
    build_payload: Callable[[GenerationRequest, ProviderConfig], Tuple[Headers, Payload]]
    extract_text: Callable[[Dict[str, Any]], str]


def build_request(body: str, config: ProviderConfig) -> GenerationRequest:
    """
    Build the bounded prompt for a note body.

    Args:
        body: Note text with the metadata header already removed
        config: Provider configuration holding the prompt and tag bounds

    Returns:
        GenerationRequest with the body cut to MAX_CONTENT_CHARS
    """
    instruction = (
        f"{config.custom_prompt} Generate between {config.min_tags} and "
        f"{config.max_tags} tags. Return only the tags as a comma-separated "
        f"list, no other text."
    ).strip()
    return GenerationRequest(
        instruction=instruction,
        body=body[:MAX_CONTENT_CHARS],
        min_tags=config.min_tags,
        max_tags=config.max_tags,
    )


def _openai_payload(request: GenerationRequest, config: ProviderConfig) -> Tuple[Headers, Payload]:
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
    }
    payload = {
        "model": config.model,
        "messages": [
            {"role": "system", "content": request.instruction},
            {"role": "user", "content": request.body},
        ],
        "max_tokens": MAX_TOKENS,
        "temperature": OPENAI_TEMPERATURE,
    }
    return headers, payload


def _openai_text(data: Dict[str, Any]) -> str:
    return data["choices"][0]["message"]["content"]


def _claude_payload(request: GenerationRequest, config: ProviderConfig) -> Tuple[Headers, Payload]:
    headers = {
        "x-api-key": config.api_key,
        "anthropic-version": ANTHROPIC_VERSION,
        "Content-Type": "application/json",
    }
    payload = {
        "model": config.model,
        "max_tokens": MAX_TOKENS,
        "messages": [
            {
                "role": "user",
                "content": f"{request.instruction}\n\nContent: {request.body}",
            }
        ],
    }
    return headers, payload


def _claude_text(data: Dict[str, Any]) -> str:
    return data["content"][0]["text"]


BACKENDS: Dict[Provider, ProviderBackend] = {
    Provider.OPENAI: ProviderBackend(
        provider=Provider.OPENAI,
        display_name="OpenAI",
        endpoint=OPENAI_ENDPOINT,
        model=OPENAI_MODEL,
        build_payload=_openai_payload,
        extract_text=_openai_text,
    ),
    Provider.CLAUDE: ProviderBackend(
        provider=Provider.CLAUDE,
        display_name="Claude",
        endpoint=CLAUDE_ENDPOINT,
        model=CLAUDE_MODEL,
        build_payload=_claude_payload,
        extract_text=_claude_text,
    ),
}


def get_backend(provider: Provider) -> ProviderBackend:
    """Look up the backend record for a provider."""
    return BACKENDS[Provider(provider)]


class ProviderClient:
    """
    Sends tag-generation prompts to the configured provider.

    The client holds no per-call state; the provider, key and bounds come
    from the ProviderConfig passed to each call, so a settings change takes
    effect on the next call without rebuilding the client.

    Attributes:
        verbose: If True, print request diagnostics to stderr
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def complete(self, body: str, config: ProviderConfig) -> str:
        """
        Ask the provider for tags and return its raw reply text.

        Args:
            body: Note body (header already removed)
            config: Provider configuration

        Returns:
            Reply text, stripped of surrounding whitespace

        Raises:
            ConfigError: If the API key is missing (no request is sent)
            ProviderError: On a non-success status, a transport fault or a
                reply that is not the expected JSON
        """
        backend = get_backend(config.provider)
        name = backend.display_name

        if not config.api_key:
            raise ConfigError(f"{name} API key not configured")

        request = build_request(body, config)
        headers, payload = backend.build_payload(request, config)

        if self.verbose:
            print(
                f"Calling {name} ({config.model}), prompt body {len(request.body)} chars",
                file=sys.stderr,
            )

        try:
            response = requests.post(
                backend.endpoint,
                headers=headers,
                json=payload,
                timeout=config.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(name, f"request failed: {e}")

        if not 200 <= response.status_code < 300:
            if self.verbose:
                print(f"Response status: {response.status_code}", file=sys.stderr)
                print(f"Response body: {response.text[:500]}", file=sys.stderr)
            raise ProviderError(
                name,
                f"{name} API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(name, f"malformed JSON response: {e}")

        try:
            text = backend.extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(name, f"unexpected response format: {e!r}")

        if not isinstance(text, str):
            raise ProviderError(name, f"unexpected response format: reply text is {type(text).__name__}")

        return text.strip()

    def generate(self, body: str, config: ProviderConfig) -> GenerationResult:
        """
        Generate tags for a note body.

        Never raises for provider or configuration failures; they come back
        as GenerationResult.error.

        Args:
            body: Note body (header already removed)
            config: Provider configuration

        Returns:
            GenerationResult with parsed tags or an error message
        """
        try:
            text = self.complete(body, config)
        except NoteTaggerError as e:
            if self.verbose:
                print(f"✗ {e}", file=sys.stderr)
            return GenerationResult(error=str(e), exception=e)

        return GenerationResult(tags=parse_model_reply(text, config.max_tags))
