"""
Persisted tagger settings.

Settings live in a small JSON file using the same camelCase keys the
plugin data file has always used:

    {
      "defaultProvider": "openai",
      "openaiApiKey": "sk-...",
      "claudeApiKey": "",
      "minTags": 2,
      "maxTags": 5,
      "customPrompt": "Generate relevant tags for this note content...",
      "autoApplyTags": false,
      "excludeExistingTags": true,
      "batchProcessing": false,
      "requestTimeout": 30
    }

Keys missing from the file take their default. API keys left blank fall
back to the OPENAI_API_KEY / ANTHROPIC_API_KEY environment variables.

Settings are an immutable value. Callers that watch the file for changes
load a fresh TaggerSettings and hand it to the orchestrator; nothing in the
package keeps a global copy.
"""

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

from ..errors import ConfigError
from ..tagging.providers import Provider, ProviderConfig, get_backend


DEFAULT_CUSTOM_PROMPT = (
    "Generate relevant tags for this note content. Focus on main topics, "
    "themes, and categories. Return tags as a comma-separated list."
)

MIN_TAG_BOUND = 1
MAX_TAG_BOUND = 10

# Environment fallbacks for blank API keys
API_KEY_ENV_VARS = {
    "openai_api_key": "OPENAI_API_KEY",
    "claude_api_key": "ANTHROPIC_API_KEY",
}

# Persisted (camelCase) key -> dataclass field
_PERSISTED_KEYS = {
    "defaultProvider": "default_provider",
    "openaiApiKey": "openai_api_key",
    "claudeApiKey": "claude_api_key",
    "minTags": "min_tags",
    "maxTags": "max_tags",
    "customPrompt": "custom_prompt",
    "autoApplyTags": "auto_apply_tags",
    "excludeExistingTags": "exclude_existing_tags",
    "batchProcessing": "batch_processing",
    "requestTimeout": "request_timeout",
}


@dataclass(frozen=True)
class TaggerSettings:
    """User-configurable options for tag generation."""
    default_provider: str = Provider.OPENAI.value
    openai_api_key: str = ""
    claude_api_key: str = ""
    min_tags: int = 2
    max_tags: int = 5
    custom_prompt: str = DEFAULT_CUSTOM_PROMPT
    auto_apply_tags: bool = False
    exclude_existing_tags: bool = True
    batch_processing: bool = False
    request_timeout: float = 30.0

    def validate(self) -> "TaggerSettings":
        """
        Check provider choice, option types, tag bounds and timeout.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: If any option has the wrong type or is out of range
        """
        try:
            Provider(self.default_provider)
        except ValueError:
            choices = ", ".join(p.value for p in Provider)
            raise ConfigError(
                f"Unknown provider '{self.default_provider}' (expected one of: {choices})"
            )

        for name in ("min_tags", "max_tags"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if not MIN_TAG_BOUND <= value <= MAX_TAG_BOUND:
                raise ConfigError(
                    f"{name} must be between {MIN_TAG_BOUND} and {MAX_TAG_BOUND}, got {value}"
                )

        if self.min_tags > self.max_tags:
            raise ConfigError(
                f"min_tags ({self.min_tags}) cannot be greater than max_tags ({self.max_tags})"
            )

        for name in ("openai_api_key", "claude_api_key", "custom_prompt"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")

        for name in ("auto_apply_tags", "exclude_existing_tags", "batch_processing"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")

        timeout = self.request_timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError(f"request_timeout must be a number, got {timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {timeout!r}")

        return self

    @property
    def provider(self) -> Provider:
        return Provider(self.default_provider)

    def api_key_for(self, provider: Provider) -> str:
        if provider is Provider.OPENAI:
            return self.openai_api_key
        return self.claude_api_key

    def provider_config(self) -> ProviderConfig:
        """
        Build the provider configuration for the selected backend.

        Raises:
            ConfigError: If the settings are invalid
        """
        self.validate()
        provider = self.provider
        return ProviderConfig(
            provider=provider,
            api_key=self.api_key_for(provider),
            model=get_backend(provider).model,
            min_tags=self.min_tags,
            max_tags=self.max_tags,
            custom_prompt=self.custom_prompt,
            timeout=self.request_timeout,
        )

    def with_overrides(self, **changes: Any) -> "TaggerSettings":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted camelCase keys."""
        values = asdict(self)
        return {persisted: values[field] for persisted, field in _PERSISTED_KEYS.items()}


DEFAULT_SETTINGS = TaggerSettings()


def settings_from_dict(data: Dict[str, Any]) -> TaggerSettings:
    """
    Merge a settings mapping over the defaults.

    Both the persisted camelCase keys and the dataclass field names are
    accepted. Unknown keys are ignored.

    Args:
        data: Raw settings, usually loaded from JSON

    Returns:
        TaggerSettings with defaults filled in
    """
    field_names = {f.name for f in fields(TaggerSettings)}
    values = {}
    for key, value in data.items():
        name = _PERSISTED_KEYS.get(key, key)
        if name in field_names:
            values[name] = value
    return replace(DEFAULT_SETTINGS, **values)


def apply_env_api_keys(settings: TaggerSettings) -> TaggerSettings:
    """Fill blank API keys from the environment."""
    changes = {}
    for field_name, env_var in API_KEY_ENV_VARS.items():
        if not getattr(settings, field_name):
            env_value = os.environ.get(env_var, "").strip()
            if env_value:
                changes[field_name] = env_value
    return replace(settings, **changes) if changes else settings


def load_settings(path: Optional[Path] = None, use_env: bool = True) -> TaggerSettings:
    """
    Load settings from a JSON file, falling back to defaults.

    Args:
        path: Settings file. If None or missing, defaults are used
        use_env: Fill blank API keys from environment variables

    Returns:
        Validated TaggerSettings

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON or holds invalid values
    """
    data: Dict[str, Any] = {}
    if path is not None and Path(path).exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Settings file {path} is not valid JSON: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read settings file {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")

    settings = settings_from_dict(data)
    if use_env:
        settings = apply_env_api_keys(settings)
    return settings.validate()


def save_settings(settings: TaggerSettings, path: Path) -> None:
    """
    Write settings to a JSON file using the persisted key names.

    Args:
        settings: Settings to persist
        path: Destination file (parent directories are created)
    """
    settings.validate()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
