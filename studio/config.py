import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

# First non-empty wins
API_KEY_ENV_VARS = ("ANTHROPIC_API_KEY", "API_KEY")

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4096


def resolve_api_key(environ=None) -> str:
    """Return the first non-empty API key variable, or an empty string."""
    environ = os.environ if environ is None else environ
    for name in API_KEY_ENV_VARS:
        value = environ.get(name, "")
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    store_name: str = "Robocraze"
    market: str = "India"
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ
    return Settings(
        api_key=resolve_api_key(environ),
        model=environ.get("ANTHROPIC_MODEL", "") or DEFAULT_MODEL,
        max_tokens=int(environ.get("ANTHROPIC_MAX_TOKENS", "") or DEFAULT_MAX_TOKENS),
        store_name=environ.get("STORE_NAME", "") or "Robocraze",
        market=environ.get("STORE_MARKET", "") or "India",
        log_level=environ.get("LOG_LEVEL", "") or "INFO",
    )
