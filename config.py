import os
from dataclasses import dataclass
from typing import FrozenSet, Optional

DEFAULT_API_URL = "https://api.lifx.com/v1"
DEFAULT_SELECTOR = "all"


class ConfigurationError(Exception):
    pass


def parse_email_list(raw):
    """Split a comma-separated allow-list into normalized addresses, dropping blanks."""
    emails = (entry.strip().lower() for entry in (raw or "").split(","))
    return frozenset(email for email in emails if email)


def _parse_timeout(raw):
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"LIFX_REQUEST_TIMEOUT must be a number, got {raw!r}")
    if timeout <= 0:
        raise ConfigurationError("LIFX_REQUEST_TIMEOUT must be positive")
    return timeout


@dataclass(frozen=True)
class Settings:
    allowed_emails: FrozenSet[str] = frozenset()
    shared_password: str = ""
    api_token: Optional[str] = None
    default_selector: str = DEFAULT_SELECTOR
    api_url: str = DEFAULT_API_URL
    request_timeout: Optional[float] = None
    secure_cookies: bool = False

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ

        return cls(
            allowed_emails=parse_email_list(env.get("AUTH_ALLOWED_EMAILS")),
            shared_password=env.get("AUTH_SHARED_PASSWORD", ""),
            api_token=env.get("LIFX_API_TOKEN") or None,
            default_selector=env.get("LIFX_DEFAULT_SELECTOR") or DEFAULT_SELECTOR,
            api_url=(env.get("LIFX_API_URL") or DEFAULT_API_URL).rstrip("/"),
            request_timeout=_parse_timeout(env.get("LIFX_REQUEST_TIMEOUT")),
            secure_cookies=env.get("APP_ENV", "development").lower() == "production",
        )
