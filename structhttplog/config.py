from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Options:
    """Per-middleware logging options. Immutable once built."""

    # Concise mode drops scheme, headers and error bodies from the record.
    concise: bool = False
    # Extra header names redacted on top of the built-in sensitive set.
    skip_headers: frozenset[str] = field(default_factory=frozenset)


Option = Callable[[Options], Options]


def with_concise(value: bool) -> Option:
    def apply(opts: Options) -> Options:
        return replace(opts, concise=bool(value))

    return apply


def with_skip_headers(headers: Iterable[str]) -> Option:
    """Redact the given header names (matched case-insensitively)."""
    names = frozenset(h.lower() for h in headers)

    def apply(opts: Options) -> Options:
        return replace(opts, skip_headers=names)

    return apply


def build_options(options: Iterable[Option] = ()) -> Options:
    """Fold option functions over the defaults."""
    opts = Options()
    for option in options:
        opts = option(opts)
    return opts


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HTTPLOG_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Middleware ───────────────────────────────────────
    concise: bool = False
    skip_headers: list[str] = Field(default_factory=list)

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    def options(self) -> list[Option]:
        """Option functions equivalent to these settings."""
        return [with_concise(self.concise), with_skip_headers(self.skip_headers)]


settings = Settings()
