"""Application configuration via Pydantic Settings.

Reads environment variables (and optional .env file) and validates them
at startup.  Use ``get_settings()`` to obtain a cached singleton.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from termfallback.languages.codes import is_well_formed


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings(BaseSettings):
    """Validated settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Optional (with defaults) ----------------------------------------
    LOG_LEVEL: str = "INFO"
    DEFAULT_LANGUAGE: str = "en"
    FALLBACK_MAX_DEPTH: int = 8

    # Comma-separated lists.
    DISABLED_VARIANTS: str = ""
    LANGUAGE_ALIASES: str = ""  # e.g. "zh-classical=lzh,simple=en"
    PROFICIENCY_LEVELS: str = "N,5,4,3,2,1,0"  # highest first

    # JSON file replacing the built-in language graph (empty = built-in).
    LANGUAGE_GRAPH_PATH: str = ""

    # Only the user-language storage layer needs a database.
    DATABASE_URL: str = ""

    # --- Derived ---------------------------------------------------------
    @property
    def disabled_variants_list(self) -> list[str]:
        """Variant codes that must never be offered as conversion sources."""
        return _split_csv(self.DISABLED_VARIANTS)

    @property
    def language_aliases_map(self) -> dict[str, str]:
        """Parsed ``LANGUAGE_ALIASES`` as ``{alias: canonical}``."""
        pairs = (item.split("=", 1) for item in _split_csv(self.LANGUAGE_ALIASES))
        return {alias.strip(): code.strip() for alias, code in pairs}

    @property
    def proficiency_levels_list(self) -> list[str]:
        """Proficiency level names, highest priority first."""
        return _split_csv(self.PROFICIENCY_LEVELS)

    # --- Validators ------------------------------------------------------
    @field_validator("FALLBACK_MAX_DEPTH")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("DEFAULT_LANGUAGE")
    @classmethod
    def _validate_default_language(cls, v: str) -> str:
        if not is_well_formed(v):
            raise ValueError("DEFAULT_LANGUAGE must be a well-formed language code")
        return v

    @field_validator("DISABLED_VARIANTS")
    @classmethod
    def _validate_disabled_variants(cls, v: str) -> str:
        for code in _split_csv(v):
            if not is_well_formed(code):
                raise ValueError("DISABLED_VARIANTS must be a comma-separated list of language codes")
        return v

    @field_validator("LANGUAGE_ALIASES")
    @classmethod
    def _validate_aliases(cls, v: str) -> str:
        for item in _split_csv(v):
            alias, sep, code = item.partition("=")
            if not sep or not alias.strip() or not is_well_formed(code.strip()):
                raise ValueError("LANGUAGE_ALIASES must be a comma-separated list of alias=code pairs")
        return v

    @field_validator("PROFICIENCY_LEVELS")
    @classmethod
    def _validate_levels(cls, v: str) -> str:
        levels = _split_csv(v)
        if len(levels) != len(set(levels)):
            raise ValueError("PROFICIENCY_LEVELS must not repeat a level")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings singleton."""
    return Settings()
