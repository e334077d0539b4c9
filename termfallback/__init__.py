"""Language fallback chain resolution for localized values."""

from __future__ import annotations

from termfallback.core.errors import (
    ConversionError,
    FallbackGraphConfigurationError,
    InvalidLanguageCode,
    TermFallbackError,
)
from termfallback.fallback import (
    ChainCache,
    FallbackChain,
    FallbackChainBuilder,
    FallbackChainFactory,
    FallbackMode,
    FallbackStep,
    PreferredValue,
    ProficiencyLevels,
    create_factory,
)
from termfallback.core.version import get_version
from termfallback.languages import LanguageCode, StaticLanguageGraph

__all__ = [
    "ChainCache",
    "ConversionError",
    "FallbackChain",
    "FallbackChainBuilder",
    "FallbackChainFactory",
    "FallbackGraphConfigurationError",
    "FallbackMode",
    "FallbackStep",
    "InvalidLanguageCode",
    "LanguageCode",
    "PreferredValue",
    "ProficiencyLevels",
    "StaticLanguageGraph",
    "TermFallbackError",
    "create_factory",
    "get_version",
]
