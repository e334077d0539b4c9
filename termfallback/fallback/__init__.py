"""Fallback chain construction, extraction and caching."""

from __future__ import annotations

from termfallback.fallback.builder import FallbackChainBuilder
from termfallback.fallback.cache import ChainCache
from termfallback.fallback.chain import FallbackChain, FallbackStep, PreferredValue
from termfallback.fallback.factory import FallbackChainFactory, create_factory
from termfallback.fallback.modes import FallbackMode
from termfallback.fallback.proficiency import ProficiencyLevels
from termfallback.fallback.profiles import MappingProfileSource, ProfileSource

__all__ = [
    "ChainCache",
    "FallbackChain",
    "FallbackChainBuilder",
    "FallbackChainFactory",
    "FallbackMode",
    "FallbackStep",
    "MappingProfileSource",
    "PreferredValue",
    "ProficiencyLevels",
    "ProfileSource",
    "create_factory",
]
