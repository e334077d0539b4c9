"""Entry point for obtaining fallback chains.

``FallbackChainFactory`` ties together the language graph, the builder,
the chain cache, variant conversion and (optionally) a profile source.

Usage::

    from termfallback.fallback.factory import create_factory

    factory = create_factory()
    chain = factory.new_from_language_code("zh-tw")
    chain.extract_preferred_value({"zh-cn": "测试", "en": "test"})
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable

from termfallback.core.config import Settings, get_settings
from termfallback.fallback.builder import FallbackChainBuilder
from termfallback.fallback.cache import ChainCache
from termfallback.fallback.chain import FallbackChain, FallbackStep
from termfallback.fallback.modes import FallbackMode
from termfallback.fallback.profiles import ProfileSource
from termfallback.fallback.proficiency import ProficiencyLevels
from termfallback.languages.conversion import Conversion, IdentityConversion
from termfallback.languages.graph import LanguageGraph, StaticLanguageGraph

logger = logging.getLogger(__name__)


class FallbackChainFactory:
    """Creates (and caches) ``FallbackChain`` objects.

    Args:
        graph: Language relationship source; also validates codes.
        conversion: Variant conversion applied on extraction.
        cache: Chain cache.  Defaults to a private ``ChainCache``.
        profiles: Optional source of user proficiency declarations.
        level_order: Proficiency levels, highest first.
        max_depth: Builder recursion cap.
    """

    def __init__(
        self,
        graph: LanguageGraph,
        conversion: Conversion | None = None,
        cache: ChainCache | None = None,
        profiles: ProfileSource | None = None,
        level_order: list[str] | None = None,
        max_depth: int = 8,
    ) -> None:
        self._graph = graph
        self._conversion = conversion or IdentityConversion()
        self._cache = cache if cache is not None else ChainCache()
        self._profiles = profiles
        self._level_order = list(level_order or [])
        self._builder = FallbackChainBuilder(graph, max_depth=max_depth)

    @property
    def cache(self) -> ChainCache:
        return self._cache

    @property
    def builder(self) -> FallbackChainBuilder:
        return self._builder

    def new_from_language_code(self, language_code: str, mode: FallbackMode = FallbackMode.ALL) -> FallbackChain:
        """Chain for a single language.

        Raises:
            InvalidLanguageCode: If *language_code* is malformed.
            FallbackGraphConfigurationError: If the graph recursion overflows.
        """
        code = self._graph.normalize(language_code)
        mode = FallbackMode(mode)
        return self._cache.get_or_build(
            code,
            mode,
            lambda: self._build(
                lambda: self._builder.build_from_language(code, mode),
                language=code,
                mode=mode,
            ),
        )

    def new_from_user_and_language_code(self, user_id: Hashable | None, language_code: str) -> FallbackChain:
        """Chain personalised by the user's declared proficiencies.

        Anonymous users (``user_id is None``), a factory without a
        profile source, and users without declarations all get the plain
        ``ALL`` chain for *language_code*.
        """
        if user_id is None or self._profiles is None:
            return self.new_from_language_code(language_code, FallbackMode.ALL)

        code = self._graph.normalize(language_code)
        cached = self._cache.get_for_proficiency(user_id, code)
        if cached is not None:
            return cached

        declared = self._profiles.proficiency_levels_for(user_id)
        if not declared:
            return self.new_from_language_code(code, FallbackMode.ALL)

        def build() -> FallbackChain:
            levels = ProficiencyLevels.from_user_languages(code, declared, self._level_order)
            return self._build(
                lambda: self._builder.build_from_proficiency(levels),
                language=code,
                user_id=user_id,
            )

        return self._cache.get_or_build_for_proficiency(user_id, code, build)

    def build_from_proficiency(self, levels: ProficiencyLevels) -> FallbackChain:
        """Uncached chain for explicit proficiency levels."""
        return self._build(lambda: self._builder.build_from_proficiency(levels))

    def _build(self, steps: Callable[[], list[FallbackStep]], **log_fields: object) -> FallbackChain:
        start = time.perf_counter()
        chain = FallbackChain(steps(), self._conversion)
        logger.debug(
            "Fallback chain built: %r",
            chain,
            extra={
                "event": "chain_built",
                "chain_length": len(chain),
                "latency_ms": round((time.perf_counter() - start) * 1000, 3),
                **{k: (int(v) if isinstance(v, FallbackMode) else v) for k, v in log_fields.items()},
            },
        )
        return chain


def create_factory(
    settings: Settings | None = None,
    profiles: ProfileSource | None = None,
    conversion: Conversion | None = None,
    cache: ChainCache | None = None,
) -> FallbackChainFactory:
    """Build a factory from *settings* (defaults to ``get_settings()``)."""
    settings = settings or get_settings()
    return FallbackChainFactory(
        graph=StaticLanguageGraph.from_settings(settings),
        conversion=conversion,
        cache=cache,
        profiles=profiles,
        level_order=settings.proficiency_levels_list,
        max_depth=settings.FALLBACK_MAX_DEPTH,
    )
