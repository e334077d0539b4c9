"""Fallback chain construction.

Walks the language graph from a requested language (or a user's
proficiency levels) and produces an ordered list of ``FallbackStep``
with at most one step per fetch language:

1. ``SELF``: the language itself.
2. ``VARIANTS``: siblings in the language's conversion family; each
   value stored under a sibling is converted into the language.
3. ``OTHERS``: the system fallbacks of the language, each expanded with
   ``SELF`` (and ``VARIANTS`` if requested).  Fallbacks of fallbacks are
   never chased, which keeps chains short and bounded.

The accumulator is shared across the whole recursion, so ordering and
deduplication are global rather than per branch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from termfallback.core.errors import FallbackGraphConfigurationError, InvalidLanguageCode
from termfallback.fallback.chain import FallbackStep
from termfallback.fallback.modes import FallbackMode
from termfallback.fallback.proficiency import ProficiencyLevels
from termfallback.languages.graph import LanguageGraph

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8


@dataclass
class _Accumulator:
    """Ordered steps plus the set of fetch languages already claimed."""

    chain: list[FallbackStep] = field(default_factory=list)
    fetched: set[str] = field(default_factory=set)

    def claim(self, language: str, fetch_language: str) -> None:
        self.chain.append(FallbackStep(language, fetch_language))
        self.fetched.add(fetch_language)


class FallbackChainBuilder:
    """Builds fallback step lists from a ``LanguageGraph``.

    The builder does not validate codes itself; graph errors propagate.

    Args:
        graph: Language relationship source.
        max_depth: Recursion cap.  Exceeding it means the graph is
            cyclic or malformed and raises
            ``FallbackGraphConfigurationError``.
    """

    def __init__(self, graph: LanguageGraph, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._graph = graph
        self._max_depth = max_depth

    @property
    def graph(self) -> LanguageGraph:
        return self._graph

    def build_from_language(self, language: str, mode: FallbackMode = FallbackMode.ALL) -> list[FallbackStep]:
        """Build the chain for a single language.

        Returns:
            Steps in priority order: the language, its variants, then
            each system fallback followed by its variants.
        """
        acc = _Accumulator()
        self._build(language, FallbackMode(mode), acc, depth=0)
        return acc.chain

    def build_from_proficiency(self, levels: ProficiencyLevels) -> list[FallbackStep]:
        """Build a chain from prioritized proficiency levels.

        Pass 1 places every directly claimed language and its variants
        (per level: all ``SELF`` steps, then all ``VARIANTS`` steps).
        Pass 2 appends the system fallbacks of every claimed language.
        Codes that fail validation are skipped.
        """
        acc = _Accumulator()
        valid: list[list[str]] = [self._valid_codes(codes) for codes in levels.values()]

        for codes in valid:
            for mode in (FallbackMode.SELF, FallbackMode.VARIANTS):
                for code in codes:
                    self._build(code, mode, acc, depth=0)

        for codes in valid:
            for code in codes:
                self._build(code, FallbackMode.OTHERS | FallbackMode.VARIANTS, acc, depth=0)

        return acc.chain

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _valid_codes(self, codes: tuple[str, ...]) -> list[str]:
        out: list[str] = []
        for code in codes:
            try:
                out.append(self._graph.normalize(code))
            except InvalidLanguageCode:
                logger.warning(
                    "Skipping invalid proficiency language %r",
                    code,
                    extra={"event": "invalid_proficiency_code"},
                )
        return out

    def _build(self, language: str, mode: FallbackMode, acc: _Accumulator, depth: int) -> None:
        if depth > self._max_depth:
            raise FallbackGraphConfigurationError(
                f"fallback recursion for {language!r} exceeded depth {self._max_depth}"
            )

        if mode & FallbackMode.SELF and language not in acc.fetched:
            acc.claim(language, language)

        if mode & FallbackMode.VARIANTS:
            self._add_variants(language, acc)

        if mode & FallbackMode.OTHERS:
            # Fallbacks contribute themselves and, if asked, their variants;
            # OTHERS is handled by this loop only.
            recursive_mode = (mode & FallbackMode.VARIANTS) | FallbackMode.SELF
            for other in self._graph.fallbacks_of(language):
                self._build(other, recursive_mode, acc, depth + 1)

    def _add_variants(self, language: str, acc: _Accumulator) -> None:
        parent = self._graph.parent_of(language)
        if parent is None:
            return

        preferred = self._graph.preferred_variant_order_for(language) or ()
        candidates = dict.fromkeys([*preferred, *self._graph.variants_of(parent)])

        for variant in candidates:
            if variant == language or variant in acc.fetched:
                continue
            if not self._graph.has_variant(parent, variant):
                continue
            acc.claim(language, variant)
