"""Immutable fallback chains and best-value extraction."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar

from termfallback.core.errors import ConversionError
from termfallback.languages.codes import is_well_formed
from termfallback.languages.conversion import Conversion, IdentityConversion

logger = logging.getLogger(__name__)

V = TypeVar("V")


class FallbackStep(NamedTuple):
    """One position in a chain.

    Attributes:
        language: Language the value is presented in (conversion target).
        fetch_language: Key to look up in a per-language value map.
    """

    language: str
    fetch_language: str

    @property
    def is_converted(self) -> bool:
        """True when the fetched value must be converted into ``language``."""
        return self.language != self.fetch_language


@dataclass(frozen=True, slots=True)
class PreferredValue(Generic[V]):
    """Result of ``FallbackChain.extract_preferred_value``.

    Attributes:
        value: The fetched value, converted into ``language``.
        language: Language the value is displayed as.
        source_language: Language the value was stored under.
    """

    value: V
    language: str
    source_language: str

    @property
    def is_converted(self) -> bool:
        return self.language != self.source_language


class FallbackChain:
    """Ordered, immutable sequence of ``FallbackStep``.

    Chains are produced by ``FallbackChainBuilder`` and shared through
    ``ChainCache``; nothing mutates them after construction.  A chain may
    be empty (e.g. ``OTHERS`` alone for a language with no fallbacks).
    """

    __slots__ = ("_steps", "_conversion")

    def __init__(self, steps: Iterable[FallbackStep], conversion: Conversion | None = None) -> None:
        self._steps: tuple[FallbackStep, ...] = tuple(FallbackStep(*step) for step in steps)
        self._conversion: Conversion = conversion or IdentityConversion()

    @property
    def steps(self) -> tuple[FallbackStep, ...]:
        return self._steps

    def fetch_language_codes(self) -> list[str]:
        """Codes to load from storage, in priority order."""
        return [step.fetch_language for step in self._steps]

    def extract_preferred_value(self, values: Mapping[str, V]) -> PreferredValue[V] | None:
        """Return the highest-priority available value, converted.

        A step matches when ``values`` holds a non-``None`` entry for its
        ``fetch_language``.  If converting that entry fails the step is
        skipped and the walk continues with the next one.

        Returns:
            ``PreferredValue`` or ``None`` when no step matches.
        """
        for step in self._steps:
            raw = values.get(step.fetch_language)
            if raw is None:
                continue
            try:
                value = self._conversion.convert(raw, step.fetch_language, step.language)
            except ConversionError as exc:
                logger.warning(
                    "Conversion failed, trying next fallback: %s",
                    exc,
                    extra={
                        "event": "conversion_failed",
                        "language": step.language,
                        "fetch_language": step.fetch_language,
                    },
                )
                continue
            return PreferredValue(value=value, language=step.language, source_language=step.fetch_language)
        return None

    def extract_preferred_value_or_any(self, values: Mapping[str, V]) -> PreferredValue[V] | None:
        """Like ``extract_preferred_value``, but settle for any value.

        When no chain step matches, the first entry of *values* with a
        well-formed code is returned unconverted.
        """
        preferred = self.extract_preferred_value(values)
        if preferred is not None:
            return preferred

        for code, value in values.items():
            if value is None or not is_well_formed(code):
                continue
            return PreferredValue(value=value, language=code, source_language=code)
        return None

    # ------------------------------------------------------------------
    # Sequence-ish helpers
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[FallbackStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index: int) -> FallbackStep:
        return self._steps[index]

    def __bool__(self) -> bool:
        return bool(self._steps)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FallbackChain):
            return NotImplemented
        return self._steps == other._steps

    def __hash__(self) -> int:
        return hash(self._steps)

    def __repr__(self) -> str:
        rendered = ", ".join(
            step.language if not step.is_converted else f"{step.language}<{step.fetch_language}"
            for step in self._steps
        )
        return f"<FallbackChain [{rendered}]>"
