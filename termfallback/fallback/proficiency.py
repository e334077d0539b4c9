"""User-declared language proficiency levels.

Levels are ordered highest priority first.  The requested (interface)
language is always placed at the top of the first level, so it wins
over every declared language.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

# Used when no proficiency levels are configured at all.
SINGLE_LEVEL = "N"


class ProficiencyLevels(Mapping[str, tuple[str, ...]]):
    """Ordered, read-only mapping ``level -> language codes``.

    Iteration yields levels in priority order (highest first); each
    level's codes keep their given order.
    """

    __slots__ = ("_levels",)

    def __init__(self, levels: Mapping[str, Sequence[str]] | Sequence[tuple[str, Sequence[str]]]) -> None:
        items = levels.items() if isinstance(levels, Mapping) else levels
        self._levels: dict[str, tuple[str, ...]] = {str(level): tuple(codes) for level, codes in items}

    @classmethod
    def from_user_languages(
        cls,
        language: str,
        user_languages: Mapping[str, str],
        level_order: Sequence[str],
    ) -> ProficiencyLevels:
        """Build levels from a profile's ``{code: level}`` declarations.

        Each level holds the requested *language* plus every language
        declared at that level or a higher one, minus the languages
        already placed at a higher level.  Declarations at levels not in
        *level_order* are ignored.

        Args:
            language: Requested language, prepended to the top level.
            user_languages: ``{language_code: level}`` from a profile.
            level_order: Known levels, highest first (e.g. ``N,5,4,...,0``).

        Example::

            >>> ProficiencyLevels.from_user_languages(
            ...     "de", {"en": "N", "fr": "2"}, ["N", "3", "2"]
            ... ).as_dict()
            {'N': ('de', 'en'), '3': (), '2': ('fr',)}
        """
        if not level_order:
            return cls({SINGLE_LEVEL: [language]})

        rank = {level: i for i, level in enumerate(level_order)}
        levels: dict[str, list[str]] = {}
        placed: list[str] = []
        for i, level in enumerate(level_order):
            cumulative = [language] + [
                code for code, declared in user_languages.items() if declared in rank and rank[declared] <= i
            ]
            new_codes = [code for code in dict.fromkeys(cumulative) if code not in placed]
            levels[level] = new_codes
            placed.extend(new_codes)
        return cls(levels)

    def codes(self) -> list[str]:
        """All codes, flattened in priority order."""
        return [code for codes in self._levels.values() for code in codes]

    def as_dict(self) -> dict[str, tuple[str, ...]]:
        return dict(self._levels)

    def __getitem__(self, level: str) -> tuple[str, ...]:
        return self._levels[level]

    def __iter__(self) -> Iterator[str]:
        return iter(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __repr__(self) -> str:
        return f"ProficiencyLevels({self._levels!r})"
