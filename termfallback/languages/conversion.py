"""Script/orthography conversion between variants of one language.

A ``Conversion`` turns a value authored in one variant into its rendition
in a sibling variant (e.g. simplified to traditional Chinese).  Identity
conversion is used when source and target are the same language.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import Protocol, TypeVar

from termfallback.core.errors import ConversionError

V = TypeVar("V")

DEFAULT_MEMO_SIZE = 4096


class Conversion(Protocol):
    """Convert *value* from variant *from_code* into variant *to_code*."""

    def convert(self, value: V, from_code: str, to_code: str) -> V: ...


class IdentityConversion:
    """Conversion that never changes the value."""

    def convert(self, value: V, from_code: str, to_code: str) -> V:
        return value


class CharacterMapConversion:
    """Table-driven conversion keyed by target variant.

    Each table maps source fragments (single characters or phrases) to
    their rendition in the target variant.  Replacement is greedy,
    longest fragment first, left to right.  Tables are shared across
    sources: any variant converts into ``zh-hant`` with the same table.

    Non-string values are returned unchanged.

    Args:
        tables: ``{target_variant: {fragment: replacement}}``.
        strict: When ``True`` (default), converting into a variant with no
            table raises ``ConversionError``; otherwise the value passes
            through unchanged.
        memo_size: How many converted strings to keep; the least
            recently used are evicted first.

    Example::

        conv = CharacterMapConversion({"zh-tw": {"测": "測", "试": "試"}})
        conv.convert("测试", "zh-cn", "zh-tw")   # → "測試"
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, str]],
        strict: bool = True,
        memo_size: int = DEFAULT_MEMO_SIZE,
    ) -> None:
        self._tables = {target: dict(table) for target, table in tables.items()}
        self._longest = {target: max(map(len, table), default=0) for target, table in self._tables.items()}
        self._strict = strict
        # (target, text) -> converted text, least recently used evicted first
        self._convert_text = functools.lru_cache(maxsize=memo_size)(self._convert_uncached)

    def has_table(self, to_code: str) -> bool:
        return to_code in self._tables

    def convert(self, value: V, from_code: str, to_code: str) -> V:
        if from_code == to_code or not isinstance(value, str):
            return value

        table = self._tables.get(to_code)
        if table is None:
            if self._strict:
                raise ConversionError(from_code, to_code)
            return value

        return self._convert_text(to_code, value)  # type: ignore[return-value]

    def memo_info(self):  # noqa: ANN201
        """Hit/miss statistics and current size of the conversion memo."""
        return self._convert_text.cache_info()

    def reverse(self, value: str, from_code: str, to_code: str) -> str:
        """Best-effort recovery of the *from_code* text behind a converted value."""
        return self.convert(value, to_code, from_code)

    def _convert_uncached(self, to_code: str, text: str) -> str:
        return self._apply(text, self._tables[to_code], self._longest[to_code])

    @staticmethod
    def _apply(text: str, table: Mapping[str, str], longest: int) -> str:
        out: list[str] = []
        i = 0
        while i < len(text):
            for size in range(min(longest, len(text) - i), 0, -1):
                fragment = text[i : i + size]
                if fragment in table:
                    out.append(table[fragment])
                    i += size
                    break
            else:
                out.append(text[i])
                i += 1
        return "".join(out)
