"""Language code value type and validation.

A ``LanguageCode`` is a plain ``str`` that has passed validation, so it
hashes and compares like the raw code and can be used directly as a key
into per-language value maps.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from termfallback.core.errors import InvalidLanguageCode

# Letters/digits separated by single hyphens: "en", "zh-hans", "be-x-old".
_CODE_RE = re.compile(r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*")

# Characters that would break titles, paths or markup if they leaked through.
_FORBIDDEN = frozenset(":/\\\0&<>'\"")


class LanguageCode(str):
    """Validated, immutable language code.

    Examples:
        >>> LanguageCode("zh-hans")
        'zh-hans'
        >>> LanguageCode("zh/hans")
        Traceback (most recent call last):
        ...
        termfallback.core.errors.InvalidLanguageCode: invalid language code: 'zh/hans'
    """

    __slots__ = ()

    def __new__(cls, code: str) -> LanguageCode:
        if isinstance(code, cls):
            return code
        if not is_well_formed(code):
            raise InvalidLanguageCode(code)
        return super().__new__(cls, code)

    def __repr__(self) -> str:
        return repr(str(self))

    @property
    def base(self) -> str:
        """Leading subtag, e.g. ``"zh"`` for ``"zh-hant"``."""
        return self.split("-", 1)[0]


def is_well_formed(code: object) -> bool:
    """Return ``True`` if *code* is a syntactically valid language code."""
    if not isinstance(code, str) or not code:
        return False
    if any(c in _FORBIDDEN for c in code):
        return False
    return _CODE_RE.fullmatch(code) is not None


def validate_code(code: str, aliases: Mapping[str, str] | None = None) -> LanguageCode:
    """Normalize a deprecated alias, then validate.

    Args:
        code: Raw code from a request, profile or data map.
        aliases: ``{deprecated: canonical}`` mapping (e.g.
            ``{"zh-classical": "lzh"}``).

    Returns:
        The canonical ``LanguageCode``.

    Raises:
        InvalidLanguageCode: If the (normalized) code is malformed.
    """
    if aliases and isinstance(code, str):
        code = aliases.get(code, code)
    return LanguageCode(code)
