"""Traversal mode flags for chain construction."""

from __future__ import annotations

from enum import IntFlag


class FallbackMode(IntFlag):
    """Which categories of related languages a chain includes.

    - ``SELF``: the language itself, e.g. ``en`` for ``en``.
    - ``VARIANTS``: sibling variants whose values can be converted into
      the language, e.g. ``sr-ec`` and ``sr-el`` for ``sr``.
    - ``OTHERS``: the system fallback languages, e.g. ``de`` and ``en``
      for ``de-formal``.
    """

    SELF = 1
    VARIANTS = 2
    OTHERS = 4
    ALL = SELF | VARIANTS | OTHERS
