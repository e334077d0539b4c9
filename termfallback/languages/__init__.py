"""Language codes, the language relationship graph and variant conversion."""

from __future__ import annotations

from termfallback.languages.codes import LanguageCode, is_well_formed, validate_code
from termfallback.languages.conversion import CharacterMapConversion, Conversion, IdentityConversion
from termfallback.languages.graph import LanguageGraph, StaticLanguageGraph

__all__ = [
    "CharacterMapConversion",
    "Conversion",
    "IdentityConversion",
    "LanguageCode",
    "LanguageGraph",
    "StaticLanguageGraph",
    "is_well_formed",
    "validate_code",
]
