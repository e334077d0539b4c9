"""Built-in language relationship data.

A compact snapshot of the system fallback and variant tables used when
no ``LANGUAGE_GRAPH_PATH`` is configured.  It does not need to track
upstream language data exactly; it covers the languages whose chains
are non-trivial (conversion families and regional/formal variants).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# System fallbacks (graph-declared order).  Codes not listed fall back to
# the default language.
# ---------------------------------------------------------------------------
FALLBACKS: dict[str, list[str]] = {
    "en": [],
    "de": ["en"],
    "de-at": ["de", "en"],
    "de-ch": ["de", "en"],
    "de-formal": ["de", "en"],
    "nl-informal": ["nl", "en"],
    "pt-br": ["pt", "en"],
    "lzh": ["en"],
    "ii": ["zh-cn", "zh-hans", "en"],
    # Kazakh
    "kk": ["kk-cyrl", "en"],
    "kk-cyrl": ["en"],
    "kk-latn": ["kk-cyrl", "en"],
    "kk-arab": ["kk-cyrl", "en"],
    "kk-kz": ["kk-cyrl", "en"],
    "kk-tr": ["kk-latn", "kk-cyrl", "en"],
    "kk-cn": ["kk-arab", "kk-cyrl", "en"],
    # Chinese
    "zh": ["zh-hans", "en"],
    "zh-hans": ["en"],
    "zh-hant": ["zh-hans", "en"],
    "zh-cn": ["zh-hans", "en"],
    "zh-sg": ["zh-hans", "en"],
    "zh-my": ["zh-sg", "zh-hans", "en"],
    "zh-tw": ["zh-hant", "zh-hans", "en"],
    "zh-hk": ["zh-hant", "zh-hans", "en"],
    "zh-mo": ["zh-hk", "zh-hant", "zh-hans", "en"],
    # Gan
    "gan": ["gan-hant", "zh-hant", "zh-hans", "en"],
    "gan-hans": ["zh-hans", "en"],
    "gan-hant": ["zh-hant", "zh-hans", "en"],
    # Serbian
    "sr": ["sr-ec", "en"],
    "sr-ec": ["en"],
    "sr-el": ["en"],
}

# ---------------------------------------------------------------------------
# Conversion families: base language -> its variants.  A base language
# that lists itself is its own parent.
# ---------------------------------------------------------------------------
VARIANTS: dict[str, list[str]] = {
    "zh": ["zh", "zh-hans", "zh-hant", "zh-cn", "zh-tw", "zh-hk", "zh-sg", "zh-mo", "zh-my"],
    "kk": ["kk", "kk-cyrl", "kk-latn", "kk-arab", "kk-kz", "kk-tr", "kk-cn"],
    "sr": ["sr", "sr-ec", "sr-el"],
    "gan": ["gan", "gan-hans", "gan-hant"],
}

# ---------------------------------------------------------------------------
# Per-variant conversion preference.  Converting zh-tw to zh-hk is less
# error-prone than converting zh-cn to zh-hk, so closer scripts go first.
# ---------------------------------------------------------------------------
_ZH_SIMPLIFIED_FIRST = ["zh-hans", "zh-cn", "zh-sg", "zh-my", "zh", "zh-hant", "zh-hk", "zh-mo", "zh-tw"]
_ZH_TRADITIONAL_FIRST = ["zh-hant", "zh-tw", "zh-hk", "zh-mo", "zh", "zh-hans", "zh-cn", "zh-sg", "zh-my"]

PREFERRED_VARIANT_ORDER: dict[str, list[str]] = {
    "zh-hans": _ZH_SIMPLIFIED_FIRST,
    "zh-cn": ["zh-hans", "zh-sg", "zh-my", "zh", "zh-hant", "zh-hk", "zh-mo", "zh-tw"],
    "zh-sg": ["zh-hans", "zh-cn", "zh-my", "zh", "zh-hant", "zh-hk", "zh-mo", "zh-tw"],
    "zh-my": ["zh-hans", "zh-sg", "zh-cn", "zh", "zh-hant", "zh-hk", "zh-mo", "zh-tw"],
    "zh-hant": _ZH_TRADITIONAL_FIRST,
    "zh-tw": ["zh-hant", "zh-hk", "zh-mo", "zh", "zh-hans", "zh-cn", "zh-sg", "zh-my"],
    "zh-hk": ["zh-hant", "zh-mo", "zh-tw", "zh", "zh-hans", "zh-cn", "zh-sg", "zh-my"],
    "zh-mo": ["zh-hant", "zh-hk", "zh-tw", "zh", "zh-hans", "zh-cn", "zh-sg", "zh-my"],
    "gan-hant": ["gan", "gan-hans"],
    "gan-hans": ["gan", "gan-hant"],
}

# ---------------------------------------------------------------------------
# Deprecated codes still found in old data and user profiles.
# ---------------------------------------------------------------------------
ALIASES: dict[str, str] = {
    "als": "gsw",
    "bat-smg": "sgs",
    "be-x-old": "be-tarask",
    "fiu-vro": "vro",
    "roa-rup": "rup",
    "simple": "en",
    "zh-classical": "lzh",
    "zh-min-nan": "nan",
    "zh-yue": "yue",
}
