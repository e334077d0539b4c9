"""Tests for termfallback.fallback.builder: chain construction.

Verifies:
- SELF / VARIANTS / OTHERS ordering on small graphs and the built-in one.
- Variant steps fetch from the sibling and display as the requested language.
- Fetch languages are unique within every chain.
- Proficiency chains front-load claimed languages before system fallbacks.
- The recursion cap raises ``FallbackGraphConfigurationError``.
"""

from __future__ import annotations

import pytest

from termfallback.core.errors import FallbackGraphConfigurationError, InvalidLanguageCode
from termfallback.fallback.builder import FallbackChainBuilder
from termfallback.fallback.modes import FallbackMode
from termfallback.fallback.proficiency import ProficiencyLevels
from termfallback.languages.graph import StaticLanguageGraph
from tests.conftest import steps

SELF = FallbackMode.SELF
VARIANTS = FallbackMode.VARIANTS
OTHERS = FallbackMode.OTHERS
ALL = FallbackMode.ALL

_ZH_CN_VARIANTS = [
    ("zh-cn", "zh-hans"),
    ("zh-cn", "zh-sg"),
    ("zh-cn", "zh-my"),
    ("zh-cn", "zh"),
    ("zh-cn", "zh-hant"),
    ("zh-cn", "zh-hk"),
    ("zh-cn", "zh-mo"),
    ("zh-cn", "zh-tw"),
]


# ---------------------------------------------------------------------------
# Small graphs
# ---------------------------------------------------------------------------


class TestSmallGraphs:
    def test_formal_variant_chain(self, formal_graph: StaticLanguageGraph) -> None:
        chain = FallbackChainBuilder(formal_graph).build_from_language("de-formal", ALL)
        assert chain == [("de-formal", "de-formal"), ("de", "de"), ("en", "en")]

    def test_sibling_script_step(self, two_script_graph: StaticLanguageGraph) -> None:
        chain = FallbackChainBuilder(two_script_graph).build_from_language("zh-hans", SELF | VARIANTS)
        assert chain == [("zh-hans", "zh-hans"), ("zh-hans", "zh-hant")]
        assert chain[1].is_converted

    def test_base_language_is_its_own_parent(self, two_script_graph: StaticLanguageGraph) -> None:
        chain = FallbackChainBuilder(two_script_graph).build_from_language("zh", SELF | VARIANTS)
        assert chain == steps("zh", ("zh", "zh-hans"), ("zh", "zh-hant"))

    def test_no_second_hop(self) -> None:
        """A fallback's own fallbacks are not chased."""
        graph = StaticLanguageGraph(fallbacks={"a1": ["b1"], "b1": ["c1"], "c1": []})
        chain = FallbackChainBuilder(graph).build_from_language("a1", ALL)
        assert chain == steps("a1", "b1")

    def test_others_without_self(self, formal_graph: StaticLanguageGraph) -> None:
        chain = FallbackChainBuilder(formal_graph).build_from_language("de-formal", OTHERS)
        assert chain == steps("de", "en")

    def test_others_alone_for_terminal_language_is_empty(self, formal_graph: StaticLanguageGraph) -> None:
        assert FallbackChainBuilder(formal_graph).build_from_language("en", OTHERS) == []

    def test_others_without_variants_skips_fallback_variants(self, graph: StaticLanguageGraph) -> None:
        chain = FallbackChainBuilder(graph).build_from_language("ii", SELF | OTHERS)
        assert chain == steps("ii", "zh-cn", "zh-hans", "en")


# ---------------------------------------------------------------------------
# Built-in graph
# ---------------------------------------------------------------------------


class TestBuiltinGraph:
    def test_en(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_language("en") == steps("en")

    def test_unknown_code_falls_back_to_default(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_language("unknown") == steps("unknown", "en")

    def test_zh(self, builder: FallbackChainBuilder) -> None:
        expected = steps(
            "zh",
            ("zh", "zh-hans"),
            ("zh", "zh-hant"),
            ("zh", "zh-cn"),
            ("zh", "zh-tw"),
            ("zh", "zh-hk"),
            ("zh", "zh-sg"),
            ("zh", "zh-mo"),
            ("zh", "zh-my"),
            "en",
        )
        assert builder.build_from_language("zh") == expected

    def test_zh_cn_uses_preferred_variant_order(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_language("zh-cn") == steps("zh-cn", *_ZH_CN_VARIANTS, "en")

    def test_zh_with_disabled_variants(self) -> None:
        graph = StaticLanguageGraph.builtin(disabled_variants=["zh-mo", "zh-my"])
        expected = steps(
            "zh",
            ("zh", "zh-hans"),
            ("zh", "zh-hant"),
            ("zh", "zh-cn"),
            ("zh", "zh-tw"),
            ("zh", "zh-hk"),
            ("zh", "zh-sg"),
            "en",
        )
        assert FallbackChainBuilder(graph).build_from_language("zh") == expected

    def test_disabled_variant_reappears_as_fallback(self) -> None:
        graph = StaticLanguageGraph.builtin(disabled_variants=["zh-mo", "zh-my", "zh-hans"])
        expected = steps(
            "zh-cn",
            ("zh-cn", "zh-sg"),
            ("zh-cn", "zh"),
            ("zh-cn", "zh-hant"),
            ("zh-cn", "zh-hk"),
            ("zh-cn", "zh-tw"),
            "zh-hans",
            "en",
        )
        assert FallbackChainBuilder(graph).build_from_language("zh-cn") == expected

    def test_fallback_variants_are_expanded(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_language("ii") == steps("ii", "zh-cn", *_ZH_CN_VARIANTS, "en")

    def test_kk(self, builder: FallbackChainBuilder) -> None:
        expected = steps(
            "kk",
            ("kk", "kk-cyrl"),
            ("kk", "kk-latn"),
            ("kk", "kk-arab"),
            ("kk", "kk-kz"),
            ("kk", "kk-tr"),
            ("kk", "kk-cn"),
            "en",
        )
        assert builder.build_from_language("kk") == expected

    def test_self_only(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_language("zh-tw", SELF) == steps("zh-tw")


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

_CODES = ["en", "de", "de-formal", "zh", "zh-cn", "zh-tw", "zh-mo", "ii", "kk", "kk-cn", "gan", "gan-hant", "sr-ec", "nl"]
_MODES = [SELF, VARIANTS, OTHERS, SELF | VARIANTS, SELF | OTHERS, VARIANTS | OTHERS, ALL]


class TestInvariants:
    @pytest.mark.parametrize("code", _CODES)
    @pytest.mark.parametrize("mode", _MODES)
    def test_fetch_languages_unique(self, builder: FallbackChainBuilder, code: str, mode: FallbackMode) -> None:
        fetched = [step.fetch_language for step in builder.build_from_language(code, mode)]
        assert len(fetched) == len(set(fetched))

    @pytest.mark.parametrize("code", _CODES)
    def test_deterministic(self, builder: FallbackChainBuilder, code: str) -> None:
        assert builder.build_from_language(code) == builder.build_from_language(code)

    @pytest.mark.parametrize("code", _CODES)
    def test_self_first(self, builder: FallbackChainBuilder, code: str) -> None:
        assert builder.build_from_language(code, ALL)[0] == (code, code)

    @pytest.mark.parametrize("code", _CODES)
    def test_mode_without_self_omits_identity_step(self, builder: FallbackChainBuilder, code: str) -> None:
        for mode in (VARIANTS, OTHERS, VARIANTS | OTHERS):
            assert (code, code) not in builder.build_from_language(code, mode)


# ---------------------------------------------------------------------------
# Proficiency levels
# ---------------------------------------------------------------------------


class TestBuildFromProficiency:
    def test_claimed_languages_before_fallbacks(self) -> None:
        graph = StaticLanguageGraph(fallbacks={"en": ["es"], "de": ["fr"], "es": [], "fr": []})
        levels = ProficiencyLevels({"0": ["en"], "1": ["de"]})
        chain = FallbackChainBuilder(graph).build_from_proficiency(levels)
        assert chain == steps("en", "de", "es", "fr")

    @pytest.mark.parametrize(
        ("levels", "expected"),
        [
            ({"N": ["de-formal"]}, ["de-formal", "de", "en"]),
            ({"N": ["en", "de-formal"]}, ["en", "de-formal", "de"]),
            ({"N": ["de-formal"], "3": ["en"]}, ["de-formal", "en", "de"]),
            ({"N": ["unknown"]}, ["unknown", "en"]),
            ({"N": ["zh-classical"]}, ["lzh", "en"]),
        ],
    )
    def test_simple_levels(self, builder: FallbackChainBuilder, levels: dict, expected: list[str]) -> None:
        assert builder.build_from_proficiency(ProficiencyLevels(levels)) == steps(*expected)

    def test_invalid_codes_are_skipped(self, builder: FallbackChainBuilder) -> None:
        assert builder.build_from_proficiency(ProficiencyLevels({"N": ["/"]})) == []
        assert builder.build_from_proficiency(ProficiencyLevels({"N": [":", "en"]})) == steps("en")

    def test_self_steps_of_a_level_precede_its_variants(self, builder: FallbackChainBuilder) -> None:
        levels = ProficiencyLevels({"N": ["zh-cn", "de-formal"], "3": ["en", "de"]})
        expected = steps("zh-cn", "de-formal", *_ZH_CN_VARIANTS, "en", "de")
        assert builder.build_from_proficiency(levels) == expected

    def test_claimed_variant_is_not_reused_as_conversion_source(self, builder: FallbackChainBuilder) -> None:
        levels = ProficiencyLevels({"N": ["zh-cn", "zh-hk"], "3": ["en", "de-formal"]})
        expected = steps(
            "zh-cn",
            "zh-hk",
            *[step for step in _ZH_CN_VARIANTS if step[1] != "zh-hk"],
            "en",
            "de-formal",
            "de",
        )
        assert builder.build_from_proficiency(levels) == expected

    def test_three_levels_with_two_families(self, builder: FallbackChainBuilder) -> None:
        levels = ProficiencyLevels({"N": ["en", "de-formal", "zh", "zh-cn"], "4": ["kk-cn"], "2": ["zh-hk", "kk"]})
        expected = steps(
            "en",
            "de-formal",
            "zh",
            "zh-cn",
            ("zh", "zh-hans"),
            ("zh", "zh-hant"),
            ("zh", "zh-tw"),
            ("zh", "zh-hk"),
            ("zh", "zh-sg"),
            ("zh", "zh-mo"),
            ("zh", "zh-my"),
            "kk-cn",
            ("kk-cn", "kk"),
            ("kk-cn", "kk-cyrl"),
            ("kk-cn", "kk-latn"),
            ("kk-cn", "kk-arab"),
            ("kk-cn", "kk-kz"),
            ("kk-cn", "kk-tr"),
            "de",
        )
        chain = builder.build_from_proficiency(levels)
        assert chain == expected
        fetched = [step.fetch_language for step in chain]
        assert len(fetched) == len(set(fetched))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_depth_cap_exceeded(self, formal_graph: StaticLanguageGraph) -> None:
        builder = FallbackChainBuilder(formal_graph, max_depth=0)
        with pytest.raises(FallbackGraphConfigurationError, match="exceeded depth"):
            builder.build_from_language("de-formal", ALL)

    def test_depth_cap_not_hit_without_others(self, formal_graph: StaticLanguageGraph) -> None:
        builder = FallbackChainBuilder(formal_graph, max_depth=0)
        assert builder.build_from_language("de-formal", SELF | VARIANTS) == steps("de-formal")

    def test_graph_errors_propagate(self) -> None:
        class BrokenGraph(StaticLanguageGraph):
            def fallbacks_of(self, code: str) -> tuple[str, ...]:
                raise InvalidLanguageCode(code)

        builder = FallbackChainBuilder(BrokenGraph(fallbacks={}))
        with pytest.raises(InvalidLanguageCode):
            builder.build_from_language("de", ALL)


class TestFallbackMode:
    def test_values(self) -> None:
        assert (int(SELF), int(VARIANTS), int(FallbackMode.OTHERS)) == (1, 2, 4)
        assert FallbackMode.ALL == SELF | VARIANTS | FallbackMode.OTHERS

    def test_int_round_trip(self) -> None:
        assert FallbackMode(3) == SELF | VARIANTS
