"""Language relationship graph.

The resolver only talks to the ``LanguageGraph`` protocol.
``StaticLanguageGraph`` is the in-process implementation, backed either
by the built-in tables in ``termfallback.languages.builtin`` or by a JSON
file (``Settings.LANGUAGE_GRAPH_PATH``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field, ValidationError

from termfallback.core.errors import FallbackGraphConfigurationError, InvalidLanguageCode
from termfallback.languages import builtin
from termfallback.languages.codes import LanguageCode, is_well_formed, validate_code

if TYPE_CHECKING:
    from termfallback.core.config import Settings

logger = logging.getLogger(__name__)


class LanguageGraph(Protocol):
    """Read-only view of parent/variant/fallback relationships."""

    def normalize(self, code: str) -> LanguageCode: ...

    def is_known(self, code: str) -> bool: ...

    def parent_of(self, code: str) -> str | None: ...

    def variants_of(self, code: str) -> Sequence[str]: ...

    def has_variant(self, parent: str, code: str) -> bool: ...

    def preferred_variant_order_for(self, code: str) -> Sequence[str] | None: ...

    def fallbacks_of(self, code: str) -> Sequence[str]: ...


class GraphFile(BaseModel):
    """On-disk JSON shape of a language graph."""

    default_language: str = "en"
    fallbacks: dict[str, list[str]] = Field(default_factory=dict)
    variants: dict[str, list[str]] = Field(default_factory=dict)
    preferred_variant_order: dict[str, list[str]] = Field(default_factory=dict)
    aliases: dict[str, str] = Field(default_factory=dict)


class StaticLanguageGraph:
    """Immutable in-memory language graph.

    Args:
        fallbacks: ``{code: [fallback, ...]}`` in priority order.
        variants: ``{base: [variant, ...]}`` conversion families.  A base
            that lists itself is its own parent.
        preferred_variant_order: Optional per-variant override of the
            family order.
        aliases: ``{deprecated: canonical}`` code aliases.
        default_language: Fallback for well-formed codes without an
            explicit entry in *fallbacks*.
        disabled_variants: Variants that exist but must not be used.

    Raises:
        FallbackGraphConfigurationError: On malformed codes, a language
            listed as its own fallback, or a variant claimed by two
            families.
    """

    def __init__(
        self,
        fallbacks: Mapping[str, Sequence[str]],
        variants: Mapping[str, Sequence[str]] | None = None,
        preferred_variant_order: Mapping[str, Sequence[str]] | None = None,
        aliases: Mapping[str, str] | None = None,
        default_language: str = "en",
        disabled_variants: Iterable[str] = (),
    ) -> None:
        self._fallbacks = {code: tuple(others) for code, others in fallbacks.items()}
        self._variants = {base: tuple(members) for base, members in (variants or {}).items()}
        self._preferred = {code: tuple(order) for code, order in (preferred_variant_order or {}).items()}
        self._aliases = dict(aliases or {})
        self._default = default_language
        self._disabled = frozenset(disabled_variants)

        self._parents: dict[str, str] = {}
        for base, members in self._variants.items():
            for member in members:
                if member in self._parents and self._parents[member] != base:
                    raise FallbackGraphConfigurationError(
                        f"variant {member!r} belongs to both {self._parents[member]!r} and {base!r}"
                    )
                self._parents[member] = base
            # A base with variants converts into its own family.
            self._parents.setdefault(base, base)

        self._check()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def builtin(cls, **overrides: object) -> StaticLanguageGraph:
        """Graph over the built-in tables; keyword args override them."""
        params: dict = {
            "fallbacks": builtin.FALLBACKS,
            "variants": builtin.VARIANTS,
            "preferred_variant_order": builtin.PREFERRED_VARIANT_ORDER,
            "aliases": builtin.ALIASES,
        }
        params.update(overrides)
        return cls(**params)

    @classmethod
    def from_json(cls, path: str | Path, **overrides: object) -> StaticLanguageGraph:
        """Load a graph from a JSON file shaped like ``GraphFile``.

        Raises:
            FallbackGraphConfigurationError: If the file is missing or invalid.
        """
        path = Path(path)
        try:
            data = GraphFile.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FallbackGraphConfigurationError(f"language graph not found: {path}") from exc
        except ValidationError as exc:
            raise FallbackGraphConfigurationError(f"invalid language graph {path}: {exc}") from exc

        params: dict = data.model_dump()
        params.update(overrides)
        return cls(**params)

    @classmethod
    def from_settings(cls, settings: Settings) -> StaticLanguageGraph:
        """Build the graph described by *settings*.

        Aliases from ``LANGUAGE_ALIASES`` are layered on top of the
        graph's own.
        """
        overrides: dict = {
            "default_language": settings.DEFAULT_LANGUAGE,
            "disabled_variants": settings.disabled_variants_list,
        }
        if settings.LANGUAGE_GRAPH_PATH:
            graph = cls.from_json(settings.LANGUAGE_GRAPH_PATH, **overrides)
        else:
            graph = cls.builtin(**overrides)

        extra = settings.language_aliases_map
        if extra:
            graph = graph.with_aliases(extra)

        logger.info(
            "Language graph loaded (%d languages, %d families)",
            len(graph._fallbacks),
            len(graph._variants),
            extra={"event": "graph_loaded"},
        )
        return graph

    def with_aliases(self, aliases: Mapping[str, str]) -> StaticLanguageGraph:
        """Return a copy with *aliases* added (later entries win)."""
        return StaticLanguageGraph(
            fallbacks=self._fallbacks,
            variants=self._variants,
            preferred_variant_order=self._preferred,
            aliases={**self._aliases, **aliases},
            default_language=self._default,
            disabled_variants=self._disabled,
        )

    def _check(self) -> None:
        codes: list[str] = [self._default]
        for code, others in self._fallbacks.items():
            if code in others:
                raise FallbackGraphConfigurationError(f"{code!r} lists itself as a fallback")
            codes.append(code)
            codes.extend(others)
        for base, members in self._variants.items():
            codes.append(base)
            codes.extend(members)
        for code, order in self._preferred.items():
            codes.append(code)
            codes.extend(order)
        codes.extend(self._aliases.values())
        codes.extend(self._disabled)

        bad = sorted({code for code in codes if not is_well_formed(code)})
        if bad:
            raise FallbackGraphConfigurationError(f"malformed language codes in graph: {bad}")

    # ------------------------------------------------------------------
    # LanguageGraph protocol
    # ------------------------------------------------------------------

    @property
    def default_language(self) -> str:
        return self._default

    @property
    def aliases(self) -> Mapping[str, str]:
        return dict(self._aliases)

    def normalize(self, code: str) -> LanguageCode:
        """Resolve aliases and validate *code*.

        Raises:
            InvalidLanguageCode: If *code* is malformed.
        """
        return validate_code(code, self._aliases)

    def is_known(self, code: str) -> bool:
        try:
            self.normalize(code)
        except InvalidLanguageCode:
            return False
        return True

    def parent_of(self, code: str) -> str | None:
        return self._parents.get(code)

    def variants_of(self, code: str) -> tuple[str, ...]:
        """Enabled variants of base language *code*, in declared order."""
        return tuple(v for v in self._variants.get(code, ()) if v not in self._disabled)

    def has_variant(self, parent: str, code: str) -> bool:
        return code not in self._disabled and code in self._variants.get(parent, ())

    def preferred_variant_order_for(self, code: str) -> tuple[str, ...] | None:
        return self._preferred.get(code)

    def fallbacks_of(self, code: str) -> tuple[str, ...]:
        if code in self._fallbacks:
            return self._fallbacks[code]
        if code == self._default:
            return ()
        return (self._default,)
