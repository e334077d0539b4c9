"""Shared test fixtures.

Language graphs are small static fixtures; DB tests use an in-memory
SQLite database (via aiosqlite) so they run without PostgreSQL.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from termfallback.db.models import Base
from termfallback.fallback.builder import FallbackChainBuilder
from termfallback.fallback.chain import FallbackStep
from termfallback.languages.conversion import CharacterMapConversion
from termfallback.languages.graph import StaticLanguageGraph

# Simplified -> traditional, enough for "测试" (test).
_TO_TRADITIONAL = {"测": "測", "试": "試", "语言": "語言"}
_TO_SIMPLIFIED = {v: k for k, v in _TO_TRADITIONAL.items()}


def steps(*items: str | tuple[str, str]) -> list[FallbackStep]:
    """Expand ``"en"`` to ``("en", "en")`` and keep pairs as-is."""
    return [FallbackStep(item, item) if isinstance(item, str) else FallbackStep(*item) for item in items]


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------


@pytest.fixture
def graph() -> StaticLanguageGraph:
    """The built-in language graph."""
    return StaticLanguageGraph.builtin()


@pytest.fixture
def builder(graph: StaticLanguageGraph) -> FallbackChainBuilder:
    return FallbackChainBuilder(graph)


@pytest.fixture
def formal_graph() -> StaticLanguageGraph:
    """``de-formal`` -> ``de`` -> ``en``, no variants."""
    return StaticLanguageGraph(
        fallbacks={"de-formal": ["de", "en"], "de": ["en"], "en": []},
    )


@pytest.fixture
def two_script_graph() -> StaticLanguageGraph:
    """Base ``zh`` with exactly two script variants."""
    return StaticLanguageGraph(
        fallbacks={"zh": [], "zh-hans": [], "zh-hant": [], "en": []},
        variants={"zh": ["zh-hans", "zh-hant"]},
    )


@pytest.fixture
def zh_conversion() -> CharacterMapConversion:
    """Simplified/traditional conversion for the zh family."""
    traditional = dict(_TO_TRADITIONAL)
    simplified = dict(_TO_SIMPLIFIED)
    return CharacterMapConversion(
        {
            "zh": {},
            "zh-hans": simplified,
            "zh-cn": simplified,
            "zh-sg": simplified,
            "zh-my": simplified,
            "zh-hant": traditional,
            "zh-tw": traditional,
            "zh-hk": traditional,
            "zh-mo": traditional,
        }
    )


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine():
    """Async in-memory SQLite engine with all tables."""
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine):
    """Yield an async session bound to the test engine."""
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess
        await sess.rollback()
