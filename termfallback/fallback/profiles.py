"""Sources of user-declared language proficiency.

A ``ProfileSource`` answers "which languages does this user read, and at
what level?" as a ``{language_code: level}`` mapping.  Anonymous or
unconfigured users get an empty mapping, and callers then fall back to
a plain language chain.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Protocol


class ProfileSource(Protocol):
    def proficiency_levels_for(self, user_id: Hashable) -> Mapping[str, str]: ...


class MappingProfileSource:
    """Profile source over a preloaded ``{user_id: {code: level}}`` snapshot.

    ``UserLanguageRepo.load_profile_source`` builds one per request from
    the database; tests build them directly.
    """

    def __init__(self, profiles: Mapping[Hashable, Mapping[str, str]] | None = None) -> None:
        self._profiles = {user_id: dict(langs) for user_id, langs in (profiles or {}).items()}

    def proficiency_levels_for(self, user_id: Hashable) -> Mapping[str, str]:
        return dict(self._profiles.get(user_id, {}))

    def __len__(self) -> int:
        return len(self._profiles)
