"""Database repositories: thin CRUD layer over ``UserLanguage``.

Chain construction is synchronous, so profiles are loaded up front:
``load_profile_source()`` snapshots the declarations of the users a
request needs into a ``MappingProfileSource``.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from termfallback.db.models import UserLanguage
from termfallback.fallback.profiles import MappingProfileSource
from termfallback.languages.codes import LanguageCode


class UserLanguageRepo:
    """CRUD operations for the ``user_languages`` table."""

    @staticmethod
    async def set_language(session: AsyncSession, user_id: str, language_code: str, level: str) -> UserLanguage:
        """Declare (or re-level) a language for a user.

        Raises:
            InvalidLanguageCode: If *language_code* is malformed.

        Returns:
            The new or updated ``UserLanguage`` row.
        """
        code = LanguageCode(language_code)
        stmt = select(UserLanguage).where(
            UserLanguage.user_id == user_id,
            UserLanguage.language_code == code,
        )
        row = (await session.execute(stmt)).scalar_one_or_none()
        if row is None:
            row = UserLanguage(user_id=user_id, language_code=str(code), level=level)
            session.add(row)
        else:
            row.level = level
        await session.flush()
        return row

    @staticmethod
    async def remove_language(session: AsyncSession, user_id: str, language_code: str) -> bool:
        """Remove a declaration.

        Returns:
            ``True`` if a row was deleted.
        """
        stmt = delete(UserLanguage).where(
            UserLanguage.user_id == user_id,
            UserLanguage.language_code == language_code,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def list_for_user(session: AsyncSession, user_id: str) -> list[UserLanguage]:
        """All declarations of a user, oldest first."""
        stmt = (
            select(UserLanguage)
            .where(UserLanguage.user_id == user_id)
            .order_by(UserLanguage.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def proficiency_for_user(session: AsyncSession, user_id: str) -> dict[str, str]:
        """``{language_code: level}`` for one user, in declaration order."""
        rows = await UserLanguageRepo.list_for_user(session, user_id)
        return {row.language_code: row.level for row in rows}

    @staticmethod
    async def load_profile_source(session: AsyncSession, user_ids: Iterable[str]) -> MappingProfileSource:
        """Snapshot the declarations of *user_ids* for one request.

        Users without declarations are absent from the snapshot.
        """
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return MappingProfileSource()

        stmt = (
            select(UserLanguage)
            .where(UserLanguage.user_id.in_(ids))
            .order_by(UserLanguage.id)
        )
        result = await session.execute(stmt)

        profiles: dict[str, dict[str, str]] = {}
        for row in result.scalars():
            profiles.setdefault(row.user_id, {})[row.language_code] = row.level
        return MappingProfileSource(profiles)
