from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.changelog_entry import ChangelogEntry
from core.port.changelog_repository import ChangelogRepository
from infra.db.models import ChangelogEntryModel
from infra.utils.timestamps import as_utc


class PostgresChangelogRepository(ChangelogRepository):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def find_since(self, since: datetime) -> list[ChangelogEntry]:
        async with self._session_factory() as session:
            statement = (
                select(ChangelogEntryModel)
                .where(ChangelogEntryModel.changed_at >= since)
                .order_by(ChangelogEntryModel.changed_at.asc(), ChangelogEntryModel.id.asc())
            )
            models = (await session.execute(statement)).scalars().all()

            return [self._to_domain(model) for model in models]

    def _to_domain(self, model: ChangelogEntryModel) -> ChangelogEntry:
        return ChangelogEntry(
            id=model.id,
            service_id=model.service_id,
            previous_status=bool(model.previous_status),
            new_status=bool(model.new_status),
            changed_at=as_utc(model.changed_at),
        )
