from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.service import Service
from core.domain.service_state_update import ServiceStateUpdate
from core.exceptions.service_already_exists_error import ServiceAlreadyExistsError
from core.port.service_repository import ServiceRepository
from infra.db.models import ChangelogEntryModel, ServiceModel
from infra.utils.timestamps import as_utc


class PostgresServiceRepository(ServiceRepository):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def save(self, service: Service) -> Service:
        async with self._session_factory() as session:
            try:
                model: Optional[ServiceModel] = None
                service_id = service.id

                if service_id is not None and service_id > 0:
                    model = await session.get(ServiceModel, service_id)

                if model is None:
                    model = ServiceModel(
                        name=service.name,
                        url=service.url,
                        is_up=service.is_up,
                        last_checked_at=service.last_checked_at,
                        status_changed_at=service.status_changed_at,
                        response_time_ms=service.response_time_ms,
                    )

                    if service_id is not None and service_id > 0:
                        model.id = service_id

                    session.add(model)
                else:
                    model.name = service.name
                    model.url = service.url

                await session.commit()
                await session.refresh(model)

                return self._to_domain(model)

            except IntegrityError as e:
                await session.rollback()

                error_msg = str(e.orig).lower()

                if "services.name" in error_msg or "ix_services_name" in error_msg:
                    raise ServiceAlreadyExistsError("name", service.name)
                elif "services.url" in error_msg or "services_url_key" in error_msg:
                    raise ServiceAlreadyExistsError("url", service.url)
                else:
                    raise

    async def find_all(self) -> list[Service]:
        async with self._session_factory() as session:
            statement = select(ServiceModel).order_by(ServiceModel.id.asc())

            models = (await session.execute(statement)).scalars().all()

            return [self._to_domain(model) for model in models]

    async def find_by_id(self, service_id: int) -> Optional[Service]:
        async with self._session_factory() as session:
            statement = select(ServiceModel).where(ServiceModel.id == service_id)

            model = (await session.execute(statement)).scalar_one_or_none()

            return self._to_domain(model) if model is not None else None

    async def delete(self, service_id: int) -> bool:
        async with self._session_factory() as session:
            statement = delete(ServiceModel).where(ServiceModel.id == service_id)

            result = await session.execute(statement)
            await session.commit()

            return result.rowcount == 1  # type: ignore

    async def update_state(self, state_update: ServiceStateUpdate) -> bool:
        async with self._session_factory() as session:
            statement = (
                update(ServiceModel)
                .where(ServiceModel.id == state_update.service_id)
                .where(ServiceModel.state_version == state_update.expected_version)
                .values(
                    is_up=state_update.is_up,
                    last_checked_at=state_update.last_checked_at,
                    status_changed_at=state_update.status_changed_at,
                    response_time_ms=state_update.response_time_ms,
                    state_version=ServiceModel.state_version + 1,
                )
                .execution_options(synchronize_session=False)
            )

            result = await session.execute(statement)

            if result.rowcount != 1:  # type: ignore
                await session.rollback()
                return False

            entry = state_update.changelog_entry
            if entry is not None:
                session.add(
                    ChangelogEntryModel(
                        service_id=entry.service_id,
                        previous_status=int(entry.previous_status),
                        new_status=int(entry.new_status),
                        changed_at=entry.changed_at,
                    )
                )

            await session.commit()

            return True

    def _to_domain(self, model: ServiceModel) -> Service:
        return Service(
            id=model.id,
            name=model.name,
            url=model.url,
            is_up=model.is_up,
            last_checked_at=as_utc(model.last_checked_at),
            status_changed_at=as_utc(model.status_changed_at),
            response_time_ms=model.response_time_ms,
            created_at=as_utc(model.created_at),
            state_version=model.state_version,
        )
