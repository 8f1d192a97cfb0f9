from infra.db.models import Base, ChangelogEntryModel, ServiceModel
from infra.db.session import build_engine, build_session_factory, create_database_schema

__all__ = [
    "Base",
    "ChangelogEntryModel",
    "ServiceModel",
    "build_engine",
    "build_session_factory",
    "create_database_schema",
]
