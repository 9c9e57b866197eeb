"""SQLite engine and schema for the local platform store via SQLAlchemy Core."""

from spacectl.infrastructure.database.engine import create_db_engine, init_database
from spacectl.infrastructure.database.schema import (
    apps,
    domains,
    metadata,
    organizations,
    service_instances,
    space_domains,
    space_roles,
    spaces,
    targets,
    users,
)

__all__ = [
    "apps",
    "create_db_engine",
    "domains",
    "init_database",
    "metadata",
    "organizations",
    "service_instances",
    "space_domains",
    "space_roles",
    "spaces",
    "targets",
    "users",
]
