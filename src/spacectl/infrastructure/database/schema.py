"""SQLAlchemy Core table definitions for the local platform store.

Children reference their space without ``ON DELETE CASCADE`` so that
deleting a space which still owns apps or service instances fails at
the database, the same way a remote control plane rejects it.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

organizations = Table(
    "organizations",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("created", Text, nullable=False),
)

spaces = Table(
    "spaces",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("organization_guid", Text, ForeignKey("organizations.guid"), nullable=False),
    Column("created", Text, nullable=False),
    UniqueConstraint("organization_guid", "name"),
)

apps = Table(
    "apps",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("space_guid", Text, ForeignKey("spaces.guid"), nullable=False),
    Column("state", Text, nullable=False, default="STOPPED", server_default="STOPPED"),
    Column("instances", Integer, nullable=False, default=1, server_default="1"),
    Column("urls", Text),  # JSON array
    UniqueConstraint("space_guid", "name"),
)

service_instances = Table(
    "service_instances",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("space_guid", Text, ForeignKey("spaces.guid"), nullable=False),
    Column("service", Text, nullable=False, default="", server_default=""),
    Column("plan", Text, nullable=False, default="", server_default=""),
    UniqueConstraint("space_guid", "name"),
)

domains = Table(
    "domains",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("name", Text, nullable=False, unique=True),
)

space_domains = Table(
    "space_domains",
    metadata,
    Column("space_guid", Text, ForeignKey("spaces.guid", ondelete="CASCADE"), nullable=False),
    Column("domain_guid", Text, ForeignKey("domains.guid"), nullable=False),
    UniqueConstraint("space_guid", "domain_guid"),
)

users = Table(
    "users",
    metadata,
    Column("guid", Text, primary_key=True),
    Column("email", Text, nullable=False, unique=True),
)

space_roles = Table(
    "space_roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("space_guid", Text, ForeignKey("spaces.guid", ondelete="CASCADE"), nullable=False),
    Column("user_guid", Text, ForeignKey("users.guid"), nullable=False),
    Column("role", Text, nullable=False),  # manager | developer | auditor
    Column("granted", Text, nullable=False),
    UniqueConstraint("space_guid", "user_guid", "role"),
)

# One row per user: the organization/space that user currently targets.
targets = Table(
    "targets",
    metadata,
    Column("user_guid", Text, ForeignKey("users.guid"), primary_key=True),
    Column("organization_guid", Text, ForeignKey("organizations.guid", ondelete="SET NULL")),
    Column("space_guid", Text, ForeignKey("spaces.guid", ondelete="SET NULL")),
    Column("modified", Text, nullable=False),
)

Index("ix_spaces_org", spaces.c.organization_guid)
Index("ix_apps_space", apps.c.space_guid)
Index("ix_service_instances_space", service_instances.c.space_guid)
