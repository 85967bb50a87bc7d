"""
SQLAlchemy mixins for common model patterns.

These mixins provide reusable column definitions so every table carries the
same primary key, tenant reference and timestamp conventions.
"""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from guardpost.shared.utils.generators import generate_cuid


class CuidMixin:
    """
    Mixin for models using CUID as primary key.

    Provides:
        - id: String primary key with automatic CUID generation
    """

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CompanyMixin:
    """
    Mixin for tenant-owned models.

    Provides:
        - company_id: Foreign key to company table with cascade delete

    Every query against a model carrying this mixin must be filtered by
    company_id (see persistence.scoping).
    """

    @declared_attr
    def company_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("company.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """
    Mixin for timestamp tracking.

    Provides:
        - created_at: Timestamp set on creation (server-side default)
        - updated_at: Timestamp updated on modification (server-side default + onupdate)
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class TenantModel(CuidMixin, CompanyMixin, TimestampMixin):
    """
    Complete mixin for standard company-owned models.

    Combines:
        - CuidMixin: CUID primary key
        - CompanyMixin: Company foreign key
        - TimestampMixin: Created/updated timestamps

    Models whose rows belong to a single user also set __owner_column__ to
    the name of that user reference, which ownership scoping filters on.
    """

    __abstract__ = True
