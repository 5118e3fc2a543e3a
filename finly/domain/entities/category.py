"""
Category and Subcategory Entities

User-defined spending categories, each with optional subcategories.
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from finly.domain.base import utcnow


class Category(SQLModel, table=True):
    """
    Category entity - top-level spending category.

    Business Rules:
    - The id is supplied by the client so offline edits can be upserted
    - Deletion is soft (is_active = False)
    """

    __tablename__ = "categories"

    id: str = Field(primary_key=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=255)
    color: str = Field(max_length=32)
    icon_name: str = Field(max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )


class Subcategory(SQLModel, table=True):
    """Subcategory entity - belongs to exactly one category."""

    __tablename__ = "subcategories"

    id: str = Field(primary_key=True, max_length=64)
    category_id: str = Field(foreign_key="categories.id")
    name: str = Field(max_length=255)
    color: str = Field(max_length=32)
    icon_name: str = Field(max_length=255)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )

    __table_args__ = (Index("idx_subcategory_category_id", "category_id"),)
