"""
Subcategory Use Cases

Upsert and soft delete of subcategories under a category the caller owns.
"""

from uuid import UUID

from finly.app.errors import NotFound, ValidationError
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.entities import Subcategory

from .dtos import SubcategoryInput


class UpsertSubcategoryUseCase:
    """
    Business Rules:
    - Parent category must be active and owned by the caller
    - name, color and icon must be non-empty
    - A subcategory id cannot move to a different category
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, item: SubcategoryInput) -> None:
        if not (item.id and item.name and item.color and item.icon_name):
            raise ValidationError("name, color and icon are required")

        async with self.uow:
            category = await self.uow.categories.get_active_by_user(item.category_id, user_id)
            if category is None:
                raise NotFound("category not found", code="CATEGORY_NOT_FOUND")

            existing = await self.uow.subcategories.get_by_id(item.id)
            if existing is not None and existing.category_id != item.category_id:
                raise ValidationError("subcategory belongs to another category")

            await self.uow.subcategories.upsert(
                Subcategory(
                    id=item.id,
                    category_id=item.category_id,
                    name=item.name,
                    color=item.color,
                    icon_name=item.icon_name,
                )
            )
            await self.uow.commit()


class DeleteSubcategoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, category_id: str, subcategory_id: str) -> None:
        async with self.uow:
            category = await self.uow.categories.get_active_by_user(category_id, user_id)
            if category is None:
                raise NotFound("category not found", code="CATEGORY_NOT_FOUND")

            deleted = await self.uow.subcategories.deactivate(subcategory_id, category_id)
            if not deleted:
                raise NotFound("subcategory not found", code="SUBCATEGORY_NOT_FOUND")
            await self.uow.commit()
