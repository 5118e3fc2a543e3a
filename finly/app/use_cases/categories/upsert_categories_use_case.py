"""
Upsert Categories Use Case

Inserts or updates a batch of categories in one transaction.
"""

import logging
from typing import List
from uuid import UUID

from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.batch import BatchResult
from finly.domain.entities import Category

from .dtos import CategoryInput

logger = logging.getLogger(__name__)


def is_valid_category(item: CategoryInput) -> bool:
    return bool(item.id and item.name and item.color and item.icon_name)


class UpsertCategoriesUseCase:
    """
    Business Rules:
    - Items with an empty id/name/color/icon are skipped and reported
    - An id that belongs to another user is skipped and reported
    - Existing categories get name/color/icon updated
    - Any persistence failure aborts the whole batch
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, items: List[CategoryInput]) -> BatchResult:
        result = BatchResult()

        async with self.uow:
            for item in items:
                if not is_valid_category(item):
                    result.errors.append(item.id)
                    continue

                existing = await self.uow.categories.get_by_id(item.id)
                if existing is not None and existing.user_id != user_id:
                    logger.warning(f"Category {item.id} belongs to another user")
                    result.errors.append(item.id)
                    continue

                await self.uow.categories.upsert(
                    Category(
                        id=item.id,
                        user_id=user_id,
                        name=item.name,
                        color=item.color,
                        icon_name=item.icon_name,
                    )
                )
                result.succeeded.append(item.id)

            await self.uow.commit()

        return result
