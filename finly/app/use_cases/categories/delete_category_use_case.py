from uuid import UUID

from finly.app.errors import NotFound
from finly.app.services.unit_of_work import UnitOfWork


class DeleteCategoryUseCase:
    """Soft-deletes one of the caller's active categories"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, category_id: str) -> None:
        async with self.uow:
            deleted = await self.uow.categories.deactivate(category_id, user_id)
            if not deleted:
                raise NotFound("category not found", code="CATEGORY_NOT_FOUND")
            await self.uow.commit()
