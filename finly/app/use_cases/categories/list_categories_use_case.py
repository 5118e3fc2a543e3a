from typing import Dict, List
from uuid import UUID

from finly.app.services.unit_of_work import UnitOfWork

from .dtos import CategoryView, SubcategoryView


class ListCategoriesUseCase:
    """Lists the caller's active categories with active subcategories nested"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> List[CategoryView]:
        async with self.uow:
            categories = await self.uow.categories.list_active_by_user(user_id)
            subcategories = await self.uow.subcategories.list_active_by_categories(
                [c.id for c in categories]
            )

        by_category: Dict[str, List[SubcategoryView]] = {}
        for sub in subcategories:
            by_category.setdefault(sub.category_id, []).append(
                SubcategoryView(
                    id=sub.id, name=sub.name, color=sub.color, icon_name=sub.icon_name
                )
            )

        return [
            CategoryView(
                id=c.id,
                name=c.name,
                color=c.color,
                icon_name=c.icon_name,
                subcategories=by_category.get(c.id, []),
            )
            for c in categories
        ]
