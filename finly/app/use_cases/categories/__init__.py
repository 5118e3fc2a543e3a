"""
Category Use Cases
"""

from .upsert_categories_use_case import UpsertCategoriesUseCase
from .delete_category_use_case import DeleteCategoryUseCase
from .subcategory_use_cases import UpsertSubcategoryUseCase, DeleteSubcategoryUseCase
from .list_categories_use_case import ListCategoriesUseCase
from .dtos import CategoryInput, SubcategoryInput, CategoryView, SubcategoryView

__all__ = [
    # Use Cases
    "UpsertCategoriesUseCase",
    "DeleteCategoryUseCase",
    "UpsertSubcategoryUseCase",
    "DeleteSubcategoryUseCase",
    "ListCategoriesUseCase",
    # DTOs
    "CategoryInput",
    "SubcategoryInput",
    "CategoryView",
    "SubcategoryView",
]
