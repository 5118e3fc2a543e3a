from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from finly.domain.entities import Category, Subcategory


class ICategoryRepository(ABC):
    """Category repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Optional[Category]:
        """Get category by ID regardless of owner or state"""
        pass

    @abstractmethod
    async def get_active_by_user(
        self, category_id: str, user_id: UUID
    ) -> Optional[Category]:
        """Get an active category owned by the user"""
        pass

    @abstractmethod
    async def upsert(self, category: Category) -> Category:
        """Insert category, or update name/color/icon when it exists"""
        pass

    @abstractmethod
    async def deactivate(self, category_id: str, user_id: UUID) -> bool:
        """Soft delete. Returns True if an active category was deactivated."""
        pass

    @abstractmethod
    async def list_active_by_user(self, user_id: UUID) -> List[Category]:
        """List active categories of a user"""
        pass


class ISubcategoryRepository(ABC):
    """Subcategory repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, subcategory_id: str) -> Optional[Subcategory]:
        """Get subcategory by ID"""
        pass

    @abstractmethod
    async def upsert(self, subcategory: Subcategory) -> Subcategory:
        """Insert subcategory, or update name/color/icon when it exists"""
        pass

    @abstractmethod
    async def deactivate(self, subcategory_id: str, category_id: str) -> bool:
        """Soft delete. Returns True if an active subcategory was deactivated."""
        pass

    @abstractmethod
    async def list_active_by_categories(
        self, category_ids: List[str]
    ) -> List[Subcategory]:
        """List active subcategories belonging to the given categories"""
        pass
