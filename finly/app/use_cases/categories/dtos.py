"""
Category Use Case DTOs
"""

from typing import List

from pydantic import BaseModel


class CategoryInput(BaseModel):
    """One category of a batch upsert"""

    id: str
    name: str
    color: str
    icon_name: str


class SubcategoryInput(BaseModel):
    id: str
    category_id: str
    name: str
    color: str
    icon_name: str


class SubcategoryView(BaseModel):
    id: str
    name: str
    color: str
    icon_name: str


class CategoryView(BaseModel):
    """Active category with its active subcategories"""

    id: str
    name: str
    color: str
    icon_name: str
    subcategories: List[SubcategoryView]
