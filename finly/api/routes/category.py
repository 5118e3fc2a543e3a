from typing import List

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, Field

from finly.api.utils.batch import batch_response
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.categories import (
    CategoryInput,
    CategoryView,
    DeleteCategoryUseCase,
    DeleteSubcategoryUseCase,
    ListCategoriesUseCase,
    SubcategoryInput,
    UpsertCategoriesUseCase,
    UpsertSubcategoryUseCase,
)
from finly.depends import get_current_user, get_unit_of_work
from finly.domain.entities import User

router = APIRouter(prefix="/category", tags=["Categories"])


class CategoryRequest(BaseModel):
    id: str = Field(..., description="Client generated category id")
    name: str = Field(..., description="Category name")
    color: str = Field(..., description="Display color")
    icon_name: str = Field(..., description="Icon identifier")


@router.post("", status_code=status.HTTP_200_OK)
async def upsert_categories(
    request: List[CategoryRequest],
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Batch Upsert Categories

    Invalid items are skipped and listed in ``errors``; the rest is written in
    one transaction.

    Returns:
        - 200 OK: All items written
        - 207 Multi-Status: Some items rejected
        - 400 Bad Request: All items rejected
    """
    items = [CategoryInput(**item.model_dump()) for item in request]
    result = await UpsertCategoriesUseCase(uow).execute(user.id, items)
    return batch_response(result, f"{len(result.succeeded)} of {result.total} categories saved")


class DeleteCategoryRequest(BaseModel):
    id: str = Field(..., description="Category id")


@router.delete("", status_code=status.HTTP_200_OK)
async def delete_category(
    request: DeleteCategoryRequest = Body(...),
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft Delete Category

    Raises:
        - 404 Not Found: Category missing, inactive or not owned by the caller
    """
    await DeleteCategoryUseCase(uow).execute(user.id, request.id)
    return {"success": True, "message": "category deleted"}


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CategoryView])
async def list_categories(
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Active categories of the caller with active subcategories nested"""
    return await ListCategoriesUseCase(uow).execute(user.id)


class SubcategoryRequest(BaseModel):
    id: str = Field(..., description="Client generated subcategory id")
    category_id: str = Field(..., description="Parent category id")
    name: str
    color: str
    icon_name: str


@router.post("/sub", status_code=status.HTTP_200_OK)
async def upsert_subcategory(
    request: SubcategoryRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Upsert Subcategory

    Raises:
        - 400 Bad Request: Empty fields or id bound to another category
        - 404 Not Found: Parent category missing or not owned by the caller
    """
    await UpsertSubcategoryUseCase(uow).execute(
        user.id, SubcategoryInput(**request.model_dump())
    )
    return {"success": True, "message": "subcategory saved"}


class DeleteSubcategoryRequest(BaseModel):
    id: str = Field(..., description="Subcategory id")
    category_id: str = Field(..., description="Parent category id")


@router.delete("/sub", status_code=status.HTTP_200_OK)
async def delete_subcategory(
    request: DeleteSubcategoryRequest = Body(...),
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Soft Delete Subcategory

    Raises:
        - 404 Not Found: Category or subcategory missing
    """
    await DeleteSubcategoryUseCase(uow).execute(user.id, request.category_id, request.id)
    return {"success": True, "message": "subcategory deleted"}
