from typing import List

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel, Field

from finly.api.utils.batch import batch_response
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.credit_cards import (
    BillingCycleView,
    CreateBillOfDateUseCase,
    CreditCardInput,
    CreditCardView,
    DeleteCreditCardsUseCase,
    ListBillsUseCase,
    ListCreditCardsUseCase,
    UpsertCreditCardsUseCase,
)
from finly.depends import get_current_user, get_unit_of_work
from finly.domain.entities import User

router = APIRouter(prefix="/ccard", tags=["Credit Cards"])


class CreditCardRequest(BaseModel):
    id: str = Field(..., description="Client generated card id (UUID)")
    name: str = Field(..., description="Card name")
    icon_name: str = Field(..., description="Icon identifier")
    limit_value: int = Field(..., description="Credit limit, never negative")
    closing_day: int = Field(..., description="Statement closing day, 1..31")


@router.post("", status_code=status.HTTP_200_OK)
async def upsert_credit_cards(
    request: List[CreditCardRequest],
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Batch Upsert Credit Cards

    Items with an empty name or icon, a negative limit or a closing day
    outside 1..31 are skipped and listed in ``errors``. The closing day of an
    existing card is never changed.

    Returns:
        - 200 OK: All items written
        - 207 Multi-Status: Some items rejected
        - 400 Bad Request: All items rejected
    """
    items = [CreditCardInput(**item.model_dump()) for item in request]
    result = await UpsertCreditCardsUseCase(uow).execute(user.id, items)
    return batch_response(result, f"{len(result.succeeded)} of {result.total} credit cards saved")


class DeleteCreditCardsRequest(BaseModel):
    ids: List[str] = Field(..., description="Card ids to delete")


@router.delete("", status_code=status.HTTP_200_OK)
async def delete_credit_cards(
    request: DeleteCreditCardsRequest = Body(...),
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Batch soft delete; ids not found among the caller's active cards are listed in ``errors``"""
    result = await DeleteCreditCardsUseCase(uow).execute(user.id, request.ids)
    return batch_response(result, f"{len(result.succeeded)} of {result.total} credit cards deleted")


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CreditCardView])
async def list_credit_cards(
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await ListCreditCardsUseCase(uow).execute(user.id)


class BillOfDateRequest(BaseModel):
    credit_card_id: str = Field(..., description="Card id")
    date: str = Field(..., description="RFC 3339 timestamp with UTC offset")


@router.post("/bill_of_date", status_code=status.HTTP_200_OK, response_model=BillingCycleView)
async def create_bill_of_date(
    request: BillOfDateRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Billing Cycle Of Date

    Computes the statement period containing ``date`` in the card owner's
    offset, persists it and returns it with UTC instants.

    Raises:
        - 400 Bad Request: Date is not an RFC 3339 timestamp with offset
        - 404 Not Found: Card missing, inactive or not owned by the caller
    """
    use_case = CreateBillOfDateUseCase(uow)
    return await use_case.execute(user.id, request.credit_card_id, request.date)


@router.get("/bill", status_code=status.HTTP_200_OK, response_model=List[BillingCycleView])
async def list_bills(
    credit_card_id: str = Query(..., description="Card id"),
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Persisted billing cycles of a card

    Raises:
        - 404 Not Found: Card missing, inactive or not owned by the caller
    """
    return await ListBillsUseCase(uow).execute(user.id, credit_card_id)
