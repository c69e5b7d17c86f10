from fastapi import APIRouter, Depends, Response, status

from ..core.dependencies import get_account_repository, get_transfer_service
from ..models import (
    AccountCreate,
    AccountModel,
    AccountResponse,
    TransferRequest,
    TransferResponse,
)
from ..services import AccountRepository, TransferService


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    repository: AccountRepository = Depends(get_account_repository),
) -> AccountResponse:
    account = repository.save(AccountModel(member_id=payload.member_id, money=payload.money))
    return AccountResponse.model_validate(account)

@router.get("/{member_id}", response_model=AccountResponse)
def get_account(
    member_id: str,
    repository: AccountRepository = Depends(get_account_repository),
) -> AccountResponse:
    return AccountResponse.model_validate(repository.find_by_id(member_id))

@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    member_id: str,
    repository: AccountRepository = Depends(get_account_repository),
) -> Response:
    repository.delete(member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
) -> TransferResponse:
    return service.account_transfer(payload.from_id, payload.to_id, payload.amount)

__all__ = ["router", "transfer_router"]
