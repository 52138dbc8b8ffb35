"""Bank account endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.models import BankAccount
from storefront.schemas.bank_account import BankAccountCreate, BankAccountResponse, BankAccountUpdate
from storefront.services.bank_account_service import (
    DefaultBankAccountError,
    create_bank_account,
    delete_bank_account,
    get_default_bank_account,
    list_bank_accounts,
    set_default_bank_account,
    update_bank_account,
)

router: APIRouter = APIRouter()


def _get_account_or_404(db: Session, account_id: int) -> BankAccount:
    account = db.get(BankAccount, account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bank account not found")
    return account


@router.get("", response_model=list[BankAccountResponse])
def get_active_accounts(db: Session = Depends(get_db)) -> list[BankAccount]:
    return list_bank_accounts(db, active_only=True)


@router.get("/default", response_model=BankAccountResponse)
def get_default_account(db: Session = Depends(get_db)) -> BankAccount:
    account = get_default_bank_account(db)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No bank account configured")
    return account


@router.get("/all", response_model=list[BankAccountResponse], dependencies=[Depends(require_admin)])
def get_all_accounts(db: Session = Depends(get_db)) -> list[BankAccount]:
    return list_bank_accounts(db)


@router.post("", response_model=BankAccountResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_account(payload: BankAccountCreate, db: Session = Depends(get_db)) -> BankAccount:
    return create_bank_account(db, payload.model_dump())


@router.put("/{account_id}", response_model=BankAccountResponse, dependencies=[Depends(require_admin)])
def update_account(account_id: int, payload: BankAccountUpdate, db: Session = Depends(get_db)) -> BankAccount:
    account = _get_account_or_404(db, account_id)
    return update_bank_account(db, account, payload.model_dump(exclude_unset=True))


@router.post("/{account_id}/default", response_model=BankAccountResponse, dependencies=[Depends(require_admin)])
def make_default(account_id: int, db: Session = Depends(get_db)) -> BankAccount:
    return set_default_bank_account(db, _get_account_or_404(db, account_id))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_account(account_id: int, db: Session = Depends(get_db)) -> None:
    account = _get_account_or_404(db, account_id)
    try:
        delete_bank_account(db, account)
    except DefaultBankAccountError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
