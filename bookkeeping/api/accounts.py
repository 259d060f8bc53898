"""
Chart of accounts API endpoints.

The API layer is thin: it maps ledger errors to status codes
and delegates everything else to AccountService.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bookkeeping.exceptions import (
    AccountInUseError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from bookkeeping.models.base import get_db
from bookkeeping.models.enums import AccountType
from bookkeeping.services.account_service import AccountService
from bookkeeping.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountBalanceResponse,
    AccountStatement,
)

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """
    Add an account to the chart of accounts.

    Codes are unique. A parent, if given, must already exist.
    """
    service = AccountService(db)
    try:
        return service.create_account(request)
    except (ValidationError, ConflictError) as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    account_type: AccountType | None = None,
    db: Session = Depends(get_db),
):
    """List accounts ordered by code, optionally of one type."""
    return AccountService(db).list_accounts(account_type)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    service = AccountService(db)
    try:
        return service.get_account(account_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """Rename an account or move it under another parent."""
    service = AccountService(db)
    try:
        return service.update_account(account_id, request)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (ValidationError, ConflictError) as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete an account.

    Accounts with journal entries or child accounts are
    refused: the ledger never loses history.
    """
    service = AccountService(db)
    try:
        deleted = service.delete_account(account_id)
    except AccountInUseError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if not deleted:
        raise HTTPException(
            status_code=404, detail=f"Account {account_id} not found"
        )
    return Response(status_code=204)


@router.get("/{account_id}/balance", response_model=AccountBalanceResponse)
def get_account_balance(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Current balance of an account.

    Calculated from entries, never stored.
    """
    service = AccountService(db)
    try:
        return service.get_account_balance(account_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{account_id}/statement", response_model=AccountStatement)
def get_account_statement(
    account_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    """Entries posted to an account within an optional date window."""
    service = AccountService(db)
    try:
        return service.get_account_statement(account_id, start_date, end_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
