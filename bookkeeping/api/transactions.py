"""
Transaction API endpoints.

Posting, reading and dry-run validation of transactions.
Posted transactions are immutable: update and delete answer
501 Not Implemented.
"""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import (
    NotFoundError,
    UnsupportedOperationError,
    ValidationError,
)
from bookkeeping.models.base import get_db
from bookkeeping.services.transaction_service import TransactionService
from bookkeeping.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
    TransactionWithEntries,
    ValidationResult,
)

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionWithEntries, status_code=201)
def create_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Post a transaction with its journal entries.

    Every entry needs exactly one positive amount, every
    account must exist, and total debits must equal total
    credits. If anything is wrong, nothing is written.
    """
    service = TransactionService(db)
    try:
        return service.create_transaction(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/validate", response_model=ValidationResult)
def validate_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """Report every problem with a transaction without posting it."""
    return TransactionService(db).validate_transaction(request)


@router.get("", response_model=list[TransactionWithEntries])
def list_transactions(
    start_date: date | None = None,
    end_date: date | None = None,
    account_id: int | None = None,
    description_contains: str | None = None,
    min_amount: Decimal | None = None,
    max_amount: Decimal | None = None,
    limit: int | None = Query(default=None, ge=0),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    """Newest transactions first, filtered by the query parameters."""
    criteria = TransactionFilter(
        start_date=start_date,
        end_date=end_date,
        account_id=account_id,
        description_contains=description_contains,
        min_amount=min_amount,
        max_amount=max_amount,
        offset=offset,
    )
    if limit is not None:
        criteria.limit = limit
    return TransactionService(db).list_transactions(criteria)


@router.get("/{transaction_id}", response_model=TransactionWithEntries)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        return service.get_transaction(transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/{transaction_id}", response_model=TransactionWithEntries)
def update_transaction(
    transaction_id: int,
    request: TransactionUpdate,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        return service.update_transaction(transaction_id, request)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except UnsupportedOperationError as e:
        raise HTTPException(status_code=501, detail=e.message)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    service = TransactionService(db)
    try:
        service.delete_transaction(transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except UnsupportedOperationError as e:
        raise HTTPException(status_code=501, detail=e.message)
