"""
Financial report endpoints.

Every report is computed from the journal entries on request.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookkeeping.models.base import get_db
from bookkeeping.services.report_service import ReportService
from bookkeeping.schemas.report import (
    AccountSummary,
    BalanceSheet,
    IncomeStatement,
    TrialBalance,
)
from bookkeeping.schemas.transaction import TransactionSummary

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/trial-balance", response_model=TrialBalance)
def get_trial_balance(db: Session = Depends(get_db)):
    """
    Every account's net position in a debit or credit column.

    If the ledger is sound, the two columns total the same.
    """
    return ReportService(db).get_trial_balance()


@router.get("/summary", response_model=AccountSummary)
def get_account_summary(db: Session = Depends(get_db)):
    return ReportService(db).get_account_summary()


@router.get("/balance-sheet", response_model=BalanceSheet)
def get_balance_sheet(db: Session = Depends(get_db)):
    return ReportService(db).get_balance_sheet()


@router.get("/income-statement", response_model=IncomeStatement)
def get_income_statement(db: Session = Depends(get_db)):
    return ReportService(db).get_income_statement()


@router.get("/transaction-summary", response_model=TransactionSummary)
def get_transaction_summary(db: Session = Depends(get_db)):
    return ReportService(db).get_transaction_summary()
