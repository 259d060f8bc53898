"""
Pydantic schemas for financial reports.

Every report is built the same way: start from an empty
(zero) report, fold accounts into it one at a time with
add_account() / add_entry(), and let each fold keep the
derived totals up to date. Reports are never persisted.

add_account() accepts anything shaped like an Account:
an id, code, name, account_type and normal_balance().
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType
from bookkeeping.money import ZERO


# --- Trial Balance ---

class TrialBalanceEntry(BaseModel):
    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    debit_balance: Decimal
    credit_balance: Decimal

    @classmethod
    def from_totals(
        cls,
        account_id: int,
        account_code: str,
        account_name: str,
        account_type: AccountType,
        total_debits: Decimal,
        total_credits: Decimal,
    ) -> "TrialBalanceEntry":
        """
        Place an account's net position in a single column.

        A net debit goes in the debit column, a net credit in
        the credit column; the other column is zero.
        """
        net = total_debits - total_credits
        if net >= ZERO:
            debit_balance, credit_balance = net, ZERO
        else:
            debit_balance, credit_balance = ZERO, -net
        return cls(
            account_id=account_id,
            account_code=account_code,
            account_name=account_name,
            account_type=account_type,
            debit_balance=debit_balance,
            credit_balance=credit_balance,
        )


class TrialBalance(BaseModel):
    entries: list[TrialBalanceEntry] = Field(default_factory=list)
    total_debits: Decimal = ZERO
    total_credits: Decimal = ZERO
    is_balanced: bool = True

    def add_entry(self, entry: TrialBalanceEntry) -> None:
        self.total_debits += entry.debit_balance
        self.total_credits += entry.credit_balance
        self.entries.append(entry)
        self.is_balanced = self.total_debits == self.total_credits

    def sort_by_code(self) -> None:
        self.entries.sort(key=lambda e: e.account_code)

    def sort_by_type_and_code(self) -> None:
        self.entries.sort(
            key=lambda e: (e.account_type.sort_order, e.account_code)
        )


# --- Account Summary ---

class AccountSummary(BaseModel):
    """Totals per account type, in each type's natural sign."""
    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO
    total_equity: Decimal = ZERO
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_income: Decimal = ZERO

    def add_account(self, account) -> None:
        balance = abs(account.normal_balance())
        if account.account_type == AccountType.ASSET:
            self.total_assets += balance
        elif account.account_type == AccountType.LIABILITY:
            self.total_liabilities += balance
        elif account.account_type == AccountType.EQUITY:
            self.total_equity += balance
        elif account.account_type == AccountType.REVENUE:
            self.total_revenue += balance
        elif account.account_type == AccountType.EXPENSE:
            self.total_expenses += balance

        self.net_income = self.total_revenue - self.total_expenses

    def is_balanced(self) -> bool:
        """Assets = Liabilities + Equity + Net Income."""
        return self.total_assets == (
            self.total_liabilities + self.total_equity + self.net_income
        )


# --- Balance Sheet ---

class BalanceSheetAccount(BaseModel):
    id: int
    code: str
    name: str
    balance: Decimal


class BalanceSheetSection(BaseModel):
    accounts: list[BalanceSheetAccount] = Field(default_factory=list)
    total: Decimal = ZERO

    def add(self, line: BalanceSheetAccount) -> None:
        self.total += line.balance
        self.accounts.append(line)


class BalanceSheet(BaseModel):
    assets: BalanceSheetSection = Field(default_factory=BalanceSheetSection)
    liabilities: BalanceSheetSection = Field(
        default_factory=BalanceSheetSection
    )
    equity: BalanceSheetSection = Field(default_factory=BalanceSheetSection)
    total_assets: Decimal = ZERO
    total_liabilities_and_equity: Decimal = ZERO
    is_balanced: bool = True

    def add_account(self, account) -> None:
        line = BalanceSheetAccount(
            id=account.id,
            code=account.code,
            name=account.name,
            balance=abs(account.normal_balance()),
        )
        if account.account_type == AccountType.ASSET:
            self.assets.add(line)
        elif account.account_type == AccountType.LIABILITY:
            self.liabilities.add(line)
        elif account.account_type == AccountType.EQUITY:
            self.equity.add(line)
        # Revenue and expense accounts are not balance sheet items

        self.total_assets = self.assets.total
        self.total_liabilities_and_equity = (
            self.liabilities.total + self.equity.total
        )
        self.is_balanced = (
            self.total_assets == self.total_liabilities_and_equity
        )


# --- Income Statement ---

class IncomeStatementAccount(BaseModel):
    id: int
    code: str
    name: str
    amount: Decimal


class IncomeStatementSection(BaseModel):
    accounts: list[IncomeStatementAccount] = Field(default_factory=list)
    total: Decimal = ZERO

    def add(self, line: IncomeStatementAccount) -> None:
        self.total += line.amount
        self.accounts.append(line)


class IncomeStatement(BaseModel):
    revenue: IncomeStatementSection = Field(
        default_factory=IncomeStatementSection
    )
    expenses: IncomeStatementSection = Field(
        default_factory=IncomeStatementSection
    )
    gross_profit: Decimal = ZERO
    net_income: Decimal = ZERO

    def add_account(self, account) -> None:
        line = IncomeStatementAccount(
            id=account.id,
            code=account.code,
            name=account.name,
            amount=abs(account.normal_balance()),
        )
        if account.account_type == AccountType.REVENUE:
            self.revenue.add(line)
        elif account.account_type == AccountType.EXPENSE:
            self.expenses.add(line)

        self.gross_profit = self.revenue.total
        self.net_income = self.revenue.total - self.expenses.total
