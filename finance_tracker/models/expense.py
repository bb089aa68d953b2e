"""
Core Data Models for Finance Tracker

These models define the schemas for everything the tracker stores or
derives. They are designed to:
1. Enforce the account invariants at construction time
2. Serialize to the exact JSON layout the snapshot has always used
3. Keep derived figures separate from the stored state

DESIGN DECISION: AccountState is the single source of truth and the only
thing persisted. DerivedMetrics, DateGroup and CategoryTotal are recomputed
from it after every mutation and never stored.
"""

import datetime as dt
import math
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


DEFAULT_CATEGORY = "Others"

# Survival days when nothing has been spent yet: the funds never run out.
UNBOUNDED = math.inf


# =============================================================================
# STORED STATE
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single recorded expense.

    Records are immutable; editing an amount produces a new record with
    the same id, category and date (see ExpenseStore.update_amount).
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation-time derived identifier, unique and increasing"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount spent"
    )
    category: str = Field(
        default=DEFAULT_CATEGORY,
        min_length=1,
        description="Free-text category label"
    )
    date: dt.date = Field(
        ...,
        description="Calendar day the expense was recorded on"
    )

    @field_validator('category', mode='before')
    @classmethod
    def blank_category_is_default(cls, v):
        """Stored snapshots may carry blank labels; they read as the default."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_CATEGORY
        return v


class AccountState(BaseModel):
    """
    Everything the tracker knows about the account.

    Serialized with the camelCase keys of the stored snapshot:
    totalBalance, totalSavings, expenses, startDate.

    No invariant ties savings to balance: savings may exceed the balance,
    in which case the available balance is simply negative.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_balance: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        alias="totalBalance",
    )
    total_savings: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        alias="totalSavings",
    )
    expenses: list[ExpenseRecord] = Field(
        ...,
        description="Expenses in insertion order"
    )
    start_date: dt.datetime = Field(
        ...,
        alias="startDate",
        description="Start of the averaging period"
    )

    @field_validator('start_date')
    @classmethod
    def assume_utc(cls, v: dt.datetime) -> dt.datetime:
        """Timestamps without an offset are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=dt.timezone.utc)
        return v

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'AccountState':
        seen = set()
        for record in self.expenses:
            if record.id in seen:
                raise ValueError(f"Duplicate expense id: {record.id}")
            seen.add(record.id)
        return self

    @classmethod
    def fresh(cls, now: dt.datetime) -> 'AccountState':
        """Default state for a first run: nothing recorded, period starts now."""
        return cls(
            total_balance=0.0,
            total_savings=0.0,
            expenses=[],
            start_date=now,
        )

    def with_balance(
        self,
        total_balance: float,
        total_savings: float,
        now: dt.datetime,
    ) -> 'AccountState':
        """Replace balance and savings, restarting the averaging period."""
        return AccountState(
            total_balance=total_balance,
            total_savings=total_savings,
            expenses=list(self.expenses),
            start_date=now,
        )

    def with_expenses(self, expenses) -> 'AccountState':
        return AccountState(
            total_balance=self.total_balance,
            total_savings=self.total_savings,
            expenses=list(expenses),
            start_date=self.start_date,
        )


# =============================================================================
# DERIVED VIEWS (never persisted)
# =============================================================================

class DerivedMetrics(BaseModel):
    """Summary figures for the dashboard."""
    model_config = ConfigDict(frozen=True)

    total_balance: float
    total_savings: float
    total_expense: float
    available_balance: float = Field(
        ...,
        description="Balance minus savings minus expenses; negative on overspend"
    )
    elapsed_days: int = Field(..., ge=1)
    avg_daily_expense: float = Field(..., ge=0)
    survival_days: float = Field(
        ...,
        description="Days until the available balance runs out, UNBOUNDED if never"
    )

    @property
    def survival_unbounded(self) -> bool:
        return math.isinf(self.survival_days)

    @property
    def overspent(self) -> bool:
        return self.available_balance < 0


class DateGroup(BaseModel):
    """All expenses recorded on one calendar day."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    subtotal: float
    records: list[ExpenseRecord]
    over_budget: bool = Field(
        ...,
        description="Subtotal exceeds the average daily expense"
    )


class CategoryTotal(BaseModel):
    """Spending for one category, as fed to the breakdown chart."""
    model_config = ConfigDict(frozen=True)

    category: str
    total: float
    share: float = Field(
        ...,
        ge=0,
        le=100,
        description="Percentage of total expense, one decimal"
    )


class DashboardView(BaseModel):
    """
    Everything a renderer needs after a mutation.

    Built by TrackerSession.view(); handed to subscribers.
    """
    model_config = ConfigDict(frozen=True)

    state: AccountState
    metrics: DerivedMetrics
    groups: list[DateGroup] = Field(default_factory=list)
    categories: list[CategoryTotal] = Field(default_factory=list)

    def find_expense(self, expense_id: int) -> Optional[ExpenseRecord]:
        for record in self.state.expenses:
            if record.id == expense_id:
                return record
        return None
