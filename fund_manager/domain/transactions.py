"""Personal income/expense tracking"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable
from fund_manager.domain.exceptions import ValidationError
from fund_manager.domain.validation import MAX_AMOUNT


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSES = "Expenses"


@dataclass
class PersonalTransaction:
    """Single income or expense recorded by one user"""

    transaction_id: str
    user_id: str
    title: str
    amount: int
    type: TransactionType
    date: date


@dataclass
class TransactionSummary:
    total_income: int
    total_expenses: int
    remaining: int
    count: int


def validate_transaction_fields(title: str, amount: int) -> None:
    """Raises ValidationError on a blank title or an amount outside 1..MAX_AMOUNT"""
    if not title or not title.strip():
        raise ValidationError("Title is required")
    if amount <= 0:
        raise ValidationError("Amount must be positive")
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large")


def summarize_transactions(transactions: Iterable[PersonalTransaction]) -> TransactionSummary:
    """Totals of income vs spend; remaining may go negative"""
    total_income = 0
    total_expenses = 0
    count = 0

    for txn in transactions:
        count += 1
        if txn.type == TransactionType.INCOME:
            total_income += txn.amount
        else:
            total_expenses += txn.amount

    return TransactionSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        remaining=total_income - total_expenses,
        count=count,
    )
