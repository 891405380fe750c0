"""Ingestion checks for ledger entries"""

from typing import Iterable, Tuple
from fund_manager.domain.exceptions import ValidationError
from fund_manager.domain.models import LedgerEntry

# Largest amount a signed 64-bit column holds
MAX_AMOUNT = 2**63 - 1


def dedupe_split(split_between: Iterable[str]) -> Tuple[str, ...]:
    """Collapse repeated member IDs, keeping first-seen order"""
    return tuple(dict.fromkeys(split_between))


def validate_entry(entry: LedgerEntry) -> LedgerEntry:
    """
    Reject malformed entries before they reach the balance calculator.

    Unknown member references are allowed here; the calculator skips them.

    Raises:
        ValidationError: amount not an integer in 1..MAX_AMOUNT, empty
            title, missing payer or empty split
    """
    if isinstance(entry.amount, bool) or not isinstance(entry.amount, int):
        raise ValidationError("Amount must be an integer number of currency units")
    if entry.amount <= 0:
        raise ValidationError("Amount must be positive")
    if entry.amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large")
    if not entry.title or not entry.title.strip():
        raise ValidationError("Title is required")
    if not entry.paid_by:
        raise ValidationError("Payer is required")
    if not entry.split_between:
        raise ValidationError("Expense must be split between at least one member")

    return entry
