"""Factories for expenses, payments and contributions"""

import uuid
from datetime import date
from typing import Optional, Sequence
from fund_manager.domain.models import EntryKind, LedgerEntry
from fund_manager.domain.validation import dedupe_split, validate_entry


def _entry(
    group_id: str,
    title: str,
    amount: int,
    paid_by: str,
    split_between: Sequence[str],
    kind: EntryKind,
    entry_date: Optional[date],
) -> LedgerEntry:
    return validate_entry(
        LedgerEntry(
            entry_id=str(uuid.uuid4()),
            group_id=group_id,
            title=title,
            amount=amount,
            paid_by=paid_by,
            split_between=dedupe_split(split_between),
            kind=kind,
            date=entry_date or date.today(),
        )
    )


def new_expense(
    group_id: str,
    title: str,
    amount: int,
    paid_by: str,
    split_between: Optional[Sequence[str]],
    member_ids: Sequence[str],
    kind: EntryKind = EntryKind.EXPENSE,
    entry_date: Optional[date] = None,
) -> LedgerEntry:
    """
    Shared expense fronted by one member.

    With no explicit split the cost is divided among every current member.
    """
    if split_between is None:
        split_between = member_ids
    return _entry(group_id, title, amount, paid_by, split_between, kind, entry_date)


def new_payment(
    group_id: str,
    from_member: str,
    to_member: str,
    amount: int,
    note: Optional[str] = None,
    entry_date: Optional[date] = None,
) -> LedgerEntry:
    """Point-to-point payment: the receiver is the only split member"""
    title = note or f"Payment from {from_member} to {to_member}"
    return _entry(group_id, title, amount, from_member, [to_member], EntryKind.PAYMENT, entry_date)


def new_contribution(
    group_id: str,
    member_id: str,
    amount: int,
    member_ids: Sequence[str],
    note: Optional[str] = None,
    entry_date: Optional[date] = None,
) -> LedgerEntry:
    """Money added to the group pot, shared by every member"""
    title = note or f"{member_id} added money"
    return _entry(group_id, title, amount, member_id, member_ids, EntryKind.PAYMENT, entry_date)
