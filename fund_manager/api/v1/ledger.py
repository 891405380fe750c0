"""/v1/groups/{group_id} ledger endpoints - expenses, payments and balances"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fund_manager.api.v1.schemas import (
    AddMoneyRequest,
    BalanceReportResponse,
    BalanceRow,
    ExpenseCreateRequest,
    LedgerEntrySchema,
    MessageResponse,
    PaymentRequest,
    TransferSchema,
)
from fund_manager.api.v1.common import domain_errors, load_group
from fund_manager.api.dependencies import get_current_user_id, get_request_id
from fund_manager.domain.entries import new_contribution, new_expense, new_payment
from fund_manager.domain.exceptions import EntryNotFoundError
from fund_manager.domain.models import Group, LedgerEntry
from fund_manager.domain.permissions import ensure_owner, ensure_participant
from fund_manager.domain.reports import build_balance_report
from fund_manager.infrastructure.database.session import get_db
from fund_manager.infrastructure.database.repositories import LedgerRepository, to_domain_entry
from fund_manager.infrastructure.observability.logging import log_balance_report, log_entry_recorded
from fund_manager.infrastructure.observability.metrics import (
    ledger_reset_counter,
    record_balance_report,
    record_entry,
)

router = APIRouter()


def _display_name(group: Group, member_id: str) -> str:
    """Current name of a member, or the raw id once they have left"""
    return next((m.name for m in group.members if m.member_id == member_id), member_id)


def _entry_schema(entry: LedgerEntry) -> LedgerEntrySchema:
    return LedgerEntrySchema(
        entry_id=entry.entry_id,
        title=entry.title,
        amount=entry.amount,
        paid_by=entry.paid_by,
        split_between=list(entry.split_between),
        type=entry.kind,
        entry_date=entry.date,
    )


def _record(db: Session, entry: LedgerEntry, request_id: str) -> MessageResponse:
    LedgerRepository(db).add_entry(entry)
    db.commit()

    record_entry(entry.kind.value)
    log_entry_recorded(request_id, entry.group_id, entry.entry_id, entry.kind.value, entry.amount)
    return MessageResponse(message=f"{entry.kind.value} recorded successfully", id=entry.entry_id)


@router.get("/groups/{group_id}/expenses", response_model=List[LedgerEntrySchema])
def list_expenses(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Every expense and payment in the group, newest first"""
    with domain_errors(db, get_request_id(request)):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        records = LedgerRepository(db).list_entries(group_id)
        return [_entry_schema(to_domain_entry(r)) for r in records]


@router.post("/groups/{group_id}/expenses", response_model=MessageResponse, status_code=201)
def add_expense(
    group_id: str,
    request_body: ExpenseCreateRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Record a shared expense; without splitBetween it is split across all members"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        entry = new_expense(
            group_id=group_id,
            title=request_body.title,
            amount=request_body.amount,
            paid_by=request_body.paid_by,
            split_between=request_body.split_between,
            member_ids=[m.member_id for m in group.members],
            kind=request_body.type,
        )
        return _record(db, entry, request_id)


@router.delete("/groups/{group_id}/expenses/{entry_id}", response_model=MessageResponse)
def delete_expense(
    group_id: str,
    entry_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        repo = LedgerRepository(db)
        db_entry = repo.get_entry(group_id, entry_id)
        if db_entry is None:
            raise EntryNotFoundError("Expense not found")

        repo.delete_entry(db_entry)
        db.commit()
        return MessageResponse(message="Expense deleted successfully", id=entry_id)


@router.post("/groups/{group_id}/pay", response_model=MessageResponse, status_code=201)
def make_payment(
    group_id: str,
    request_body: PaymentRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Record money handed from one member to another"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        note = request_body.note or (
            f"Payment from {_display_name(group, request_body.from_member)}"
            f" to {_display_name(group, request_body.to_member)}"
        )
        entry = new_payment(
            group_id=group_id,
            from_member=request_body.from_member,
            to_member=request_body.to_member,
            amount=request_body.amount,
            note=note,
        )
        return _record(db, entry, request_id)


@router.post("/groups/{group_id}/add-money", response_model=MessageResponse, status_code=201)
def add_money(
    group_id: str,
    request_body: AddMoneyRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Record a member topping up the group; every member owes an equal share"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        entry = new_contribution(
            group_id=group_id,
            member_id=request_body.member_id,
            amount=request_body.amount,
            member_ids=[m.member_id for m in group.members],
            note=request_body.note or f"{_display_name(group, request_body.member_id)} added money",
        )
        return _record(db, entry, request_id)


@router.get("/groups/{group_id}/balance", response_model=BalanceReportResponse)
def get_balance(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Balance summary for the group.

    Flow:
    1. Load group members and the full ledger
    2. Compute net balances per member
    3. Plan settlement transfers
    4. Return report with display names
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        _, group = load_group(db, group_id)
        ensure_participant(group, user_id)

        entries = [to_domain_entry(r) for r in LedgerRepository(db).list_entries(group_id)]
        report = build_balance_report(group, entries)

        duration_ms = (time.time() - start_time) * 1000
        record_balance_report(len(report.settlements))
        log_balance_report(
            request_id,
            group_id,
            report.total_members,
            len(entries),
            len(report.settlements),
            duration_ms,
        )

        return BalanceReportResponse(
            balances=[
                BalanceRow(member_id=b.member_id, name=b.name, total_paid=b.total_paid, balance=b.balance)
                for b in report.balances
            ],
            settlements=[
                TransferSchema(
                    from_member=_display_name(group, t.from_member),
                    to_member=_display_name(group, t.to_member),
                    from_id=t.from_member,
                    to_id=t.to_member,
                    amount=t.amount,
                )
                for t in report.settlements
            ],
            total_expenses=report.total_expenses,
            total_members=report.total_members,
            monthly_contribution=report.monthly_contribution,
        )


@router.post("/groups/{group_id}/reset-balances", response_model=MessageResponse)
def reset_balances(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Start the group over by deleting every ledger entry (owner only)"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        _, group = load_group(db, group_id)
        ensure_owner(group, user_id, "reset balances")

        deleted = LedgerRepository(db).delete_all(group_id)
        db.commit()

        ledger_reset_counter.inc()
        logging.info(
            "Group balances reset",
            extra={"request_id": request_id, "group_id": group_id, "entries_deleted": deleted},
        )
        return MessageResponse(message="All balances reset successfully", id=group_id)
