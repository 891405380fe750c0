"""Data access layer for groups, ledger entries and personal transactions"""

from datetime import date, datetime, timezone
from typing import List, Optional, Sequence
from sqlalchemy import or_
from sqlalchemy.orm import Session
from fund_manager.infrastructure.database.models import (
    GroupRecord,
    LedgerEntryRecord,
    MemberRecord,
    PersonalTransactionRecord,
)
from fund_manager.domain.models import EntryKind, Group, LedgerEntry, Member
from fund_manager.domain.transactions import PersonalTransaction, TransactionType
from fund_manager.utils.date_utils import month_key


def to_domain_group(record: GroupRecord) -> Group:
    """Map a stored group and its members onto the domain model"""
    return Group(
        group_id=record.id,
        group_name=record.group_name,
        owner_id=record.owner_id,
        monthly_contribution=record.monthly_contribution or 0,
        members=tuple(
            Member(
                member_id=m.id,
                name=m.name,
                user_id=m.user_id,
                rent_paid=m.rent_paid,
            )
            for m in record.members
        ),
    )


def to_domain_entry(record: LedgerEntryRecord) -> LedgerEntry:
    return LedgerEntry(
        entry_id=record.id,
        group_id=record.group_id,
        title=record.title,
        amount=record.amount,
        paid_by=record.paid_by,
        split_between=tuple(record.split_between),
        kind=EntryKind(record.kind),
        date=record.entry_date,
    )


def to_domain_transaction(record: PersonalTransactionRecord) -> PersonalTransaction:
    return PersonalTransaction(
        transaction_id=record.id,
        user_id=record.user_id,
        title=record.title,
        amount=record.amount,
        type=TransactionType(record.type),
        date=record.transaction_date,
    )


class GroupRepository:
    """Repository for groups and their members"""

    def __init__(self, db: Session):
        self.db = db

    def create_group(
        self,
        group_name: str,
        owner_id: str,
        monthly_contribution: int,
        members: Sequence[dict],
    ) -> GroupRecord:
        """Persist group with members in the given order"""
        db_group = GroupRecord(
            group_name=group_name,
            owner_id=owner_id,
            monthly_contribution=monthly_contribution,
            current_month=month_key(),
        )
        self.db.add(db_group)
        self.db.flush()  # Get ID without committing

        for position, member in enumerate(members):
            self.db.add(
                MemberRecord(
                    group_id=db_group.id,
                    name=member["name"],
                    user_id=member.get("user_id"),
                    position=position,
                )
            )
        self.db.flush()
        self.db.refresh(db_group)
        return db_group

    def get_group(self, group_id: str) -> Optional[GroupRecord]:
        return self.db.query(GroupRecord).filter(GroupRecord.id == group_id).first()

    def list_groups_for_user(self, user_id: str) -> List[GroupRecord]:
        """Groups the user owns or is linked to as a member"""
        return (
            self.db.query(GroupRecord)
            .outerjoin(MemberRecord, MemberRecord.group_id == GroupRecord.id)
            .filter(or_(GroupRecord.owner_id == user_id, MemberRecord.user_id == user_id))
            .distinct()
            .order_by(GroupRecord.created_at.desc())
            .all()
        )

    def update_group(
        self,
        db_group: GroupRecord,
        group_name: Optional[str] = None,
        monthly_contribution: Optional[int] = None,
    ) -> GroupRecord:
        if group_name:
            db_group.group_name = group_name
        if monthly_contribution is not None:
            db_group.monthly_contribution = monthly_contribution
        self.db.flush()
        return db_group

    def delete_group(self, db_group: GroupRecord) -> None:
        """Delete group; members and ledger entries cascade"""
        self.db.delete(db_group)
        self.db.flush()

    def add_member(self, db_group: GroupRecord, name: str, user_id: Optional[str] = None) -> MemberRecord:
        position = max((m.position for m in db_group.members), default=-1) + 1
        db_member = MemberRecord(group_id=db_group.id, name=name, user_id=user_id, position=position)
        self.db.add(db_member)
        self.db.flush()
        self.db.refresh(db_group)
        return db_member

    def get_member(self, group_id: str, member_id: str) -> Optional[MemberRecord]:
        return (
            self.db.query(MemberRecord)
            .filter(MemberRecord.group_id == group_id, MemberRecord.id == member_id)
            .first()
        )

    def rename_member(self, db_member: MemberRecord, name: str) -> MemberRecord:
        db_member.name = name
        self.db.flush()
        return db_member

    def remove_member(self, db_group: GroupRecord, db_member: MemberRecord) -> None:
        """Remove member; ledger entries that reference it are kept"""
        db_group.members.remove(db_member)
        self.db.flush()

    def set_rent_paid(self, db_member: MemberRecord, rent_paid: bool) -> MemberRecord:
        db_member.rent_paid = rent_paid
        db_member.rent_paid_at = datetime.now(timezone.utc) if rent_paid else None
        self.db.flush()
        return db_member

    def reset_rent(self, db_group: GroupRecord) -> None:
        """Clear every member's rent flag and roll the group to the current month"""
        for db_member in db_group.members:
            db_member.rent_paid = False
            db_member.rent_paid_at = None
        db_group.current_month = month_key()
        self.db.flush()


class LedgerRepository:
    """Repository for group ledger entries"""

    def __init__(self, db: Session):
        self.db = db

    def add_entry(self, entry: LedgerEntry) -> LedgerEntryRecord:
        """Persist a validated ledger entry"""
        db_entry = LedgerEntryRecord(
            id=entry.entry_id,
            group_id=entry.group_id,
            title=entry.title,
            amount=entry.amount,
            paid_by=entry.paid_by,
            split_between=list(entry.split_between),
            kind=entry.kind.value,
            entry_date=entry.date,
        )
        self.db.add(db_entry)
        self.db.flush()
        return db_entry

    def list_entries(self, group_id: str) -> List[LedgerEntryRecord]:
        """Entries for a group, newest first"""
        return (
            self.db.query(LedgerEntryRecord)
            .filter(LedgerEntryRecord.group_id == group_id)
            .order_by(LedgerEntryRecord.entry_date.desc(), LedgerEntryRecord.created_at.desc())
            .all()
        )

    def get_entry(self, group_id: str, entry_id: str) -> Optional[LedgerEntryRecord]:
        return (
            self.db.query(LedgerEntryRecord)
            .filter(LedgerEntryRecord.group_id == group_id, LedgerEntryRecord.id == entry_id)
            .first()
        )

    def delete_entry(self, db_entry: LedgerEntryRecord) -> None:
        self.db.delete(db_entry)
        self.db.flush()

    def delete_all(self, group_id: str) -> int:
        """Bulk delete used by balance reset; returns number of rows removed"""
        deleted = (
            self.db.query(LedgerEntryRecord)
            .filter(LedgerEntryRecord.group_id == group_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted


class TransactionRepository:
    """Repository for personal transactions, always scoped to one user"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        title: str,
        amount: int,
        type: TransactionType,
        transaction_date: Optional[date] = None,
    ) -> PersonalTransactionRecord:
        db_txn = PersonalTransactionRecord(
            user_id=user_id,
            title=title,
            amount=amount,
            type=type.value,
            transaction_date=transaction_date or date.today(),
        )
        self.db.add(db_txn)
        self.db.flush()
        return db_txn

    def list_transactions(self, user_id: str) -> List[PersonalTransactionRecord]:
        return (
            self.db.query(PersonalTransactionRecord)
            .filter(PersonalTransactionRecord.user_id == user_id)
            .order_by(PersonalTransactionRecord.transaction_date.desc(), PersonalTransactionRecord.created_at.desc())
            .all()
        )

    def get_transaction(self, user_id: str, transaction_id: str) -> Optional[PersonalTransactionRecord]:
        return (
            self.db.query(PersonalTransactionRecord)
            .filter(
                PersonalTransactionRecord.user_id == user_id,
                PersonalTransactionRecord.id == transaction_id,
            )
            .first()
        )

    def update_transaction(
        self,
        db_txn: PersonalTransactionRecord,
        title: str,
        amount: int,
        type: TransactionType,
    ) -> PersonalTransactionRecord:
        db_txn.title = title
        db_txn.amount = amount
        db_txn.type = type.value
        self.db.flush()
        return db_txn

    def delete_transaction(self, db_txn: PersonalTransactionRecord) -> None:
        self.db.delete(db_txn)
        self.db.flush()

    def clear_transactions(self, user_id: str) -> int:
        deleted = (
            self.db.query(PersonalTransactionRecord)
            .filter(PersonalTransactionRecord.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted
