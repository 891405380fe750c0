"""SQLAlchemy ORM models for groups, members, ledger entries and personal transactions"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, Date, Integer, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    # Microsecond resolution; rows created in the same second still sort by insertion
    return datetime.now(timezone.utc)


class GroupRecord(Base):
    """Shared-expense group owned by one user"""

    __tablename__ = "expense_group"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_name = Column(Text, nullable=False)
    owner_id = Column(Text, nullable=False, index=True)
    monthly_contribution = Column(BigInteger, nullable=False, default=0)
    current_month = Column(String(7), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    members = relationship(
        "MemberRecord",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="MemberRecord.position",
    )
    entries = relationship("LedgerEntryRecord", back_populates="group", cascade="all, delete-orphan")


class MemberRecord(Base):
    """Group member; balances are derived from the ledger, never stored"""

    __tablename__ = "group_member"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("expense_group.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    user_id = Column(Text, nullable=True, index=True)
    position = Column(Integer, nullable=False, default=0)
    rent_paid = Column(Boolean, nullable=False, default=False)
    rent_paid_at = Column(DateTime(timezone=True), nullable=True)

    group = relationship("GroupRecord", back_populates="members")


class LedgerEntryRecord(Base):
    """Expense or payment recorded against a group"""

    __tablename__ = "ledger_entry"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("expense_group.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    paid_by = Column(String(36), nullable=False)
    split_between = Column(JSON, nullable=False)  # ordered list of member ids
    kind = Column(Text, nullable=False)
    entry_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    group = relationship("GroupRecord", back_populates="entries")


class PersonalTransactionRecord(Base):
    """Income or expense in a user's personal tracker"""

    __tablename__ = "personal_transaction"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    type = Column(Text, nullable=False)
    transaction_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
