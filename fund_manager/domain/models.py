"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from fractions import Fraction
from typing import List, Optional, Tuple


class EntryKind(str, Enum):
    """What a ledger entry records"""

    EXPENSE = "Expense"
    PAYMENT = "Payment"

    @classmethod
    def _missing_(cls, value):
        # Older clients send "Common" for shared expenses
        if value == "Common":
            return cls.EXPENSE
        return None


@dataclass(frozen=True)
class Member:
    """Group member; identity is member_id, name is display only"""

    member_id: str
    name: str
    total_paid: int = 0  # baseline, normally 0
    balance: float = 0
    user_id: Optional[str] = None
    rent_paid: bool = False


@dataclass(frozen=True)
class LedgerEntry:
    """One expense or payment affecting group balances"""

    entry_id: str
    group_id: str
    title: str
    amount: int
    paid_by: str  # member_id
    split_between: Tuple[str, ...]  # member_ids, ordered, no duplicates
    kind: EntryKind
    date: date


@dataclass(frozen=True)
class Group:
    """Group of members sharing a ledger"""

    group_id: str
    group_name: str
    owner_id: str
    monthly_contribution: int = 0
    members: Tuple[Member, ...] = ()


@dataclass
class MemberBalance:
    """Derived net position of one member"""

    member_id: str
    name: str
    total_paid: int
    balance: float  # positive: owed money, negative: owes money
    exact_balance: Optional[Fraction] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class Transfer:
    """Suggested payment from a debtor to a creditor"""

    from_member: str
    to_member: str
    amount: int


@dataclass
class BalanceReport:
    """Output of a balance request"""

    balances: List[MemberBalance]
    settlements: List[Transfer]
    total_expenses: int
    total_members: int
    monthly_contribution: int = 0
