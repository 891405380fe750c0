"""Balance calculator - derives each member's net position from the ledger"""

from fractions import Fraction
from typing import Dict, Iterable
from fund_manager.domain.models import LedgerEntry, Member, MemberBalance


def compute_balances(
    members: Iterable[Member],
    entries: Iterable[LedgerEntry],
) -> Dict[str, MemberBalance]:
    """
    Build member_id -> MemberBalance from baselines plus every ledger entry.

    For each entry:
    - payer is credited the full amount (total_paid and balance)
    - every split member is debited amount / len(split_between)

    Shares are real-valued and never rounded here; rounding happens only
    when transfers are emitted. Sums are kept as exact fractions so the
    result does not depend on entry order, and converted to float once at
    the end; the exact value is kept on exact_balance for the settlement
    planner. IDs not in `members` are skipped, so a removed member's
    entries affect only the members still present.

    Entries must already be validated (positive amount, non-empty split).
    """
    members = list(members)
    paid: Dict[str, int] = {m.member_id: m.total_paid for m in members}
    net: Dict[str, Fraction] = {m.member_id: Fraction(m.balance) for m in members}

    for entry in entries:
        if entry.paid_by in net:
            paid[entry.paid_by] += entry.amount
            net[entry.paid_by] += entry.amount

        share = Fraction(entry.amount, len(entry.split_between))
        for member_id in entry.split_between:
            if member_id in net:
                net[member_id] -= share

    return {
        m.member_id: MemberBalance(
            member_id=m.member_id,
            name=m.name,
            total_paid=paid[m.member_id],
            balance=float(net[m.member_id]),
            exact_balance=net[m.member_id],
        )
        for m in members
    }
