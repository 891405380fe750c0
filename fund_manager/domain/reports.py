"""Balance report assembly - the entry point used by request handlers"""

from typing import Iterable
from fund_manager.domain.balances import compute_balances
from fund_manager.domain.models import BalanceReport, Group, LedgerEntry
from fund_manager.domain.settlement import plan_settlements


def build_balance_report(group: Group, entries: Iterable[LedgerEntry]) -> BalanceReport:
    """
    Compute balances and settlements for a group.

    total_expenses sums every entry amount, payments included.
    """
    entries = list(entries)
    balances = compute_balances(group.members, entries)
    settlements = plan_settlements(balances)

    return BalanceReport(
        balances=list(balances.values()),
        settlements=settlements,
        total_expenses=sum(e.amount for e in entries),
        total_members=len(group.members),
        monthly_contribution=group.monthly_contribution,
    )
