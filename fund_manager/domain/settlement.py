"""Settlement planner - turns net balances into suggested transfers"""

from fractions import Fraction
from math import floor
from typing import List, Mapping, Tuple, Union
from fund_manager.domain.models import MemberBalance, Transfer

HALF = Fraction(1, 2)


def round_currency(amount: Union[float, Fraction]) -> int:
    """Round to the nearest whole currency unit, ties away from zero (50.5 -> 51)"""
    rounded = floor(abs(Fraction(amount)) + HALF)
    return rounded if amount >= 0 else -rounded


def _exact(balance: MemberBalance) -> Fraction:
    if balance.exact_balance is not None:
        return balance.exact_balance
    return Fraction(balance.balance)


def _split_positions(
    balances: Mapping[str, MemberBalance],
) -> Tuple[List[Tuple[str, Fraction]], List[Tuple[str, Fraction]]]:
    """
    Partition into creditors and debtors as (member_id, magnitude) pairs.

    Both lists are ordered largest magnitude first; the sort is stable so
    ties keep the input order.
    """
    positions = [(b.member_id, _exact(b)) for b in balances.values()]
    creditors = [(member_id, value) for member_id, value in positions if value > 0]
    debtors = [(member_id, -value) for member_id, value in positions if value < 0]

    creditors.sort(key=lambda c: c[1], reverse=True)
    debtors.sort(key=lambda d: d[1], reverse=True)
    return creditors, debtors


def plan_settlements(balances: Mapping[str, MemberBalance]) -> List[Transfer]:
    """
    Greedy largest-first matching of debtors to creditors.

    Walks both lists with one cursor each. Every step moves
    min(credit left, debt left) from the current debtor to the current
    creditor and advances whichever side reached zero, so at most
    len(members) - 1 transfers are produced.

    Positions are exact fractions: the ones computed by compute_balances
    when present, otherwise the float balance converted exactly. Amounts
    are rounded with round_currency when emitted; a step that rounds to 0
    is dropped. Residual fractions are not redistributed.

    The input mapping is not modified.
    """
    creditors, debtors = _split_positions(balances)
    transfers: List[Transfer] = []

    i = j = 0
    credit_left = creditors[0][1] if creditors else Fraction(0)
    debt_left = debtors[0][1] if debtors else Fraction(0)

    while i < len(creditors) and j < len(debtors):
        amount = min(credit_left, debt_left)

        rounded = round_currency(amount)
        if rounded > 0:
            transfers.append(
                Transfer(from_member=debtors[j][0], to_member=creditors[i][0], amount=rounded)
            )

        credit_left -= amount
        debt_left -= amount

        if debt_left == 0:
            j += 1
            debt_left = debtors[j][1] if j < len(debtors) else Fraction(0)
        if credit_left == 0:
            i += 1
            credit_left = creditors[i][1] if i < len(creditors) else Fraction(0)

    return transfers
