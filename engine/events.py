"""
One-off cash events — lump additions and withdrawals applied at the start of a year.

Events are keyed by absolute year across the whole timeline, so a single list
serves both phases:
  Year 5  (accumulation): "Bonus"      +2,00,000
  Year 12 (accumulation): "Car"        -8,00,000
  Year 27 (distribution): "Inheritance" +15,00,000

All events for a year are applied, in list order, before any interest accrues.
If several events share a year, the net signed amount is reported together with
the label and kind of the LAST event applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from core.schema import CashEvent, CashEventKind


@dataclass(frozen=True)
class AppliedCashEvent:
    """Net cash event shown against a yearly record."""
    amount: float  # signed: additions positive, withdrawals negative
    label: str
    kind: CashEventKind


@dataclass(frozen=True)
class YearEventOutcome:
    """Result of applying one year's events to a balance."""
    balance: float
    added: float  # sum of additions only (counts towards invested)
    net_amount: float
    label: Optional[str] = None
    kind: Optional[CashEventKind] = None

    @property
    def applied(self) -> Optional[AppliedCashEvent]:
        if self.net_amount == 0 or self.kind is None:
            return None
        return AppliedCashEvent(amount=self.net_amount, label=self.label or "", kind=self.kind)


def apply_year_events(
    balance: float,
    events: Sequence[CashEvent],
    year: int,
) -> YearEventOutcome:
    """
    Apply every event scheduled for `year`.

    Additions raise the balance. Withdrawals reduce it, floored at zero, but the
    full requested amount still counts against the net figure.
    """
    added = 0.0
    net = 0.0
    label = None
    kind = None

    for event in events:
        if event.year != year:
            continue
        if event.kind == CashEventKind.ADDITION:
            balance += event.amount
            added += event.amount
            net += event.amount
        else:
            balance = max(0.0, balance - event.amount)
            net -= event.amount
        label = event.label
        kind = event.kind

    return YearEventOutcome(balance=balance, added=added, net_amount=net, label=label, kind=kind)


def split_events(
    events: Sequence[CashEvent],
    boundary_year: int,
) -> Tuple[Tuple[CashEvent, ...], Tuple[CashEvent, ...]]:
    """Events at or before `boundary_year` go to accumulation, the rest to distribution."""
    early = tuple(e for e in events if e.year <= boundary_year)
    late = tuple(e for e in events if e.year > boundary_year)
    return early, late
