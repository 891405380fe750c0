"""Prometheus metrics for ledger activity, balance reports and request latency"""

from prometheus_client import Counter, Histogram

# Ledger metrics
ledger_entry_counter = Counter(
    "fund_manager_ledger_entries_total",
    "Ledger entries recorded",
    ["kind"],  # Expense | Payment
)

ledger_reset_counter = Counter(
    "fund_manager_ledger_resets_total",
    "Group balance resets",
)

# Balance report metrics
balance_report_counter = Counter(
    "fund_manager_balance_reports_total",
    "Balance reports computed",
)

settlement_transfers_histogram = Histogram(
    "fund_manager_settlement_transfers",
    "Suggested transfers per balance report",
    buckets=[0, 1, 2, 3, 5, 8, 13, 21],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_entry(kind: str) -> None:
    ledger_entry_counter.labels(kind=kind).inc()


def record_balance_report(settlement_count: int) -> None:
    """Record one computed report and the size of its settlement plan"""
    balance_report_counter.inc()
    settlement_transfers_histogram.observe(settlement_count)
