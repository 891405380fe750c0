"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from fund_manager.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_balance_report(
    request_id: str,
    group_id: str,
    member_count: int,
    entry_count: int,
    settlement_count: int,
    duration_ms: float,
) -> None:
    """Log structured balance computation outcome"""
    logging.info(
        "Balance report computed",
        extra={
            "request_id": request_id,
            "group_id": group_id,
            "step": "balance_report",
            "member_count": member_count,
            "entry_count": entry_count,
            "settlement_count": settlement_count,
            "duration_ms": duration_ms,
        },
    )


def log_entry_recorded(request_id: str, group_id: str, entry_id: str, kind: str, amount: int) -> None:
    """Log a ledger entry accepted into a group"""
    logging.info(
        "Ledger entry recorded",
        extra={
            "request_id": request_id,
            "group_id": group_id,
            "entry_id": entry_id,
            "step": "entry_recorded",
            "kind": kind,
            "amount": amount,
        },
    )
