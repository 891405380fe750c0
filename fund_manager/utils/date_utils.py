"""Date manipulation utilities"""

from datetime import date
from typing import Optional


def month_key(day: Optional[date] = None) -> str:
    """Calendar month as YYYY-MM (defaults to today)"""
    return (day or date.today()).strftime("%Y-%m")
