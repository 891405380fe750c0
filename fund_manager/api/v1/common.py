"""Shared helpers for v1 routers: group loading and domain error translation"""

import logging
from contextlib import contextmanager
from typing import Iterator, Tuple
from fastapi import HTTPException
from sqlalchemy.orm import Session

from fund_manager.domain.exceptions import (
    AccessDeniedError,
    DomainException,
    EntryNotFoundError,
    GroupNotFoundError,
    MemberNotFoundError,
    TransactionNotFoundError,
    ValidationError,
)
from fund_manager.domain.models import Group
from fund_manager.infrastructure.database.models import GroupRecord
from fund_manager.infrastructure.database.repositories import GroupRepository, to_domain_group

_STATUS_BY_ERROR = (
    (ValidationError, 422),
    (AccessDeniedError, 403),
    (GroupNotFoundError, 404),
    (MemberNotFoundError, 404),
    (EntryNotFoundError, 404),
    (TransactionNotFoundError, 404),
)


@contextmanager
def domain_errors(db: Session, request_id: str) -> Iterator[None]:
    """
    Roll back and translate failures into HTTP errors.

    Domain exceptions map to 4xx; anything else becomes a logged 500.
    """
    try:
        yield
    except HTTPException:
        db.rollback()
        raise
    except DomainException as e:
        db.rollback()
        status_code = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        logging.warning(f"Request rejected: {e}", extra={"request_id": request_id, "status_code": status_code})
        raise HTTPException(status_code=status_code, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


def load_group(db: Session, group_id: str) -> Tuple[GroupRecord, Group]:
    """Fetch a group as both ORM record and domain snapshot"""
    db_group = GroupRepository(db).get_group(group_id)
    if db_group is None:
        raise GroupNotFoundError("Group not found")
    return db_group, to_domain_group(db_group)


def require_member(group: Group, member_id: str) -> None:
    if not any(m.member_id == member_id for m in group.members):
        raise MemberNotFoundError(f"Member {member_id} not found in group")
