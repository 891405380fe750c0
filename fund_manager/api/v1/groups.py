"""/v1/groups - group and member management"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fund_manager.api.v1.schemas import (
    GroupCreateRequest,
    GroupResponse,
    GroupUpdateRequest,
    MemberIn,
    MemberRenameRequest,
    MemberSchema,
    MessageResponse,
    RentStatusRequest,
)
from fund_manager.api.v1.common import domain_errors, load_group, require_member
from fund_manager.api.dependencies import get_current_user_id, get_request_id
from fund_manager.config import settings
from fund_manager.domain.exceptions import AccessDeniedError
from fund_manager.domain.permissions import ensure_owner, ensure_participant, is_owner
from fund_manager.infrastructure.database.models import GroupRecord, MemberRecord
from fund_manager.infrastructure.database.session import get_db
from fund_manager.infrastructure.database.repositories import GroupRepository

router = APIRouter()


def _member_response(db_member: MemberRecord) -> MemberSchema:
    return MemberSchema(
        member_id=db_member.id,
        name=db_member.name,
        user_id=db_member.user_id,
        rent_paid=db_member.rent_paid,
        rent_paid_date=db_member.rent_paid_at.isoformat() if db_member.rent_paid_at else None,
    )


def _group_response(db_group: GroupRecord) -> GroupResponse:
    return GroupResponse(
        group_id=db_group.id,
        group_name=db_group.group_name,
        owner_id=db_group.owner_id,
        monthly_contribution=db_group.monthly_contribution or 0,
        current_month=db_group.current_month,
        members=[_member_response(m) for m in db_group.members],
        created_at=db_group.created_at.isoformat() if db_group.created_at else None,
    )


@router.get("/groups", response_model=List[GroupResponse])
def list_groups(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Groups the caller owns or belongs to"""
    return [_group_response(g) for g in GroupRepository(db).list_groups_for_user(user_id)]


@router.post("/groups", response_model=GroupResponse, status_code=201)
def create_group(
    request_body: GroupCreateRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create a group owned by the caller.

    The owner is added as the first member unless one of the listed
    members is already linked to the caller's user id.
    """
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        members = [{"name": m.name, "user_id": m.user_id} for m in request_body.members]
        if not any(m["user_id"] == user_id for m in members):
            members.insert(0, {"name": request_body.owner_name or "Me", "user_id": user_id})

        monthly_contribution = request_body.monthly_contribution
        if monthly_contribution is None:
            monthly_contribution = settings.default_monthly_contribution

        db_group = GroupRepository(db).create_group(
            group_name=request_body.group_name,
            owner_id=user_id,
            monthly_contribution=monthly_contribution,
            members=members,
        )
        db.commit()

        logging.info(
            "Group created",
            extra={"request_id": request_id, "group_id": db_group.id, "member_count": len(members)},
        )
        return _group_response(db_group)


@router.get("/groups/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_participant(group, user_id)
        return _group_response(db_group)


@router.put("/groups/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: str,
    request_body: GroupUpdateRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Rename the group or change its monthly contribution (owner only)"""
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "update group")

        GroupRepository(db).update_group(
            db_group,
            group_name=request_body.group_name,
            monthly_contribution=request_body.monthly_contribution,
        )
        db.commit()
        return _group_response(db_group)


@router.delete("/groups/{group_id}", response_model=MessageResponse)
def delete_group(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete the group together with its whole ledger (owner only)"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "delete group")

        GroupRepository(db).delete_group(db_group)
        db.commit()

        logging.info("Group deleted", extra={"request_id": request_id, "group_id": group_id})
        return MessageResponse(message="Group deleted successfully", id=group_id)


@router.post("/groups/{group_id}/members", response_model=MemberSchema, status_code=201)
def add_member(
    group_id: str,
    request_body: MemberIn,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "add members")

        db_member = GroupRepository(db).add_member(db_group, request_body.name, request_body.user_id)
        db.commit()
        return _member_response(db_member)


@router.put("/groups/{group_id}/members/{member_id}", response_model=MemberSchema)
def rename_member(
    group_id: str,
    member_id: str,
    request_body: MemberRenameRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Change a member's display name; ledger entries keep pointing at the same id"""
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "rename members")
        require_member(group, member_id)

        repo = GroupRepository(db)
        db_member = repo.rename_member(repo.get_member(group_id, member_id), request_body.name)
        db.commit()
        return _member_response(db_member)


@router.delete("/groups/{group_id}/members/{member_id}", response_model=MessageResponse)
def remove_member(
    group_id: str,
    member_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove a member; entries recorded against them stay in the ledger"""
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "remove members")
        require_member(group, member_id)

        repo = GroupRepository(db)
        repo.remove_member(db_group, repo.get_member(group_id, member_id))
        db.commit()
        return MessageResponse(message="Member removed successfully", id=member_id)


@router.put("/groups/{group_id}/members/{member_id}/rent", response_model=MemberSchema)
def set_rent_status(
    group_id: str,
    member_id: str,
    request_body: RentStatusRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Mark rent paid/unpaid; allowed for the owner or the member themself"""
    with domain_errors(db, get_request_id(request)):
        _, group = load_group(db, group_id)
        require_member(group, member_id)

        is_self = any(m.member_id == member_id and m.user_id == user_id for m in group.members)
        if not (is_self or is_owner(group, user_id)):
            raise AccessDeniedError("Access denied")

        repo = GroupRepository(db)
        db_member = repo.set_rent_paid(repo.get_member(group_id, member_id), request_body.rent_paid)
        db.commit()
        return _member_response(db_member)


@router.post("/groups/{group_id}/reset-rent", response_model=MessageResponse)
def reset_rent(
    group_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        db_group, group = load_group(db, group_id)
        ensure_owner(group, user_id, "reset rent")

        GroupRepository(db).reset_rent(db_group)
        db.commit()
        return MessageResponse(message="Rent status reset for new month", id=group_id)
