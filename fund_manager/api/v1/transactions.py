"""/v1/transactions - personal income and expense tracking"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from fund_manager.api.v1.schemas import (
    MessageResponse,
    TransactionRequest,
    TransactionSchema,
    TransactionSummaryResponse,
)
from fund_manager.api.v1.common import domain_errors
from fund_manager.api.dependencies import get_current_user_id, get_request_id
from fund_manager.domain.exceptions import TransactionNotFoundError
from fund_manager.domain.transactions import (
    PersonalTransaction,
    summarize_transactions,
    validate_transaction_fields,
)
from fund_manager.infrastructure.database.session import get_db
from fund_manager.infrastructure.database.repositories import TransactionRepository, to_domain_transaction

router = APIRouter()


def _transaction_schema(txn: PersonalTransaction) -> TransactionSchema:
    return TransactionSchema(
        transaction_id=txn.transaction_id,
        title=txn.title,
        amount=txn.amount,
        type=txn.type,
        transaction_date=txn.date,
    )


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    records = TransactionRepository(db).list_transactions(user_id)
    return [_transaction_schema(to_domain_transaction(r)) for r in records]


@router.get("/transactions/summary", response_model=TransactionSummaryResponse)
def get_summary(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Total income, total expenses and what remains"""
    records = TransactionRepository(db).list_transactions(user_id)
    summary = summarize_transactions(to_domain_transaction(r) for r in records)
    return TransactionSummaryResponse(
        total_income=summary.total_income,
        total_expenses=summary.total_expenses,
        remaining=summary.remaining,
        count=summary.count,
    )


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
def create_transaction(
    request_body: TransactionRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        validate_transaction_fields(request_body.title, request_body.amount)

        db_txn = TransactionRepository(db).create_transaction(
            user_id=user_id,
            title=request_body.title,
            amount=request_body.amount,
            type=request_body.type,
        )
        db.commit()

        logging.info(
            "Transaction added",
            extra={"request_id": request_id, "transaction_id": db_txn.id, "type": request_body.type.value},
        )
        return _transaction_schema(to_domain_transaction(db_txn))


@router.put("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: str,
    request_body: TransactionRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        validate_transaction_fields(request_body.title, request_body.amount)

        repo = TransactionRepository(db)
        db_txn = repo.get_transaction(user_id, transaction_id)
        if db_txn is None:
            raise TransactionNotFoundError("Transaction not found or unauthorized")

        repo.update_transaction(db_txn, request_body.title, request_body.amount, request_body.type)
        db.commit()
        return _transaction_schema(to_domain_transaction(db_txn))


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    with domain_errors(db, get_request_id(request)):
        repo = TransactionRepository(db)
        db_txn = repo.get_transaction(user_id, transaction_id)
        if db_txn is None:
            raise TransactionNotFoundError("Transaction not found or unauthorized")

        repo.delete_transaction(db_txn)
        db.commit()
        return MessageResponse(message=f"Transaction with ID {transaction_id} deleted", id=transaction_id)


@router.delete("/transactions", response_model=MessageResponse)
def clear_transactions(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete every transaction of the caller"""
    request_id = get_request_id(request)

    with domain_errors(db, request_id):
        deleted = TransactionRepository(db).clear_transactions(user_id)
        if deleted == 0:
            raise TransactionNotFoundError("No transactions found to delete")

        db.commit()
        logging.info("Transactions cleared", extra={"request_id": request_id, "deleted": deleted})
        return MessageResponse(message="All transactions cleared successfully")
