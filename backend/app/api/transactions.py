# backend/app/api/transactions.py
import csv
import logging
from io import StringIO
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from backend.app.db import get_db
from backend.app.errors import MalformedMonth, StorageError
from backend.app.repositories.transaction_repository import TransactionRepository
from backend.app.schemas import (
    MonthTotals,
    MonthTrendPoint,
    SummaryAmount,
    TransactionCreate,
    TransactionOut,
    TransactionType,
)
from backend.app.storage.transaction_store import SqlTransactionStore
from backend.app.utils.months import month_bounds, months_ending

router = APIRouter()
logger = logging.getLogger(__name__)

# ids are signed 64-bit in the database
MIN_ID, MAX_ID = -(2**63), 2**63 - 1


def get_repository(db: Session = Depends(get_db)) -> TransactionRepository:
    return TransactionRepository(SqlTransactionStore(db))


def _bounds_or_400(month: str):
    try:
        return month_bounds(month)
    except MalformedMonth as e:
        logger.warning("Rejected month parameter %r", month)
        raise HTTPException(status_code=400, detail=str(e))


def _storage_failure(e: StorageError) -> HTTPException:
    return HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=List[TransactionOut])
def list_transactions(
    month: str = Query(..., description="Calendar month as YYYY-MM"),
    repo: TransactionRepository = Depends(get_repository),
):
    """
    Return every transaction dated within the month, first day to last day inclusive.
    """
    start, end = _bounds_or_400(month)
    logger.info("Listing transactions for %s (%s..%s)", month, start, end)
    try:
        return repo.list_between(start, end)
    except StorageError as e:
        raise _storage_failure(e)


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate, repo: TransactionRepository = Depends(get_repository)):
    try:
        created = repo.create(payload)
    except StorageError as e:
        raise _storage_failure(e)
    logger.info("Created transaction %s (%s %s %s)", created.id, created.type, created.category, created.amount)
    return created


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    repo: TransactionRepository = Depends(get_repository),
):
    try:
        if not repo.exists(transaction_id):
            logger.warning("Delete requested for missing transaction %s", transaction_id)
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        repo.delete(transaction_id)
    except StorageError as e:
        raise _storage_failure(e)
    logger.info("Deleted transaction %s", transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/summary", response_model=Dict[str, SummaryAmount])
def monthly_summary(
    month: str = Query(..., description="Calendar month as YYYY-MM"),
    repo: TransactionRepository = Depends(get_repository),
):
    """
    Expense totals per category for the month.

    Categories that only have income in the month are still listed, with 0.
    """
    start, end = _bounds_or_400(month)
    try:
        return repo.expenses_by_category(start, end)
    except StorageError as e:
        raise _storage_failure(e)


@router.get("/totals", response_model=MonthTotals)
def monthly_totals(
    month: str = Query(..., description="Calendar month as YYYY-MM"),
    repo: TransactionRepository = Depends(get_repository),
):
    """
    Income, expense and balance (income - expense) for the month.
    """
    start, end = _bounds_or_400(month)
    try:
        by_type = repo.totals_between(start, end)
    except StorageError as e:
        raise _storage_failure(e)
    income = by_type[TransactionType.INCOME.value]
    expense = by_type[TransactionType.EXPENSE.value]
    return MonthTotals(income=income, expense=expense, balance=income - expense)


@router.get("/summary/download")
def download_summary(
    month: str = Query(..., description="Calendar month as YYYY-MM"),
    repo: TransactionRepository = Depends(get_repository),
):
    """
    Download the month's category summary as CSV.
    """
    start, end = _bounds_or_400(month)
    try:
        breakdown = repo.expenses_by_category(start, end)
    except StorageError as e:
        raise _storage_failure(e)

    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["Category", "Total Spent"])
    for cat, total in breakdown.items():
        writer.writerow([cat, str(total)])

    output.seek(0)
    return StreamingResponse(
        output,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=summary_{month}.csv"},
    )


@router.get("/trend", response_model=List[MonthTrendPoint])
def monthly_trend(
    month: str = Query(..., description="Last month of the window, YYYY-MM"),
    months: int = Query(6, ge=1, le=24, description="Number of months in the window"),
    repo: TransactionRepository = Depends(get_repository),
):
    """
    Income, expense and balance for each of the ``months`` months ending at ``month``, oldest first.
    """
    _bounds_or_400(month)
    points = []
    try:
        for label in months_ending(month, months):
            start, end = month_bounds(label)
            by_type = repo.totals_between(start, end)
            income = by_type[TransactionType.INCOME.value]
            expense = by_type[TransactionType.EXPENSE.value]
            points.append(MonthTrendPoint(month=label, income=income, expense=expense, balance=income - expense))
    except StorageError as e:
        raise _storage_failure(e)
    return points
