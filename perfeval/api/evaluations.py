"""Evaluation endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncConnection

from perfeval.api.deps import RowId
from perfeval.database import StoreDep, get_db
from perfeval.engine.scoring import compute_final_score, validate_ratings
from perfeval.exceptions import EmployeeNotFoundError, InvalidRatingError
from perfeval.schemas.employee import MessageResponse
from perfeval.schemas.evaluation import EvaluationCreate, EvaluationRead
from perfeval.storage.repositories import (
    delete_evaluation,
    get_evaluation_by_id,
    insert_evaluation,
    list_evaluations,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/evaluations", response_model=list[EvaluationRead])
async def get_evaluations(db: Annotated[AsyncConnection, Depends(get_db)]):
    """List evaluations, newest first, with employee details."""
    return await list_evaluations(db)


@router.post(
    "/evaluations",
    response_model=EvaluationRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_evaluation(body: EvaluationCreate, store: StoreDep):
    """
    Record an evaluation scorecard.
    final_score is the average of the ten ratings, computed here.
    """
    if not body.employee_id or not body.period:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="employee_id and period are required",
        )
    try:
        ratings = validate_ratings(body.ratings())
    except InvalidRatingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc

    final_score = compute_final_score(ratings)

    try:
        async with store.transaction() as db:
            result = await insert_evaluation(
                db,
                employee_id=body.employee_id,
                period=body.period,
                ratings=ratings,
                final_score=final_score,
                strengths=body.strengths or None,
                improvements=body.improvements or None,
                development_plan=body.development_plan or None,
            )
            evaluation = await get_evaluation_by_id(db, result.last_insert_id)
    except EmployeeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        ) from exc
    return evaluation


@router.get("/evaluations/{evaluation_id}", response_model=EvaluationRead)
async def get_evaluation(
    evaluation_id: RowId,
    db: Annotated[AsyncConnection, Depends(get_db)],
):
    """Get one evaluation by ID."""
    evaluation = await get_evaluation_by_id(db, evaluation_id)
    if not evaluation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Evaluation not found",
        )
    return evaluation


@router.delete("/evaluations/{evaluation_id}", response_model=MessageResponse)
async def remove_evaluation(evaluation_id: RowId, store: StoreDep):
    async with store.transaction() as db:
        result = await delete_evaluation(db, evaluation_id)
        if not result.rows_affected:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Evaluation not found",
            )
    logger.info("Deleted evaluation %s", evaluation_id)
    return MessageResponse(message="Evaluation deleted")
