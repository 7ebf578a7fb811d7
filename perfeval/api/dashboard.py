"""Dashboard endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncConnection

from perfeval.database import get_db
from perfeval.engine.dashboard import count_pending, round_average
from perfeval.schemas.dashboard import DashboardResponse
from perfeval.storage.repositories import (
    average_final_score,
    count_employees,
    count_evaluations,
    evaluated_employee_ids,
    recent_evaluations,
)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(db: Annotated[AsyncConnection, Depends(get_db)]):
    """Totals, pending count, average score and the five latest evaluations."""
    total_employees = await count_employees(db)
    evaluated = await evaluated_employee_ids(db)
    return DashboardResponse(
        total_employees=total_employees,
        total_evaluations=await count_evaluations(db),
        pending_evaluations=count_pending(total_employees, evaluated),
        average_score=round_average(await average_final_score(db)),
        recent_evaluations=await recent_evaluations(db, limit=5),
    )
