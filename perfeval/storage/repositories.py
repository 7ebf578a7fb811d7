"""Query functions for employees, evaluations and dashboard aggregates."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from perfeval.engine.scoring import RATING_FIELDS
from perfeval.exceptions import EmployeeNotFoundError
from perfeval.models import Employee, Evaluation

logger = logging.getLogger(__name__)

employees = Employee.__table__
evaluations = Evaluation.__table__


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an insert or delete statement."""

    last_insert_id: int | None
    rows_affected: int


def _evaluation_with_employee(*employee_columns: str):
    """SELECT evaluations.* plus employee_<col> columns via LEFT JOIN."""
    joined = [
        employees.c[name].label(f"employee_{name}") for name in employee_columns
    ]
    return select(evaluations, *joined).select_from(
        evaluations.outerjoin(employees, evaluations.c.employee_id == employees.c.id)
    )


async def _fetch_all(db: AsyncConnection, stmt) -> list[dict[str, Any]]:
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def _fetch_one(db: AsyncConnection, stmt) -> dict[str, Any] | None:
    result = await db.execute(stmt)
    row = result.mappings().first()
    return dict(row) if row is not None else None


# Employees


async def list_employees(db: AsyncConnection) -> list[dict[str, Any]]:
    """All employees ordered by name."""
    return await _fetch_all(
        db, select(employees).order_by(employees.c.name.asc(), employees.c.id.asc())
    )


async def get_employee_by_id(db: AsyncConnection, employee_id: int) -> dict[str, Any] | None:
    return await _fetch_one(db, select(employees).where(employees.c.id == employee_id))


async def insert_employee(
    db: AsyncConnection,
    *,
    name: str,
    role: str,
    department: str,
    email: str,
    admission_date: str,
    photo: str | None = None,
) -> MutationResult:
    """Insert employee; created_at is assigned by the database."""
    result = await db.execute(
        insert(employees).values(
            name=name,
            role=role,
            department=department,
            email=email,
            admission_date=admission_date,
            photo=photo,
        )
    )
    employee_id = result.inserted_primary_key[0]
    logger.info("Inserted employee %s", employee_id)
    return MutationResult(last_insert_id=employee_id, rows_affected=result.rowcount)


async def delete_employee(db: AsyncConnection, employee_id: int) -> MutationResult:
    result = await db.execute(delete(employees).where(employees.c.id == employee_id))
    return MutationResult(last_insert_id=None, rows_affected=result.rowcount)


# Evaluations


async def list_evaluations(db: AsyncConnection) -> list[dict[str, Any]]:
    """All evaluations, newest first, with employee name/role/department."""
    stmt = _evaluation_with_employee("name", "role", "department").order_by(
        evaluations.c.created_at.desc(), evaluations.c.id.desc()
    )
    return await _fetch_all(db, stmt)


async def get_evaluation_by_id(
    db: AsyncConnection, evaluation_id: int
) -> dict[str, Any] | None:
    stmt = _evaluation_with_employee("name", "role", "department").where(
        evaluations.c.id == evaluation_id
    )
    return await _fetch_one(db, stmt)


async def insert_evaluation(
    db: AsyncConnection,
    *,
    employee_id: int,
    period: str,
    ratings: Mapping[str, int],
    final_score: float,
    strengths: str | None = None,
    improvements: str | None = None,
    development_plan: str | None = None,
) -> MutationResult:
    """
    Insert an evaluation for an existing employee.
    Raises EmployeeNotFoundError (nothing written) if the employee is unknown.
    """
    if await get_employee_by_id(db, employee_id) is None:
        raise EmployeeNotFoundError(employee_id)

    result = await db.execute(
        insert(evaluations).values(
            employee_id=employee_id,
            period=period,
            final_score=final_score,
            strengths=strengths,
            improvements=improvements,
            development_plan=development_plan,
            **{field: ratings[field] for field in RATING_FIELDS},
        )
    )
    evaluation_id = result.inserted_primary_key[0]
    logger.info(
        "Inserted evaluation %s for employee %s (score %.2f)",
        evaluation_id,
        employee_id,
        final_score,
    )
    return MutationResult(last_insert_id=evaluation_id, rows_affected=result.rowcount)


async def delete_evaluation(db: AsyncConnection, evaluation_id: int) -> MutationResult:
    result = await db.execute(delete(evaluations).where(evaluations.c.id == evaluation_id))
    return MutationResult(last_insert_id=None, rows_affected=result.rowcount)


async def delete_evaluations_for_employee(
    db: AsyncConnection, employee_id: int
) -> MutationResult:
    """Remove every evaluation of an employee (employee delete cascade)."""
    result = await db.execute(
        delete(evaluations).where(evaluations.c.employee_id == employee_id)
    )
    return MutationResult(last_insert_id=None, rows_affected=result.rowcount)


# Dashboard aggregates


async def count_employees(db: AsyncConnection) -> int:
    result = await db.execute(select(func.count()).select_from(employees))
    return result.scalar_one()


async def count_evaluations(db: AsyncConnection) -> int:
    result = await db.execute(select(func.count()).select_from(evaluations))
    return result.scalar_one()


async def average_final_score(db: AsyncConnection) -> float | None:
    """Mean final score, None when there are no evaluations."""
    result = await db.execute(select(func.avg(evaluations.c.final_score)))
    avg = result.scalar_one()
    return float(avg) if avg is not None else None


async def evaluated_employee_ids(db: AsyncConnection) -> set[int]:
    result = await db.execute(select(evaluations.c.employee_id).distinct())
    return set(result.scalars().all())


async def recent_evaluations(db: AsyncConnection, limit: int = 5) -> list[dict[str, Any]]:
    """Latest evaluations by creation time, with employee name/role."""
    stmt = (
        _evaluation_with_employee("name", "role")
        .order_by(evaluations.c.created_at.desc(), evaluations.c.id.desc())
        .limit(limit)
    )
    return await _fetch_all(db, stmt)
