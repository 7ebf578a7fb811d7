"""Tests for the query functions."""

import pytest
from sqlalchemy.exc import IntegrityError

from perfeval.engine.scoring import RATING_FIELDS, compute_final_score
from perfeval.exceptions import EmployeeNotFoundError
from perfeval.storage.repositories import (
    average_final_score,
    count_employees,
    count_evaluations,
    delete_employee,
    delete_evaluation,
    delete_evaluations_for_employee,
    evaluated_employee_ids,
    get_employee_by_id,
    get_evaluation_by_id,
    insert_evaluation,
    list_employees,
    list_evaluations,
    recent_evaluations,
)


def _ratings(value=3):
    return {field: value for field in RATING_FIELDS}


async def _add_evaluation(store, employee_id, value=3, period="Q1/2026"):
    ratings = _ratings(value)
    async with store.transaction() as db:
        result = await insert_evaluation(
            db,
            employee_id=employee_id,
            period=period,
            ratings=ratings,
            final_score=compute_final_score(ratings),
        )
    return result.last_insert_id


@pytest.mark.asyncio
async def test_employees_listed_by_name(store, add_employee):
    await add_employee("Carla Mendes")
    await add_employee("Ana Souza")
    await add_employee("Bruno Lima")
    async with store.connection() as db:
        names = [e["name"] for e in await list_employees(db)]
    assert names == ["Ana Souza", "Bruno Lima", "Carla Mendes"]


@pytest.mark.asyncio
async def test_employee_record_shape(store, add_employee):
    employee_id = await add_employee("Ana Souza", photo="photo-1-2.png")
    async with store.connection() as db:
        employee = await get_employee_by_id(db, employee_id)
        missing = await get_employee_by_id(db, employee_id + 100)
    assert missing is None
    assert employee["id"] == employee_id
    assert employee["photo"] == "photo-1-2.png"
    assert employee["admission_date"] == "2024-02-01"
    assert employee["created_at"]  # assigned by the database


@pytest.mark.asyncio
async def test_insert_evaluation_reports_mutation(store, add_employee):
    employee_id = await add_employee()
    ratings = _ratings(4)
    async with store.transaction() as db:
        result = await insert_evaluation(
            db,
            employee_id=employee_id,
            period="Q2/2026",
            ratings=ratings,
            final_score=4.0,
            development_plan="Lead a project",
        )
    assert result.rows_affected == 1
    assert result.last_insert_id is not None

    async with store.connection() as db:
        evaluation = await get_evaluation_by_id(db, result.last_insert_id)
    assert evaluation["final_score"] == 4.0
    assert evaluation["development_plan"] == "Lead a project"
    assert evaluation["employee_name"] == "Ana Souza"
    assert evaluation["employee_department"] == "Engineering"
    assert all(evaluation[field] == 4 for field in RATING_FIELDS)


@pytest.mark.asyncio
async def test_insert_evaluation_unknown_employee(store):
    """Unknown employee is rejected and nothing is persisted."""
    with pytest.raises(EmployeeNotFoundError):
        async with store.transaction() as db:
            await insert_evaluation(
                db,
                employee_id=999,
                period="Q1/2026",
                ratings=_ratings(),
                final_score=3.0,
            )
    async with store.connection() as db:
        assert await count_evaluations(db) == 0


@pytest.mark.asyncio
async def test_cascade_delete_removes_all_evaluations(store, add_employee):
    keep = await add_employee("Bruno Lima")
    doomed = await add_employee("Ana Souza")
    for period in ("Q1/2026", "Q2/2026", "Q3/2026"):
        await _add_evaluation(store, doomed, period=period)
    kept_evaluation = await _add_evaluation(store, keep)

    async with store.transaction() as db:
        cascade = await delete_evaluations_for_employee(db, doomed)
        removed = await delete_employee(db, doomed)
    assert cascade.rows_affected == 3
    assert removed.rows_affected == 1

    async with store.connection() as db:
        remaining = await list_evaluations(db)
        assert await get_employee_by_id(db, doomed) is None
    assert [e["id"] for e in remaining] == [kept_evaluation]


@pytest.mark.asyncio
async def test_foreign_keys_enforced(store, add_employee):
    """Deleting an evaluated employee without the cascade is refused."""
    employee_id = await add_employee()
    await _add_evaluation(store, employee_id)
    with pytest.raises(IntegrityError):
        async with store.transaction() as db:
            await delete_employee(db, employee_id)
    async with store.connection() as db:
        assert await count_employees(db) == 1


@pytest.mark.asyncio
async def test_delete_missing_evaluation_affects_nothing(store):
    async with store.transaction() as db:
        result = await delete_evaluation(db, 42)
    assert result.rows_affected == 0


@pytest.mark.asyncio
async def test_aggregates_empty(store):
    async with store.connection() as db:
        assert await count_employees(db) == 0
        assert await count_evaluations(db) == 0
        assert await average_final_score(db) is None
        assert await evaluated_employee_ids(db) == set()
        assert await recent_evaluations(db) == []


@pytest.mark.asyncio
async def test_aggregates(store, add_employee):
    ana = await add_employee("Ana Souza")
    bruno = await add_employee("Bruno Lima")
    await add_employee("Carla Mendes")
    await _add_evaluation(store, ana, value=3)
    await _add_evaluation(store, ana, value=4, period="Q2/2026")
    await _add_evaluation(store, bruno, value=5)

    async with store.connection() as db:
        assert await count_employees(db) == 3
        assert await count_evaluations(db) == 3
        assert await average_final_score(db) == pytest.approx(4.0)
        assert await evaluated_employee_ids(db) == {ana, bruno}


@pytest.mark.asyncio
async def test_recent_evaluations_limited_and_newest_first(store, add_employee):
    employee_id = await add_employee()
    ids = [await _add_evaluation(store, employee_id, period=f"P{i}") for i in range(7)]

    async with store.connection() as db:
        recent = await recent_evaluations(db)
    assert len(recent) == 5
    assert [e["id"] for e in recent] == list(reversed(ids))[:5]
    created = [e["created_at"] for e in recent]
    assert created == sorted(created, reverse=True)
    assert recent[0]["employee_name"] == "Ana Souza"
    assert "employee_department" not in recent[0]
