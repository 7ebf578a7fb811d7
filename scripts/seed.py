#!/usr/bin/env python3
"""
Seed script: creates demo employees and a few evaluations for each.
Run from the project root: python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from perfeval.config import settings
from perfeval.database import Store
from perfeval.engine.scoring import RATING_FIELDS, compute_final_score
from perfeval.storage.repositories import (
    count_employees,
    insert_employee,
    insert_evaluation,
)

EMPLOYEES = [
    {
        "name": "Ana Souza",
        "role": "Backend Developer",
        "department": "Engineering",
        "email": "ana.souza@example.com",
        "admission_date": "2021-03-15",
    },
    {
        "name": "Bruno Lima",
        "role": "Account Manager",
        "department": "Sales",
        "email": "bruno.lima@example.com",
        "admission_date": "2019-08-01",
    },
    {
        "name": "Carla Mendes",
        "role": "HR Analyst",
        "department": "People",
        "email": "carla.mendes@example.com",
        "admission_date": "2023-01-09",
    },
]

# Ratings per employee, in RATING_FIELDS order; None means not evaluated yet
SCORECARDS = [
    [("Q1/2026", [4, 4, 5, 4, 3, 5, 3, 4, 4, 5]), ("Q2/2026", [5, 4, 5, 4, 4, 5, 4, 4, 5, 5])],
    [("Q1/2026", [3, 4, 2, 4, 3, 3, 3, 4, 5, 4])],
    None,
]


async def seed():
    store = Store(settings.database_url)
    await store.initialize()
    try:
        async with store.transaction() as db:
            if await count_employees(db):
                print("Employees already present, skipping seed.")
                return

            for employee, scorecards in zip(EMPLOYEES, SCORECARDS):
                result = await insert_employee(db, **employee)
                for period, values in scorecards or []:
                    ratings = dict(zip(RATING_FIELDS, values))
                    await insert_evaluation(
                        db,
                        employee_id=result.last_insert_id,
                        period=period,
                        ratings=ratings,
                        final_score=compute_final_score(ratings),
                        strengths="Consistent delivery",
                    )
        print(f"Seeded {len(EMPLOYEES)} employees.")
    finally:
        await store.close()

    print("Seed complete!")
    print(f"Example: curl http://localhost:{settings.port}/api/dashboard")


if __name__ == "__main__":
    asyncio.run(seed())
