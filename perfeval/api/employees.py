"""Employee endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncConnection

from perfeval.api.deps import RowId, SettingsDep
from perfeval.database import StoreDep, get_db
from perfeval.exceptions import PhotoRejectedError
from perfeval.schemas.employee import EmployeeRead, MessageResponse
from perfeval.storage.photos import delete_photo, save_photo
from perfeval.storage.repositories import (
    delete_employee,
    delete_evaluations_for_employee,
    get_employee_by_id,
    insert_employee,
    list_employees,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/employees", response_model=list[EmployeeRead])
async def get_employees(db: Annotated[AsyncConnection, Depends(get_db)]):
    """List employees ordered by name."""
    return await list_employees(db)


@router.post(
    "/employees",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    store: StoreDep,
    settings: SettingsDep,
    name: Annotated[str | None, Form()] = None,
    role: Annotated[str | None, Form()] = None,
    department: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    admission_date: Annotated[str | None, Form()] = None,
    photo: Annotated[UploadFile | None, File()] = None,
):
    """
    Create an employee from a multipart form.
    The optional photo must be an image no larger than the configured limit.
    """
    fields = {
        "name": name,
        "role": role,
        "department": department,
        "email": email,
        "admission_date": admission_date,
    }
    missing = [key for key, value in fields.items() if not value]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"All required fields must be filled in: {', '.join(missing)}",
        )

    photo_name = None
    if photo is not None and photo.filename:
        try:
            photo_name = await save_photo(photo, settings.upload_dir, settings.max_photo_bytes)
        except PhotoRejectedError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc

    try:
        async with store.transaction() as db:
            result = await insert_employee(db, photo=photo_name, **fields)
            employee = await get_employee_by_id(db, result.last_insert_id)
    except Exception:
        # Photo must not outlive a failed insert
        delete_photo(settings.upload_dir, photo_name)
        raise
    return employee


@router.delete("/employees/{employee_id}", response_model=MessageResponse)
async def remove_employee(employee_id: RowId, store: StoreDep, settings: SettingsDep):
    """Delete an employee, its evaluations and its photo."""
    async with store.transaction() as db:
        employee = await get_employee_by_id(db, employee_id)
        if not employee:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Employee not found",
            )
        cascade = await delete_evaluations_for_employee(db, employee_id)
        await delete_employee(db, employee_id)

    delete_photo(settings.upload_dir, employee["photo"])
    logger.info(
        "Deleted employee %s with %d evaluations", employee_id, cascade.rows_affected
    )
    return MessageResponse(message="Employee deleted")
