"""Employee response schemas."""

from pydantic import BaseModel


class EmployeeRead(BaseModel):
    """Employee record as stored."""

    id: int
    name: str
    role: str
    department: str
    email: str
    admission_date: str
    photo: str | None = None
    created_at: str


class MessageResponse(BaseModel):
    """Confirmation body for deletions."""

    message: str
