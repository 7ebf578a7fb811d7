"""Employee model."""

from sqlalchemy import Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from perfeval.database import Base


class Employee(Base):
    """Employee records - created and deleted, never edited."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    admission_date: Mapped[str] = mapped_column(Text, nullable=False)
    photo: Mapped[str | None] = mapped_column(Text, nullable=True)  # stored filename
    created_at: Mapped[str] = mapped_column(
        String(50), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
