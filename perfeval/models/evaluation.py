"""Evaluation scorecard model."""

from sqlalchemy import Float, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from perfeval.database import Base


class Evaluation(Base):
    """Evaluation scorecards - final_score is fixed at creation."""

    __tablename__ = "evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("employees.id"), nullable=False, index=True
    )
    period: Mapped[str] = mapped_column(Text, nullable=False)
    # Ratings are 1-5
    quality: Mapped[int] = mapped_column(Integer, nullable=False)
    productivity: Mapped[int] = mapped_column(Integer, nullable=False)
    technical: Mapped[int] = mapped_column(Integer, nullable=False)
    teamwork: Mapped[int] = mapped_column(Integer, nullable=False)
    initiative: Mapped[int] = mapped_column(Integer, nullable=False)
    punctuality: Mapped[int] = mapped_column(Integer, nullable=False)
    leadership: Mapped[int] = mapped_column(Integer, nullable=False)
    adaptability: Mapped[int] = mapped_column(Integer, nullable=False)
    communication: Mapped[int] = mapped_column(Integer, nullable=False)
    values_alignment: Mapped[int] = mapped_column(Integer, nullable=False)
    final_score: Mapped[float] = mapped_column(Float, nullable=False)
    strengths: Mapped[str | None] = mapped_column(Text, nullable=True)
    improvements: Mapped[str | None] = mapped_column(Text, nullable=True)
    development_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(
        String(50), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
