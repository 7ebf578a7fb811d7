"""Evaluation request/response schemas."""

from pydantic import AliasChoices, BaseModel, Field, computed_field

from perfeval.database import SQLITE_MAX_INT, SQLITE_MIN_INT
from perfeval.engine.scoring import RATING_FIELDS


class EvaluationCreate(BaseModel):
    """
    POST /api/evaluations request.

    Required fields are optional here so the handler can answer with its own
    400 messages; final_score is never accepted from the client.
    """

    employee_id: int | None = Field(default=None, ge=SQLITE_MIN_INT, le=SQLITE_MAX_INT)
    period: str | None = None
    quality: int | None = None
    productivity: int | None = None
    technical: int | None = None
    teamwork: int | None = None
    initiative: int | None = None
    punctuality: int | None = None
    leadership: int | None = None
    adaptability: int | None = None
    communication: int | None = None
    values_alignment: int | None = None
    strengths: str | None = None
    improvements: str | None = None
    development_plan: str | None = Field(
        default=None, validation_alias=AliasChoices("development_plan", "pdi")
    )

    def ratings(self) -> dict[str, int | None]:
        return {field: getattr(self, field) for field in RATING_FIELDS}


class EvaluationBase(BaseModel):
    """Evaluation row as stored."""

    id: int
    employee_id: int
    period: str
    quality: int
    productivity: int
    technical: int
    teamwork: int
    initiative: int
    punctuality: int
    leadership: int
    adaptability: int
    communication: int
    values_alignment: int
    final_score: float
    strengths: str | None = None
    improvements: str | None = None
    development_plan: str | None = None
    created_at: str

    @computed_field
    @property
    def pdi(self) -> str | None:
        """development_plan under the name older clients read."""
        return self.development_plan


class EvaluationRead(EvaluationBase):
    """Evaluation joined with its employee (None if the employee is gone)."""

    employee_name: str | None = None
    employee_role: str | None = None
    employee_department: str | None = None


class RecentEvaluation(EvaluationBase):
    """Dashboard entry for a recent evaluation."""

    employee_name: str | None = None
    employee_role: str | None = None
