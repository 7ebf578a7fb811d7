"""Dashboard response schema."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from perfeval.schemas.evaluation import RecentEvaluation


class DashboardResponse(BaseModel):
    """GET /api/dashboard response (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_employees: int
    total_evaluations: int
    pending_evaluations: int
    average_score: float | None = None
    recent_evaluations: list[RecentEvaluation] = Field(default_factory=list)
