"""Database models."""

from perfeval.models.employee import Employee
from perfeval.models.evaluation import Evaluation

__all__ = ["Employee", "Evaluation"]
