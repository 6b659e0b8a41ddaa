"""
Typed rows consumed by the scoring core.

ORM instances (or raw mappings) are converted here, once, so the math
modules never touch model objects or loosely typed dicts.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from review_app.services.errors import ValidationError


def _str_or_none(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _score(value, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}: {value!r}")


@dataclass(frozen=True)
class AssignmentRecord:
    assignment_id: str
    period_id: str
    evaluator_id: str
    target_id: str
    evaluator_level: str = "peer"
    evaluator_name: str = "-"
    target_name: str = "-"
    target_department: str = "-"
    target_manager_id: str = ""
    status: str = "completed"
    completed_at: Optional[datetime] = None

    @property
    def is_self(self) -> bool:
        return self.evaluator_id == self.target_id

    @classmethod
    def from_model(cls, assignment) -> "AssignmentRecord":
        """Build from an Assignment with evaluator/target selected."""
        evaluator = assignment.evaluator
        target = assignment.target
        return cls(
            assignment_id=str(assignment.assignment_id),
            period_id=str(assignment.period_id),
            evaluator_id=str(assignment.evaluator_id),
            target_id=str(assignment.target_id),
            evaluator_level=evaluator.position_level or "peer",
            evaluator_name=evaluator.name or "-",
            target_name=target.name or "-",
            target_department=target.department or "-",
            target_manager_id=str(target.manager_id) if target.manager_id else "",
            status=assignment.status,
            completed_at=assignment.completed_at,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AssignmentRecord":
        missing = [k for k in ("assignment_id", "evaluator_id", "target_id") if not _str_or_none(data.get(k))]
        if missing:
            raise ValidationError(f"Assignment row is missing {', '.join(missing)}")
        return cls(
            assignment_id=str(data["assignment_id"]),
            period_id=str(data.get("period_id") or ""),
            evaluator_id=str(data["evaluator_id"]),
            target_id=str(data["target_id"]),
            evaluator_level=_str_or_none(data.get("evaluator_level")) or "peer",
            evaluator_name=_str_or_none(data.get("evaluator_name")) or "-",
            target_name=_str_or_none(data.get("target_name")) or "-",
            target_department=_str_or_none(data.get("target_department")) or "-",
            target_manager_id=_str_or_none(data.get("target_manager_id")) or "",
            status=_str_or_none(data.get("status")) or "completed",
            completed_at=data.get("completed_at"),
        )


@dataclass(frozen=True)
class ResponseRecord:
    assignment_id: str
    question_id: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    std_score: Optional[float] = None
    reel_score: Optional[float] = None

    @property
    def score(self) -> float:
        # organization-adjusted score first, standard score as fallback
        value = self.reel_score if self.reel_score is not None else self.std_score
        return value or 0.0

    @property
    def has_score(self) -> bool:
        return self.score > 0

    @classmethod
    def from_model(cls, response) -> "ResponseRecord":
        return cls(
            assignment_id=str(response.assignment_id),
            question_id=str(response.question_id) if response.question_id else None,
            category_id=str(response.category_id) if response.category_id else None,
            category_name=_str_or_none(response.category_name),
            std_score=_score(response.std_score, "std_score"),
            reel_score=_score(response.reel_score, "reel_score"),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResponseRecord":
        assignment_id = _str_or_none(data.get("assignment_id"))
        if not assignment_id:
            raise ValidationError("Response row is missing assignment_id")
        return cls(
            assignment_id=assignment_id,
            question_id=_str_or_none(data.get("question_id")),
            category_id=_str_or_none(data.get("category_id")),
            category_name=_str_or_none(data.get("category_name")),
            std_score=_score(data.get("std_score"), "std_score"),
            reel_score=_score(data.get("reel_score"), "reel_score"),
        )
