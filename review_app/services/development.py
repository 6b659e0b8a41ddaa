"""
Personal development plan built from a target's category comparison.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple

from review_app.services.messages import DEFAULT_LANGUAGE, message
from review_app.services.scoring_math import CategoryComparison
from review_app.services.swot import STRENGTH_THRESHOLD

GAP_THRESHOLD = 0.5
MAX_IMPROVEMENT_TIPS = 2


@dataclass(frozen=True)
class DevelopmentPlan:
    strengths: Tuple[CategoryComparison, ...] = field(default_factory=tuple)
    improvements: Tuple[CategoryComparison, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self, label_for: Optional[Callable[[str], str]] = None):
        label_for = label_for or (lambda name: name)

        def row(c):
            return {**c.as_dict(), "label": label_for(c.name)}

        return {
            "strengths": [row(c) for c in self.strengths],
            "improvements": [row(c) for c in self.improvements],
            "recommendations": list(self.recommendations),
        }


def build_development_plan(category_compare: Iterable[CategoryComparison],
                           lang: str = DEFAULT_LANGUAGE,
                           label_for: Optional[Callable[[str], str]] = None) -> DevelopmentPlan:
    """
    Strengths and improvement areas come from the peer side; the self/peer gap
    drives the awareness tips (gap > 0.5 over-rated, gap < -0.5 under-rated).
    """
    label_for = label_for or (lambda name: name)
    rows = list(category_compare)

    strengths = sorted((c for c in rows if c.peer_score >= STRENGTH_THRESHOLD),
                       key=lambda c: c.peer_score, reverse=True)
    improvements = sorted((c for c in rows if 0 < c.peer_score < STRENGTH_THRESHOLD),
                          key=lambda c: c.peer_score)
    over = [c for c in rows if c.diff > GAP_THRESHOLD]
    under = [c for c in rows if c.diff < -GAP_THRESHOLD]

    tips = []
    if over:
        tips.append(message("dev.overconfident", lang, name=label_for(over[0].name)))
    if under:
        tips.append(message("dev.underconfident", lang, name=label_for(under[0].name)))
    for c in improvements[:MAX_IMPROVEMENT_TIPS]:
        tips.append(message("dev.improve", lang, name=label_for(c.name)))
    if strengths:
        tips.append(message("dev.strength", lang, name=label_for(strengths[0].name)))

    return DevelopmentPlan(
        strengths=tuple(strengths),
        improvements=tuple(improvements),
        recommendations=tuple(tips),
    )
