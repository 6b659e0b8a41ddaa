"""
SWOT summary of a category comparison, computed separately for the self
side and the peer side.

    score >= 3.5         -> strength   (top 6, descending)
    0 < score < 3.5      -> weakness   (bottom 6, ascending)
    opportunities        =  the first 4 weaknesses
    score == 0           -> no data, left out of every bucket
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from review_app.services.messages import DEFAULT_LANGUAGE, message

STRENGTH_THRESHOLD = 3.5
MAX_STRENGTHS = 6
MAX_WEAKNESSES = 6
MAX_OPPORTUNITIES = 4

SIDES = ("self", "peer")


@dataclass(frozen=True)
class SwotItem:
    name: str
    score: float

    def as_dict(self):
        return {"name": self.name, "score": self.score}


@dataclass(frozen=True)
class SwotSummary:
    strengths: Tuple[SwotItem, ...] = field(default_factory=tuple)
    weaknesses: Tuple[SwotItem, ...] = field(default_factory=tuple)
    opportunities: Tuple[SwotItem, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self):
        return {
            "strengths": [i.as_dict() for i in self.strengths],
            "weaknesses": [i.as_dict() for i in self.weaknesses],
            "opportunities": [i.as_dict() for i in self.opportunities],
            "recommendations": list(self.recommendations),
        }


def _side_score(row, side: str) -> float:
    return row.self_score if side == "self" else row.peer_score


def derive_swot(category_compare: Iterable, side: str = "peer",
                lang: str = DEFAULT_LANGUAGE,
                label_for: Optional[Callable[[str], str]] = None) -> SwotSummary:
    if side not in SIDES:
        raise ValueError(f"side must be one of {SIDES}, got {side!r}")
    label_for = label_for or (lambda name: name)

    items: List[SwotItem] = [
        SwotItem(row.name, _side_score(row, side))
        for row in category_compare
        if _side_score(row, side) > 0
    ]
    strengths = sorted(
        (i for i in items if i.score >= STRENGTH_THRESHOLD),
        key=lambda i: i.score, reverse=True,
    )[:MAX_STRENGTHS]
    weaknesses = sorted(
        (i for i in items if i.score < STRENGTH_THRESHOLD),
        key=lambda i: i.score,
    )[:MAX_WEAKNESSES]
    opportunities = weaknesses[:MAX_OPPORTUNITIES]

    recommendations = []
    if weaknesses:
        recommendations.append(message("swot.develop", lang, name=label_for(weaknesses[0].name)))
    if strengths:
        recommendations.append(message("swot.spread", lang, name=label_for(strengths[0].name)))

    return SwotSummary(
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        opportunities=tuple(opportunities),
        recommendations=tuple(recommendations),
    )


def derive_swot_pair(category_compare: Iterable, lang: str = DEFAULT_LANGUAGE,
                     label_for: Optional[Callable[[str], str]] = None) -> Dict[str, SwotSummary]:
    rows = list(category_compare)
    return {side: derive_swot(rows, side, lang, label_for) for side in SIDES}
