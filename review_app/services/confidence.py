import math
from dataclasses import dataclass

HIGH = "High"
MEDIUM = "Medium"
LOW = "Low"

HIGH_COEFF = 1.0
MEDIUM_COEFF = 0.9
LOW_COEFF = 0.8

DEFAULT_MIN_HIGH = 5


@dataclass(frozen=True)
class Confidence:
    coeff: float
    label: str

    def as_dict(self):
        return {"coeff": self.coeff, "label": self.label}


def estimate_confidence(peer_completed_count: int, min_high: int = DEFAULT_MIN_HIGH) -> Confidence:
    """
    Step function over the number of completed peer evaluations.

        count >= min_high                  -> High   / 1.0
        count >= max(1, ceil(min_high/2))  -> Medium / 0.9
        otherwise                          -> Low    / 0.8
    """
    min_high = int(min_high or 0) or DEFAULT_MIN_HIGH
    count = int(peer_completed_count or 0)
    if count >= min_high:
        return Confidence(HIGH_COEFF, HIGH)
    if count >= max(1, math.ceil(min_high / 2)):
        return Confidence(MEDIUM_COEFF, MEDIUM)
    return Confidence(LOW_COEFF, LOW)
