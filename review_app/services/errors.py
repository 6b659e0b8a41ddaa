"""
Error taxonomy of the scoring services.

Every error carries a machine-readable ``kind`` and a human ``hint`` telling
the caller what to do next. Views turn them into JSON error payloads.
"""


class ScoringError(Exception):
    kind = "scoring_error"
    default_hint = ""

    def __init__(self, message, *, hint=None):
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else self.default_hint

    def as_dict(self):
        return {"error": self.message, "kind": self.kind, "hint": self.hint}


class ValidationError(ScoringError):
    """Bad or missing request parameters (period_id, org_id, pct bounds...)."""
    kind = "validation_error"
    default_hint = "Check the request parameters and try again."


class NotFoundError(ScoringError):
    """Period, target or pool has no data."""
    kind = "not_found"
    default_hint = "Make sure the period exists and has completed evaluations."


class DataUnavailable(ScoringError):
    """Persistence layer unreachable or schema not migrated."""
    kind = "data_unavailable"
    default_hint = "The database could not be read. Run `manage.py migrate` and retry."


class ConfigurationError(ScoringError):
    """A requested pool or option needs setup that was never done."""
    kind = "configuration_error"
    default_hint = "Complete the organization setup before retrying."
