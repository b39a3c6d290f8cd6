"""
Error taxonomy for the analysis core.

Callers at the HTTP boundary match on the concrete subclass; every error
carries a stable ``code`` and a human-readable message.
"""

from __future__ import annotations

from dataclasses import dataclass


class AnalysisError(Exception):
    """Base class for every error raised by the analysis core."""

    code = "ANALYSIS_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AnalysisError):
    """A required credential or setting is missing."""

    code = "CONFIGURATION_ERROR"


class ModelUnavailableError(AnalysisError):
    """Every attempt against the generative model failed."""

    code = "LLM_UNAVAILABLE"

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


@dataclass(frozen=True)
class Violation:
    path: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class SchemaError(AnalysisError):
    """Syntactically valid JSON that does not match the response contract."""

    code = "SCHEMA_ERROR"

    def __init__(self, task: str, violations: list[Violation]) -> None:
        summary = "; ".join(f"{v.path}: {v.message}" for v in violations[:5])
        super().__init__(
            f"Model response for {task} violates schema "
            f"({len(violations)} violation(s)): {summary}"
        )
        self.task = task
        self.violations = list(violations)
