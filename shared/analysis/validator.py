"""Validate parsed model output against the per-task response contracts."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from shared.contracts.analysis import (
    BusinessResponse,
    ClimateResponse,
    CyberResponse,
    Task,
)
from shared.errors import SchemaError, Violation

logger = logging.getLogger(__name__)

RESPONSE_MODELS: dict[Task, type[BaseModel]] = {
    Task.CLIMATE: ClimateResponse,
    Task.BUSINESS: BusinessResponse,
    Task.CYBER: CyberResponse,
}


def validate_response(task: Task | str, candidate: Any) -> BaseModel:
    """
    Return the typed response for ``task`` or raise SchemaError.

    Fails closed: a missing required field, a wrong type or an out-of-range
    number is reported as a violation, never coerced or dropped. Unknown
    top-level keys are ignored.
    """
    task = Task(task)
    model = RESPONSE_MODELS[task]

    if not isinstance(candidate, dict):
        raise SchemaError(
            task.internal_name,
            [Violation(path="$", message=f"expected a JSON object, got {type(candidate).__name__}")],
        )

    try:
        return model.model_validate(candidate)
    except ValidationError as exc:
        violations = [
            Violation(path=_format_path(err["loc"]), message=err["msg"])
            for err in exc.errors()
        ]
        logger.warning(
            "Response for %s failed schema validation with %d violation(s)",
            task.internal_name,
            len(violations),
            extra={"_extra": {"violations": [v.to_dict() for v in violations]}},
        )
        raise SchemaError(task.internal_name, violations) from exc


def _format_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "$"
