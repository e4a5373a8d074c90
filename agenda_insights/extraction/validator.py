"""Validates a parsed model response and builds ProjectRecord objects.

Absent fields take their zero value. Present fields with the wrong shape,
negative amounts and categories outside the vocabulary are rejected, and a
single rejection fails the whole batch.
"""

import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from agenda_insights.extraction.exceptions import ExtractionValidationError
from agenda_insights.extraction.models import PROJECT_CATEGORIES, ProjectRecord

_MAX_PROJECTS = 200
# Largest value the agenda_insights.amount NUMERIC(14, 2) column holds.
_MAX_AMOUNT = Decimal("999999999999.99")
_CANONICAL_CATEGORIES = {name.casefold(): name for name in PROJECT_CATEGORIES}


def validate_and_build(data: Any) -> list[ProjectRecord]:
    """Validate a decoded JSON array and build the project records.

    Raises:
        ExtractionValidationError: on any validation failure.
    """
    if not isinstance(data, list):
        raise ExtractionValidationError("Response must be a JSON array")
    if len(data) > _MAX_PROJECTS:
        raise ExtractionValidationError(
            f"Too many projects: {len(data)} (max {_MAX_PROJECTS})"
        )
    return [_build_project(item, i) for i, item in enumerate(data)]


def _build_project(raw: Any, index: int) -> ProjectRecord:
    if not isinstance(raw, dict):
        raise ExtractionValidationError(f"Project at index {index} must be an object")
    return ProjectRecord(
        date=_build_date(raw.get("date"), index),
        consultant=_build_text(raw.get("consultant"), "consultant", index),
        amount=_build_amount(raw.get("amount"), index),
        project_name=_build_text(raw.get("project_name"), "project_name", index),
        categories=_build_categories(raw.get("category"), index),
    )


def _build_text(raw: Any, field: str, index: int) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ExtractionValidationError(
            f"Project at index {index}: '{field}' must be a string"
        )
    return raw.strip()


def _build_date(raw: Any, index: int) -> datetime.date | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ExtractionValidationError(f"Project at index {index}: 'date' must be a string")
    value = raw.strip()
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.datetime.fromisoformat(value).date()
    except ValueError as exc:
        raise ExtractionValidationError(
            f"Project at index {index}: 'date' must be an ISO date (YYYY-MM-DD)"
        ) from exc


def _build_amount(raw: Any, index: int) -> Decimal:
    if raw is None:
        return Decimal("0")
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal, str)):
        raise ExtractionValidationError(f"Project at index {index}: 'amount' must be a number")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ExtractionValidationError(
            f"Project at index {index}: 'amount' must be a number"
        ) from exc
    if not amount.is_finite():
        raise ExtractionValidationError(f"Project at index {index}: 'amount' must be finite")
    if amount < 0:
        raise ExtractionValidationError(
            f"Project at index {index}: 'amount' must not be negative"
        )
    if amount > _MAX_AMOUNT:
        raise ExtractionValidationError(
            f"Project at index {index}: 'amount' exceeds {_MAX_AMOUNT}"
        )
    return amount


def _build_categories(raw: Any, index: int) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ExtractionValidationError(f"Project at index {index}: 'category' must be a list")
    categories: list[str] = []
    for value in raw:
        if not isinstance(value, str):
            raise ExtractionValidationError(
                f"Project at index {index}: 'category' entries must be strings"
            )
        canonical = _CANONICAL_CATEGORIES.get(value.strip().casefold())
        if canonical is None:
            raise ExtractionValidationError(
                f"Project at index {index}: 'category' has a value outside the vocabulary"
            )
        if canonical not in categories:
            categories.append(canonical)
    return categories
