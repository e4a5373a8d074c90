"""Recovers project records from semi-structured model output.

The model is asked for a bare JSON array but may wrap it in prose or code
fences. Recovery is two-tier and goes no deeper:

1. A trimmed response that starts with ``[`` and ends with ``]`` is used as is.
2. Otherwise the span from the first ``[`` to the last ``]`` is used.

Anything that does not then decode and validate as a whole fails closed;
there is no per-record salvage.
"""

import json
import re
from decimal import Decimal

from agenda_insights.extraction.exceptions import ExtractionValidationError
from agenda_insights.extraction.models import ProjectRecord
from agenda_insights.extraction.validator import validate_and_build
from agenda_insights.logging.logger import Log

_ARRAY_SPAN_RE = re.compile(r"\[.*\]", re.DOTALL)
_DIAGNOSTIC_PREVIEW_CHARS = 500


def recover_json_array(raw: str) -> str | None:
    """Return the candidate JSON array text, or None if there is no bracketed span."""
    cleaned = raw.strip()
    if cleaned.startswith("[") and cleaned.endswith("]"):
        return cleaned
    match = _ARRAY_SPAN_RE.search(cleaned)
    if match is None:
        return None
    return match.group(0)


def parse_project_records(raw: str) -> list[ProjectRecord] | None:
    """Parse a model response into project records.

    Returns:
        The records (possibly an empty list), or None when the response cannot
        be recovered into a valid array.
    """
    payload = recover_json_array(raw)
    if payload is None:
        Log.warning(f"No JSON array found in model response ({len(raw)} chars)")
        _record_for_diagnosis(raw)
        return None

    try:
        data = json.loads(payload, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        Log.warning(f"Model response is not valid JSON: {exc.msg} at position {exc.pos}")
        _record_for_diagnosis(raw)
        return None
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals and pathological nesting.
        Log.warning(f"Model response could not be decoded: {exc.__class__.__name__}")
        _record_for_diagnosis(raw)
        return None

    try:
        return validate_and_build(data)
    except ExtractionValidationError as exc:
        Log.warning(f"Model response failed validation: {exc}")
        return None


def _record_for_diagnosis(raw: str) -> None:
    preview = raw[:_DIAGNOSTIC_PREVIEW_CHARS]
    Log.debug(f"Unparseable model response preview: {preview!r}")
