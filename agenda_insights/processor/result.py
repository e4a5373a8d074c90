"""Explicit per-stage outcome types.

Stages hand back ``Ok(value)`` or ``Err(kind, message)``; the orchestrator
stops at the first ``Err``. ``Err.message`` is caller-facing and must not
carry exception text or document content.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class Stage(str, Enum):
    LOCATE = "Locate"
    STREAM = "Stream"
    EXTRACT_TEXT = "ExtractText"
    REDACT = "Redact"
    STRUCTURED_EXTRACT = "StructuredExtract"
    ENRICH = "Enrich"
    PERSIST = "Persist"


class FailureKind(str, Enum):
    NOT_FOUND = "NotFound"
    STREAM_UNAVAILABLE = "StreamUnavailable"
    EXTRACTION_FAILURE = "ExtractionFailure"
    MODEL_FAILURE = "ModelFailure"
    PARSE_FAILURE = "ParseFailure"
    PERSISTENCE_FAILURE = "PersistenceFailure"
    PARTIAL_PERSISTENCE = "PartialPersistence"
    CONFIGURATION_FAILURE = "ConfigurationFailure"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    kind: FailureKind
    message: str


StageResult = Union[Ok[T], Err]
