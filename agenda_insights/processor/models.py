from dataclasses import dataclass, field
from typing import Any

from agenda_insights.extraction.models import ProjectRecord
from agenda_insights.processor.result import FailureKind, Stage


@dataclass(frozen=True)
class ResolvedLocation:
    """Location settings with the document collection id resolved at startup."""

    location_id: str
    collection_id: str
    container_id: str
    region: str = ""
    discipline: str = ""


@dataclass
class ExtractedDocument:
    """Raw file content held only until text extraction is done."""

    name: str
    raw_bytes: bytes


@dataclass(frozen=True)
class PipelineResult:
    """The single object returned for one processed agenda."""

    success: bool
    message: str
    stage: Stage | None = None
    error_kind: FailureKind | None = None
    city: str = ""
    file_reference: str = ""
    projects: tuple[ProjectRecord, ...] = field(default_factory=tuple)

    @classmethod
    def succeeded(
        cls,
        *,
        city: str,
        file_reference: str,
        projects: list[ProjectRecord],
    ) -> "PipelineResult":
        return cls(
            success=True,
            message="Successfully processed city agenda file",
            city=city,
            file_reference=file_reference,
            projects=tuple(projects),
        )

    @classmethod
    def failed(cls, stage: Stage, kind: FailureKind, message: str) -> "PipelineResult":
        return cls(success=False, message=message, stage=stage, error_kind=kind)

    def to_response(self) -> dict[str, Any]:
        """Caller-facing, JSON-ready payload."""
        if not self.success:
            return {
                "success": False,
                "message": self.message,
                "error": self.error_kind.value if self.error_kind else None,
            }
        return {
            "success": True,
            "message": self.message,
            "city": self.city,
            "file_reference": self.file_reference,
            "projects": [
                {
                    "date": p.date.isoformat() if p.date else None,
                    "consultant": p.consultant,
                    "amount": float(p.amount),
                    "project_name": p.project_name,
                    "category": list(p.categories),
                    "region": p.region,
                    "discipline": p.discipline,
                }
                for p in self.projects
            ],
        }
