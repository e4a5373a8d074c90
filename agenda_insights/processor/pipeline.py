from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from agenda_insights.database.models import PersistenceReport
from agenda_insights.documents.models import DocumentRef
from agenda_insights.extraction.models import ProjectRecord
from agenda_insights.logging.logger import Log
from agenda_insights.processor.models import ExtractedDocument, ResolvedLocation
from agenda_insights.processor.result import Err, FailureKind, Stage, StageResult


@dataclass(slots=True)
class PipelineContext:
    """State carried through one run. Owned by that run only."""

    location: ResolvedLocation
    item_id: str
    document: DocumentRef | None = None
    city: str = ""
    extracted: ExtractedDocument | None = None
    extracted_text: str = ""
    redacted_text: str = ""
    projects: list[ProjectRecord] | None = None
    persistence: PersistenceReport | None = None

    def release(self) -> None:
        """Drop the file bytes and document text held by this run."""
        self.extracted = None
        self.extracted_text = ""
        self.redacted_text = ""


class PipelineStep(ABC):
    """One stage of the agenda pipeline.

    ``execute`` is the stage boundary: whatever ``run`` raises is logged and
    turned into the step's ``Err`` so no exception crosses into the
    orchestrator. Task cancellation is not intercepted.
    """

    stage: ClassVar[Stage]
    failure_kind: ClassVar[FailureKind]
    failure_message: ClassVar[str] = "Error processing agenda."

    async def execute(self, context: PipelineContext) -> StageResult[PipelineContext]:
        try:
            return await self.run(context)
        except Exception as exc:
            Log.error(
                f"Stage {self.stage.value} raised {exc.__class__.__name__}",
                item_id=context.item_id,
            )
            return Err(self.failure_kind, self.failure_message)

    @abstractmethod
    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        raise NotImplementedError
