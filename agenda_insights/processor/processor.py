from collections.abc import Mapping, Sequence

from agenda_insights.config.settings import LocationSettings, Settings
from agenda_insights.database.repositories.agenda_insights_repository import (
    AgendaInsightsRepository,
)
from agenda_insights.documents.base import BaseDocumentSource
from agenda_insights.documents.exceptions import DocumentSourceError
from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.extractor import StructuredExtractor
from agenda_insights.logging.logger import Log
from agenda_insights.pdf.factory import PdfExtractorFactory
from agenda_insights.processor.models import PipelineResult, ResolvedLocation
from agenda_insights.processor.pipeline import PipelineContext, PipelineStep
from agenda_insights.processor.result import Err, FailureKind, Stage
from agenda_insights.processor.steps import (
    EnrichStep,
    ExtractTextStep,
    LocateDocumentStep,
    PersistStep,
    RedactStep,
    StreamDocumentStep,
    StructuredExtractStep,
)
from agenda_insights.redaction.redactor import Redactor


class Processor:
    """Runs one agenda item through the pipeline.

    Pipeline: locate -> stream -> extract text -> redact -> structured extract
    -> enrich -> persist. Stages run strictly in order and the first ``Err``
    ends the run. The context is private to the run and is released on every
    exit path, including cancellation.
    """

    def __init__(
        self,
        *,
        steps: Sequence[PipelineStep],
        locations: Mapping[str, ResolvedLocation],
    ) -> None:
        self._steps = tuple(steps)
        self._locations = dict(locations)

    async def process_document(self, location_id: str, item_id: str) -> PipelineResult:
        Log.info("Processing agenda item", location_id=location_id, item_id=item_id)

        location = self._locations.get(location_id)
        if location is None:
            Log.warning("Unknown location", location_id=location_id)
            return PipelineResult.failed(
                Stage.LOCATE,
                FailureKind.CONFIGURATION_FAILURE,
                f"Unknown location {location_id}.",
            )

        context = PipelineContext(location=location, item_id=item_id)
        try:
            for step in self._steps:
                outcome = await step.execute(context)
                if isinstance(outcome, Err):
                    Log.warning(
                        f"Stage {step.stage.value} failed: {outcome.kind.value}",
                        item_id=item_id,
                    )
                    return PipelineResult.failed(step.stage, outcome.kind, outcome.message)
                context = outcome.value

            if context.document is None or context.projects is None:
                raise RuntimeError("Pipeline finished without a document or projects")
            Log.info(
                f"Successfully processed {len(context.projects)} projects",
                item_id=item_id,
                city=context.city,
            )
            return PipelineResult.succeeded(
                city=context.city,
                file_reference=context.document.item_id,
                projects=context.projects,
            )
        finally:
            context.release()


async def resolve_locations(
    locations: Mapping[str, LocationSettings],
    document_source: BaseDocumentSource,
) -> dict[str, ResolvedLocation]:
    """Resolve every configured location's site path once, at startup.

    Locations whose site cannot be resolved are logged and left out, so
    requests for them fail with ConfigurationFailure.
    """
    resolved: dict[str, ResolvedLocation] = {}
    for location_id, location in locations.items():
        try:
            collection_id = await document_source.resolve_collection_id(location.site_path)
        except DocumentSourceError as exc:
            Log.error(f"Could not resolve location: {exc}", location_id=location_id)
            continue
        resolved[location_id] = ResolvedLocation(
            location_id=location_id,
            collection_id=collection_id,
            container_id=location.library,
            region=location.region,
            discipline=location.discipline,
        )
    Log.info(f"Resolved {len(resolved)} of {len(locations)} locations")
    return resolved


async def build_processor(
    settings: Settings,
    document_source: BaseDocumentSource,
    completion_client: BaseCompletionClient,
) -> Processor:
    """Build a Processor with all required adapters."""
    locations = await resolve_locations(settings.locations, document_source)
    extractor = StructuredExtractor(
        client=completion_client,
        max_tokens=settings.model_max_tokens,
    )
    steps: list[PipelineStep] = [
        LocateDocumentStep(document_source),
        StreamDocumentStep(document_source),
        ExtractTextStep(PdfExtractorFactory.create(settings)),
        RedactStep(Redactor()),
        StructuredExtractStep(extractor),
        EnrichStep(),
        PersistStep(AgendaInsightsRepository()),
    ]
    return Processor(steps=steps, locations=locations)
