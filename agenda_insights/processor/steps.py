import asyncio
import re

from agenda_insights.database.repositories.agenda_insights_repository import (
    AgendaInsightsRepository,
)
from agenda_insights.documents.base import BaseDocumentSource
from agenda_insights.extraction.extractor import StructuredExtractor
from agenda_insights.logging.logger import Log
from agenda_insights.pdf.base import BasePdfExtractor
from agenda_insights.processor.enricher import enrich
from agenda_insights.processor.models import ExtractedDocument
from agenda_insights.processor.pipeline import PipelineContext, PipelineStep
from agenda_insights.processor.result import Err, FailureKind, Ok, Stage, StageResult
from agenda_insights.redaction.redactor import Redactor

_CITY_PREFIX_RE = re.compile(r"^([^_]+)_")


def city_from_file_name(name: str) -> str:
    """City is the part of the file name before the first underscore."""
    match = _CITY_PREFIX_RE.match(name)
    if match is None:
        return ""
    return match.group(1).strip()


class LocateDocumentStep(PipelineStep):
    stage = Stage.LOCATE
    failure_kind = FailureKind.NOT_FOUND

    def __init__(self, document_source: BaseDocumentSource) -> None:
        self._document_source = document_source

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        documents = await self._document_source.list_documents(
            context.location.collection_id,
            context.location.container_id,
            context.item_id,
        )
        if not documents:
            return Err(
                FailureKind.NOT_FOUND,
                f"No documents found for item {context.item_id}.",
            )
        if len(documents) > 1:
            Log.warning(
                f"{len(documents)} documents listed, using the first",
                item_id=context.item_id,
            )
        context.document = documents[0]
        context.city = city_from_file_name(context.document.name)
        Log.info(f"Located document {context.document.name}", item_id=context.item_id)
        return Ok(context)


class StreamDocumentStep(PipelineStep):
    stage = Stage.STREAM
    failure_kind = FailureKind.STREAM_UNAVAILABLE

    def __init__(self, document_source: BaseDocumentSource) -> None:
        self._document_source = document_source

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before streaming")
        document = context.document
        raw_bytes = await self._document_source.open_stream(
            document.parent_container_id, document.item_id
        )
        if raw_bytes is None:
            return Err(
                FailureKind.STREAM_UNAVAILABLE,
                f"Could not get stream for file {document.name}",
            )
        context.extracted = ExtractedDocument(name=document.name, raw_bytes=raw_bytes)
        Log.info(f"Loaded {len(raw_bytes)} bytes", item_id=context.item_id)
        return Ok(context)


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACT_TEXT
    failure_kind = FailureKind.EXTRACTION_FAILURE

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before text extraction")
        name = context.extracted.name
        try:
            text = await asyncio.to_thread(
                self._pdf_extractor.extract, context.extracted.raw_bytes
            )
        finally:
            context.extracted = None
        if not text.strip():
            return Err(FailureKind.EXTRACTION_FAILURE, f"Failed to extract text from file {name}")
        context.extracted_text = text
        Log.info(f"Extracted {len(text)} chars", item_id=context.item_id)
        return Ok(context)


class RedactStep(PipelineStep):
    stage = Stage.REDACT
    failure_kind = FailureKind.EXTRACTION_FAILURE

    def __init__(self, redactor: Redactor) -> None:
        self._redactor = redactor

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        context.redacted_text = self._redactor.redact(context.extracted_text)
        context.extracted_text = ""
        return Ok(context)


class StructuredExtractStep(PipelineStep):
    stage = Stage.STRUCTURED_EXTRACT
    failure_kind = FailureKind.MODEL_FAILURE
    failure_message = "Failed to extract project data from document text"

    def __init__(self, extractor: StructuredExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        result = await self._extractor.extract(context.redacted_text)
        if isinstance(result, Err):
            return result
        context.projects = result.value
        return Ok(context)


class EnrichStep(PipelineStep):
    stage = Stage.ENRICH
    failure_kind = FailureKind.CONFIGURATION_FAILURE

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        if context.projects is None:
            raise ValueError("PipelineContext.projects must be set before enrichment")
        enrich(context.projects, context.location.region, context.location.discipline)
        return Ok(context)


class PersistStep(PipelineStep):
    stage = Stage.PERSIST
    failure_kind = FailureKind.PERSISTENCE_FAILURE
    failure_message = "Failed to save project data to database"
    partial_message = (
        "Project data was only partially saved; some records may already be persisted"
    )

    def __init__(self, repository: AgendaInsightsRepository) -> None:
        self._repository = repository

    async def run(self, context: PipelineContext) -> StageResult[PipelineContext]:
        if context.projects is None or context.document is None:
            raise ValueError("PipelineContext.projects and document must be set before persist")
        report = await self._repository.insert_projects(
            context.city, context.projects, context.document.item_id
        )
        context.persistence = report
        if report.error is not None:
            message = self.partial_message if report.committed else self.failure_message
            return Err(FailureKind.PERSISTENCE_FAILURE, message)
        if not report.succeeded:
            Log.warning(
                f"Row count mismatch: {report.committed} of {report.submitted} committed",
                item_id=context.item_id,
            )
            return Err(FailureKind.PARTIAL_PERSISTENCE, self.partial_message)
        return Ok(context)
