"""LLM-backed extraction of engineering project records from agenda text."""

from collections.abc import Sequence
from pathlib import Path

from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.models import PROJECT_CATEGORIES, ProjectRecord
from agenda_insights.extraction.parser import parse_project_records
from agenda_insights.extraction.prompt_loader import load_prompt_template
from agenda_insights.logging.logger import Log
from agenda_insights.processor.result import Err, FailureKind, Ok, StageResult

_FAILURE_MESSAGE = "Failed to extract project data from document text"


class StructuredExtractor:
    """Builds the constrained prompt, calls the model and recovers records."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        max_tokens: int = 2000,
        prompt_template_path: Path | None = None,
        categories: Sequence[str] = PROJECT_CATEGORIES,
    ) -> None:
        self._client = client
        self._max_tokens = max_tokens
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._categories = tuple(categories)

    def build_prompt(self, text: str) -> str:
        categories = ", ".join(f"'{name}'" for name in self._categories)
        return self._prompt_template.format(
            categories=f"[{categories}]",
            document_text=text,
        )

    async def extract(self, text: str) -> StageResult[list[ProjectRecord]]:
        """Extract project records from already-redacted text.

        Returns:
            ``Ok`` with the records (an empty list is a valid answer), or
            ``Err`` with ModelFailure / ParseFailure.
        """
        prompt = self.build_prompt(text)
        Log.debug(f"Extraction prompt built ({len(prompt)} chars)")

        response = await self._client.complete(prompt, self._max_tokens)
        if not response.success:
            Log.error(f"Model call failed: {response.error_message}")
            return Err(FailureKind.MODEL_FAILURE, _FAILURE_MESSAGE)

        projects = parse_project_records(response.content)
        if projects is None:
            return Err(FailureKind.PARSE_FAILURE, _FAILURE_MESSAGE)

        Log.info(f"Structured extraction complete: {len(projects)} projects extracted")
        return Ok(projects)
