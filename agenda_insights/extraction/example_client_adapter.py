"""Offline completion client.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in CompletionClientFactory.
"""

from typing import ClassVar

from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.models import CompletionResponse


class ExampleClientAdapter(BaseCompletionClient):
    """Returns a fixed, valid extraction response without any network call.

    Useful for local runs of the whole pipeline and as a template for real
    provider adapters. The default answer is an empty project list.
    """

    DEFAULT_RESPONSE: ClassVar[str] = "[]"

    def __init__(self, response: str | None = None) -> None:
        self._response = self.DEFAULT_RESPONSE if response is None else response
        self.prompts: list[str] = []

    async def complete(self, prompt: str, max_tokens: int) -> CompletionResponse:
        _ = max_tokens
        self.prompts.append(prompt)
        return CompletionResponse(success=True, content=self._response)
