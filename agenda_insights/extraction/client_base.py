from abc import ABC, abstractmethod

from agenda_insights.extraction.models import CompletionResponse


class BaseCompletionClient(ABC):
    """Contract for provider-specific model transports."""

    @abstractmethod
    async def complete(self, prompt: str, max_tokens: int) -> CompletionResponse:
        """Send *prompt* and return the model's text.

        Provider failures are reported through ``CompletionResponse.success``
        and a short, non-sensitive ``error_message``; implementations do not
        raise for them.
        """

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
