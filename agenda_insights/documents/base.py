from abc import ABC, abstractmethod

from agenda_insights.documents.models import DocumentRef


class BaseDocumentSource(ABC):
    """Contract for document store adapters."""

    @abstractmethod
    async def resolve_collection_id(self, site_path: str) -> str:
        """Resolve a configured site path to the store's collection identifier.

        Raises:
            DocumentSourceError: if the site cannot be resolved.
        """

    @abstractmethod
    async def list_documents(
        self,
        collection_id: str,
        container_id: str,
        item_id: str,
    ) -> list[DocumentRef]:
        """List documents attached to *item_id*. Empty list when none match.

        Raises:
            DocumentSourceError: on transport or store failure.
        """

    @abstractmethod
    async def open_stream(self, container_id: str, item_id: str) -> bytes | None:
        """Read the full file content. None when the file is not available.

        Raises:
            DocumentSourceError: on transport or store failure.
        """

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
