import asyncio
from pathlib import Path

from agenda_insights.documents.base import BaseDocumentSource
from agenda_insights.documents.exceptions import DocumentSourceError
from agenda_insights.documents.models import DocumentRef


def item_directory(files_root: Path, collection_id: str, container_id: str, item_id: str) -> Path:
    """Build path to an item folder: {files_root}/{collection}/{container}/{item_id}"""
    return files_root / collection_id / container_id / item_id


class LocalDocumentSource(BaseDocumentSource):
    """Serves agenda PDFs from a local folder tree.

    The container reported for a listed file is its folder relative to
    ``files_root``; the item id is the file name. Paths that resolve outside
    ``files_root`` are rejected.
    """

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    async def resolve_collection_id(self, site_path: str) -> str:
        collection_id = site_path.strip("/")
        if not collection_id:
            raise DocumentSourceError("site_path must not be empty")
        return collection_id

    async def list_documents(
        self,
        collection_id: str,
        container_id: str,
        item_id: str,
    ) -> list[DocumentRef]:
        root = self._files_root.resolve()
        directory = self._contained(
            item_directory(root, collection_id, container_id, item_id)
        )
        if not directory.is_dir():
            return []
        parent = directory.relative_to(root).as_posix()
        return [
            DocumentRef(name=path.name, parent_container_id=parent, item_id=path.name)
            for path in sorted(directory.glob("*.pdf"))
        ]

    async def open_stream(self, container_id: str, item_id: str) -> bytes | None:
        path = self._contained(self._files_root.resolve() / container_id / item_id)
        if not path.is_file():
            return None
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise DocumentSourceError(f"Failed to read {item_id}: {exc.strerror}") from exc

    def _contained(self, candidate: Path) -> Path:
        path = candidate.resolve()
        if not path.is_relative_to(self._files_root.resolve()):
            raise DocumentSourceError("Resolved path escapes the files root")
        return path
