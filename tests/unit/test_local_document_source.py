from pathlib import Path

import pytest

from agenda_insights.documents.exceptions import DocumentSourceError
from agenda_insights.documents.local_adapter import LocalDocumentSource, item_directory


@pytest.fixture()
def files_root(tmp_path: Path) -> Path:
    folder = item_directory(tmp_path, "allen-site", "Agendas", "42")
    folder.mkdir(parents=True)
    (folder / "Allen_2025-05-01.pdf").write_bytes(b"%PDF-second")
    (folder / "Allen_2025-04-01.pdf").write_bytes(b"%PDF-first")
    (folder / "notes.txt").write_text("ignored")
    return tmp_path


class TestLocalDocumentSource:
    @pytest.mark.asyncio
    async def test_resolve_collection_id(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root)
        assert await source.resolve_collection_id("/allen-site/") == "allen-site"

    @pytest.mark.asyncio
    async def test_resolve_empty_site_raises(self, files_root: Path) -> None:
        with pytest.raises(DocumentSourceError):
            await LocalDocumentSource(files_root=files_root).resolve_collection_id("/")

    @pytest.mark.asyncio
    async def test_list_documents_sorted_pdfs(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root)
        documents = await source.list_documents("allen-site", "Agendas", "42")
        assert [d.name for d in documents] == ["Allen_2025-04-01.pdf", "Allen_2025-05-01.pdf"]
        assert {d.parent_container_id for d in documents} == {"allen-site/Agendas/42"}

    @pytest.mark.asyncio
    async def test_list_documents_missing_item(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root)
        assert await source.list_documents("allen-site", "Agendas", "99") == []

    @pytest.mark.asyncio
    async def test_open_stream_reads_listed_document(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root)
        document = (await source.list_documents("allen-site", "Agendas", "42"))[0]
        data = await source.open_stream(document.parent_container_id, document.item_id)
        assert data == b"%PDF-first"

    @pytest.mark.asyncio
    async def test_open_stream_missing_file(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root)
        assert await source.open_stream("allen-site/Agendas/42", "gone.pdf") is None

    @pytest.mark.asyncio
    async def test_open_stream_rejects_escape(self, files_root: Path) -> None:
        source = LocalDocumentSource(files_root=files_root / "allen-site")
        with pytest.raises(DocumentSourceError, match="escapes"):
            await source.open_stream("..", "secret.pdf")

    @pytest.mark.asyncio
    async def test_list_documents_rejects_escape(self, files_root: Path) -> None:
        outside = files_root / "outside"
        outside.mkdir()
        (outside / "private.pdf").write_bytes(b"%PDF-private")
        source = LocalDocumentSource(files_root=files_root / "allen-site")
        with pytest.raises(DocumentSourceError, match="escapes"):
            await source.list_documents("..", "outside", ".")
