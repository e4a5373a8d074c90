from pathlib import Path

from agenda_insights.config.settings import Settings
from agenda_insights.documents.base import BaseDocumentSource
from agenda_insights.documents.graph_adapter import GraphDocumentSource
from agenda_insights.documents.local_adapter import LocalDocumentSource


class DocumentSourceFactory:
    """Creates the configured document store adapter."""

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentSource:
        source = settings.document_source.lower()
        if source == "local":
            return LocalDocumentSource(files_root=Path(settings.local_files_root))
        if source == "graph":
            missing = [
                name
                for name in (
                    "graph_tenant_id",
                    "graph_client_id",
                    "graph_client_secret",
                    "graph_tenant_domain",
                )
                if not getattr(settings, name)
            ]
            if missing:
                raise ValueError(f"Missing Graph configuration: {missing}")
            return GraphDocumentSource(
                tenant_id=settings.graph_tenant_id,
                client_id=settings.graph_client_id,
                client_secret=settings.graph_client_secret,
                tenant_domain=settings.graph_tenant_domain,
                timeout_seconds=settings.graph_timeout_seconds,
            )
        raise ValueError(f"Unknown document source '{source}'. Choose from: ['graph', 'local']")
