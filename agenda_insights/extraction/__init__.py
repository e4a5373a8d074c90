from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.extractor import StructuredExtractor
from agenda_insights.extraction.factory import CompletionClientFactory
from agenda_insights.extraction.models import PROJECT_CATEGORIES, ProjectRecord

__all__ = [
    "PROJECT_CATEGORIES",
    "BaseCompletionClient",
    "CompletionClientFactory",
    "ProjectRecord",
    "StructuredExtractor",
]
