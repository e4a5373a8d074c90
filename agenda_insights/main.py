import argparse
import asyncio
import json
import sys

from agenda_insights.config.settings import Settings
from agenda_insights.database.connection import close_pool, init_pool
from agenda_insights.documents.factory import DocumentSourceFactory
from agenda_insights.extraction.factory import CompletionClientFactory
from agenda_insights.logging.logger import Log
from agenda_insights.processor.processor import build_processor


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="agenda_insights",
        description="Extract engineering projects from one council agenda document.",
    )
    parser.add_argument("location_id", help="configured location identifier")
    parser.add_argument("item_id", help="document library item identifier")
    return parser.parse_args(argv)


async def run(location_id: str, item_id: str) -> int:
    """Initialize pool -> build dependencies -> process one item -> print result."""
    settings = Settings()
    Log.configure(settings.log_level)

    document_source = DocumentSourceFactory.create(settings)
    completion_client = CompletionClientFactory.create(settings)
    try:
        await init_pool(settings)
        processor = await build_processor(settings, document_source, completion_client)
        result = await processor.process_document(location_id, item_id)
    finally:
        await close_pool()
        await completion_client.aclose()
        await document_source.aclose()

    print(json.dumps(result.to_response(), indent=2))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    sys.exit(asyncio.run(run(args.location_id, args.item_id)))


if __name__ == "__main__":
    main()
