import uuid
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from agenda_insights.config.settings import LocationSettings, Settings
from agenda_insights.documents.local_adapter import LocalDocumentSource, item_directory
from agenda_insights.extraction.example_client_adapter import ExampleClientAdapter
from agenda_insights.processor.processor import build_processor
from agenda_insights.redaction.redactor import EMAIL_SENTINEL

MODEL_RESPONSE = (
    'Sure! Here you go: [{"date":"2025-05-01","consultant":"Acme","amount":45000,'
    '"project_name":"Main St Design","category":["Roadway"]}] Thanks.'
)


class TestProcessorIntegration:
    @pytest.mark.asyncio
    async def test_local_agenda_persisted(
        self,
        tmp_path: Path,
        agenda_pdf_bytes: bytes,
        test_settings: Settings,
        db_conn: psycopg.AsyncConnection[Any],
        file_reference_cleanup: list[str],
    ) -> None:
        file_name = f"Allen_{uuid.uuid4().hex}.pdf"
        file_reference_cleanup.append(file_name)
        folder = item_directory(tmp_path, "allen-site", "Agendas", "42")
        folder.mkdir(parents=True)
        (folder / file_name).write_bytes(agenda_pdf_bytes)

        settings = test_settings.model_copy(
            update={
                "locations": {
                    "allen": LocationSettings(
                        site_path="/allen-site",
                        library="Agendas",
                        region="North Texas",
                        discipline="Civil",
                    )
                }
            }
        )
        client = ExampleClientAdapter(response=MODEL_RESPONSE)
        processor = await build_processor(settings, LocalDocumentSource(tmp_path), client)

        result = await processor.process_document("allen", "42")

        assert result.success is True
        assert result.city == "Allen"
        assert result.file_reference == file_name
        assert EMAIL_SENTINEL in client.prompts[0]

        async with db_conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(
                "SELECT city, project_name, category, region, discipline"
                " FROM agenda_insights WHERE file_reference = %s",
                (file_name,),
            )
            rows = await cur.fetchall()
        await db_conn.commit()
        assert rows == [
            {
                "city": "Allen",
                "project_name": "Main St Design",
                "category": "Roadway",
                "region": "North Texas",
                "discipline": "Civil",
            }
        ]
