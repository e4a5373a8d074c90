import asyncio
import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import psycopg
import pytest

from agenda_insights.database.repositories.agenda_insights_repository import (
    AgendaInsightsRepository,
)
from agenda_insights.extraction.models import ProjectRecord

_GET_CONNECTION = (
    "agenda_insights.database.repositories.agenda_insights_repository.get_connection"
)


def _async_cm(value: object) -> MagicMock:
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=value)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


def _make_connection(rowcount: int = 1) -> tuple[MagicMock, MagicMock, MagicMock]:
    cur = MagicMock()
    cur.execute = AsyncMock()
    cur.rowcount = rowcount
    conn = MagicMock()
    conn.cursor.return_value = _async_cm(cur)
    conn.commit = AsyncMock()
    conn_cm = _async_cm(conn)
    return conn_cm, conn, cur


def _projects(count: int) -> list[ProjectRecord]:
    return [
        ProjectRecord(
            date=datetime.date(2025, 5, 1),
            consultant="Acme",
            amount=Decimal("45000"),
            project_name=f"Project {i}",
            categories=["Roadway", "Traffic"],
            region="North Texas",
            discipline="Civil",
        )
        for i in range(count)
    ]


class TestInsertProjects:
    @pytest.mark.asyncio
    async def test_all_rows_committed(self) -> None:
        conn_cm, conn, cur = _make_connection()
        with patch(_GET_CONNECTION, return_value=conn_cm) as get_connection:
            report = await AgendaInsightsRepository().insert_projects(
                "Allen", _projects(3), "item-9"
            )
        assert report.submitted == 3
        assert report.committed == 3
        assert report.error is None
        assert report.succeeded
        get_connection.assert_called_once()
        assert cur.execute.await_count == 3
        assert conn.commit.await_count == 3

    @pytest.mark.asyncio
    async def test_row_parameters(self) -> None:
        conn_cm, _, cur = _make_connection()
        with patch(_GET_CONNECTION, return_value=conn_cm):
            await AgendaInsightsRepository().insert_projects("Allen", _projects(1), "item-9")
        params = cur.execute.await_args.args[1]
        assert params == (
            "Allen",
            "Project 0",
            "Acme",
            Decimal("45000"),
            datetime.date(2025, 5, 1),
            "item-9",
            "Roadway, Traffic",
            "North Texas",
            "Civil",
        )

    @pytest.mark.asyncio
    async def test_empty_batch_skips_database(self) -> None:
        with patch(_GET_CONNECTION) as get_connection:
            report = await AgendaInsightsRepository().insert_projects("Allen", [], "item-9")
        assert report.submitted == 0
        assert report.committed == 0
        assert report.succeeded
        get_connection.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_partway_keeps_earlier_rows(self) -> None:
        conn_cm, conn, cur = _make_connection()
        cur.execute.side_effect = [None, psycopg.OperationalError("server closed"), None]
        with patch(_GET_CONNECTION, return_value=conn_cm):
            report = await AgendaInsightsRepository().insert_projects(
                "Allen", _projects(3), "item-9"
            )
        assert report.submitted == 3
        assert report.committed == 1
        assert report.error == "OperationalError"
        assert not report.succeeded
        assert conn.commit.await_count == 1
        conn_cm.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unaffected_rows_are_a_mismatch(self) -> None:
        conn_cm, _, _ = _make_connection(rowcount=0)
        with patch(_GET_CONNECTION, return_value=conn_cm):
            report = await AgendaInsightsRepository().insert_projects(
                "Allen", _projects(2), "item-9"
            )
        assert report.committed == 0
        assert report.error is None
        assert not report.succeeded

    @pytest.mark.asyncio
    async def test_cancellation_releases_connection(self) -> None:
        conn_cm, _, cur = _make_connection()
        cur.execute.side_effect = asyncio.CancelledError()
        with patch(_GET_CONNECTION, return_value=conn_cm):
            with pytest.raises(asyncio.CancelledError):
                await AgendaInsightsRepository().insert_projects(
                    "Allen", _projects(2), "item-9"
                )
        conn_cm.__aexit__.assert_awaited_once()
