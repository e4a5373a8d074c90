from collections.abc import Sequence

import psycopg

from agenda_insights.database.connection import get_connection
from agenda_insights.database.models import PersistenceReport
from agenda_insights.extraction.models import ProjectRecord
from agenda_insights.logging.logger import Log

_INSERT_PROJECT_SQL = """
    INSERT INTO agenda_insights
        (city, project_name, consultant, amount, date,
         file_reference, category, region, discipline)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
"""


class AgendaInsightsRepository:
    """Database operations for the agenda_insights table."""

    async def insert_projects(
        self,
        city: str,
        projects: Sequence[ProjectRecord],
        file_reference: str,
    ) -> PersistenceReport:
        """Insert one row per project over a single connection.

        Every row is committed on its own. A failure part-way leaves the
        earlier rows in place and is reported, not raised, so callers must read
        a failed report as "some rows may already be persisted".
        """
        submitted = len(projects)
        if submitted == 0:
            return PersistenceReport(submitted=0, committed=0)

        committed = 0
        try:
            async with get_connection() as conn:
                for project in projects:
                    async with conn.cursor() as cur:
                        await cur.execute(
                            _INSERT_PROJECT_SQL,
                            self._row_params(city, project, file_reference),
                        )
                        affected = max(cur.rowcount, 0)
                    await conn.commit()
                    committed += affected
        except psycopg.Error as exc:
            Log.error(
                f"Database error after {committed} of {submitted} rows: "
                f"{exc.__class__.__name__} (sqlstate={exc.sqlstate})",
                file_reference=file_reference,
            )
            return PersistenceReport(
                submitted=submitted,
                committed=committed,
                error=exc.__class__.__name__,
            )

        Log.info(
            f"Persisted {committed} of {submitted} project rows",
            file_reference=file_reference,
        )
        return PersistenceReport(submitted=submitted, committed=committed)

    @staticmethod
    def _row_params(
        city: str,
        project: ProjectRecord,
        file_reference: str,
    ) -> tuple[object, ...]:
        return (
            city,
            project.project_name,
            project.consultant,
            project.amount,
            project.date,
            file_reference,
            project.category_string(),
            project.region,
            project.discipline,
        )
