from agenda_insights.extraction.models import ProjectRecord


def enrich(records: list[ProjectRecord], region: str, discipline: str) -> list[ProjectRecord]:
    """Stamp the location's region and discipline onto every record, in place."""
    for record in records:
        record.region = region
        record.discipline = discipline
    return records
