import datetime
from dataclasses import dataclass, field
from decimal import Decimal

PROJECT_CATEGORIES: tuple[str, ...] = (
    "Bridge or Structure",
    "Drainage",
    "Roadway",
    "Traffic",
    "Utility",
    "Replacement",
    "Asset Management",
    "Railroad",
    "Drainage/Stormwater Management",
    "Water Line",
    "Street Improvement",
    "Lighting or Signals",
    "Utility Coordination",
    "Wastewater Sewer",
    "Wastewater Treatment Plant",
    "Traffic Report",
    "Permit (Railroad)",
    "Permit (Wastewater)",
    "Permit (Other)",
)


@dataclass
class ProjectRecord:
    """One engineering project extracted from an agenda.

    ``region`` and ``discipline`` are filled by the enricher, never by the model.
    """

    date: datetime.date | None = None
    consultant: str = ""
    amount: Decimal = Decimal("0")
    project_name: str = ""
    categories: list[str] = field(default_factory=list)
    region: str = ""
    discipline: str = ""

    def category_string(self) -> str:
        """Flat storage form. Names containing commas are not escaped."""
        return ", ".join(self.categories)


@dataclass(frozen=True)
class CompletionResponse:
    """Outcome of one model transport call."""

    success: bool
    content: str = ""
    error_message: str = ""
