from dataclasses import dataclass


@dataclass(frozen=True)
class PersistenceReport:
    """How much of a batch reached the agenda_insights table.

    Rows are committed one by one, so ``committed`` may be above zero even
    when ``error`` is set.
    """

    submitted: int
    committed: int
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.committed == self.submitted
