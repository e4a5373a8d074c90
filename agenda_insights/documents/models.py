from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentRef:
    """A document listed by the document store.

    ``item_id`` is the store's opaque identifier and doubles as the
    non-sensitive file reference handed back to callers.
    """

    name: str
    parent_container_id: str
    item_id: str
