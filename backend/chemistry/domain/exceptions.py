from typing import Iterable, List, Tuple


class ChemistryError(Exception):
    """Base class for errors raised by the page tree and its collaborators."""


class RecordNotFound(ChemistryError):
    """No row with the requested id."""


class PageNotFound(RecordNotFound):
    def __init__(self, path: str | None = None, message: str = "Page not found"):
        super().__init__(message)
        self.path = path


class ValidationError(ChemistryError):
    """
    Field-level failures, collected as (field, message) pairs.
    """

    def __init__(self, errors: Iterable[Tuple[str, str]]):
        self.errors: List[Tuple[str, str]] = list(errors)
        super().__init__("; ".join(f"{field} {message}" for field, message in self.errors))

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([(field, message)])

    def to_list(self):
        return [{"field": field, "message": message} for field, message in self.errors]


class CycleError(ChemistryError):
    def __init__(self, page_id: str, parent_id: str):
        super().__init__(f"Page {page_id} cannot be moved under its own descendant {parent_id}")
        self.page_id = page_id
        self.parent_id = parent_id


class PersistenceFailure(ChemistryError):
    """The database could not be reached or refused the operation."""
