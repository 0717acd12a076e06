"""
In-memory persistence gateway.

Rows live in insertion-ordered dicts keyed by an auto-incrementing integer.
Everything is lost when the store instance goes away; used for tests and
demos (STORAGE_BACKEND=memory). Rows are deep-copied in and out, so callers
never share nested values such as quiz question options with the store.
"""
import copy
from typing import Any, Dict, List, Optional

from app.core.exceptions import DuplicateUsernameError
from app.storage.base import Repository, Row, Storage, column_defaults

# entity -> columns that must be unique across rows
UNIQUE_COLUMNS = {
    "users": ("username",),
}


class InMemoryRepository(Repository):

    def __init__(self, name: str, storage: "InMemoryStorage"):
        super().__init__(name, storage)
        self._rows: Dict[int, Row] = {}
        self._next_id = 1

    def _check_unique(self, values: Row, row_id: Optional[int] = None) -> None:
        for column in UNIQUE_COLUMNS.get(self.name, ()):
            if column not in values:
                continue
            for existing_id, row in self._rows.items():
                if existing_id != row_id and row[column] == values[column]:
                    raise DuplicateUsernameError(values[column])

    async def get(self, row_id: int) -> Optional[Row]:
        row = self._rows.get(row_id)
        return copy.deepcopy(row) if row is not None else None

    async def list(self) -> List[Row]:
        return [copy.deepcopy(row) for row in self._rows.values()]

    async def list_by(self, field: str, value: Any, order_by: Optional[str] = None) -> List[Row]:
        if field not in self.columns:
            raise ValueError(f"Unknown column for {self.name}: {field}")
        rows = [copy.deepcopy(row) for row in self._rows.values() if row[field] == value]
        if order_by:
            rows.sort(key=lambda row: (row[order_by], row["id"]))
        return rows

    async def exists_by(self, field: str, value: Any) -> bool:
        return any(row[field] == value for row in self._rows.values())

    async def _insert(self, values: Row) -> Row:
        self._check_unique(values)
        row_id = self._next_id
        self._next_id += 1
        row = {"id": row_id, **column_defaults(self.name), **copy.deepcopy(values)}
        self._rows[row_id] = row
        return copy.deepcopy(row)

    async def _update(self, row_id: int, values: Row) -> Optional[Row]:
        row = self._rows.get(row_id)
        if row is None:
            return None
        self._check_unique(values, row_id)
        row.update(copy.deepcopy(values))
        return copy.deepcopy(row)

    async def _delete(self, row_id: int) -> bool:
        return self._rows.pop(row_id, None) is not None


class InMemoryStorage(Storage):
    """Ordered-map store; one instance per process or per test"""

    backend_name = "memory"

    def create_repository(self, name: str) -> Repository:
        return InMemoryRepository(name, self)
