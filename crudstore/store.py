import threading
from typing import Dict, Generic, List, Optional, TypeVar

from loguru import logger

from crudstore.models import Identified

RecordT = TypeVar("RecordT", bound=Identified)


class Store(Generic[RecordT]):
    """
    In-memory collection of records keyed by a store-assigned integer id.

    Every operation holds a single exclusive lock for its whole duration,
    reads included. Ids start at 1 and are never reused, even after delete.
    """

    def __init__(self):
        self._data: Dict[int, RecordT] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, record: RecordT) -> RecordT:
        """Assign the next id to ``record``, store it and return it."""
        with self._lock:
            record_id = self._next_id
            self._next_id += 1
            record.id = record_id
            self._data[record_id] = record
        logger.debug(f"Created record {record_id}")
        return record

    def get(self, record_id: int) -> Optional[RecordT]:
        with self._lock:
            return self._data.get(record_id)

    def get_all(self) -> List[RecordT]:
        # Iteration order of the mapping, callers must not rely on it.
        with self._lock:
            return list(self._data.values())

    def update(self, record_id: int, record: RecordT) -> bool:
        """
        Replace the record stored at ``record_id`` wholesale.

        The id field of ``record`` is stored as given, it is not checked
        against ``record_id``. Returns False when nothing is stored there.
        """
        with self._lock:
            if record_id not in self._data:
                return False
            self._data[record_id] = record
        logger.debug(f"Updated record {record_id}")
        return True

    def delete(self, record_id: int) -> bool:
        with self._lock:
            if record_id not in self._data:
                return False
            del self._data[record_id]
        logger.debug(f"Deleted record {record_id}")
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._data
