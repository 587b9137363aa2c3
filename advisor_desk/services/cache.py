# advisor_desk/services/cache.py
import uuid
from typing import Dict, Generic, List, Optional, Any, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)

TEMP_PREFIX = "pending-"


class PendingList(Generic[R]):
    """Local copy of a sub-record list with an overlay of unconfirmed writes.

    Writes are staged before the store call. ``confirm`` folds a staged
    write into the confirmed list; ``revert`` drops it so a failed write
    leaves the list exactly as it was.
    """

    def __init__(self, records: Optional[List[R]] = None):
        self._confirmed: List[R] = list(records or [])
        self._inserts: Dict[str, R] = {}
        self._updates: Dict[str, Dict[str, Any]] = {}
        self._deletes: Dict[str, str] = {}

    @property
    def items(self) -> List[R]:
        """Pending inserts (newest first), then confirmed records with overlay applied"""
        deleted = set(self._deletes.values())
        merged = list(reversed(list(self._inserts.values()))) + self._confirmed
        result = []
        for record in merged:
            if record.id in deleted:
                continue
            changes = self._updates.get(record.id)
            result.append(record.model_copy(update=changes) if changes else record)
        return result

    @property
    def has_pending(self) -> bool:
        return bool(self._inserts or self._updates or self._deletes)

    def get(self, record_id: str) -> Optional[R]:
        for record in self.items:
            if record.id == record_id:
                return record
        return None

    def replace_all(self, records: List[R]) -> None:
        self._confirmed = list(records)

    # Staging

    def stage_insert(self, record: R) -> str:
        token = f"{TEMP_PREFIX}{uuid.uuid4().hex[:12]}"
        self._inserts[token] = record.model_copy(update={"id": token})
        return token

    def stage_update(self, record_id: str, **changes) -> str:
        self._updates.setdefault(record_id, {}).update(changes)
        return record_id

    def stage_delete(self, record_id: str) -> str:
        token = f"delete:{record_id}"
        self._deletes[token] = record_id
        return token

    # Resolution

    def confirm(self, token: str, record: Optional[R] = None) -> None:
        """Merge a staged write; ``record`` is the server copy for inserts"""
        if token in self._inserts:
            staged = self._inserts.pop(token)
            self._confirmed.insert(0, record if record is not None else staged)
        elif token in self._deletes:
            record_id = self._deletes.pop(token)
            self._confirmed = [r for r in self._confirmed if r.id != record_id]
            self._updates.pop(record_id, None)
        elif token in self._updates:
            changes = self._updates.pop(token)
            if record is not None:
                changes = {**changes, **record.model_dump(exclude={"id"})}
            self._confirmed = [
                r.model_copy(update=changes) if r.id == token else r
                for r in self._confirmed
            ]

    def revert(self, token: str) -> None:
        self._inserts.pop(token, None)
        self._deletes.pop(token, None)
        self._updates.pop(token, None)
