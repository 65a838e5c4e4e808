"""
Request-for-quote builder.

Lines live only in process memory, one builder per signed-in user, and are
never written to the database. A restart or an idle session past its TTL
starts the user over with an empty RFQ.
"""

import threading
import time
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from cachetools import TTLCache

from solar_inventory.core_settings import get_settings

DEFAULT_UNIT = "pcs"

REQUIRED_SUPPLIER_FIELDS = (
    ("supplier_name", "Supplier name is required"),
    ("supplier_address", "Supplier address is required"),
    ("supplier_email", "Supplier email is required"),
)


class RFQValidationError(ValueError):
    """Raised with a user-facing message when an RFQ cannot be exported."""


@dataclass
class RFQLine:
    id: str
    item_id: int
    name: str
    unit: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


class RFQBuilder:
    """
    Lines for one user's RFQ.

    Requests from the same user can run concurrently in the worker
    threadpool, so every read and mutation holds the builder's lock.
    """

    def __init__(self):
        self.lines: List[RFQLine] = []
        self._lock = threading.RLock()

    def add(self, item: Any, quantity: int) -> RFQLine:
        """Merge into the line for ``item`` or append a new one."""
        with self._lock:
            for line in self.lines:
                if line.item_id == item.id:
                    line.quantity += quantity
                    return line
            line = RFQLine(
                id=f"rfq-{item.id}-{int(time.time() * 1000)}",
                item_id=item.id,
                name=item.name,
                unit=getattr(item, "unit", None) or DEFAULT_UNIT,
                quantity=quantity,
                unit_price=item.unit_price,
            )
            self.lines.append(line)
            return line

    def remove(self, line_id: str) -> Optional[RFQLine]:
        """Drop the line and return it, or None when no such line exists."""
        with self._lock:
            removed = self.get(line_id)
            if removed is not None:
                self.lines = [line for line in self.lines if line.id != line_id]
            return removed

    def set_quantity(self, line_id: str, quantity: int) -> Optional[RFQLine]:
        with self._lock:
            line = self.get(line_id)
            if line is not None:
                line.quantity = max(1, quantity)
            return line

    def get(self, line_id: str) -> Optional[RFQLine]:
        with self._lock:
            return next((line for line in self.lines if line.id == line_id), None)

    def clear(self) -> None:
        with self._lock:
            self.lines = []

    def snapshot(self) -> List[RFQLine]:
        """Copies of the current lines, safe to read after the lock is released."""
        with self._lock:
            return [replace(line) for line in self.lines]

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.lines)

    @property
    def total(self) -> float:
        with self._lock:
            return sum(line.line_total for line in self.lines)

    def validate_for_export(self, supplier_name: str, supplier_address: str, supplier_email: str) -> None:
        values = {
            "supplier_name": supplier_name,
            "supplier_address": supplier_address,
            "supplier_email": supplier_email,
        }
        for field, message in REQUIRED_SUPPLIER_FIELDS:
            if not (values[field] or "").strip():
                raise RFQValidationError(message)
        if not self.count:
            raise RFQValidationError("Select at least one item")


class RFQSessionStore:
    """Per-user builders held in a bounded TTL cache."""

    def __init__(self, maxsize: int, ttl: int):
        self._sessions: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._lock = threading.Lock()

    def get(self, user_id: int) -> RFQBuilder:
        with self._lock:
            builder = self._sessions.get(user_id)
            if builder is None:
                builder = RFQBuilder()
            # re-insert to refresh the TTL on every touch
            self._sessions[user_id] = builder
            return builder

    def discard(self, user_id: int) -> None:
        with self._lock:
            self._sessions.pop(user_id, None)


_settings = get_settings()
rfq_sessions = RFQSessionStore(maxsize=_settings.RFQ_MAX_SESSIONS, ttl=_settings.RFQ_SESSION_TTL_SECONDS)


def get_rfq_sessions() -> RFQSessionStore:
    return rfq_sessions
