"""Invoice number generators.

Numbers look like ``INV-202503-0042``: the year and month the invoice was
issued, then a four-digit suffix.
"""

from __future__ import annotations

import json
import logging
import random
import threading
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)


def _prefix(issued_on: date) -> str:
    return f"INV-{issued_on.year}{issued_on.month:02d}"


class InvoiceNumberGenerator(ABC):
    @abstractmethod
    def next_number(self, issued_on: date) -> str: ...


class RandomInvoiceNumberGenerator(InvoiceNumberGenerator):
    """Pseudorandom suffix in 1000-9999.

    Display-only fallback: two invoices in the same month can collide.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def next_number(self, issued_on: date) -> str:
        return f"{_prefix(issued_on)}-{self.rng.randint(1000, 9999)}"


class SequentialInvoiceNumberGenerator(InvoiceNumberGenerator):
    """Per year-month counter, unique within the lifetime of this instance.

    Seed ``start_at`` with the last number issued for a month to continue an
    existing sequence.
    """

    def __init__(self, start_at: dict[str, int] | None = None) -> None:
        self._counters: dict[str, int] = dict(start_at or {})
        self._lock = threading.Lock()

    def next_number(self, issued_on: date) -> str:
        key = f"{issued_on.year}-{issued_on.month:02d}"
        with self._lock:
            seq = self._counters.get(key, 0) + 1
            self._counters[key] = seq
            self._save(dict(self._counters))
        logger.debug("Issued invoice sequence %d for %s", seq, key)
        return f"{_prefix(issued_on)}-{seq:04d}"

    def last_issued(self, year: int, month: int) -> int:
        return self._counters.get(f"{year}-{month:02d}", 0)

    def _save(self, counters: dict[str, int]) -> None:
        """Called under the lock after each number; counters stay in memory by default."""


class FileInvoiceNumberGenerator(SequentialInvoiceNumberGenerator):
    """Sequential numbers whose per-month counters live in a JSON file.

    The file is rewritten after every issued number, so separate runs continue
    the same sequence.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(start_at=self._load())

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        counters = json.loads(self.path.read_text())
        logger.debug("Loaded invoice counters from %s: %s", self.path, counters)
        return {str(k): int(v) for k, v in counters.items()}

    def _save(self, counters: dict[str, int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(counters, indent=2, sort_keys=True))
        tmp.replace(self.path)


class DraftInvoiceNumberGenerator(InvoiceNumberGenerator):
    """Placeholder numbers for previews; never consumes a real sequence."""

    def next_number(self, issued_on: date) -> str:
        return f"{_prefix(issued_on)}-DRAFT"
