"""In-memory receipt registry.

Holds every submitted receipt for the lifetime of the process, keyed by
a random UUID. All access goes through a single lock so ``insert`` and
``lookup`` are linearizable with respect to each other; callers only
ever receive copies, never the stored objects.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict

from receipt_processor.models.schemas import Receipt


logger = logging.getLogger(__name__)


class ReceiptNotFound(KeyError):
    """Raised when no receipt is stored under the requested id."""


class ReceiptRegistry:
    def __init__(self) -> None:
        self._receipts: Dict[uuid.UUID, Receipt] = {}
        self._lock = threading.Lock()

    def insert(self, receipt: Receipt) -> uuid.UUID:
        """Store a copy of ``receipt`` under a fresh id and return the id."""
        stored = receipt.model_copy(deep=True)
        with self._lock:
            receipt_id = uuid.uuid4()
            while receipt_id in self._receipts:
                receipt_id = uuid.uuid4()
            self._receipts[receipt_id] = stored
            count = len(self._receipts)
        logger.debug("Stored receipt %s (%d held)", receipt_id, count)
        return receipt_id

    def lookup(self, receipt_id: uuid.UUID) -> Receipt:
        """Return a copy of the receipt stored under ``receipt_id``.

        :raises ReceiptNotFound: if the id was never returned by ``insert``.
        """
        with self._lock:
            stored = self._receipts.get(receipt_id)
        if stored is None:
            raise ReceiptNotFound(str(receipt_id))
        return stored.model_copy(deep=True)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)


# Export a singleton instance for easy import
receipt_registry = ReceiptRegistry()
