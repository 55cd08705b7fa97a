"""Common dependencies for FastAPI routes.

Routes obtain shared resources through these functions so tests can
swap them via ``app.dependency_overrides``.
"""

from __future__ import annotations

from receipt_processor.services.registry import ReceiptRegistry, receipt_registry


def get_registry() -> ReceiptRegistry:
    """Return the process-wide receipt registry."""
    return receipt_registry
