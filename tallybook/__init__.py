"""Mini README: Core package initializer for the Tallybook finance tracker.

Tallybook records income and expense entries, derives balance totals, and
persists the ledger to a local blob store between sessions. The package root
only re-exports the logging helper so importing it stays cheap; the ledger,
storage, and interface layers live in their own subpackages.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
