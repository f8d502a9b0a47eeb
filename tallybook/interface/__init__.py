"""Mini README: Interactive interfaces for Tallybook.

Exports the FastAPI application factory that serves the single-page
tracker. The command line entry point lives in ``main_tracker.py``.
"""

from .web_app import create_application

__all__ = ["create_application"]
