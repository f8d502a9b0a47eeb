"""Mini README: FastAPI-powered single-page finance tracker.

Structure:
    * create_application - application factory wiring routes and templates.
    * build_default_ledger - loads the ledger from the configured JSON store.

The page shows the balance, income and expense totals, forms for new
entries, and the history list with edit/delete controls. Mutating routes
return a fresh ledger snapshot so the browser can re-render every row
after each change, keeping positional indices current.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import get_settings
from ..finance import (
    EMPTY_HISTORY_MESSAGE,
    INVALID_INPUT_MESSAGE,
    Ledger,
    OutOfRange,
    ValidationError,
    build_rows,
    format_totals,
    snapshot,
)
from ..logging_utils import get_logger
from ..storage import JsonFileBlobStore

LOGGER = get_logger(__name__)


def build_default_ledger() -> Ledger:
    """Load the ledger from the store configured in settings."""

    settings = get_settings()
    store = JsonFileBlobStore(settings.store_path)
    return Ledger.load(store, key=settings.storage_key)


def create_application(ledger: Optional[Ledger] = None) -> FastAPI:
    """Create the FastAPI application around a single ledger instance."""

    app = FastAPI(title="Tallybook", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    if ledger is None:
        ledger = build_default_ledger()
    app.state.ledger = ledger

    def ledger_response() -> JSONResponse:
        return JSONResponse(snapshot(ledger))

    @app.get("/", response_class=HTMLResponse)
    async def tracker_page(request: Request) -> HTMLResponse:
        """Render the tracker with current totals and history."""

        rows = build_rows(ledger.transactions)
        LOGGER.debug("Rendering tracker with %s rows", len(rows))
        return templates.TemplateResponse(
            request,
            "tracker.html",
            {
                "rows": rows,
                "totals": format_totals(ledger.totals()),
                "empty_message": EMPTY_HISTORY_MESSAGE,
                "invalid_input_message": INVALID_INPUT_MESSAGE,
            },
        )

    @app.get("/api/ledger")
    async def ledger_state() -> JSONResponse:
        """Return rows and totals for client-side rendering."""

        return ledger_response()

    @app.post("/transactions")
    async def add_transaction(
        name: str = Form(""),
        amount: str = Form(""),
        kind: str = Form("income"),
    ) -> JSONResponse:
        """Record a new income or expense entry."""

        try:
            ledger.add(name, amount, kind)
        except ValidationError as error:
            LOGGER.info("Rejected new transaction: %s", error)
            raise HTTPException(status_code=400, detail=INVALID_INPUT_MESSAGE) from error
        return ledger_response()

    @app.post("/transactions/{index}/edit")
    async def edit_transaction(
        index: int,
        name: str = Form(""),
        amount: str = Form(""),
    ) -> JSONResponse:
        """Replace the name and magnitude of the entry at ``index``."""

        try:
            ledger.update(index, name, amount)
        except OutOfRange as error:
            LOGGER.info("Rejected edit: %s", error)
            raise HTTPException(status_code=404, detail=INVALID_INPUT_MESSAGE) from error
        except ValidationError as error:
            LOGGER.info("Rejected edit at position %s: %s", index, error)
            raise HTTPException(status_code=400, detail=INVALID_INPUT_MESSAGE) from error
        return ledger_response()

    @app.post("/transactions/{index}/delete")
    async def delete_transaction(index: int) -> JSONResponse:
        """Remove the entry at ``index``."""

        try:
            ledger.remove(index)
        except OutOfRange as error:
            LOGGER.info("Rejected delete: %s", error)
            raise HTTPException(status_code=404, detail=INVALID_INPUT_MESSAGE) from error
        return ledger_response()

    @app.post("/reset")
    async def reset_ledger() -> JSONResponse:
        """Drop every entry after the user confirmed the reset dialog."""

        ledger.clear()
        return ledger_response()

    return app
