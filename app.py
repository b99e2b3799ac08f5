from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from docstore import DOCUMENT_DELETED, DOCUMENT_INSERTED, DOCUMENT_UPDATED, DocumentStore
from docstore.repositories import AsyncDiskDocumentRepository

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.repository.store.close()


def _log_event(event: str):
    def _listener(payload: dict) -> None:
        logger.debug("STORE EVENT: %s collection=%s", event, payload.get("collection"))

    return _listener


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """
    Build the demo app. Run with `uvicorn app:create_app --factory`.

    Without `store`, one is created from environment settings (and local.env).
    """
    load_dotenv("local.env")

    from endpoints.documents_endpoints import router as documents_router
    from settings import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    if store is None:
        store = DocumentStore(settings.database_file, settings.store_options())
    for event in (DOCUMENT_INSERTED, DOCUMENT_UPDATED, DOCUMENT_DELETED):
        store.on(event, _log_event(event))

    app = FastAPI(lifespan=lifespan)
    app.state.repository = AsyncDiskDocumentRepository(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(documents_router)

    return app
