# app/main.py
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from app.api import runs, service_info
from app.config import settings
from app.gql.provider import create_graphql_app
from app.singletons import close_clients
from app.domain.errors import (
    BadRequestError, MalformedDocumentError, NotFoundError, TransportError, UnknownFieldError,
)
from pydantic import ValidationError as PydanticValidationError

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE = LOG_DIR / "workflow_search.log"


def _configure_logging():
    logger = logging.getLogger("workflow_search")
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(fmt)
        logger.addHandler(stream_handler)

        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5)
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning("Failed to initialize file logging at %s: %s", LOG_FILE, exc)

    logger.propagate = False
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)

def create_app() -> FastAPI:
    _configure_logging()
    logger = logging.getLogger("workflow_search")
    logger.info("[es] host=%s workflow_index=%s task_index=%s",
                settings.elasticsearch_host, settings.workflow_index, settings.task_index)

    app = FastAPI(title="Workflow Search")

    @app.on_event("shutdown")
    async def _close_clients():
        await close_clients()

    # Routers
    app.include_router(service_info.router)
    app.include_router(runs.router)
    app.mount("/graphql", create_graphql_app(debug=settings.log_level == "DEBUG"))

    # Exception handlers
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND,
                            content={"error":"NotFound","detail":exc.what})

    @app.exception_handler(UnknownFieldError)
    async def unknown_field_handler(_: Request, exc: UnknownFieldError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"error":"UnknownField","detail":exc.detail})

    @app.exception_handler(BadRequestError)
    async def badreq_handler(_: Request, exc: BadRequestError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"error":"BadRequest","detail":exc.detail})

    @app.exception_handler(MalformedDocumentError)
    async def malformed_handler(_: Request, exc: MalformedDocumentError):
        logger.error("[mapper] %s", exc.detail)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content={"error":"MalformedDocument","detail":exc.detail})

    @app.exception_handler(TransportError)
    async def transport_handler(_: Request, exc: TransportError):
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY,
                            content={"error":"Transport","detail":exc.detail})

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_handler(_: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"error":"ValidationError","detail":exc.errors()}),
        )

    return app

# Instantiate for uvicorn
app = create_app()
