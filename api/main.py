import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bilty import router as bilty_router
from core import config, db
from core.logging_config import setup_logging
from core.origins import OriginGateMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(config.log_level())
    # Initialize the DB pool once per process.
    await db.init_pool()
    await db.check_connection()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

ALLOWED_ORIGINS = config.allowed_origins()

# Browser origins outside the allow-list never reach a route.
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(OriginGateMiddleware, allowed_origins=ALLOWED_ORIGINS)

app.include_router(bilty_router.router, tags=["bilty"])


@app.exception_handler(StarletteHTTPException)
async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "malformed request")
    if where:
        message = f"{where}: {message}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {message}"},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "roadways-ledger api"}


if __name__ == "__main__":
    setup_logging(config.log_level())
    logger.info("server_starting host=%s port=%s", config.host(), config.port())
    uvicorn.run(app, host=config.host(), port=config.port(), log_level=config.log_level().lower())
