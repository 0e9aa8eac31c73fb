import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from libreria.api.books import router as books_router
from libreria.api.reservations import router as reservations_router
from libreria.api.users import router as users_router
from libreria.config import settings
from libreria.database import engine
from libreria.errors import Conflict, InvalidState, LibraryError, NotFound, Unavailable

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unavailable: status.HTTP_409_CONFLICT,
    InvalidState: status.HTTP_409_CONFLICT,
    Conflict: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Reservation service starting.")
    yield
    await engine.dispose()
    logger.info("Reservation service stopped.")


app = FastAPI(
    title="Libreria Service",
    description="Users, books and book reservations with rental and late fees",
    version="0.1.0",
    lifespan=lifespan,
    root_path=settings.root_path,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=code, content={"detail": exc.detail})


app.include_router(users_router)
app.include_router(books_router)
app.include_router(reservations_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
