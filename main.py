from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import logging

import uvicorn

from errors import ServiceError
from routes import chat, health, students
from settings import get_settings
from storage import get_store

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_store()
    if get_settings().openrouter_api_key:
        logger.info("OPENROUTER_API_KEY is loaded.")
    else:
        logger.warning("OPENROUTER_API_KEY is NOT set; /chat will be unavailable.")
    yield


app = FastAPI(title="Student Information System API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_methods,
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    logger.info("REQUEST  %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.info("RESPONSE %s %s - status: %d, time: %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning("%s %s - %s (%d): %s", request.method, request.url.path, type(exc).__name__, exc.status_code, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body') or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
    logger.warning("%s %s - invalid request: %s", request.method, request.url.path, details)
    return _error(400, f"Invalid request: {details}")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown paths and unserved methods both read as "Not Found"
    if exc.status_code in (404, 405):
        return _error(404, "Not Found")
    return _error(exc.status_code, str(exc.detail))


app.include_router(health.router)
app.include_router(students.router)
app.include_router(chat.router)


def run():
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
