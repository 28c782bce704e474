from dotenv import load_dotenv

load_dotenv()

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import analytics
from app.api import system
from app.api import waste
from app.core.errors import TransientFetchError, ValidationError
from app.database import init_models

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _error_details(errors) -> list:
    # rejected input is not echoed back, it may not even be valid JSON (NaN, Infinity)
    return [{key: value for key, value in error.items() if key != "input"} for error in errors]


app = FastAPI(
    title="EcoSort Backend",
    description="""
    API for the EcoSort waste-sorting assistant.
    Logs scanned waste items per user and serves daily, per-category
    analytics with environmental-impact estimates and achievements.
    """,
    version="1.0.0",
    contact={
        "name": "EcoSort Dev Team",
    },
    license_info={
        "name": "MIT",
    },
)

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL, "http://127.0.0.1:5173", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "detail": jsonable_encoder(_error_details(exc.errors)) or str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "detail": jsonable_encoder(_error_details(exc.errors()))},
    )


# a failed load must stay distinguishable from "no activity"
@app.exception_handler(TransientFetchError)
async def transient_fetch_error_handler(request: Request, exc: TransientFetchError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "store_unavailable", "detail": str(exc), "retryable": True},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_server_error"},
    )


@app.on_event("startup")
async def on_startup():
    await init_models()


# Public Routes
app.include_router(system.router, prefix="/api", tags=["System"])

# protected Routes
app.include_router(waste.router, prefix="/api/waste", tags=["Waste Scans"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"])


@app.get("/")
async def root():
    return {"message": "EcoSort API is running"}
