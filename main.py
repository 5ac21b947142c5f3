import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

import models  # noqa: F401  registers every table on Base.metadata
from core.config import get_settings
from database import engine, init_models
from routers import auth_router, job_router, campaign_router
from utils.exceptions import AppError

settings = get_settings()

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not set")

    logger.info("Starting up application...")
    await init_models()
    yield
    logger.info("Shutting down application...")
    await engine.dispose()


app = FastAPI(title="Collab Platform API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path"))
        message = err["msg"].removeprefix("Value error, ")
        details.append({"field": field, "message": message})
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "An unexpected error occurred"},
    )


app.include_router(auth_router.router)
app.include_router(job_router.router)
app.include_router(campaign_router.router)


@app.get("/")
def root():
    return {"message": "Collab Platform backend is running"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
