"""
Charity Finder Backend - FastAPI Application Entry Point

Discover nearby charities, keep favorites and record donations.
"""

from contextlib import asynccontextmanager
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from core.config import settings
from core.logging import setup_logging, log_request_middleware
from core.database import init_models
from schemas.responses import StandardErrorResponse
from api.v1 import auth, discover, donations, favorites, profile

# Setup logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Charity Finder Backend", env=settings.ENV)
    await init_models()
    yield
    logger.info("Shutting down Charity Finder Backend")


app = FastAPI(
    title="Charity Finder API",
    description="Discover nearby charities, keep favorites and record donations",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENABLE_REQUEST_LOGGING:
    app.middleware("http")(log_request_middleware)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation exceptions."""
    logger.error(
        f"Validation Exception: {exc.errors()} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}"
    )
    user_message = exc.errors()[0].get("msg", "Invalid input data") if exc.errors() else "Invalid input data"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=StandardErrorResponse(message=user_message, detail=jsonable_encoder(exc.errors())).model_dump()
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.error(
        f"HTTP Exception: {exc.detail} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=StandardErrorResponse(message=str(exc.detail), detail=str(exc)).model_dump()
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Server Exception: {exc} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}"
    )
    return JSONResponse(
        status_code=500,
        content=StandardErrorResponse(message="Internal server error", detail=str(exc)).model_dump()
    )


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.APP_NAME, "version": settings.VERSION}


app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(discover.router, prefix="/api/v1/discover", tags=["Discover"])
app.include_router(favorites.router, prefix="/api/v1/users/{user_id}/favorites", tags=["Favorites"])
app.include_router(donations.router, prefix="/api/v1/users/{user_id}/donations", tags=["Donations"])
app.include_router(profile.router, prefix="/api/v1/users/{user_id}/profile", tags=["Profile"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
