"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from emploirapide.api.limiter import limiter
from emploirapide.config import get_settings
from emploirapide.db.base import init_db
from emploirapide.errors import EmploiRapideError, Unauthenticated, UpstreamError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not configured, skipping table creation")
    yield


app = FastAPI(
    title=f"{settings.app_name} API",
    description="Job board connecting candidates and recruiters in Côte d'Ivoire",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(EmploiRapideError)
async def domain_error_handler(request: Request, exc: EmploiRapideError):
    """Render anticipated failures with their message and status."""
    content = {"detail": exc.message}
    if isinstance(exc, UpstreamError) and exc.details is not None:
        content["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Limite de requêtes atteinte: {exc.detail}"},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Erreur interne du serveur"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from emploirapide.api.routes import applications, auth, candidate, jobs, recruiter, saved_jobs  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
app.include_router(recruiter.router, prefix="/recruiter", tags=["Recruiter"])
app.include_router(applications.router, prefix="/applications", tags=["Applications"])
app.include_router(saved_jobs.router, prefix="/saved-jobs", tags=["Saved jobs"])
app.include_router(candidate.router, prefix="/candidate", tags=["Candidate"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Files written by the local storage backend
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
