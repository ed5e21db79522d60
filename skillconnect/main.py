import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from skillconnect.config import settings
from skillconnect.core.errors import ServiceError, user_message
from skillconnect.core.rate_limiter import rate_limiter
from skillconnect.database import init_db, engine
from skillconnect.logging_config import setup_logging
from skillconnect.routers import admin, applications, auth, employer, jobs

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SkillConnect API",
    description="Job marketplace: seekers, employers and admin moderation.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(employer.router)
app.include_router(admin.router)

app.mount("/storage", StaticFiles(directory=settings.storage_dir, check_dir=False), name="storage")

CONTENT_SECURITY_POLICY = " ".join(
    [
        "default-src 'self';",
        "img-src 'self' data: https:;",
        "object-src 'none';",
        "frame-ancestors 'none';",
        "base-uri 'self';",
        "form-action 'self';",
    ]
)


def _is_production() -> bool:
    return (settings.app_env or "development").lower() in {"production", "prod"}


@app.exception_handler(ServiceError)
async def service_error_handler(request, exc: ServiceError):
    logger.warning("%s error on %s %s: %s", exc.kind.value, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": user_message(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS":
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    limit = None
    window = 60
    if path in {"/auth/login", "/auth/signup"}:
        limit = settings.rate_limit_auth_per_min
    elif path == "/applications/cv":
        limit = settings.rate_limit_upload_per_min

    if limit is not None and limit > 0:
        key = f"{client_ip}:{path}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=window)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    if _is_production():
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
    return response


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting SkillConnect API")
    if _is_production():
        if settings.secret_key == "replace-with-a-long-random-secret-key":
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.secret_key == "replace-with-a-long-random-secret-key":
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
    init_db()


@app.get("/")
def root():
    return {"message": "SkillConnect API. Browse jobs at /jobs."}
