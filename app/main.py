import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException

from app.config import settings
from app.core.errors import AppError
from app.core.rate_limiter import rate_limiter
from app.database import engine, init_db
from app.logging_config import setup_logging
from app.routers import applications, auth, chats, companies, jobs, users

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET_KEY = "replace-with-a-long-random-secret-key"
RATE_LIMITED_PATHS = {"/auth/login", "/auth/register", "/users/login", "/users/register"}

app = FastAPI(
    title="Job Board API",
    description="Companies post jobs, applicants apply, both sides chat per application.",
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
app.include_router(users.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(chats.router)


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_debug=settings.is_development),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing"]
    if missing:
        return JSONResponse(status_code=400, content={"message": "Missing required fields", "missing": missing})
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request",
            "errors": [
                {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
                for err in errors
            ],
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS" or path not in RATE_LIMITED_PATHS:
        return await call_next(request)

    limit = settings.rate_limit_auth_per_min
    if limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.allow(f"{client_ip}:{path}", limit=limit, window_seconds=60)
        if not allowed:
            logger.warning("Rate limit hit: ip=%s path=%s", client_ip, path)
            return JSONResponse(
                status_code=429,
                content={"message": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


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


def check_settings() -> None:
    """Refuse placeholder secrets in production; warn about them elsewhere."""
    problems = []
    if settings.secret_key == PLACEHOLDER_SECRET_KEY:
        problems.append("SECRET_KEY is using the placeholder default")
    if "username:password@" in settings.database_url:
        problems.append("DATABASE_URL uses placeholder credentials")
    env = (settings.app_env or "development").lower()
    for problem in problems:
        if env in {"production", "prod"}:
            raise RuntimeError(f"{problem}; not allowed in production")
        logger.warning("%s. Set it in .env for secure deployments.", problem)


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Board API (env=%s)", settings.app_env)
    check_settings()
    init_db()


@app.get("/")
def root():
    return {"message": "Job Board API. See /docs for the available endpoints."}
