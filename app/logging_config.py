import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Third-party loggers that drown out request-level messages at INFO.
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.pool")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        try:
            from app.config import settings
            level = settings.log_level
        except Exception:
            return logging.INFO
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None, log_sql: bool | None = None) -> None:
    """Configure the root logger: one stdout handler, app-wide level, quiet dependencies."""
    resolved = _resolve_level(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(resolved)
    if root.handlers:
        root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if log_sql is None:
        try:
            from app.config import settings
            log_sql = settings.log_sql
        except Exception:
            log_sql = False
    # SQL echo goes through the sqlalchemy.engine logger rather than create_engine(echo=...).
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if log_sql else logging.WARNING)
