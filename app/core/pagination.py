import math

from app.config import settings


def clamp(page: int | None, limit: int | None) -> tuple[int, int, int]:
    """Normalize page/limit query values. Returns (page, limit, offset)."""
    page = max(1, page or 1)
    limit = min(max(1, limit or settings.default_page_size), settings.max_page_size)
    return page, limit, (page - 1) * limit


def page_meta(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
