"""
Open the missing chat for every application that has none, e.g. rows written
before apply created both in one transaction. From the repo root:
  python -m app.scripts.backfill_chats [--dry-run] [--limit N]
"""
import argparse
import logging

from app.database import SessionLocal, init_db
from app.logging_config import setup_logging
from app.repos import application_repo, job_repo
from app.services import chat_service

logger = logging.getLogger(__name__)


def backfill(db, limit: int = 500, dry_run: bool = False) -> dict:
    """Returns counts: scanned, created, skipped (job no longer exists)."""
    stats = {"scanned": 0, "created": 0, "skipped": 0}
    for application in application_repo.list_without_chat(db, limit=limit):
        stats["scanned"] += 1
        job = job_repo.get_by_id(db, application.job_id)
        if not job:
            stats["skipped"] += 1
            logger.warning("Skipping application %s: job %s no longer exists", application.id, application.job_id)
            continue
        if dry_run:
            stats["created"] += 1
            continue
        chat_service.create_for_application(
            db,
            application_id=application.id,
            user_id=application.user_id,
            company_id=job.company_id,
            job_id=job.id,
            job_title=job.title,
        )
        stats["created"] += 1
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create chats for applications that do not have one.")
    parser.add_argument("--dry-run", action="store_true", help="Report what would be created without writing")
    parser.add_argument("--limit", type=int, default=500, help="Maximum applications to process (default 500)")
    args = parser.parse_args(argv)

    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        stats = backfill(db, limit=args.limit, dry_run=args.dry_run)
    finally:
        db.close()

    verb = "Would create" if args.dry_run else "Created"
    print(f"Scanned {stats['scanned']} application(s). {verb} {stats['created']} chat(s), skipped {stats['skipped']}.")
    return stats


if __name__ == "__main__":
    main()
