import app.scripts.backfill_chats as backfill_mod
import app.scripts.ensure_tables as ensure_mod
from app.models.chat import Chat
from app.repos import application_repo, job_repo


def test_ensure_tables_main_reports_created(monkeypatch, capsys):
    monkeypatch.setattr(ensure_mod, "ensure_tables_exist", lambda: ["chats", "chat_messages"])
    ensure_mod.main()
    assert "chats, chat_messages" in capsys.readouterr().out


def test_ensure_tables_main_nothing_to_do(monkeypatch, capsys):
    monkeypatch.setattr(ensure_mod, "ensure_tables_exist", lambda: [])
    ensure_mod.main()
    assert "nothing to create" in capsys.readouterr().out


def test_backfill_creates_missing_chats_and_skips_orphans(db, user, make_job):
    job = make_job(title="Platform Engineer")
    gone = make_job(title="Gone")
    needs_chat = application_repo.create(db, job_id=job.id, user_id=user.id, company_id=job.company_id)
    orphan = application_repo.create(db, job_id=gone.id, user_id=user.id, company_id=gone.company_id)
    job_repo.delete(db, gone)

    dry = backfill_mod.backfill(db, dry_run=True)
    assert dry == {"scanned": 2, "created": 1, "skipped": 1}
    assert db.query(Chat).count() == 0

    stats = backfill_mod.backfill(db)
    assert stats == {"scanned": 2, "created": 1, "skipped": 1}
    chat = db.query(Chat).filter(Chat.application_id == needs_chat.id).one()
    assert "Platform Engineer" in chat.messages[0].content
    assert db.query(Chat).filter(Chat.application_id == orphan.id).count() == 0

    # Second run only sees the orphan.
    assert backfill_mod.backfill(db) == {"scanned": 1, "created": 0, "skipped": 1}


def test_backfill_main_parses_args(monkeypatch, capsys):
    class _Session:
        closed = False

        def close(self):
            _Session.closed = True

    seen = {}

    def fake_backfill(db, limit, dry_run):
        seen.update(limit=limit, dry_run=dry_run)
        return {"scanned": 3, "created": 2, "skipped": 1}

    monkeypatch.setattr(backfill_mod, "init_db", lambda: None)
    monkeypatch.setattr(backfill_mod, "setup_logging", lambda: None)
    monkeypatch.setattr(backfill_mod, "SessionLocal", _Session)
    monkeypatch.setattr(backfill_mod, "backfill", fake_backfill)

    backfill_mod.main(["--dry-run", "--limit", "10"])
    assert seen == {"limit": 10, "dry_run": True}
    assert _Session.closed is True
    assert "Would create 2 chat(s)" in capsys.readouterr().out
