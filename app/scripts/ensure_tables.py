"""
Create any missing tables (companies, users, jobs, applications, chats, chat_messages).
Existing tables and rows are left untouched. From the repo root:
  python -m app.scripts.ensure_tables
"""
from app.database import ensure_tables_exist


def main():
    created = ensure_tables_exist()
    if created:
        print(f"Created tables: {', '.join(created)}")
    else:
        print("DB table check complete: nothing to create.")


if __name__ == "__main__":
    main()
