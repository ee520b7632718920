"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database, mailbox or upload directory
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("ADMIN_PASS", "test-secret")
os.environ.setdefault("EMAIL_HOST", "smtp.invalid")
os.environ.setdefault("STATIC_DIR", "nonexistent-static-dir")
