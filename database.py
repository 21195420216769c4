"""
Database module for AI Fitness Coach
Logs and chats live in SQLite by default, or PostgreSQL when DATABASE_URL points at one
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path

# psycopg2 is only needed for PostgreSQL URLs
try:
    import psycopg2
except ImportError:
    psycopg2 = None

DEFAULT_DB_URL = 'sqlite:///fitness_coach.db'

def get_db_url():
    """Database URL from DATABASE_URL / POSTGRES_URL, SQLite file otherwise"""
    return os.getenv('DATABASE_URL') or os.getenv('POSTGRES_URL') or DEFAULT_DB_URL

def is_sqlite(db_url):
    return bool(db_url) and db_url.startswith('sqlite:///')

def placeholder():
    """Query parameter placeholder for the active database"""
    return '?' if is_sqlite(get_db_url()) else '%s'


class SQLiteCursor:
    """psycopg2-style cursor over a sqlite3 connection (execute, fetch*, rowcount)"""

    def __init__(self, conn):
        self.conn = conn
        self._result = None

    def execute(self, query, params=()):
        self._result = self.conn.execute(query, params or ())
        return self._result

    def fetchone(self):
        return self._result.fetchone() if self._result else None

    def fetchall(self):
        return self._result.fetchall() if self._result else []

    @property
    def rowcount(self):
        return self._result.rowcount if self._result else 0


def get_cursor(conn):
    if is_sqlite(get_db_url()):
        return SQLiteCursor(conn)
    return conn.cursor()

def _connect(db_url):
    if is_sqlite(db_url):
        db_path = db_url[len('sqlite:///'):]
        if not os.path.isabs(db_path):
            db_path = str(Path(__file__).parent / db_path)
        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        # Chat messages are removed with their chat
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    if psycopg2 is None:
        raise ValueError("PostgreSQL URL provided but psycopg2 not installed. Install with: pip install psycopg2-binary")
    if db_url.startswith('postgres://'):
        db_url = 'postgresql://' + db_url[len('postgres://'):]
    return psycopg2.connect(db_url)

@contextmanager
def get_db_connection():
    """Connection that commits on success and rolls back on error"""
    conn = _connect(get_db_url())
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

def init_db():
    """Initialize database tables - works with both PostgreSQL and SQLite"""
    with get_db_connection() as conn:
        cur = get_cursor(conn)

        # Logs table - ids are UUID strings generated by the app,
        # structured data and attachments are stored as JSON text
        cur.execute("""
            CREATE TABLE IF NOT EXISTS logs (
                id TEXT PRIMARY KEY,
                timestamp TEXT NOT NULL,
                type TEXT NOT NULL,
                content TEXT NOT NULL,
                structured TEXT,
                attachments TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp ON logs(timestamp)
        """)
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_type ON logs(type)
        """)

        # Chats table
        cur.execute("""
            CREATE TABLE IF NOT EXISTS chats (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        # Chat messages table
        cur.execute("""
            CREATE TABLE IF NOT EXISTS chat_messages (
                id TEXT PRIMARY KEY,
                chat_id TEXT NOT NULL REFERENCES chats(id) ON DELETE CASCADE,
                content TEXT NOT NULL,
                is_user BOOLEAN NOT NULL,
                timestamp TEXT NOT NULL
            )
        """)
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_chat_messages_chat_id ON chat_messages(chat_id)
        """)

        print("Database tables initialized successfully")

def check_db_connection():
    """Check if database connection works"""
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute("SELECT 1")
            return True
    except Exception as e:
        print(f"Database connection failed: {e}")
        return False
