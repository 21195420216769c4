"""
Storage for logs and chats
CRUD helpers on top of database.py - errors are printed and turned into
None / False / [] so a broken database never takes the app down
"""

import json
import uuid
from datetime import datetime

from database import get_db_connection, get_cursor, placeholder

# ============================================================================
# Serialization helpers
# ============================================================================

def serialize_log(log):
    """JSON-friendly copy of a log"""
    data = dict(log)
    if isinstance(data.get('timestamp'), datetime):
        data['timestamp'] = data['timestamp'].isoformat()
    return data

def _row_to_log(row):
    return {
        'id': row[0],
        'timestamp': datetime.fromisoformat(row[1]),
        'type': row[2],
        'content': row[3],
        'structured': json.loads(row[4]) if row[4] else None,
        'attachments': json.loads(row[5]) if row[5] else None
    }

def _row_to_chat(row):
    return {
        'id': row[0],
        'title': row[1],
        'createdAt': row[2],
        'updatedAt': row[3]
    }

def _row_to_message(row):
    return {
        'id': row[0],
        'chatId': row[1],
        'content': row[2],
        'isUser': bool(row[3]),
        'timestamp': row[4]
    }

# ============================================================================
# Logs
# ============================================================================

LOG_COLUMNS = "id, timestamp, type, content, structured, attachments"

def save_log_to_db(log):
    """Insert a log - returns the log id, or None on failure"""
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                INSERT INTO logs ({LOG_COLUMNS})
                VALUES ({p}, {p}, {p}, {p}, {p}, {p})
            """, (
                log['id'],
                log['timestamp'].isoformat(),
                log['type'],
                log['content'],
                json.dumps(log['structured']) if log.get('structured') else None,
                json.dumps(log['attachments']) if log.get('attachments') else None
            ))
        return log['id']
    except Exception as e:
        print(f"Error saving log to database: {e}")
        return None

def get_logs_from_db(limit=None, log_type=None, start=None, end=None):
    """Get logs newest first, optionally filtered by type and timestamp range"""
    p = placeholder()
    conditions = []
    params = []
    if log_type:
        conditions.append(f"type = {p}")
        params.append(log_type)
    if start:
        conditions.append(f"timestamp >= {p}")
        params.append(start.isoformat())
    if end:
        conditions.append(f"timestamp <= {p}")
        params.append(end.isoformat())

    query = f"SELECT {LOG_COLUMNS} FROM logs"
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += " ORDER BY timestamp DESC"

    # Validate limit if provided
    if limit is not None:
        try:
            limit = int(limit)
            if limit < 1 or limit > 1000:  # Reasonable bounds
                limit = 100
        except (ValueError, TypeError):
            limit = None
    if limit:
        query += f" LIMIT {p}"
        params.append(limit)

    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(query, tuple(params))
            return [_row_to_log(row) for row in cur.fetchall()]
    except Exception as e:
        print(f"Error getting logs from database: {e}")
        return []

def get_log_from_db(log_id):
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"SELECT {LOG_COLUMNS} FROM logs WHERE id = {p}", (log_id,))
            row = cur.fetchone()
            return _row_to_log(row) if row else None
    except Exception as e:
        print(f"Error getting log from database: {e}")
        return None

def delete_log_from_db(log_id):
    """Delete a log - returns True if a row was removed"""
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"DELETE FROM logs WHERE id = {p}", (log_id,))
            return cur.rowcount > 0
    except Exception as e:
        print(f"Error deleting log from database: {e}")
        return False

# ============================================================================
# Chats
# ============================================================================

def create_chat(title=None):
    """Create a chat - returns the chat, or None on failure"""
    p = placeholder()
    now = datetime.now().isoformat()
    chat = {
        'id': str(uuid.uuid4()),
        'title': (title or '').strip() or 'New Chat',
        'createdAt': now,
        'updatedAt': now
    }
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                INSERT INTO chats (id, title, created_at, updated_at)
                VALUES ({p}, {p}, {p}, {p})
            """, (chat['id'], chat['title'], chat['createdAt'], chat['updatedAt']))
        return chat
    except Exception as e:
        print(f"Error creating chat: {e}")
        return None

def get_chats():
    """All chats, most recently updated first"""
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute("""
                SELECT id, title, created_at, updated_at
                FROM chats
                ORDER BY updated_at DESC
            """)
            return [_row_to_chat(row) for row in cur.fetchall()]
    except Exception as e:
        print(f"Error getting chats from database: {e}")
        return []

def get_chat(chat_id):
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                SELECT id, title, created_at, updated_at
                FROM chats WHERE id = {p}
            """, (chat_id,))
            row = cur.fetchone()
            return _row_to_chat(row) if row else None
    except Exception as e:
        print(f"Error getting chat from database: {e}")
        return None

def rename_chat(chat_id, title):
    """Rename a chat - returns the updated chat, or None if it doesn't exist"""
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                UPDATE chats SET title = {p}, updated_at = {p}
                WHERE id = {p}
            """, (title, datetime.now().isoformat(), chat_id))
            if cur.rowcount == 0:
                return None
    except Exception as e:
        print(f"Error renaming chat: {e}")
        return None
    return get_chat(chat_id)

def delete_chat(chat_id):
    """Delete a chat and its messages"""
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"DELETE FROM chat_messages WHERE chat_id = {p}", (chat_id,))
            cur.execute(f"DELETE FROM chats WHERE id = {p}", (chat_id,))
            return cur.rowcount > 0
    except Exception as e:
        print(f"Error deleting chat: {e}")
        return False

def add_message(chat_id, content, is_user):
    """Append a message to a chat and bump the chat's updated_at"""
    p = placeholder()
    message = {
        'id': str(uuid.uuid4()),
        'chatId': chat_id,
        'content': content,
        'isUser': bool(is_user),
        'timestamp': datetime.now().isoformat()
    }
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                INSERT INTO chat_messages (id, chat_id, content, is_user, timestamp)
                VALUES ({p}, {p}, {p}, {p}, {p})
            """, (message['id'], chat_id, content, message['isUser'], message['timestamp']))
            cur.execute(f"""
                UPDATE chats SET updated_at = {p} WHERE id = {p}
            """, (message['timestamp'], chat_id))
        return message
    except Exception as e:
        print(f"Error adding chat message: {e}")
        return None

def get_messages(chat_id):
    """Messages of a chat, oldest first"""
    p = placeholder()
    try:
        with get_db_connection() as conn:
            cur = get_cursor(conn)
            cur.execute(f"""
                SELECT id, chat_id, content, is_user, timestamp
                FROM chat_messages
                WHERE chat_id = {p}
                ORDER BY timestamp ASC
            """, (chat_id,))
            return [_row_to_message(row) for row in cur.fetchall()]
    except Exception as e:
        print(f"Error getting chat messages: {e}")
        return []
