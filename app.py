#!/usr/bin/env python3
"""
AI Fitness Coach
Log workouts and metrics in free text or forms, chat with an AI coach,
and browse trends - all on top of a simulated vector memory
"""

import uuid
from datetime import datetime

from flask import Flask, request, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

import storage
from coach_context import create_context
from coach_responder import generate_log_response
from config import Settings
from database import init_db, check_db_connection
from log_parser import build_structured_log, normalize_log_type, parse_natural_language_log, validate_metrics
from memory_service import document_to_log
from search_service import summarize_research
from storage import serialize_log
from trends import generate_summary, get_metric_trend, summarize_period
from workout_parser import summarize_strength_training

MAX_TREND_DAYS = 3650

def _parse_datetime(value, field):
    """Parse an ISO date/datetime query parameter"""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field} date: {value}")
    # Log timestamps are naive local time
    if parsed.tzinfo:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed

def _parse_int(value, default, field):
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field}: {value}")

def _text_field(data, field):
    """Stripped string value of a JSON field, '' when missing"""
    value = data.get(field) or ''
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value.strip()


def create_app(settings=None, context=None):
    """Create the Flask app with its own memory store, AI coach and search"""
    settings = settings or Settings()
    context = context or create_context(settings)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)
    app.secret_key = settings.SECRET_KEY
    app.extensions['coach_context'] = context

    # Initialize database on startup
    try:
        if check_db_connection():
            init_db()
            print("✓ Database initialized")
            use_database = True
        else:
            print("⚠ Database not available, logs will only be kept in memory")
            use_database = False
    except Exception as e:
        print(f"⚠ Database initialization failed: {e}")
        print("⚠ Logs will only be kept in memory")
        use_database = False
    app.config['USE_DATABASE'] = use_database

    # Reload saved logs into memory, oldest first so insertion order is chronological
    if use_database:
        saved_logs = storage.get_logs_from_db()
        for log in reversed(saved_logs):
            context.memory.store_log(log)
        if saved_logs:
            print(f"✓ Loaded {len(saved_logs)} logs into memory")

    memory = context.memory

    def recent_logs(limit=None):
        """Newest-first logs from the database, or from memory without one"""
        if use_database:
            return storage.get_logs_from_db(limit=limit)
        logs = sorted(
            (document_to_log(doc) for doc in memory.get_all_documents()),
            key=lambda log: log['timestamp'],
            reverse=True
        )
        return logs[:limit] if limit else logs

    def json_object():
        """Request body as a dict; raises ValueError for non-object JSON"""
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError('Request body must be a JSON object')
        return data

    def require_database():
        if not use_database:
            return jsonify({'error': 'Database not available'}), 500
        return None

    # ============================================================================
    # Logs
    # ============================================================================

    @app.route('/api/logs', methods=['POST'])
    def save_log():
        """Save a log from free text or the structured form and return the coaching response"""
        try:
            data = json_object()
            if data.get('form'):
                if not isinstance(data['form'], dict):
                    return jsonify({'error': 'Form data must be an object'}), 400
                entry = build_structured_log(data['form'])
            else:
                content = _text_field(data, 'content')
                if not content:
                    return jsonify({'error': 'Log content required'}), 400
                structured = data.get('structured')
                if structured is not None and not isinstance(structured, dict):
                    return jsonify({'error': 'Structured data must be an object'}), 400
                if structured:
                    validate_metrics(structured)
                entry = {
                    'type': normalize_log_type(data.get('type')),
                    'content': content,
                    'structured': structured or None
                }
        except (TypeError, ValueError) as e:
            return jsonify({'error': str(e)}), 400

        # Derive structured data from the text when the caller didn't provide it
        entry = parse_natural_language_log(entry)
        log = {
            'id': str(uuid.uuid4()),
            'timestamp': datetime.now(),
            'type': entry['type'],
            'content': entry['content'],
            'structured': entry['structured'],
            'attachments': data.get('attachments') or None
        }

        persisted = False
        if use_database:
            persisted = storage.save_log_to_db(log) is not None

        try:
            memory.store_log(log)
        except Exception as e:
            print(f"Failed to store log in memory: {e}")

        coach_response = generate_log_response(log['structured'])

        chat_id = data.get('chat_id')
        if chat_id and use_database and storage.get_chat(chat_id):
            storage.add_message(chat_id, log['content'], is_user=True)
            storage.add_message(chat_id, coach_response, is_user=False)

        result = {
            'success': True,
            'log': serialize_log(log),
            'response': coach_response,
            'persisted': persisted
        }
        strength = (log['structured'] or {}).get('strengthTraining')
        if strength:
            result['strength_summary'] = summarize_strength_training(strength)
        return jsonify(result)

    @app.route('/api/logs', methods=['GET'])
    def get_logs():
        """Get logs, newest first"""
        try:
            limit = _parse_int(request.args.get('limit'), None, 'limit')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        logs = recent_logs(limit)
        return jsonify({'success': True, 'logs': [serialize_log(log) for log in logs]})

    @app.route('/api/logs/filter', methods=['GET'])
    def filter_logs():
        """Filter logs by type and/or ISO start/end dates"""
        try:
            log_type = request.args.get('type')
            log_type = normalize_log_type(log_type) if log_type else None
            start = request.args.get('start')
            end = request.args.get('end')
            start = _parse_datetime(start, 'start') if start else None
            end = _parse_datetime(end, 'end') if end else None
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        if use_database:
            logs = storage.get_logs_from_db(log_type=log_type, start=start, end=end)
        else:
            logs = [
                log for log in recent_logs()
                if (not log_type or log['type'] == log_type)
                and (not start or log['timestamp'] >= start)
                and (not end or log['timestamp'] <= end)
            ]
        return jsonify({'success': True, 'logs': [serialize_log(log) for log in logs]})

    @app.route('/api/logs/search', methods=['GET'])
    def search_logs():
        """Similarity search over logs held in memory"""
        query = (request.args.get('q') or '').strip()
        if not query:
            return jsonify({'error': 'Search query required'}), 400
        try:
            limit = _parse_int(request.args.get('limit'), 5, 'limit')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        results = memory.semantic_search(query, limit)
        return jsonify({'success': True, 'logs': [serialize_log(log) for log in results]})

    @app.route('/api/logs/day', methods=['GET'])
    def get_logs_for_day():
        """Logs from a single day (YYYY-MM-DD, defaults to today)"""
        day = request.args.get('date')
        try:
            target = _parse_datetime(day, 'date') if day else datetime.now()
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        logs = memory.get_logs_by_day(target)
        return jsonify({'success': True, 'logs': [serialize_log(log) for log in logs]})

    @app.route('/api/logs/<log_id>', methods=['GET'])
    def get_log(log_id):
        if use_database:
            log = storage.get_log_from_db(log_id)
        else:
            log = next(
                (document_to_log(doc) for doc in memory.get_all_documents() if doc['id'] == log_id),
                None
            )
        if log is None:
            return jsonify({'error': 'Log not found'}), 404
        return jsonify({'success': True, 'log': serialize_log(log)})

    @app.route('/api/logs/<log_id>', methods=['DELETE'])
    def delete_log(log_id):
        """Delete a log and the memory document that belongs to it"""
        deleted_from_db = storage.delete_log_from_db(log_id) if use_database else False
        deleted_from_memory = memory.delete_log(log_id)

        if not deleted_from_db and not deleted_from_memory:
            return jsonify({'error': 'Log not found'}), 404
        return jsonify({'success': True, 'message': 'Log deleted'})

    # ============================================================================
    # Trends and summaries
    # ============================================================================

    @app.route('/api/metrics/<metric>/trend', methods=['GET'])
    def metric_trend(metric):
        """Values of one metric over the last N days"""
        try:
            days = _parse_int(request.args.get('days'), 7, 'days')
            if not 1 <= days <= MAX_TREND_DAYS:
                raise ValueError(f"days must be between 1 and {MAX_TREND_DAYS}")
            points = get_metric_trend(memory, metric, days)
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        return jsonify({
            'success': True,
            'metric': metric,
            'days': days,
            'points': [{'date': p['date'].isoformat(), 'value': p['value']} for p in points]
        })

    @app.route('/api/summary/<timeframe>', methods=['GET'])
    def period_summary(timeframe):
        """Weekly or monthly training summary"""
        try:
            stats = summarize_period(memory, timeframe)
            summary = generate_summary(memory, timeframe)
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        return jsonify({'success': True, 'summary': summary, 'stats': stats})

    # ============================================================================
    # Chats
    # ============================================================================

    @app.route('/api/chats', methods=['GET'])
    def list_chats():
        error = require_database()
        if error:
            return error
        return jsonify({'success': True, 'chats': storage.get_chats()})

    @app.route('/api/chats', methods=['POST'])
    def new_chat():
        error = require_database()
        if error:
            return error
        try:
            title = _text_field(json_object(), 'title')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        chat = storage.create_chat(title)
        if not chat:
            return jsonify({'error': 'Failed to create chat'}), 500
        return jsonify({'success': True, 'chat': chat})

    @app.route('/api/chats/<chat_id>', methods=['PUT'])
    def update_chat(chat_id):
        error = require_database()
        if error:
            return error
        try:
            title = _text_field(json_object(), 'title')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        if not title:
            return jsonify({'error': 'Title required'}), 400
        chat = storage.rename_chat(chat_id, title)
        if not chat:
            return jsonify({'error': 'Chat not found'}), 404
        return jsonify({'success': True, 'chat': chat})

    @app.route('/api/chats/<chat_id>', methods=['DELETE'])
    def remove_chat(chat_id):
        error = require_database()
        if error:
            return error
        if not storage.delete_chat(chat_id):
            return jsonify({'error': 'Chat not found'}), 404
        return jsonify({'success': True})

    @app.route('/api/chats/<chat_id>/messages', methods=['GET'])
    def chat_messages(chat_id):
        error = require_database()
        if error:
            return error
        if not storage.get_chat(chat_id):
            return jsonify({'error': 'Chat not found'}), 404
        return jsonify({'success': True, 'messages': storage.get_messages(chat_id)})

    @app.route('/api/chats/<chat_id>/messages', methods=['POST'])
    def post_chat_message(chat_id):
        """Append a message to a chat without asking the coach"""
        error = require_database()
        if error:
            return error
        try:
            data = json_object()
            content = _text_field(data, 'content')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        if not content:
            return jsonify({'error': 'Message content required'}), 400
        if not storage.get_chat(chat_id):
            return jsonify({'error': 'Chat not found'}), 404
        message = storage.add_message(chat_id, content, bool(data.get('isUser', True)))
        if not message:
            return jsonify({'error': 'Failed to save message'}), 500
        return jsonify({'success': True, 'message': message})

    # ============================================================================
    # AI coach and research
    # ============================================================================

    @app.route('/api/coach', methods=['POST'])
    def coach():
        """Get AI coach response"""
        try:
            data = json_object()
            user_message = _text_field(data, 'message')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        if not user_message:
            return jsonify({'error': 'Message required'}), 400

        chat_id = data.get('chat_id')
        if chat_id:
            error = require_database()
            if error:
                return error
            if not storage.get_chat(chat_id):
                return jsonify({'error': 'Chat not found'}), 404
            storage.add_message(chat_id, user_message, is_user=True)
            history = storage.get_messages(chat_id)
        else:
            history = data.get('history') or []
            if not isinstance(history, list):
                return jsonify({'error': 'History must be a list of messages'}), 400
            history = [msg for msg in history if isinstance(msg, dict)]
            history.append({'content': user_message, 'isUser': True})

        # Most recent logs first, then anything similar to the question
        logs = recent_logs(10)
        seen = {log['id'] for log in logs}
        for log in memory.semantic_search(user_message, 5):
            if log['id'] not in seen:
                logs.append(log)
                seen.add(log['id'])

        research_summary = None
        if data.get('web_search', True) and context.web_search_enabled:
            results = context.search.search_fitness_research(user_message)
            research_summary = summarize_research(results)

        result = context.llm.generate_response(history, logs, research_summary)

        if chat_id:
            storage.add_message(chat_id, result['response'], is_user=False)

        return jsonify({
            'success': True,
            'response': result['response'],
            'fallback': result['fallback'],
            'usage': result['usage']
        })

    @app.route('/api/research', methods=['POST'])
    def research():
        """Search fitness research and summarize the top results"""
        try:
            query = _text_field(json_object(), 'query')
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        if not query:
            return jsonify({'error': 'Search query required'}), 400

        results = context.search.search_fitness_research(query)
        return jsonify({
            'success': True,
            'results': results,
            'summary': summarize_research(results)
        })

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({
            'success': True,
            'database': use_database,
            'memory_ready': memory.is_ready(),
            'documents': len(memory),
            'llm_available': context.llm.is_available(),
            'web_search_enabled': context.web_search_enabled
        })

    return app

if __name__ == '__main__':
    settings = Settings()
    app = create_app(settings)
    print("\n" + "="*50)
    print("AI Fitness Coach")
    print("="*50)
    print(f"Coach model: {settings.COACH_MODEL}")
    print(f"Web search: {'on' if settings.WEB_SEARCH_ENABLED else 'off'}")
    print("="*50 + "\n")
    print("Starting server on http://localhost:5001")
    print("Press Ctrl+C to stop\n")
    app.run(debug=True, host='0.0.0.0', port=5001)
