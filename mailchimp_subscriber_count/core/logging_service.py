"""
Centralized logging service for the subscriber count extension.
Provides structured logging with database storage alongside the
standard library module loggers.
"""

import json
import logging
from datetime import datetime
from flask import request, has_request_context
from .database import Database
from .config import get_config_value

console_logger = logging.getLogger(__name__)


class LoggingService:
    """Persists log records to the app_logs table of LOG_DB"""

    @staticmethod
    def _get_db_path():
        return Database.ensure_parent_dir(get_config_value('LOG_DB'))

    @staticmethod
    def _ensure_logs_table(db_path):
        """Ensure the app_logs table exists"""
        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_source
                ON app_logs(source)
            """)
            conn.commit()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (mailchimp, settings, cache)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        console_logger.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            db_path = LoggingService._get_db_path()
            LoggingService._ensure_logs_table(db_path)
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            Database.execute_write(db_path, """
                INSERT INTO app_logs
                (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                datetime.now().isoformat(), level, source, message, details,
                ip_address, user_agent, request_path, user_id
            ))
        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{datetime.now().isoformat()}] [{level}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log outbound API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        if status_code is None:
            level = 'ERROR'
        else:
            level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def get_recent_logs(source=None, limit=50):
        """Return the newest log rows as dicts, optionally for one source"""
        try:
            db_path = LoggingService._get_db_path()
            LoggingService._ensure_logs_table(db_path)
            with Database.connect(db_path) as conn:
                cursor = conn.cursor()
                if source:
                    cursor.execute("""
                        SELECT timestamp, level, source, message, details
                        FROM app_logs WHERE source = ?
                        ORDER BY id DESC LIMIT ?
                    """, (source, limit))
                else:
                    cursor.execute("""
                        SELECT timestamp, level, source, message, details
                        FROM app_logs ORDER BY id DESC LIMIT ?
                    """, (limit,))
                columns = ['timestamp', 'level', 'source', 'message', 'details']
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except Exception as e:
            console_logger.error(f"Failed to read logs: {e}")
            return []
