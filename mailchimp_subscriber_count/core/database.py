import os
import sqlite3
import threading


class Database:
    # Serialises writers inside one process; SQLite handles the rest
    _lock = threading.Lock()

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @staticmethod
    def ensure_parent_dir(path):
        """Create the directory holding a database file if it is missing"""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return path

    @classmethod
    def execute_write(cls, path, query, params=()):
        """
        Run a single write statement under the process lock.
        Returns the number of affected rows.
        """
        with cls._lock:
            with cls.connect(path) as conn:
                cursor = conn.cursor()
                cursor.execute(query, params)
                conn.commit()
                return cursor.rowcount
