"""
Database Manager for PocketCalc
Stores engine snapshots (display, memory, history) and UI preferences in SQLite
"""
import logging
import math
import sqlite3

import config

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        cursor = conn.cursor()

        # Key/value settings: engine state and preferences
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        ''')

        # Calculations history table, id order is chronological
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS calculations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                expression TEXT NOT NULL,
                result TEXT NOT NULL,
                timestamp INTEGER NOT NULL
            )
        ''')

        conn.commit()
        conn.close()
        logger.info("Database ready at %s", self.db_path)

    def get_setting(self, key, default=None):
        """Read a single setting"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('SELECT value FROM settings WHERE key = ?', (key,))
        row = cursor.fetchone()
        conn.close()
        return row[0] if row else default

    def set_setting(self, key, value):
        """Insert or replace a single setting"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)',
                       (key, str(value)))
        conn.commit()
        conn.close()

    # Preferences

    def get_preferences(self):
        """Theme and sound preferences, falling back to the defaults"""
        theme = self.get_setting('theme', config.DEFAULT_THEME)
        if theme not in config.THEMES:
            logger.warning("Unknown saved theme %r, using %s", theme, config.DEFAULT_THEME)
            theme = config.DEFAULT_THEME
        sound = self.get_setting('sound_on')
        sound_on = config.DEFAULT_SOUND_ON if sound is None else sound == 'true'
        return {'theme': theme, 'sound_on': sound_on}

    def set_theme(self, theme):
        if theme not in config.THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self.set_setting('theme', theme)

    def set_sound(self, sound_on):
        self.set_setting('sound_on', 'true' if sound_on else 'false')

    # Engine snapshots

    def save_snapshot(self, snapshot):
        """Save a CalculatorEngine.export_state() snapshot"""
        conn = self.get_connection()
        cursor = conn.cursor()
        for key in ('display', 'equation'):
            cursor.execute('INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)',
                           (key, snapshot.get(key, '')))
        cursor.execute('INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)',
                       ('memory', repr(float(snapshot.get('memory', 0)))))

        cursor.execute('DELETE FROM calculations')
        # Snapshot history is newest first; store oldest first
        for item in reversed(snapshot.get('history', [])):
            cursor.execute('''
                INSERT INTO calculations (expression, result, timestamp)
                VALUES (?, ?, ?)
            ''', (item['expression'], item['result'], int(item['timestamp'])))
        conn.commit()
        conn.close()

    def load_snapshot(self):
        """Load the last saved snapshot, or None if nothing was saved"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT key, value FROM settings WHERE key IN ('display', 'equation', 'memory')")
        saved = dict(cursor.fetchall())
        conn.close()
        if not saved:
            return None

        try:
            memory = float(saved.get('memory', 0))
        except ValueError:
            memory = None
        if memory is None or not math.isfinite(memory):
            logger.warning("Discarding invalid saved memory %r", saved.get('memory'))
            memory = 0.0

        return {
            'display': saved.get('display', '0'),
            'equation': saved.get('equation', ''),
            'memory': memory,
            'history': self.get_calculations(),
        }

    def get_calculations(self, limit=config.MAX_HISTORY_ITEMS):
        """Retrieve calculation history, newest first"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            SELECT expression, result, timestamp FROM calculations
            ORDER BY id DESC LIMIT ?
        ''', (limit,))
        calculations = [
            {'expression': expression, 'result': result, 'timestamp': timestamp}
            for expression, result, timestamp in cursor.fetchall()
        ]
        conn.close()
        return calculations

    def clear_history(self):
        """Clear calculation history"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('DELETE FROM calculations')
        conn.commit()
        conn.close()
