"""
PocketCalc session helpers
Restores the engine from the database at startup and saves it again on exit
"""
import atexit
import logging

import config
from calculator import CalculatorEngine
from database import Database

logger = logging.getLogger(__name__)


def start_session(db=None, save_on_exit=True):
    """Create an engine restored from the last saved snapshot.

    Logging is configured from config. Returns (engine, db). With
    save_on_exit the snapshot is written back when the interpreter exits.
    """
    config.configure_logging()
    if db is None:
        db = Database()
    engine = CalculatorEngine()
    snapshot = db.load_snapshot()
    if snapshot is not None:
        engine.import_state(snapshot)
        logger.info("Restored %d history entries", len(engine.history))
    if save_on_exit:
        atexit.register(end_session, engine, db)
    return engine, db


def end_session(engine, db):
    """Save the engine state"""
    db.save_snapshot(engine.export_state())
    logger.info("%s state saved to %s", config.APP_NAME, db.db_path)
