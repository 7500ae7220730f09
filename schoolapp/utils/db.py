import logging
import os

from flask import current_app, g
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from schoolapp.models.database_models import Base

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if not database_url.startswith('sqlite:///') or ':memory:' in database_url:
        return
    db_path = database_url[len('sqlite:///'):]
    parent = os.path.dirname(os.path.abspath(db_path))
    if not os.path.exists(parent):
        os.makedirs(parent)


def create_session_factory(database_url: str, **engine_options) -> sessionmaker:
    """Create an engine for the URL, make sure the schema exists and return a session factory."""
    _ensure_sqlite_dir(database_url)
    engine = create_engine(database_url, **engine_options)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(app):
    """Initialize the database engine and schema for the app."""
    try:
        factory = create_session_factory(
            app.config['SQLALCHEMY_DATABASE_URI'],
            **app.config.get('SQLALCHEMY_ENGINE_OPTIONS', {})
        )
    except Exception as e:
        logger.error(f"Database initialization error: {str(e)}")
        raise
    app.extensions['db_session_factory'] = factory
    logger.info("Roster database initialized")


def get_db() -> Session:
    """Get the database session for the current request."""
    if 'db' not in g:
        g.db = current_app.extensions['db_session_factory']()
    return g.db


def close_db(e=None):
    """Close the database session."""
    db = g.pop('db', None)
    if db is not None:
        try:
            if e is None:
                db.commit()
            else:
                db.rollback()
        except Exception as exc:
            logger.error(f"Error closing database: {str(exc)}")
            db.rollback()
            raise
        finally:
            db.close()
