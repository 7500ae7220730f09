from .db import get_db, close_db, init_db, create_session_factory
from .logger import setup_logger

__all__ = [
    'get_db',
    'close_db',
    'init_db',
    'create_session_factory',
    'setup_logger',
]
