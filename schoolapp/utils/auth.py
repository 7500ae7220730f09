from functools import wraps
from flask import g, jsonify
import logging

from schoolapp.rbac.utils import get_current_subject

logger = logging.getLogger(__name__)


def login_required(f):
    """
    Decorator to require a signed-in, active teacher.

    Sets g.subject for the view. Permission checks stay inside the view.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        subject = get_current_subject()
        if subject is None:
            logger.info("Unauthenticated API access attempt")
            return jsonify({'error': 'Not authenticated'}), 401
        g.subject = subject
        return f(*args, **kwargs)
    return decorated_function
