# schoolapp/__init__.py
from flask import Flask
from flask_cors import CORS
import logging

from schoolapp.config import Config
from schoolapp.utils.db import init_db, close_db, get_db
from schoolapp.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def create_app(config_class=Config, directory=None, relationships=None, initial_data=None):
    """
    Create the Flask app.

    Args:
        config_class: Configuration object
        directory: Teacher directory; defaults to the roster database
        relationships: Teaching-relationship lookup; defaults to the roster database
        initial_data: Optional dict with 'students', 'grades', 'attendance'
            and 'counseling' records for the feature services
    """
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    setup_logger('schoolapp', app.config.get('LOG_DIR'), app.config.get('LOG_LEVEL', 'INFO'))

    CORS(app,
         resources={
             r"/api/*": {
                 "origins": app.config['CORS_ORIGINS'],
                 "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                 "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
                 "supports_credentials": True,
             }
         },
         supports_credentials=True)

    # Register database cleanup function
    app.teardown_appcontext(close_db)

    # Initialize database
    init_db(app)

    # Wire the policy engine and the services that depend on it
    from schoolapp.models.directory import SqlTeacherDirectory
    from schoolapp.rbac.engine import PolicyEngine
    from schoolapp.rbac.roster import SqlTeachingRelationships
    from schoolapp.services import (
        AttendanceService, CounselingService, GradeService, SessionSubjectProvider, StudentService
    )

    if directory is None:
        directory = SqlTeacherDirectory(get_db)
    if relationships is None:
        relationships = SqlTeachingRelationships(get_db)
    initial_data = initial_data or {}

    engine = PolicyEngine(relationships)
    app.extensions['policy_engine'] = engine
    app.extensions['subject_provider'] = SessionSubjectProvider(directory)
    app.extensions['school_services'] = {
        'students': StudentService(engine, initial_data.get('students', ())),
        'grades': GradeService(engine, initial_data.get('grades', ())),
        'attendance': AttendanceService(engine, initial_data.get('attendance', ())),
        'counseling': CounselingService(engine, initial_data.get('counseling', ())),
    }

    # Register blueprints (import here to avoid circular imports)
    from schoolapp.routes.rbac_routes import bp as rbac_bp
    from schoolapp.routes.school_routes import bp as school_bp

    app.register_blueprint(rbac_bp, url_prefix='/api/rbac')
    app.register_blueprint(school_bp, url_prefix='/api')

    # Register RBAC template helpers
    from schoolapp.rbac.template_helpers import TEMPLATE_HELPERS
    for name, func in TEMPLATE_HELPERS.items():
        app.jinja_env.globals[name] = func

    logger.info("School app created")
    return app
