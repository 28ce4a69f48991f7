"""
Lease Ledger Application
ASC 842 lease calculations and journal entries over a JSON API
"""

from flask import Flask, jsonify
from flask_cors import CORS
import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Import configuration
from lease_ledger.config import Config, config

# Import blueprints
from lease_ledger.auth import auth_bp
from lease_ledger.api import api_bp
from lease_ledger.calculate_backend import calc_bp

# Import database
from lease_ledger import database

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_dir: Optional[Path] = None, max_bytes: int = Config.LOG_MAX_BYTES,
                  backup_count: int = Config.LOG_BACKUP_COUNT):
    """Setup application logging - rotating file (when log_dir is given) plus console"""
    log_formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Repeated app creation (tests) must not stack handlers
    for handler in list(root_logger.handlers):
        if getattr(handler, '_lease_ledger', False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers = []

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / 'lease_ledger.log',
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    handlers.append(console_handler)

    for handler in handlers:
        handler.setFormatter(log_formatter)
        handler._lease_ledger = True
        root_logger.addHandler(handler)

    return root_logger


def create_app(config_name: Optional[str] = None, config_overrides: Optional[dict] = None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.environ.get('FLASK_ENV', 'default')
    app.config.from_object(config.get(config_name, config['default']))
    if config_overrides:
        app.config.update(config_overrides)

    # Setup logging
    log_dir = Path(app.config['LOG_DIR']) if app.config.get('LOG_TO_FILE') else None
    logger = setup_logging(log_dir, app.config['LOG_MAX_BYTES'], app.config['LOG_BACKUP_COUNT'])
    logger.info("🚀 Initializing Lease Ledger Application...")

    # Initialize CORS
    cors_origins = app.config.get('CORS_ORIGINS', ['*'])
    if isinstance(cors_origins, str):
        cors_origins = cors_origins.split(',')

    CORS(app,
         resources={r"/api/*": {"origins": cors_origins,
                                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                                "allow_headers": ["Content-Type", "Authorization"]}})

    # Initialize database
    database.init_database(app.config['DATABASE_PATH'])

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(calc_bp)
    logger.info("✅ Blueprints registered")

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    logger.info("✅ Application created successfully")
    return app


def main():
    """Run the development server"""
    app = create_app()
    logger = logging.getLogger(__name__)

    logger.info("══════════════════════════════════════════════════════════════")
    logger.info("   📊 Lease Ledger - Starting Server")
    logger.info("══════════════════════════════════════════════════════════════")
    logger.info(f"📍 API Endpoint: http://{app.config['API_HOST']}:{app.config['API_PORT']}/api/")
    logger.info("   - /api/login - Obtain a bearer token")
    logger.info("   - /api/leases - Lease records")
    logger.info("   - /api/journal-entries?leaseId=<id> - Journal entries")
    logger.info("══════════════════════════════════════════════════════════════")

    app.run(
        debug=app.config['DEBUG'],
        host=app.config['API_HOST'],
        port=app.config['API_PORT']
    )


if __name__ == '__main__':
    main()
