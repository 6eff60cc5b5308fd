"""
Flask application factory.
"""
from flask import Flask
import logging


def create_app(config_name=None, overrides=None):
    """
    Create and configure Flask application.

    Args:
        config_name: Configuration name ('development', 'production', 'testing')
        overrides: Optional mapping of config values applied last

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    from file_manager.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO if not app.config['DEBUG'] else logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Initialize database
    try:
        from file_manager.database import init_db
        init_db(app)
        app.logger.info("Database initialized successfully")
    except Exception as e:
        app.logger.error(f"Database initialization failed: {e}")
        raise

    # S3 is only needed for s3:// file URLs (warn if misconfigured, don't fail)
    try:
        from file_manager.config import Config
        Config.validate_aws_config(app.config)
    except ValueError as e:
        app.logger.warning(f"AWS configuration warning: {e}")

    # Register blueprints
    from file_manager.routes import files
    app.register_blueprint(files.bp)

    app.logger.info("File manager blueprint registered")

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal error: {error}")
        return {'error': 'Internal server error'}, 500

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {
            'status': 'healthy',
            'app': 'File Manager',
            'version': '1.0.0'
        }, 200

    app.logger.info(f"Flask app created successfully in {app.config.get('FLASK_ENV', 'development')} mode")

    return app
