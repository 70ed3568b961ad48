"""Flask application factory."""
from datetime import date, datetime
from decimal import Decimal
import os
import traceback

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from supermarket_pos.database import init_db


class PosJSONProvider(DefaultJSONProvider):
    """
    JSON provider that renders money as numbers instead of strings.

    Decimal is converted with float() only at the response boundary. Totals
    are computed as Decimal and every stored amount has cent scale, so the
    float is a display value; clients needing exact sums should round to two
    decimals. Datetimes are rendered as ISO 8601 strings.
    """

    @staticmethod
    def default(obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return DefaultJSONProvider.default(obj)


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.json = PosJSONProvider(app)
    app.config.from_object(config_object)

    # Initialize Sentry for error tracking in production
    if os.getenv('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=os.getenv('SENTRY_DSN'),
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Browser frontend is served from another origin
    CORS(app, origins=app.config.get('CORS_ORIGINS', '*'), supports_credentials=True)

    # Initialize Redis Cache
    from supermarket_pos.services.cache_service import init_cache
    init_cache(app)

    # Setup Prometheus metrics instrumentation
    from supermarket_pos.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Initialize database
    init_db(app)

    # Error Handlers
    from supermarket_pos.exceptions import PosError

    @app.errorhandler(PosError)
    def handle_pos_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"PosError [{error.status_code}]: {error.message}")
        else:
            app.logger.warning(f"PosError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'status': 'error', 'error': error.name}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'error': 'Internal Server Error'}), 500

    # Register blueprints
    from supermarket_pos.blueprints.main import main_bp
    from supermarket_pos.blueprints.catalog import catalog_bp
    from supermarket_pos.blueprints.cart import cart_bp
    from supermarket_pos.blueprints.sales import sales_bp
    from supermarket_pos.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from supermarket_pos.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"Database: {app.config.get('SQLALCHEMY_DATABASE_URI', '').split('@')[-1]}")

    return app
