"""Main blueprint with banner and health check endpoints."""
from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from supermarket_pos.database import ping_database
from supermarket_pos.services.cache_service import get_cache

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return jsonify({'message': 'Supermarket POS Backend'})


@main_bp.route('/health')
def health():
    """
    Health check endpoint that validates database connection.

    Returns:
        200: Healthy (DB connected)
        503: Unhealthy (DB error)
    """
    cache_status = 'connected' if get_cache().is_available() else 'disabled'
    try:
        if ping_database():
            return jsonify({
                'status': 'healthy',
                'database': 'connected',
                'cache': cache_status
            }), 200
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check failed: {e}")

    return jsonify({
        'status': 'unhealthy',
        'database': 'disconnected',
        'cache': cache_status
    }), 503
