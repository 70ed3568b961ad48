"""Catalog blueprint - read-only product browsing."""
from flask import Blueprint, request, jsonify

from supermarket_pos.database import get_session
from supermarket_pos.exceptions import ValidationError
from supermarket_pos.services import catalog_service

catalog_bp = Blueprint('catalog', __name__)


@catalog_bp.route('/products')
def products_list():
    products = catalog_service.list_products(get_session())
    return jsonify([p.to_dict() for p in products])


@catalog_bp.route('/products/category/<path:category>')
def products_by_category(category: str):
    products = catalog_service.list_by_category(get_session(), category)
    return jsonify([p.to_dict() for p in products])


@catalog_bp.route('/products/search')
def products_search():
    """Substring search over name or category; ``q`` is required but may be blank."""
    if 'q' not in request.args:
        raise ValidationError('Search query is required')

    products = catalog_service.search_products(get_session(), request.args.get('q', ''))
    return jsonify([p.to_dict() for p in products])


@catalog_bp.route('/categories')
def categories_list():
    return jsonify(catalog_service.list_categories(get_session()))
