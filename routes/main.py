"""Restaurant directory and service routes."""

import logging
from datetime import datetime

from flask import Blueprint, render_template, abort, jsonify, current_app

from extensions import cache, csrf
from utils.db import get_db
from utils.cache import get_restaurants, get_restaurant, get_restaurant_branches

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    restaurants = get_restaurants()
    return render_template("index.html", restaurants=restaurants)


@main_bp.route("/restaurants/<int:restaurant_id>")
def restaurant(restaurant_id):
    details = get_restaurant(restaurant_id)
    if details is None:
        abort(404)
    branches = get_restaurant_branches(restaurant_id)
    return render_template("restaurant.html", restaurant=details, branches=branches)


@main_bp.route("/health")
@csrf.exempt
def health():
    version = current_app.config.get("VERSION", "unknown")
    try:
        # Test database connection
        db = get_db()
        db.execute("SELECT 1")

        try:
            cache.set("health_check", "ok", timeout=10)
            cache_status = "ok"
        except Exception:
            cache_status = "error"

        return jsonify({
            "status": "healthy",
            "version": version,
            "database": "ok",
            "cache": cache_status,
            "timestamp": datetime.now().isoformat()
        })
    except Exception as e:
        logging.error(f"Health check failed: {e}")
        return jsonify({
            "status": "unhealthy",
            "version": version,
            "database": "error",
            "timestamp": datetime.now().isoformat()
        }), 500
