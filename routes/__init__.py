"""Routes package for Branch Reservations."""

from routes.auth import auth_bp
from routes.branch import branch_bp
from routes.main import main_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(branch_bp)
