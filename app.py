import os
import sqlite3
import logging

import click
from flask import Flask, render_template, redirect, url_for

from config import Config, CSP, BASE_DIR, load_secret_key
from extensions import init_extensions
from routes import register_blueprints
from routes.auth import validate_session
from utils.db import close_db, create_user, ensure_database_dir, init_db
from utils.errors import DataFetchError
from utils.helpers import display_date, display_time, format_price


def read_version():
    try:
        with open(os.path.join(BASE_DIR, "VERSION"), "r") as vf:
            return vf.read().strip()
    except OSError:
        return "unknown"


def create_app(test_config=None):
    """Build the Flask application.

    ``test_config`` is a mapping that overrides the values from Config.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config["VERSION"] = read_version()
    if test_config:
        app.config.update(test_config)
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = load_secret_key()

    logging.basicConfig(level=logging.INFO)

    ensure_database_dir(app.config["DATABASE"])

    init_extensions(app, CSP)
    register_blueprints(app)
    app.teardown_appcontext(close_db)

    # ---------------------------
    # Template Filters
    # ---------------------------
    app.add_template_filter(display_date, "display_date")
    app.add_template_filter(display_time, "display_time")
    app.add_template_filter(format_price, "price")

    @app.context_processor
    def inject_version():
        return {"version": app.config["VERSION"]}

    # ---------------------------
    # Session Expiry
    # ---------------------------
    @app.before_request
    def expire_stale_sessions():
        valid, endpoint = validate_session()
        if not valid:
            return redirect(url_for(endpoint))

    # ---------------------------
    # Error Pages
    # ---------------------------
    @app.errorhandler(404)
    def not_found(error):
        return render_template("error.html", title="Not found",
                               message="We could not find that page."), 404

    @app.errorhandler(429)
    def rate_limited(error):
        return render_template("error.html", title="Slow down",
                               message="Too many requests. Please wait a moment and try again."), 429

    @app.errorhandler(503)
    def unavailable(error):
        return render_template("error.html", title="Temporarily unavailable",
                               message="We could not load this page right now. Please try again shortly."), 503

    @app.errorhandler(DataFetchError)
    def data_fetch_failed(error):
        return unavailable(error)

    # ---------------------------
    # CLI Commands
    # ---------------------------
    @app.cli.command("init-db")
    def init_db_command():
        """Create the database tables."""
        init_db()
        click.echo(f"Initialized the database at {app.config['DATABASE']}.")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.argument("password")
    def create_user_command(username, password):
        """Add a customer account."""
        try:
            user_id = create_user(username.strip().lower(), password)
        except sqlite3.IntegrityError:
            raise click.ClickException(f"User '{username}' already exists.")
        click.echo(f"Created user '{username}' with id {user_id}.")

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
