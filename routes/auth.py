"""Authentication routes and decorators."""

import re
import logging
from datetime import datetime, timedelta
from functools import wraps

from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from flask_limiter.util import get_remote_address
from werkzeug.security import check_password_hash

from extensions import limiter
from utils.db import get_db
from utils.helpers import safe_referrer

auth_bp = Blueprint("auth", __name__)

SESSION_LIFETIME = timedelta(hours=8)


# ---------------------------
# Authentication Decorators
# ---------------------------
def login_required(view):
    """Decorator to require user login."""
    @wraps(view)
    def wrapped_view(**kwargs):
        if "user_id" not in session:
            return redirect(url_for("auth.login", next=request.path))
        # Validate user still exists in database
        try:
            db = get_db()
            cur = db.execute("SELECT id FROM users WHERE id = ?", (session["user_id"],))
            if cur.fetchone() is None:
                session.clear()
                flash("Your account no longer exists.", "danger")
                return redirect(url_for("auth.login"))
        except Exception as e:
            logging.error(f"Error validating user session: {e}")
            # Allow request to proceed if DB check fails to avoid blocking legitimate users
        return view(**kwargs)
    return wrapped_view


def validate_session():
    """Expire stale logins. Returns tuple (valid, redirect_endpoint)."""
    if session.get("user_id") is not None:
        login_time_str = session.get("user_login_time")
        if login_time_str:
            try:
                login_time = datetime.fromisoformat(login_time_str)
                if datetime.now() - login_time > SESSION_LIFETIME:
                    session.clear()
                    flash("Session expired. Please log in again.", "danger")
                    return (False, "auth.login")
            except (ValueError, TypeError):
                session.clear()
                flash("Invalid session. Please log in again.", "danger")
                return (False, "auth.login")

    return (True, None)


def current_user_id():
    """Id of the logged-in user, or None."""
    return session.get("user_id")


# ---------------------------
# User Authentication Routes
# ---------------------------
@auth_bp.route("/login", methods=["GET", "POST"])
@limiter.limit("10 per minute")
def login():
    next_url = safe_referrer(request.values.get("next"), request.host_url, default=None)
    if request.method == "POST":
        username = request.form.get("username", "").strip().lower()
        password = request.form.get("password", "")

        # Input validation
        if not username or not password:
            flash("Username and password are required.", "danger")
            return render_template("login.html", next_url=next_url)

        if len(username) > 50 or len(password) > 100 or not re.match(r"^[a-z0-9_.-]+$", username):
            flash("Invalid username or password format.", "danger")
            return render_template("login.html", next_url=next_url)

        try:
            db = get_db()
            cur = db.execute("SELECT id, password FROM users WHERE username = ?", (username,))
            user = cur.fetchone()
            if user and check_password_hash(user["password"], password):
                # Regenerate session to prevent session fixation
                session.clear()
                session["user_id"] = user["id"]
                session["username"] = username
                session["user_login_time"] = datetime.now().isoformat()
                logging.info(
                    f"Security: User '{username}' logged in successfully from {get_remote_address()}"
                )
                flash("Logged in successfully.", "success")
                return redirect(next_url or url_for("main.index"))
            else:
                # Use generic error message to prevent username enumeration
                logging.warning(
                    f"Security: Failed login attempt for username '{username}' from {get_remote_address()}"
                )
                flash("Invalid credentials.", "danger")
        except Exception as e:
            logging.error(f"User login error: {e}")
            flash("An error occurred during login. Please try again.", "danger")

    return render_template("login.html", next_url=next_url)


@auth_bp.route("/logout")
@login_required
@limiter.limit("10 per minute")
def logout():
    username = session.get("username", "unknown")
    session.clear()
    logging.info(f"Security: User '{username}' logged out")
    flash("Logged out.", "info")
    return redirect(url_for("main.index"))
