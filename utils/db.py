"""Database helper functions."""

import os
import sqlite3
import logging
from flask import g, current_app
from werkzeug.security import generate_password_hash


def connect_db(path):
    """Open a new SQLite connection configured like the request connection."""
    try:
        conn = sqlite3.connect(path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA cache_size=10000;")
    except sqlite3.Error as e:
        logging.error(f"Database connection failed: {e}")
        raise RuntimeError(f"Database connection failed: {e}")
    return conn


def get_db():
    """Get database connection for the current request context."""
    if "db" not in g:
        g.db = connect_db(current_app.config["DATABASE"])
    return g.db


def close_db(error=None):
    """Close database connection at end of request."""
    db = g.pop("db", None)
    if db is not None:
        db.close()


def ensure_database_dir(path):
    """Create the directory holding the database file if it is missing."""
    db_dir = os.path.dirname(path)
    if db_dir and not os.path.exists(db_dir):
        try:
            os.makedirs(db_dir, mode=0o755)
        except OSError as e:
            logging.error(f"Failed to create database directory {db_dir}: {e}")
            raise RuntimeError(f"Cannot create database directory: {e}")


def init_db():
    """Initialize database with schema."""
    db = get_db()
    with current_app.open_resource("schema.sql", mode="r") as f:
        db.executescript(f.read())
    db.commit()


def create_user(username, password):
    """Add a customer account and return its id."""
    db = get_db()
    cur = db.execute(
        "INSERT INTO users (username, password) VALUES (?, ?)",
        (username, generate_password_hash(password, method="pbkdf2:sha256")),
    )
    db.commit()
    return cur.lastrowid
