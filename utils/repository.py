"""Query repository: typed reads and the reservation insert."""

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing

from pydantic import ValidationError

from utils import queries
from utils.db import connect_db
from utils.errors import BranchNotFound, DataFetchError, ReservationInsertError
from utils.records import (
    BranchDetails,
    BranchSummary,
    MenuItem,
    ReservationRecord,
    RestaurantSummary,
    TimeslotDefinition,
)

# Trigger messages from schema.sql mapped to text that is safe to show visitors
KNOWN_REJECTIONS = {
    "Timeslot is full": "That timeslot is fully booked.",
    "Timeslot is not offered by this branch": "That timeslot is not offered by this branch.",
    "Invalid promotion code": "That promotion code is not valid for this booking.",
}


# ---------------------------
# Restaurant directory
# ---------------------------
def fetch_restaurants(db):
    cur = db.execute(queries.GET_RESTAURANTS)
    return [RestaurantSummary.from_row(row) for row in cur.fetchall()]


def fetch_restaurant(db, restaurant_id):
    row = db.execute(queries.GET_RESTAURANT, (restaurant_id,)).fetchone()
    return RestaurantSummary.from_row(row) if row else None


def fetch_restaurant_branches(db, restaurant_id):
    cur = db.execute(queries.GET_RESTAURANT_BRANCHES, (restaurant_id,))
    return [BranchSummary.from_row(row) for row in cur.fetchall()]


# ---------------------------
# Branch page
# ---------------------------
def fetch_branch_details(db, branch_id):
    row = db.execute(queries.GET_BRANCH_DETAILS, (branch_id,)).fetchone()
    if row is None:
        raise BranchNotFound(branch_id)
    return BranchDetails.from_row(row)


def fetch_reservations(db, branch_id):
    cur = db.execute(queries.GET_RESERVATIONS, (branch_id,))
    return [ReservationRecord.from_row(row) for row in cur.fetchall()]


def fetch_timeslots(db, branch_id):
    cur = db.execute(queries.GET_TIMESLOTS, (branch_id,))
    return [TimeslotDefinition.from_row(row) for row in cur.fetchall()]


def fetch_menu_items(db, branch_id):
    cur = db.execute(queries.GET_BRANCH_MENU_ITEMS, (branch_id,))
    return [MenuItem.from_row(row) for row in cur.fetchall()]


BRANCH_PAGE_FETCHES = (
    fetch_branch_details,
    fetch_reservations,
    fetch_timeslots,
    fetch_menu_items,
)


def _run_fetch(database, fetch, branch_id):
    # Each worker thread gets its own connection
    with closing(connect_db(database)) as conn:
        return fetch(conn, branch_id)


def fetch_branch_page(database, branch_id, workers=4):
    """Run the four branch page reads concurrently.

    Returns ``(details, reservations, timeslots, menu_items)``. Waits for all
    reads; if any of them fails the whole fetch fails.

    Raises:
        BranchNotFound: if the branch does not exist.
        DataFetchError: if a query fails or a row is malformed.
    """
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_run_fetch, database, fetch, branch_id)
            for fetch in BRANCH_PAGE_FETCHES
        ]
        try:
            return tuple(future.result() for future in futures)
        except BranchNotFound:
            raise
        except (sqlite3.Error, ValidationError, RuntimeError) as e:
            logging.error(f"Error fetching page data for branch {branch_id}: {e}")
            raise DataFetchError(f"Could not load branch {branch_id}") from e


# ---------------------------
# Reservations
# ---------------------------
def make_reservation(db, params):
    """Insert a reservation from positional parameters and commit.

    ``params`` is ``(user_id, branch_id, pax, time, date, promo_code)``.
    Returns the new reservation id.

    Raises:
        ReservationInsertError: if the insert is rejected or fails.
    """
    try:
        cur = db.execute(queries.MAKE_RESERVATION, tuple(params))
        db.commit()
    except sqlite3.Error as e:
        db.rollback()
        public_message = None
        if isinstance(e, sqlite3.IntegrityError):
            public_message = KNOWN_REJECTIONS.get(str(e))
        if public_message:
            logging.warning(f"Reservation rejected for params {tuple(params)}: {e}")
        else:
            logging.error(f"Error inserting reservation for params {tuple(params)}: {e}")
        raise ReservationInsertError(str(e), public_message) from e
    return cur.lastrowid
