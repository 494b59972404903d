"""Branch page and reservation routes."""

from flask import Blueprint, render_template, request, redirect, url_for, flash, abort, current_app

from extensions import reservation_limit
from routes.auth import current_user_id
from utils.availability import aggregate_timeslots
from utils.booking import RequestContext, submit_reservation
from utils.db import get_db
from utils.errors import BranchNotFound, DataFetchError, ReservationInsertError
from utils.helpers import safe_referrer
from utils.repository import fetch_branch_page, make_reservation
from utils.views import build_branch_view

branch_bp = Blueprint("branch", __name__, url_prefix="/restaurants/<int:restaurant_id>/branches")


def insert_reservation(params):
    """Insert on the request connection, opened only once a booking reaches the insert."""
    try:
        db = get_db()
    except RuntimeError as e:
        raise ReservationInsertError(str(e)) from e
    return make_reservation(db, params)


@branch_bp.route("/<int:branch_id>")
def get_branch(restaurant_id, branch_id):
    try:
        details, reservations, timeslots, menu_items = fetch_branch_page(
            current_app.config["DATABASE"],
            branch_id,
            workers=current_app.config.get("FETCH_WORKERS", 4),
        )
    except BranchNotFound:
        abort(404)
    except DataFetchError:
        abort(503)

    if details.restaurant_id != restaurant_id:
        abort(404)

    branch = build_branch_view(details, aggregate_timeslots(reservations, timeslots), menu_items)
    return render_template(
        "branch.html",
        branch=branch,
        restaurant_id=restaurant_id,
        branch_id=branch_id,
    )


@branch_bp.route("/<int:branch_id>/reserve", methods=["POST"])
@reservation_limit
def reserve_timeslot(restaurant_id, branch_id):
    ctx = RequestContext(
        user_id=current_user_id(),
        notify=flash,
        back_url=safe_referrer(request.referrer, request.host_url),
    )
    target = submit_reservation(
        ctx,
        request.form,
        url_for("branch.get_branch", restaurant_id=restaurant_id, branch_id=branch_id),
        insert_reservation,
        branch_id=branch_id,
    )
    return redirect(target)
