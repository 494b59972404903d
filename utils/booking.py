"""Reservation submission: booking input, the request context and the submit flow."""

import logging
from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from utils.errors import AuthenticationRequired, ReservationInsertError
from utils.helpers import display_time, parse_time, storage_time

# Form field names as visitors know them, keyed by BookingRequest field
FIELD_LABELS = {
    "user_id": "account",
    "branch_id": "branch",
    "pax": "party size",
    "timing": "time",
    "slotdate": "date",
    "promo_code": "promotion code",
}


def normalize_time(raw):
    """Canonical display form of a submitted time, e.g. "14:30" -> "2:30 PM"."""
    return display_time(parse_time(raw))


class BookingRequest(BaseModel):
    """A validated reservation submission."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    branch_id: int
    pax: int = Field(gt=0)
    timing: time
    slotdate: date
    promo_code: str = Field(default="", max_length=64)

    @field_validator("timing", mode="before")
    @classmethod
    def parse_timing(cls, value):
        return parse_time(value)

    @field_validator("promo_code", mode="before")
    @classmethod
    def trim_promo_code(cls, value):
        return (value or "").strip()

    @classmethod
    def from_form(cls, user_id, form):
        return cls(
            user_id=user_id,
            branch_id=form.get("bid"),
            pax=form.get("pax"),
            timing=form.get("timing"),
            slotdate=form.get("slotdate"),
            promo_code=form.get("promoCode"),
        )

    @property
    def time_label(self):
        return display_time(self.timing)

    def as_params(self):
        """Positional parameters for the reservation insert."""
        return [
            self.user_id,
            self.branch_id,
            self.pax,
            storage_time(self.timing),
            self.slotdate.isoformat(),
            self.promo_code,
        ]


class RequestContext:
    """Who is asking, where their notices go and where "back" is."""

    def __init__(self, user_id=None, notify=None, back_url="/"):
        self.user_id = user_id
        self.notify = notify or (lambda message, category: None)
        self.back_url = back_url

    @property
    def is_authenticated(self):
        return self.user_id is not None

    def require_user(self):
        if not self.is_authenticated:
            raise AuthenticationRequired("Login required")
        return self.user_id


def _invalid_fields(error):
    """Readable list of the form fields that failed validation."""
    labels = []
    for detail in error.errors():
        label = FIELD_LABELS.get(detail["loc"][0] if detail["loc"] else "", "booking")
        if label not in labels:
            labels.append(label)
    if len(labels) > 1:
        return f"{', '.join(labels[:-1])} and {labels[-1]}"
    return labels[0] if labels else "details"


def submit_reservation(ctx, form, branch_url, make_reservation, branch_id=None):
    """Book a timeslot and return the URL to redirect to.

    When ``branch_id`` is given, the form's branch must match it.

    ``make_reservation`` receives the positional insert parameters and raises
    ReservationInsertError on failure. It is never called for anonymous
    visitors or invalid forms.
    """
    try:
        user_id = ctx.require_user()
    except AuthenticationRequired:
        ctx.notify("Please login to make reservations.", "danger")
        return ctx.back_url

    try:
        booking = BookingRequest.from_form(user_id, form)
    except ValidationError as e:
        fields = _invalid_fields(e)
        logging.info(f"Rejected booking from user {user_id}: invalid {fields}")
        ctx.notify(f"Please check the {fields} of your booking.", "danger")
        return branch_url

    if branch_id is not None and booking.branch_id != branch_id:
        logging.warning(f"User {user_id} posted branch {booking.branch_id} to the page of branch {branch_id}")
        ctx.notify("Please check the branch of your booking.", "danger")
        return branch_url

    slotdate = booking.slotdate.isoformat()
    try:
        make_reservation(booking.as_params())
    except ReservationInsertError as e:
        ctx.notify(f"Unable to make reservation on '{slotdate}' at '{booking.time_label}'.", "danger")
        ctx.notify(e.public_message, "danger")
        return branch_url

    logging.info(f"User {user_id} booked branch {booking.branch_id} on {slotdate} at {booking.time_label}")
    ctx.notify(f"Booking on '{slotdate}' at '{booking.time_label}' has been added!", "success")
    return branch_url
