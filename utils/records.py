"""Typed records for rows read from the database.

Every row set crosses the repository boundary through one of these models, so
a missing or malformed column raises ``pydantic.ValidationError`` instead of
flowing into the page as an undefined value.
"""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.helpers import parse_time


class Record(BaseModel):
    """Immutable row snapshot."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_row(cls, row):
        """Validate a ``sqlite3.Row`` or plain mapping."""
        if isinstance(row, cls):
            return row
        if not isinstance(row, dict):
            row = dict(row)
        return cls.model_validate(row)


class BranchDetails(Record):
    restaurant_id: int
    rname: str
    bname: str
    baddress: str
    bphone: str


class ReservationRecord(Record):
    reserveddate: date
    reservedslot: time
    paxbooked: int = Field(ge=0)

    @field_validator("reservedslot", mode="before")
    @classmethod
    def parse_slot(cls, value):
        return parse_time(value)

    @property
    def slot_key(self):
        return (self.reserveddate, self.reservedslot)


class TimeslotDefinition(Record):
    branch_id: int
    dateslot: date
    timeslot: time
    numslots: int = Field(ge=0)

    @field_validator("timeslot", mode="before")
    @classmethod
    def parse_slot(cls, value):
        return parse_time(value)

    @property
    def slot_key(self):
        return (self.dateslot, self.timeslot)


class MenuItem(Record):
    name: str
    price: float = Field(ge=0)


class AvailableTimeslot(Record):
    """A timeslot with the capacity left after existing bookings.

    ``slots`` is not clamped: an overbooked timeslot reports a negative value.
    """

    dateslot: date
    timing: time
    slots: int
    br_id: int


class RestaurantSummary(Record):
    id: int
    rname: str
    cuisine: str | None = None
    branch_count: int = 0


class BranchSummary(Record):
    id: int
    bname: str
    baddress: str
    bphone: str
