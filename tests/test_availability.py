from datetime import date, time

import pytest
from pydantic import ValidationError

from utils.availability import aggregate_timeslots, booked_pax_by_slot
from utils.records import ReservationRecord, TimeslotDefinition


def slot(dateslot, timeslot, numslots, branch_id=1):
    return {"branch_id": branch_id, "dateslot": dateslot, "timeslot": timeslot, "numslots": numslots}


def booking(reserveddate, reservedslot, paxbooked):
    return {"reserveddate": reserveddate, "reservedslot": reservedslot, "paxbooked": paxbooked}


def test_booked_pax_is_subtracted_from_capacity():
    result = aggregate_timeslots(
        [booking("2099-01-01", "18:00", 3)],
        [slot("2099-01-01", "18:00", 10)],
    )
    assert len(result) == 1
    assert result[0].slots == 7
    assert result[0].dateslot == date(2099, 1, 1)
    assert result[0].timing == time(18, 0)
    assert result[0].br_id == 1


def test_slot_without_reservations_keeps_full_capacity():
    result = aggregate_timeslots(
        [booking("2099-01-02", "18:00", 3)],
        [slot("2099-01-01", "18:00", 10)],
    )
    assert result[0].slots == 10


def test_duplicate_reservations_are_summed_and_can_go_negative():
    result = aggregate_timeslots(
        [booking("2099-01-01", "18:00", 5), booking("2099-01-01", "18:00", 7)],
        [slot("2099-01-01", "18:00", 10)],
    )
    assert result[0].slots == -2


def test_output_follows_timeslot_row_order():
    rows = [
        slot("2099-01-03", "12:00", 5),
        slot("2099-01-01", "19:00", 6),
        slot("2099-01-02", "08:30", 7),
    ]
    result = aggregate_timeslots([], rows)
    assert [(r.dateslot.day, r.timing.hour) for r in result] == [(3, 12), (1, 19), (2, 8)]
    assert [r.slots for r in result] == [5, 6, 7]


def test_time_spellings_share_one_bucket():
    result = aggregate_timeslots(
        [
            booking("2099-01-01", "18:30", 1),
            booking("2099-01-01", "18:30:00", 2),
            booking("2099-01-01", "6:30 PM", 3),
        ],
        [slot("2099-01-01", "18:30", 10)],
    )
    assert result[0].slots == 4


def test_date_and_time_do_not_collide_when_concatenated():
    # "2099-01-1" + "11:00" and "2099-01-11" + "1:00" would share a string key
    result = aggregate_timeslots(
        [booking("2099-01-11", "01:00", 4)],
        [slot("2099-01-01", "11:00", 10), slot("2099-01-11", "01:00", 10)],
    )
    assert [r.slots for r in result] == [10, 6]


def test_accepts_validated_records():
    reservations = [ReservationRecord(reserveddate=date(2099, 1, 1), reservedslot=time(18), paxbooked=2)]
    timeslots = [TimeslotDefinition(branch_id=4, dateslot=date(2099, 1, 1), timeslot=time(18), numslots=5)]
    result = aggregate_timeslots(reservations, timeslots)
    assert result[0].slots == 3
    assert result[0].br_id == 4


def test_booked_pax_by_slot_groups_by_date_and_time():
    booked = booked_pax_by_slot([
        booking("2099-01-01", "18:00", 2),
        booking("2099-01-01", "18:00", 3),
        booking("2099-01-01", "19:00", 1),
    ])
    assert booked == {
        (date(2099, 1, 1), time(18, 0)): 5,
        (date(2099, 1, 1), time(19, 0)): 1,
    }


def test_timeslot_missing_capacity_fails_fast():
    with pytest.raises(ValidationError):
        aggregate_timeslots([], [{"branch_id": 1, "dateslot": "2099-01-01", "timeslot": "18:00"}])


def test_reservation_with_unreadable_time_fails_fast():
    with pytest.raises(ValidationError):
        aggregate_timeslots([booking("2099-01-01", "dinner", 2)], [slot("2099-01-01", "18:00", 10)])


def test_empty_inputs():
    assert aggregate_timeslots([], []) == []
