"""Remaining timeslot capacity for a branch."""

from utils.records import AvailableTimeslot, ReservationRecord, TimeslotDefinition


def booked_pax_by_slot(reservations):
    """Sum booked pax per (date, time) slot.

    Rows may be records or raw mappings; raw rows are validated first.
    """
    booked = {}
    for row in reservations:
        record = ReservationRecord.from_row(row)
        booked[record.slot_key] = booked.get(record.slot_key, 0) + record.paxbooked
    return booked


def aggregate_timeslots(reservations, timeslots):
    """Subtract booked pax from every timeslot definition.

    Returns one AvailableTimeslot per timeslot row, in the order the rows were
    given. Slots without any reservation keep their full capacity; overbooked
    slots go negative.
    """
    booked = booked_pax_by_slot(reservations)
    available = []
    for row in timeslots:
        slot = TimeslotDefinition.from_row(row)
        available.append(
            AvailableTimeslot(
                dateslot=slot.dateslot,
                timing=slot.timeslot,
                slots=slot.numslots - booked.get(slot.slot_key, 0),
                br_id=slot.branch_id,
            )
        )
    return available
