"""Named SQL statements used by the repository."""

GET_RESTAURANTS = """
    SELECT r.id, r.rname, r.cuisine, COUNT(b.id) AS branch_count
    FROM restaurants r
    LEFT JOIN branches b ON b.restaurant_id = r.id
    GROUP BY r.id
    ORDER BY r.rname
"""

GET_RESTAURANT = "SELECT id, rname, cuisine FROM restaurants WHERE id = ?"

GET_RESTAURANT_BRANCHES = """
    SELECT id, bname, baddress, bphone
    FROM branches
    WHERE restaurant_id = ?
    ORDER BY bname
"""

GET_BRANCH_DETAILS = """
    SELECT r.id AS restaurant_id, r.rname, b.bname, b.baddress, b.bphone
    FROM branches b
    JOIN restaurants r ON r.id = b.restaurant_id
    WHERE b.id = ?
"""

GET_RESERVATIONS = """
    SELECT reserveddate, reservedslot, paxbooked
    FROM reservations
    WHERE branch_id = ?
"""

GET_TIMESLOTS = """
    SELECT branch_id, dateslot, timeslot, numslots
    FROM timeslots
    WHERE branch_id = ? AND dateslot >= date('now')
    ORDER BY dateslot, timeslot
"""

GET_BRANCH_MENU_ITEMS = """
    SELECT name, price
    FROM menu_items
    WHERE branch_id = ?
    ORDER BY name
"""

# Parameters: user id, branch id, pax, time, date, promo code ('' for none)
MAKE_RESERVATION = """
    INSERT INTO reservations
        (user_id, branch_id, paxbooked, reservedslot, reserveddate, promo_code)
    VALUES (?, ?, ?, ?, ?, NULLIF(?, ''))
"""
