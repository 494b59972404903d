"""Cached data access functions."""

import logging
import sqlite3

from pydantic import ValidationError

from extensions import cache
from utils.db import get_db
from utils.errors import DataFetchError
from utils.repository import fetch_restaurant, fetch_restaurant_branches, fetch_restaurants


@cache.memoize(timeout=300)
def get_restaurants():
    """Get every restaurant with its branch count."""
    try:
        return [row.model_dump() for row in fetch_restaurants(get_db())]
    except (sqlite3.Error, ValidationError) as e:
        logging.error(f"Error getting restaurants: {e}")
        raise DataFetchError("Could not load restaurants") from e


@cache.memoize(timeout=300)
def get_restaurant(restaurant_id):
    """Get a single restaurant, or None if it does not exist."""
    try:
        restaurant = fetch_restaurant(get_db(), restaurant_id)
    except (sqlite3.Error, ValidationError) as e:
        logging.error(f"Error getting restaurant {restaurant_id}: {e}")
        raise DataFetchError(f"Could not load restaurant {restaurant_id}") from e
    return restaurant.model_dump() if restaurant else None


@cache.memoize(timeout=300)
def get_restaurant_branches(restaurant_id):
    """Get the branches of a restaurant."""
    try:
        return [row.model_dump() for row in fetch_restaurant_branches(get_db(), restaurant_id)]
    except (sqlite3.Error, ValidationError) as e:
        logging.error(f"Error getting branches for restaurant {restaurant_id}: {e}")
        raise DataFetchError(f"Could not load branches for restaurant {restaurant_id}") from e
