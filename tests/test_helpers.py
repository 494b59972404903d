from datetime import date, time

import pytest

from config import load_secret_key
from utils.helpers import display_date, format_price, safe_referrer, storage_time

HOST = "http://localhost/"


@pytest.mark.parametrize("referrer, expected", [
    ("http://localhost/restaurants/1?page=2", "/restaurants/1?page=2"),
    ("/restaurants/1", "/restaurants/1"),
    ("https://evil.example/restaurants/1", "/"),
    ("javascript:alert(1)", "/"),
    ("//evil.example/", "/"),
    (None, "/"),
    ("", "/"),
])
def test_safe_referrer(referrer, expected):
    assert safe_referrer(referrer, HOST) == expected


def test_display_date():
    assert display_date("2099-01-01") == "Thu, 1 Jan 2099"
    assert display_date(date(2099, 1, 2)) == "Fri, 2 Jan 2099"
    assert display_date("soon") == "soon"


def test_format_price():
    assert format_price(5.5) == "$5.50"
    assert format_price(1234) == "$1,234.00"


def test_storage_time():
    assert storage_time("7:05 pm") == "19:05"
    assert storage_time(time(9, 0)) == "09:00"


def test_secret_key_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "x" * 40)
    assert load_secret_key() == "x" * 40


def test_short_secret_key_is_refused(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "short")
    with pytest.raises(RuntimeError):
        load_secret_key()
