from datetime import datetime, timedelta, timezone

import pytest

from mongo_session import SessionRecord

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_from_document():
    """Test building a record from a stored document."""
    record = SessionRecord.from_document({"_id": "s1", "value": "{}", "expired_at": NOW})

    assert record.id == "s1"
    assert record.value == "{}"
    assert record.expired_at == NOW


def test_from_document_without_value():
    record = SessionRecord.from_document({"_id": "s1", "expired_at": NOW})

    assert record.value == ""


def test_naive_timestamps_are_utc():
    """Test naive datetimes from the driver are read as UTC."""
    record = SessionRecord("s1", "", NOW.replace(tzinfo=None))

    assert record.expired_at == NOW
    assert record.expired_at.tzinfo is timezone.utc


def test_empty_id_is_accepted():
    """Test any string is a valid session ID, as MongoDB allows."""
    record = SessionRecord("", "", NOW)

    assert record.id == ""
    assert record.to_update()["$set"]["expired_at"] == NOW


def test_is_expired():
    """Test a record expires strictly after its timestamp."""
    record = SessionRecord("s1", "", NOW)

    assert record.is_expired(NOW - timedelta(seconds=1)) is False
    assert record.is_expired(NOW) is False
    assert record.is_expired(NOW + timedelta(milliseconds=1)) is True


def test_expiry_from():
    assert SessionRecord.expiry_from(NOW, 10) == NOW + timedelta(seconds=10)


def test_to_update():
    """Test the upsert document writes value and expiry."""
    record = SessionRecord("s1", '{"a":1}', NOW)

    assert record.to_update() == {"$set": {"value": '{"a":1}', "expired_at": NOW}}
