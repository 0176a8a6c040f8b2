import threading
from contextlib import nullcontext

import pytest

from mongo_session import DeadlineExceeded, OperationCancelled, SessionContext


def test_background_context():
    """Test the background context never blocks storage calls."""
    ctx = SessionContext.background()

    ctx.check()
    assert ctx.cancelled is False
    assert ctx.remaining() is None
    assert isinstance(ctx.storage_timeout(), nullcontext)


def test_cancel():
    ctx = SessionContext()
    ctx.cancel()

    assert ctx.cancelled is True
    with pytest.raises(OperationCancelled):
        ctx.check()


def test_cancel_from_another_thread():
    ctx = SessionContext()
    thread = threading.Thread(target=ctx.cancel)
    thread.start()
    thread.join()

    with pytest.raises(OperationCancelled):
        ctx.check()


def test_deadline_exceeded():
    ctx = SessionContext(timeout=0)

    assert ctx.remaining() == 0.0
    with pytest.raises(DeadlineExceeded):
        ctx.check()


def test_deadline_remaining():
    ctx = SessionContext(timeout=60)

    ctx.check()
    assert 0 < ctx.remaining() <= 60
    with ctx.storage_timeout():
        pass


def test_negative_timeout_rejected():
    with pytest.raises(ValueError):
        SessionContext(timeout=-1)


def test_values_are_carried():
    ctx = SessionContext(values={"request_id": "r-1"})

    assert ctx.values == {"request_id": "r-1"}
    assert SessionContext().values == {}
