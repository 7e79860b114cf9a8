import pytest

from packet_log import AlreadyRecording, CursorPair, NotRecording, SessionController, SessionStatus


def test_initial_state_is_idle():
    s = SessionController(CursorPair())
    assert s.status is SessionStatus.IDLE
    assert not s.gate_ingest()
    assert not s.gate_poll()


def test_start_twice_fails():
    s = SessionController(CursorPair())
    assert s.start() == 0
    with pytest.raises(AlreadyRecording):
        s.start()
    assert s.active


def test_stop_when_idle_fails():
    s = SessionController(CursorPair())
    with pytest.raises(NotRecording):
        s.stop()


def test_start_records_write_position_and_resets_cursors_and_ordering():
    c = CursorPair()
    for _ in range(3):
        c.next_write()
    c.next_read()
    s = SessionController(c)
    s.last_accepted_timestamp = 99.0
    s.samples = 7

    assert s.start() == 3
    assert c.snapshot() == (3, 3)
    assert s.last_accepted_timestamp is None
    assert s.samples == 0
    assert s.gate_ingest() and s.gate_poll()


def test_stop_returns_half_open_range():
    c = CursorPair()
    s = SessionController(c)
    s.start()
    c.next_write()
    c.next_write()
    rng = s.stop()
    assert (rng.start, rng.end) == (0, 2)
    assert list(rng) == [0, 1]
    assert not s.active


def test_empty_session_is_not_an_error():
    s = SessionController(CursorPair())
    s.start()
    rng = s.stop()
    assert rng.is_empty
    assert len(rng) == 0
