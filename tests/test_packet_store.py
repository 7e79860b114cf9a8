import pytest

from packet_log import PacketExists, PacketNotFound


def test_put_get_roundtrip_keeps_rows_and_header(store):
    store.put(0, ["t,v", "1,10", "2,20"])
    pkt = store.get(0)
    assert pkt.sequence_index == 0
    assert pkt.rows == ("t,v", "1,10", "2,20")
    assert pkt.has_header
    assert pkt.data_rows() == ("1,10", "2,20")
    assert pkt.text() == "t,v\n1,10\n2,20\n"


def test_put_refuses_to_overwrite_an_index(store):
    store.put(3, ["t,v", "1,10"])
    with pytest.raises(PacketExists):
        store.put(3, ["t,v", "9,90"])
    assert store.get(3).rows == ("t,v", "1,10")


def test_get_missing_index(store):
    with pytest.raises(PacketNotFound) as exc:
        store.get(42)
    assert exc.value.index == 42


def test_append_master_drops_header_and_terminates_rows(store):
    assert not store.master_has_header()
    store.append_master(["t,v", "1,10"], drop_header=False)
    assert store.master_has_header()
    store.append_master(["t,v", "2,20"], drop_header=True)
    assert store.read_master() == "t,v\n1,10\n2,20\n"


def test_append_master_with_only_header_dropped_writes_nothing(store):
    store.append_master(["t,v", "1,10"], drop_header=False)
    store.append_master(["t,v"], drop_header=True)
    assert store.read_master() == "t,v\n1,10\n"


def test_discard_is_idempotent(store):
    store.put(0, ["t,v", "1,10"])
    store.discard(0)
    store.discard(0)
    with pytest.raises(PacketNotFound):
        store.get(0)


def test_reset_clears_packets_and_master(store):
    store.put(0, ["t,v", "1,10"])
    store.append_master(["t,v", "1,10"], drop_header=False)
    store.reset()
    with pytest.raises(PacketNotFound):
        store.get(0)
    assert store.read_master() == ""
    assert not store.master_has_header()
    assert store.packet_dir.is_dir()
