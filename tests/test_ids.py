import time

from softpack.utils.ids import new_id


def test_ids_are_millisecond_timestamps():
    before = int(time.time() * 1000)
    value = int(new_id())
    assert value >= before
    assert value < before + 60_000


def test_ids_are_unique_and_increasing():
    ids = [int(new_id()) for _ in range(500)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)
