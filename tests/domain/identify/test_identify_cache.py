from __future__ import annotations

from datetime import timedelta

import pytest

from identipy.domain.identify import IdentifyCache, IdentifyRequest, IdentifyResult
from tests.helpers.identities import make_engine, make_user


def test_put_keys_on_result_viewer_flag() -> None:
    subject = make_user()
    cache = IdentifyCache()
    anonymous = IdentifyResult(me_set=False)
    viewed = IdentifyResult(me_set=True)

    cache.put(subject.id, anonymous)
    cache.put(subject.id, viewed)

    assert cache.get(subject.id, False) is anonymous
    assert cache.get(subject.id, True) is viewed
    assert len(cache) == 2


def test_put_overwrites_previous_entry() -> None:
    subject = make_user()
    cache = IdentifyCache()
    cache.put(subject.id, IdentifyResult())
    latest = IdentifyResult()

    cache.put(subject.id, latest)

    assert cache.get(subject.id, False) is latest
    assert len(cache) == 1


def test_bust_drops_both_flags_for_one_subject() -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    cache = IdentifyCache()
    cache.put(alice.id, IdentifyResult(me_set=False))
    cache.put(alice.id, IdentifyResult(me_set=True))
    kept = IdentifyResult()
    cache.put(bob.id, kept)

    cache.bust(alice.id)

    assert cache.get(alice.id, False) is None
    assert cache.get(alice.id, True) is None
    assert cache.get(bob.id, False) is kept


def test_expired_entries_are_dropped() -> None:
    now = [0.0]
    subject = make_user()
    cache = IdentifyCache(ttl=timedelta(minutes=1), clock=lambda: now[0])
    cache.put(subject.id, IdentifyResult())

    now[0] = 61.0

    assert cache.get(subject.id, False) is None
    assert len(cache) == 0


def test_key_locks_are_released_after_identification() -> None:
    cache = IdentifyCache()
    engine = make_engine(cache=cache)
    subjects = [make_user(f"user{index}") for index in range(50)]

    for subject in subjects:
        engine.identify(subject, IdentifyRequest())
    for subject in subjects:
        cache.bust(subject.id)

    assert len(cache) == 0
    assert cache._key_locks == {}  # noqa: SLF001


def test_key_lock_lives_while_held() -> None:
    subject = make_user()
    cache = IdentifyCache()

    with cache.single_flight(subject.id, False):
        with cache.single_flight(subject.id, False):
            assert len(cache._key_locks) == 1  # noqa: SLF001
        assert len(cache._key_locks) == 1  # noqa: SLF001

    assert cache._key_locks == {}  # noqa: SLF001


def test_key_lock_is_released_when_the_body_raises() -> None:
    subject = make_user()
    cache = IdentifyCache()

    with pytest.raises(RuntimeError), cache.single_flight(subject.id, True):
        raise RuntimeError("boom")

    assert cache._key_locks == {}  # noqa: SLF001
