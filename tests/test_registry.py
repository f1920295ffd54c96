import random
import string

import pytest

from tripletmatch.services.game import GameRules, RoomCodesExhausted, RoomRegistry, normalize_room_id


def test_room_ids_are_normalised():
    registry = RoomRegistry()
    session = registry.get_or_create('  abcd ')
    assert session.room_id == 'ABCD'
    assert registry.get('abcd') is session
    assert registry.get_or_create('ABCD') is session
    assert 'abcd' in registry
    assert len(registry) == 1
    assert normalize_room_id(None) == ''


def test_blank_room_id_rejected():
    with pytest.raises(ValueError):
        RoomRegistry().get_or_create('   ')


def test_create_uses_unique_codes():
    registry = RoomRegistry(code_length=1, rng=random.Random(3))
    codes = {registry.create().room_id for _ in range(20)}
    assert len(codes) == 20
    assert all(len(code) == 1 for code in codes)


def test_sessions_share_registry_rules():
    rules = GameRules(max_players=2)
    registry = RoomRegistry(rules)
    assert registry.create().rules is rules


def test_member_index_and_eviction():
    registry = RoomRegistry()
    registry.get_or_create('ROOM')
    registry.bind('sid-1', 'room')
    registry.bind('sid-2', 'ROOM')
    assert registry.room_of('sid-1') == 'ROOM'

    assert registry.unbind('sid-1') == 'ROOM'
    assert registry.room_of('sid-1') is None

    assert registry.evict('room') is not None
    assert registry.get('ROOM') is None
    assert registry.room_of('sid-2') is None
    assert registry.evict('ROOM') is None


def test_unjoined_rooms_expire():
    now = [0.0]
    registry = RoomRegistry(unjoined_ttl=60, clock=lambda: now[0])
    registry.get_or_create('IDLE')
    registry.get_or_create('BUSY').join('sid-1', 'Alice')

    now[0] = 59.0
    registry.create()
    assert 'IDLE' in registry

    now[0] = 61.0
    registry.get_or_create('NEXT')
    assert 'IDLE' not in registry
    assert 'BUSY' in registry
    assert 'NEXT' in registry


def test_create_raises_when_codes_run_out():
    registry = RoomRegistry(code_length=1, rng=random.Random(3))
    for code in string.ascii_uppercase + string.digits:
        registry.get_or_create(code)
    assert len(registry) == 36
    with pytest.raises(RoomCodesExhausted):
        registry.create()
