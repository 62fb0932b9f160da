import itertools
import string

from tictactoe.models import generate_player_token, generate_room_code
from tictactoe.registry import RoomRegistry


def test_generated_codes_are_uppercase_alphanumeric():
    code = generate_room_code(6)
    assert len(code) == 6
    assert set(code) <= set(string.ascii_uppercase + string.digits)
    token = generate_player_token(10)
    assert len(token) == 10
    assert set(token) <= set(string.ascii_lowercase + string.digits)


def test_create_room_starts_empty():
    registry = RoomRegistry()
    room = registry.create_room()
    assert registry.get_room(room.code) is room
    assert room.players == []
    assert room.board == [None] * 9
    assert room.current_player_index == 0
    assert room.winner is None and room.is_draw is False
    assert room.scores == {}
    assert registry.connections(room.code) == []


def test_create_room_regenerates_on_collision():
    codes = iter(['AAAAAA', 'AAAAAA', 'BBBBBB'])
    registry = RoomRegistry(code_factory=lambda length: next(codes))
    first = registry.create_room()
    second = registry.create_room()
    assert first.code == 'AAAAAA'
    assert second.code == 'BBBBBB'
    assert len(registry) == 2


def test_lookup_is_case_insensitive():
    registry = RoomRegistry(code_factory=lambda length: 'ab12cd')
    room = registry.create_room()
    assert room.code == 'AB12CD'
    assert registry.get_room('ab12cd') is room
    assert registry.get_room(' AB12CD ') is room
    assert 'Ab12Cd' in registry
    assert registry.get_room('ZZZZZZ') is None
    assert registry.get_room(None) is None
    assert registry.get_room(42) is None


def test_player_tokens_unique_within_room():
    tokens = itertools.chain(['dup'], ['dup'], ['fresh'])
    registry = RoomRegistry(token_factory=lambda length: next(tokens))
    room = registry.create_room()
    assert registry.issue_player_token(room) == 'dup'
    assert registry.issue_player_token(room) == 'fresh'
    assert room.issued_tokens == {'dup', 'fresh'}


def test_removing_last_connection_deletes_room():
    registry = RoomRegistry()
    room = registry.create_room()
    registry.add_connection(room.code, 'c1')
    registry.add_connection(room.code, 'c2')
    assert sorted(registry.connections(room.code)) == ['c1', 'c2']

    assert registry.remove_connection(room.code, 'c1') is False
    assert registry.get_room(room.code) is room

    assert registry.remove_connection(room.code, 'c2') is True
    assert registry.get_room(room.code) is None
    assert registry.connections(room.code) == []
    assert registry.room_codes() == []


def test_remove_connection_for_unknown_room():
    registry = RoomRegistry()
    assert registry.remove_connection('NOPE00', 'c1') is False
