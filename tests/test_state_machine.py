import random

from rooms import RoomStateMachine


def _create(state_machine, host='host', name='Host', max_players=6):
    return state_machine.create_room(host, name, max_players)


class TestCreate:
    def test_host_name_resolution(self, state_machine):
        room = state_machine.create_room('abcdef', '  Alice  ', 4)
        assert room.host_name == 'Alice'
        assert room.players[0].name == 'Alice'

    def test_default_host_name(self, state_machine):
        room = state_machine.create_room('abcdef', None, 4)
        assert room.host_name == 'Host_abcd'

    def test_configured_default_capacity(self, registry):
        machine = RoomStateMachine(registry, default_max_players=3)
        assert machine.create_room('abcdef', 'Alice').max_players == 3

    def test_unparseable_capacity_uses_configured_default(self, registry):
        machine = RoomStateMachine(registry, default_max_players=3)
        assert machine.create_room('abcdef', 'Alice', 'lots').max_players == 3
        assert machine.create_room('ghijkl', 'Bob', float('inf')).max_players == 3

    def test_build_room_does_not_register(self, state_machine, registry):
        room = state_machine.build_room('abcdef', 'Alice', 4)
        assert room.code not in registry
        assert state_machine.open_room(room) is room
        assert registry.get(room.code) is room


class TestJoin:
    def test_join_appends_in_order(self, state_machine):
        room = _create(state_machine)

        ok, error, joined = state_machine.join(room.code, 'b', 'Bob')
        assert ok and error is None and joined is room
        state_machine.join(room.code, 'c', None)

        assert [p.connection_id for p in room.players] == ['host', 'b', 'c']
        assert room.players[2].name == 'Player_c'
        assert all(not p.ready for p in room.players)

    def test_unknown_room(self, state_machine):
        assert state_machine.join('ZZZZZZ', 'b', 'Bob') == (False, 'ROOM_NOT_FOUND', None)

    def test_full_room(self, state_machine):
        room = _create(state_machine, max_players=2)
        state_machine.join(room.code, 'b', 'Bob')

        ok, error, _ = state_machine.join(room.code, 'c', 'Cat')
        assert not ok
        assert error == 'ROOM_FULL'
        assert room.player_count == 2

    def test_started_room(self, state_machine):
        room = _create(state_machine)
        state_machine.start_game(room.code, 'host')

        ok, error, _ = state_machine.join(room.code, 'b', 'Bob')
        assert not ok
        assert error == 'GAME_ALREADY_STARTED'
        assert room.player_count == 1

    def test_started_check_precedes_full_check(self, state_machine):
        room = _create(state_machine, max_players=2)
        state_machine.join(room.code, 'b', 'Bob')
        state_machine.start_game(room.code, 'host')

        _, error, _ = state_machine.join(room.code, 'c', 'Cat')
        assert error == 'GAME_ALREADY_STARTED'


class TestLeave:
    def test_non_host_leaves(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')

        ok, error, result = state_machine.leave(room.code, 'b')
        assert ok and error is None
        assert result.player.connection_id == 'b'
        assert not result.host_changed
        assert not result.room_destroyed
        assert room.host_connection_id == 'host'

    def test_host_migrates_to_earliest_joiner(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')
        state_machine.join(room.code, 'c', 'Cat')

        _, _, result = state_machine.leave(room.code, 'host')
        assert result.host_changed
        assert room.host_connection_id == 'b'
        assert room.host_name == 'Bob'

    def test_last_player_destroys_room(self, state_machine, registry):
        room = _create(state_machine)

        _, _, result = state_machine.leave(room.code, 'host')
        assert result.room_destroyed
        assert registry.get(room.code) is None

    def test_unknown_room(self, state_machine):
        assert state_machine.leave('ZZZZZZ', 'b') == (False, 'ROOM_NOT_FOUND', None)

    def test_not_a_member(self, state_machine):
        room = _create(state_machine)
        assert state_machine.leave(room.code, 'stranger') == (False, 'PLAYER_NOT_IN_ROOM', None)
        assert room.player_count == 1

    def test_leave_after_start_keeps_game_state(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')
        state_machine.start_game(room.code, 'host')

        state_machine.leave(room.code, 'host')
        assert room.state == 'in-game'
        assert room.grid is not None
        assert room.host_connection_id == 'b'


class TestDisconnect:
    def test_host_disconnect_from_three_player_room(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')
        state_machine.join(room.code, 'c', 'Cat')

        result = state_machine.disconnect(room.code, 'host')
        assert result.host_changed
        assert room.host_connection_id == 'b'
        assert [p.connection_id for p in room.players] == ['b', 'c']

    def test_nothing_to_clean_up(self, state_machine):
        room = _create(state_machine)
        assert state_machine.disconnect('ZZZZZZ', 'host') is None
        assert state_machine.disconnect(room.code, 'stranger') is None
        assert room.player_count == 1


class TestToggleReady:
    def test_flips_flag(self, state_machine):
        room = _create(state_machine)

        ok, _, player = state_machine.toggle_ready(room.code, 'host')
        assert ok and player.ready is True
        _, _, player = state_machine.toggle_ready(room.code, 'host')
        assert player.ready is False

    def test_unknown_player(self, state_machine):
        room = _create(state_machine)
        assert state_machine.toggle_ready(room.code, 'x') == (False, 'PLAYER_NOT_IN_ROOM', None)

    def test_unknown_room(self, state_machine):
        assert state_machine.toggle_ready('ZZZZZZ', 'x') == (False, 'ROOM_NOT_FOUND', None)


class TestStartGame:
    def test_host_starts(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')

        ok, error, payload = state_machine.start_game(room.code, 'host')
        assert ok and error is None
        assert room.state == 'in-game'
        assert payload['roomId'] == room.code
        assert payload['gridSize'] == 30
        assert len(payload['grid']) == 30
        assert all(len(row) == 30 for row in payload['grid'])
        assert all(cell == {'type': 'empty', 'hp': 0} for row in payload['grid'] for cell in row)
        assert payload['players'] == [{'id': 'host', 'name': 'Host'}, {'id': 'b', 'name': 'Bob'}]

    def test_non_host_rejected(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')

        assert state_machine.start_game(room.code, 'b') == (False, 'NOT_HOST', None)
        assert room.state == 'lobby'
        assert room.grid is None

    def test_unknown_room(self, state_machine):
        assert state_machine.start_game('ZZZZZZ', 'host') == (False, 'ROOM_NOT_FOUND', None)

    def test_ready_flag_does_not_gate_by_default(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')

        ok, _, _ = state_machine.start_game(room.code, 'host')
        assert ok

    def test_ready_gate_when_enabled(self, registry):
        machine = RoomStateMachine(registry, require_all_ready=True)
        room = machine.create_room('host', 'Host', 4)
        machine.join(room.code, 'b', 'Bob')
        machine.toggle_ready(room.code, 'host')

        assert machine.start_game(room.code, 'host') == (False, 'NOT_ALL_READY', None)
        assert room.state == 'lobby'

        machine.toggle_ready(room.code, 'b')
        ok, _, _ = machine.start_game(room.code, 'host')
        assert ok

    def test_custom_grid_size(self, registry):
        machine = RoomStateMachine(registry, grid_size=5)
        room = machine.create_room('host', 'Host', 4)

        _, _, payload = machine.start_game(room.code, 'host')
        assert payload['gridSize'] == 5
        assert room.grid_size == 5

    def test_state_never_returns_to_lobby(self, state_machine):
        room = _create(state_machine)
        state_machine.join(room.code, 'b', 'Bob')
        state_machine.start_game(room.code, 'host')

        state_machine.toggle_ready(room.code, 'b')
        state_machine.leave(room.code, 'b')
        state_machine.start_game(room.code, 'host')
        assert room.state == 'in-game'


def test_random_join_leave_sequences_keep_invariants(registry, state_machine):
    rng = random.Random(1234)
    room = state_machine.create_room('p0', 'P0', 4)
    members = ['p0']

    for _ in range(500):
        candidate = f"p{rng.randrange(10)}"
        if candidate not in members:
            ok, error, _ = state_machine.join(room.code, candidate, candidate)
            if ok:
                members.append(candidate)
            else:
                assert error == 'ROOM_FULL'
                assert len(members) == room.max_players
        else:
            was_host = room.host_connection_id == candidate
            state_machine.leave(room.code, candidate)
            members.remove(candidate)
            if was_host and members:
                assert room.host_connection_id == members[0]

        if not members:
            assert registry.get(room.code) is None
            room = state_machine.create_room('p0', 'P0', 4)
            members = ['p0']
            continue

        assert registry.get(room.code) is room
        assert [p.connection_id for p in room.players] == members
        assert 1 <= room.player_count <= room.max_players
        assert room.has_player(room.host_connection_id)
