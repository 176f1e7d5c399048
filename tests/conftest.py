from collections import defaultdict

import pytest

from rooms import RoomRegistry, RoomStateMachine, ConnectionManager, EventRouter


class RecordingTransport:
    """In-memory transport that delivers events to per-connection inboxes."""

    def __init__(self):
        self.channels = defaultdict(set)
        self.inboxes = defaultdict(list)
        self.published = []

    def publish(self, room_code, event, payload):
        self.published.append((room_code, event, payload))
        for connection_id in sorted(self.channels[room_code]):
            self.inboxes[connection_id].append((event, payload))

    def send(self, connection_id, event, payload):
        self.inboxes[connection_id].append((event, payload))

    def subscribe(self, connection_id, room_code):
        self.channels[room_code].add(connection_id)

    def unsubscribe(self, connection_id, room_code):
        self.channels[room_code].discard(connection_id)

    def received(self, connection_id, event=None):
        messages = self.inboxes[connection_id]
        if event is None:
            return list(messages)
        return [payload for name, payload in messages if name == event]

    def clear(self):
        self.inboxes.clear()
        self.published.clear()


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def state_machine(registry):
    return RoomStateMachine(registry)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def connection_manager():
    return ConnectionManager()


@pytest.fixture
def router(registry, state_machine, transport, connection_manager):
    return EventRouter(registry, state_machine, transport, connection_manager)


@pytest.fixture
def app_and_socketio():
    from app import create_app
    app, socketio = create_app(ASYNC_MODE='threading', SECRET_KEY='test')
    app.config['TESTING'] = True
    return app, socketio


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture
def make_client(app, socketio):
    clients = []

    def _make_client():
        client = socketio.test_client(app)
        connected = [m for m in client.get_received() if m['name'] == 'connected']
        client.connection_id = connected[0]['args'][0]['id']
        clients.append(client)
        return client

    yield _make_client

    for client in clients:
        if client.is_connected():
            client.disconnect()
