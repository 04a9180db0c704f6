from anniverswordlary.websocket.handlers import (
    clear_message_later, deliver_hint, deliver_word_info, game_room
)


class RecordingSocketIO:
    """Stands in for the SocketIO server inside background task tests."""

    def __init__(self):
        self.emitted = []

    def emit(self, event, data, to=None):
        self.emitted.append((event, data, to))

    def sleep(self, seconds):
        pass


def events(received, name):
    return [message['args'][0] for message in received if message['name'] == name]


def join(socket_client, game_id=None):
    if game_id:
        socket_client.emit('join_game', {'game_id': game_id})
    else:
        socket_client.emit('join_game')
    state = events(socket_client.get_received(), 'game_state_update')[-1]['state']
    return state['game_id']


def test_join_game_creates_a_session(socket_client, game_service):
    socket_client.emit('join_game')
    update = events(socket_client.get_received(), 'game_state_update')[-1]

    assert update['success']
    assert update['hint'] == "Something we do; something we watch"
    assert game_service.get_game(update['state']['game_id']) is not None


def test_join_existing_game(socket_client, game_service):
    game_id = game_service.create_new_game()
    assert join(socket_client, game_id) == game_id


def test_key_press_broadcasts_state(socket_client):
    game_id = join(socket_client)

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'g'})
    state = events(socket_client.get_received(), 'game_state_update')[-1]['state']

    assert state['pending_input'] == "G"


def test_short_enter_emits_rejection(socket_client, game_service):
    game_id = join(socket_client)

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'ENTER'})
    received = socket_client.get_received()

    assert events(received, 'guess_rejected')[0]['error'] == "Not enough letters"
    assert game_service.get_game(game_id).current_row == 0


def test_submit_guess_event_wins(socket_client, game_service):
    game_id = join(socket_client)

    socket_client.emit('submit_guess', {'game_id': game_id, 'guess': 'GOSSIP'})
    state = events(socket_client.get_received(), 'game_state_update')[-1]['state']

    assert state['status'] == 'won'
    assert state['current_row'] == 1


def test_new_game_event_resets(socket_client):
    game_id = join(socket_client)
    socket_client.emit('submit_guess', {'game_id': game_id, 'guess': 'GOSSIP'})
    socket_client.get_received()

    socket_client.emit('new_game', {'game_id': game_id})
    state = events(socket_client.get_received(), 'game_state_update')[-1]['state']

    assert state['status'] == 'playing'
    assert state['game_number'] == 2


def test_unknown_game_emits_error(socket_client):
    socket_client.emit('key_press', {'game_id': 'missing', 'key': 'A'})
    assert events(socket_client.get_received(), 'error')[0]['error'] == 'Game not found'


def test_missing_game_id_emits_error(socket_client):
    socket_client.emit('key_press', {'key': 'A'})
    assert events(socket_client.get_received(), 'error')[0]['error'] == 'Game ID is required'


def test_word_info_request_before_game_over_is_rejected(socket_client):
    game_id = join(socket_client)
    socket_client.emit('request_word_info', {'game_id': game_id})
    assert events(socket_client.get_received(), 'error')


def test_deliver_hint_emits_for_current_game(game_service, hint_service):
    game_id = game_service.create_new_game()
    game = game_service.get_game(game_id)
    socketio = RecordingSocketIO()

    assert deliver_hint(socketio, game_id, game.target_word, game.game_number, [])

    event, data, to = socketio.emitted[0]
    assert event == 'hint_update'
    assert data['hint'] == "Something we do; something we watch"
    assert to == game_room(game_id)


def test_deliver_hint_discards_stale_result(game_service, hint_service):
    game_id = game_service.create_new_game()
    game = game_service.get_game(game_id)
    number = game.game_number
    game_service.reset_game(game_id)
    socketio = RecordingSocketIO()

    assert not deliver_hint(socketio, game_id, game.target_word, number, [])
    assert socketio.emitted == []


def test_deliver_word_info(game_service, hint_service):
    game_id = game_service.create_new_game()
    game_service.submit_guess(game_id, "GOSSIP")
    game = game_service.get_game(game_id)
    socketio = RecordingSocketIO()

    assert deliver_word_info(socketio, game_id, game.target_word, game.game_number)
    assert socketio.emitted[0][1]['word_info']['word'] == "GOSSIP"


def test_clear_message_later(game_service):
    game_id = game_service.create_new_game()
    game = game_service.get_game(game_id)
    game.submit_guess()
    socketio = RecordingSocketIO()

    assert clear_message_later(socketio, game_id, game.game_number, "Not enough letters", 1.0)
    assert game.message == ""
    assert socketio.emitted[0][0] == 'game_state_update'


def test_clear_message_later_ignores_newer_game(game_service):
    game_id = game_service.create_new_game()
    game = game_service.get_game(game_id)
    game.submit_guess()
    number = game.game_number
    game.new_game()
    game.submit_guess()
    socketio = RecordingSocketIO()

    assert not clear_message_later(socketio, game_id, number, "Not enough letters", 0)
    assert game.message == "Not enough letters"


def test_disconnect_removes_games_created_by_the_socket(app_and_socketio, game_service):
    app, socketio = app_and_socketio

    for _ in range(5):
        test_client = socketio.test_client(app)
        test_client.emit('join_game')
        assert len(game_service.games) == 1
        test_client.disconnect()

    assert game_service.games == {}


def test_disconnect_keeps_games_joined_by_id(app_and_socketio, game_service):
    app, socketio = app_and_socketio
    game_id = game_service.create_new_game()

    test_client = socketio.test_client(app)
    join(test_client, game_id)
    test_client.disconnect()

    assert game_service.get_game(game_id) is not None


def test_key_press_clears_not_enough_letters(socket_client):
    game_id = join(socket_client)
    socket_client.emit('key_press', {'game_id': game_id, 'key': 'ENTER'})
    socket_client.get_received()

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'G'})
    state = events(socket_client.get_received(), 'game_state_update')[-1]['state']

    assert state['message'] == ""
