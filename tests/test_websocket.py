def last_event(received, name):
    events = [event for event in received if event['name'] == name]
    assert events, f"no {name} event in {received}"
    return events[-1]['args'][0]


def test_get_game_over_socket(app, socketio):
    client = socketio.test_client(app)
    client.emit('get_game', {'player_id': 'ws-player'})
    update = last_event(client.get_received(), 'game_update')
    assert update['view']['status'] == 'active'
    assert update['effects'] == []


def test_key_events_over_socket(app, socketio):
    client = socketio.test_client(app)
    for key in 'TRACE':
        client.emit('key', {'player_id': 'ws-player', 'key': key})
    client.get_received()

    client.emit('key', {'player_id': 'ws-player', 'key': 'Enter'})
    update = last_event(client.get_received(), 'game_update')
    assert update['outcome'] == 'row_scored'
    assert update['effects'] == ['press:enter', 'click', 'flip:0']
    assert update['view']['currentRow'] == 1


def test_socket_errors(app, socketio):
    client = socketio.test_client(app)
    client.emit('key', {'key': 'a'})
    assert last_event(client.get_received(), 'error') == {'error': 'Player id required'}

    client.emit('key', {'player_id': 'ws-player', 'key': '?'})
    assert 'Unsupported key' in last_event(client.get_received(), 'error')['error']

    client.emit('new_game', {'player_id': 'ws-player', 'choice': 'other'})
    assert last_event(client.get_received(), 'error') == {'error': 'Please choose NEW or SAME.'}


def test_new_game_and_developer_over_socket(app, socketio):
    client = socketio.test_client(app)
    client.emit('toggle_developer', {'player_id': 'ws-player'})
    update = last_event(client.get_received(), 'game_update')
    assert update['view']['answer'] == 'CRANE'

    client.emit('new_game', {'player_id': 'ws-player', 'choice': 'same'})
    update = last_event(client.get_received(), 'game_update')
    assert update['view']['developerMode'] is True
    assert update['view']['message'] == "New game started with today's word."
