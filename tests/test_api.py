from tripletmatch.services.game import RoomCodesExhausted


def test_index_and_health(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()
    res = client.get('/health')
    assert res.get_json() == {'status': 'ok', 'rooms': 0}


def test_create_room(client):
    res = client.post('/api/rooms/create')
    assert res.status_code == 201
    data = res.get_json()
    assert len(data['roomId']) == 4
    assert client.get('/health').get_json()['rooms'] == 1


def test_room_state(client):
    code = client.post('/api/rooms/create').get_json()['roomId']
    res = client.get(f'/api/rooms/{code.lower()}/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state == {
        'roomId': code,
        'players': [],
        'status': 'LOBBY',
        'grid': [],
        'deckSize': 0,
        'lastMatchSymbol': None,
        'winner': None,
    }


def test_unknown_room_state(client):
    res = client.get('/api/rooms/NOPE/state')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Room not found'}


def test_deck_check_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['deck-check'])
    assert result.exit_code == 0
    assert 'cards: 57' in result.output
    assert 'symbols per card: 8' in result.output
    assert 'one shared symbol per pair: yes' in result.output

    result = runner.invoke(args=['deck-check', '--order', '3'])
    assert result.exit_code == 0
    assert 'cards: 13' in result.output

    result = runner.invoke(args=['deck-check', '--order', '4'])
    assert result.exit_code != 0


def test_create_room_when_codes_run_out(flask_app, client, monkeypatch):
    def exhausted():
        raise RoomCodesExhausted()

    monkeypatch.setattr(flask_app.extensions['rooms'], 'create', exhausted)
    res = client.post('/api/rooms/create')
    assert res.status_code == 503
    assert res.get_json() == {'error': 'No free room codes, try again later'}
