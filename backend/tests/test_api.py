from sqlalchemy.exc import SQLAlchemyError

from poolhall import db


def _post(client, path, **body):
    return client.post(f'/api/{path}', json=body)


def test_index_and_health(client):
    res = client.get('/')
    assert res.status_code == 200
    assert res.get_json()['status'] == 'running'
    res = client.get('/health')
    assert res.get_json() == {'success': True, 'status': 'healthy'}


def test_unknown_route_is_json_404(client):
    res = client.get('/api/nope')
    assert res.status_code == 404
    data = res.get_json()
    assert data['success'] is False
    assert data['error'] == 'not_found'


def test_register_and_login(client):
    res = _post(client, 'register', nickname='Kim')
    assert res.status_code == 200
    assert res.get_json()['user'] == {'nickname': 'Kim', 'target': 25, 'wins': 0, 'losses': 0}

    res = _post(client, 'register', nickname='Lee', target=30)
    assert res.get_json()['user']['target'] == 30

    res = _post(client, 'login', nickname='Kim')
    assert res.status_code == 200
    assert res.get_json()['user']['nickname'] == 'Kim'

    res = client.get('/api/me')
    assert res.status_code == 200
    assert res.get_json()['user']['nickname'] == 'Kim'

    assert client.post('/api/logout').status_code == 200
    assert client.get('/api/me').status_code == 401


def test_register_rejects_bad_nicknames(client):
    for nickname in (None, '', 'K', 'ElevenChars', 42):
        res = _post(client, 'register', nickname=nickname)
        assert res.status_code == 400
        assert res.get_json()['error'] == 'invalid_input'
    res = _post(client, 'register', nickname='Kim', target=0)
    assert res.get_json()['error'] == 'invalid_input'


def test_register_duplicate(client):
    _post(client, 'register', nickname='Kim')
    res = _post(client, 'register', nickname='Kim')
    assert res.status_code == 409
    assert res.get_json()['error'] == 'duplicate_nickname'


def test_login_unknown(client):
    res = _post(client, 'login', nickname='Ghost')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'not_found'
    res = _post(client, 'login')
    assert res.status_code == 400


def test_get_tables(client):
    res = client.get('/api/getTables')
    assert res.status_code == 200
    tables = res.get_json()['tables']
    assert [t['tableNum'] for t in tables] == [1, 2, 3, 4, 5, 6]
    assert all(t['status'] == 'available' for t in tables)


def test_create_room_validation(client):
    res = _post(client, 'createRoom', nickname='Kim')
    assert res.status_code == 400
    assert res.get_json()['error'] == 'invalid_input'
    res = _post(client, 'createRoom', tableNum='abc', nickname='Kim')
    assert res.get_json()['error'] == 'invalid_input'
    res = _post(client, 'createRoom', tableNum=1)
    assert res.get_json()['error'] == 'invalid_input'
    res = _post(client, 'createRoom', tableNum=42, nickname='Kim')
    assert res.status_code == 404


def test_create_room_twice(client):
    assert _post(client, 'createRoom', tableNum=1, nickname='Kim').status_code == 200
    res = _post(client, 'createRoom', tableNum=1, nickname='Park')
    assert res.status_code == 409
    assert res.get_json()['error'] == 'invalid_state'


def test_default_targets(client):
    _post(client, 'createRoom', tableNum=2, nickname='Kim')
    _post(client, 'joinRoom', tableNum=2, nickname='Lee')
    _post(client, 'approveJoin', tableNum=2)
    game = _post(client, 'getGameState', tableNum=2).get_json()['game']
    assert (game['target1'], game['target2']) == (25, 20)


def test_join_non_waiting_table(client):
    res = _post(client, 'joinRoom', tableNum=3, nickname='Lee')
    assert res.status_code == 409
    assert res.get_json()['error'] == 'invalid_state'


def test_full_game_over_http(client):
    assert _post(client, 'createRoom', tableNum=5, nickname='Kim', target=25).get_json()['success']
    assert _post(client, 'joinRoom', tableNum=5, nickname='Lee').get_json()['success']
    assert _post(client, 'approveJoin', tableNum=5, target=20).get_json()['success']

    res = _post(client, 'setColors', tableNum=5, color1='red', color2='white')
    assert res.get_json()['currentTurn'] == 'player2'

    game = _post(client, 'getGameState', tableNum=5).get_json()['game']
    assert game['status'] == 'occupied'
    assert game['inning'] == 1
    assert game['startTime'] is not None

    _post(client, 'updateScore', tableNum=5, score=12)
    res = _post(client, 'nextTurn', tableNum=5).get_json()
    assert res['gameOver'] is False
    assert res['currentTurn'] == 'player1'
    assert res['inning'] == 2

    _post(client, 'updateScore', tableNum=5, score=25)
    res = _post(client, 'nextTurn', tableNum=5).get_json()
    assert res == {'success': True, 'gameOver': True, 'winner': 'player1', 'winnerNickname': 'Kim'}

    res = _post(client, 'endGame', tableNum=5).get_json()
    record = res['record']
    assert record['winner'] == 'Kim'
    assert (record['score1'], record['score2']) == (25, 12)
    assert record['startTime'] == game['startTime']

    game = _post(client, 'getGameState', tableNum=5).get_json()['game']
    assert game['status'] == 'available'
    assert game['player1'] is None

    games = client.get('/api/games?tableNum=5').get_json()['games']
    assert len(games) == 1
    assert games[0]['winner'] == 'Kim'


def test_update_score_rejects_negative(client):
    res = _post(client, 'updateScore', tableNum=1, score=-1)
    assert res.status_code == 400


def test_cancel_room(client):
    _post(client, 'createRoom', tableNum=4, nickname='Kim')
    assert _post(client, 'cancelRoom', tableNum=4).get_json()['success']
    assert _post(client, 'cancelRoom', tableNum=4).get_json()['success']
    game = _post(client, 'getGameState', tableNum=4).get_json()['game']
    assert game['status'] == 'available'


def test_store_failure_is_reported(client, monkeypatch):
    def broken_commit():
        raise SQLAlchemyError('disk full')

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    res = _post(client, 'createRoom', tableNum=1, nickname='Kim')
    assert res.status_code == 500
    assert res.get_json()['error'] == 'store_failure'
    monkeypatch.undo()
    game = _post(client, 'getGameState', tableNum=1).get_json()['game']
    assert game['status'] == 'available'


def test_register_and_login_with_form_body(client):
    res = client.post('/api/register', data={'nickname': 'Kim', 'target': '30'})
    assert res.status_code == 200
    assert res.get_json()['user'] == {'nickname': 'Kim', 'target': 30, 'wins': 0, 'losses': 0}

    res = client.post('/api/register', data={'nickname': 'Lee', 'target': 'lots'})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'invalid_input'

    res = client.post('/api/login', data={'nickname': 'Kim'})
    assert res.status_code == 200
    assert res.get_json()['user']['target'] == 30


def test_game_history_limit_is_clamped(client):
    for table_num in (1, 2, 3):
        _post(client, 'createRoom', tableNum=table_num, nickname='Kim')
        _post(client, 'endGame', tableNum=table_num)
    games = client.get('/api/games?limit=-1').get_json()['games']
    assert [g['tableNum'] for g in games] == [3]
    games = client.get('/api/games?limit=0').get_json()['games']
    assert len(games) == 1
    games = client.get('/api/games?limit=2').get_json()['games']
    assert len(games) == 2
