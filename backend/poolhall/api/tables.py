from flask import Blueprint, jsonify, request, current_app

from poolhall.api.params import int_field, payload, str_field
from poolhall.services import tables as svc

tables = Blueprint('tables', __name__)


def _table_num(data):
    return int_field(data, 'tableNum', minimum=1)


@tables.route('/getTables', methods=['GET'])
def get_tables():
    return jsonify({'success': True, 'tables': [t.to_dict() for t in svc.list_tables()]})


@tables.route('/createRoom', methods=['POST'])
def create_room():
    data = payload()
    table_num = _table_num(data)
    nickname = str_field(data, 'nickname')
    target = int_field(data, 'target', current_app.config['DEFAULT_CREATOR_TARGET'], minimum=1)
    svc.create_room(table_num, nickname, target)
    return jsonify({'success': True, 'message': 'Room created.'})


@tables.route('/joinRoom', methods=['POST'])
def join_room():
    data = payload()
    svc.join_room(_table_num(data), str_field(data, 'nickname'))
    return jsonify({'success': True, 'message': 'Join request sent.'})


@tables.route('/approveJoin', methods=['POST'])
def approve_join():
    data = payload()
    target = int_field(data, 'target', current_app.config['DEFAULT_JOINER_TARGET'], minimum=1)
    svc.approve_join(_table_num(data), target)
    return jsonify({'success': True, 'message': 'Join approved.'})


@tables.route('/setColors', methods=['POST'])
def set_colors():
    data = payload()
    table_num = _table_num(data)
    starter = svc.set_colors(table_num, str_field(data, 'color1'), str_field(data, 'color2'))
    return jsonify({'success': True, 'message': 'Game started.', 'currentTurn': starter.value})


@tables.route('/getGameState', methods=['POST'])
def get_game_state():
    table = svc.get_game_state(_table_num(payload()))
    return jsonify({'success': True, 'game': table.to_dict()})


@tables.route('/updateScore', methods=['POST'])
def update_score():
    data = payload()
    svc.update_score(_table_num(data), int_field(data, 'score'))
    return jsonify({'success': True, 'message': 'Score updated.'})


@tables.route('/nextTurn', methods=['POST'])
def next_turn():
    outcome = svc.next_turn(_table_num(payload()))
    if outcome.game_over:
        return jsonify({
            'success': True,
            'gameOver': True,
            'winner': outcome.winner.value,
            'winnerNickname': outcome.winner_nickname,
        })
    return jsonify({
        'success': True,
        'gameOver': False,
        'currentTurn': outcome.current_turn.value,
        'inning': outcome.inning,
        'message': 'Turn passed.',
    })


@tables.route('/endGame', methods=['POST'])
def end_game():
    record = svc.end_game(_table_num(payload()))
    return jsonify({'success': True, 'message': 'Game over.', 'record': record.to_dict()})


@tables.route('/cancelRoom', methods=['POST'])
def cancel_room():
    svc.cancel_room(_table_num(payload()))
    return jsonify({'success': True, 'message': 'Room cancelled.'})


@tables.route('/games', methods=['GET'])
def list_games():
    table_num = request.args.get('tableNum', type=int)
    limit = max(min(request.args.get('limit', 50, type=int), 200), 1)
    records = svc.game_history(table_num, limit=limit)
    return jsonify({'success': True, 'games': [r.to_dict() for r in records]})
