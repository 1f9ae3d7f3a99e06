from flask import Blueprint, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user

from poolhall.api.params import int_field, optional_str_field, payload
from poolhall.services import accounts

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({
        'success': True,
        'message': 'Pool hall scoreboard API',
        'version': '1.0.0',
        'status': 'running',
    })


@main.route('/health')
def health():
    return jsonify({'success': True, 'status': 'healthy'})


@main.route('/api/register', methods=['POST'])
def register():
    data = payload()
    nickname = optional_str_field(data, 'nickname')
    target = int_field(data, 'target', current_app.config['DEFAULT_CREATOR_TARGET'], minimum=1)
    user = accounts.register(nickname, target)
    return jsonify({'success': True, 'message': 'Registered.', 'user': user.to_dict()})


@main.route('/api/login', methods=['POST'])
def login():
    nickname = optional_str_field(payload(), 'nickname')
    user = accounts.login(nickname)
    login_user(user, remember=True)
    return jsonify({'success': True, 'message': 'Logged in.', 'user': user.to_dict()})


@main.route('/api/me', methods=['GET'])
@login_required
def me():
    return jsonify({'success': True, 'user': current_user.to_dict()})


@main.route('/api/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True, 'message': 'Logged out.'})
