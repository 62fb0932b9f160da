from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe room server!'})


@main.route('/api/rooms/<string:game_code>/state')
def get_room_state(game_code):
    """
    Returns the current snapshot of a live room.
    """
    room = current_app.extensions['tictactoe']['registry'].get_room(game_code)
    if room is None:
        return jsonify({'error': 'Game not found'}), 404
    with room.lock:
        return jsonify(room.to_dict()), 200
