from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('/health')
def health():
    engine = current_app.extensions['trivia']
    return jsonify({'status': 'ok', 'rooms': len(engine.registry)})


@rooms.route('/rooms/<string:code>', methods=['GET'])
def get_room_state(code):
    """
    Returns a read-only snapshot of a room: phase, round, players and the
    current question (without its answer).
    """
    snapshot = current_app.extensions['trivia'].snapshot(code)
    if snapshot is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(snapshot)
