from flask import Blueprint, current_app, jsonify

from tripletmatch.services.game import RoomCodesExhausted

rooms = Blueprint('rooms', __name__)


@rooms.route('/create', methods=['POST'])
def create_room():
    """
    Opens an empty room. The first player to join it becomes host.
    """
    try:
        session = current_app.extensions['rooms'].create()
    except RoomCodesExhausted as exc:
        current_app.logger.warning(f"[create-failed] {exc.message}")
        return jsonify({'error': exc.message}), 503
    current_app.logger.info(f"[create] room={session.room_id}")
    return jsonify({
        'message': 'New room created!',
        'roomId': session.room_id,
    }), 201


@rooms.route('/<string:room_id>/state', methods=['GET'])
def get_room_state(room_id):
    session = current_app.extensions['rooms'].get(room_id)
    if not session:
        return jsonify({'error': 'Room not found'}), 404
    with session.lock:
        return jsonify(session.snapshot())
