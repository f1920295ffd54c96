from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Triplet Match game server!'})

@main.route('/health')
def health():
    return jsonify({'status': 'ok', 'rooms': len(current_app.extensions['rooms'])})
