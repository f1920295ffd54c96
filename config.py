import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of origins allowed to open sockets / call the API
    ALLOWED_ORIGINS = os.environ.get(
        'ALLOWED_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173',
    ).split(',')
    # Game rules
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '8'))
    GRID_SIZE = int(os.environ.get('GRID_SIZE', '9'))
    MATCH_REWARD = int(os.environ.get('MATCH_REWARD', '3'))
    # Order of the deck design: order + 1 symbols per card, order^2 + order + 1 cards
    DECK_ORDER = int(os.environ.get('DECK_ORDER', '7'))
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    # Rooms opened but never joined are dropped after this long
    UNJOINED_ROOM_TTL_SEC = int(os.environ.get('UNJOINED_ROOM_TTL_SEC', '300'))
