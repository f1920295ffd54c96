from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS') or []

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One room registry per app instance; handlers reach it through current_app
    from tripletmatch.services.game import GameRules, RoomRegistry
    rules = GameRules.from_config(flask_app.config)
    flask_app.extensions['rooms'] = RoomRegistry(
        rules,
        code_length=int(flask_app.config.get('ROOM_CODE_LENGTH', 4)),
        unjoined_ttl=float(flask_app.config.get('UNJOINED_ROOM_TTL_SEC', 300)),
    )
    flask_app.logger.info(
        f"[rules] order={rules.order} grid={rules.grid_size} max_players={rules.max_players} reward={rules.match_reward}"
    )

    # Import and register blueprints here
    from tripletmatch.main import main
    flask_app.register_blueprint(main)

    from tripletmatch.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    from tripletmatch.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('deck-check')
    @click.option('--order', type=int, default=None, help='Deck order (defaults to DECK_ORDER).')
    def deck_check_command(order):
        """Generates a deck and verifies every pair of cards shares one symbol."""
        from tripletmatch.services.game.deck import generate_deck, shares_one_symbol_pairwise
        order = order or rules.order
        try:
            deck = generate_deck(order)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint='--order')
        click.echo(f'order: {order}')
        click.echo(f'cards: {len(deck)}')
        click.echo(f'symbols per card: {len(deck[0].symbols)}')
        ok = shares_one_symbol_pairwise(deck)
        click.echo(f'one shared symbol per pair: {"yes" if ok else "no"}')
        if not ok:
            raise click.ClickException('deck check failed')

    flask_app.cli.add_command(deck_check_command)

    return flask_app
