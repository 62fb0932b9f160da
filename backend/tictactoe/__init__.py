import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    log_level = flask_app.config.get('LOG_LEVEL', 'INFO')
    flask_app.logger.setLevel(log_level)
    # Core modules log through the package logger
    logging.getLogger('tictactoe').setLevel(log_level)

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        cors_allowed_origins=allowed_origins,
        max_http_buffer_size=flask_app.config.get('MAX_MESSAGE_BYTES', 100 * 1024 * 1024),
    )

    # Process-scoped game state, one registry per application
    from tictactoe.registry import RoomRegistry
    from tictactoe.dispatcher import Dispatcher
    from tictactoe.services.games.celebration import NameMatchCelebration

    registry = RoomRegistry(
        code_length=flask_app.config.get('ROOM_CODE_LENGTH', 6),
        token_length=flask_app.config.get('PLAYER_TOKEN_LENGTH', 10),
    )
    dispatcher = Dispatcher(
        registry,
        celebrate=NameMatchCelebration(flask_app.config.get('CELEBRATION_TRIGGER_NAME', '')),
    )
    flask_app.extensions['tictactoe'] = {'registry': registry, 'dispatcher': dispatcher}

    from tictactoe.routes import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    from tictactoe.socketio_events import register_socketio_handlers
    register_socketio_handlers(
        namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/ws'),
        testing=flask_app.config.get('TESTING', False),
    )

    @click.command('list-rooms')
    def list_rooms_command():
        """Lists live rooms with their player and connection counts."""
        codes = registry.room_codes()
        if not codes:
            click.echo('No active rooms.')
            return
        for code in codes:
            room = registry.get_room(code)
            if room is None:
                continue
            click.echo(f'{code}  players={len(room.players)}  connections={len(registry.connections(code))}')

    flask_app.cli.add_command(list_rooms_command)

    return flask_app
