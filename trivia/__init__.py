from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config, registry=None, scheduler=None, question_provider=None):
    """Build the Flask app and wire the room services into it.

    The registry, scheduler and question provider can be injected; tests
    use this to control room codes and fire timers by hand.
    """
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    if allowed_origins == ['*']:
        allowed_origins = '*'
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from trivia.services.rooms.broadcast import SocketIOBroadcaster
    from trivia.services.rooms.engine import RoundEngine
    from trivia.services.rooms.registry import RoomRegistry
    from trivia.services.rooms.scheduler import BackgroundScheduler

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    if registry is None:
        registry = RoomRegistry(
            default_name=flask_app.config.get('DEFAULT_PLAYER_NAME', 'Player'),
            max_name_length=int(flask_app.config.get('MAX_NAME_LENGTH', 32)),
        )
    if scheduler is None:
        scheduler = BackgroundScheduler(
            socketio,
            flask_app.logger,
            heartbeat_sec=int(flask_app.config.get('TIMER_HEARTBEAT_SEC', 0)),
        )
    flask_app.extensions['trivia'] = RoundEngine(
        registry,
        SocketIOBroadcaster(socketio, namespace=namespace),
        scheduler,
        logger=flask_app.logger,
        round_duration=int(flask_app.config.get('ROUND_DURATION_SEC', 15)),
        result_duration=int(flask_app.config.get('RESULT_DURATION_SEC', 5)),
        question_provider=question_provider,
    )

    from trivia.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from trivia.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
