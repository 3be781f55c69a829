from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Bind the shared SocketIO instance to this app
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from bingo.routes import main
    flask_app.register_blueprint(main)

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')

    # The registry belongs to this app instance; handlers reach it via current_app
    from bingo.broadcast import Broadcaster
    from bingo.registry import SessionRegistry
    from bingo.services.games.scheduler import AutoDrawScheduler
    flask_app.extensions['bingo'] = SessionRegistry(
        Broadcaster(socketio, namespace=namespace),
        scheduler=AutoDrawScheduler(flask_app, socketio),
        logger=flask_app.logger,
        code_length=int(flask_app.config.get('GAME_CODE_LENGTH', 4)),
        max_name_length=int(flask_app.config.get('MAX_NAME_LENGTH', 20)),
    )

    # Handlers look the registry up per event, so they are registered last
    from bingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
