import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of origins allowed to open a socket
    CORS_ALLOWED_ORIGINS = [
        origin.strip() for origin in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000',
        ).split(',') if origin.strip()
    ]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Auto-draw timers (seconds)
    DRAW_INTERVAL_SEC = float(os.environ.get('DRAW_INTERVAL_SEC', '3'))
    # Short pause before the first draw so clients can render the board
    FIRST_DRAW_DELAY_SEC = float(os.environ.get('FIRST_DRAW_DELAY_SEC', '0.4'))
    GAME_CODE_LENGTH = int(os.environ.get('GAME_CODE_LENGTH', '4'))
    MAX_NAME_LENGTH = int(os.environ.get('MAX_NAME_LENGTH', '20'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
