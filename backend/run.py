import sys

from bingo import create_app, socketio

app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    app.logger.info(f"[listen] bingo server on {host}:{port}")
    try:
        socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True)
    except OSError as exc:
        app.logger.error(f"[listen-failed] {host}:{port}: {exc}")
        sys.exit(1)
