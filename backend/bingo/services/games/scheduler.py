class AutoDrawScheduler:
    """Runs the repeating draw for a started game as a Socket.IO background task.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - The first draw fires after FIRST_DRAW_DELAY_SEC, then every DRAW_INTERVAL_SEC
    - Every tick goes back through the registry, which decides whether the run
      identified by ``token`` is still the live one
    """

    def __init__(self, app, socketio):
        self.app = app
        self.socketio = socketio

    def schedule(self, registry, code: str, token: int) -> None:
        app = self.app
        if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            return

        first_delay = float(app.config.get('FIRST_DRAW_DELAY_SEC', 0.4))
        interval = float(app.config.get('DRAW_INTERVAL_SEC', 3))
        app.logger.info(f"[timer-set] game={code} token={token} first={first_delay}s interval={interval}s")
        self.socketio.start_background_task(self._worker, registry, code, token, first_delay, interval)

    def _worker(self, registry, code: str, token: int, first_delay: float, interval: float):
        # Later draws keep to the interval grid counted from start, not from the first draw
        delays = [first_delay, max(interval - first_delay, 0.0)]
        while True:
            self.socketio.sleep(delays.pop(0) if delays else interval)
            with self.app.app_context():
                try:
                    running = registry.auto_draw_tick(code, token)
                except Exception:
                    # The run stays live; the next tick retries
                    self.app.logger.exception(f"[timer-error] game={code} token={token}")
                    continue
                if not running:
                    self.app.logger.info(f"[timer-abort] game={code} token={token}")
                    return
