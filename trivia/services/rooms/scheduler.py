from typing import Callable


class BackgroundScheduler:
    """One-shot delayed callbacks run as Socket.IO background tasks.

    There is no cancellation: callbacks are expected to re-check room
    state when they fire and do nothing if it moved on.
    """

    def __init__(self, socketio, logger, heartbeat_sec: int = 0):
        self.socketio = socketio
        self.logger = logger
        self.heartbeat_sec = heartbeat_sec

    def schedule(self, delay: float, label: str, callback: Callable, *args) -> None:
        self.logger.info(f"[timer-set] {label} duration={delay}s")
        self.socketio.start_background_task(self._worker, delay, label, callback, *args)

    def _worker(self, delay: float, label: str, callback: Callable, *args) -> None:
        hb = self.heartbeat_sec
        if hb and hb > 0:
            slept = 0
            while slept < delay:
                step = min(hb, delay - slept)
                self.socketio.sleep(step)
                slept += step
                self.logger.info(f"[timer-heartbeat] {label} remaining={max(0, delay - slept)}s")
        else:
            self.socketio.sleep(delay)
        self.logger.info(f"[timer-fire] {label}")
        try:
            callback(*args)
        except Exception:
            self.logger.exception(f"[timer-error] {label}")
