import time


class IdGenerator:
    """
    Millisecond timestamps as ids.
    If the clock has not moved past the last id handed out, the last id + 1 is
    used instead, so sequential calls in one process never repeat.
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._last = 0

    def __call__(self) -> str:
        tick = int(self._clock() * 1000)
        if tick <= self._last:
            tick = self._last + 1
        self._last = tick
        return str(tick)

    def observe(self, entity_id):
        """Never hand out an id at or below one already stored."""
        try:
            seen = int(entity_id)
        except (TypeError, ValueError):
            return
        if seen > self._last:
            self._last = seen


default_generator = IdGenerator()


def new_id() -> str:
    return default_generator()
