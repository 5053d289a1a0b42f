"""httop - Session scheduler

Runs the ingest path on a daemon thread and the render loop on the calling
thread. The two meet only in the Aggregator (locked) and the SortController
(state replaced by reference).
"""

import logging
import threading
import time
from typing import Callable, Iterable, Optional

from .aggregator import Aggregator, RateTracker
from .config import Settings
from .controls import SortController
from .models import CounterOverflow
from .multiplexer import InputMultiplexer
from .output import Renderer, Sink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOFTWARE = 70
EXIT_INTERRUPTED = 130

TTY_PATH = '/dev/tty'


class Httop:
    """One monitoring session: owns the live state for its lifetime."""

    def __init__(self, settings: Optional[Settings] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.settings = settings or Settings()
        self.aggregator = Aggregator(clock)
        self.controller = SortController(
            row_limit=self.settings.row_limit,
            step=self.settings.step,
            ceiling=self.settings.max_rows,
        )
        self.rate = RateTracker(self.aggregator, clock)
        self.stop_event = threading.Event()
        self.multiplexer = InputMultiplexer(self.aggregator, self.controller, self.stop_event)
        self.failure: Optional[BaseException] = None

    def _consume(self, multiplexer: InputMultiplexer, stream: Iterable[str]):
        try:
            multiplexer.run(stream)
        except CounterOverflow as e:
            logger.critical("Aborting: %s", e)
            self.failure = e
            self.stop_event.set()
        except Exception as e:
            logger.exception("Input reader failed")
            self.failure = e
            self.stop_event.set()

    def _consume_commands(self, multiplexer: InputMultiplexer, stream: Iterable[str]):
        try:
            multiplexer.run(stream)
        except OSError as e:
            logger.error("Terminal input failed, controls on stdin only: %s", e)

    def _start_reader(self, target, multiplexer: InputMultiplexer, stream: Iterable[str], name: str):
        thread = threading.Thread(target=target, args=(multiplexer, stream),
                                  name=name, daemon=True)
        thread.start()
        return thread

    def _open_tty(self):
        try:
            return open(TTY_PATH, 'r', encoding='utf-8', errors='ignore')
        except OSError as e:
            logger.error("Could not open terminal for input, controls on stdin only: %s", e)
            return None

    def run(self, stream: Iterable[str], sink: Sink) -> int:
        """Ingest `stream` and refresh `sink` until quit or end-of-stream.

        Returns the process exit status.
        """
        renderer = Renderer(self.aggregator, self.controller, self.rate, sink)
        self._start_reader(self._consume, self.multiplexer, stream, 'httop-input')

        if self.settings.tty_commands:
            tty = self._open_tty()
            if tty is not None:
                commands = InputMultiplexer(self.aggregator, self.controller,
                                            self.stop_event, commands_only=True)
                self._start_reader(self._consume_commands, commands, tty, 'httop-tty')

        while True:
            renderer.render_once()
            if self.stop_event.wait(self.settings.interval):
                break
            if self.multiplexer.eof_event.is_set() and not self.settings.linger:
                break

        if self.failure is not None:
            return EXIT_SOFTWARE

        renderer.render_once()
        logger.info("Stopped after %d requests", self.aggregator.stats().total_requests)
        return EXIT_OK
