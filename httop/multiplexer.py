"""httop - Input multiplexer

Log data and operator commands share one stream. Every line is classified
on its own: a line consisting of exactly one command character is a
command, anything else is handed to the parser.
"""

import logging
import threading
from typing import Iterable, Optional

from .aggregator import Aggregator
from .controls import SortController
from .models import Command, Rejection
from .parser import parse_line

logger = logging.getLogger(__name__)

COMMANDS = {command.value: command for command in Command}


def classify(line: str) -> Optional[Command]:
    """Return the Command for a command line, None for log data."""
    return COMMANDS.get(line.rstrip('\r\n'))


class InputMultiplexer:
    def __init__(self, aggregator: Aggregator, controller: SortController,
                 stop_event: Optional[threading.Event] = None, commands_only: bool = False):
        self.aggregator = aggregator
        self.controller = controller
        self.stop_event = stop_event or threading.Event()
        self.eof_event = threading.Event()
        self.commands_only = commands_only

    @property
    def dropped(self) -> int:
        return self.aggregator.stats().dropped_lines

    def feed(self, line: str) -> bool:
        """Route one line. Returns False once a quit command was seen."""
        command = classify(line)
        if command is Command.QUIT:
            logger.info("Quit requested")
            self.stop_event.set()
            return False
        if command is not None:
            state = self.controller.apply(command)
            logger.debug("Command %r -> sort=%s rows=%d",
                         command.value, state.sort_key.label, state.row_limit)
            return True

        if self.commands_only or not line.strip():
            return True

        result = parse_line(line)
        if isinstance(result, Rejection):
            self.aggregator.record_drop()
            logger.debug("Dropped line (%s): %.120s", result.value, line.rstrip('\r\n'))
        else:
            self.aggregator.ingest(result)
        return True

    def run(self, stream: Iterable[str]):
        """Consume the stream until end-of-stream or quit."""
        for line in stream:
            if self.stop_event.is_set():
                return
            if not self.feed(line):
                return
        logger.info("End of input stream")
        self.eof_event.set()
