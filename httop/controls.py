"""httop - Operator commands and display state"""

from dataclasses import replace

from .models import SORT_COMMANDS, Command, DisplayState
from .patterns import DEFAULT_ROW_LIMIT, MAX_ROW_LIMIT, MIN_ROW_LIMIT, ROW_LIMIT_STEP


class SortController:
    """Owns the sort key and row limit shown by the renderer.

    The state is replaced wholesale on every command, so a reader holding
    `state` always sees a matching sort key and row limit.
    """

    def __init__(self, row_limit: int = DEFAULT_ROW_LIMIT, step: int = ROW_LIMIT_STEP,
                 floor: int = MIN_ROW_LIMIT, ceiling: int = MAX_ROW_LIMIT):
        if floor < 1:
            raise ValueError(f"Row limit floor must be at least 1, got {floor}")
        if ceiling < floor:
            raise ValueError(f"Row limit ceiling {ceiling} is below floor {floor}")
        if step < 1:
            raise ValueError(f"Row limit step must be at least 1, got {step}")

        self.step = step
        self.floor = floor
        self.ceiling = ceiling
        self._state = DisplayState(row_limit=self._clamp(row_limit))

    @property
    def state(self) -> DisplayState:
        return self._state

    def _clamp(self, row_limit: int) -> int:
        return max(self.floor, min(self.ceiling, row_limit))

    def apply(self, command: Command) -> DisplayState:
        state = self._state
        if command in SORT_COMMANDS:
            state = replace(state, sort_key=SORT_COMMANDS[command])
        elif command is Command.MORE_ROWS:
            state = replace(state, row_limit=self._clamp(state.row_limit + self.step))
        elif command is Command.FEWER_ROWS:
            state = replace(state, row_limit=self._clamp(state.row_limit - self.step))
        self._state = state
        return state
