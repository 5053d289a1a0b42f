"""httop - Runtime settings"""

from dataclasses import dataclass
from typing import List, Optional

from .patterns import DEFAULT_ROW_LIMIT, LOG_LEVELS, MAX_ROW_LIMIT, REFRESH_INTERVAL, ROW_LIMIT_STEP


@dataclass
class Settings:
    """Settings for one monitoring session."""

    # Seconds between dashboard refreshes
    interval: float = REFRESH_INTERVAL
    # Initial number of table rows, and how +/- change it
    row_limit: int = DEFAULT_ROW_LIMIT
    step: int = ROW_LIMIT_STEP
    max_rows: int = MAX_ROW_LIMIT
    # Also read commands from the controlling terminal
    tty_commands: bool = False
    # Keep the dashboard up after the input stream ends
    linger: bool = False
    # Use the terminal's alternate screen
    screen: bool = False
    log_level: str = 'WARNING'
    log_file: Optional[str] = None

    @classmethod
    def from_args(cls, args) -> 'Settings':
        return cls(
            interval=args.interval,
            row_limit=args.rows,
            step=args.step,
            max_rows=args.max_rows,
            tty_commands=args.tty,
            linger=args.linger,
            screen=args.screen,
            log_level=args.log_level,
            log_file=args.log_file,
        )

    def validate(self) -> List[str]:
        """Return list of validation errors, empty if settings are valid."""
        errors = []
        if self.interval <= 0:
            errors.append(f"Refresh interval must be positive, got {self.interval}")
        if self.row_limit < 1:
            errors.append(f"Row count must be at least 1, got {self.row_limit}")
        if self.step < 1:
            errors.append(f"Row step must be at least 1, got {self.step}")
        if self.max_rows < 1:
            errors.append(f"Maximum rows must be at least 1, got {self.max_rows}")
        elif self.row_limit > self.max_rows:
            errors.append(f"Row count {self.row_limit} exceeds maximum rows {self.max_rows}")
        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")
        return errors
