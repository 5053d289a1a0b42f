"""httop - Data models"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, NamedTuple, Optional

from .patterns import ABSENT, DEFAULT_ROW_LIMIT


class CounterOverflow(RuntimeError):
    """A 64-bit aggregate counter would wrap around"""


class Rejection(Enum):
    """Why a log line was not turned into a LogRecord"""
    MALFORMED_STRUCTURE = 'malformed_structure'
    INVALID_STATUS = 'invalid_status'
    INVALID_BYTE_COUNT = 'invalid_byte_count'


@dataclass(frozen=True)
class LogRecord:
    """Parsed access log line"""
    remote_address: str
    remote_user: Optional[str]
    timestamp: str
    method: str
    path: str
    protocol: str
    status: int
    bytes_sent: int
    referer: Optional[str] = None
    user_agent: Optional[str] = None
    request_time: Optional[float] = None

    def to_line(self) -> str:
        """Serialize back into the access log grammar."""
        line = (
            f'{self.remote_address} - {self.remote_user or ABSENT} [{self.timestamp}] '
            f'"{self.method} {self.path} {self.protocol}" {self.status} {self.bytes_sent} '
            f'"{self.referer or ABSENT}" "{self.user_agent or ABSENT}"'
        )
        if self.request_time is not None:
            line += f' {self.request_time}'
        return line


class AggregateKey(NamedTuple):
    """Grouping identity of one row in the top requests table"""
    remote_address: str
    status: int
    path: str
    user_agent: str

    @classmethod
    def from_record(cls, record: LogRecord) -> 'AggregateKey':
        return cls(record.remote_address, record.status, record.path, record.user_agent or '')


@dataclass
class AggregateEntry:
    count: int = 0
    last_seen: Optional[str] = None


@dataclass
class GlobalStats:
    """Process-wide totals"""
    total_requests: int = 0
    total_bytes: int = 0
    status_histogram: Dict[int, int] = field(default_factory=dict)
    dropped_lines: int = 0

    def copy(self) -> 'GlobalStats':
        return replace(self, status_histogram=dict(self.status_histogram))


class SortKey(Enum):
    COUNT = 'Count'
    PATH = 'Path'
    STATUS = 'Status Code'
    IP = 'IP Address'
    USER_AGENT = 'User Agent'

    @property
    def label(self) -> str:
        return self.value


class Command(Enum):
    """Single-character operator commands"""
    SORT_STATUS = 's'
    SORT_PATH = 'p'
    SORT_COUNT = 'c'
    SORT_IP = 'i'
    SORT_USER_AGENT = 'u'
    MORE_ROWS = '+'
    FEWER_ROWS = '-'
    QUIT = 'q'


SORT_COMMANDS = {
    Command.SORT_STATUS: SortKey.STATUS,
    Command.SORT_PATH: SortKey.PATH,
    Command.SORT_COUNT: SortKey.COUNT,
    Command.SORT_IP: SortKey.IP,
    Command.SORT_USER_AGENT: SortKey.USER_AGENT,
}


@dataclass(frozen=True)
class DisplayState:
    sort_key: SortKey = SortKey.COUNT
    row_limit: int = DEFAULT_ROW_LIMIT
