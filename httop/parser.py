"""httop - Access log line parser"""

import re
from typing import Optional, Union

from .models import LogRecord, Rejection
from .patterns import ABSENT, ACCESS_LOG_PATTERN, BYTES_PATTERN, MAX_STATUS, MIN_STATUS

LINE_RE = re.compile(ACCESS_LOG_PATTERN)
BYTES_RE = re.compile(BYTES_PATTERN)

ParseResult = Union[LogRecord, Rejection]


def _optional(value: str) -> Optional[str]:
    return None if value in (ABSENT, '') else value


def parse_line(line: str) -> ParseResult:
    """Parse a single access log line.

    Returns a LogRecord when the line matches the access log grammar,
    otherwise the Rejection explaining why it was refused. Has no side
    effects.
    """
    match = LINE_RE.match(line.rstrip('\r\n'))
    if not match:
        return Rejection.MALFORMED_STRUCTURE

    groups = match.groupdict()

    status = int(groups['status'])
    if not MIN_STATUS <= status <= MAX_STATUS:
        return Rejection.INVALID_STATUS

    if not BYTES_RE.match(groups['bytes']):
        return Rejection.INVALID_BYTE_COUNT

    request_time = groups.get('request_time')

    return LogRecord(
        remote_address=groups['ip'],
        remote_user=_optional(groups['user']),
        timestamp=groups['timestamp'],
        method=groups['method'],
        path=groups['path'],
        protocol=groups['protocol'],
        status=status,
        bytes_sent=int(groups['bytes']),
        referer=_optional(groups['referer']),
        user_agent=_optional(groups['user_agent']),
        request_time=float(request_time) if request_time and request_time != ABSENT else None,
    )
