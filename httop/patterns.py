"""httop - Constants and patterns"""

VERSION = "0.1.0"

# Combined access log with a trailing request time:
# 192.168.1.1 - - [29/Nov/2021:12:34:56 +0000] "GET /page.html HTTP/1.1" 200 2326 "http://referrer.com" "Mozilla/5.0 ..." 0.002
ACCESS_LOG_PATTERN = (
    r'^(?P<ip>\S+) \S+ (?P<user>\S+) \[(?P<timestamp>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>\S+) (?P<protocol>[^"\s]+)" '
    r'(?P<status>[0-9]+) (?P<bytes>\S+) '
    r'"(?P<referer>[^"]*)" "(?P<user_agent>[^"]*)"'
    r'(?: (?P<request_time>[0-9]+(?:\.[0-9]*)?|\.[0-9]+|-))?\s*$'
)

BYTES_PATTERN = r'^[0-9]+$'

# Placeholder for an absent user, referer or user agent
ABSENT = '-'

MIN_STATUS = 100
MAX_STATUS = 599

# 64-bit counters; anything past this is a fatal invariant violation
MAX_COUNTER = 2 ** 64 - 1

# Display defaults
DEFAULT_ROW_LIMIT = 20
ROW_LIMIT_STEP = 5
MIN_ROW_LIMIT = 1
MAX_ROW_LIMIT = 200
REFRESH_INTERVAL = 1.0

# Column widths for the top requests table
PATH_WIDTH = 36
AGENT_WIDTH = 64
ELLIPSIS = '...'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
