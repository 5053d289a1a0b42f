"""httop package"""

from .patterns import VERSION, ACCESS_LOG_PATTERN
from .models import LogRecord, Rejection, AggregateKey, AggregateEntry, GlobalStats, SortKey, Command, DisplayState
from .parser import parse_line
from .aggregator import Aggregator, RateTracker
from .controls import SortController
from .multiplexer import InputMultiplexer, classify
from .output import Renderer, LiveSink, build_dashboard
from .app import Httop

__all__ = ['VERSION', 'Httop', 'Aggregator', 'RateTracker', 'SortController', 'InputMultiplexer',
           'Renderer', 'LiveSink', 'LogRecord', 'Rejection', 'SortKey', 'Command', 'parse_line']
