"""httop - Command line interface"""

import argparse
import io
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from .app import EXIT_INTERRUPTED, Httop
from .config import Settings
from .output import LiveSink
from .patterns import VERSION, DEFAULT_ROW_LIMIT, LOG_LEVELS, MAX_ROW_LIMIT, REFRESH_INTERVAL, ROW_LIMIT_STEP


def configure_logging(settings: Settings, console: Console):
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    else:
        handler = RichHandler(console=console, show_path=False)
    logging.basicConfig(level=settings.log_level, format="%(message)s", handlers=[handler])


def main():
    parser = argparse.ArgumentParser(
        description="httop - Live top-requests view of an access log read from stdin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Example: tail -f /var/log/nginx/access.log | httop --tty"
    )

    parser.add_argument("-n", "--interval", type=float, default=REFRESH_INTERVAL,
                        help="Seconds between refreshes")
    parser.add_argument("-r", "--rows", type=int, default=DEFAULT_ROW_LIMIT,
                        help="Initial number of table rows")
    parser.add_argument("--step", type=int, default=ROW_LIMIT_STEP,
                        help="Rows added or removed by +/-")
    parser.add_argument("--max-rows", type=int, default=MAX_ROW_LIMIT,
                        help="Upper bound for the number of rows")
    parser.add_argument("--tty", action="store_true",
                        help="Also read commands from the controlling terminal")
    parser.add_argument("--linger", action="store_true",
                        help="Keep displaying after the input ends")
    parser.add_argument("--screen", action="store_true",
                        help="Draw on the alternate screen")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                        help="Diagnostic log level")
    parser.add_argument("--log-file", help="Write diagnostics to this file instead of stderr")
    parser.add_argument("--version", action="version", version=f"httop v{VERSION}")

    args = parser.parse_args()
    settings = Settings.from_args(args)

    errors = settings.validate()
    if errors:
        for err in errors:
            print(f"Error: {err}", file=sys.stderr)
        sys.exit(2)

    console = Console()
    configure_logging(settings, console)

    stream = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='ignore')
    app = Httop(settings)

    try:
        with LiveSink(console, screen=settings.screen) as sink:
            code = app.run(stream, sink)
    except KeyboardInterrupt:
        code = EXIT_INTERRUPTED

    sys.exit(code)

