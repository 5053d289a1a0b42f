#!/usr/bin/env python3
"""httop - Entry point"""

from httop.cli import main


if __name__ == "__main__":
    main()
