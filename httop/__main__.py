"""Usage: python -m httop < access.log"""

from .cli import main

main()
