"""
Main entry point for running history-search as a module.

Usage:
    python -m history_search [options] [replace_file]
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
