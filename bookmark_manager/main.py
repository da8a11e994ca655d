#!/usr/bin/env python3
"""
Main entry point for the Bookmark Manager.

This module serves as the console script entry point.
"""

import sys
from bookmark_manager.cli import main


if __name__ == "__main__":
    sys.exit(main())
