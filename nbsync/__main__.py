#!/usr/bin/env python3
"""
Entry point for running nbsync as a module: python -m nbsync
"""

import sys

from nbsync.cli import main

if __name__ == '__main__':
    sys.exit(main())
