#!/usr/bin/env python3
# main.py
"""
Legacy runner - forwards to the CLI
"""

import sys
import os

# Add the src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from monkey.cli.main import cli

if __name__ == "__main__":
    # If no arguments, show help
    if len(sys.argv) == 1:
        sys.argv.append('--help')

    # Support legacy: main.py program.mk -> main.py run program.mk
    if len(sys.argv) == 2 and sys.argv[1].endswith('.mk'):
        sys.argv.insert(1, 'run')

    cli()
