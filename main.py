#!/usr/bin/env python3
"""
burne - Main Entry

Usage:
    python main.py                      # Rename entries of the current directory
    python main.py ./dir                # Rename entries of ./dir
    python main.py ./dir --dry-run      # Print renames only
    python main.py ./dir -e percent -z  # Escape names, NUL separated lines
"""

import sys
from pathlib import Path

# Ensure the current directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    """Main entry point"""
    from burne_cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
