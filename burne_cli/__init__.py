"""
burne_cli - Command Line Interface for burne
"""

from .cli_entry import main, create_parser, run

__all__ = ["main", "create_parser", "run"]
