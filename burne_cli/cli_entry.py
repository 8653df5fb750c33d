"""
cli_entry.py - CLI Entry Point

Renames child files in a directory using an editor.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, List

from burne import (
    RenameSetup, RenameOptions, EscapeMode, Separator, BurneError,
    edit_blob, execute_plan, format_pairs, configure_logging,
)

logger = logging.getLogger("burne.cli")

EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="burne",
        description="Renames child files in a directory using editor.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Edit names of entries in the current directory
  burne

  # Preview the renames only
  burne ./photos --dry-run

  # Names with newlines or invalid UTF-8
  burne ./downloads --escape percent-ascii
"""
    )

    parser.add_argument("source_dir", nargs="?", default=".", type=Path,
                        help="Source directory that contains files to rename")
    parser.add_argument("--escape", "-e", default=EscapeMode.NONE.value,
                        choices=[mode.value for mode in EscapeMode], help="Escape method")
    parser.add_argument("--dry-run", "-n", action="store_true",
                        help="Instead of running rename, just prints filenames before and after the rename")
    parser.add_argument("--parents", "-p", action="store_true",
                        help="Makes parent directories for destination paths as needed (not supported)")
    parser.add_argument("--null-data", "-z", action="store_true",
                        help="Separates the lines by NUL characters")
    parser.add_argument("--editor", type=str, default=None,
                        help="Editor command (default: $VISUAL, then $EDITOR)")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Directory to save JSON logs of the plan and result")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")

    return parser


def options_from_args(args: argparse.Namespace) -> RenameOptions:
    """Map parsed arguments to rename options"""
    return RenameOptions(
        escape=EscapeMode.from_cli_str(args.escape),
        separator=Separator.NUL if args.null_data else Separator.NEWLINE,
        dry_run=args.dry_run,
        parents=args.parents,
        editor=args.editor,
        log_dir=args.log_dir,
    )


def run(source_dir: Path, options: RenameOptions) -> int:
    """
    Run the rename procedure

    Raises:
        BurneError: Any failure of the invocation
    """
    if options.parents:
        logger.warning("--parents has no effect: target names cannot contain path separators")

    setup = RenameSetup.from_directory(source_dir, writable=not options.dry_run)
    if not len(setup):
        print(f"No entries in {setup.directory}")
        return 0

    blob = setup.write(options.escape, options.separator)
    edited = edit_blob(blob, options.editor)

    plan = setup.plan(edited, options.escape, options.separator)
    logger.debug("plan = %r", plan)

    if not plan.valid_ops:
        print("No files need renaming")
        return 0

    report = execute_plan(plan, setup.directory, dry_run=options.dry_run, log_dir=options.log_dir)

    if options.dry_run:
        for line in format_pairs(report.pairs):
            print(line)
        return 0

    report.check()
    print(report.summary())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run(args.source_dir, options_from_args(args))
    except BurneError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("Cancelled", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
