"""
editor.py - External Editor Invocation

Writes the blob to a temporary file, blocks on the user's editor and reads
the edited content back.
"""

from typing import Optional, Mapping, List
import logging
import os
import shlex
import subprocess
import tempfile

from .errors import EditorAborted, EditorNotFound

logger = logging.getLogger(__name__)


def get_editor(env: Optional[Mapping[str, str]] = None) -> str:
    """
    Get editor command from the environment

    $VISUAL takes precedence over $EDITOR.

    Args:
        env: Environment mapping (defaults to os.environ)

    Returns:
        Editor command line

    Raises:
        EditorNotFound: Neither variable is set
    """
    if env is None:
        env = os.environ

    for var in ("VISUAL", "EDITOR"):
        value = env.get(var)
        if value:
            logger.debug("$%s environment variable found (value = %r)", var, value)
            return value

    raise EditorNotFound()


def editor_argv(editor: str, path: str) -> List[str]:
    """Build the editor argument vector"""
    argv = shlex.split(editor)
    if not argv:
        raise EditorNotFound()
    return argv + [path]


def edit_blob(blob: bytes, editor: Optional[str] = None) -> bytes:
    """
    Let the user edit a blob

    Args:
        blob: Content shown in the editor
        editor: Editor command (looked up from the environment when None)

    Returns:
        Edited content

    Raises:
        EditorNotFound: No editor configured
        EditorAborted: Editor could not be started or exited non-zero
    """
    if editor is None:
        editor = get_editor()

    fd, path = tempfile.mkstemp(prefix="burne-", suffix=".txt")
    logger.debug("temporary file path: %s", path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(blob)
            f.flush()
            os.fsync(f.fileno())

        argv = editor_argv(editor, path)
        logger.debug("running editor: %r", argv)
        try:
            completed = subprocess.run(argv)
        except OSError as e:
            raise EditorAborted(-1, f"failed to run {argv[0]!r}: {e.strerror}") from e

        if completed.returncode != 0:
            raise EditorAborted(completed.returncode)

        with open(path, "rb") as f:
            return f.read()
    finally:
        if os.path.exists(path):
            os.unlink(path)
