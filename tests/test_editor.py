import os
import subprocess
import sys

import pytest

from burne.editor import edit_blob, editor_argv, get_editor
from burne.errors import EditorAborted, EditorNotFound


def test_visual_takes_precedence():
    assert get_editor({"VISUAL": "code --wait", "EDITOR": "vi"}) == "code --wait"


def test_editor_fallback():
    assert get_editor({"EDITOR": "nano"}) == "nano"


def test_empty_values_are_ignored():
    assert get_editor({"VISUAL": "", "EDITOR": "nano"}) == "nano"


def test_no_editor():
    with pytest.raises(EditorNotFound):
        get_editor({})


def test_editor_argv_splits_command():
    assert editor_argv("code --wait", "/tmp/f") == ["code", "--wait", "/tmp/f"]


def test_blank_editor_command():
    with pytest.raises(EditorNotFound):
        editor_argv("   ", "/tmp/f")


def _script_editor(tmp_path, body):
    script = tmp_path / "fake_editor.py"
    script.write_text(
        "import sys\n"
        "path = sys.argv[1]\n"
        + body
    )
    return f'"{sys.executable}" "{script}"'


def test_edit_blob_returns_edited_content(tmp_path):
    editor = _script_editor(
        tmp_path,
        "data = open(path, 'rb').read()\n"
        "open(path, 'wb').write(data.upper())\n",
    )
    assert edit_blob(b"a\nb\n", editor) == b"A\nB\n"


def test_edit_blob_removes_temporary_file(tmp_path):
    seen = tmp_path / "seen.txt"
    editor = _script_editor(
        tmp_path,
        f"open({str(seen)!r}, 'w').write(path)\n",
    )
    edit_blob(b"x\n", editor)
    assert not os.path.exists(seen.read_text())


def test_nonzero_exit_aborts(tmp_path):
    editor = _script_editor(tmp_path, "sys.exit(3)\n")
    with pytest.raises(EditorAborted) as excinfo:
        edit_blob(b"x\n", editor)
    assert excinfo.value.returncode == 3


def test_missing_editor_binary_aborts():
    with pytest.raises(EditorAborted):
        edit_blob(b"x\n", "/nonexistent/editor-binary")


def test_editor_from_environment(monkeypatch):
    calls = []

    def fake_run(argv, *args, **kwargs):
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setenv("VISUAL", "myeditor -f")
    monkeypatch.setattr(subprocess, "run", fake_run)

    assert edit_blob(b"unchanged\n") == b"unchanged\n"
    assert calls[0][:2] == ["myeditor", "-f"]
