"""Test the command-line entry point."""

import pytest
from unittest.mock import patch

from airliner import __version__
from airliner.__main__ import load_document, main, save_document
from airliner.commands import CutToEolCommand
from airliner.settings import SettingsPersistence
from airliner.view import TextView


@pytest.fixture(autouse=True)
def memory_clipboard_settings(tmp_path):
    """Point settings at a temp dir that disables the system clipboard."""
    persistence = SettingsPersistence(config_dir=tmp_path / "config")
    persistence.save_settings({"use_system_clipboard": False})
    with patch('airliner.commands.get_persistence', return_value=persistence):
        yield persistence


def write_document(tmp_path, text, name="doc.txt"):
    path = tmp_path / name
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    return str(path)


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_cut_to_eol(tmp_path, capsys):
    path = write_document(tmp_path, "foo   bar\n")

    assert main(["cut-to-eol", path, "3"]) == 0
    assert load_document(path) == "foobar\n"
    assert capsys.readouterr().out.strip() == "3"


def test_hungry_backspace(tmp_path, capsys):
    path = write_document(tmp_path, "foo   bar")

    assert main(["hungry-backspace", path, "6"]) == 0
    assert load_document(path) == "foobar"
    assert capsys.readouterr().out.strip() == "3"


def test_line_endings_preserved(tmp_path):
    path = write_document(tmp_path, "foo\r\nbar\r\n")

    assert main(["cut-to-eol", path, "3"]) == 0
    assert load_document(path) == "foobar\r\n"


def test_selection_anchor(tmp_path, capsys):
    path = write_document(tmp_path, "hello world")

    assert main(["hungry-backspace", path, "5", "0"]) == 0
    assert load_document(path) == " world"
    assert capsys.readouterr().out.strip() == "0"


def test_verbose(tmp_path):
    path = write_document(tmp_path, "a b")
    with patch('airliner.__main__.logging.basicConfig') as mock_config:
        assert main(["--verbose", "hungry-backspace", path, "3"]) == 0
    mock_config.assert_called_once()
    assert load_document(path) == "a "


@pytest.mark.parametrize("args", [
    [],
    ["cut-to-eol"],
    ["cut-to-eol", "file.txt", "x"],
    ["cut-to-eol", "file.txt", "1", "2", "3"],
])
def test_usage_errors(args, capsys):
    assert main(args) == 2
    assert "usage:" in capsys.readouterr().err


def test_unknown_command(tmp_path, capsys):
    path = write_document(tmp_path, "abc")
    assert main(["append-semicolon", path, "1"]) == 2
    assert "unknown command" in capsys.readouterr().err
    assert load_document(path) == "abc"


def test_offset_out_of_range(tmp_path):
    path = write_document(tmp_path, "abc")
    assert main(["cut-to-eol", path, "10"]) == 2


def test_missing_file(tmp_path):
    assert main(["cut-to-eol", str(tmp_path / "missing.txt"), "0"]) == 1


def test_non_utf8_file(tmp_path, capsys):
    """Test a latin-1 file is reported, not a traceback."""
    path = tmp_path / "latin1.txt"
    with open(path, 'wb') as f:
        f.write(b"caf\xe9   bar\n")

    assert main(["cut-to-eol", str(path), "4"]) == 1
    assert "could not read" in capsys.readouterr().err
    with open(path, 'rb') as f:
        assert f.read() == b"caf\xe9   bar\n"


def test_key_error_inside_command_not_reported_as_unknown(tmp_path, capsys):
    """Test only the command lookup maps KeyError to a usage error."""
    path = write_document(tmp_path, "abc")
    with patch.object(CutToEolCommand, 'execute', side_effect=KeyError("column")):
        with pytest.raises(KeyError):
            main(["cut-to-eol", path, "1"])
    assert "unknown command" not in capsys.readouterr().err
    assert load_document(path) == "abc"


def test_view_closed_after_command(tmp_path):
    path = write_document(tmp_path, "foo   bar")
    with patch.object(TextView, 'close', autospec=True) as mock_close:
        assert main(["hungry-backspace", path, "6"]) == 0
    mock_close.assert_called_once()


def test_unchanged_document_not_rewritten(tmp_path):
    path = write_document(tmp_path, "abc")
    with patch('airliner.__main__.save_document') as mock_save:
        assert main(["hungry-backspace", path, "0"]) == 0
    mock_save.assert_not_called()


def test_save_document_atomic(tmp_path):
    path = write_document(tmp_path, "old")
    save_document(path, "new\r\ntext")
    assert load_document(path) == "new\r\ntext"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["config", "doc.txt"]
