"""
Tests for the DCL file commands.
"""

import os

import pytest

from dcl.commands import file_commands as fc
from dcl.commands.listing import directory, mode_human_readable_vms, size_human_readable
from dcl.core.errors import DestinationNotDirectoryError, HandlerError
from dcl.dispatch.options import EffectiveOptions


@pytest.fixture
def files(tmp_path):
    for name, text in (("a.txt", "alpha\nBeta\n"), ("b.txt", "gamma\nbeta max\n")):
        (tmp_path / name).write_text(text)
    (tmp_path / "out").mkdir()
    return tmp_path


def test_copy_single_file(files):
    result = fc.copy([str(files / "a.txt")], str(files / "c.txt"), EffectiveOptions())
    assert (files / "c.txt").read_text() == "alpha\nBeta\n"
    assert len(result.actions) == 1


def test_copy_many_into_directory(files):
    fc.copy([str(files / "a.txt"), str(files / "b.txt")], str(files / "out"), EffectiveOptions())
    assert sorted(os.listdir(files / "out")) == ["a.txt", "b.txt"]


def test_copy_many_needs_directory_destination(files):
    with pytest.raises(DestinationNotDirectoryError):
        fc.copy([str(files / "a.txt"), str(files / "b.txt")], str(files / "c.txt"), EffectiveOptions())
    assert not (files / "c.txt").exists()


def test_copy_needs_a_destination(files):
    with pytest.raises(HandlerError):
        fc.copy([str(files / "a.txt")], None, EffectiveOptions())


def test_copy_preserve_keeps_mtime(files):
    src = files / "a.txt"
    os.utime(src, (1_000_000_000, 1_000_000_000))
    result = fc.copy([str(src)], str(files / "c.txt"), EffectiveOptions(preserve=True))
    assert (files / "c.txt").stat().st_mtime == 1_000_000_000
    assert result.actions[0].startswith("cp -p ")


def test_noop_reports_without_touching_disk(files):
    logged = []
    options = EffectiveOptions(noop=True, verbose=True)
    result = fc.delete([str(files / "a.txt")], str(files / "b.txt"), options, log=logged.append)
    assert (files / "a.txt").exists() and (files / "b.txt").exists()
    assert result.actions == logged == [f"rm {files / 'a.txt'}", f"rm {files / 'b.txt'}"]


def test_confirm_skips_declined_steps(files):
    answers = iter([False, True])
    options = EffectiveOptions(confirm=True)
    result = fc.delete([str(files / "a.txt")], str(files / "b.txt"), options, confirm=lambda q: next(answers))
    assert (files / "a.txt").exists()
    assert not (files / "b.txt").exists()
    assert result.skipped == [str(files / "a.txt")]


def test_rename(files):
    fc.rename([str(files / "a.txt")], str(files / "z.txt"), EffectiveOptions())
    assert not (files / "a.txt").exists()
    assert (files / "z.txt").read_text() == "alpha\nBeta\n"


def test_rename_many_needs_directory(files):
    with pytest.raises(DestinationNotDirectoryError):
        fc.rename([str(files / "a.txt"), str(files / "b.txt")], str(files / "nowhere"), EffectiveOptions())


def test_create(files):
    fc.create([str(files / "new1")], str(files / "new2"), EffectiveOptions())
    assert (files / "new1").exists() and (files / "new2").exists()


def test_purge_removes_backups_only(files):
    for name in ("a.txt~", "a.txt.~2~", "a.txt.bak", "b.txt~"):
        (files / name).write_text("old")
    result = fc.purge([str(files / "a.txt")], None, EffectiveOptions())
    assert len(result.actions) == 3
    remaining = sorted(os.listdir(files))
    assert "a.txt" in remaining and "b.txt~" in remaining
    assert "a.txt~" not in remaining


def test_purge_directory(files):
    (files / "b.txt~").write_text("old")
    fc.purge([str(files)], None, EffectiveOptions())
    assert not (files / "b.txt~").exists()
    assert (files / "b.txt").exists()


def test_purge_without_backups(files):
    assert fc.purge([str(files / "a.txt")], None, EffectiveOptions()).output == "no backup versions found"


def test_backup_base():
    assert fc.backup_base("notes.txt~") == "notes.txt"
    assert fc.backup_base("notes.txt.~12~") == "notes.txt"
    assert fc.backup_base("notes.txt") is None


def test_search_single_file(files):
    result = fc.search([str(files / "a.txt")], "beta", EffectiveOptions())
    assert result.output == "Beta"


def test_search_several_files_prefixes_names(files):
    a, b = str(files / "a.txt"), str(files / "b.txt")
    result = fc.search([a, b], "^b", EffectiveOptions())
    assert result.output == f"{a}:2:Beta\n{b}:2:beta max"


def test_search_bad_pattern(files):
    with pytest.raises(HandlerError, match="bad search pattern"):
        fc.search([str(files / "a.txt")], "(", EffectiveOptions())


def test_show_default(files, monkeypatch):
    monkeypatch.chdir(files)
    assert fc.show(["def"], None, EffectiveOptions()).output == os.getcwd() + os.sep


def test_show_symbol(monkeypatch):
    monkeypatch.setenv("DCL_TEST_SYMBOL", "value")
    result = fc.show(["symbol"], "DCL_TEST_SYMBOL", EffectiveOptions())
    assert result.output == '  DCL_TEST_SYMBOL = "value"'


def test_show_unknown_topic():
    with pytest.raises(HandlerError):
        fc.show(["everything"], None, EffectiveOptions())


def test_directory_listing(files):
    result = directory([str(files)], None, EffectiveOptions())
    lines = result.output.splitlines()
    assert lines[0] == f"Directory {files}/"
    assert any(line.startswith("a.txt ") for line in lines)
    assert any(line.startswith("out/ ") for line in lines)
    assert lines[-1].startswith("Total of 3 files")


def test_directory_missing_spec(files):
    with pytest.raises(HandlerError):
        directory([str(files / "nope")], None, EffectiveOptions())


def test_size_human_readable():
    assert size_human_readable(512) == "512"
    assert size_human_readable(2048) == "  2.0K"
    assert size_human_readable(3 * 2 ** 20) == "  3.0M"


def test_mode_human_readable_vms():
    assert mode_human_readable_vms(0o100644) == "- O:rw- G:r-- W:r--"
    assert mode_human_readable_vms(0o040755) == "d O:rwx G:r-x W:r-x"
