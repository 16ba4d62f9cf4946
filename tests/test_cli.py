"""
End-to-end tests of the dcl entry point.
"""

import pytest
from typer.testing import CliRunner

from dcl.cli.main_cli import app, main
from dcl.registry import REGISTRY

runner = CliRunner()


def invoke(invocation_path, args, **kwargs):
    name = invocation_path.rsplit("/", 1)[-1].lower()
    return runner.invoke(app, args, prog_name=name, obj={"invocation_path": invocation_path}, **kwargs)


def test_lexical_function_by_invocation_name():
    result = invoke("/usr/local/bin/upcase", ["hello"])
    assert result.exit_code == 0
    assert result.output == "HELLO"


def test_lexical_function_reads_stdin():
    result = invoke("/usr/local/bin/compress", [], input="  this   is a test  \n")
    assert result.exit_code == 0
    assert result.output == "this is a test"


def test_unrecognized_name_fails():
    result = invoke("/usr/local/bin/frobnicate", ["x"])
    assert result.exit_code == 1
    assert "frobnicate" in result.output


def test_help_lists_commands_and_functions():
    result = invoke("/usr/local/bin/dcl", ["--help"])
    assert result.exit_code == 0
    assert "Available commands: copy, create" in result.output
    assert "Available functions: capcase" in result.output
    assert "dclsymlink" in result.output


def test_about():
    result = invoke("/usr/local/bin/dcl", ["--about"])
    assert result.exit_code == 0
    assert result.output.startswith("dcl v")


def test_symlinks_option_installs_every_link(tmp_path):
    result = invoke(str(tmp_path / "dcl"), ["--symlinks"])
    assert result.exit_code == 0
    for name in REGISTRY.all_names():
        assert (tmp_path / name).is_symlink()
    assert "%dcl-S-created," in result.output


def test_link_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("DCL_LINK_DIR", str(tmp_path / "links"))
    result = invoke("/usr/local/bin/dcl", ["-l"])
    assert result.exit_code == 0
    assert (tmp_path / "links" / "trim").is_symlink()


def test_copy_with_log_qualifier(tmp_path):
    src = tmp_path / "a.txt"
    src.write_text("data")
    result = invoke(str(tmp_path / "copy"), [str(src), "/LOG", str(tmp_path / "b.txt")])
    assert result.exit_code == 0
    assert (tmp_path / "b.txt").read_text() == "data"
    assert "%copy-I-log, cp " in result.output


def test_copy_many_to_file_fails(tmp_path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_text(name)
    result = invoke(str(tmp_path / "copy"), [str(tmp_path / "a"), str(tmp_path / "b"), str(tmp_path / "c")])
    assert result.exit_code == 1
    assert "%dcl-E-notdir, copy:" in result.output
    assert (tmp_path / "c").read_text() == "c"


def test_noop_leaves_files_in_place(tmp_path):
    victim = tmp_path / "keep.txt"
    victim.write_text("x")
    result = invoke(str(tmp_path / "delete"), ["--noop", str(victim)])
    assert result.exit_code == 0
    assert victim.exists()
    assert "rm " in result.output


def test_bad_config_file_fails(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("verbose: [unclosed\n")
    result = invoke("/usr/local/bin/upcase", ["hello"])
    assert result.exit_code == 1
    assert "%dcl-E-config," in result.output


def test_main_dispatches_on_argv0(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["/usr/local/bin/TrIm", "  padded  "])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "padded"


def test_numbernames_ends_each_stanza_with_a_newline():
    result = invoke("/usr/local/bin/numbernames", ["2001"])
    assert result.exit_code == 0
    assert result.output == "two thousand\none\n"
