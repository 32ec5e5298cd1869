# =============================================================================
# test_cli.py - p4parse Command-Line Tests
# =============================================================================
# Tests for the p4parse tool using click's CliRunner.
#
# Test coverage includes:
#   - Help and version output
#   - Reading from a file, from stdin and from '-'
#   - --ast and --format output modes
#   - Exit codes for syntax errors, bad arguments and unreadable input
#   - --allow-comments, --max-depth and --verbose
# =============================================================================

import pytest
from click.testing import CliRunner

from p4lite import __version__
from p4lite.cli.errors import ExitCode
from p4lite.cli.p4parse import main


SOURCE = "control c(in bool a,) { bool x = a && !a; apply { if (x) { } } }\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "switch.p4"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestBasicUsage:
    """Test help, version and plain parsing."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Parse a P4 control-block program." in result.output
        assert "--allow-comments" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert f"p4parse, version {__version__}" in result.output

    def test_parse_file(self, runner, source_file):
        result = runner.invoke(main, [str(source_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == f"Parsed 1 control declaration(s) from {source_file}\n"

    def test_parse_stdin(self, runner):
        result = runner.invoke(main, [], input=SOURCE)
        assert result.exit_code == 0
        assert "Parsed 1 control declaration(s) from <stdin>" in result.output

    def test_parse_dash(self, runner):
        result = runner.invoke(main, ["-"], input=SOURCE + SOURCE.replace("control c", "control d"))
        assert result.exit_code == 0
        assert "Parsed 2 control declaration(s) from <stdin>" in result.output

    def test_empty_input(self, runner):
        result = runner.invoke(main, [], input="")
        assert result.exit_code == 0
        assert "Parsed 0 control declaration(s)" in result.output


class TestOutputModes:
    """Test --ast and --format."""

    def test_ast(self, runner, source_file):
        result = runner.invoke(main, ["--ast", str(source_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Program"
        assert lines[1] == "  Control: c(in bool a)"
        assert "    Variable: bool x = (a && (!a))" in lines

    def test_format(self, runner, source_file):
        result = runner.invoke(main, ["--format", str(source_file)])
        assert result.exit_code == 0
        assert result.output == (
            "control c(in bool a) {\n"
            "    bool x = a && !a;\n"
            "    apply {\n"
            "        if (x) {\n"
            "        }\n"
            "    }\n"
            "}\n"
        )

    def test_ast_and_format_conflict(self, runner, source_file):
        result = runner.invoke(main, ["--ast", "--format", str(source_file)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "cannot be used together" in result.output

    def test_verbose(self, runner, source_file):
        result = runner.invoke(main, ["-v", str(source_file)])
        assert result.exit_code == 0
        assert "Tokenized: " in result.output
        assert "Parse time: " in result.output


class TestErrors:
    """Test exit codes and diagnostics."""

    def test_syntax_error(self, runner, tmp_path):
        path = tmp_path / "bad.p4"
        path.write_text("control c() {\n    apply { if (a &&) { } }\n}\n", encoding="utf-8")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert f"{path}:2:21: error: unexpected token ')'" in result.output
        assert "hint: expected one of" in result.output

    def test_lex_error_from_stdin(self, runner):
        result = runner.invoke(main, [], input="control 1foo() { apply {} }")
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "<stdin>:1:9: error: invalid character '1'" in result.output

    def test_syntax_error_from_crlf_stdin(self, runner):
        result = runner.invoke(main, [], input="control c() {\r\n    apply { bool x = ; }\r\n}\r\n")
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "<stdin>:2:22: error: unexpected token ';'" in result.output
        assert "        apply { bool x = ; }\n" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.p4")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_directory_rejected(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path)])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_utf8(self, runner, tmp_path):
        path = tmp_path / "binary.p4"
        path.write_bytes(b"control \xff() { apply { } }")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Error: " in result.output


class TestOptions:
    """Test parser options given on the command line."""

    COMMENTED = "// ingress\ncontrol c() { /* locals */ apply { } }\n"

    def test_comments_rejected_by_default(self, runner):
        result = runner.invoke(main, [], input=self.COMMENTED)
        assert result.exit_code == ExitCode.SYNTAX_ERROR

    def test_allow_comments(self, runner):
        result = runner.invoke(main, ["--allow-comments"], input=self.COMMENTED)
        assert result.exit_code == 0

    def test_allow_comments_from_environment(self, runner, monkeypatch):
        monkeypatch.setenv("P4LITE_ALLOW_COMMENTS", "true")
        result = runner.invoke(main, [], input=self.COMMENTED)
        assert result.exit_code == 0

    def test_max_depth(self, runner):
        result = runner.invoke(main, ["--max-depth", "1"], input="control c() { apply { { } } }")
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "nesting deeper than 1 levels" in result.output

    def test_max_depth_must_be_positive(self, runner):
        result = runner.invoke(main, ["--max-depth", "0"], input=SOURCE)
        assert result.exit_code == ExitCode.INVALID_ARGS
