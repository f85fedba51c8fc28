"""
Tests for the bpc and bprun Command-Line Tools
==============================================

These tests drive the click commands through CliRunner and check output,
written files, and exit codes.
"""

import shutil

import pytest
from click.testing import CliRunner

from bplang import __version__
from bplang.cli.bpc import main as bpc_main
from bplang.cli.bprun import main as bprun_main
from bplang.cli.errors import ExitCode


requires_cc = pytest.mark.skipif(
    shutil.which("cc") is None,
    reason="no C compiler (cc) on PATH",
)

SCENARIO = 'm variable01 = 1; c variable02 = "hi"; show variable02; show variable01;'


# =============================================================================
# bpc
# =============================================================================

class TestBpc:
    """Tests for the bpc translator command."""

    def test_version(self):
        result = CliRunner().invoke(bpc_main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_default_output_path(self, write_bp, tmp_path):
        source = write_bp(SCENARIO, "hello.bp")
        result = CliRunner().invoke(bpc_main, [str(source)])
        assert result.exit_code == 0, result.output
        out = tmp_path / "hello.c"
        assert out.exists()
        assert "puts(bp_variable02);" in out.read_text(encoding="utf-8")
        assert "hello.c" in result.output

    def test_explicit_output(self, write_bp, tmp_path):
        source = write_bp('show "hi";')
        out = tmp_path / "custom.c"
        result = CliRunner().invoke(bpc_main, [str(source), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_stdout(self, write_bp, tmp_path):
        source = write_bp('show "hi";')
        result = CliRunner().invoke(bpc_main, ["-S", str(source)])
        assert result.exit_code == 0
        assert 'puts("hi");' in result.output
        assert list(tmp_path.glob("*.c")) == []

    def test_comments(self, write_bp):
        source = write_bp('show "hi";')
        result = CliRunner().invoke(bpc_main, ["-S", "--comments", str(source)])
        assert "/* line 1: show \"hi\"; */" in result.output

    def test_tokens(self, write_bp):
        source = write_bp("m x = 1;")
        result = CliRunner().invoke(bpc_main, ["--tokens", str(source)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Token(KEYWORD, 'm', 1:1)",
            "Token(IDENTIFIER, 'x', 1:3)",
            "Token(EQUALS, '=', 1:5)",
            "Token(NUMBER, 1, 1:7)",
            "Token(SEMICOLON, ';', 1:8)",
            "Token(EOF, 1:9)",
        ]

    def test_ast(self, write_bp):
        source = write_bp("m x = 1; show x;")
        result = CliRunner().invoke(bpc_main, ["--ast", str(source)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Program (2 statements)",
            "  VarDecl m x = 1  @1:1",
            "  Show x  @1:10",
        ]

    def test_verbose(self, write_bp):
        source = write_bp(SCENARIO)
        result = CliRunner().invoke(bpc_main, ["-v", str(source)])
        assert result.exit_code == 0
        assert "Tokenized: 17 tokens" in result.output
        assert "Resolved: 2 variables" in result.output

    def test_syntax_error(self, write_bp, tmp_path):
        source = write_bp("m x = 1", "bad.bp")
        result = CliRunner().invoke(bpc_main, [str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "bad.bp:1:8: error: expected ';'" in result.output
        assert not (tmp_path / "bad.c").exists()

    def test_type_mismatch_writes_nothing(self, write_bp, tmp_path):
        source = write_bp('m x = "hello";', "bad.bp")
        result = CliRunner().invoke(bpc_main, [str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "cannot initialize 'm' variable 'x'" in result.output
        assert not (tmp_path / "bad.c").exists()

    def test_missing_input(self, tmp_path):
        result = CliRunner().invoke(bpc_main, [str(tmp_path / "missing.bp")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_utf8(self, tmp_path):
        source = tmp_path / "bad.bp"
        source.write_bytes(b'show "ok";\n\xff;')
        result = CliRunner().invoke(bpc_main, [str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "bad.bp:2:1: error: invalid byte 0xFF" in result.output
        assert not (tmp_path / "bad.c").exists()

    def test_refuses_to_overwrite_c_input(self, write_bp):
        """A source named prog.c would be replaced by its own translation."""
        source = write_bp('show "hi";', "prog.c")
        result = CliRunner().invoke(bpc_main, [str(source)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "would overwrite the input file" in result.output
        assert source.read_text(encoding="utf-8") == 'show "hi";'

    def test_refuses_explicit_output_equal_to_input(self, write_bp, tmp_path, monkeypatch):
        source = write_bp('show "hi";', "prog.bp")
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(bpc_main, [str(source), "-o", "prog.bp"])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert source.read_text(encoding="utf-8") == 'show "hi";'

    def test_stdout_from_c_named_input(self, write_bp):
        """Nothing is written with -S, so any input name is fine."""
        source = write_bp('show "hi";', "prog.c")
        result = CliRunner().invoke(bpc_main, ["-S", str(source)])
        assert result.exit_code == 0, result.output
        assert 'puts("hi");' in result.output


# =============================================================================
# bprun
# =============================================================================

class TestBprun:
    """Tests for the bprun command."""

    def test_version(self):
        result = CliRunner().invoke(bprun_main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_translation_error(self, write_bp):
        source = write_bp("show y;")
        result = CliRunner().invoke(bprun_main, [str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "undeclared variable 'y'" in result.output

    def test_missing_compiler(self, write_bp):
        source = write_bp('show "hi";')
        result = CliRunner().invoke(bprun_main, ["--cc", "no-such-compiler-bp", str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "no-such-compiler-bp" in result.output

    def test_compiler_from_env(self, write_bp, monkeypatch):
        monkeypatch.setenv("BP_CC", "no-such-compiler-bp")
        source = write_bp('show "hi";')
        result = CliRunner().invoke(bprun_main, [str(source)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "no-such-compiler-bp" in result.output

    def test_keep_refuses_c_input(self, write_bp):
        source = write_bp('show "hi";', "prog.c")
        result = CliRunner().invoke(bprun_main, ["-k", str(source)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "would overwrite the input file" in result.output
        assert source.read_text(encoding="utf-8") == 'show "hi";'

    def test_output_binary_refuses_input(self, write_bp):
        source = write_bp('show "hi";', "prog.bp")
        result = CliRunner().invoke(bprun_main, ["-o", str(source), str(source)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert source.read_text(encoding="utf-8") == 'show "hi";'

    def test_keep_survives_compiler_failure(self, write_bp, tmp_path):
        source = write_bp('show "hi";', "kept.bp")
        result = CliRunner().invoke(
            bprun_main, ["-k", "--cc", "no-such-compiler-bp", str(source)]
        )
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert 'puts("hi");' in (tmp_path / "kept.c").read_text(encoding="utf-8")

    @requires_cc
    def test_run_scenario(self, write_bp):
        source = write_bp(SCENARIO)
        result = CliRunner().invoke(bprun_main, [str(source)])
        assert result.exit_code == 0, result.output
        assert result.output == "hi\n1\n"

    @requires_cc
    def test_keep(self, write_bp, tmp_path):
        source = write_bp('show "hi";', "kept.bp")
        result = CliRunner().invoke(bprun_main, ["-k", str(source)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "kept.c").exists()

    @requires_cc
    def test_output_binary(self, write_bp, tmp_path):
        source = write_bp('show "hi";')
        binary = tmp_path / "hello"
        result = CliRunner().invoke(bprun_main, ["-o", str(binary), str(source)])
        assert result.exit_code == 0, result.output
        assert binary.exists()

    @requires_cc
    def test_verbose_steps(self, write_bp):
        source = write_bp('show "hi";')
        result = CliRunner().invoke(bprun_main, ["-v", str(source)])
        assert result.exit_code == 0, result.output
        assert "[1/3] Translated program.bp" in result.output
        assert "[2/3] Compiled program.c" in result.output
        assert "Command: " in result.output
        assert "[3/3] Running program" in result.output
