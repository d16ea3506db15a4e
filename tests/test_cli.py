"""Tests for the mathruntime command line tool."""

from mathruntime.cli import main


class TestCli:
    """Test printing of terms and tokens."""

    def test_prints_term(self, capsys):
        assert main(["3x"]) == 0
        out = capsys.readouterr().out
        assert "Operator(op='*'" in out
        assert "Variable(name='x')" in out

    def test_no_split(self, capsys):
        assert main(["xy", "--no-split"]) == 0
        assert capsys.readouterr().out.strip() == "Variable(name='xy')"

    def test_tokens(self, capsys):
        assert main(["3xy + 1", "--tokens"]) == 0
        assert capsys.readouterr().out.strip() == "3 xy + 1 §"

    def test_seed_is_reproducible(self, capsys):
        main(["1{+|-|*|/}2", "--seed", "11"])
        first = capsys.readouterr().out
        main(["1{+|-|*|/}2", "--seed", "11"])
        assert capsys.readouterr().out == first

    def test_parse_error(self, capsys):
        assert main(["(1+2"]) == 1
        assert capsys.readouterr().err.startswith('Error: expected ")"')

    def test_context_file(self, tmp_path, capsys):
        path = tmp_path / "ctx.yaml"
        path.write_text("unary: [log]\n", encoding="utf-8")
        assert main(["log x", "--context", str(path)]) == 0
        assert "Operator(op='log'" in capsys.readouterr().out

    def test_missing_context_file(self, tmp_path, capsys):
        assert main(["x", "--context", str(tmp_path / "missing.yaml")]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_log_level_option(self, capsys):
        assert main(["x", "--log-level", "DEBUG"]) == 0
        assert "Parsing tokens" in capsys.readouterr().err

    def test_malformed_context_file(self, tmp_path, capsys):
        path = tmp_path / "broken.yaml"
        path.write_text("unary: [log\n", encoding="utf-8")
        assert main(["x", "--context", str(path)]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_context_path_is_a_directory(self, tmp_path, capsys):
        assert main(["x", "--context", str(tmp_path)]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_broken_context_file_from_environment(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "broken.yaml"
        path.write_text("unary: [log\n", encoding="utf-8")
        monkeypatch.setenv("MATHRUNTIME_CONTEXT_FILE", str(path))
        assert main(["x"]) == 1
        assert capsys.readouterr().err.startswith("Error:")
