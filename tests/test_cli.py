"""Tests for the command line entry point."""

import json
import logging
from pathlib import Path

import pytest

from contextit.cli import _collect_source_files, main
from contextit.registry import LanguageRegistry

PY_SOURCE = "def add(a: int, b: int) -> int:\n    return a + b\n"


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("contextit")
    for handler in list(logger.handlers):
        if getattr(handler, "_contextit", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _make_tree(tmp_path: Path, structure: dict):
    for name, content in structure.items():
        path = tmp_path / name
        if isinstance(content, dict):
            path.mkdir(exist_ok=True)
            _make_tree(path, content)
        else:
            path.write_text(content)


class TestCollectSourceFiles:
    def setup_method(self):
        self.registry = LanguageRegistry()

    def test_files_and_directories(self, tmp_path):
        _make_tree(tmp_path, {
            "main.go": "",
            "notes.txt": "",
            "src": {"b.rs": "", "a.php": ""},
        })
        files = _collect_source_files(
            [str(tmp_path / "notes.txt"), str(tmp_path / "main.go"), str(tmp_path / "src")],
            self.registry,
            use_ignore=True,
        )
        assert [f.name for f in files] == ["main.go", "a.php", "b.rs"]

    def test_missing_path_is_skipped(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="contextit"):
            files = _collect_source_files([str(tmp_path / "nope")], self.registry, use_ignore=True)
        assert files == []
        assert "not a file or directory" in caplog.text


class TestMain:
    def test_markdown_to_stdout(self, tmp_path, capsys):
        _make_tree(tmp_path, {"calc.py": PY_SOURCE})
        main([str(tmp_path)])
        out = capsys.readouterr().out
        assert out.startswith("# Code Documentation\n\n")
        assert f"## {(tmp_path / 'calc.py').as_posix()}" in out
        assert "```python\nfunction add(a: int, b: int): int\n```" in out
        assert "### Full Source" in out
        assert "return a + b" in out

    def test_functions_only(self, tmp_path, capsys):
        _make_tree(tmp_path, {"calc.py": PY_SOURCE})
        main([str(tmp_path), "-f"])
        out = capsys.readouterr().out
        assert "function add(a: int, b: int): int" in out
        assert "### Full Source" not in out

    def test_json(self, tmp_path, capsys):
        _make_tree(tmp_path, {"calc.py": PY_SOURCE})
        main([str(tmp_path), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 1
        assert data[0]["language"] == "python"
        assert data[0]["signatures"] == [{
            "name": "add",
            "parameters": [{"name": "a", "type": "int"}, {"name": "b", "type": "int"}],
            "returnType": "int",
        }]

    def test_output_file(self, tmp_path, capsys):
        _make_tree(tmp_path, {"src": {"calc.py": PY_SOURCE}})
        target = tmp_path / "docs.md"
        main([str(tmp_path / "src"), "-o", str(target)])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Documentation written to" in captured.err
        assert "function add(a: int, b: int): int" in target.read_text()

    def test_files_without_signatures_are_skipped(self, tmp_path, capsys):
        _make_tree(tmp_path, {"calc.py": PY_SOURCE, "consts.py": "X = 1\n"})
        main([str(tmp_path)])
        out = capsys.readouterr().out
        assert "calc.py" in out
        assert "consts.py" not in out

    def test_include_empty_lists_files_without_signatures(self, tmp_path, capsys):
        _make_tree(tmp_path, {"calc.py": PY_SOURCE, "consts.py": "X = 1\n"})
        main([str(tmp_path), "--include-empty"])
        out = capsys.readouterr().out
        assert f"## {(tmp_path / 'consts.py').as_posix()}\n\n_No functions found_\n\n" in out
        assert "function add(a: int, b: int): int" in out

    def test_input_flag_matches_positional_paths(self, tmp_path, capsys):
        _make_tree(tmp_path, {"a": {"calc.py": PY_SOURCE}, "b": {"main.go": "func Main() {}\n"}})
        main(["-i", str(tmp_path / "a"), "--input", str(tmp_path / "b"), "-f"])
        out = capsys.readouterr().out
        assert "function add(a: int, b: int): int" in out
        assert "```go\nfunction Main()\n```" in out

    def test_ignore_files_are_respected(self, tmp_path, capsys):
        _make_tree(tmp_path, {
            ".contextignore": "generated.py\n",
            "calc.py": PY_SOURCE,
            "generated.py": "def gen():\n    pass\n",
        })
        main([str(tmp_path), "-f"])
        assert "generated.py" not in capsys.readouterr().out

        main([str(tmp_path), "-f", "--no-ignore"])
        assert "function gen()" in capsys.readouterr().out

    def test_no_supported_files(self, tmp_path, capsys):
        _make_tree(tmp_path, {"readme.txt": "hello"})
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path)])
        assert exc.value.code == 1
        assert "No supported source files found." in capsys.readouterr().err
