import logging
from pathlib import Path

import pytest

from contextit.walker import load_ignore_spec, read_source_file, walk_source_files


def _make_tree(tmp_path: Path, structure: dict):
    """Create a directory tree from a nested dict. Values are file contents."""
    for name, content in structure.items():
        path = tmp_path / name
        if isinstance(content, dict):
            path.mkdir(exist_ok=True)
            _make_tree(path, content)
        else:
            path.write_text(content)


def _relative(paths, root):
    return [p.relative_to(root).as_posix() for p in paths]


class TestWalkSourceFiles:
    def test_filters_by_suffix_in_sorted_order(self, tmp_path):
        _make_tree(tmp_path, {
            "b.go": "",
            "a.py": "",
            "notes.txt": "",
            "sub": {"c.rs": "", "d.md": ""},
        })
        files = walk_source_files(tmp_path, {".go", ".py", ".rs"})
        assert _relative(files, tmp_path) == ["a.py", "b.go", "sub/c.rs"]

    def test_skips_hidden_and_ignored_dirs(self, tmp_path):
        _make_tree(tmp_path, {
            ".git": {"x.py": ""},
            "node_modules": {"lib.js": ""},
            "src": {"app.js": ""},
        })
        files = walk_source_files(tmp_path, {".js", ".py"}, {"node_modules"})
        assert _relative(files, tmp_path) == ["src/app.js"]

    def test_applies_ignore_spec(self, tmp_path):
        _make_tree(tmp_path, {
            ".gitignore": "generated/\n*.min.js\n",
            ".contextignore": "legacy.py\n",
            "generated": {"out.js": ""},
            "app.min.js": "",
            "app.js": "",
            "legacy.py": "",
            "main.py": "",
        })
        spec = load_ignore_spec(tmp_path)
        files = walk_source_files(tmp_path, {".js", ".py"}, spec=spec)
        assert _relative(files, tmp_path) == ["app.js", "main.py"]

    def test_suffix_match_is_case_insensitive(self, tmp_path):
        _make_tree(tmp_path, {"Main.JAVA": ""})
        assert _relative(walk_source_files(tmp_path, {".java"}), tmp_path) == ["Main.JAVA"]


class TestLoadIgnoreSpec:
    def test_none_without_ignore_files(self, tmp_path):
        assert load_ignore_spec(tmp_path) is None

    def test_combines_both_files(self, tmp_path):
        (tmp_path / ".gitignore").write_text("build/\n")
        (tmp_path / ".contextignore").write_text("*.gen.ts\n")
        spec = load_ignore_spec(tmp_path)
        assert spec.match_file("build/x.py")
        assert spec.match_file("src/a.gen.ts")
        assert not spec.match_file("src/a.ts")

    def test_unreadable_file_is_logged(self, tmp_path, caplog):
        (tmp_path / ".gitignore").write_bytes(b"\xff\xfe\xfa")
        with caplog.at_level(logging.WARNING, logger="contextit"):
            assert load_ignore_spec(tmp_path) is None
        assert "cannot read" in caplog.text


class TestReadSourceFile:
    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "a.py"
        path.write_text("def café(): pass\n", encoding="utf-8")
        assert read_source_file(path) == "def café(): pass\n"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_source_file(tmp_path / "missing.py")
