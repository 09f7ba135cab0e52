"""Unit tests for the DirectoryWalker."""

import os

import pytest

from dirdigest.exceptions import ConfigurationError
from dirdigest.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirdigest.exclusion_rules.rule_set import RuleSet
from dirdigest.file_system_tree.walker import DirectoryWalker
from dirdigest.types import Verdict


def paths(walker):
    return [entry.relative_path for entry in walker.walk()]


def symlink(target, link, target_is_directory=False):
    try:
        os.symlink(target, link, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported on this platform")


def test_sample_project(sample_project):
    """Test nested ignore files, defaults and extension handling together."""
    entries = list(DirectoryWalker(sample_project, RuleSet.build()).walk())

    assert [entry.relative_path for entry in entries] == [
        "assets/logo.png",
        "docs/guide.md",
        "src/keep.log",
        "src/main.x",
    ]
    verdicts = {entry.relative_path: entry.verdict for entry in entries}
    assert verdicts["assets/logo.png"] is Verdict.INCLUDE_PATH_ONLY
    assert verdicts["src/main.x"] is Verdict.INCLUDE_PATH_AND_CONTENT
    assert all(entry.content is None for entry in entries)
    assert entries[-1].size == 50


def test_default_rule_set(sample_project):
    assert paths(DirectoryWalker(sample_project)) == paths(DirectoryWalker(sample_project, RuleSet.build()))


def test_walk_is_idempotent(sample_project):
    walker = DirectoryWalker(sample_project)
    assert list(walker.walk()) == list(walker.walk())
    assert list(walker) == list(walker.walk())


class ReversedScandir:
    """Stand-in for os.scandir that lists entries in reverse name order."""

    def __init__(self, scandir, path):
        self._iterator = scandir(path)

    def __enter__(self):
        return iter(sorted(self._iterator, key=lambda entry: entry.name, reverse=True))

    def __exit__(self, *exc_info):
        self._iterator.close()


def test_sorted_depth_first_order(make_tree, monkeypatch):
    """Test that entries are sorted whatever order the file system lists them in."""
    root = make_tree({"b.x": "", "a/z.x": "", "a/b/c.x": "", "A.x": "", "c/a.x": ""})
    scandir = os.scandir
    listed = []

    def reversed_scandir(path):
        listed.append(path)
        return ReversedScandir(scandir, path)

    monkeypatch.setattr(os, "scandir", reversed_scandir)

    assert paths(DirectoryWalker(root)) == ["A.x", "a/b/c.x", "a/z.x", "b.x", "c/a.x"]
    assert len(listed) == 4


def test_pruned_directory_is_not_read(make_tree, monkeypatch):
    """Test that nothing beneath a pruned directory is listed or read."""
    root = make_tree(
        {
            "src/main.x": "main",
            "node_modules/pkg/.gitignore": "!*\n",
            "node_modules/pkg/index.x": "pkg",
        }
    )
    loaded = []
    original = GitIgnoreExclusionRules.from_file

    def spy(cls, rules_file, anchor=""):
        loaded.append(anchor)
        return original(rules_file, anchor=anchor)

    monkeypatch.setattr(GitIgnoreExclusionRules, "from_file", classmethod(spy))

    assert paths(DirectoryWalker(root)) == ["src/main.x"]
    assert loaded == []


def test_rules_do_not_leak_to_siblings(make_tree):
    root = make_tree({"a/.ignore": "*.x\n", "a/one.x": "", "a/one.y": "", "b/two.x": ""})
    assert paths(DirectoryWalker(root)) == ["a/one.y", "b/two.x"]


def test_rules_apply_to_whole_subtree(make_tree):
    root = make_tree({"a/.gitignore": "tmp/\n", "a/b/tmp/x.y": "", "a/b/keep.y": "", "tmp/x.y": ""})
    assert paths(DirectoryWalker(root)) == ["a/b/keep.y", "tmp/x.y"]


def test_deeper_ignore_file_reincludes(make_tree):
    root = make_tree({".gitignore": "*.log\n", "a/.gitignore": "!keep.log\n", "a/keep.log": "", "a/other.log": ""})
    assert paths(DirectoryWalker(root)) == ["a/keep.log"]


def test_ignore_file_overrides_gitignore(make_tree):
    """Test that .ignore takes precedence over .gitignore in the same directory."""
    root = make_tree({".gitignore": "*.x\n", ".ignore": "!keep.x\n", "drop.x": "", "keep.x": ""})
    assert paths(DirectoryWalker(root)) == ["keep.x"]


def test_custom_ignore_file_names(make_tree):
    root = make_tree({".gitignore": "*.x\n", ".dockerignore": "*.y\n", "a.x": "", "b.y": ""})
    walker = DirectoryWalker(root, ignore_file_names=(".dockerignore",))
    assert paths(walker) == ["a.x"]


def test_include_filter(make_tree):
    """Test that only files matching an include pattern are emitted."""
    root = make_tree({"README.md": "", "docs/guide.md": "", "src/main.x": "", "src/notes.md": ""})
    walker = DirectoryWalker(root, RuleSet.build(include=["*.md"]))
    assert paths(walker) == ["README.md", "docs/guide.md", "src/notes.md"]


def test_user_exclude_directory(make_tree):
    root = make_tree({"docs/guide.md": "", "src/main.x": ""})
    walker = DirectoryWalker(root, RuleSet.build(exclude=["docs/"]))
    assert paths(walker) == ["src/main.x"]


def test_empty_directories_produce_no_entries(make_tree):
    root = make_tree({"a.x": ""})
    (root / "empty").mkdir()
    assert paths(DirectoryWalker(root)) == ["a.x"]


def test_missing_root(tmp_path):
    with pytest.raises(ConfigurationError, match="does not exist"):
        list(DirectoryWalker(tmp_path / "missing").walk())


def test_root_is_a_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("x")
    with pytest.raises(ConfigurationError, match="not a directory"):
        DirectoryWalker(file_path).resolve_root()


class TestSymlinks:
    """Test cases for symbolic link handling."""

    def test_link_to_directory_inside_root(self, make_tree):
        root = make_tree({"real/a.x": "a"})
        symlink(root / "real", root / "alias", target_is_directory=True)
        assert paths(DirectoryWalker(root)) == ["alias/a.x", "real/a.x"]

    def test_no_follow_symlinks(self, make_tree):
        root = make_tree({"real/a.x": "a"})
        symlink(root / "real", root / "alias", target_is_directory=True)
        assert paths(DirectoryWalker(root, follow_symlinks=False)) == ["real/a.x"]

    def test_link_outside_root(self, make_tree, tmp_path):
        root = make_tree({"a.x": ""})
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.x").write_text("secret")
        symlink(outside, root / "ext", target_is_directory=True)
        assert paths(DirectoryWalker(root)) == ["a.x"]

    def test_loop_terminates(self, make_tree):
        """Test that links back to an ancestor are not followed."""
        root = make_tree({"a/file.x": ""})
        symlink(root / "a", root / "a" / "loop", target_is_directory=True)
        symlink(root, root / "a" / "root", target_is_directory=True)
        assert paths(DirectoryWalker(root)) == ["a/file.x"]

    def test_link_to_file(self, make_tree):
        root = make_tree({"target.x": "hello"})
        symlink(root / "target.x", root / "link.x")
        entries = list(DirectoryWalker(root).walk())
        assert [entry.relative_path for entry in entries] == ["link.x", "target.x"]
        assert entries[0].verdict is Verdict.INCLUDE_PATH_AND_CONTENT
        assert entries[0].size == 5

    def test_broken_link(self, make_tree, caplog):
        """Test that a dangling link is listed path-only with an error."""
        root = make_tree({"a.x": ""})
        symlink(root / "missing.x", root / "dangling.x")
        entries = list(DirectoryWalker(root).walk())

        assert [entry.relative_path for entry in entries] == ["a.x", "dangling.x"]
        dangling = entries[1]
        assert dangling.verdict is Verdict.INCLUDE_PATH_ONLY
        assert dangling.error == "broken symbolic link"
        assert "Cannot access dangling.x: broken symbolic link" in caplog.text

    def test_excluded_broken_link_is_silent(self, make_tree, caplog):
        root = make_tree({".gitignore": "dangling.x\n"})
        symlink(root / "missing.x", root / "dangling.x")
        assert paths(DirectoryWalker(root)) == []
        assert "dangling.x" not in caplog.text


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="Permissions are not enforced for root")
def test_unreadable_directory(make_tree):
    """Test that an unreadable directory is recorded and traversal continues."""
    root = make_tree({"locked/secret.x": "", "open/a.x": ""})
    (root / "locked").chmod(0)
    try:
        entries = list(DirectoryWalker(root).walk())
    finally:
        (root / "locked").chmod(0o755)

    assert [entry.relative_path for entry in entries] == ["locked", "open/a.x"]
    assert entries[0].is_dir
    assert entries[0].verdict is Verdict.INCLUDE_PATH_ONLY
    assert entries[0].error


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs are not supported on this platform")
def test_special_file_is_path_only(make_tree):
    root = make_tree({"a.x": ""})
    os.mkfifo(root / "pipe")
    entries = {entry.relative_path: entry for entry in DirectoryWalker(root).walk()}
    assert entries["pipe"].verdict is Verdict.INCLUDE_PATH_ONLY


def test_hidden_entries_skipped_by_default(make_tree):
    root = make_tree({".env": "SECRET=1\n", ".config/settings.x": "", "src/main.x": ""})
    assert paths(DirectoryWalker(root)) == ["src/main.x"]
    walker = DirectoryWalker(root, RuleSet.build(skip_hidden=False))
    assert paths(walker) == [".config/settings.x", ".env", "src/main.x"]
