"""Tests for the exclusion policy."""

from __future__ import annotations

import pytest

from leakscout.scanner.exclusion import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_SIZE,
    ExclusionPolicy,
    SkipReason,
)


def _explode() -> int:
    raise AssertionError("size should not be read")


class TestDefaults:
    def test_default_dirs(self):
        policy = ExclusionPolicy()
        for name in (".git", "node_modules", "vendor", ".venv", "dist"):
            assert policy.should_skip_directory(name)
        assert not policy.should_skip_directory("src")

    def test_default_files(self):
        policy = ExclusionPolicy()
        assert policy.should_skip_file("package-lock.json")
        assert policy.should_skip_file("go.sum")
        assert not policy.should_skip_file("main.go")

    def test_default_size_is_ten_mib(self):
        assert ExclusionPolicy().max_file_size == DEFAULT_MAX_FILE_SIZE == 10 * 1024 * 1024

    def test_dir_matching_is_exact_basename(self):
        policy = ExclusionPolicy()
        assert not policy.should_skip_directory("my_node_modules")
        assert not policy.should_skip_directory("GIT")


class TestMutation:
    def test_additions_are_cumulative(self):
        policy = ExclusionPolicy(exclude_dirs=["fixtures"])
        policy.add_dir("generated")
        policy.add_file("secrets.sample")

        assert policy.should_skip_directory("fixtures")
        assert policy.should_skip_directory("generated")
        assert policy.should_skip_file("secrets.sample")
        assert DEFAULT_EXCLUDE_DIRS <= policy.excluded_dirs

    def test_policies_do_not_share_state(self):
        a = ExclusionPolicy()
        a.add_dir("only-in-a")
        assert not ExclusionPolicy().should_skip_directory("only-in-a")

    def test_negative_size_rejected(self):
        policy = ExclusionPolicy()
        with pytest.raises(ValueError):
            policy.set_max_file_size(-1)
        assert policy.max_file_size == DEFAULT_MAX_FILE_SIZE

    def test_zero_size_allowed(self):
        policy = ExclusionPolicy(max_file_size=0)
        assert policy.is_oversize(1)
        assert not policy.is_oversize(0)


class TestBinary:
    @pytest.mark.parametrize("name", ["a.PNG", "lib.so", "x.Jpeg", "arch.tar.gz", "c.pyc"])
    def test_binary_extensions(self, name: str):
        assert ExclusionPolicy.is_binary(name)

    @pytest.mark.parametrize("name", ["README", "main.py", "png", "notes.txt"])
    def test_text_files(self, name: str):
        assert not ExclusionPolicy.is_binary(name)


class TestSkipReason:
    def test_excluded_name_wins_without_stat(self):
        policy = ExclusionPolicy()
        assert policy.skip_reason("/repo/yarn.lock", _explode) is SkipReason.EXCLUDED

    def test_binary_before_size(self):
        policy = ExclusionPolicy()
        assert policy.skip_reason("/repo/logo.png", _explode) is SkipReason.BINARY

    def test_oversize(self):
        policy = ExclusionPolicy(max_file_size=100)
        assert policy.skip_reason("/repo/big.txt", lambda: 101) is SkipReason.OVERSIZE
        assert policy.skip_reason("/repo/ok.txt", lambda: 100) is None

    def test_size_errors_propagate(self):
        def _missing() -> int:
            raise FileNotFoundError("gone")

        with pytest.raises(FileNotFoundError):
            ExclusionPolicy().skip_reason("/repo/a.txt", _missing)
