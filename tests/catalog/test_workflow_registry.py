"""
Tests for WorkflowRegistry
"""

import os
import sys

import pytest

from comfydeck.catalog import WorkflowRegistry


def test_missing_folder_is_created(tmp_path):
    """Test that a fresh path is created and yields an empty list"""
    workflows_dir = tmp_path / "workflows"

    result = WorkflowRegistry(workflows_dir).ensure_and_list()

    assert result == []
    assert workflows_dir.is_dir()


def test_only_json_files_are_listed(tmp_path):
    """Test that w2.txt is skipped"""
    (tmp_path / "w1.json").write_text("{}")
    (tmp_path / "w2.txt").write_text("")

    assert WorkflowRegistry(tmp_path).ensure_and_list() == ["w1.json"]


def test_extension_is_case_insensitive(tmp_path):
    """Test that upper-case .JSON files are listed"""
    (tmp_path / "upscale.JSON").write_text("{}")
    (tmp_path / "txt2img.json").write_text("{}")

    assert set(WorkflowRegistry(tmp_path).ensure_and_list()) == {"upscale.JSON", "txt2img.json"}


def test_subfolders_are_not_searched(tmp_path):
    """Test that listing is not recursive and folders are skipped"""
    (tmp_path / "nested.json").mkdir()
    (tmp_path / "nested.json" / "inner.json").write_text("{}")
    (tmp_path / "top.json").write_text("{}")

    assert WorkflowRegistry(tmp_path).ensure_and_list() == ["top.json"]


def test_only_last_level_is_created(tmp_path):
    """Test that missing parents are not created"""
    registry = WorkflowRegistry(tmp_path / "missing" / "workflows")

    assert registry.ensure_and_list() is None
    assert not (tmp_path / "missing").exists()


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="requires POSIX permissions as non-root")
def test_unreadable_folder_returns_none(tmp_path):
    """Test that a listing failure is reported as no update"""
    workflows_dir = tmp_path / "workflows"
    workflows_dir.mkdir()
    workflows_dir.chmod(0o000)
    try:
        assert WorkflowRegistry(workflows_dir).ensure_and_list() is None
    finally:
        workflows_dir.chmod(0o755)
