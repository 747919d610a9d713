"""Tests for loading dialogue trees from YAML."""

import pytest
import yaml

from helpdesk.core.errors import TreeError
from helpdesk.tree.loader import TreeLoader

TREE_YAML = """
root:
  title: How can we help?
  branches:
    - target: beta
      message: Join the beta
    - target: other
      message: Something else
beta:
  title: Welcome to the beta
  role: 4242
other:
  title: Ask a moderator
"""


class TestTreeLoader:
    def test_load_tree(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text(TREE_YAML)

        tree = TreeLoader.load(path)

        assert len(tree) == 3
        assert [b.message for b in tree.root.branches] == ["Join the beta", "Something else"]
        assert tree["beta"].role_id == 4242
        assert tree["other"].branches == ()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TreeLoader.load(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text("invalid: yaml: tree: [")

        with pytest.raises(yaml.YAMLError):
            TreeLoader.load(path)

    def test_missing_root_is_rejected(self):
        with pytest.raises(TreeError, match="root"):
            TreeLoader.from_dict({"start": {"title": "Hi"}})

    def test_dangling_target_is_rejected(self):
        data = {"root": {"title": "Hi", "branches": [{"target": "nowhere", "message": "Go"}]}}

        with pytest.raises(TreeError, match="root -> nowhere"):
            TreeLoader.from_dict(data)

    def test_dangling_target_allowed_when_not_strict(self):
        data = {"root": {"title": "Hi", "branches": [{"target": "nowhere", "message": "Go"}]}}

        tree = TreeLoader.from_dict(data, strict=False)

        assert tree.dangling_targets() == [("root", "nowhere")]

    def test_node_without_title_is_rejected(self):
        with pytest.raises(TreeError, match="Invalid node 'root'"):
            TreeLoader.from_dict({"root": {"branches": []}})

    def test_non_mapping_is_rejected(self):
        with pytest.raises(TreeError, match="mapping"):
            TreeLoader.from_dict(["root"])  # type: ignore[arg-type]

    def test_empty_file_has_no_root(self, tmp_path):
        path = tmp_path / "tree.yaml"
        path.write_text("")

        with pytest.raises(TreeError):
            TreeLoader.load(path)
