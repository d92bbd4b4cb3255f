"""
Variable store and YAML seeding tests
"""

import pytest

from mexpand.lib.variables import VariableStore, VariablesError, variables_loadYAML


class TestStore:
    """Test VariableStore"""

    def test_unset_is_empty(self):
        """Reading an unset name gives ''"""
        store = VariableStore()
        assert store.get("missing") == ""
        assert "missing" not in store

    def test_last_write_wins(self):
        """store() overwrites"""
        store = VariableStore()
        store.store("a", "1")
        store.store("a", "2")
        assert store.get("a") == "2"
        assert len(store) == 1

    def test_initial_values_copied(self):
        """Seeding does not alias the caller's dict"""
        seed = {"a": "1"}
        store = VariableStore(seed)
        store.store("a", "2")
        assert seed == {"a": "1"}
        assert list(store) == ["a"]


class TestYAML:
    """Test variables_loadYAML"""

    def test_scalars_become_strings(self, tmp_path):
        """Numbers, booleans and nulls are stringified"""
        path = tmp_path / "vars.yaml"
        path.write_text("name: Jane\ncount: 3\nflag: true\nempty:\n", encoding="utf-8")
        assert variables_loadYAML(str(path)) == {
            "name": "Jane",
            "count": "3",
            "flag": "True",
            "empty": "",
        }

    def test_empty_file(self, tmp_path):
        """An empty file defines nothing"""
        path = tmp_path / "vars.yaml"
        path.write_text("", encoding="utf-8")
        assert variables_loadYAML(str(path)) == {}

    @pytest.mark.parametrize("content", [
        "- a\n- b\n",
        "a:\n  nested: 1\n",
        "a: [1, 2]\n",
        "a: [unclosed\n",
    ])
    def test_rejected(self, tmp_path, content):
        """Non-mappings, nested values and bad YAML are errors"""
        path = tmp_path / "vars.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(VariablesError):
            variables_loadYAML(str(path))

    def test_missing_file(self, tmp_path):
        """A missing file is an error"""
        with pytest.raises(VariablesError, match="Failed to load"):
            variables_loadYAML(str(tmp_path / "nope.yaml"))
