"""Unit tests for nested container helpers."""

from web_helpers import arrays


class TestRemove:
    """Test nested item removal."""

    def test_remove(self):
        """Test removal by list and dotted keys."""
        data = {"a": 1, "b": {"c": 2, "d": 3, "e": 4}}

        assert arrays.remove(data, ["b", "d"]) == 3
        assert data == {"a": 1, "b": {"c": 2, "e": 4}}

        assert arrays.remove(data, "b.e") == 4
        assert data == {"a": 1, "b": {"c": 2}}

        assert arrays.remove(data, "b") == {"c": 2}
        assert data == {"a": 1}

        assert arrays.remove(data, "b", 123) == 123
        assert data == {"a": 1}

    def test_remove_missing_path(self):
        """Test missing intermediate key."""
        data = {"a": 1}

        assert arrays.remove(data, "x.y.z") is None
        assert arrays.remove(data, "a.b", "default") == "default"
        assert data == {"a": 1}


class TestGetValue:
    """Test nested value lookup."""

    def test_dotted_key(self):
        """Test lookup by dotted path."""
        assert arrays.get_value({"prod": {"name": "Утюг"}}, "prod.name") == "Утюг"

    def test_literal_key_with_dot(self):
        """Test key containing dot is found directly."""
        assert arrays.get_value({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    def test_sequences_and_objects(self):
        """Test list indexes and attributes."""

        class Item:
            price = 100

        data = {"items": [{"id": 1}, Item()]}

        assert arrays.get_value(data, "items.0.id") == 1
        assert arrays.get_value(data, ["items", 1, "price"]) == 100

    def test_default(self):
        """Test default for missing values."""
        assert arrays.get_value({"a": {"b": 1}}, "a.c", "x") == "x"
        assert arrays.get_value({"a": [1]}, "a.5") is None
        assert arrays.get_value({"a": "text"}, "a.length", 0) == 0


class TestSetValue:
    """Test nested value assignment."""

    def test_set_value(self):
        """Test intermediate dicts are created."""
        data = {"a": 1}
        arrays.set_value(data, "b.c.d", 5)

        assert data == {"a": 1, "b": {"c": {"d": 5}}}

    def test_set_value_replaces_scalar(self):
        """Test scalar on the path is replaced."""
        data = {"a": 1}
        arrays.set_value(data, ["a", "b"], 2)

        assert data == {"a": {"b": 2}}
