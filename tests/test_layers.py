"""Tests for the layer store."""

from map_mcp_tools.layers import FeatureKind, LayerStore


class TestLayerStore:
    def test_get_or_create_creates_once(self):
        store = LayerStore()
        calls = []

        def factory():
            calls.append(1)
            return object()

        first, created = store.get_or_create("cities", FeatureKind.POINT, factory)
        second, created_again = store.get_or_create("cities", FeatureKind.POINT, factory)
        assert created is True
        assert created_again is False
        assert first is second
        assert len(calls) == 1
        assert len(store) == 1

    def test_one_name_many_kinds(self):
        store = LayerStore()
        point, _ = store.get_or_create("trip", FeatureKind.POINT, object)
        line, _ = store.get_or_create("trip", FeatureKind.LINE, object)
        entry = store.get("trip")
        assert entry.kinds == [FeatureKind.POINT, FeatureKind.LINE]
        assert store.group("trip", FeatureKind.POINT) is point
        assert store.group("trip", FeatureKind.LINE) is line
        assert store.group("trip", FeatureKind.POLYGON) is None
        assert len(store) == 1

    def test_remove(self):
        store = LayerStore()
        store.get_or_create("a", FeatureKind.POINT, object)
        entry = store.remove("a")
        assert entry.name == "a"
        assert "a" not in store
        assert store.remove("a") is None

    def test_remove_group_drops_empty_entry(self):
        store = LayerStore()
        store.get_or_create("a", FeatureKind.POINT, object)
        store.get_or_create("a", FeatureKind.LINE, object)
        store.remove_group("a", FeatureKind.POINT)
        assert "a" in store
        store.remove_group("a", FeatureKind.LINE)
        assert "a" not in store

    def test_clear(self):
        store = LayerStore()
        store.get_or_create("a", FeatureKind.POINT, object)
        store.get_or_create("b", FeatureKind.POLYGON, object)
        entries = store.clear()
        assert [e.name for e in entries] == ["a", "b"]
        assert len(store) == 0
        assert store.names() == []
