"""
Tests for structural pruning.
"""

from geocompact.prune import prune_empty


class TestPruneEmpty:
    """Test removal of empty members."""

    def test_removes_empty_members(self):
        """Test that empty arrays and objects are dropped."""
        value = {"type": "Feature", "properties": {}, "bbox": [], "id": 1}
        assert prune_empty(value) == {"type": "Feature", "id": 1}

    def test_bottom_up(self):
        """Test that a parent emptied by pruning is dropped too."""
        value = {"a": {"b": {"c": []}}, "keep": 1}
        assert prune_empty(value) == {"keep": 1}

    def test_empty_geometry_collection(self):
        """Test the empty shell left behind by a feature without content."""
        value = {
            "type": "Feature",
            "geometry": {"type": "GeometryCollection", "geometries": []},
        }
        assert prune_empty(value) == {
            "type": "Feature",
            "geometry": {"type": "GeometryCollection"},
        }

    def test_list_elements_never_removed(self):
        """Test that positions inside arrays are preserved."""
        value = {"coordinates": [[], [1, 2], {"a": []}]}
        assert prune_empty(value) == {"coordinates": [[], [1, 2], {}]}

    def test_features_kept(self):
        """Test that an empty FeatureCollection stays valid."""
        value = {"type": "FeatureCollection", "features": []}
        assert prune_empty(value) == value

    def test_custom_keep(self):
        """Test that the protected member names can be changed."""
        assert prune_empty({"features": [], "x": []}, keep=("x",)) == {"x": []}

    def test_scalars_and_falsy_values_kept(self):
        """Test that only empty containers count as empty."""
        value = {"a": 0, "b": False, "c": "", "d": None}
        assert prune_empty(value) == value

    def test_empty_geometry_loses_coordinates(self):
        """Test that geometry members get no special protection."""
        value = {"type": "LineString", "coordinates": []}
        assert prune_empty(value) == {"type": "LineString"}

    def test_input_not_mutated(self):
        """Test that a copy is returned."""
        value = {"a": {"b": []}}
        prune_empty(value)
        assert value == {"a": {"b": []}}
