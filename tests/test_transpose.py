"""Transpose: (r, c) moves to (c, r)"""
import pytest
from py_labeled import LabeledTable, MISSING, transpose
from py_labeled.errors import LabeledTableTypeError, ShapeMismatchError


class TestNumericTranspose:
	"""Homogeneous numeric tables"""

	def test_shape_and_labels(self, measles):
		t = measles.T
		assert t.shape == (2, 3)
		assert t.row_labels() == ("United States", "Brazil")
		assert t.column_labels() == ("1990", "1991", "1992")

	def test_cells_move(self, measles):
		t = measles.T
		for r in measles.row_labels():
			for c in measles.column_labels():
				cell = measles.get(r, c)
				moved = t.get(c, r)
				assert moved is cell or moved == cell

	def test_round_trip(self, measles):
		assert measles.T.T.equals(measles)

	def test_missing_survives(self, measles):
		assert measles.T.get("Brazil", "1991") is MISSING
		assert measles.T.column("1991").dtype.nullable

	def test_types_recomputed(self):
		t = LabeledTable({"a": [1, 2], "b": [0.5, 1.5]})
		flipped = t.T
		assert flipped.column("0").dtype.kind is float
		assert flipped.get("a", "0") == 1.0

	def test_function_form(self, measles):
		assert transpose(measles).equals(measles.T)

	def test_source_unchanged(self, measles):
		before = measles.copy()
		measles.T.set(0, 0, 0)
		assert measles.equals(before)

	def test_empty(self):
		assert LabeledTable().T.shape == (0, 0)


class TestMixedTranspose:
	"""Tables mixing numeric and text columns"""

	@pytest.fixture
	def mixed(self):
		return LabeledTable(
			{"cases": [12, 40], "region": ["north", "south"]},
			index=["Peru", "Chile"],
		)

	def test_widens_with_warning(self, mixed):
		with pytest.warns(UserWarning, match="mixed types"):
			t = mixed.T
		assert all(d.kind is object for d in t.dtypes().values())
		assert t.get("region", "Chile") == "south"
		assert t.get("cases", "Peru") == 12

	def test_round_trip_restores_types(self, mixed):
		with pytest.warns(UserWarning):
			back = mixed.T.T
		assert back.equals(mixed)
		assert back.dtypes()["cases"].kind is int
		assert back.dtypes()["region"].kind is str

	def test_raise_policy(self, mixed):
		with pytest.raises(ShapeMismatchError, match="mixed types"):
			mixed.transpose(on_mixed="raise")

	def test_unknown_policy(self, mixed):
		with pytest.raises(LabeledTableTypeError):
			mixed.transpose(on_mixed="coerce")
