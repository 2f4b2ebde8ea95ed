"""In-place writes through set()"""
import pytest
from py_labeled import LabeledTable, MISSING
from py_labeled.errors import LabelLookupError, ShapeMismatchError


class TestScalarAssignment:
	"""Scalars broadcast to every addressed cell"""

	def test_single_cell(self, measles):
		measles.set("1991", "Brazil", 100)
		assert measles.get("1991", "Brazil") == 100

	def test_returns_self(self, measles):
		assert measles.set(0, 0, 1) is measles

	def test_whole_column(self, measles):
		measles.set(None, "Brazil", 0)
		assert measles.column("Brazil").to_list() == [0, 0, 0]

	def test_whole_row(self, measles):
		measles.set("1990", None, 1)
		assert measles.row("1990").to_list() == [1, 1]

	def test_region(self, measles):
		measles.set(slice("1991", "1992"), ["United States", "Brazil"], 0)
		assert measles.to_rows() == [[27786, 61435], [0, 0], [0, 0]]

	def test_boolean_row_mask(self, measles):
		measles.set(measles.column("United States") > 5000, "Brazil", -1)
		assert measles.column("Brazil").to_list() == [-1, -1, 7934]

	def test_write_missing(self, measles):
		measles.set(0, "United States", MISSING)
		assert measles.get(0, "United States") is MISSING
		assert measles.dtypes()["United States"].nullable

	def test_none_is_missing(self, measles):
		measles.set(0, "United States", None)
		assert measles.get(0, "United States") is MISSING

	def test_float_promotes_column(self, measles):
		measles.set(0, "Brazil", 0.5)
		assert measles.dtypes()["Brazil"].kind is float
		assert measles.dtypes()["United States"].kind is int

	def test_text_widens_with_warning(self, measles):
		with pytest.warns(UserWarning, match="Widening"):
			measles.set(0, "Brazil", "unknown")
		assert measles.dtypes()["Brazil"].kind is object
		assert measles.get(0, "Brazil") == "unknown"


class TestSequenceAssignment:
	"""Flat and nested sequences"""

	def test_flat_along_rows(self, measles):
		measles.set(None, "Brazil", [1, 2, 3])
		assert measles.column("Brazil").to_list() == [1, 2, 3]

	def test_flat_along_columns(self, measles):
		measles.set("1991", None, [10, 20])
		assert measles.row("1991").to_list() == [10, 20]

	def test_nested(self, measles):
		measles.set([0, 1], None, [[1, 2], [3, 4]])
		assert measles.to_rows() == [[1, 2], [3, 4], [2237, 7934]]

	def test_table_value(self, measles):
		other = LabeledTable({"x": [1, 3], "y": [2, 4]})
		measles.set(slice(1, None), None, other)
		assert measles.to_rows() == [[27786, 61435], [1, 2], [3, 4]]

	def test_shape_and_labels_unchanged(self, measles):
		measles.set(None, None, [[0, 0], [0, 0], [0, 0]])
		assert measles.shape == (3, 2)
		assert measles.row_labels() == ("1990", "1991", "1992")


class TestFailedAssignment:
	"""A failing write leaves the table untouched"""

	def test_length_mismatch(self, measles):
		before = measles.copy()
		with pytest.raises(ShapeMismatchError, match="length mismatch"):
			measles.set(None, "Brazil", [1, 2])
		assert measles.equals(before)

	def test_nested_shape_mismatch(self, measles):
		before = measles.copy()
		with pytest.raises(ShapeMismatchError):
			measles.set(None, None, [[1, 2], [3, 4]])
		assert measles.equals(before)

	def test_flat_into_region(self, measles):
		with pytest.raises(ShapeMismatchError):
			measles.set(None, None, [1, 2, 3])

	def test_sequence_into_cell(self, measles):
		with pytest.raises(ShapeMismatchError):
			measles.set(0, 0, [1, 2])

	def test_unknown_label(self, measles):
		before = measles.copy()
		with pytest.raises(LabelLookupError):
			measles.set(["1990", "2000"], "Brazil", 0)
		assert measles.equals(before)

	def test_out_of_range(self, measles):
		with pytest.raises(LabelLookupError):
			measles.set(3, "Brazil", 0)

	def test_repeated_row(self, small):
		with pytest.raises(ShapeMismatchError, match="more than once"):
			small.set([0, 0], "A", [100, 200])
		assert small.column("A").to_list() == [5, 15, 25]

	def test_repeated_column(self, measles):
		before = measles.copy()
		with pytest.raises(ShapeMismatchError, match="more than once"):
			measles.set(0, ["Brazil", "Brazil"], [1, 2])
		assert measles.equals(before)


class TestColumnIndependence:
	"""Writes never leak between tables sharing storage"""

	def test_view_then_write(self, measles):
		col = measles.column("Brazil")
		measles.set(0, "Brazil", 1)
		assert col.get(0) == 61435

	def test_subtable_then_write(self, measles):
		sub = measles.get(slice(0, 2))
		sub.set(0, 0, 1)
		assert measles.get(0, 0) == 27786
