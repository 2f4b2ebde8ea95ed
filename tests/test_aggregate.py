"""Group-by aggregation"""
import pytest
from py_labeled import Column, LabeledTable, MISSING, Reducer, aggregate
from py_labeled.errors import LabeledTableTypeError, ShapeMismatchError
from py_labeled.reducers import get_reducer


@pytest.fixture
def outbreaks():
	return LabeledTable(
		{
			"region": ["north", "south", "north", "south"],
			"year": ["1990", "1990", "1991", "1991"],
			"cases": [10, 20, 30, MISSING],
		},
		index=["a", "b", "c", "d"],
	)


class TestAggregate:
	"""One row per distinct key"""

	def test_group_mean(self, small):
		out = aggregate(small, ["g1", "g1", "g2"], "mean")
		assert out.row_labels() == ("g1", "g2")
		assert out.get("g1", "A") == 10
		assert out.get("g2", "A") == 25
		assert out.get("g1", "B") == 1.5

	def test_first_appearance_order(self, small):
		out = small.aggregate(["b", "a", "b"], "sum")
		assert out.row_labels() == ("b", "a")
		assert out.column("A").to_list() == [30, 15]

	def test_row_count_is_distinct_keys(self, small):
		keys = ["x", "y", "x"]
		assert aggregate(small, keys).row_count() == len(set(keys))

	def test_single_row_group(self, small):
		out = aggregate(small, ["x", "y", "y"], "sum")
		assert out.get("x", "A") == 5

	def test_column_key_sequence(self, small):
		keys = Column(["lo", "hi", "hi"])
		out = aggregate(small, keys, "max")
		assert out.column("A").to_list() == [5, 25]

	def test_key_column_label(self, outbreaks):
		out = outbreaks.aggregate("region", "sum", columns=["cases"])
		assert out.row_labels() == ("north", "south")
		assert out.column("cases").to_list() == [40, 20]

	def test_key_column_consumed(self, outbreaks):
		out = outbreaks.aggregate("region", "first")
		assert out.column_labels() == ("year", "cases")

	def test_composite_labels(self, outbreaks):
		out = outbreaks.aggregate(["region", "year"], "sum")
		assert out.row_labels() == ("north|1990", "south|1990", "north|1991", "south|1991")
		assert out.column_labels() == ("cases",)

	def test_composite_columns(self, outbreaks):
		keys = [outbreaks.column("region"), outbreaks.column("year")]
		out = aggregate(outbreaks, keys, "count", columns=["cases"], sep="/")
		assert out.row_labels()[0] == "north/1990"

	def test_missing_key(self, small):
		out = aggregate(small, ["a", None, "a"], "sum")
		assert out.row_labels() == ("a", "Missing")

	def test_custom_reducer(self, small):
		out = aggregate(small, ["g", "g", "g"], lambda values: max(values) - min(values))
		assert out.get("g", "A") == 20

	def test_input_unchanged(self, small):
		before = small.copy()
		aggregate(small, ["g1", "g1", "g2"], "mean")
		assert small.equals(before)


class TestMissingPolicy:
	"""What each reducer does with Missing"""

	@pytest.fixture
	def sparse(self):
		return LabeledTable({"v": [MISSING, MISSING, 3, MISSING]})

	def test_all_missing_group_mean(self, sparse):
		out = aggregate(sparse, ["a", "a", "b", "b"], "mean")
		assert out.get("a", "v") is MISSING
		assert out.get("b", "v") == 3

	def test_all_missing_group_sum(self, sparse):
		out = aggregate(sparse, ["a", "a", "b", "b"], "sum")
		assert out.get("a", "v") is MISSING

	def test_all_missing_group_count(self, sparse):
		out = aggregate(sparse, ["a", "a", "b", "b"], "count")
		assert out.column("v").to_list() == [0, 1]

	def test_skipna_false_propagates(self, sparse):
		out = aggregate(sparse, ["a", "a", "b", "b"], "sum", skipna=False)
		assert out.get("b", "v") is MISSING

	def test_count_ignores_skipna(self, sparse):
		out = aggregate(sparse, ["a", "a", "b", "b"], "count", skipna=False)
		assert out.column("v").to_list() == [0, 1]


class TestAggregateErrors:
	"""Bad keys and reducers"""

	def test_key_length(self, small):
		with pytest.raises(ShapeMismatchError):
			aggregate(small, ["g1", "g2"])

	def test_short_single_key(self, small):
		with pytest.raises(ShapeMismatchError):
			aggregate(small, ["g1"])

	def test_unhashable_key(self, small):
		with pytest.raises(LabeledTableTypeError):
			aggregate(small, [{1}, {2}, {3}])

	def test_unknown_reducer(self, small):
		with pytest.raises(LabeledTableTypeError, match="Unknown reducer"):
			aggregate(small, ["a", "a", "b"], "mode")

	def test_numeric_reducer_on_text(self, outbreaks):
		with pytest.raises(LabeledTableTypeError, match="numeric"):
			outbreaks.aggregate(["x"] * 4, "mean", columns=["region"])


class TestReducer:
	"""Reducer objects and lookup"""

	def test_builtin_lookup(self):
		assert get_reducer("MEAN").name == "mean"

	def test_reducer_passthrough(self):
		r = Reducer("total", sum, empty=0)
		assert get_reducer(r) is r
		assert r([MISSING, MISSING]) == 0
		assert r([1, MISSING, 2]) == 3

	def test_func_never_sees_missing(self):
		seen = []
		r = Reducer("spy", lambda values: seen.extend(values) or len(values))
		r([1, MISSING, 2])
		assert seen == [1, 2]

	def test_bad_reducer(self):
		with pytest.raises(LabeledTableTypeError):
			get_reducer(42)


class TestColumnLabelKeys:
	"""Column labels as keys, whatever the row count"""

	@pytest.fixture
	def two_rows(self):
		return LabeledTable({"region": ["n", "n"], "year": ["1990", "1990"], "v": [1, 2]})

	def test_label_list_as_long_as_table(self, two_rows):
		out = two_rows.aggregate(["region", "year"], "first")
		assert out.row_labels() == ("n|1990",)
		assert out.column_labels() == ("v",)
		assert out.get("n|1990", "v") == 1

	def test_by_keyword(self, two_rows):
		out = two_rows.aggregate(reducer="sum", by=["region", "year"])
		assert out.row_labels() == ("n|1990",)
		assert out.get(0, "v") == 3

	def test_by_single_label(self, two_rows):
		out = aggregate(two_rows, reducer="first", by="year")
		assert out.row_labels() == ("1990",)
		assert out.column_labels() == ("region", "v")

	def test_literal_keys_through_column(self, two_rows):
		out = two_rows.aggregate(Column(["region", "year"]), "sum", columns=["v"])
		assert out.row_labels() == ("region", "year")

	def test_keys_and_by_together(self, two_rows):
		with pytest.raises(LabeledTableTypeError):
			two_rows.aggregate(["a", "b"], "sum", by="region")

	def test_no_keys(self, two_rows):
		with pytest.raises(LabeledTableTypeError):
			two_rows.aggregate(reducer="sum")

	def test_by_takes_labels_only(self, two_rows):
		with pytest.raises(LabeledTableTypeError):
			two_rows.aggregate(reducer="sum", by=[["a", "b"]])


class TestLabelCollisions:
	"""Distinct keys whose labels render alike"""

	def test_int_and_text_key(self, small):
		with pytest.warns(UserWarning, match="same row label"):
			out = aggregate(small, [1, "1", 1], "sum")
		assert out.row_labels() == ("1", "1__2")
		assert out.column("A").to_list() == [30, 15]

	def test_composite_parts_containing_sep(self):
		t = LabeledTable({"a": ["x|y", "x"], "b": ["z", "y|z"], "v": [1, 2]})
		with pytest.warns(UserWarning, match="same row label"):
			out = t.aggregate(by=["a", "b"])
		assert out.row_labels() == ("x|y|z", "x|y|z__2")
		assert out.row_count() == 2

	def test_missing_next_to_text_missing(self, small):
		with pytest.warns(UserWarning):
			out = aggregate(small, ["Missing", None, "Missing"], "sum")
		assert out.row_labels() == ("Missing", "Missing__2")
