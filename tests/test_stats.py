"""Descriptive statistics and the outlier classifier"""
import math

import pytest
from py_labeled import (
	Column, LabeledTable, MISSING, SummaryRecord,
	classify_outliers, describe, median, outlier_proportion, quantile, summarize,
)
from py_labeled.errors import DomainError


class TestQuantile:
	"""Linear interpolation between order statistics"""

	def test_median_odd(self):
		assert median([3, 1, 2]) == 2

	def test_median_even(self):
		assert median([4, 1, 3, 2]) == 2.5

	def test_interpolation(self):
		assert quantile([1, 2, 3, 4], 0.25) == pytest.approx(1.75)
		assert quantile([1, 2, 3, 4], 0.75) == pytest.approx(3.25)

	def test_extremes(self):
		values = [7, 3, 9, 1]
		assert quantile(values, 0) == 1
		assert quantile(values, 1) == 9

	def test_missing_excluded(self):
		assert median([1, MISSING, 3, None]) == 2

	def test_monotone(self):
		values = [27786, 9643, 2237, 61435, 7934, 120, 5]
		ps = [i / 20 for i in range(21)]
		qs = [quantile(values, p) for p in ps]
		assert qs == sorted(qs)

	@pytest.mark.parametrize("p", [-0.1, 1.5, "0.5", True])
	def test_bad_probability(self, p):
		with pytest.raises(DomainError):
			quantile([1, 2, 3], p)

	def test_empty(self):
		with pytest.raises(DomainError):
			quantile([], 0.5)

	def test_all_missing(self):
		with pytest.raises(DomainError):
			median([MISSING, None])

	def test_column_methods(self):
		c = Column([4, 1, 3, 2])
		assert c.median() == 2.5
		assert c.quantile(1) == 4


class TestSummarize:
	"""Per-column summaries"""

	def test_record(self, small):
		rec = summarize(small)["A"]
		assert isinstance(rec, SummaryRecord)
		assert rec.count == 3
		assert rec.mean == 15
		assert rec.std == pytest.approx(10.0)
		assert (rec.min, rec.q1, rec.median, rec.q3, rec.max) == (5, 10, 15, 20, 25)

	def test_missing_not_counted(self, measles):
		rec = measles.summarize()["Brazil"]
		assert rec.count == 2
		assert rec.median == pytest.approx(34684.5)
		assert rec.min == 7934

	def test_single_value_std(self):
		rec = summarize(LabeledTable({"v": [4]}))["v"]
		assert rec.std is MISSING
		assert rec.median == 4

	def test_text_columns_skipped(self):
		t = LabeledTable({"n": [1, 2], "s": ["a", "b"]})
		assert list(summarize(t)) == ["n"]

	def test_all_missing_column(self):
		t = LabeledTable({"v": [None, None]})
		with pytest.raises(DomainError, match="'v'"):
			summarize(t)

	def test_as_dict(self, small):
		d = summarize(small)["B"].as_dict()
		assert list(d) == ["count", "mean", "std", "min", "q1", "median", "q3", "max"]

	def test_describe(self, small):
		out = describe(small)
		assert out.row_labels() == ("count", "mean", "std", "min", "25%", "50%", "75%", "max")
		assert out.column_labels() == ("A", "B")
		assert out.get("count", "A") == 3
		assert out.get("50%", "A") == 15
		assert out.get("std", "B") == pytest.approx(1.0)

	def test_describe_method(self, measles):
		out = measles.describe()
		assert out.get("max", "United States") == 27786


class TestOutliers:
	"""Values above a multiple of the median"""

	def test_threshold_is_median(self):
		assert classify_outliers([5, 15, 25], 1.0).to_list() == [False, False, True]

	def test_strictly_greater(self):
		assert classify_outliers([10, 10, 10], 1.0).to_list() == [False, False, False]

	def test_multiplier(self):
		flags = classify_outliers([1, 2, 3, 100], 10)
		assert flags.to_list() == [False, False, False, True]

	def test_missing_never_outlier(self):
		flags = classify_outliers([5, MISSING, 15, 25], 1.0)
		assert flags.to_list() == [False, False, False, True]

	def test_labeled_column_is_row_mask(self, small):
		flags = classify_outliers(small.column("A"), 1.0)
		assert flags.labels == small.row_labels()
		assert small.get(flags).row_labels() == ("1992",)

	def test_all_missing(self):
		with pytest.raises(DomainError):
			classify_outliers([MISSING], 2.0)


class TestOutlierProportion:
	"""Explicit denominators"""

	def test_fraction(self):
		assert outlier_proportion([False, False, True], 3) == pytest.approx(1 / 3)

	def test_population_larger_than_mask(self):
		assert outlier_proportion([True], 4) == 0.25

	def test_column_mask(self):
		flags = classify_outliers([5, 15, 25, 35], 1.0)
		assert outlier_proportion(flags, len(flags)) == 0.5

	@pytest.mark.parametrize("denominator", [0, -1, math.nan, "3", None])
	def test_bad_denominator(self, denominator):
		with pytest.raises(DomainError):
			outlier_proportion([True], denominator)

	def test_denominator_below_hits(self):
		with pytest.raises(DomainError):
			outlier_proportion([True, True], 1)
