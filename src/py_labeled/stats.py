"""
Descriptive statistics and the median-multiple outlier classifier.

Conventions:

- Standard deviation is the sample standard deviation (n - 1 denominator),
  Missing when fewer than two values are present.
- Quantiles interpolate linearly between order statistics
  (h = (n - 1) * p, Hyndman & Fan type 7), so quantile(v, 0.5) of an even
  number of values is the midpoint of the two middle values.
- Missing values are excluded everywhere and never counted.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any

from .column import Column
from .errors import DomainError
from .missing import MISSING, is_missing
from .reducers import COUNT, MAX, MEAN, MIN, STD, interpolate_quantile


QUARTILES = (0.25, 0.5, 0.75)


@dataclass(frozen=True)
class SummaryRecord:
	"""Per-column summary: count of non-missing values, moments, five-number summary."""
	count: int
	mean: Any
	std: Any
	min: Any
	q1: Any
	median: Any
	q3: Any
	max: Any

	def as_dict(self):
		return asdict(self)


def _clean_sorted(values):
	return sorted(v for v in values if not is_missing(v))


def quantile(values, p):
	"""
	Interpolated order statistic of the non-missing values.

	Raises:
		DomainError: p outside [0, 1], or no non-missing values
	"""
	if isinstance(p, bool) or not isinstance(p, (int, float)) or not 0 <= p <= 1:
		raise DomainError(f"Quantile probability must be in [0, 1], got {p!r}")
	data = _clean_sorted(values)
	if not data:
		raise DomainError("Quantile of an empty (or all-Missing) sequence is undefined")
	return interpolate_quantile(data, p)


def median(values):
	return quantile(values, 0.5)


def summarize_column(values, label=None) -> SummaryRecord:
	data = _clean_sorted(values)
	if not data:
		raise DomainError(f"Cannot summarize column {label!r}: no non-missing values")
	q1, q2, q3 = (interpolate_quantile(data, p) for p in QUARTILES)
	return SummaryRecord(
		count=COUNT(data),
		mean=MEAN(data),
		std=STD(data),
		min=MIN(data),
		q1=q1,
		median=q2,
		q3=q3,
		max=MAX(data),
	)


def summarize(table) -> dict:
	"""
	SummaryRecord for every numeric column of `table`, keyed by column label.

	Text and object columns are skipped. An all-Missing numeric column raises
	DomainError naming the column.
	"""
	out = {}
	for label in table.column_labels():
		col = table.column(label)
		if not col.dtype.is_numeric:
			continue
		out[label] = summarize_column(col, label)
	return out


DESCRIBE_ROWS = ("count", "mean", "std", "min", "25%", "50%", "75%", "max")


def describe(table):
	""" Summary statistics as a LabeledTable: one row per statistic, one column per numeric column """
	from .table import LabeledTable

	records = summarize(table)
	columns = []
	for label, rec in records.items():
		columns.append(Column(
			(rec.count, rec.mean, rec.std, rec.min, rec.q1, rec.median, rec.q3, rec.max),
			name=label,
		))
	return LabeledTable(columns, index=DESCRIBE_ROWS)


def classify_outliers(values, median_multiplier):
	"""
	Flag values strictly greater than median * median_multiplier.

	Missing values are never outliers. When `values` is a labeled Column the
	result keeps its labels, so it can be used directly as a row mask.

	Returns:
		boolean Column, same length as values
	"""
	threshold = median(values) * median_multiplier
	if isinstance(values, Column):
		return values > threshold
	return Column(
		(False if is_missing(v) else v > threshold for v in values),
		dtype=bool,
	)


def outlier_proportion(mask, denominator):
	"""
	Fraction of True entries in `mask` over an explicit population size.

	The denominator is the caller's total population (for example the number
	of rows before any filtering), not necessarily len(mask).

	Raises:
		DomainError: denominator not positive, or smaller than the number of
			True entries
	"""
	if isinstance(denominator, bool) or not isinstance(denominator, (int, float)) or not denominator > 0:
		raise DomainError(f"Denominator must be a positive number, got {denominator!r}")
	hits = sum(1 for flag in mask if flag is not MISSING and flag)
	if hits > denominator:
		raise DomainError(
			f"{hits} outliers cannot be a fraction of a population of {denominator}"
		)
	return hits / denominator
