"""
Reducers: functions that collapse the values of one column (or one group
within a column) into a single scalar.

Every Reducer states its Missing policy explicitly:

- `func` only ever sees non-missing values
- `empty` is returned when nothing is left after dropping Missing; it is
  MISSING unless the reducer has a natural identity (count -> 0)
- with skipna=False a single Missing in the input propagates to the result,
  except for reducers whose answer is about missingness itself (count)
"""

from __future__ import annotations
from dataclasses import dataclass
from math import floor
from typing import Any, Callable

from .errors import LabeledTableTypeError
from .missing import MISSING, is_missing


@dataclass(frozen=True)
class Reducer:
	"""
	A named reduction with an explicit Missing-handling policy.

	Attributes
	----------
	name : str
		Used in error messages and as the default label of describe rows
	func : Callable[[list], Any]
		Receives the non-missing values, never an empty list
	empty : Any
		Result when no non-missing value remains
	numeric : bool
		Refuse to run over text / object columns
	propagates : bool
		Whether skipna=False turns any Missing into a Missing result
	"""

	name: str
	func: Callable[[list], Any]
	empty: Any = MISSING
	numeric: bool = True
	propagates: bool = True

	def __call__(self, values, skipna=True):
		values = list(values)
		if not skipna and self.propagates and any(is_missing(v) for v in values):
			return MISSING
		clean = [v for v in values if not is_missing(v)]
		if not clean:
			return self.empty
		return self.func(clean)

	def check_column(self, column, label=None):
		if self.numeric and not column.dtype.is_numeric:
			raise LabeledTableTypeError(
				f"Reducer '{self.name}' needs a numeric column; "
				f"column {label if label is not None else column.name!r} "
				f"is <{column.dtype.kind.__name__}>"
			)

	def reduce_column(self, column, skipna=True):
		self.check_column(column)
		return self(column, skipna=skipna)


def interpolate_quantile(sorted_values, p):
	"""
	Linear interpolation between order statistics.

	h = (n - 1) * p; result = x[floor(h)] + (h - floor(h)) * (x[floor(h) + 1] - x[floor(h)])
	`sorted_values` must be non-empty and sorted ascending; p in [0, 1].
	"""
	n = len(sorted_values)
	h = (n - 1) * p
	lo = floor(h)
	hi = min(lo + 1, n - 1)
	frac = h - lo
	if frac == 0:
		return sorted_values[lo]
	return sorted_values[lo] + frac * (sorted_values[hi] - sorted_values[lo])


def _mean(values):
	return sum(values) / len(values)


def _sample_std(values):
	n = len(values)
	if n < 2:
		return MISSING
	m = sum(values) / n
	return (sum((x - m) * (x - m) for x in values) / (n - 1)) ** 0.5


def _median(values):
	return interpolate_quantile(sorted(values), 0.5)


SUM = Reducer("sum", sum)
MEAN = Reducer("mean", _mean)
COUNT = Reducer("count", len, empty=0, numeric=False, propagates=False)
MIN = Reducer("min", min, numeric=False)
MAX = Reducer("max", max, numeric=False)
STD = Reducer("std", _sample_std)
MEDIAN = Reducer("median", _median)
FIRST = Reducer("first", lambda values: values[0], numeric=False)
LAST = Reducer("last", lambda values: values[-1], numeric=False)

BUILTIN_REDUCERS = {
	r.name: r for r in (SUM, MEAN, COUNT, MIN, MAX, STD, MEDIAN, FIRST, LAST)
}


def get_reducer(reducer) -> Reducer:
	"""
	Normalise a reducer given as an object, a name or a callable.

	Accepts a Reducer, the name of a built-in reducer, or a callable taking
	the list of non-missing values (wrapped with Missing as the empty result).
	"""
	if isinstance(reducer, Reducer):
		return reducer
	if isinstance(reducer, str):
		try:
			return BUILTIN_REDUCERS[reducer.lower()]
		except KeyError:
			raise LabeledTableTypeError(
				f"Unknown reducer '{reducer}'. Expected one of {sorted(BUILTIN_REDUCERS)}"
			) from None
	if callable(reducer):
		return Reducer(getattr(reducer, "__name__", "custom"), reducer, numeric=False)
	raise LabeledTableTypeError(
		f"A reducer must be a Reducer, a name or a callable, not {type(reducer).__name__}"
	)
