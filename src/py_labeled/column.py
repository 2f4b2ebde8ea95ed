import operator

from .errors import LabeledTableTypeError
from .errors import ShapeMismatchError
from .indexer import Axis
from .indexer import check_distinct
from .indexer import default_labels
from .missing import MISSING
from .missing import is_missing
from .missing import normalize
from .typing import DataType
from .typing import infer_dtype
from .typing import validate_scalar


def _is_sequence(value):
	return (
		hasattr(value, "__iter__")
		and not isinstance(value, (str, bytes, bytearray))
	)


class Column():
	"""
	A homogeneously typed 1-D vector with an optional label per position.

	Columns taken out of a LabeledTable carry the table's row labels; row
	vectors carry the column labels. Values are stored in an immutable tuple
	and every write goes through `set`, which builds the new tuple before
	swapping it in (copy-on-write).

	Missing values are stored as MISSING. None and NaN are normalised to
	MISSING on the way in.
	"""
	_dtype = None
	_values = ()
	_name = None
	_axis = None

	def __init__(self, values=(), dtype=None, name=None, labels=None):
		values = tuple(normalize(v) for v in values)

		if dtype is not None and not isinstance(dtype, DataType):
			dtype = DataType(dtype)
		if dtype is None:
			dtype = infer_dtype(values)
		elif any(v is MISSING for v in values):
			dtype = dtype.with_nullable(True)

		try:
			values = tuple(validate_scalar(v, dtype) for v in values)
		except TypeError as e:
			raise LabeledTableTypeError(str(e)) from None

		self._dtype = dtype
		self._values = values
		self._name = name
		self._axis = None
		if labels is not None:
			self._axis = Axis(labels, "row")
			if len(self._axis) != len(values):
				raise ShapeMismatchError(
					f"Column has {len(values)} values but {len(self._axis)} labels"
				)

	@classmethod
	def _from_parts(cls, values, dtype, name=None, axis=None):
		""" Trusted constructor: values are already normalised and validated. """
		col = cls.__new__(cls)
		col._values = values
		col._dtype = dtype
		col._name = name
		col._axis = axis
		return col

	# ------------------------------------------------------------------
	# Metadata
	# ------------------------------------------------------------------
	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	@property
	def dtype(self):
		return self._dtype

	@property
	def name(self):
		return self._name

	def rename(self, new_name):
		self._name = new_name
		return self

	@property
	def has_labels(self):
		return self._axis is not None

	@property
	def labels(self):
		""" Position labels; '0', '1', ... when the column was built without labels """
		if self._axis is None:
			return default_labels(len(self._values))
		return self._axis.labels

	def _get_axis(self):
		if self._axis is None:
			return Axis(default_labels(len(self._values)), "row")
		return self._axis

	def copy(self, new_values=None, name=...):
		if name is ...:
			name = self._name
		if new_values is None:
			return Column._from_parts(self._values, self._dtype, name, self._axis)
		return Column(new_values, name=name)

	def __iter__(self):
		return iter(self._values)

	def __len__(self):
		return len(self._values)

	def __repr__(self):
		from .display import _printr
		return _printr(self)

	def to_list(self):
		return list(self._values)

	def to_dict(self):
		return dict(zip(self.labels, self._values))

	def equals(self, other):
		""" Value equality: same values (Missing equal to Missing) and same labels """
		if not isinstance(other, Column):
			return False
		return self._values == other._values and self.labels == other.labels

	# ------------------------------------------------------------------
	# Read / write
	# ------------------------------------------------------------------
	def get(self, key):
		"""
		Read by position, label, slice, list or boolean mask.

		A single int or label returns the bare value, anything else a Column.
		"""
		positions, single = self._get_axis().resolve(key)
		if single:
			return self._values[positions[0]]
		return self.take(positions)

	def __getitem__(self, key):
		return self.get(key)

	def take(self, positions):
		""" New Column with the values (and labels) at `positions` """
		values = tuple(self._values[p] for p in positions)
		axis = self._axis.take(positions) if self._axis is not None else None
		dtype = self._dtype.with_nullable(any(v is MISSING for v in values))
		return Column._from_parts(values, dtype, self._name, axis)

	def set(self, key, value):
		"""
		In-place assignment to the positions addressed by `key`.

		`value` is a scalar (broadcast) or a sequence with one value per
		addressed position.
		"""
		positions, _ = self._get_axis().resolve(key)
		if _is_sequence(value):
			value = list(value)
			if len(value) != len(positions):
				raise ShapeMismatchError(
					f"Assignment length mismatch: {len(value)} values for "
					f"{len(positions)} positions"
				)
		else:
			value = [value] * len(positions)
		updated = self._with_updates(positions, value)
		self._values = updated._values
		self._dtype = updated._dtype
		return self

	def _with_updates(self, positions, new_values):
		"""
		Return a new Column with new_values written at positions.

		Validates and promotes before building anything, so a failure leaves
		the original untouched.
		"""
		check_distinct(positions, self._axis.name if self._axis is not None else "row")
		new_values = [normalize(v) for v in new_values]
		dtype = self._dtype
		for v in new_values:
			try:
				validate_scalar(v, dtype)
			except TypeError:
				dtype = dtype.promote_with(v)

		if dtype is self._dtype:
			data = list(self._values)
		else:
			data = [validate_scalar(v, dtype) for v in self._values]

		for pos, v in zip(positions, new_values):
			data[pos] = validate_scalar(v, dtype)

		return Column._from_parts(tuple(data), dtype, self._name, self._axis)

	# ------------------------------------------------------------------
	# Missing values
	# ------------------------------------------------------------------
	def isna(self):
		return self._boolean(v is MISSING for v in self._values)

	def notna(self):
		return self._boolean(v is not MISSING for v in self._values)

	def fillna(self, value):
		""" New Column with MISSING replaced by value """
		if is_missing(value):
			return self.copy()
		positions = [i for i, v in enumerate(self._values) if v is MISSING]
		return self._with_updates(positions, [value] * len(positions))

	def dropna(self):
		return self.take([i for i, v in enumerate(self._values) if v is not MISSING])

	def unique(self):
		""" Distinct values in order of first appearance """
		seen = set()
		out = []
		for v in self._values:
			if v not in seen:
				seen.add(v)
				out.append(v)
		return Column(out, name=self._name)

	def map(self, func, skipna=True):
		""" Apply func to every value; Missing passes through unless skipna=False """
		return Column(
			(v if (skipna and v is MISSING) else func(v) for v in self._values),
			name=self._name,
			labels=self._axis.labels if self._axis is not None else None,
		)

	# ------------------------------------------------------------------
	# Comparison operators: boolean Columns, Missing compares False
	# ------------------------------------------------------------------
	def _boolean(self, flags):
		return Column._from_parts(tuple(flags), DataType(bool), self._name, self._axis)

	def _elementwise_compare(self, other, op):
		if isinstance(other, Column) or _is_sequence(other):
			other = list(other)
			if len(other) != len(self._values):
				raise ShapeMismatchError(
					f"Cannot compare Column of length {len(self._values)} with "
					f"sequence of length {len(other)}"
				)
			pairs = zip(self._values, other)
		else:
			pairs = ((v, other) for v in self._values)
		return self._boolean(
			False if (x is MISSING or is_missing(y)) else bool(op(x, y))
			for x, y in pairs
		)

	def __eq__(self, other):
		return self._elementwise_compare(other, operator.eq)

	def __ne__(self, other):
		return self._elementwise_compare(other, operator.ne)

	def __gt__(self, other):
		return self._elementwise_compare(other, operator.gt)

	def __ge__(self, other):
		return self._elementwise_compare(other, operator.ge)

	def __lt__(self, other):
		return self._elementwise_compare(other, operator.lt)

	def __le__(self, other):
		return self._elementwise_compare(other, operator.le)

	__hash__ = None

	def _logical(self, other, op):
		if self._dtype.kind is not bool:
			raise LabeledTableTypeError("Logical operators need a boolean Column")
		other = list(other)
		if len(other) != len(self._values):
			raise ShapeMismatchError("Boolean Columns must have the same length")
		return self._boolean(op(bool(x), bool(y)) for x, y in zip(self._values, other))

	def __and__(self, other):
		return self._logical(other, operator.and_)

	def __or__(self, other):
		return self._logical(other, operator.or_)

	def __xor__(self, other):
		return self._logical(other, operator.xor)

	def __invert__(self):
		if self._dtype.kind is not bool:
			raise LabeledTableTypeError("~ needs a boolean Column")
		return self._boolean(not x for x in self._values)

	# ------------------------------------------------------------------
	# Arithmetic: Missing propagates
	# ------------------------------------------------------------------
	def _elementwise_operation(self, other, op, op_symbol, reflected=False):
		if not self._dtype.is_numeric:
			raise LabeledTableTypeError(
				f"Unsupported operand for {op_symbol}: column<{self._dtype.kind.__name__}>"
			)
		if isinstance(other, Column) or _is_sequence(other):
			other = list(other)
			if len(other) != len(self._values):
				raise ShapeMismatchError(
					f"Operands have different lengths: {len(self._values)} and {len(other)}"
				)
		else:
			other = [other] * len(self._values)

		out = []
		for x, y in zip(self._values, other):
			if x is MISSING or is_missing(y):
				out.append(MISSING)
				continue
			try:
				out.append(op(y, x) if reflected else op(x, y))
			except ZeroDivisionError:
				out.append(MISSING)
		return Column(out, name=self._name,
			labels=self._axis.labels if self._axis is not None else None)

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add, '+')

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub, '-')

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul, '*')

	def __truediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, '/')

	def __radd__(self, other):
		return self._elementwise_operation(other, operator.add, '+', reflected=True)

	def __rsub__(self, other):
		return self._elementwise_operation(other, operator.sub, '-', reflected=True)

	def __rmul__(self, other):
		return self._elementwise_operation(other, operator.mul, '*', reflected=True)

	def __rtruediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, '/', reflected=True)

	def __neg__(self):
		return self._elementwise_operation(-1, operator.mul, '-')

	# ------------------------------------------------------------------
	# Reductions
	# ------------------------------------------------------------------
	def reduce(self, reducer, skipna=True):
		""" Apply a Reducer (or built-in reducer name, or callable) to this column """
		from .reducers import get_reducer
		return get_reducer(reducer).reduce_column(self, skipna=skipna)

	def sum(self, skipna=True):
		return self.reduce("sum", skipna)

	def mean(self, skipna=True):
		return self.reduce("mean", skipna)

	def std(self, skipna=True):
		""" Sample standard deviation (n - 1 denominator) """
		return self.reduce("std", skipna)

	def min(self, skipna=True):
		return self.reduce("min", skipna)

	def max(self, skipna=True):
		return self.reduce("max", skipna)

	def count(self):
		""" Number of non-missing values """
		return self.reduce("count")

	def median(self):
		from .stats import median
		return median(self)

	def quantile(self, p):
		from .stats import quantile
		return quantile(self, p)

	def any(self):
		return any(bool(v) for v in self._values if v is not MISSING)

	def all(self):
		return all(bool(v) for v in self._values if v is not MISSING)
