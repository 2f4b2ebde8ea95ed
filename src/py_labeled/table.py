"""
LabeledTable: equal-length Columns labeled along both axes.

Reads go through `get`, writes through `set`; both take one selector per
axis and resolve it against that axis's labels. Stored columns are
copy-on-write tuples, so a write builds every new column before swapping
any in.
"""

import csv
import io
import operator
import warnings

from .column import Column
from .column import _is_sequence
from .errors import LabeledTableTypeError, ShapeMismatchError
from .indexer import Axis
from .indexer import check_distinct
from .indexer import default_labels
from .missing import MISSING
from .naming import build_attribute_map
from .typing import DataType, infer_dtype, validate_scalar


class _RowView:
	"""Lightweight row view for iterating over table rows with attribute access."""
	__slots__ = ('_cols', '_attr_map', '_labels', '_index')

	def __init__(self, table, index):
		# Cache direct handles to the value tuples (bypasses Column method dispatch)
		self._cols = [col._values for col in table._columns]
		self._attr_map = table._attr_map
		self._labels = table._rows.labels
		self._index = index

	def set_index(self, index):
		"""Reuse this row view for a different index (avoids allocation during iteration)."""
		self._index = index
		return self

	@property
	def label(self):
		return self._labels[self._index]

	def __getattr__(self, attr):
		"""Access column values by sanitized attribute name."""
		col_idx = self._attr_map.get(attr.lower())
		if col_idx is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self._cols[col_idx][self._index]

	def __getitem__(self, key):
		"""Access column values by position (fast path) or by attribute name."""
		try:
			return self._cols[key][self._index]
		except TypeError:
			if isinstance(key, str):
				return getattr(self, key)
			raise TypeError(f"Row indices must be int or str, not {type(key).__name__}")

	def __iter__(self):
		idx = self._index
		for col in self._cols:
			yield col[idx]

	def __len__(self):
		return len(self._cols)

	def __repr__(self):
		idx = self._index
		values = [repr(col[idx]) for col in self._cols]
		return f"Row({self.label!r}: {', '.join(values)})"


class LabeledTable():
	"""
	Columns of the same length, labeled along both axes.

	Built from a mapping {label: values} or from a sequence of Columns. Row
	labels come from `index`, else from the first column's labels, else
	"0", "1", ... Labels are strings and unique per axis; rows and columns
	may share label text.
	"""

	def __init__(self, data=None, index=None, columns=None):
		if data is None:
			data = []
		if isinstance(data, dict):
			items = list(data.items())
		else:
			items = []
			for i, col in enumerate(data):
				if not isinstance(col, Column):
					raise LabeledTableTypeError(
						"LabeledTable needs a mapping of label -> values or a sequence of Columns, "
						f"got {type(col).__name__} at position {i}"
					)
				items.append((col.name if col.name is not None else str(i), col))

		source = []
		for label, values in items:
			if not isinstance(values, Column):
				values = Column(values, name=label)
			source.append((label, values))

		if columns is not None:
			columns = list(columns)
			if len(columns) != len(source):
				raise ShapeMismatchError(
					f"{len(columns)} column labels given for {len(source)} columns"
				)
		else:
			columns = [label for label, _ in source]

		lengths = {len(col) for _, col in source}
		if len(lengths) > 1:
			detail = ", ".join(f"{label!r}: {len(col)}" for label, col in source)
			raise ShapeMismatchError(f"All columns must have the same length ({detail})")

		if index is not None:
			row_axis = Axis(index, "row")
		elif source and source[0][1].has_labels:
			row_axis = source[0][1]._axis
		else:
			row_axis = Axis(default_labels(lengths.pop() if lengths else 0), "row")

		if source and len(row_axis) != len(source[0][1]):
			raise ShapeMismatchError(
				f"{len(row_axis)} row labels given for columns of length {len(source[0][1])}"
			)
		if index is None:
			for label, col in source:
				if col.has_labels and col.labels != row_axis.labels:
					raise ShapeMismatchError(f"Column {label!r} is not aligned with the row labels")

		self._cols = Axis(columns, "column")
		self._rows = Axis(row_axis.labels, "row")
		self._columns = [
			Column._from_parts(col._values, col._dtype, label)
			for label, (_, col) in zip(self._cols.labels, source)
		]
		self._attr_map = build_attribute_map(self._cols.labels)

	@classmethod
	def _from_columns(cls, columns, row_labels, column_labels):
		""" Trusted constructor: stored Columns without labels, already aligned """
		table = cls.__new__(cls)
		table._rows = Axis(row_labels, "row")
		table._cols = Axis(column_labels, "column")
		table._columns = [
			Column._from_parts(col._values, col._dtype, label)
			for label, col in zip(table._cols.labels, columns)
		]
		table._attr_map = build_attribute_map(table._cols.labels)
		return table

	# ------------------------------------------------------------------
	# Shape queries
	# ------------------------------------------------------------------
	def row_count(self):
		return len(self._rows)

	def column_count(self):
		return len(self._cols)

	def row_labels(self):
		return self._rows.labels

	def column_labels(self):
		return self._cols.labels

	@property
	def shape(self):
		return (len(self._rows), len(self._cols))

	def __len__(self):
		return len(self._rows)

	def __contains__(self, label):
		return label in self._cols

	def dtypes(self):
		return {label: col.dtype for label, col in zip(self._cols.labels, self._columns)}

	# ------------------------------------------------------------------
	# Relabeling
	# ------------------------------------------------------------------
	def relabel_rows(self, labels):
		"""Replace all row labels (modifies in place, returns self for chaining)"""
		self._rows = self._rows.relabel(labels)
		return self

	def relabel_columns(self, labels):
		"""Replace all column labels (modifies in place, returns self for chaining)"""
		self._cols = self._cols.relabel(labels)
		for col, label in zip(self._columns, self._cols.labels):
			col._name = label
		# Rebuild attribute map to reflect new labels
		self._attr_map = build_attribute_map(self._cols.labels)
		return self

	def rename_column(self, old_label, new_label):
		"""Rename one column (modifies in place, returns self for chaining)"""
		pos = self._cols.position(old_label)
		labels = list(self._cols.labels)
		labels[pos] = new_label
		return self.relabel_columns(labels)

	def rename_columns(self, mapping):
		"""
		Atomically rename several columns from a {old: new} mapping.

		If any old label is missing nothing is renamed.
		"""
		labels = list(self._cols.labels)
		for old, new in mapping.items():
			labels[self._cols.position(old)] = new
		return self.relabel_columns(labels)

	# ------------------------------------------------------------------
	# Column / row access
	# ------------------------------------------------------------------
	def _column_view(self, pos):
		col = self._columns[pos]
		return Column._from_parts(col._values, col._dtype, self._cols.labels[pos], self._rows)

	def column(self, label):
		""" One column as a Column labeled by row """
		if not isinstance(label, str):
			raise LabeledTableTypeError(f"Column labels are strings, not {type(label).__name__}")
		return self._column_view(self._cols.position(label))

	def _row_vector(self, row_pos, col_positions):
		values = tuple(self._columns[j]._values[row_pos] for j in col_positions)
		dtype = infer_dtype(values)
		values = tuple(validate_scalar(v, dtype) for v in values)
		axis = Axis([self._cols.labels[j] for j in col_positions], "column")
		return Column._from_parts(values, dtype, self._rows.labels[row_pos], axis)

	def row(self, key):
		""" One row as a Column labeled by column; `key` is a row label or position """
		positions, single = self._rows.resolve(key)
		if not single:
			raise LabeledTableTypeError("row() takes a single row label or position")
		return self._row_vector(positions[0], range(len(self._cols)))

	def __dir__(self):
		"""Return list of available attributes including sanitized column labels."""
		base_attrs = object.__dir__(self)
		return sorted(set(base_attrs + list(self._attr_map.keys())))

	def __getattr__(self, attr):
		"""Access columns by sanitized attribute name."""
		if attr.startswith('_'):
			raise AttributeError(attr)
		col_idx = self._attr_map.get(attr.lower())
		if col_idx is not None:
			return self._column_view(col_idx)
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	# ------------------------------------------------------------------
	# Dual indexer: explicit get / set
	# ------------------------------------------------------------------
	def get(self, rows=None, columns=None):
		"""
		Read cells by row and column selectors.

		Each selector may be a position, a label, a slice (of positions, or of
		labels, inclusive), a list of positions/labels/bools, a boolean Column
		or None for the whole axis.

		Returns:
			- the bare value when both selectors are single (int or label)
			- a Column when exactly one selector is single
			- a new LabeledTable otherwise
		"""
		row_pos, row_single = self._rows.resolve(rows)
		col_pos, col_single = self._cols.resolve(columns)

		if row_single and col_single:
			return self._columns[col_pos[0]]._values[row_pos[0]]
		if col_single:
			return self._column_view(col_pos[0]).take(row_pos)
		if row_single:
			return self._row_vector(row_pos[0], col_pos)
		return self._take(row_pos, col_pos)

	def _take(self, row_pos, col_pos):
		return LabeledTable._from_columns(
			[self._columns[j].take(row_pos) for j in col_pos],
			[self._rows.labels[i] for i in row_pos],
			[self._cols.labels[j] for j in col_pos],
		)

	def set(self, rows, columns, value):
		"""
		In-place assignment to the cells addressed by the selectors.

		`value` may be:
			- a scalar, broadcast to every addressed cell
			- a flat sequence, one value per position along the varying axis
			- a nested sequence (or LabeledTable) of n_rows × n_cols values

		Every column is validated and rebuilt before any is swapped in, so a
		failing assignment leaves the table untouched. Shape and labels never
		change. A selector that addresses the same row or column twice
		raises ShapeMismatchError.
		"""
		row_pos, row_single = self._rows.resolve(rows)
		col_pos, col_single = self._cols.resolve(columns)
		check_distinct(row_pos, "row")
		check_distinct(col_pos, "column")
		by_column = self._broadcast(value, row_pos, col_pos, row_single, col_single)

		staged = [
			(j, self._columns[j]._with_updates(row_pos, values))
			for j, values in zip(col_pos, by_column)
		]
		for j, new_col in staged:
			self._columns[j] = new_col
		return self

	@staticmethod
	def _broadcast(value, row_pos, col_pos, row_single, col_single):
		""" Shape `value` into one list of new values per addressed column """
		nr, nc = len(row_pos), len(col_pos)

		if isinstance(value, LabeledTable):
			value = value.to_rows()
		if not _is_sequence(value):
			return [[value] * nr for _ in range(nc)]

		value = list(value)
		if row_single and col_single:
			raise ShapeMismatchError("Cannot assign a sequence to a single cell")

		if value and all(_is_sequence(v) for v in value):
			rows = [list(r) for r in value]
			if len(rows) != nr or any(len(r) != nc for r in rows):
				raise ShapeMismatchError(
					f"Assignment length mismatch: expected {nr}×{nc} values"
				)
			return [[rows[i][k] for i in range(nr)] for k in range(nc)]

		if col_single or (not row_single and nc == 1):
			if len(value) != nr:
				raise ShapeMismatchError(
					f"Assignment length mismatch: {len(value)} values for {nr} rows"
				)
			return [value]
		if row_single or nr == 1:
			if len(value) != nc:
				raise ShapeMismatchError(
					f"Assignment length mismatch: {len(value)} values for {nc} columns"
				)
			return [[v] for v in value]
		raise ShapeMismatchError(
			f"Assignment length mismatch: a flat sequence cannot fill a {nr}×{nc} region"
		)

	# ------------------------------------------------------------------
	# Transpose
	# ------------------------------------------------------------------
	@property
	def T(self):
		return self.transpose()

	def transpose(self, on_mixed="widen"):
		"""
		Swap rows and columns: the value at (r, c) moves to (c, r).

		Column types are recomputed. When the source columns are all numeric
		(or all of one kind) each new column is inferred from its values. A
		table mixing numeric and text columns cannot give homogeneously typed
		rows, so with on_mixed="widen" every new column becomes <object> and a
		UserWarning is emitted; on_mixed="raise" raises ShapeMismatchError
		instead. Values never change kind (ints sharing a row with floats are
		stored as equal floats), so transposing twice gives back the same
		labels and equal values.
		"""
		if on_mixed not in ("widen", "raise"):
			raise LabeledTableTypeError(f"on_mixed must be 'widen' or 'raise', not {on_mixed!r}")

		dtypes = [col.dtype for col in self._columns]
		homogeneous = (
			all(d.is_numeric for d in dtypes)
			or len({d.kind for d in dtypes}) <= 1
		)
		if not homogeneous:
			kinds = sorted({d.kind.__name__ for d in dtypes})
			if on_mixed == "raise":
				raise ShapeMismatchError(
					f"Cannot transpose columns of mixed types {kinds} into typed columns"
				)
			warnings.warn(
				f"Transposing columns of mixed types {kinds}: every resulting column is <object>",
				stacklevel=2,
			)

		new_columns = []
		for i in range(len(self._rows)):
			values = tuple(col._values[i] for col in self._columns)
			if homogeneous:
				dtype = infer_dtype(values)
				values = tuple(validate_scalar(v, dtype) for v in values)
			else:
				dtype = DataType(object, any(v is MISSING for v in values))
			new_columns.append(Column._from_parts(values, dtype))

		return LabeledTable._from_columns(new_columns, self._cols.labels, self._rows.labels)

	# ------------------------------------------------------------------
	# Masks
	# ------------------------------------------------------------------
	def mask(self, predicate):
		from .mask import mask
		return mask(self, predicate)

	def filter_rows(self, column, predicate, columns=None):
		from .mask import filter_rows
		return filter_rows(self, column, predicate, columns)

	def apply_mask(self, grid, replacement):
		from .mask import apply_mask
		return apply_mask(self, grid, replacement)

	def _compare(self, other, op):
		return self.mask(lambda v: op(v, other))

	def __gt__(self, other):
		return self._compare(other, operator.gt)

	def __ge__(self, other):
		return self._compare(other, operator.ge)

	def __lt__(self, other):
		return self._compare(other, operator.lt)

	def __le__(self, other):
		return self._compare(other, operator.le)

	# ------------------------------------------------------------------
	# Aggregation and statistics
	# ------------------------------------------------------------------
	def aggregate(self, group_keys=None, reducer="sum", skipna=True, columns=None, sep="|", by=None):
		from .aggregate import aggregate
		return aggregate(self, group_keys, reducer, skipna=skipna, columns=columns, sep=sep, by=by)

	def summarize(self):
		from .stats import summarize
		return summarize(self)

	def describe(self):
		from .stats import describe
		return describe(self)

	# ------------------------------------------------------------------
	# Conveniences
	# ------------------------------------------------------------------
	def copy(self):
		return LabeledTable._from_columns(self._columns, self._rows.labels, self._cols.labels)

	def head(self, n=5):
		return self._take(list(range(min(n, len(self._rows)))), list(range(len(self._cols))))

	def tail(self, n=5):
		nrows = len(self._rows)
		return self._take(list(range(max(0, nrows - n), nrows)), list(range(len(self._cols))))

	def dropna(self, how="any"):
		""" Drop rows holding Missing in any (or, with how="all", every) column """
		if how not in ("any", "all"):
			raise LabeledTableTypeError(f"how must be 'any' or 'all', not {how!r}")
		test = any if how == "any" else all
		keep = [
			i for i in range(len(self._rows))
			if not (self._columns and test(col._values[i] is MISSING for col in self._columns))
		]
		return self._take(keep, list(range(len(self._cols))))

	def fillna(self, value):
		""" Copy with every Missing replaced by value """
		return LabeledTable._from_columns(
			[col.fillna(value) for col in self._columns], self._rows.labels, self._cols.labels
		)

	def sort_by(self, label, reverse=False):
		""" Copy with rows ordered by one column; Missing values always sort last """
		values = self.column(label)._values
		present = [i for i, v in enumerate(values) if v is not MISSING]
		absent = [i for i, v in enumerate(values) if v is MISSING]
		present.sort(key=lambda i: values[i], reverse=reverse)
		return self._take(present + absent, list(range(len(self._cols))))

	def equals(self, other):
		""" Same labels in the same order and the same values """
		if not isinstance(other, LabeledTable):
			return False
		return (
			self._rows == other._rows
			and self._cols == other._cols
			and all(a._values == b._values for a, b in zip(self._columns, other._columns))
		)

	def to_dict(self):
		return {label: list(col._values) for label, col in zip(self._cols.labels, self._columns)}

	def to_rows(self):
		return [[col._values[i] for col in self._columns] for i in range(len(self._rows))]

	def to_csv(self, delimiter=",", index_label="", thousands=None):
		"""
		Render as delimited text: header row, then one line per row with the
		row label first. Missing renders as an empty field.
		"""
		def fmt(v):
			if v is MISSING:
				return ""
			if thousands and isinstance(v, (int, float)) and not isinstance(v, bool):
				return f"{v:,}".replace(",", thousands)
			return str(v)

		buf = io.StringIO()
		writer = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
		writer.writerow([index_label, *self._cols.labels])
		for i, label in enumerate(self._rows.labels):
			writer.writerow([label, *(fmt(col._values[i]) for col in self._columns)])
		return buf.getvalue()

	def __iter__(self):
		"""Iterate over rows using a reusable _RowView for memory efficiency."""
		row_view = _RowView(self, 0)
		for i in range(len(self._rows)):
			row_view.set_index(i)
			yield row_view

	def __repr__(self):
		from .display import _printr
		return _printr(self)
