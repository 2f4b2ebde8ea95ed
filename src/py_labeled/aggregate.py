"""
Group-by aggregation over a LabeledTable.
"""

import warnings

from .column import Column
from .errors import LabeledTableTypeError, ShapeMismatchError
from .missing import MISSING, normalize
from .naming import _uniquify
from .reducers import get_reducer


def _key_label(key, sep):
	def one(value):
		return "Missing" if value is MISSING else str(value)
	if isinstance(key, tuple):
		return sep.join(one(v) for v in key)
	return one(key)


def _row_labels(keys, sep):
	"""
	One row label per distinct key.

	Distinct keys can render to the same text (1 and "1", or composite parts
	containing `sep`); later ones get a __2, __3, ... suffix and a
	UserWarning names them.
	"""
	labels = []
	seen = set()
	renamed = []
	for key in keys:
		base = _key_label(key, sep)
		label = _uniquify(base, seen)
		if label != base:
			renamed.append(f"{key!r} -> {label!r}")
		seen.add(label)
		labels.append(label)
	if renamed:
		warnings.warn(
			"Distinct group keys render to the same row label; relabeled "
			+ ", ".join(renamed),
			stacklevel=3,
		)
	return labels


def _is_label_list(table, group_keys):
	""" A list/tuple naming only columns of `table` """
	return (
		isinstance(group_keys, (list, tuple)) and len(group_keys) > 0
		and all(isinstance(g, str) and g in table for g in group_keys)
	)


def _normalize_keys(table, group_keys, by):
	"""
	Returns (key_columns, consumed_labels).

	`by` names key columns of `table`. In `group_keys` a str is a column
	label; a Column or any other non-string sequence is one key per row. A
	list whose members are all column labels, Columns or lists is a
	composite key. A list of strings is read as column labels whenever every
	one of them names a column, whatever its length; pass literal keys that
	collide with column labels as a Column.
	"""
	def one(part):
		if isinstance(part, str):
			return list(table.column(part)), part
		if isinstance(part, Column):
			return part.to_list(), None
		return [normalize(v) for v in part], None

	def is_part(part):
		return (
			isinstance(part, (Column, list, range))
			or (isinstance(part, str) and part in table)
		)

	if by is not None:
		if group_keys is not None:
			raise LabeledTableTypeError("Pass group keys either positionally or with by=, not both")
		parts = [by] if isinstance(by, str) else list(by)
		for part in parts:
			if not isinstance(part, str):
				raise LabeledTableTypeError(f"by= takes column labels, not {type(part).__name__}")
	elif group_keys is None:
		raise LabeledTableTypeError("aggregate needs group keys or by=")
	elif isinstance(group_keys, (str, Column)):
		parts = [group_keys]
	elif _is_label_list(table, group_keys):
		parts = list(group_keys)
	elif (isinstance(group_keys, (list, tuple)) and group_keys
			and all(is_part(g) for g in group_keys)
			and not all(isinstance(g, str) for g in group_keys)):
		parts = list(group_keys)
	else:
		parts = [group_keys]

	key_columns = []
	consumed = []
	for part in parts:
		values, label = one(part)
		key_columns.append(values)
		if label is not None:
			consumed.append(label)
	return key_columns, consumed


def aggregate(table, group_keys=None, reducer="sum", skipna=True, columns=None, sep="|", by=None):
	"""
	Group rows by key and reduce every column within each group.

	Args:
		table: LabeledTable to aggregate (never modified)
		group_keys: one key per row; a sequence, a Column, a column label,
			or a list of those for a composite key
		reducer: Reducer, built-in reducer name or callable over the
			non-missing values of one group
		skipna: ignore Missing (True) or let it propagate (False)
		columns: labels of the columns to reduce (default: all columns not
			used as a key)
		sep: joins the parts of a composite key into one row label
		by: column label, or list of labels, to group by instead of
			group_keys

	Returns:
		LabeledTable with one row per distinct key, in order of first
		appearance, labeled by the key

	Examples:
		# Mean incidence per decade
		aggregate(t, [y[:3] + "0s" for y in t.row_labels()], "mean")

		# Sum over (region, year) pairs
		aggregate(t, reducer="sum", by=["region", "year"])
	"""
	from .table import LabeledTable

	reducer = get_reducer(reducer)
	key_columns, consumed = _normalize_keys(table, group_keys, by)

	nrows = table.row_count()
	for i, keys in enumerate(key_columns):
		if len(keys) != nrows:
			raise ShapeMismatchError(
				f"Group key at index {i} has length {len(keys)}, "
				f"but table has {nrows} rows."
			)

	# ------------------------------------------------------------------
	# Partition index: key -> row positions, dict keeps first appearance order
	# ------------------------------------------------------------------
	partition_index = {}
	composite = len(key_columns) > 1
	for row_idx in range(nrows):
		if composite:
			key = tuple(keys[row_idx] for keys in key_columns)
		else:
			key = key_columns[0][row_idx]
		try:
			bucket = partition_index.get(key)
		except TypeError:
			raise LabeledTableTypeError(f"Group key {key!r} at row {row_idx} is not hashable") from None
		if bucket is None:
			partition_index[key] = [row_idx]
		else:
			bucket.append(row_idx)

	group_items = list(partition_index.items())

	# ------------------------------------------------------------------
	# Column-major reduction
	# ------------------------------------------------------------------
	if columns is None:
		labels = [label for label in table.column_labels() if label not in consumed]
	else:
		labels = [columns] if isinstance(columns, str) else list(columns)

	result_cols = []
	for label in labels:
		col = table.column(label)
		reducer.check_column(col, label)
		data = col._values
		out = [reducer([data[i] for i in rows], skipna=skipna) for _, rows in group_items]
		result_cols.append(Column(out, name=label))

	index = _row_labels([key for key, _ in group_items], sep)
	return LabeledTable(result_cols, index=index, columns=labels)
