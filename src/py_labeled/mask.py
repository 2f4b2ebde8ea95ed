"""
Boolean masks over tables: build them from a predicate, read through them,
and write through them.

A BooleanGrid remembers the row and column labels of the table it was built
from. Every use re-validates those labels against the target table, so a
grid from one table can never be silently applied to a differently shaped
or reordered one.
"""

from __future__ import annotations
import operator
import re

from .column import Column
from .errors import LabelLookupError, LabeledTableTypeError, ShapeMismatchError
from .indexer import Axis
from .missing import is_missing
from .typing import DataType


_OPERATORS = {
	">": operator.gt,
	">=": operator.ge,
	"<": operator.lt,
	"<=": operator.le,
	"==": operator.eq,
	"!=": operator.ne,
}

_PREDICATE_RE = re.compile(r"^\s*(>=|<=|==|!=|>|<)\s*(.+?)\s*$")


def _parse_literal(text):
	if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
		return text[1:-1]
	try:
		return int(text)
	except ValueError:
		pass
	try:
		return float(text)
	except ValueError:
		raise LabeledTableTypeError(
			f"Cannot read {text!r} as a number; quote text literals"
		) from None


def as_predicate(predicate):
	"""
	Turn a predicate into a callable.

	Accepts a callable, or a comparison string such as "> 10", "<= 0.5" or
	"== 'Brazil'".
	"""
	if callable(predicate):
		return predicate
	if isinstance(predicate, str):
		match = _PREDICATE_RE.match(predicate)
		if match is None:
			raise LabeledTableTypeError(f"Cannot parse predicate {predicate!r}")
		op = _OPERATORS[match.group(1)]
		literal = _parse_literal(match.group(2))
		return lambda value: op(value, literal)
	raise LabeledTableTypeError(
		f"A predicate must be a callable or a comparison string, not {type(predicate).__name__}"
	)


def _evaluate(func, value, row=None, column=None):
	# Missing never satisfies a predicate; the result is always a plain bool
	if is_missing(value):
		return False
	try:
		return bool(func(value))
	except TypeError as e:
		raise LabeledTableTypeError(
			f"Predicate cannot be applied to {value!r} at row {row!r}, column {column!r}: {e}"
		) from None


class BooleanGrid:
	""" Same-shape boolean grid aligned to a table's row/column labels """
	__slots__ = ('_rows', '_row_labels', '_column_labels')

	def __init__(self, rows, row_labels, column_labels):
		rows = tuple(tuple(bool(flag) for flag in row) for row in rows)
		row_labels = tuple(row_labels)
		column_labels = tuple(column_labels)
		if len(rows) != len(row_labels) or any(len(r) != len(column_labels) for r in rows):
			raise ShapeMismatchError(
				f"Grid shape does not match {len(row_labels)}×{len(column_labels)} labels"
			)
		self._rows = rows
		self._row_labels = row_labels
		self._column_labels = column_labels

	@property
	def shape(self):
		return (len(self._row_labels), len(self._column_labels))

	@property
	def row_labels(self):
		return self._row_labels

	@property
	def column_labels(self):
		return self._column_labels

	def __iter__(self):
		return iter(self._rows)

	def __len__(self):
		return len(self._rows)

	def __repr__(self):
		lines = [" ".join("T" if f else "F" for f in row) for row in self._rows]
		return "\n".join(lines + ["", f"# {self.shape[0]}×{self.shape[1]} boolean grid"])

	def to_list(self):
		return [list(row) for row in self._rows]

	def count(self):
		return sum(sum(row) for row in self._rows)

	def column(self, label):
		""" One column of the grid as a boolean Column labeled by row """
		try:
			j = self._column_labels.index(label)
		except ValueError:
			raise LabelLookupError("column", label) from None
		return Column._from_parts(
			tuple(row[j] for row in self._rows), DataType(bool), label,
			_row_axis(self._row_labels),
		)

	def row_any(self):
		""" Boolean row mask: True where any cell in the row is True """
		return Column._from_parts(
			tuple(any(row) for row in self._rows), DataType(bool), None,
			_row_axis(self._row_labels),
		)

	def row_all(self):
		return Column._from_parts(
			tuple(all(row) for row in self._rows), DataType(bool), None,
			_row_axis(self._row_labels),
		)

	def check_aligned(self, table):
		if (self._row_labels != table.row_labels()
				or self._column_labels != table.column_labels()):
			raise ShapeMismatchError(
				f"Mask built for a {self.shape[0]}×{self.shape[1]} table with different "
				f"labels cannot be applied to this {table.shape[0]}×{table.shape[1]} table"
			)

	def _combine(self, other, op):
		if not isinstance(other, BooleanGrid):
			return NotImplemented
		if (self._row_labels, self._column_labels) != (other._row_labels, other._column_labels):
			raise ShapeMismatchError("Cannot combine grids with different labels")
		return BooleanGrid(
			(tuple(op(a, b) for a, b in zip(r1, r2)) for r1, r2 in zip(self._rows, other._rows)),
			self._row_labels, self._column_labels,
		)

	def __and__(self, other):
		return self._combine(other, operator.and_)

	def __or__(self, other):
		return self._combine(other, operator.or_)

	def __invert__(self):
		return BooleanGrid(
			(tuple(not f for f in row) for row in self._rows),
			self._row_labels, self._column_labels,
		)


def _row_axis(labels):
	return Axis(labels, "row")


def mask(table, predicate):
	"""
	Apply a scalar predicate to every cell of `table`.

	Missing cells are False. Returns a BooleanGrid aligned to the table.
	The predicate must accept every column's values: a comparison that
	fails on a cell (such as "> 10" against text) raises
	LabeledTableTypeError naming the cell; mask a numeric subset with
	`table.get(None, labels).mask(...)` instead.
	"""
	func = as_predicate(predicate)
	row_labels = table.row_labels()
	flags_by_column = [
		[_evaluate(func, v, row_labels[i], label) for i, v in enumerate(table._columns[j]._values)]
		for j, label in enumerate(table.column_labels())
	]
	rows = [tuple(flags[i] for flags in flags_by_column) for i in range(table.row_count())]
	return BooleanGrid(rows, row_labels, table.column_labels())


def column_mask(column, predicate):
	""" Boolean Column: predicate applied to each value of one column """
	func = as_predicate(predicate)
	labels = column.labels
	return column._boolean(
		_evaluate(func, v, labels[i], column.name) for i, v in enumerate(column)
	)


def filter_rows(table, column, predicate, columns=None):
	"""
	Rows of `table` where `predicate` holds for the value in `column`.

	Row order is preserved. `columns` optionally restricts (and orders) the
	returned columns; the result is always a LabeledTable.
	"""
	flags = column_mask(table.column(column), predicate)
	if isinstance(columns, str):
		columns = [columns]
	return table.get(flags, columns)


def apply_mask(table, grid, replacement):
	"""
	Write `replacement` into every cell of `table` where the mask is True.

	`grid` is a BooleanGrid built from this table (same labels) or a boolean
	row Column, which addresses whole rows. Shape and labels never change,
	and the assignment is staged before any column is swapped in, so it is
	all-or-nothing. Applying the same mask twice is the same as applying it
	once.
	"""
	if isinstance(grid, Column):
		positions, _ = table._rows.resolve(grid)
		flags = set(positions)
		grid = BooleanGrid(
			((i in flags,) * table.column_count() for i in range(table.row_count())),
			table.row_labels(), table.column_labels(),
		)
	elif not isinstance(grid, BooleanGrid):
		raise LabeledTableTypeError(
			f"apply_mask needs a BooleanGrid or a boolean Column, not {type(grid).__name__}"
		)
	grid.check_aligned(table)

	staged = []
	for j, col in enumerate(table._columns):
		positions = [i for i, row in enumerate(grid) if row[j]]
		if positions:
			staged.append((j, col._with_updates(positions, [replacement] * len(positions))))
	for j, new_col in staged:
		table._columns[j] = new_col
	return table
