"""Display and repr logic for Column and LabeledTable."""

from __future__ import annotations
from typing import List

from .missing import MISSING


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

_NUMERIC = ('bool', 'int', 'float')


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _preview(seq, max_preview=None):
	if max_preview is None:
		max_preview = MAX_HEAD_ROWS
	seq = list(seq)
	if len(seq) > max_preview * 2:
		return seq[:max_preview] + ['...'] + seq[-max_preview:]
	return seq


def _format_value(v, kind) -> str:
	if v is MISSING:
		return "Missing"
	if isinstance(v, str) and v == '...':
		return v
	if kind is float and isinstance(v, float):
		return f"{v:.1f}" if v.is_integer() else f"{v:g}"
	if kind is str:
		return repr(v)
	return str(v)


def _format_column(col, max_preview=None) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	kind = col._dtype.kind if col._dtype else object
	return [_format_value(v, kind) for v in _preview(col._values, max_preview)]


def _dtype_name(col) -> str:
	return col._dtype.kind.__name__ if col._dtype else "object"


def _align(strings, width, dtype_name):
	if dtype_name in _NUMERIC:
		return [s.rjust(width) for s in strings]
	return [s.ljust(width) for s in strings]


def _header_rows(display_names, sanitized_names):
	"""Decide which header rows to show based on display vs sanitized names."""
	any_mismatch = any(
		disp and san and disp != san and san != "..."
		for disp, san in zip(display_names, sanitized_names)
	)

	rows = [[
		"..." if name == "..." else (repr(name) if _needs_quoting(name) else name)
		for name in display_names
	]]

	# Second row: attribute names, only when they differ from the labels
	if any_mismatch:
		rows.append([("." + san) if san and san != "..." else san for san in sanitized_names])

	return rows


def _footer(obj, dtype_list=None, truncated=False, shown=MAX_HEAD_COLS) -> str:
	"""Generate footer line based on shape and dtypes."""
	from .column import Column

	if isinstance(obj, Column):
		return f"# {len(obj)} element column <{_dtype_name(obj)}>"

	rows, cols = obj.shape
	if not dtype_list:
		return f"# {rows}×{cols} table"
	if truncated:
		d = ", ".join(dtype_list[:shown]) + ", ..., " + ", ".join(dtype_list[-shown:])
	else:
		d = ", ".join(dtype_list)
	return f"# {rows}×{cols} table <{d}>"


def _repr_column(col) -> str:
	"""Pretty repr for a Column: labels on the left, values on the right."""
	formatted = _format_column(col)
	labels = _preview(col.labels) if col.has_labels else []

	header_text = ""
	if col._name:
		header_text = repr(col._name) if _needs_quoting(col._name) else col._name

	width = max([len(s) for s in formatted] + [len(header_text)]) if formatted else len(header_text)
	formatted = _align(formatted, width, _dtype_name(col))
	label_width = max((len(s) for s in labels), default=0)

	lines = []
	if header_text:
		pad = " " * (label_width + 2) if labels else ""
		lines.append(pad + _align([header_text], width, _dtype_name(col))[0])
	for i, s in enumerate(formatted):
		if labels:
			lines.append(labels[i].ljust(label_width) + "  " + s)
		else:
			lines.append(s)

	lines.append("")
	lines.append(_footer(col))
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a LabeledTable, row labels in the first column."""
	from .naming import _sanitize_user_name, _uniquify

	labels = tbl.column_labels()
	num_cols = len(labels)

	if num_cols == 0:
		return f"# {tbl.row_count()}×0 table"

	truncated = num_cols > MAX_HEAD_COLS * 2
	if truncated:
		col_indices = list(range(MAX_HEAD_COLS)) + list(range(num_cols - MAX_HEAD_COLS, num_cols))
	else:
		col_indices = list(range(num_cols))

	cols = tbl._columns
	disp = [labels[i] for i in col_indices]
	san = []
	seen = set()
	for i in col_indices:
		base = _sanitize_user_name(labels[i])
		if base is None:
			san.append(f"col{i}_")
		else:
			name = _uniquify(base, seen)
			seen.add(name)
			san.append(name)
	dtypes_displayed = [_dtype_name(cols[i]) for i in col_indices]
	dtypes_all = [_dtype_name(c) for c in cols]

	formatted_cols = [_format_column(cols[i]) for i in col_indices]
	row_labels = _preview(tbl.row_labels())

	if truncated:
		formatted_cols.insert(MAX_HEAD_COLS, ["..." for _ in range(len(row_labels))])
		disp.insert(MAX_HEAD_COLS, "...")
		san.insert(MAX_HEAD_COLS, "...")
		dtypes_displayed.insert(MAX_HEAD_COLS, "...")

	header_rows = _header_rows(disp, san)

	# Pad columns and headers to consistent widths
	aligned_cols = []
	aligned_headers = [[] for _ in header_rows]
	for c, body in enumerate(formatted_cols):
		width = max([len(s) for s in body] + [len(h[c]) for h in header_rows])
		aligned_cols.append(_align(body, width, dtypes_displayed[c]))
		for r, hrow in enumerate(header_rows):
			aligned_headers[r].append(_align([hrow[c]], width, dtypes_displayed[c])[0])

	label_width = max((len(s) for s in row_labels), default=0)
	lines = []
	for hrow in aligned_headers:
		lines.append(" " * label_width + "  " + "  ".join(hrow))
	for r, label in enumerate(row_labels):
		lines.append(label.ljust(label_width) + "  " + "  ".join(col[r] for col in aligned_cols))

	lines.append("")
	lines.append(_footer(tbl, dtypes_all, truncated, MAX_HEAD_COLS))
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by Column.__repr__ and LabeledTable.__repr__."""
	from .column import Column
	if isinstance(obj, Column):
		return _repr_column(obj)
	return _repr_table(obj)
