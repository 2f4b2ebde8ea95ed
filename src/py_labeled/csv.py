"""
Delimited-text ingestion.

The header row supplies the column labels and the first column supplies the
row labels. Every other column goes through numeric coercion; a column in
which no token parses as a number stays text.
"""

from __future__ import annotations
import csv
import io
import os

from .coercion import DEFAULT_THOUSANDS, NA_TOKENS, any_numeric, coerce_numeric
from .column import Column
from .errors import ParseError, ShapeMismatchError
from .missing import MISSING


def _open_text(source):
	"""Text for `source`: raw delimited text, a path-like object or a readable file."""
	if isinstance(source, os.PathLike):
		with open(source, newline="", encoding="utf-8") as fh:
			return fh.read()
	if hasattr(source, "read"):
		return source.read()
	if isinstance(source, bytes):
		return source.decode("utf-8")
	return source


def read_csv(source, delimiter=",", thousands=DEFAULT_THOUSANDS, strict=False,
		index_column=0, numeric=True, decimal=".", na_values=NA_TOKENS):
	"""
	Parse delimited text into a LabeledTable.

	Args:
		source: raw text, a path-like object (opened as UTF-8) or an open file
		delimiter: field separator
		thousands: thousands separator removed from numeric tokens
		strict: raise ParseError for malformed numeric tokens instead of
			reading them as Missing
		index_column: position of the row-label column, or None to label
			rows "0", "1", ...
		numeric: coerce columns to numbers; False keeps every column as text
		decimal: decimal mark
		na_values: tokens strict mode reads as Missing

	Returns:
		LabeledTable

	Raises:
		ShapeMismatchError: a data row has a different number of fields than
			the header
		ParseError: strict mode only, listing every offending cell
	"""
	from .table import LabeledTable

	reader = csv.reader(io.StringIO(_open_text(source)), delimiter=delimiter)
	records = [row for row in reader if row]
	if not records:
		return LabeledTable()

	header = [h.strip() for h in records[0]]
	body = records[1:]
	for line_no, row in enumerate(body, start=2):
		if len(row) != len(header):
			raise ShapeMismatchError(
				f"Line {line_no} has {len(row)} fields, header has {len(header)}"
			)

	if index_column is not None:
		index = [row[index_column].strip() for row in body]
		data_positions = [j for j in range(len(header)) if j != index_column]
	else:
		index = None
		data_positions = list(range(len(header)))

	row_labels = index if index is not None else list(range(len(body)))
	columns = []
	bad_cells = []
	for j in data_positions:
		label = header[j]
		tokens = [row[j] for row in body]
		if numeric and any_numeric(tokens, thousands, decimal):
			try:
				values = coerce_numeric(
					tokens, thousands, strict=strict, column=label,
					row_labels=row_labels, decimal=decimal, na_values=na_values,
				)
			except ParseError as e:
				bad_cells.extend(e.cells)
				continue
		else:
			values = [MISSING if t.strip() == "" else t.strip() for t in tokens]
		columns.append(Column(values, name=label))

	if bad_cells:
		raise ParseError(bad_cells)

	return LabeledTable(columns, index=index)
