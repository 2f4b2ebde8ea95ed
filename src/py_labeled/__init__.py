"""
py-labeled: a Pythonic, zero-dependency labeled table library

Built for comparing small tabular datasets, such as disease-incidence time
series across countries: read delimited text, address cells by position or
by label, transpose, mask, group and summarize.

Main classes:
    - LabeledTable: 2D table, labeled rows and columns, typed columns
    - Column: 1D typed vector with optional labels
    - BooleanGrid: same-shape boolean mask over a LabeledTable
    - MISSING: the explicit absence-of-value sentinel

Zero external dependencies - pure Python stdlib only.
"""

from .missing import MISSING, is_missing
from .typing import DataType
from .column import Column
from .table import LabeledTable
from .mask import BooleanGrid, apply_mask, filter_rows, mask
from .reducers import Reducer
from .aggregate import aggregate
from .stats import SummaryRecord, classify_outliers, describe, median, outlier_proportion, quantile, summarize
from .coercion import coerce_numeric, coerce_token
from .csv import read_csv
from .errors import (
	LabeledTableError,
	ShapeMismatchError,
	LabelLookupError,
	DomainError,
	ParseError,
	LabeledTableTypeError,
)


def transpose(table, on_mixed="widen"):
	return table.transpose(on_mixed=on_mixed)


__version__ = "0.1.0"
__all__ = [
	"LabeledTable",
	"Column",
	"BooleanGrid",
	"DataType",
	"MISSING",
	"is_missing",
	"Reducer",
	"read_csv",
	"coerce_numeric",
	"coerce_token",
	"transpose",
	"mask",
	"filter_rows",
	"apply_mask",
	"aggregate",
	"summarize",
	"describe",
	"quantile",
	"median",
	"classify_outliers",
	"outlier_proportion",
	"SummaryRecord",
	"LabeledTableError",
	"ShapeMismatchError",
	"LabelLookupError",
	"DomainError",
	"ParseError",
	"LabeledTableTypeError",
]
