"""
DataType system for Column / LabeledTable.

Pure metadata design:
  - DataType describes column semantics (kind + nullable flag)
  - Missing values live in the column storage as the MISSING sentinel
  - Promotion is functional (immutable DataType instances)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Type
import warnings

from .missing import is_missing


NUMERIC_KINDS = (bool, int, float)


@dataclass(frozen=True)
class DataType:
	"""
	Describes the semantic type of a Column.

	Attributes
	----------
	kind : Type
		One of bool, int, float, str or object
	nullable : bool
		Whether the column may contain MISSING

	Notes
	-----
	- Promotion never mutates, it always returns a new DataType
	- Numeric ladder is bool -> int -> float; every other mix is object

	Examples
	--------
	>>> DataType(int)
	<int>
	>>> DataType(int).promote_with(MISSING)
	<int nullable>
	>>> DataType(int).promote_with(2.5)
	<float>
	"""

	kind: Type[Any]
	nullable: bool = False

	def __repr__(self):
		if self.nullable:
			return f"<{self.kind.__name__} nullable>"
		return f"<{self.kind.__name__}>"

	@property
	def is_numeric(self) -> bool:
		"""True if kind is bool, int or float."""
		return self.kind in NUMERIC_KINDS

	@property
	def is_text(self) -> bool:
		return self.kind is str

	def with_nullable(self, nullable=True) -> "DataType":
		if nullable == self.nullable:
			return self
		return DataType(self.kind, nullable)

	def promote_with(self, value: Any, warn=True) -> "DataType":
		"""
		Promote this DataType to accommodate a new Python value.

		Parameters
		----------
		value : Any
			Scalar to accommodate
		warn : bool
			Emit a UserWarning when the column degrades to object

		Returns
		-------
		DataType
			New (possibly promoted) DataType
		"""
		# Missing just lifts nullability
		if is_missing(value):
			return self.with_nullable(True)

		kind = infer_kind(value)
		if kind is self.kind:
			return self

		# Numeric ladder (bool -> int -> float)
		if self.is_numeric and kind in NUMERIC_KINDS:
			if self.kind is float or kind is float:
				new_kind = float
			elif self.kind is int or kind is int:
				new_kind = int
			else:
				new_kind = bool
			if new_kind is not self.kind:
				return DataType(new_kind, self.nullable)
			return self

		if self.kind is not object:
			if warn:
				warnings.warn(
					f"Widening column<{self.kind.__name__}> to column<object> "
					f"due to incompatible value of type {type(value).__name__}",
					stacklevel=4,
				)
			return DataType(object, self.nullable)

		return self


def infer_kind(value: Any) -> Optional[Type]:
	"""
	Infer the column kind for a single scalar.

	Returns None for missing values.
	"""
	if is_missing(value):
		return None
	# bool BEFORE int (bool is subclass of int)
	if isinstance(value, bool):
		return bool
	if isinstance(value, int):
		return int
	if isinstance(value, float):
		return float
	if isinstance(value, str):
		return str
	return object


def infer_dtype(values: Iterable[Any]) -> DataType:
	"""
	Infer a DataType from an iterable of scalars.

	Examples
	--------
	>>> infer_dtype([1, 2, 3])
	<int>
	>>> infer_dtype([1, 2.5, MISSING])
	<float nullable>
	>>> infer_dtype(["a", 1])
	<object>
	"""
	dtype: Optional[DataType] = None
	nullable = False

	for v in values:
		if is_missing(v):
			nullable = True
			continue
		if dtype is None:
			dtype = DataType(infer_kind(v))
		else:
			dtype = dtype.promote_with(v, warn=False)

	# All values were missing, or the iterable was empty
	if dtype is None:
		return DataType(float, nullable=nullable)

	return dtype.with_nullable(nullable)


def validate_scalar(value: Any, dtype: DataType) -> Any:
	"""
	Coerce a scalar before writing it into a column of `dtype`.

	Raises
	------
	TypeError
		If value cannot be stored without promoting the column
	"""
	if is_missing(value):
		if not dtype.nullable:
			raise TypeError(
				f"Cannot store Missing in non-nullable {dtype.kind.__name__} column"
			)
		return value

	kind = infer_kind(value)
	if kind is dtype.kind or dtype.kind is object:
		return value

	if dtype.kind is float and kind in (int, bool):
		return float(value)
	if dtype.kind is int and kind is bool:
		return int(value)

	raise TypeError(
		f"Incompatible value {value!r} for column<{dtype.kind.__name__}>"
	)
