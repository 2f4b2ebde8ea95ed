"""
The Missing sentinel.

A single explicit absence-of-value marker. It is distinct from zero, equal
only to itself, has no truth value and supports no arithmetic, so reducers
and comparisons must each decide what to do with it.
"""

import math


class _MissingType:
	__slots__ = ()
	_instance = None

	def __new__(cls):
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	def __repr__(self):
		return "Missing"

	def __str__(self):
		return ""

	def __bool__(self):
		raise TypeError("Missing has no truth value; test with is_missing()")

	def __eq__(self, other):
		return other is self

	def __ne__(self, other):
		return other is not self

	def __hash__(self):
		return hash(_MissingType)

	def __reduce__(self):
		return (_MissingType, ())

	def __copy__(self):
		return self

	def __deepcopy__(self, memo):
		return self


MISSING = _MissingType()


def is_missing(value) -> bool:
	"""True for MISSING, None and float NaN."""
	if value is MISSING or value is None:
		return True
	return isinstance(value, float) and math.isnan(value)


def normalize(value):
	"""Map None / NaN onto MISSING, pass anything else through."""
	return MISSING if is_missing(value) else value
