class LabeledTableError(Exception):
	"""Base exception for py-labeled."""
	pass


class ShapeMismatchError(LabeledTableError, ValueError):
	"""Raised for incompatible lengths in construction, relabeling or assignment."""
	pass


class LabelLookupError(LabeledTableError, LookupError):
	"""Raised when a label is absent or a position is out of bounds on an axis."""

	def __init__(self, axis, selector, message=None):
		self.axis = axis
		self.selector = selector
		if message is None:
			message = f"{selector!r} not found on {axis} axis"
		super().__init__(message)


class DomainError(LabeledTableError, ValueError):
	"""Raised for statistics requested outside their mathematical domain."""
	pass


class ParseError(LabeledTableError, ValueError):
	"""Raised by strict numeric coercion; `cells` holds (row, column, token) triples."""

	def __init__(self, cells):
		self.cells = list(cells)
		shown = ", ".join(
			f"row {row!r}, column {column!r}: {token!r}"
			for row, column, token in self.cells[:10]
		)
		more = f" (+{len(self.cells) - 10} more)" if len(self.cells) > 10 else ""
		super().__init__(f"Could not parse {len(self.cells)} numeric token(s): {shown}{more}")


class LabeledTableTypeError(LabeledTableError, TypeError):
	"""Raised for invalid types in API calls."""
	pass
