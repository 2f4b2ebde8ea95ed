"""
Selector resolution along one axis of a Column or LabeledTable.

An Axis owns the ordered labels of one dimension plus a label -> position
map, rebuilt whenever the labels change. `Axis.resolve` turns any supported
selector into a list of positions:

	int              single position (negative counts from the end)
	str              single label
	slice of int     position range
	slice of str     inclusive label range
	list of int      position set
	list of str      label set
	list of bool     mask (also a boolean Column)
	None, slice(None) the whole axis

Unknown labels and out-of-range positions raise LabelLookupError naming the
axis; nothing is silently truncated.
"""

from __future__ import annotations

from .errors import LabelLookupError, LabeledTableTypeError, ShapeMismatchError
from .typeutils import is_full_slice


def _check_labels(labels, axis_name) -> tuple:
	labels = tuple(label if isinstance(label, str) else str(label) for label in labels)
	if len(set(labels)) != len(labels):
		seen = set()
		dupes = [label for label in labels if label in seen or seen.add(label)]
		raise ShapeMismatchError(f"Duplicate {axis_name} labels: {sorted(set(dupes))!r}")
	return labels


class Axis:
	""" Ordered, unique labels of one dimension """
	__slots__ = ('name', '_labels', '_positions')

	def __init__(self, labels, name):
		self.name = name
		self._labels = _check_labels(labels, name)
		self._positions = {label: pos for pos, label in enumerate(self._labels)}

	@property
	def labels(self):
		return self._labels

	def __len__(self):
		return len(self._labels)

	def __contains__(self, label):
		return label in self._positions

	def __eq__(self, other):
		if isinstance(other, Axis):
			return self._labels == other._labels
		return NotImplemented

	__hash__ = None

	def relabel(self, labels) -> "Axis":
		labels = tuple(labels)
		if len(labels) != len(self._labels):
			raise ShapeMismatchError(
				f"Cannot relabel {self.name} axis of length {len(self._labels)} "
				f"with {len(labels)} labels"
			)
		return Axis(labels, self.name)

	def take(self, positions) -> "Axis":
		return Axis([self._labels[p] for p in positions], self.name)

	def position(self, label) -> int:
		try:
			return self._positions[label]
		except (KeyError, TypeError):
			raise LabelLookupError(self.name, label) from None

	def _bounded(self, pos) -> int:
		n = len(self._labels)
		original = pos
		if pos < 0:
			pos += n
		if not 0 <= pos < n:
			raise LabelLookupError(
				self.name, original,
				f"Position {original} out of range for {self.name} axis of length {n}",
			)
		return pos

	def _resolve_slice(self, s: slice) -> list:
		n = len(self._labels)
		bounds = (s.start, s.stop)
		if any(isinstance(b, str) for b in bounds):
			if not all(b is None or isinstance(b, str) for b in bounds):
				raise LabeledTableTypeError(
					f"Cannot mix labels and positions in a slice: {s!r}"
				)
			# Label ranges include both ends
			start = 0 if s.start is None else self.position(s.start)
			stop = n if s.stop is None else self.position(s.stop) + 1
			return list(range(start, stop, s.step or 1))
		if any(isinstance(b, bool) or not (b is None or isinstance(b, int)) for b in bounds):
			raise LabeledTableTypeError(f"Slice bounds must be ints or labels, not {s!r}")
		return list(range(*s.indices(n)))

	def _resolve_mask(self, flags) -> list:
		if len(flags) != len(self._labels):
			raise ShapeMismatchError(
				f"Boolean mask of length {len(flags)} does not match "
				f"{self.name} axis of length {len(self._labels)}"
			)
		return [pos for pos, flag in enumerate(flags) if flag]

	def resolve(self, selector):
		"""
		Resolve a selector to positions on this axis.

		Returns:
			(positions, single): `single` is True when the selector addresses
			exactly one position by scalar (int or str), which drops the axis
			from the result of a read.
		"""
		from .column import Column

		if selector is None or is_full_slice(selector):
			return list(range(len(self._labels))), False

		if isinstance(selector, bool):
			raise LabeledTableTypeError(
				f"A bare bool is not a valid {self.name} selector; use a list of bools"
			)

		if isinstance(selector, int):
			return [self._bounded(selector)], True

		if isinstance(selector, str):
			return [self.position(selector)], True

		if isinstance(selector, slice):
			return self._resolve_slice(selector), False

		if isinstance(selector, Column):
			if selector.dtype.kind is bool:
				if selector.has_labels and selector.labels != self._labels:
					raise ShapeMismatchError(
						f"Boolean mask labels are not aligned with the {self.name} axis"
					)
				return self._resolve_mask(selector.to_list()), False
			selector = selector.to_list()

		if isinstance(selector, (list, tuple, range)):
			items = list(selector)
			if not items:
				return [], False
			if all(isinstance(e, bool) for e in items):
				return self._resolve_mask(items), False
			if all(isinstance(e, int) and not isinstance(e, bool) for e in items):
				return [self._bounded(e) for e in items], False
			if all(isinstance(e, str) for e in items):
				return [self.position(e) for e in items], False
			raise LabeledTableTypeError(
				f"A {self.name} selector list must hold only bools, only ints or only labels"
			)

		raise LabeledTableTypeError(
			f"Invalid {self.name} selector type: {type(selector).__name__}. Must be int, "
			"label, slice, list of ints/labels/bools or a boolean Column."
		)


def check_distinct(positions, axis_name):
	""" Writes address each position at most once """
	if len(set(positions)) != len(positions):
		seen = set()
		repeated = sorted({p for p in positions if p in seen or seen.add(p)})
		raise ShapeMismatchError(
			f"Assignment addresses {axis_name} position(s) {repeated} more than once"
		)


def default_labels(n) -> tuple:
	return tuple(str(i) for i in range(n))
