"""
Slice helpers shared by the indexer and the columns.
"""

def is_full_slice(s) -> bool:
	"""True for `[:]`, which addresses the whole axis."""
	return isinstance(s, slice) and s.start is None and s.stop is None and s.step is None
