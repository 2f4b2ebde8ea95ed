"""Label sanitization and uniquification for attribute access to columns."""

from __future__ import annotations
import re


def _get_reserved_names():
	"""Public methods and properties of Column and LabeledTable.

	A column label that sanitizes to one of these gets a trailing '_' so it
	never shadows the API. Cached after the first call.
	"""
	if not hasattr(_get_reserved_names, '_cache'):
		from .column import Column
		from .table import LabeledTable

		reserved = set()
		for cls in (Column, LabeledTable):
			for name in dir(cls):
				if name.startswith('_'):
					continue
				attr = getattr(cls, name, None)
				if callable(attr) or isinstance(attr, property):
					reserved.add(name.lower())

		_get_reserved_names._cache = reserved

	return _get_reserved_names._cache


def _sanitize_user_name(name) -> str | None:
	"""Sanitize a label to a valid Python identifier.

	Rules:
	- Convert to lowercase
	- Replace runs of non-alphanumeric chars (except _) with single _
	- Strip leading/trailing underscores
	- Prefix with 'c' if starts with digit
	- Append '_' if conflicts with reserved method names
	- Return None if empty after sanitization
	"""
	if not isinstance(name, str):
		name = str(name)

	sanitized = re.sub(r'[^a-z0-9_]+', '_', name.lower()).strip('_')

	if sanitized == "":
		return None

	if sanitized[0].isdigit():
		sanitized = "c" + sanitized

	if sanitized in _get_reserved_names():
		sanitized = sanitized + '_'

	return sanitized


def _uniquify(base: str, seen: set[str]) -> str:
	"""Make a unique name by adding __2, __3, etc if needed."""
	if base not in seen:
		return base

	i = 2
	while f"{base}__{i}" in seen:
		i += 1

	return f"{base}__{i}"


def build_attribute_map(labels) -> dict[str, int]:
	"""Map sanitized attribute names to positions, first occurrence wins."""
	attribute_map = {}
	seen = set()
	for idx, label in enumerate(labels):
		base = _sanitize_user_name(label)
		if base is None:
			sanitized = f'col{idx}_'
		else:
			sanitized = _uniquify(base, seen)
			seen.add(sanitized)
		attribute_map[sanitized] = idx
	return attribute_map
