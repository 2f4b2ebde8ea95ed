"""
Numeric coercion of locale-formatted text tokens.

"1,234" -> 1234, "12.5" -> 12.5, "n/a" -> MISSING. Lenient by default;
strict mode collects every malformed token and raises one ParseError.
"""

from __future__ import annotations
import math

from .errors import ParseError
from .missing import MISSING, is_missing


DEFAULT_THOUSANDS = ","

# Tokens that mean "no value" rather than "malformed value" in strict mode
NA_TOKENS = frozenset({""})


def _parse(token: str, thousands, decimal):
	text = token.strip()
	if thousands:
		text = text.replace(thousands, "")
	# int() and float() also read "1_000" and "inf"; neither is a locale number
	if "_" in text:
		raise ValueError(token)
	if decimal != ".":
		text = text.replace(decimal, ".")
	try:
		return int(text)
	except ValueError:
		pass
	value = float(text)
	if math.isnan(value):
		return MISSING
	if math.isinf(value):
		raise ValueError(token)
	return value


def coerce_token(token, thousands=DEFAULT_THOUSANDS, decimal="."):
	"""
	Coerce a single token into int, float or MISSING.

	Numbers pass through untouched (NaN becomes MISSING). Anything that does
	not parse after removing thousands separators is MISSING, as are tokens
	with underscores ("1_000") and infinities ("inf"). Exponent forms such
	as "1e3" are read as floats.
	"""
	if is_missing(token):
		return MISSING
	if isinstance(token, bool):
		return int(token)
	if isinstance(token, (int, float)):
		return token
	try:
		return _parse(str(token), thousands, decimal)
	except ValueError:
		return MISSING


def _is_na_token(token, na_values) -> bool:
	return token.strip().lower() in na_values


def coerce_numeric(tokens, thousands=DEFAULT_THOUSANDS, strict=False, column=None,
		row_labels=None, decimal=".", na_values=NA_TOKENS):
	"""
	Coerce a column of text tokens into numeric scalars.

	Args:
		tokens: iterable of str (or numbers, or None)
		thousands: thousands separator removed before parsing; None or "" disables
		strict: raise ParseError instead of mapping bad tokens to MISSING
		column: column label used in ParseError coordinates
		row_labels: row labels used in ParseError coordinates (default: positions)
		decimal: decimal mark
		na_values: lowercased tokens that strict mode accepts as MISSING

	Returns:
		list of int / float / MISSING, same length as tokens

	Raises:
		ParseError: strict mode only, listing (row, column, token) for every
			token that is neither a number nor one of na_values
	"""
	out = []
	bad = []
	for pos, token in enumerate(tokens):
		value = coerce_token(token, thousands, decimal)
		if strict and value is MISSING and isinstance(token, str):
			if not _is_na_token(token, na_values):
				row = row_labels[pos] if row_labels is not None else pos
				bad.append((row, column, token))
		out.append(value)

	if bad:
		raise ParseError(bad)
	return out


def any_numeric(tokens, thousands=DEFAULT_THOUSANDS, decimal=".") -> bool:
	"""True if at least one token parses as a number."""
	for token in tokens:
		if coerce_token(token, thousands, decimal) is not MISSING:
			return True
	return False
