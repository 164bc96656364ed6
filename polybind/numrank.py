"""
Classify the numeric types into an ordered ladder of ranks,
so that overloads taking numbers can be told apart the way
a statically-typed caller would tell them apart.

The ladder runs through the integer widths, then the character,
then the floating widths. Everything not numeric ranks as NAN.
"""
from decimal import Decimal
from enum import IntEnum

class Rank(IntEnum):
	NAN = 0
	BYTE = 1
	SHORT = 2
	CHAR = 3
	INT = 4
	LONG = 5
	FLOAT = 6
	DOUBLE = 7

BYTE_RANGE = (-2**7, 2**7-1)
SHORT_RANGE = (-2**15, 2**15-1)
INT_RANGE = (-2**31, 2**31-1)
LONG_RANGE = (-2**63, 2**63-1)

FLOAT_MAX = Decimal((2 - 2**-23) * 2**127)
DOUBLE_MAX = Decimal(1.7976931348623157e308)

# Rungs of the integer ladder in the order a decimal tries them.
_WHOLE_RUNGS = [
	(Rank.BYTE, BYTE_RANGE),
	(Rank.SHORT, SHORT_RANGE),
	(Rank.INT, INT_RANGE),
	(Rank.LONG, LONG_RANGE),
]

def rank_of(typ) -> Rank:
	"""
	The rank of a type. Primitive parameter types and the boxed
	wrappers answer for themselves through a `rank` attribute.
	Python's own `int` and `float` are the boxed 32-bit integer and
	the boxed double. A `bool` is not a number, nor is anything else.
	"""
	if typ is int: return Rank.INT
	if typ is float: return Rank.DOUBLE
	rank = getattr(typ, "rank", Rank.NAN)
	return rank if isinstance(rank, Rank) else Rank.NAN

def is_whole(value:Decimal) -> bool:
	return value == value.to_integral_value()

def _within(value, bounds) -> bool:
	low, high = bounds
	return low <= value <= high

def rank_decimal(value:Decimal) -> Rank:
	"""
	The smallest rank which represents the value of an arbitrary-precision
	decimal. Whole values prefer the integer ladder; anything else
	(or anything too big for a long) tries single and then double floats.
	"""
	if not value.is_finite(): return Rank.NAN
	if is_whole(value):
		for rank, bounds in _WHOLE_RUNGS:
			if _within(value, bounds): return rank
	if -FLOAT_MAX <= value <= FLOAT_MAX: return Rank.FLOAT
	if -DOUBLE_MAX <= value <= DOUBLE_MAX: return Rank.DOUBLE
	return Rank.NAN

def is_raw(param) -> bool:
	""" True for the primitive (non-nullable, unboxed) parameter types. """
	return getattr(param, "is_primitive", False)

def score_numeric(arg, arg_type, param, recast_decimals:bool) -> int:
	"""
	Points for passing `arg` (of runtime type `arg_type`) to a numeric
	parameter. Zero means these two simply do not fit.

	Decimals get ranked by what they hold, unless that is switched off,
	in which case a decimal is just some opaque non-number.
	"""
	param_rank = rank_of(param)
	if recast_decimals and issubclass(arg_type, Decimal):
		arg_rank = rank_decimal(arg)
	else:
		arg_rank = rank_of(arg_type)
	if arg_rank == Rank.NAN or param_rank == Rank.NAN:
		return 0
	if arg_rank == param_rank:
		return 4
	if param_rank > arg_rank:
		if param_rank != Rank.CHAR: return 3
		if is_raw(param): return 2  # Whole number widens into a char.
	elif param_rank == Rank.CHAR and is_raw(param) and arg_rank <= Rank.INT:
		return 2  # Implicit integer-to-char narrowing.
	return 0
