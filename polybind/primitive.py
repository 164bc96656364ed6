"""
The vocabulary of fixed-width numbers.

Python has one integer type and one float type, which is not enough
to tell `f(byte)` from `f(long)`. So here are two sets of stand-ins:

* The primitive types (`byte_t` and friends) are parameter types only.
  Nothing is ever an instance of one. They never accept null, and
  arguments bound to them arrive as plain Python values.
* The boxed wrappers (`Byte` and friends) are real value classes
  which carry a rank, may stand in for null-able parameters,
  and may be passed as arguments.

Python's `int` plays the boxed 32-bit integer and `float` plays the boxed double.
"""
import struct
from decimal import Decimal
from .numrank import Rank, LONG_RANGE, FLOAT_MAX

_SINGLE_MAX = float(FLOAT_MAX)

def wrap(value:int, bits:int) -> int:
	""" Two's-complement truncation to the given width """
	value &= (1 << bits) - 1
	if value >> (bits - 1): value -= 1 << bits
	return value

def to_single(value:float) -> float:
	""" Round a double to the nearest single-precision value. """
	if value != value: return value
	infinity = float("inf") if value > 0 else float("-inf")
	if abs(value) > _SINGLE_MAX: return infinity
	try: return struct.unpack("f", struct.pack("f", value))[0]
	except OverflowError: return infinity

def whole(value) -> int:
	""" Drop any fractional part, toward zero, from anything numeric. """
	if isinstance(value, Character): return ord(value.value)
	if isinstance(value, Boxed): value = value.value
	if isinstance(value, float):
		if value != value: return 0
		if value in (float("inf"), float("-inf")):
			return LONG_RANGE[1] if value > 0 else LONG_RANGE[0]
	return int(value)

def real(value) -> float:
	if isinstance(value, Boxed): value = value.value
	return float(value)

class PrimitiveType:
	"""
	A raw numeric (or boolean) parameter type. The rank
	is what lets the numeric scorer compare it with arguments.
	"""
	is_primitive = True

	def __init__(self, name:str, rank:Rank, convert):
		self.name, self.rank, self.convert = name, rank, convert

	def __repr__(self): return self.name
	def is_top(self) -> bool: return False

def _as_char(value) -> str:
	return chr(whole(value) & 0xFFFF)

byte_t = PrimitiveType("byte", Rank.BYTE, lambda v: wrap(whole(v), 8))
short_t = PrimitiveType("short", Rank.SHORT, lambda v: wrap(whole(v), 16))
char_t = PrimitiveType("char", Rank.CHAR, _as_char)
int_t = PrimitiveType("int", Rank.INT, lambda v: wrap(whole(v), 32))
long_t = PrimitiveType("long", Rank.LONG, lambda v: wrap(whole(v), 64))
float_t = PrimitiveType("float", Rank.FLOAT, lambda v: to_single(real(v)))
double_t = PrimitiveType("double", Rank.DOUBLE, real)
boolean_t = PrimitiveType("boolean", Rank.NAN, bool)

class Boxed:
	"""
	Base for the fixed-width wrappers. Each subclass knows its rank and
	how to squeeze an arbitrary number into its own width.
	"""
	__slots__ = ("value",)
	rank = Rank.NAN

	def __init__(self, value):
		self.value = self.narrow(value)

	@staticmethod
	def narrow(value): raise NotImplementedError

	def __eq__(self, other):
		if isinstance(other, Boxed): other = other.value
		return self.value == other

	def __hash__(self): return hash(self.value)
	def __repr__(self): return "%s(%r)" % (type(self).__name__, self.value)
	def __int__(self): return whole(self.value)
	def __float__(self): return float(self.value)

class Byte(Boxed):
	__slots__ = ()
	rank = Rank.BYTE
	@staticmethod
	def narrow(value): return wrap(whole(value), 8)

class Short(Boxed):
	__slots__ = ()
	rank = Rank.SHORT
	@staticmethod
	def narrow(value): return wrap(whole(value), 16)

class Character(Boxed):
	""" Holds a single character; compares equal to that one-character string. """
	__slots__ = ()
	rank = Rank.CHAR
	@staticmethod
	def narrow(value):
		if isinstance(value, str):
			if len(value) != 1: raise ValueError("Need exactly one character, got %r" % value)
			return value
		return _as_char(value)
	def __int__(self): return ord(self.value)
	def __float__(self): return float(ord(self.value))
	def __str__(self): return self.value

class Long(Boxed):
	__slots__ = ()
	rank = Rank.LONG
	@staticmethod
	def narrow(value): return wrap(whole(value), 64)

class Float(Boxed):
	__slots__ = ()
	rank = Rank.FLOAT
	@staticmethod
	def narrow(value): return to_single(real(value))

BOXED = {
	Rank.BYTE: Byte,
	Rank.SHORT: Short,
	Rank.CHAR: Character,
	Rank.INT: lambda v: wrap(whole(v), 32),
	Rank.LONG: Long,
	Rank.FLOAT: Float,
	Rank.DOUBLE: real,
}

def is_number(value) -> bool:
	"""
	True for the values which take part in numeric conversion.
	Characters are not numbers; neither are flags.
	"""
	if isinstance(value, bool): return False
	if isinstance(value, Character): return False
	return isinstance(value, (int, float, Decimal, Boxed))

