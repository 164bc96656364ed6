"""
These classes just exist as a support scaffolding for various test cases,
mainly of overload resolution. Several methods record which overload ran
by setting `Tester.id`, so a test can see the choice as well as the result.
"""
import enum
from collections.abc import Sized
from decimal import Decimal
from .declare import overloaded, inner
from .ontology import array_of
from .primitive import byte_t, char_t, int_t, long_t, float_t, double_t, Short, Float, Long

class Tester:
	OBJ = 1
	BYTE = 2
	SHORT = 3
	CHAR = 4
	INT = 5
	LONG = 6
	FLOAT = 7
	DOUBLE = 8
	OBJARR = 9
	DECIMAL = 10

	id = -1

	class StaticInner:
		id = -1

		@staticmethod
		def call_me() -> bool:
			return True

	class InnerToImport:
		pass

	@inner
	class InnerNoInt:
		@overloaded
		def __init__(self, outer: "Tester", o: int_t):
			raise RuntimeError("Not with an int, thank you.")

		@__init__.overload
		def __init__(self, outer: "Tester", o: float_t):
			self.outer = outer
			self.o = o

	def __init__(self):
		Tester.id = 0

	@overloaded(static=True)
	def method_overload(o: object):
		Tester.id = Tester.OBJ

	@method_overload.overload
	def method_overload(o: byte_t):
		Tester.id = Tester.BYTE

	@method_overload.overload
	def method_overload(o: Short):
		Tester.id = Tester.SHORT

	@method_overload.overload
	def method_overload(o: char_t):
		Tester.id = Tester.CHAR

	@method_overload.overload
	def method_overload(o: int):
		Tester.id = Tester.INT

	@method_overload.overload
	def method_overload(o: long_t):
		Tester.id = Tester.LONG

	@method_overload.overload
	def method_overload(o: Float):
		Tester.id = Tester.FLOAT

	@method_overload.overload
	def method_overload(o: double_t):
		Tester.id = Tester.DOUBLE

	@method_overload.overload
	def method_overload(o: array_of(object)):
		Tester.id = Tester.OBJARR

	@staticmethod
	def var_arg_method(*o):
		Tester.id = Tester.OBJARR
		return o

	@overloaded(static=True)
	def two_arg_test(a: int_t, b: int_t):
		Tester.id = Tester.INT
		return a, b

	@two_arg_test.overload
	def two_arg_test(a: float_t, b: float_t):
		Tester.id = Tester.FLOAT
		return a, b

	@overloaded(static=True)
	def true_if_int(o: object) -> bool:
		return False

	@true_if_int.overload
	def true_if_int(o: int_t) -> bool:
		return True

	@overloaded(static=True)
	def echo(o: byte_t): return o

	@echo.overload
	def echo(o: char_t): return o

	@staticmethod
	def exact_decimal(d: Decimal):
		Tester.id = Tester.DECIMAL
		return d

	@staticmethod
	def as_int(i: int_t): return i

	@staticmethod
	def as_long(i: Long): return i

	@staticmethod
	def as_char(c: char_t): return c

	@staticmethod
	def snapshot(items: array_of(object)): return items

	@staticmethod
	def explode():
		raise ZeroDivisionError("on purpose")

	def ping(self):
		return "pong"

class Outer:
	""" Mirrors an enclosing class with one instance-bound and one static nested class. """
	def __init__(self, label: str):
		self.label = label

	@inner
	class Inner:
		def __init__(self, outer: "Outer", n: int_t):
			self.outer = outer
			self.n = n

	class Nested:
		def __init__(self, n: int_t):
			self.n = n

class Animal:
	legs = 4

	def __init__(self, name: str):
		self.name = name

	def speak(self):
		return "..."

	@overloaded
	def greet(self, other: object):
		return "hello, thing"

	@greet.overload
	def greet(self, other: "Animal"):
		return "hello, animal"

class Dog(Animal):
	def speak(self):
		return "woof"

	@overloaded
	def greet(self, other: "Dog"):
		return "hello, dog"

class Color(enum.Enum):
	RED = 1
	GREEN = 2

	def shout(self):
		return self.name + "!"

class Measures:
	@overloaded(static=True)
	def size(x: Sized):
		return "sized"

	@size.overload
	def size(x: list):
		return "list"

	@overloaded(static=True)
	def pick(x: object):
		return "object"

	@pick.overload
	def pick(x: str):
		return "str"

	@staticmethod
	def nothing():
		return "nothing"
