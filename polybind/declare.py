"""
Python has no overloading, so a class which wants several same-named
methods (or constructors) with different parameter types declares them
here, property-setter style:

	class Tester:
		@overloaded(static=True)
		def method_overload(o: object): ...

		@method_overload.overload
		def method_overload(o: byte_t): ...

Parameter types come from the annotations. Overloaded constructors are
just overloads of `__init__`; such classes get built through a binder,
since no single `__init__` speaks for all of them.

A nested class marked `@inner` needs an enclosing instance to exist.
Its constructors take that instance as their first parameter.
"""
from typing import Callable

class Overloads:
	"""
	The family of bodies sharing one name in one class body.
	Each body is kept with its static-ness, in declaration order.
	"""
	bodies: list[tuple[Callable, bool]]

	def __init__(self, fn:Callable, is_static:bool):
		self.name = fn.__name__
		self.bodies = [(fn, is_static)]

	def __set_name__(self, owner, name):
		self.name = name

	def overload(self, fn:Callable=None, *, static:bool=None):
		""" Add another body to the family. Static-ness follows the first body unless given. """
		if static is None: static = self.bodies[0][1]
		def add(body):
			self.bodies.append((body, static))
			return self
		return add if fn is None else add(fn)

	def __call__(self, *args, **kwargs):
		raise TypeError("%s is overloaded; call it through a Binder." % self.name)

	def __repr__(self):
		return "<Overloads %s: %d bodies>" % (self.name, len(self.bodies))

def overloaded(fn:Callable=None, *, static:bool=False):
	""" Begin a family of overloads. Use as `@overloaded` or `@overloaded(static=True)` """
	if fn is None: return lambda body: Overloads(body, static)
	return Overloads(fn, static)

def inner(cls:type) -> type:
	""" Mark a nested class as needing an enclosing instance. """
	cls._needs_enclosing_instance = True
	return cls

def needs_enclosing_instance(cls:type) -> bool:
	return vars(cls).get("_needs_enclosing_instance", False)
