"""
The type catalog: where the registry learns what a type offers.

The registry only ever asks two big questions of a catalog (what members
does this type expose, and what nested types does it declare) plus a few
small ones about names and fields. `PythonCatalog` answers them for
ordinary Python classes by way of `inspect`, honoring the overload
declarations from `polybind.declare`.

Only public things are visible: names starting with an underscore
are not accessible, constructors excepted.
"""
import enum
import inspect
import types
from abc import ABC, abstractmethod
from typing import Callable, Optional
from .declare import Overloads, needs_enclosing_instance
from .ontology import Candidate, Members, NestedType, ParamType, array_of, param_type

class TypeCatalog(ABC):
	@abstractmethod
	def describe_accessible_members(self, handle:type) -> Members: pass

	@abstractmethod
	def describe_nested_types(self, handle:type) -> list[NestedType]: pass

	@staticmethod
	def full_name(handle:type) -> str:
		return handle.__module__ + "." + handle.__qualname__

	@staticmethod
	def simple_name(handle:type) -> str:
		return handle.__name__

	@staticmethod
	def is_enum(handle:type) -> bool:
		return issubclass(handle, enum.Enum)

	@abstractmethod
	def read_field(self, receiver, handle:type, name:str): pass

	@abstractmethod
	def write_field(self, receiver, handle:type, name:str, value): pass

class Unintrospectable(Exception):
	""" Raised when a callable hides its signature. """

def _is_public(name:str) -> bool:
	return not name.startswith("_")

def _signatures(fn:Callable, skip:int) -> tuple[list[tuple[ParamType, ...]], bool]:
	"""
	Parameter-type tuples for a function, and whether it ends in `*args`.
	Each parameter with a default gives one more signature, so `f(a, b=1)`
	comes out as both `(a,)` and `(a, b)`. The `*args` is one array parameter.
	Keyword-only parameters without defaults make the function unusable here.
	"""
	try: signature = inspect.signature(fn, eval_str=True)
	except Exception as ex:  # String annotations may fail any which way.
		raise Unintrospectable(fn) from ex
	required, optional, rest = [], [], None
	for p in list(signature.parameters.values())[skip:]:
		annotation = None if p.annotation is p.empty else p.annotation
		if p.kind is p.VAR_POSITIONAL:
			rest = array_of(annotation)
		elif p.kind is p.VAR_KEYWORD:
			continue
		elif p.kind is p.KEYWORD_ONLY:
			if p.default is p.empty: raise Unintrospectable(fn)
		elif p.default is p.empty and not optional:
			required.append(param_type(annotation))
		else:
			optional.append(param_type(annotation))
	if rest is not None:
		return [tuple(required + optional) + (rest,)], True
	return [tuple(required + optional[:i]) for i in range(len(optional)+1)], False

def _static_call(fn):
	return lambda receiver, args: fn(*args)

def _instance_call(fn):
	return lambda receiver, args: fn(receiver, *args)

def _class_call(fn):
	def perform(receiver, args):
		cls = receiver if isinstance(receiver, type) else type(receiver)
		return fn(cls, *args)
	return perform

def _spread(perform):
	# The trailing `*args` parameter arrives as one array; spread it back out.
	# A null array arrives as a single null.
	def spread(receiver, args):
		rest = (None,) if args[-1] is None else args[-1]
		return perform(receiver, (*args[:-1], *rest))
	return spread

def _overload_body(cls:type, name:str, body:Callable, is_static:bool) -> list[Candidate]:
	perform = _static_call(body) if is_static else _instance_call(body)
	return _candidates(cls, name, body, 0 if is_static else 1, is_static, perform)

def _candidates(cls, name, fn, skip, is_static, perform) -> list[Candidate]:
	signatures, star = _signatures(fn, skip)
	if star: perform = _spread(perform)
	return [Candidate(name, params, is_static, perform, cls) for params in signatures]

class PythonCatalog(TypeCatalog):
	"""
	Reads members straight off Python classes.

	Methods come from each class along the MRO, most-derived first, in the
	order each class declares them. Enumeration members, properties, plain
	class attributes and nested classes are fields, not methods.
	"""

	def __init__(self, report=None):
		self._report = report

	def _info(self, *args):
		if self._report is not None: self._report.info(*args)

	def describe_accessible_members(self, handle:type) -> Members:
		methods = {}
		for level in handle.__mro__:
			for name, attr in vars(level).items():
				if not _is_public(name): continue
				for candidate in self._method_candidates(level, name, attr):
					methods.setdefault(name, []).append(candidate)
		if self.is_enum(handle):
			constructors = []
		else:
			constructors = self._constructor_candidates(handle)
		return Members(methods, constructors)

	def _method_candidates(self, level:type, name:str, attr) -> list[Candidate]:
		try:
			if isinstance(attr, Overloads):
				found = []
				for body, is_static in attr.bodies:
					found.extend(_overload_body(level, name, body, is_static))
				return found
			if isinstance(attr, staticmethod):
				fn = attr.__func__
				return _candidates(level, name, fn, 0, True, _static_call(fn))
			if isinstance(attr, classmethod):
				fn = attr.__func__
				return _candidates(level, name, fn, 1, True, _class_call(fn))
			if isinstance(attr, (types.FunctionType, types.MethodDescriptorType)):
				return _candidates(level, name, attr, 1, False, _instance_call(attr))
		except Unintrospectable:
			self._info("Cannot see the signature of", level.__qualname__ + "." + name)
		return []

	def _constructor_candidates(self, handle:type) -> list[Candidate]:
		init = _effective_init(handle)
		try:
			if isinstance(init, Overloads):
				found = []
				for body, _ in init.bodies:
					found.extend(_candidates(handle, handle.__name__, body, 1, True, _fresh(body)))
				return found
			if isinstance(init, types.FunctionType):
				return _candidates(handle, handle.__name__, init, 1, True, _instantiate)
			return _candidates(handle, handle.__name__, handle, 0, True, _instantiate)
		except Unintrospectable:
			self._info("Cannot see the constructors of", handle.__qualname__)
			return []

	def describe_nested_types(self, handle:type) -> list[NestedType]:
		nested = []
		for name, attr in vars(handle).items():
			if isinstance(attr, type) and _is_public(name) and _declared_within(handle, attr):
				nested.append(NestedType(attr.__name__, attr, needs_enclosing_instance(attr)))
		return nested

	def read_field(self, receiver, handle:type, name:str):
		if self.is_enum(handle) and name in handle.__members__:
			return handle[name]
		if not _is_public(name) or self._is_method(handle, name):
			raise AttributeError(name)
		return getattr(receiver, name)

	def write_field(self, receiver, handle:type, name:str, value):
		if not _is_public(name) or self._is_method(handle, name):
			raise AttributeError(name)
		if self.is_enum(handle) and name in handle.__members__:
			raise AttributeError("Enumeration constant %s is read-only" % name)
		setattr(receiver, name, value)

	@staticmethod
	def _is_method(handle:type, name:str) -> bool:
		attr = inspect.getattr_static(handle, name, None)
		return isinstance(attr, (Overloads, staticmethod, classmethod, types.FunctionType, types.MethodDescriptorType))

def _effective_init(handle:type) -> Optional[object]:
	for level in handle.__mro__:
		if "__init__" in vars(level):
			if level is object: return None
			return vars(level)["__init__"]

def _declared_within(outer:type, nested:type) -> bool:
	return nested.__qualname__ == outer.__qualname__ + "." + nested.__name__

def _instantiate(cls, args):
	return cls(*args)

def _fresh(body):
	def construct(cls, args):
		instance = cls.__new__(cls)
		body(instance, *args)
		return instance
	return construct
