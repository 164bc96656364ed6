"""
These most-fundamental classes describe what the registry stores
and what the resolver hands back. They are kept apart from the rest
so that the catalog, the scorer, and the binder can all share them
without circular imports.
"""
import types
import typing
from typing import Any, Callable, NamedTuple, Optional, Sequence, Union
from .numrank import Rank, rank_of
from .primitive import PrimitiveType

class ParamType:
	""" Normalized description of what one parameter position expects. """
	def is_top(self) -> bool: return False

class ClassType(ParamType):
	""" A reference type: some Python class. `object` is the top type. """
	def __init__(self, cls:type):
		assert isinstance(cls, type), cls
		self.cls = cls
	def __repr__(self): return self.cls.__qualname__
	def __eq__(self, other): return isinstance(other, ClassType) and other.cls is self.cls
	def __hash__(self): return hash(self.cls)
	def is_top(self) -> bool: return self.cls is object
	@property
	def rank(self) -> Rank:
		# Lets the numeric scorer see a boxed parameter for what it is.
		return rank_of(self.cls)

class ArrayType(ParamType):
	""" A fixed-size array. At run-time, arrays are tuples. """
	def __init__(self, element:ParamType):
		self.element = element
	def __repr__(self): return "%r[]" % self.element
	def __eq__(self, other): return isinstance(other, ArrayType) and other.element == self.element
	def __hash__(self): return hash(("[]", self.element))
	def holds_anything(self) -> bool: return self.element.is_top()

TOP = ClassType(object)
OBJECT_ARRAY = ArrayType(TOP)

def array_of(element) -> ArrayType:
	""" Spell an array parameter in an annotation, as in `items: array_of(object)` """
	return ArrayType(param_type(element))

def param_type(annotation) -> ParamType:
	"""
	Normalize whatever appears in a parameter annotation.
	Missing annotations, `Any`, and anything unrecognized mean the top type.
	Generics stand for their origin class; `Optional[X]` is just `X`,
	since every reference type is null-able anyway.
	"""
	if isinstance(annotation, (ParamType, PrimitiveType)): return annotation
	if annotation is None or annotation is Any: return TOP
	origin = typing.get_origin(annotation)
	if origin in (Union, types.UnionType):
		members = [a for a in typing.get_args(annotation) if a is not type(None)]
		return param_type(members[0]) if len(members) == 1 else TOP
	if isinstance(origin, type): return ClassType(origin)
	if isinstance(annotation, type): return ClassType(annotation)
	return TOP

class Candidate(NamedTuple):
	"""
	One method or constructor signature considered during resolution.
	`perform(receiver, args)` is the host's primitive for actually
	making the call; for constructors the receiver is the class.
	"""
	name: str
	params: tuple[ParamType, ...]
	is_static: bool
	perform: Callable[[Any, Sequence], Any]
	owner: type

	def __repr__(self):
		return "%s.%s(%s)" % (self.owner.__qualname__, self.name, ", ".join(map(repr, self.params)))

class Members(NamedTuple):
	""" What the catalog reports for one type. Methods are grouped by name. """
	methods: dict[str, list[Candidate]]
	constructors: list[Candidate]

class NestedType(NamedTuple):
	simple_name: str
	handle: type
	requires_enclosing_instance: bool

###############################################################################
# What resolution produces.

class Construct(NamedTuple):
	handle: type
	candidate: Candidate
	args: tuple

class ConstructNested(NamedTuple):
	nested: NestedType
	enclosing: Optional[Any]
	candidate: Candidate
	args: tuple

class InvokeMethod(NamedTuple):
	receiver: Any
	candidate: Candidate
	args: tuple

class ReadField(NamedTuple):
	receiver: Any
	name: str

MemberRef = Union[Construct, ConstructNested, InvokeMethod, ReadField]
