"""
The binder resolves a (receiver, member name, arguments) triple to one
member and carries it out. It owns the registry, so two binders never
share cached state, which keeps tests (and tenants) apart.

Resolving one call goes like this:

	1. Normalize the receiver. A class means a static context;
	   anything else is an instance, and its class is the handle.
	2. If the member name is the handle's own simple name, construct the handle.
	3. Otherwise, if the handle declares a nested class by that name,
	   construct that. A nested class which needs an enclosing instance
	   gets the receiver as its first argument, which had better be an
	   instance rather than a bare class.
	4. Otherwise it's a method: score every overload and take the best.

Fields are a separate, non-overloaded matter.
"""
from decimal import Decimal
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .catalog import TypeCatalog, PythonCatalog
from .coercion import ArgumentCoercer
from .diagnostics import Report
from .errors import NoSuchMember, NoSuchOverload, AmbiguousBinding, InvocationFailure, NotImported
from .ontology import Candidate, NestedType, MemberRef, Construct, ConstructNested, InvokeMethod, ReadField
from .registry import Registry
from .scanner import NamespaceScanner
from .scoring import CandidateScorer

RECAST_DECIMALS = True
MEMO_LIMIT = 4096

_CONSTRUCTOR = "<init>"
_UNKNOWN = object()

def normalize(caller) -> tuple[type, bool]:
	""" The type handle for a receiver, and whether the receiver was the bare type. """
	if isinstance(caller, type): return caller, True
	return type(caller), False

def _shape(args:Sequence) -> Optional[tuple]:
	"""
	What the scorer sees of an argument list, if it only looks at classes.
	Decimals (ranked by value) and tuples (checked item by item) make
	the outcome depend on more than classes, so those don't get a shape.
	"""
	if any(isinstance(a, (Decimal, tuple)) for a in args): return None
	return tuple(type(a) for a in args)

def _describe(args:Sequence) -> str:
	return "(%s)" % ", ".join("null" if a is None else type(a).__qualname__ for a in args)

class Binder:
	"""
	The context object for dynamic member dispatch.

	`recast_decimals` may be flipped at any time; it governs whether a
	`Decimal` argument gets ranked by its value (and so can feed a byte,
	an int, a float, ...) or only ever matches a `Decimal` parameter.
	"""

	def __init__(self, catalog:TypeCatalog=None, scanner:NamespaceScanner=None, report:Report=None, *, recast_decimals:bool=RECAST_DECIMALS):
		self.report = report or Report(verbose=0)
		self.catalog = catalog or PythonCatalog(self.report)
		self.scanner = scanner or NamespaceScanner(self.report)
		self.registry = Registry(self.catalog, self.report)
		self._scorer = CandidateScorer(recast_decimals)
		self._performer = _Performer(self)
		self._scanned = set()
		self._memo = {}

	@property
	def recast_decimals(self) -> bool:
		return self._scorer.recast_decimals

	@recast_decimals.setter
	def recast_decimals(self, recast:bool):
		self._scorer.recast_decimals = bool(recast)

	# Imports and names:

	def scan_import(self, import_string:str) -> bool:
		"""
		Register every class an import string brings in, without loading
		any of them. Returns False if the import string found nothing.
		"""
		if import_string in self._scanned: return True
		found = self.scanner.resolve_import(import_string)
		if not found: return False
		self.report.info("Imported", len(found), "type(s) from", import_string)
		for handle in found: self.registry.register_type(handle)
		self._scanned.add(import_string)
		return True

	def full_class_name(self, simple_name:str) -> Optional[str]:
		return self.registry.full_name_of(simple_name)

	def class_imported(self, simple_name:str) -> bool:
		return self.registry.simple_name_registered(simple_name)

	def for_name_or_none(self, full_name:str) -> Optional[type]:
		return self.scanner.find_class(full_name)

	def type_named(self, simple_name:str) -> type:
		""" The imported class a simple name refers to. Later imports win collisions. """
		full_name = self.full_class_name(simple_name)
		if full_name is None:
			raise NotImported("Nothing called %r has been imported." % simple_name)
		handle = self.for_name_or_none(full_name)
		if handle is None:
			raise NotImported("%s was imported but cannot be found now." % full_name)
		return handle

	# Resolution:

	def resolve(self, caller, name:str, args:Sequence=()) -> MemberRef:
		args = tuple(args)
		handle, is_static = normalize(caller)
		if name == self.catalog.simple_name(handle):
			return self._construct(handle, args)
		nested = self.registry.nested_type_of(handle, name)
		if nested is not None:
			return self._construct_nested(caller, is_static, nested, args)
		return self._method(caller, handle, name, args)

	def _choose(self, handle:type, family:str, candidates:Sequence[Candidate], args:tuple) -> Optional[Candidate]:
		shape = _shape(args)
		if shape is None:
			return self._scorer.best_match(candidates, args)
		key = (self.catalog.full_name(handle), family, shape, self.recast_decimals)
		best = self._memo.get(key, _UNKNOWN)
		if best is _UNKNOWN:
			if len(self._memo) >= MEMO_LIMIT: self._memo.clear()
			best = self._memo[key] = self._scorer.best_match(candidates, args)
			self.report.info("Resolved", family, _describe(args), "to", best)
		return best

	def _construct(self, handle:type, args:tuple) -> Construct:
		candidates = self.registry.lookup_constructors(handle)
		if not candidates:
			raise NoSuchMember("%s has no accessible constructors." % self.catalog.full_name(handle))
		best = self._choose(handle, _CONSTRUCTOR, candidates, args)
		if best is None:
			raise NoSuchOverload("No constructor of %s accepts %s." % (self.catalog.full_name(handle), _describe(args)))
		return Construct(handle, best, args)

	def _construct_nested(self, caller, is_static:bool, nested:NestedType, args:tuple) -> ConstructNested:
		enclosing = None
		if nested.requires_enclosing_instance:
			if is_static:
				pattern = "%s needs an enclosing instance, but was asked for from the bare type %s."
				raise AmbiguousBinding(pattern % (nested.simple_name, caller.__qualname__))
			enclosing = caller
			args = (caller,) + args
		construct = self._construct(nested.handle, args)
		return ConstructNested(nested, enclosing, construct.candidate, args)

	def _method(self, caller, handle:type, name:str, args:tuple) -> InvokeMethod:
		candidates = self.registry.lookup_methods(handle, name)
		if not candidates:
			raise NoSuchMember("%s has no member called %r." % (self.catalog.full_name(handle), name))
		best = self._choose(handle, name, candidates, args)
		if best is None:
			raise NoSuchOverload("No overload of %s.%s accepts %s." % (self.catalog.full_name(handle), name, _describe(args)))
		return InvokeMethod(caller, best, args)

	def perform(self, ref:MemberRef):
		return self._performer.visit(ref)

	def call(self, caller, name:str, args:Sequence=()):
		"""
		Call a method, a constructor, or a nested class's constructor, whichever
		`name` means for `caller`, with whichever overload best fits `args`.
		"""
		return self.perform(self.resolve(caller, name, args))

	# Lookups which report absence instead of complaining about it:

	def get_method(self, caller, name:str, args:Sequence=()) -> Optional[Candidate]:
		handle, _ = normalize(caller)
		return self._scorer.best_match(self.registry.lookup_methods(handle, name), tuple(args))

	def get_constructor(self, handle:type, args:Sequence=()) -> Optional[Candidate]:
		return self._scorer.best_match(self.registry.lookup_constructors(handle), tuple(args))

	# Direct construction and invocation:

	def new_instance(self, handle, args:Sequence=()):
		""" Construct by class, or by the simple name of an imported class. """
		if isinstance(handle, str): handle = self.type_named(handle)
		return self.perform(self._construct(handle, tuple(args)))

	def invoke(self, caller, candidate:Optional[Candidate], args:Sequence=()):
		""" Perform a candidate found earlier, as by `get_method`, which may have found nothing. """
		if candidate is None:
			raise NoSuchOverload("Nothing to invoke for %s on %s." % (_describe(args), normalize(caller)[0].__qualname__))
		return self.perform(InvokeMethod(caller, candidate, tuple(args)))

	def carry_out(self, candidate:Candidate, receiver, args:tuple):
		fitted = self._performer.coercer.fit_args(candidate, args)
		try:
			return candidate.perform(receiver, fitted)
		except Exception as ex:
			raise InvocationFailure("%r raised %s: %s" % (candidate, type(ex).__name__, ex)) from ex

	# Fields:

	def get_field(self, caller, name:str):
		""" Enumeration constants count as fields. """
		return self.perform(ReadField(caller, name))

	def get_field_or_nested(self, caller, name:str):
		handle, _ = normalize(caller)
		nested = self.registry.nested_type_of(handle, name)
		if nested is not None: return nested.handle
		return self.get_field(caller, name)

	def set_field(self, caller, name:str, value):
		handle, _ = normalize(caller)
		try: self.catalog.write_field(caller, handle, name, value)
		except AttributeError as ex:
			raise NoSuchMember("%s has no writable field %r." % (self.catalog.full_name(handle), name)) from ex

class _Performer(Visitor):
	""" Carries out whichever kind of member reference resolution produced. """
	def __init__(self, binder:Binder):
		self.binder = binder
		self.coercer = ArgumentCoercer()

	def visit_Construct(self, ref:Construct):
		return self.binder.carry_out(ref.candidate, ref.handle, ref.args)

	def visit_ConstructNested(self, ref:ConstructNested):
		return self.binder.carry_out(ref.candidate, ref.nested.handle, ref.args)

	def visit_InvokeMethod(self, ref:InvokeMethod):
		if not ref.candidate.is_static and isinstance(ref.receiver, type):
			raise InvocationFailure("%r needs an instance, but got the bare type %s." % (ref.candidate, ref.receiver.__qualname__))
		return self.binder.carry_out(ref.candidate, ref.receiver, ref.args)

	def visit_ReadField(self, ref:ReadField):
		binder = self.binder
		handle, _ = normalize(ref.receiver)
		try: return binder.catalog.read_field(ref.receiver, handle, ref.name)
		except AttributeError as ex:
			raise NoSuchMember("%s has no field %r." % (binder.catalog.full_name(handle), ref.name)) from ex
