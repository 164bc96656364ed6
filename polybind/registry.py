"""
The member registry: a cache of what each type offers, keyed by fully-qualified name.

A type goes through two states. It is *registered* once its names are known
and its slots exist. It is *loaded* once those slots hold its methods and
constructors. Registration is cheap and happens wholesale on import;
loading asks the catalog to introspect, and happens on first use.

Nothing is ever removed.
"""
from threading import Lock
from typing import Optional
from .catalog import TypeCatalog
from .ontology import Candidate, NestedType

class MemberStore:
	""" One kind of member (methods, say) for every type: full name -> member name -> candidates """
	_table: dict[str, dict[str, list[Candidate]]]

	def __init__(self):
		self._table = {}

	def __contains__(self, full_name:str) -> bool:
		return full_name in self._table

	def open(self, full_name:str):
		self._table.setdefault(full_name, {})

	def slot(self, full_name:str) -> Optional[dict[str, list[Candidate]]]:
		return self._table.get(full_name)

class Registry:
	def __init__(self, catalog:TypeCatalog, report):
		self._catalog = catalog
		self._report = report
		self._mutex = Lock()
		self._loading = {}
		self._loaded = set()
		self.methods = MemberStore()
		self.constructors = MemberStore()
		self._simple_to_full = {}
		self._nested = {}

	def register_type(self, handle:type, *, publish:bool=True) -> str:
		"""
		Note the type's names and open its slots, if not done already.
		A published type takes its simple name over from any earlier one.
		Types met only in passing (by direct use) stay unpublished,
		so their simple names do not count as imported.
		"""
		full_name = self._catalog.full_name(handle)
		with self._mutex:
			if full_name not in self.methods:
				self._report.info("Registering", full_name)
				self.methods.open(full_name)
				if not self._catalog.is_enum(handle):
					self.constructors.open(full_name)
				self._nested[full_name] = {
					n.simple_name: n for n in self._catalog.describe_nested_types(handle)
				}
			if publish:
				self._simple_to_full[self._catalog.simple_name(handle)] = full_name
		return full_name

	def is_registered(self, full_name:str) -> bool:
		return full_name in self.methods

	def is_loaded(self, handle:type) -> bool:
		return self._catalog.full_name(handle) in self._loaded

	def ensure_loaded(self, handle:type) -> str:
		"""
		Fill the type's slots from the catalog, once. Concurrent first uses
		of the same type wait on a per-type lock, so nobody sees a half-built list.
		"""
		full_name = self._catalog.full_name(handle)
		if full_name in self._loaded: return full_name
		if not self.is_registered(full_name): self.register_type(handle, publish=False)
		with self._mutex:
			gate = self._loading.setdefault(full_name, Lock())
		with gate:
			if full_name not in self._loaded:
				self._load(handle, full_name)
				self._loaded.add(full_name)
		return full_name

	def _load(self, handle:type, full_name:str):
		self._report.info("Loading", full_name)
		members = self._catalog.describe_accessible_members(handle)
		method_slot = self.methods.slot(full_name)
		for name, candidates in members.methods.items():
			method_slot.setdefault(name, []).extend(candidates)
		constructor_slot = self.constructors.slot(full_name)
		if constructor_slot is not None and members.constructors:
			constructor_slot[self._catalog.simple_name(handle)] = list(members.constructors)

	def lookup_methods(self, handle:type, name:str) -> list[Candidate]:
		full_name = self.ensure_loaded(handle)
		return self.methods.slot(full_name).get(name, [])

	def lookup_constructors(self, handle:type) -> list[Candidate]:
		full_name = self.ensure_loaded(handle)
		slot = self.constructors.slot(full_name)
		if slot is None: return []
		return slot.get(self._catalog.simple_name(handle), [])

	def full_name_of(self, simple_name:str) -> Optional[str]:
		return self._simple_to_full.get(simple_name)

	def simple_name_registered(self, simple_name:str) -> bool:
		full_name = self.full_name_of(simple_name)
		return full_name is not None and self.is_registered(full_name)

	def nested_type_of(self, handle:type, simple_name:str) -> Optional[NestedType]:
		full_name = self._catalog.full_name(handle)
		if full_name not in self._nested: self.register_type(handle, publish=False)
		return self._nested[full_name].get(simple_name)

	def method_names(self, handle:type) -> list[str]:
		return sorted(self.methods.slot(self.ensure_loaded(handle)))
