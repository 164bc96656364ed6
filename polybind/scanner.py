"""
The namespace scanner turns import strings into classes.

	"pkg.mod.*"            every public class declared in pkg.mod
	"pkg.mod"              the same, for a module named outright
	"pkg.mod.Klass"        just that class
	"pkg.mod.Outer.Inner"  a nested class

Wildcards are not recursive: "pkg.*" does not descend into pkg's submodules.
When a dotted path does not name a module, trailing segments are treated
one at a time as attribute (nested-class) separators until something fits.
Nested classes which need an enclosing instance are never imported,
although a wildcard does bring in the static nested classes.
"""
from importlib import import_module
from traceback import TracebackException
from types import ModuleType
from typing import Optional
from .declare import needs_enclosing_instance

class NamespaceScanner:
	def __init__(self, report=None):
		self._report = report

	def _info(self, *args):
		if self._report is not None: self._report.info(*args)

	def resolve_import(self, import_string:str) -> list[type]:
		if import_string.endswith(".*"):
			module = self._module(import_string[:-2])
			return [] if module is None else _declared_in(module)
		module = self._module(import_string)
		if module is not None:
			return _declared_in(module)
		found = self._nested_path(import_string)
		if found is None or needs_enclosing_instance(found):
			return []
		return [found]

	def _module(self, dotted:str) -> Optional[ModuleType]:
		try: return import_module(dotted)
		except ModuleNotFoundError:
			return None
		except ImportError as ex:
			tbx = TracebackException.from_exception(ex)
			self._info("Importing", dotted, "failed:", "".join(tbx.format_exception_only()).strip())
			return None

	def find_class(self, dotted:str) -> Optional[type]:
		""" The class at a fully-qualified name, if there is one. """
		return self._nested_path(dotted)

	def _nested_path(self, import_string:str) -> Optional[type]:
		head, tail = import_string, []
		while "." in head:
			head, last = head.rsplit(".", 1)
			tail.insert(0, last)
			module = self._module(head)
			if module is None: continue
			found = _chase(module, tail)
			if found is not None: return found
		return None

def _chase(module:ModuleType, path:list[str]) -> Optional[type]:
	it = module
	for name in path:
		it = getattr(it, name, None)
		if it is None: return None
	return it if isinstance(it, type) else None

def _declared_in(module:ModuleType) -> list[type]:
	found = []
	for name, cls in vars(module).items():
		if isinstance(cls, type) and cls.__module__ == module.__name__ and cls.__qualname__ == name and not name.startswith("_"):
			found.append(cls)
			found.extend(_static_nested(cls))
	return found

def _static_nested(cls:type) -> list[type]:
	found = []
	for name, attr in vars(cls).items():
		if isinstance(attr, type) and not name.startswith("_") and attr.__qualname__ == cls.__qualname__ + "." + attr.__name__:
			if not needs_enclosing_instance(attr):
				found.append(attr)
				found.extend(_static_nested(attr))
	return found
