import sys
from typing import Any
from .errors import BindingError

class TooManyIssues(Exception):
	pass

class Report:
	"""
	Verbose tracing goes through `info`, and problems worth showing
	to a person pile up as issues until somebody complains about them.
	"""
	_issues : list[str]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list[str]: return list(self._issues)

	def issue(self, it:Any):
		self._issues.append(str(it))
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def binding_failed(self, ex:BindingError):
		lines = ["%s: %s" % (type(ex).__name__, ex.args[0] if ex.args else "")]
		cause = ex.__cause__
		if cause is not None:
			lines.append("  caused by %s: %s" % (type(cause).__name__, cause))
		self.issue("\n".join(lines))

	def bad_argument(self, text:str, why:str):
		self.issue("Could not make sense of the argument %r: %s" % (text, why))

	def import_found_nothing(self, import_string:str):
		self.issue("Nothing importable was found for %r" % import_string)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self._issues:
			print("*"*60, file=sys.stderr)
		for i in self._issues:
			print("  -"*20, file=sys.stderr)
			print(i, file=sys.stderr)
		sys.stderr.flush()

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)
