"""
Call a member of some Python class by name, overloads and all.

{0}

For example:

    polybind -i polybind.for_test_purposes.* Tester true_if_int 5

imports the test specimens, then calls whichever `true_if_int`
overload best fits the integer 5.

    polybind -i collections.* --describe deque

lists what the binder can see of `deque`.

Arguments are Python literals. Write `null` for None, and prefix
a number with `d:` (as in `d:2.5`) to pass it as a Decimal.
"""
import ast
import sys, argparse
from decimal import Decimal, InvalidOperation

parser = argparse.ArgumentParser(
	prog="polybind",
	description="Dynamic member dispatch with overload resolution.",
)
parser.add_argument("target", help="a class, by simple name once imported, or by full dotted name.")
parser.add_argument("member", nargs="?", help="a method name, or the class's own name to construct it.")
parser.add_argument("args", nargs="*", help="arguments, as Python literals.")
parser.add_argument('-i', "--import", dest="imports", action="append", default=[], help="an import string such as pkg.mod.* (repeatable).")
parser.add_argument('-d', "--describe", action="store_true", help="List the target's constructors and methods instead of calling anything.")
parser.add_argument('-v', "--verbose", action="count", help="Trace registration, loading, and resolution.")
parser.add_argument("--no-recast", action="store_true", help="Treat Decimal arguments as opaque instead of ranking them by value.")

class BadArgument(ValueError):
	pass

def parse_argument(text:str):
	if text == "null": return None
	if text.startswith("d:"):
		try: return Decimal(text[2:])
		except InvalidOperation:
			raise BadArgument("not a decimal number")
	try: return ast.literal_eval(text)
	except (ValueError, SyntaxError):
		return text  # Bare words pass as strings.

def describe(binder, handle) -> list[str]:
	registry = binder.registry
	lines = [binder.catalog.full_name(handle)]
	for candidate in registry.lookup_constructors(handle):
		lines.append("  new " + repr(candidate))
	for name in registry.method_names(handle):
		for candidate in registry.lookup_methods(handle, name):
			prefix = "  static " if candidate.is_static else "  "
			lines.append(prefix + repr(candidate))
	return lines

def _target(binder, text:str):
	if binder.class_imported(text):
		return binder.type_named(text)
	handle = binder.for_name_or_none(text)
	if handle is None:
		return binder.type_named(text)  # Raises NotImported
	return handle

def run(args):
	from .binder import Binder
	from .diagnostics import Report, TooManyIssues
	from .errors import BindingError
	report = Report(verbose=args.verbose)
	binder = Binder(report=report, recast_decimals=not args.no_recast)
	try:
		for import_string in args.imports:
			if not binder.scan_import(import_string):
				report.import_found_nothing(import_string)
		values = []
		for text in args.args:
			try: values.append(parse_argument(text))
			except BadArgument as ex:
				report.bad_argument(text, str(ex))
		if report.sick():
			report.complain_to_console()
			return 1
		try:
			handle = _target(binder, args.target)
			if args.describe:
				print("\n".join(describe(binder, handle)))
				return 0
			member = args.member or binder.catalog.simple_name(handle)
			result = binder.call(handle, member, values)
		except BindingError as ex:
			report.binding_failed(ex)
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after too many issues.", file=sys.stderr)
		return 1
	print(repr(result))
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
