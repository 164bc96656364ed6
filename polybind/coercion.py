"""
Once a candidate wins, its arguments get fitted to its parameters.
This never second-guesses the scorer; it only changes representations.
"""
from collections.abc import MutableSequence
from typing import Sequence
from boozetools.support.foundation import Visitor
from .numrank import Rank
from .ontology import Candidate, ClassType, ArrayType
from .primitive import PrimitiveType, Character, BOXED, is_number

class ArgumentCoercer(Visitor):
	def fit_args(self, candidate:Candidate, args:Sequence) -> tuple:
		return tuple(
			None if arg is None else self.visit(param, arg)
			for param, arg in zip(candidate.params, args)
		)

	def visit_PrimitiveType(self, param:PrimitiveType, arg):
		# Primitive parameters get plain Python values.
		if param.rank != Rank.NAN and _convertible(arg):
			return param.convert(arg)
		return arg

	def visit_ClassType(self, param:ClassType, arg):
		# Boxed parameters get a wrapper of their own rank.
		# An instance of the class itself, or a subclass, arrives untouched.
		if isinstance(arg, param.cls): return arg
		rank = param.rank
		if rank != Rank.NAN and _convertible(arg):
			return BOXED[rank](arg)
		return arg

	def visit_ArrayType(self, param:ArrayType, arg):
		if isinstance(arg, MutableSequence):
			return tuple(arg)
		return arg

def _convertible(arg) -> bool:
	return is_number(arg) or isinstance(arg, Character)
