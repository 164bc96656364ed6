"""
Scoring one candidate against one concrete argument list.

Points per position, from best to worst fit:

	6   the argument's class is exactly the parameter's class
	5   the parameter's class is a superclass (or ABC) of the argument's
	4   a mutable sequence given for an array of anything,
	    or a number of the same rank
	3   a number widening to a higher rank
	2   null given for the top type, or a whole number becoming a char
	1   null given for any other reference type, or anything for the top type

A null for a primitive parameter, or any position which earns nothing,
spoils the whole candidate. Two empty lists score 1: a perfectly good match.
"""
from collections.abc import MutableSequence
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .numrank import Rank, score_numeric
from .ontology import Candidate, ClassType, ArrayType
from .primitive import PrimitiveType

BAD = -1

class CandidateScorer(Visitor):
	"""
	Each `visit_*` method returns the points for one (parameter, argument)
	pair, dispatching on the kind of parameter. Zero means no fit.
	"""

	def __init__(self, recast_decimals:bool):
		self.recast_decimals = recast_decimals

	def score(self, candidate:Candidate, args:Sequence) -> int:
		if len(args) != len(candidate.params): return BAD
		if not args: return 1
		total = 0
		for param, arg in zip(candidate.params, args):
			points = self.visit(param, arg)
			if points <= 0: return BAD
			total += points
		return total

	def best_match(self, candidates:Sequence[Candidate], args:Sequence) -> Optional[Candidate]:
		""" Strictly the highest score wins; among equals, whoever came first. """
		best, high_score = None, 0
		for candidate in candidates:
			points = self.score(candidate, args)
			if points > high_score:
				best, high_score = candidate, points
		return best

	def _numeric(self, param, arg) -> int:
		return score_numeric(arg, type(arg), param, self.recast_decimals)

	def visit_PrimitiveType(self, param:PrimitiveType, arg) -> int:
		if arg is None: return 0
		if param.rank == Rank.NAN:
			return 4 if isinstance(arg, bool) else 0
		return self._numeric(param, arg)

	def visit_ClassType(self, param:ClassType, arg) -> int:
		if arg is None: return 2 if param.is_top() else 1
		if param.is_top(): return 1
		arg_type = type(arg)
		if arg_type is param.cls: return 6
		if issubclass(arg_type, param.cls): return 5
		return self._numeric(param, arg)

	def visit_ArrayType(self, param:ArrayType, arg) -> int:
		if arg is None: return 1
		if isinstance(arg, tuple) and all(self.visit(param.element, item) > 0 for item in arg):
			return 6
		if param.holds_anything() and isinstance(arg, MutableSequence):
			return 4
		return 0
