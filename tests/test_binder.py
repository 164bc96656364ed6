import enum
import unittest
from decimal import Decimal
from unittest import mock

from polybind.binder import Binder
from polybind.errors import NoSuchMember, NoSuchOverload, AmbiguousBinding, InvocationFailure, NotImported
from polybind.ontology import Construct, ConstructNested, InvokeMethod
from polybind.primitive import Byte, Short, Character, Long, Float
from polybind.for_test_purposes import Tester, Outer, Animal, Dog, Color, Measures

class Level(enum.IntEnum):
	LOW = 1
	HIGH = 2

class Box:
	@staticmethod
	def keep(level: int): return level

class OverloadSelectionTests(unittest.TestCase):
	""" Which `Tester.method_overload` runs for each kind of argument """
	def setUp(self):
		self.binder = Binder()
		Tester.id = -1

	def which(self, arg):
		self.binder.call(Tester, "method_overload", [arg])
		return Tester.id

	def test_numbers_find_their_own_rank(self):
		self.assertEqual(Tester.BYTE, self.which(Byte(5)))
		self.assertEqual(Tester.SHORT, self.which(Short(5)))
		self.assertEqual(Tester.CHAR, self.which(Character("a")))
		self.assertEqual(Tester.INT, self.which(5))
		self.assertEqual(Tester.LONG, self.which(Long(5)))
		self.assertEqual(Tester.FLOAT, self.which(Float(2.5)))
		self.assertEqual(Tester.DOUBLE, self.which(2.5))

	def test_everything_else(self):
		self.assertEqual(Tester.OBJ, self.which("a string"))
		self.assertEqual(Tester.OBJ, self.which(None))
		self.assertEqual(Tester.OBJARR, self.which([1, 2, 3]))
		self.assertEqual(Tester.OBJARR, self.which((1, 2, 3)))

	def test_decimals_by_value(self):
		self.assertEqual(Tester.BYTE, self.which(Decimal(5)))
		self.assertEqual(Tester.INT, self.which(Decimal(40000)))
		self.assertEqual(Tester.LONG, self.which(Decimal(2**40)))
		self.assertEqual(Tester.FLOAT, self.which(Decimal("2.5")))

	def test_decimals_opaque(self):
		self.binder.recast_decimals = False
		self.assertEqual(Tester.OBJ, self.which(Decimal(5)))
		self.binder.recast_decimals = True
		self.assertEqual(Tester.BYTE, self.which(Decimal(5)))

	def test_object_or_int(self):
		self.assertIs(True, self.binder.call(Tester, "true_if_int", [5]))
		self.assertIs(False, self.binder.call(Tester, "true_if_int", [None]))
		self.assertIs(False, self.binder.call(Tester, "true_if_int", ["five"]))

	def test_two_arguments(self):
		self.assertEqual((1, 2), self.binder.call(Tester, "two_arg_test", [1, 2]))
		self.assertEqual(Tester.INT, Tester.id)
		self.assertEqual((1.5, 2.0), self.binder.call(Tester, "two_arg_test", [Float(1.5), 2]))
		self.assertEqual(Tester.FLOAT, Tester.id)
		with self.assertRaises(NoSuchOverload):
			self.binder.call(Tester, "two_arg_test", [1.5, 2])

	def test_widening_to_char(self):
		self.assertEqual(65, self.binder.call(Tester, "echo", [Byte(65)]))
		self.assertEqual("A", self.binder.call(Tester, "echo", [65]))
		self.assertEqual("B", self.binder.call(Tester, "as_char", [Byte(66)]))

	def test_var_args(self):
		self.assertEqual((1, 2), self.binder.call(Tester, "var_arg_method", [[1, 2]]))
		self.assertEqual((), self.binder.call(Tester, "var_arg_method", [()]))
		with self.assertRaises(NoSuchOverload):
			self.binder.call(Tester, "var_arg_method", [])

	def test_null_for_var_args(self):
		self.assertEqual((None,), self.binder.call(Tester, "var_arg_method", [None]))

class DecimalTests(unittest.TestCase):
	def test_toggle_controls_numeric_fit(self):
		binder = Binder()
		self.assertEqual(7, binder.call(Tester, "as_int", [Decimal(7)]))
		binder.recast_decimals = False
		with self.assertRaises(NoSuchOverload):
			binder.call(Tester, "as_int", [Decimal(7)])

	def test_exact_decimal_either_way(self):
		for recast in (True, False):
			with self.subTest(recast=recast):
				binder = Binder(recast_decimals=recast)
				self.assertEqual(Decimal("1.25"), binder.call(Tester, "exact_decimal", [Decimal("1.25")]))

class CoercionTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def test_primitive_parameters_get_plain_values(self):
		self.assertEqual(7, self.binder.call(Tester, "as_int", [Byte(7)]))
		self.assertIs(int, type(self.binder.call(Tester, "as_int", [Short(7)])))

	def test_boxed_parameters_get_wrappers(self):
		result = self.binder.call(Tester, "as_long", [5])
		self.assertIsInstance(result, Long)
		self.assertEqual(5, result.value)
		same = Long(9)
		self.assertIs(same, self.binder.call(Tester, "as_long", [same]))

	def test_subclass_arrives_untouched(self):
		self.assertIs(Level.LOW, self.binder.call(Box, "keep", [Level.LOW]))
		self.assertIs(True, self.binder.call(Box, "keep", [True]))

	def test_characters_widen_into_boxed_numbers(self):
		self.assertEqual(Long(65), self.binder.call(Tester, "as_long", [Character("A")]))
		self.assertEqual(66, self.binder.call(Tester, "as_int", [Character("B")]))

	def test_list_becomes_array(self):
		items = [1, "two", None]
		snapshot = self.binder.call(Tester, "snapshot", [items])
		self.assertEqual((1, "two", None), snapshot)
		self.assertEqual(3, len(snapshot))
		items.append(4)
		self.assertEqual(3, len(snapshot))

class ConstructionTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def test_construct_by_own_name(self):
		tester = self.binder.call(Tester, "Tester", [])
		self.assertIsInstance(tester, Tester)
		self.assertEqual("pong", self.binder.call(tester, "ping", []))

	def test_resolve_says_what_it_found(self):
		self.assertIsInstance(self.binder.resolve(Tester, "Tester", []), Construct)
		self.assertIsInstance(self.binder.resolve(Tester, "true_if_int", [5]), InvokeMethod)

	def test_new_instance(self):
		dog = self.binder.new_instance(Dog, ["rex"])
		self.assertEqual("rex", dog.name)
		with self.assertRaises(NotImported):
			self.binder.new_instance("Dog", ["rex"])
		self.binder.scan_import("polybind.for_test_purposes.*")
		self.assertIsInstance(self.binder.new_instance("Dog", ["rex"]), Dog)

	def test_direct_use_does_not_import(self):
		self.binder.call(Dog, "Dog", ["rex"])
		self.binder.call(Outer, "Nested", [1])
		self.assertFalse(self.binder.class_imported("Dog"))
		self.assertFalse(self.binder.class_imported("Outer"))
		with self.assertRaises(NotImported):
			self.binder.type_named("Dog")

	def test_constructor_overloads(self):
		with self.assertRaises(NoSuchOverload):
			self.binder.call(Outer, "Outer", [5])
		self.assertEqual("x", self.binder.call(Outer, "Outer", ["x"]).label)

	def test_builtin_class(self):
		it = self.binder.call(list, "list", [])
		self.binder.call(it, "append", [4])
		self.binder.call(it, "append", [None])
		self.assertEqual([4, None], it)

	def test_enumerations_have_no_constructors(self):
		with self.assertRaises(NoSuchMember):
			self.binder.call(Color, "Color", [1])

class NestedTypeTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def test_inner_class_needs_an_instance(self):
		with self.assertRaises(AmbiguousBinding):
			self.binder.call(Tester, "InnerNoInt", [Float(1.5)])
		with self.assertRaises(AmbiguousBinding):
			self.binder.call(Outer, "Inner", [3])

	def test_inner_class_gets_the_enclosing_instance(self):
		outer = Outer("here")
		ref = self.binder.resolve(outer, "Inner", [3])
		self.assertIsInstance(ref, ConstructNested)
		self.assertIs(outer, ref.enclosing)
		inner = self.binder.perform(ref)
		self.assertIs(outer, inner.outer)
		self.assertEqual(3, inner.n)

	def test_inner_constructor_overloads(self):
		tester = self.binder.call(Tester, "Tester", [])
		inner = self.binder.call(tester, "InnerNoInt", [Float(1.5)])
		self.assertIs(tester, inner.outer)
		self.assertEqual(1.5, inner.o)
		with self.assertRaises(InvocationFailure):
			self.binder.call(tester, "InnerNoInt", [1])

	def test_static_nested_class(self):
		nested = self.binder.call(Outer, "Nested", [3])
		self.assertIsInstance(nested, Outer.Nested)
		self.assertEqual(3, nested.n)
		self.assertIs(True, self.binder.call(Tester.StaticInner, "call_me", []))

class InheritanceTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()
		self.dog = Dog("rex")

	def test_most_derived_first(self):
		self.assertEqual("woof", self.binder.call(self.dog, "speak", []))
		self.assertEqual("...", self.binder.call(Animal("cat"), "speak", []))

	def test_overloads_across_the_hierarchy(self):
		self.assertEqual("hello, dog", self.binder.call(self.dog, "greet", [Dog("fido")]))
		self.assertEqual("hello, animal", self.binder.call(self.dog, "greet", [Animal("cat")]))
		self.assertEqual("hello, thing", self.binder.call(self.dog, "greet", [42]))

	def test_abstract_base_classes(self):
		self.assertEqual("list", self.binder.call(Measures, "size", [[1]]))
		self.assertEqual("sized", self.binder.call(Measures, "size", ["ab"]))

	def test_null_prefers_the_top_type(self):
		self.assertEqual("str", self.binder.call(Measures, "pick", ["s"]))
		self.assertEqual("object", self.binder.call(Measures, "pick", [None]))

class FailureTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def test_no_such_member(self):
		with self.assertRaises(NoSuchMember):
			self.binder.call(Tester, "no_such_thing", [])
		with self.assertRaises(NoSuchMember):
			self.binder.call(Tester, "_private", [])

	def test_no_such_overload(self):
		with self.assertRaises(NoSuchOverload):
			self.binder.call(Measures, "nothing", [1])

	def test_invocation_failure_keeps_the_cause(self):
		with self.assertRaises(InvocationFailure) as context:
			self.binder.call(Tester, "explode", [])
		self.assertIsInstance(context.exception.__cause__, ZeroDivisionError)

	def test_instance_method_from_the_bare_type(self):
		with self.assertRaises(InvocationFailure):
			self.binder.call(Tester, "ping", [])

	def test_calling_overloads_directly(self):
		with self.assertRaises(TypeError):
			Tester.true_if_int(5)

	def test_lookups_return_none(self):
		self.assertIsNone(self.binder.get_method(Tester, "true_if_int", [1, 2]))
		self.assertIsNone(self.binder.get_method(Tester, "no_such_thing"))
		self.assertIsNone(self.binder.get_constructor(Outer, [5]))
		self.assertIsNotNone(self.binder.get_constructor(Outer, ["x"]))

	def test_invoke_a_found_method(self):
		found = self.binder.get_method(Tester, "true_if_int", [7])
		self.assertIs(True, self.binder.invoke(Tester, found, [7]))

	def test_invoke_nothing_found(self):
		found = self.binder.get_method(Tester, "true_if_int", [1, 2])
		with self.assertRaises(NoSuchOverload):
			self.binder.invoke(Tester, found, [1, 2])

class FieldTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def test_static_and_instance_fields(self):
		self.assertEqual(Tester.OBJ, self.binder.get_field(Tester, "OBJ"))
		self.assertEqual(4, self.binder.get_field(Dog("rex"), "legs"))
		self.assertEqual("rex", self.binder.get_field(Dog("rex"), "name"))

	def test_enumeration_constants(self):
		red = self.binder.get_field(Color, "RED")
		self.assertIs(Color.RED, red)
		self.assertEqual("RED!", self.binder.call(red, "shout", []))
		with self.assertRaises(NoSuchMember):
			self.binder.set_field(Color, "RED", 3)

	def test_methods_are_not_fields(self):
		with self.assertRaises(NoSuchMember):
			self.binder.get_field(Tester, "method_overload")
		with self.assertRaises(NoSuchMember):
			self.binder.get_field(Tester, "missing")

	def test_set_field(self):
		dog = Dog("rex")
		self.binder.set_field(dog, "name", "fido")
		self.assertEqual("fido", dog.name)
		with self.assertRaises(NoSuchMember):
			self.binder.set_field(dog, "speak", None)

	def test_field_or_nested(self):
		self.assertIs(Tester.StaticInner, self.binder.get_field_or_nested(Tester, "StaticInner"))
		self.assertEqual(Tester.DECIMAL, self.binder.get_field_or_nested(Tester, "DECIMAL"))

class MemoTests(unittest.TestCase):
	def setUp(self):
		self.binder = Binder()

	def count_scoring(self):
		scorer = self.binder._scorer
		return mock.patch.object(scorer, "best_match", wraps=scorer.best_match)

	def test_same_shape_resolves_once(self):
		with self.count_scoring() as spy:
			self.binder.call(Tester, "true_if_int", [5])
			self.binder.call(Tester, "true_if_int", [6])
			self.assertEqual(1, spy.call_count)
			self.binder.call(Tester, "true_if_int", [None])
			self.assertEqual(2, spy.call_count)

	def test_decimals_are_never_memoized(self):
		with self.count_scoring() as spy:
			self.assertEqual(Tester.BYTE, self.which(Decimal(5)))
			self.assertEqual(Tester.LONG, self.which(Decimal(2**40)))
			self.assertEqual(2, spy.call_count)

	def test_toggle_is_part_of_the_key(self):
		self.assertEqual(Tester.BYTE, self.which(Decimal(5)))
		self.binder.recast_decimals = False
		self.assertEqual(Tester.OBJ, self.which(Decimal(5)))

	def which(self, arg):
		self.binder.call(Tester, "method_overload", [arg])
		return Tester.id

	def test_memo_stays_bounded(self):
		with mock.patch("polybind.binder.MEMO_LIMIT", 2):
			for arg in (5, "five", None, 2.5):
				self.binder.call(Tester, "true_if_int", [arg])
				self.assertLessEqual(len(self.binder._memo), 2)
		self.assertIs(True, self.binder.call(Tester, "true_if_int", [5]))

	def test_binders_keep_their_own_caches(self):
		other = Binder()
		self.binder.call(Tester, "true_if_int", [5])
		self.assertTrue(self.binder.registry.is_loaded(Tester))
		self.assertFalse(other.registry.is_loaded(Tester))

if __name__ == '__main__':
	unittest.main()
