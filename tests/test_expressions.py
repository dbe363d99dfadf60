"""
The operand-stack machine and the meaning of each operator.
"""
import unittest

from tagwalk import syntax
from tagwalk.diagnostics import Report, TypeMismatch, DivisionByZero, StructuralError, StackUnderflow
from tagwalk.space import Scope
from tagwalk.tree_walker.evaluator import Evaluator
from tagwalk.tree_walker.values import EvalValue, ValueType, Variable, INT_MAX, INT_MIN

num, text, op = syntax.Number, syntax.String, syntax.Operator

def expr(*items): return syntax.Expression(items)

class ExpressionTests(unittest.TestCase):

	def setUp(self) -> None:
		self.scope = Scope()
		self.sut = Evaluator(Report())

	def reduce(self, *items) -> EvalValue:
		return self.sut.evaluate(expr(*items), self.scope)

	def test_numeric_operators_apply_left_to_right(self):
		for a, glyph, b, expect in [
			(7, "+", 3, EvalValue.number(10)),
			(7, "-", 3, EvalValue.number(4)),
			(3, "-", 7, EvalValue.number(-4)),
			(7, "*", 3, EvalValue.number(21)),
			(7, "/", 2, EvalValue.number(3)),
			(2, "/", 7, EvalValue.number(0)),
			(7, "greater", 3, EvalValue.boolean(True)),
			(3, "greater", 7, EvalValue.boolean(False)),
			(3, "smaller", 7, EvalValue.boolean(True)),
			(7, "smaller", 7, EvalValue.boolean(False)),
			(3, "==", 3, EvalValue.boolean(True)),
			(3, "==", 4, EvalValue.boolean(False)),
			(3, "!=", 4, EvalValue.boolean(True)),
		]:
			with self.subTest("%d %s %d" % (a, glyph, b)):
				self.assertEqual(expect, self.reduce(num(a), num(b), op(glyph)))
				self.assertEqual(0, self.scope.depth())

	def test_division_truncates_toward_zero(self):
		self.assertEqual(EvalValue.number(-3), self.reduce(num(-7), num(2), op("/")))
		self.assertEqual(EvalValue.number(-3), self.reduce(num(7), num(-2), op("/")))
		self.assertEqual(EvalValue.number(3), self.reduce(num(-7), num(-2), op("/")))

	def test_integers_wrap_at_64_bits(self):
		self.assertEqual(EvalValue.number(INT_MIN), self.reduce(num(INT_MAX), num(1), op("+")))
		self.assertEqual(EvalValue.number(INT_MAX), self.reduce(num(INT_MIN), num(1), op("-")))

	def test_string_concatenation(self):
		self.assertEqual(EvalValue.string("foobar"), self.reduce(text("foo"), text("bar"), op("+")))

	def test_string_equality(self):
		self.assertEqual(EvalValue.boolean(True), self.reduce(text("a"), text("a"), op("==")))
		self.assertEqual(EvalValue.boolean(True), self.reduce(text("a"), text("b"), op("!=")))

	def test_nested_expression(self):
		# 2 + (3 * 4)
		result = self.reduce(num(2), expr(num(3), num(4), op("*")), op("+"))
		self.assertEqual(EvalValue.number(14), result)
		self.assertEqual(0, self.scope.depth())

	def test_type_mismatch(self):
		for items in [
			(num(1), text("1"), op("+")),
			(text("a"), text("b"), op("-")),
			(text("a"), text("b"), op("*")),
			(text("a"), text("b"), op("greater")),
			(num(1), text("1"), op("==")),
			(expr(num(1), num(2), op("smaller")), expr(num(1), num(2), op("smaller")), op("==")),
		]:
			with self.subTest(items):
				with self.assertRaises(TypeMismatch):
					self.reduce(*items)

	def test_division_by_zero(self):
		with self.assertRaises(DivisionByZero):
			self.reduce(num(1), num(0), op("/"))

	def test_malformed_expressions(self):
		for items in [
			(),
			(num(1), num(2)),
			(num(1), num(2), op("%")),
			(num(1), expr(num(2), op("+"))),
			(syntax.CloseTag("Print"),),
		]:
			with self.subTest(items):
				with self.assertRaises(StructuralError):
					self.reduce(*items)
				self.assertEqual(0, self.scope.depth())

	def test_missing_operand_is_underflow(self):
		with self.assertRaises(StackUnderflow):
			self.reduce(num(1), op("+"))

	def test_operand_may_be_a_variable(self):
		self.scope.push(EvalValue.number(99))  # Someone else's operand stays put.
		self.scope.define_variable(Variable("x", 8, ValueType.NUMBER))
		self.assertEqual(EvalValue.number(16), self.reduce(syntax.Identifier("x"), num(2), op("*")))
		self.assertEqual(EvalValue.number(99), self.scope.pop())

if __name__ == '__main__':
	unittest.main()
