"""
The expression engine: an operand-stack machine over the fixed operator set.

Operands arrive left to right and go on the scope's stack.
An operator takes the two most recent operands off the stack,
earlier-pushed on the left, and puts back its result.
"""
from typing import Callable
from .. import syntax
from ..diagnostics import TagRuntimeError, TypeMismatch, DivisionByZero, StructuralError
from ..space import Scope
from .values import EvalValue, ValueType, wrap_integer

def _both(kind:ValueType, a:EvalValue, b:EvalValue) -> bool:
	return a.type is kind and b.type is kind

def _mismatch(op:str, expect:str, a:EvalValue, b:EvalValue):
	return TypeMismatch("'%s' expects %s, found %s and %s" % (op, expect, a.type, b.type))

def _truncating_div(a:int, b:int) -> int:
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def _arithmetic(op:str, fn:Callable[[int, int], int]):
	def apply(a:EvalValue, b:EvalValue) -> EvalValue:
		if not _both(ValueType.NUMBER, a, b): raise _mismatch(op, "both number", a, b)
		return EvalValue.number(wrap_integer(fn(a.value, b.value)))
	return apply

def _relation(op:str, fn:Callable[[int, int], bool]):
	def apply(a:EvalValue, b:EvalValue) -> EvalValue:
		if not _both(ValueType.NUMBER, a, b): raise _mismatch(op, "both number", a, b)
		return EvalValue.boolean(fn(a.value, b.value))
	return apply

def _equality(op:str, negate:bool):
	def apply(a:EvalValue, b:EvalValue) -> EvalValue:
		if not (_both(ValueType.NUMBER, a, b) or _both(ValueType.STRING, a, b)):
			raise _mismatch(op, "string or number on both sides", a, b)
		return EvalValue.boolean((a.value == b.value) != negate)
	return apply

def _plus(a:EvalValue, b:EvalValue) -> EvalValue:
	if _both(ValueType.STRING, a, b): return EvalValue.string(a.value + b.value)
	if _both(ValueType.NUMBER, a, b): return EvalValue.number(wrap_integer(a.value + b.value))
	raise _mismatch("+", "string or number on both sides", a, b)

def _divide(a:EvalValue, b:EvalValue) -> EvalValue:
	if not _both(ValueType.NUMBER, a, b): raise _mismatch("/", "both number", a, b)
	if b.value == 0: raise DivisionByZero("Division of %d by zero" % a.value)
	return EvalValue.number(wrap_integer(_truncating_div(a.value, b.value)))

BINARY = {
	"+": _plus,
	"-": _arithmetic("-", lambda a, b: a - b),
	"*": _arithmetic("*", lambda a, b: a * b),
	"/": _divide,
	"greater": _relation("greater", lambda a, b: a > b),
	"smaller": _relation("smaller", lambda a, b: a < b),
	"==": _equality("==", False),
	"!=": _equality("!=", True),
}

def apply_operator(glyph:str, left:EvalValue, right:EvalValue) -> EvalValue:
	try: fn = BINARY[glyph]
	except KeyError: raise StructuralError("Unknown operator '%s'" % glyph) from None
	return fn(left, right)

def operate(op:syntax.Operator, scope:Scope) -> EvalValue:
	""" Pop right, then left, and answer the operator's result. The caller pushes it. """
	right = scope.pop()
	left = scope.pop()
	return apply_operator(op.glyph, left, right)

def reduce_expression(expr:syntax.Expression, scope:Scope, operand:Callable[[syntax.Statement, Scope], EvalValue]) -> EvalValue:
	"""
	Run the stack machine over one expression.
	Nested expressions share the stack, so "exactly one value left"
	is measured against the depth found on entry.
	"""
	base = scope.depth()
	try:
		for item in expr.statements:
			if isinstance(item, syntax.Operator): scope.push(operate(item, scope))
			else: scope.push(operand(item, scope))
			if scope.depth() <= base:
				# An operator reached below this expression's own operands.
				raise StructuralError("Expression %r consumed operands it does not own" % (expr,))
		if scope.depth() != base + 1:
			raise StructuralError("Expression %r reduced to %d values instead of one" % (expr, scope.depth() - base))
	except TagRuntimeError:
		scope.unwind(base)
		raise
	return scope.pop()
