"""
The built-in callables every program starts out with.

Natives live in a registry keyed by name. Anything decorated with
@native gets installed into each fresh global scope; the evaluator
never needs to know the list.
"""
import sys
from typing import Any, Callable, TextIO
from . import syntax
from .diagnostics import MissingParameter, UnexpectedParameter, MismatchedType
from .space import Scope
from .tree_walker.values import (
	Function, EvalValue, Variable, ValueType, Parameters, UNDEFINED,
)

CONDITION = "condition"

class NativeFunction(Function):
	is_native = True

	def __init__(self, name:str, fn:Callable[["Interpreter", Parameters], EvalValue]):
		self.name = name
		self._fn = fn
		self.interpreter = None

	def bind(self, interpreter) -> "NativeFunction":
		""" A fresh copy that knows where to send its output. """
		bound = NativeFunction(self.name, self._fn)
		bound.interpreter = interpreter
		return bound

	def call(self, params:Parameters) -> EvalValue:
		return self._fn(self.interpreter, params)

REGISTRY: dict[str, NativeFunction] = {}

def native(name:str):
	# Let is handled by the evaluator; a native by that name could never be reached.
	assert name == syntax.IF or not syntax.is_keyword(name), name
	def register(fn):
		assert name not in REGISTRY, name
		REGISTRY[name] = NativeFunction(name, fn)
		return fn
	return register

def global_scope(interpreter=None) -> Scope:
	""" A new root scope with every registered native defined in it. """
	scope = Scope()
	for name, fn in REGISTRY.items():
		ok = scope.define_variable(Variable.holding(name, EvalValue.of_function(fn.bind(interpreter))))
		assert ok, name
	return scope

###############################################################################

def check_condition(params, evaluate:Callable[[Any], EvalValue]) -> bool:
	"""
	The one place a conditional decides, for the statement and the call alike.
	The first parameter must be 'condition', and that is settled before
	evaluate() ever sees its operand. The value must really be a boolean:
	there is no truthiness.
	"""
	if not params:
		raise MissingParameter(CONDITION, "param for if statement")
	key, operand = params[0]
	if key != CONDITION:
		raise UnexpectedParameter(CONDITION, key)
	value = evaluate(operand)
	if not value.is_boolean():
		raise MismatchedType("Expect boolean for '%s' found %s" % (CONDITION, value.type))
	return value.value

def _output(interpreter) -> TextIO:
	return interpreter.out if interpreter is not None else sys.stdout

@native("Print")
def native_print(interpreter, params:Parameters) -> EvalValue:
	words = [str(v.value) for _, v in params if v.type in (ValueType.STRING, ValueType.IDENTIFIER)]
	print(*words, file=_output(interpreter))
	return UNDEFINED

@native(syntax.IF)
def native_if(interpreter, params:Parameters) -> EvalValue:
	# Already evaluated at the call site.
	return EvalValue.boolean(check_condition(params, lambda value: value))
