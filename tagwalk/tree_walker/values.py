"""
This module defines the value-types that the tree-walker operates in terms of.
Every evaluation produces an EvalValue: a type tag plus the datum it describes.
The datum always agrees with its tag; constructing one that doesn't is a bug
in the evaluator, so it is asserted rather than reported.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

class ValueType(Enum):
	UNDEFINED = "undefined"
	STRING = "string"
	IDENTIFIER = "id"
	NUMBER = "number"
	BOOLEAN = "boolean"
	FUNCTION = "function"
	NATIVE_FUNCTION = "n-function"
	ARRAY = "array"
	OBJECT = "object"

	def __str__(self): return self.value

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1

def is_integer(x) -> bool:
	return isinstance(x, int) and not isinstance(x, bool) and INT_MIN <= x <= INT_MAX

def wrap_integer(x:int) -> int:
	""" Fold an arbitrary Python int into the signed 64-bit range, two's-complement style. """
	return ((x - INT_MIN) % (1 << INT_BITS)) + INT_MIN


class Function(ABC):
	""" A run-time object that can be called with evaluated parameters. """
	name: str
	is_native: bool = False

	@abstractmethod
	def call(self, params:"Parameters") -> "EvalValue": pass

	def __repr__(self): return "<%s %s>" % (type(self).__name__, self.name)


_REPRESENTATION = {
	ValueType.UNDEFINED: lambda v: v is None,
	ValueType.STRING: lambda v: isinstance(v, str),
	ValueType.IDENTIFIER: lambda v: isinstance(v, str),
	ValueType.NUMBER: is_integer,
	ValueType.BOOLEAN: lambda v: isinstance(v, bool),
	ValueType.FUNCTION: lambda v: isinstance(v, Function) and not v.is_native,
	ValueType.NATIVE_FUNCTION: lambda v: isinstance(v, Function) and v.is_native,
	ValueType.ARRAY: lambda v: isinstance(v, tuple),
	ValueType.OBJECT: lambda v: isinstance(v, dict),
}

@dataclass(frozen=True)
class EvalValue:
	type: ValueType
	value: Any = None

	def __post_init__(self):
		assert isinstance(self.type, ValueType), self.type
		assert _REPRESENTATION[self.type](self.value), (self.type, self.value)

	def __str__(self):
		if self.type is ValueType.BOOLEAN: return "true" if self.value else "false"
		if self.type is ValueType.UNDEFINED: return "undefined"
		return str(self.value)

	def is_boolean(self): return self.type is ValueType.BOOLEAN
	def is_callable(self): return self.type in (ValueType.FUNCTION, ValueType.NATIVE_FUNCTION)

	@staticmethod
	def number(n:int) -> "EvalValue": return EvalValue(ValueType.NUMBER, n)
	@staticmethod
	def string(s:str) -> "EvalValue": return EvalValue(ValueType.STRING, s)
	@staticmethod
	def boolean(b:bool) -> "EvalValue": return EvalValue(ValueType.BOOLEAN, bool(b))
	@staticmethod
	def identifier(name:str) -> "EvalValue": return EvalValue(ValueType.IDENTIFIER, name)
	@staticmethod
	def of_function(fn:Function) -> "EvalValue":
		return EvalValue(ValueType.NATIVE_FUNCTION if fn.is_native else ValueType.FUNCTION, fn)

UNDEFINED = EvalValue(ValueType.UNDEFINED)

# Evaluated arguments, in declaration order.
Parameters = Sequence[tuple[str, EvalValue]]

def lookup_param(params:Parameters, key:str):
	""" First value bound to key, or None. """
	for k, v in params:
		if k == key: return v


@dataclass
class Variable:
	name: str
	value: Any
	value_type: ValueType

	def __post_init__(self):
		assert isinstance(self.name, str), self.name
		assert _REPRESENTATION[self.value_type](self.value), (self.value_type, self.value)

	def as_value(self) -> EvalValue:
		return EvalValue(self.value_type, self.value)

	@staticmethod
	def holding(name:str, value:EvalValue) -> "Variable":
		return Variable(name, value.value, value.type)
