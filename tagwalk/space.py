"""
Scopes: a layer of variables which does not like duplicate names,
an optional link to the enclosing scope for lookup,
and the operand stack the expression engine works on.
"""
from typing import Optional
from .diagnostics import StackUnderflow
from .tree_walker.values import Variable, EvalValue

class Scope:
	_variables: dict[str, Variable]
	_stack: list[EvalValue]

	def __init__(self, parent:Optional["Scope"]=None):
		self._variables = {}
		self._stack = []
		self.parent = parent

	def child(self) -> "Scope":
		return Scope(self)

	def __contains__(self, name:str) -> bool:
		return name in self._variables

	def define_variable(self, variable:Variable) -> bool:
		""" Refuses, rather than overwrite, a name this very scope already holds. """
		assert isinstance(variable, Variable), variable
		if variable.name in self._variables:
			return False
		self._variables[variable.name] = variable
		return True

	def get_variable(self, name:str) -> tuple[bool, Optional[Variable]]:
		scope = self
		while scope is not None:
			try: return True, scope._variables[name]
			except KeyError: scope = scope.parent
		return False, None

	def root(self) -> "Scope":
		scope = self
		while scope.parent is not None: scope = scope.parent
		return scope

	# The operand stack:

	def push(self, value:EvalValue):
		assert isinstance(value, EvalValue), value
		self._stack.append(value)

	def pop(self) -> EvalValue:
		if not self._stack:
			raise StackUnderflow("Operand stack underflow: an operator lacks an operand")
		return self._stack.pop()

	def depth(self) -> int:
		return len(self._stack)

	def unwind(self, depth:int):
		del self._stack[depth:]
