"""
The statement dispatcher.

Each kind of statement gets a visit_ method. The scope in effect is passed
down explicitly; nothing about the "current" scope is kept on the side.
"""
from boozetools.support.foundation import Visitor
from .. import syntax
from ..diagnostics import (
	Report, StructuralError, UndefinedIdentifier, MissingParameter,
	DuplicateVariable, MismatchedType, UnresolvedCall,
)
from ..preamble import check_condition
from ..space import Scope
from .runtime import reduce_expression
from .values import EvalValue, Variable, ValueType, Parameters, UNDEFINED, lookup_param, is_integer

OPERANDS = (syntax.Identifier, syntax.Number, syntax.String, syntax.Expression, syntax.ParameterValue)

def unwrap(statement:syntax.Statement) -> syntax.Statement:
	while isinstance(statement, syntax.ParameterValue): statement = statement.body
	return statement

class Evaluator(Visitor):
	def __init__(self, report:Report, *, isolate_blocks:bool=False, lenient_calls:bool=False):
		self._report = report
		self._isolate_blocks = isolate_blocks
		self._lenient_calls = lenient_calls

	def evaluate(self, statement:syntax.Statement, scope:Scope) -> EvalValue:
		if not isinstance(statement, syntax.Statement):
			raise StructuralError("Expected a statement, got %r" % (statement,))
		assert isinstance(scope, Scope), scope
		self._report.trace("evaluate", statement)
		value = self.visit(statement, scope)
		assert isinstance(value, EvalValue), (statement, value)
		return value

	def block_scope(self, scope:Scope) -> Scope:
		""" Nested blocks see their enclosing blocks, unless isolated; then they see only the globals. """
		return Scope(scope.root()) if self._isolate_blocks else scope.child()

	def parameters(self, params, scope:Scope) -> Parameters:
		return tuple((p.key, self.evaluate(p.value, scope)) for p in params)

	###########################################################################

	def visit_OpenTag(self, tag:syntax.OpenTag, scope:Scope) -> EvalValue:
		inner = self.block_scope(scope)
		for child in tag.children:
			if isinstance(child, syntax.IfStatement):
				# The first conditional ends the block, by rule.
				return self.visit_IfStatement(child, inner)
			elif isinstance(child, (syntax.OpenTag, syntax.CloseTag)):
				self.evaluate(child, inner)
			else:
				self._report.trace("skipping", child, "in", tag)
		return UNDEFINED

	def visit_CloseTag(self, tag:syntax.CloseTag, scope:Scope) -> EvalValue:
		if tag.name == syntax.LET:
			return self.let_declaration(tag, scope)
		found, variable = scope.get_variable(tag.name)
		if found and variable.as_value().is_callable():
			return variable.value.call(self.parameters(tag.params, scope))
		why = "is a %s, not a function" % variable.value_type if found else "is not a function in scope"
		if self._lenient_calls:
			self._report.warn("Ignoring call: '%s' %s" % (tag.name, why))
			return UNDEFINED
		raise UnresolvedCall(tag.name, why)

	def let_declaration(self, tag:syntax.CloseTag, scope:Scope) -> EvalValue:
		params = tuple(
			(p.key, self._declared_name(p.value, scope) if p.key == "id" else self.evaluate(p.value, scope))
			for p in tag.params
		)
		value, ident = lookup_param(params, "value"), lookup_param(params, "id")
		if value is None: raise MissingParameter("value")
		if ident is None: raise MissingParameter("id")
		if ident.type not in (ValueType.STRING, ValueType.IDENTIFIER):
			raise MismatchedType("Expect string or id for 'id' found %s" % ident.type)
		name = ident.value
		if scope.get_variable(name)[0] or not scope.define_variable(Variable.holding(name, value)):
			raise DuplicateVariable(name)
		self._report.trace("let", name, "=", value)
		return UNDEFINED

	def _declared_name(self, statement:syntax.Statement, scope:Scope) -> EvalValue:
		""" A bare identifier in the 'id' slot is the name being declared, not a reference. """
		bare = unwrap(statement)
		if isinstance(bare, syntax.Identifier): return EvalValue.identifier(bare.name)
		return self.evaluate(statement, scope)

	def visit_IfStatement(self, tag:syntax.IfStatement, scope:Scope) -> EvalValue:
		if check_condition(tag.params, lambda operand: self.evaluate(operand, scope)):
			for child in tag.children:
				self.evaluate(child, scope)
		return UNDEFINED

	def visit_ParameterValue(self, pv:syntax.ParameterValue, scope:Scope) -> EvalValue:
		return self.evaluate(pv.body, scope)

	def visit_Identifier(self, ident:syntax.Identifier, scope:Scope) -> EvalValue:
		found, variable = scope.get_variable(ident.name)
		if not found: raise UndefinedIdentifier(ident.name)
		return variable.as_value()

	def visit_Number(self, num:syntax.Number, scope:Scope) -> EvalValue:
		if not is_integer(num.value):
			raise StructuralError("Number literal %d does not fit in 64 bits" % num.value)
		return EvalValue.number(num.value)

	def visit_String(self, text:syntax.String, scope:Scope) -> EvalValue:
		return EvalValue.string(text.value)

	def visit_Expression(self, expr:syntax.Expression, scope:Scope) -> EvalValue:
		return reduce_expression(expr, scope, self.operand)

	def operand(self, item:syntax.Statement, scope:Scope) -> EvalValue:
		if not isinstance(item, OPERANDS):
			raise StructuralError("%r cannot be an operand" % (item,))
		return self.evaluate(item, scope)

	def visit_End(self, end:syntax.End, scope:Scope) -> EvalValue:
		return UNDEFINED

	def visit_Operator(self, op:syntax.Operator, scope:Scope) -> EvalValue:
		raise StructuralError("Operator '%s' outside of an expression" % op.glyph)

	def visit_Statement(self, statement:syntax.Statement, scope:Scope) -> EvalValue:
		raise StructuralError("Unknown statement kind %r" % (statement,))
