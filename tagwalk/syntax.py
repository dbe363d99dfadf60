"""
The statement tree, as delivered by the parser.

There is one class per kind of node, and nothing else is a Statement.
The evaluator dispatches on these classes by name, so adding a kind here
without teaching the evaluator about it gets you a StructuralError, not silence.
The tree is built once and not mutated afterward: sequences are tuples.
"""
from typing import NamedTuple, Sequence

LET, IF = "Let", "If"
KEYWORDS = frozenset([LET, IF])

def is_keyword(name:str) -> bool:
	return name in KEYWORDS

class Statement:
	""" Root of the closed family of statement kinds. """
	kind: str = "Statement"
	def __repr__(self): return "<%s>" % self.kind

class Parameter(NamedTuple):
	""" An unevaluated argument: it gets evaluated at the call site. """
	key: str
	value: Statement

def _params(params) -> tuple[Parameter, ...]:
	params = tuple(params or ())
	for p in params: assert isinstance(p, Parameter), p
	return params

def _statements(items) -> tuple[Statement, ...]:
	items = tuple(items or ())
	for s in items: assert isinstance(s, Statement), s
	return items

class OpenTag(Statement):
	""" A block: a name, some parameters, and children. """
	kind = "OpenTag"
	def __init__(self, name:str, params:Sequence[Parameter]=(), children:Sequence[Statement]=()):
		assert isinstance(name, str), name
		self.name = name
		self.params = _params(params)
		self.children = _statements(children)
	def __repr__(self): return "<%s %s/%d>" % (self.kind, self.name, len(self.children))

class IfStatement(OpenTag):
	""" The conditional form of a block. Its first parameter is the condition. """
	kind = "IfStatement"

class CloseTag(Statement):
	""" A single-shot invocation: a declaration or a function call. """
	kind = "CloseTag"
	def __init__(self, name:str, params:Sequence[Parameter]=()):
		assert isinstance(name, str), name
		self.name = name
		self.params = _params(params)
	def __repr__(self): return "<%s %s>" % (self.kind, self.name)

class ParameterValue(Statement):
	kind = "ParameterValue"
	def __init__(self, body:Statement):
		assert isinstance(body, Statement), body
		self.body = body
	def __repr__(self): return "<=%r>" % (self.body,)

class Identifier(Statement):
	kind = "Identifier"
	def __init__(self, name:str):
		assert isinstance(name, str), name
		self.name = name
	def __repr__(self): return "<id:%s>" % self.name

class Number(Statement):
	kind = "Number"
	def __init__(self, value:int):
		assert isinstance(value, int) and not isinstance(value, bool), value
		self.value = value
	def __repr__(self): return "<num:%d>" % self.value

class String(Statement):
	kind = "String"
	def __init__(self, value:str):
		assert isinstance(value, str), value
		self.value = value
	def __repr__(self): return "<str:%r>" % self.value

class Operator(Statement):
	""" Only meaningful inside an Expression. """
	kind = "Operator"
	def __init__(self, glyph:str):
		assert isinstance(glyph, str), glyph
		self.glyph = glyph
	def __repr__(self): return "<op:%s>" % self.glyph

class Expression(Statement):
	""" Operands and operators, in the order the operand stack wants them. """
	kind = "Expression"
	def __init__(self, statements:Sequence[Statement]):
		self.statements = _statements(statements)
	def __repr__(self): return "<expr %s>" % ' '.join(map(repr, self.statements))

class End(Statement):
	kind = "EOF"

class Program(NamedTuple):
	statements: tuple[Statement, ...]

	@staticmethod
	def of(*statements:Statement) -> "Program":
		return Program(_statements(statements))

