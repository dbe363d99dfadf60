"""
Everything about telling the user that something went wrong.

Fatal conditions are exceptions. They propagate out of the evaluator
untouched; the command-line converts them into the one-line complaint.
Lesser conditions, and chatter about what the evaluator is doing,
go through a Report.
"""
import sys
from typing import Any, TextIO

class TagRuntimeError(Exception):
	""" Root of everything that can abort a run. """
	def __str__(self): return self.args[0] if self.args else type(self).__name__

class StructuralError(TagRuntimeError):
	""" The statement tree does not honor the shape the evaluator relies on. """

class StackUnderflow(StructuralError):
	pass

class NestedTooDeeply(StructuralError):
	""" Loading and evaluation both recurse with the tree, so depth is bounded by Python's stack. """
	def __init__(self, what:str="Program"):
		super().__init__("%s is nested too deeply" % what)

class UndefinedIdentifier(TagRuntimeError):
	def __init__(self, name:str):
		super().__init__("'%s' is undefined" % name)
		self.name = name

class MissingParameter(TagRuntimeError):
	def __init__(self, key:str, where:str="param"):
		super().__init__("Expect '%s' %s" % (key, where))
		self.key = key

class UnexpectedParameter(TagRuntimeError):
	def __init__(self, expected:str, found:str):
		super().__init__("Expect '%s' param for if statement found '%s'" % (expected, found))
		self.expected, self.found = expected, found

class DuplicateVariable(TagRuntimeError):
	def __init__(self, name:str):
		super().__init__("%s is already declared" % name)
		self.name = name

class MismatchedType(TagRuntimeError):
	""" A conditional (or a declaration) got the wrong sort of value. """

class TypeMismatch(TagRuntimeError):
	""" An operator got operands it has no meaning for. """

class DivisionByZero(TagRuntimeError):
	pass

class UnresolvedCall(TagRuntimeError):
	def __init__(self, name:str, why:str="is not a function in scope"):
		super().__init__("'%s' %s" % (name, why))
		self.name = name


class Report:
	"""
	Collects warnings and, when verbose, narrates evaluation to stderr.
	verbose=1 gives phase-level notes; verbose=2 also traces each statement and operator.
	"""
	def __init__(self, *, verbose:int=0, stream:TextIO=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._stream = stream
		self.warnings = []

	@property
	def stream(self) -> TextIO:
		return self._stream or sys.stderr

	def ok(self): return not self.warnings

	def info(self, *args):
		if self._verbose:
			print(*args, file=self.stream)

	def trace(self, *args):
		if self._verbose > 1:
			print("  ", *args, file=self.stream)

	def warn(self, message:str):
		self.warnings.append(message)
		print("[Warning] %s" % message, file=self.stream)

	def complain_to_console(self, error:Any, out:TextIO=None):
		""" The one and only way a fatal error reaches the user. """
		print("[RuntimeError] %s" % error, file=out or sys.stdout)
		(out or sys.stdout).flush()
