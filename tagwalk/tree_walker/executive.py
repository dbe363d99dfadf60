"""
This is the overall control for the run-time:
a cursor walks the top-level statements, in order, against one global scope.
"""
import sys
from typing import NamedTuple, Optional, TextIO
from .. import syntax
from ..diagnostics import Report, NestedTooDeeply
from ..preamble import global_scope
from .evaluator import Evaluator
from .values import EvalValue

class Options(NamedTuple):
	isolate_blocks: bool = False
	lenient_calls: bool = False
	verbose: int = 0

class Interpreter:
	current_statement: Optional[syntax.Statement]

	def __init__(self, program:syntax.Program, *, options:Options=Options(), report:Report=None, out:TextIO=None):
		assert isinstance(program, syntax.Program), program
		self.program = program
		self.options = options
		self.report = report or Report(verbose=options.verbose)
		self.out = out or sys.stdout
		self.scope = global_scope(self)
		self.evaluator = Evaluator(self.report, isolate_blocks=options.isolate_blocks, lenient_calls=options.lenient_calls)
		self.current_index = 0
		self.is_finished = not program.statements
		self.current_statement = None if self.is_finished else program.statements[0]

	def next(self):
		self.current_index += 1
		if self.current_index < len(self.program.statements):
			self.current_statement = self.program.statements[self.current_index]
		else:
			self.current_statement = None
			self.is_finished = True

	def step(self) -> EvalValue:
		assert not self.is_finished
		try: result = self.evaluator.evaluate(self.current_statement, self.scope)
		except RecursionError: raise NestedTooDeeply("Statement %d" % (self.current_index + 1)) from None
		self.next()
		return result

	def run(self):
		""" Evaluate everything. Errors propagate; there is nothing partial to salvage. """
		self.report.info("Running %d statement(s)" % len(self.program.statements))
		while not self.is_finished:
			self.step()
		self.out.flush()

def run_program(program:syntax.Program, options:Options=Options(), out:TextIO=None) -> Interpreter:
	interpreter = Interpreter(program, options=options, out=out)
	interpreter.run()
	return interpreter
