"""
This is an evaluator for tag-structured programs.

{0}

For example:

    tagwalk program.json

will run the statement tree in program.json, as the parser left it.

    tagwalk -h

will explain all the arguments.
"""
import sys, argparse

parser = argparse.ArgumentParser(
	prog="tagwalk",
	description="Tree-walking evaluator for tag-structured programs.",
)
parser.add_argument("program", help="a statement tree in JSON, e.g. examples/hello.json")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Narrate on stderr. Twice traces every statement.")
parser.add_argument("--isolate-blocks", action="store_true", help="Nested blocks see only globals, not their enclosing blocks.")
parser.add_argument("--lenient", action="store_true", help="Warn about calls to unknown names instead of failing.")

def run(args, out=None) -> int:
	from .diagnostics import Report, TagRuntimeError
	from .front_end import load_program
	from .tree_walker.executive import Interpreter, Options
	options = Options(isolate_blocks=args.isolate_blocks, lenient_calls=args.lenient, verbose=args.verbose)
	report = Report(verbose=args.verbose)
	try:
		program = load_program(args.program)
		report.info("Loaded", args.program)
		Interpreter(program, options=options, report=report, out=out).run()
	except OSError as ex:
		report.complain_to_console("Cannot read %s: %s" % (args.program, ex.strerror), out)
		return 1
	except TagRuntimeError as ex:
		report.complain_to_console(ex, out)
		return 1
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
