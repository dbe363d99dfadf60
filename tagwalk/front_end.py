"""
Loading a statement tree that some parser has already produced.

The interchange form is JSON, shaped the way the upstream parser marshals
its nodes: every statement is {"Kind": ..., "Body": ...} and the program is
{"Statements": [...]}. Shape is checked here, node by node, so that the
evaluator never has to guess. Problems come back as StructuralError
with a path to the offending node.
"""
import json
from pathlib import Path
from typing import Any, Union
from . import syntax
from .diagnostics import StructuralError, NestedTooDeeply

def load_program(path:Union[str, Path]) -> syntax.Program:
	path = Path(path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			document = json.load(fh)
	except json.JSONDecodeError as ex:
		raise StructuralError("%s is not valid JSON: %s" % (path, ex)) from None
	except UnicodeDecodeError as ex:
		raise StructuralError("%s is not valid UTF-8: %s at byte %d" % (path, ex.reason, ex.start)) from None
	except RecursionError:
		raise NestedTooDeeply(str(path)) from None
	return build_program(document)

def loads_program(text:str) -> syntax.Program:
	try: document = json.loads(text)
	except json.JSONDecodeError as ex:
		raise StructuralError("Program text is not valid JSON: %s" % ex) from None
	except RecursionError:
		raise NestedTooDeeply() from None
	return build_program(document)

def build_program(document:Any) -> syntax.Program:
	if isinstance(document, list):
		items = document
	else:
		items = _field(document, "Statements", list, "$")
	try: return syntax.Program(tuple(build(s, "$.Statements[%d]" % i) for i, s in enumerate(items)))
	except RecursionError: raise NestedTooDeeply() from None

def build(node:Any, where:str="$") -> syntax.Statement:
	kind = _field(node, "Kind", str, where)
	try: builder = _BUILDERS[kind]
	except KeyError: raise StructuralError("%s: unknown statement kind %r" % (where, kind)) from None
	body = node.get("Body")
	return builder(body, where + ".Body")

###############################################################################

def _field(node, key, typ, where):
	if not isinstance(node, dict):
		raise StructuralError("%s: expected an object, found %s" % (where, type(node).__name__))
	try: value = node[key]
	except KeyError: raise StructuralError("%s: missing %r" % (where, key)) from None
	if value is None and typ is list: return []
	if not isinstance(value, typ) or (typ is int and isinstance(value, bool)):
		raise StructuralError("%s.%s: expected %s, found %s" % (where, key, typ.__name__, type(value).__name__))
	return value

def _scalar(typ, where, body):
	if not isinstance(body, typ) or isinstance(body, bool):
		raise StructuralError("%s: expected %s, found %s" % (where, typ.__name__, type(body).__name__))
	return body

def _params(body, where):
	items = _field(body, "Params", list, where)
	params = []
	for i, p in enumerate(items):
		at = "%s.Params[%d]" % (where, i)
		params.append(syntax.Parameter(_field(p, "Key", str, at), build(_field(p, "Value", dict, at), at + ".Value")))
	return params

def _children(body, where):
	items = _field(body, "Children", list, where)
	return [build(c, "%s.Children[%d]" % (where, i)) for i, c in enumerate(items)]

def _open_tag(body, where):
	return syntax.OpenTag(_field(body, "Name", str, where), _params(body, where), _children(body, where))

def _if_statement(body, where):
	return syntax.IfStatement(_field(body, "Name", str, where), _params(body, where), _children(body, where))

def _close_tag(body, where):
	return syntax.CloseTag(_field(body, "Name", str, where), _params(body, where))

def _expression(body, where):
	items = _field(body, "Statements", list, where)
	return syntax.Expression([build(s, "%s.Statements[%d]" % (where, i)) for i, s in enumerate(items)])

def _parameter_value(body, where):
	return syntax.ParameterValue(build(body, where))

_BUILDERS = {
	"OpenTag": _open_tag,
	"CloseTag": _close_tag,
	"IfStatement": _if_statement,
	"ParameterValue": _parameter_value,
	"Expression": _expression,
	"Identifier": lambda body, where: syntax.Identifier(_scalar(str, where, body)),
	"Number": lambda body, where: syntax.Number(_scalar(int, where, body)),
	"String": lambda body, where: syntax.String(_scalar(str, where, body)),
	"Operator": lambda body, where: syntax.Operator(_scalar(str, where, body)),
	"EOF": lambda body, where: syntax.End(),
}
