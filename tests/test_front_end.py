from pathlib import Path
import tempfile
import unittest

from tagwalk import syntax
from tagwalk.diagnostics import StructuralError, NestedTooDeeply
from tagwalk.front_end import load_program, loads_program, build

example_folder = Path(__file__).parent.parent/"examples"

def nested_blocks(depth:int) -> str:
	""" A program of depth blocks, one inside the next, around a single Print. """
	inner = '{"Kind": "CloseTag", "Body": {"Name": "Print", "Params": [{"Key": "a", "Value": {"Kind": "String", "Body": "deep"}}]}}'
	for _ in range(depth):
		inner = '{"Kind": "OpenTag", "Body": {"Name": "Block", "Params": [], "Children": [%s]}}' % inner
	return '{"Statements": [%s]}' % inner

class LoaderTests(unittest.TestCase):

	def test_example_tree_shape(self):
		program = load_program(example_folder/"conditional.json")
		let, main, end = program.statements
		self.assertIsInstance(let, syntax.CloseTag)
		self.assertEqual(["id", "value"], [p.key for p in let.params])
		self.assertIsInstance(let.params[0].value, syntax.Identifier)
		self.assertIsInstance(main, syntax.OpenTag)
		self.assertIsInstance(main.children[0], syntax.IfStatement)
		condition = main.children[0].params[0].value
		self.assertIsInstance(condition, syntax.Expression)
		self.assertEqual("greater", condition.statements[-1].glyph)
		self.assertIsInstance(end, syntax.End)

	def test_bare_list_of_statements(self):
		program = loads_program('[{"Kind": "Number", "Body": 4}, {"Kind": "EOF"}]')
		self.assertEqual(2, len(program.statements))
		self.assertEqual(4, program.statements[0].value)

	def test_parameter_value_wraps_a_statement(self):
		node = build({"Kind": "ParameterValue", "Body": {"Kind": "String", "Body": "s"}})
		self.assertIsInstance(node, syntax.ParameterValue)
		self.assertEqual("s", node.body.value)

	def test_shape_violations(self):
		for text, where in [
			('{"Statements": [{"Kind": "Loop", "Body": null}]}', "$.Statements[0]"),
			('{"Statements": [{"Kind": "Number", "Body": "5"}]}', "$.Statements[0].Body"),
			('{"Statements": [{"Kind": "Number", "Body": true}]}', "$.Statements[0].Body"),
			('{"Statements": [{"Kind": "CloseTag", "Body": {"Params": []}}]}', "$.Statements[0].Body"),
			('{"Statements": [{"Kind": "CloseTag", "Body": {"Name": "Print", "Params": [{"Key": "a"}]}}]}', "Params[0]"),
			('{"Statements": [{"Body": 5}]}', "$.Statements[0]"),
			('{"Program": []}', "$"),
			('[1, 2]', "$.Statements[0]"),
			('{"Statements": [', "JSON"),
		]:
			with self.subTest(text):
				with self.assertRaises(StructuralError) as cm:
					loads_program(text)
				self.assertIn(where, str(cm.exception))

	def test_null_children_mean_none(self):
		node = build({"Kind": "OpenTag", "Body": {"Name": "Block", "Params": None, "Children": None}})
		self.assertEqual((), node.children)
		self.assertEqual((), node.params)

	def test_file_must_be_utf8(self):
		with tempfile.TemporaryDirectory() as folder:
			path = Path(folder)/"latin1.json"
			path.write_bytes(b'{"Statements": [{"Kind": "String", "Body": "\xff"}]}')
			with self.assertRaises(StructuralError) as cm:
				load_program(path)
		self.assertIn("not valid UTF-8", str(cm.exception))
		self.assertIn("latin1.json", str(cm.exception))

	def test_reasonable_nesting_loads(self):
		program = loads_program(nested_blocks(20))
		node = program.statements[0]
		for _ in range(20):
			self.assertIsInstance(node, syntax.OpenTag)
			node = node.children[0]
		self.assertEqual("Print", node.name)

	def test_absurd_nesting_is_structural(self):
		with self.assertRaises(NestedTooDeeply) as cm:
			loads_program(nested_blocks(1000))
		self.assertIn("nested too deeply", str(cm.exception))

if __name__ == '__main__':
	unittest.main()
