"""Tests for JavaScript code generation."""

import pytest

from dbgmacros.codegen import generate
from dbgmacros.codegen.codegen import quote_string
from dbgmacros.parser import parse
from dbgmacros.parser.ast_nodes import *


def regenerate(source: str) -> str:
    return generate(parse(source))


@pytest.mark.parametrize("source", [
    "import { a, b as c } from 'mod';",
    "import def, * as ns from 'mod';",
    "import 'side-effect';",
    "export const x = 1, y = 'two';",
    "export { a as b } from 'mod';",
    "export default f;",
    "export default function() {}",
    "export default function named(a) {}",
    "const f = (a, b = 1, ...rest) => a + b;",
    "let g = x => ({ x });",
    "if (a) {\n  b();\n} else c();",
    "x = a ? b : c;",
    "y = !(a && b) || c;",
    "z = (a, b);",
    "obj.method(...args)[key] = new Thing(1);",
    "i++, --j;",
    "w = typeof v === 'undefined';",
    "arr = [1, , 3];",
    "export class A {}",
    "export default class {}",
    "o = { get a() {}, set a(v) {}, get: 1 };",
    "class A extends mixin(B) {\n  constructor(a) {\n    super(a);\n  }\n  static make() {}\n  get size() {\n    return this.n;\n  }\n  [key]() {}\n}",
    "switch (x) {\n  case 1:\n    a();\n    break;\n  default:\n    b();\n}",
    "outer: for (;;) {\n  continue outer;\n}",
    "do {\n  run();\n} while (busy);",
])
def test_round_trip(source):
    assert regenerate(source) == source + "\n"


def test_blocks_are_indented():
    source = (
        "function f(a) {\n"
        "  if (a) {\n"
        "    return 1;\n"
        "  }\n"
        "  for (const k of a) {}\n"
        "  return 2;\n"
        "}\n"
    )
    assert regenerate(source) == source


def test_try_catch_finally():
    source = (
        "try {\n"
        "  run();\n"
        "} catch (e) {\n"
        "  log(e);\n"
        "} finally {\n"
        "  done();\n"
        "}\n"
    )
    assert regenerate(source) == source


def test_literal_source_text_is_kept():
    assert regenerate('x = "double" + 0xFF;') == "x = \"double\" + 0xFF;\n"


def test_built_expressions_get_needed_parentheses():
    # (a || b) && c built without a ParenthesizedExpression node
    node = LogicalExpression('&&', LogicalExpression('||', Identifier('a'), Identifier('b')), Identifier('c'))
    program = Program([ExpressionStatement(node)])
    assert generate(program) == "(a || b) && c;\n"


def test_guarded_call_shape():
    call = CallExpression(MemberExpression(Identifier('console'), Identifier('warn')),
                          [StringLiteral('hi')])
    guard = LogicalExpression('&&', LogicalExpression('&&', BooleanLiteral(False),
                                                     UnaryExpression('!', ParenthesizedExpression(Identifier('p')))),
                              call)
    program = Program([ExpressionStatement(ParenthesizedExpression(guard))])
    assert generate(program) == "(false && !(p) && console.warn('hi'));\n"


def test_statement_starting_with_object_is_wrapped():
    program = Program([ExpressionStatement(ObjectExpression([]))])
    assert generate(program) == "({});\n"


def test_quote_string():
    assert quote_string("it's\n") == "'it\\'s\\n'"


def test_empty_program():
    assert generate(Program([])) == ""
