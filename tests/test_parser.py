"""Tests for the ES module parser."""

import pytest

from dbgmacros.parser import parse
from dbgmacros.parser.ast_nodes import *


def test_import_forms():
    program = parse(
        "import 'polyfill';\n"
        "import def, { a, b as c } from 'mod';\n"
        "import * as ns from 'other';\n")

    assert len(program.imports) == 3
    bare, named, namespace = program.imports
    assert bare.specifiers == []
    assert bare.source.value == 'polyfill'

    assert isinstance(named.specifiers[0], ImportDefaultSpecifier)
    assert named.specifiers[0].local.name == 'def'
    assert named.specifiers[2].imported.name == 'b'
    assert named.specifiers[2].local.name == 'c'

    assert isinstance(namespace.specifiers[0], ImportNamespaceSpecifier)
    assert namespace.specifiers[0].local.name == 'ns'


def test_reserved_word_import_needs_alias():
    program = parse("import { default as main } from 'mod';")
    assert program.imports[0].specifiers[0].imported.name == 'default'

    with pytest.raises(SyntaxError, match="needs an alias"):
        parse("import { default } from 'mod';")


def test_call_statement():
    program = parse("warn('x', y);")
    stmt = program.body[0]

    assert isinstance(stmt, ExpressionStatement)
    assert isinstance(stmt.expression, CallExpression)
    assert stmt.expression.callee.name == 'warn'
    assert [type(a) for a in stmt.expression.arguments] == [StringLiteral, Identifier]


def test_logical_operators_associate_left():
    expression = parse("a && b && c;").body[0].expression

    assert isinstance(expression, LogicalExpression)
    assert isinstance(expression.left, LogicalExpression)
    assert expression.right.name == 'c'


def test_precedence():
    expression = parse("a || b && c + d * e;").body[0].expression

    assert expression.operator == '||'
    assert expression.right.operator == '&&'
    assert expression.right.right.operator == '+'
    assert expression.right.right.right.operator == '*'


def test_exponent_is_right_associative():
    expression = parse("a ** b ** c;").body[0].expression

    assert expression.left.name == 'a'
    assert expression.right.operator == '**'


def test_parentheses_are_kept():
    expression = parse("!(a > b);").body[0].expression

    assert isinstance(expression, UnaryExpression)
    assert isinstance(expression.argument, ParenthesizedExpression)


def test_arrow_functions():
    program = parse("const f = (a, b = 1) => a + b;\nconst g = x => { return x; };")

    f = program.body[0].declarations[0].init
    assert isinstance(f, ArrowFunctionExpression)
    assert isinstance(f.params[1], AssignmentPattern)
    assert f.expression

    g = program.body[1].declarations[0].init
    assert isinstance(g.body, BlockStatement)


def test_object_literal_properties():
    obj = parse("x = { id: 'a', 'until': 2, short, method() {}, [key]: 1 };").body[0].expression.right

    assert isinstance(obj, ObjectExpression)
    keys = obj.properties
    assert keys[0].key.name == 'id'
    assert keys[1].key.value == 'until'
    assert keys[2].shorthand
    assert keys[3].method
    assert keys[4].computed


def test_automatic_semicolon_insertion():
    program = parse("warn('a')\nwarn('b')")
    assert len(program.body) == 2

    with pytest.raises(SyntaxError, match="Expected ';'"):
        parse("warn('a') warn('b')")


def test_for_statements():
    program = parse(
        "for (let i = 0; i < n; i++) {}\n"
        "for (const k in obj) {}\n"
        "for (const v of list) {}\n")

    assert isinstance(program.body[0], ForStatement)
    assert isinstance(program.body[1], ForInStatement)
    assert isinstance(program.body[2], ForOfStatement)


def test_exports():
    program = parse(
        "export const a = 1;\n"
        "export function f() {}\n"
        "export { a as b };\n"
        "export default f;\n")

    assert isinstance(program.body[0].declaration, VariableDeclaration)
    assert isinstance(program.body[1].declaration, FunctionDeclaration)
    assert program.body[2].specifiers[0].exported.name == 'b'
    assert isinstance(program.body[3], ExportDefaultDeclaration)


def test_anonymous_default_function_ends_the_statement():
    program = parse(
        "export default function () {}\n"
        "(run)();\n")

    assert len(program.body) == 2
    assert isinstance(program.body[0].declaration, FunctionExpression)
    assert isinstance(program.body[1].expression, CallExpression)


def test_import_inside_function_is_rejected():
    with pytest.raises(SyntaxError, match="only allowed at the top level"):
        parse("function f() { import 'x'; }")


def test_error_location():
    with pytest.raises(SyntaxError) as info:
        parse("warn(\n  'x',,\n);", "bad.js")
    assert str(info.value).startswith("bad.js:2:")


def test_unsupported_statement():
    with pytest.raises(SyntaxError, match="Unsupported statement: with"):
        parse("with (obj) {}")


def test_class_declaration():
    program = parse(
        "class Widget extends Base {\n"
        "  constructor(a) { super(a); }\n"
        "  static create() { return new Widget(); }\n"
        "  get size() { return this.n; }\n"
        "  render() { super.render(); }\n"
        "}\n")

    cls = program.body[0]
    assert isinstance(cls, ClassDeclaration)
    assert cls.id.name == 'Widget'
    assert cls.super_class.name == 'Base'
    assert [(m.kind, m.static) for m in cls.body] == [
        ('constructor', False), ('method', True), ('get', False), ('method', False)]
    constructor_call = cls.body[0].value.body.body[0].expression
    assert isinstance(constructor_call.callee, Super)


def test_class_fields_are_rejected():
    with pytest.raises(SyntaxError, match="Class fields are not supported"):
        parse("class A { x = 1; }")


def test_object_accessors():
    obj = parse("o = { get a() { return 1; }, set a(v) {}, get: 1 };").body[0].expression.right
    assert [p.kind for p in obj.properties] == ['get', 'set', 'init']
    assert obj.properties[2].key.name == 'get'


def test_switch_and_labels():
    program = parse(
        "outer: for (;;) {\n"
        "  switch (x) {\n"
        "    case 1:\n"
        "      break outer;\n"
        "    default:\n"
        "      continue;\n"
        "  }\n"
        "}\n"
        "do run(); while (busy)\n")

    labeled = program.body[0]
    assert isinstance(labeled, LabeledStatement)
    switch = labeled.body.body.body[0]
    assert isinstance(switch, SwitchStatement)
    assert switch.cases[0].consequent[0].label.name == 'outer'
    assert switch.cases[1].test is None
    assert isinstance(program.body[1], DoWhileStatement)


def test_duplicate_default_clause():
    with pytest.raises(SyntaxError, match="More than one default"):
        parse("switch (x) { default: a(); default: b(); }")
