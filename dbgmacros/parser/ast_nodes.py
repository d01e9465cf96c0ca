"""
Abstract Syntax Tree node definitions for ES module source.

Node classes follow the ESTree shapes (with Babel's literal names). Each
node lists its child attributes in ``fields`` so generic walkers can visit
and replace children without knowing every node type.
"""

from dataclasses import dataclass
from typing import List, Optional, Any
from enum import Enum, auto


class NodeType(Enum):
    """AST node types."""
    # Literals
    IDENTIFIER = auto()
    STRING_LITERAL = auto()
    NUMERIC_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    NULL_LITERAL = auto()
    TEMPLATE_LITERAL = auto()

    # Expressions
    THIS = auto()
    ARRAY = auto()
    OBJECT = auto()
    OBJECT_PROPERTY = auto()
    FUNCTION_EXPRESSION = auto()
    ARROW_FUNCTION = auto()
    UNARY = auto()
    UPDATE = auto()
    BINARY = auto()
    LOGICAL = auto()
    ASSIGNMENT = auto()
    CONDITIONAL = auto()
    CALL = auto()
    NEW = auto()
    MEMBER = auto()
    SEQUENCE = auto()
    SPREAD = auto()
    PARENTHESIZED = auto()
    SUPER = auto()
    CLASS_EXPRESSION = auto()
    METHOD_DEFINITION = auto()

    # Patterns
    ASSIGNMENT_PATTERN = auto()   # param = default
    REST_ELEMENT = auto()         # ...rest

    # Statements
    EXPRESSION_STATEMENT = auto()
    BLOCK = auto()
    EMPTY = auto()
    VARIABLE_DECLARATION = auto()
    VARIABLE_DECLARATOR = auto()
    FUNCTION_DECLARATION = auto()
    RETURN = auto()
    IF = auto()
    WHILE = auto()
    FOR = auto()
    FOR_IN = auto()
    FOR_OF = auto()
    THROW = auto()
    TRY = auto()
    CATCH = auto()
    BREAK = auto()
    CONTINUE = auto()
    DO_WHILE = auto()
    SWITCH = auto()
    SWITCH_CASE = auto()
    LABELED = auto()
    CLASS_DECLARATION = auto()

    # Modules
    IMPORT_DECLARATION = auto()
    IMPORT_SPECIFIER = auto()          # import { a as b }
    IMPORT_DEFAULT_SPECIFIER = auto()  # import a
    IMPORT_NAMESPACE_SPECIFIER = auto()  # import * as a
    EXPORT_NAMED = auto()
    EXPORT_SPECIFIER = auto()
    EXPORT_DEFAULT = auto()

    PROGRAM = auto()


# Nodes compare by identity
@dataclass(eq=False)
class ASTNode:
    """Base class for all AST nodes."""
    node_type: NodeType
    line: int = 0
    column: int = 0

    fields = ()

    def __repr__(self):
        return f"{self.__class__.__name__}(...)"


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

class Identifier(ASTNode):
    """Identifier reference or binding name."""
    def __init__(self, name: str, line: int = 0, column: int = 0):
        super().__init__(NodeType.IDENTIFIER, line, column)
        self.name = name

    def __repr__(self):
        return f"Identifier({self.name})"


class StringLiteral(ASTNode):
    """String literal; ``raw`` keeps the quoted source text."""
    def __init__(self, value: str, raw: Optional[str] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.STRING_LITERAL, line, column)
        self.value = value
        self.raw = raw

    def __repr__(self):
        return f"String({self.value!r})"


class TemplateLiteral(ASTNode):
    """Template string without substitutions."""
    def __init__(self, value: str, raw: str, line: int = 0, column: int = 0):
        super().__init__(NodeType.TEMPLATE_LITERAL, line, column)
        self.value = value
        self.raw = raw

    def __repr__(self):
        return f"Template({self.value!r})"


class NumericLiteral(ASTNode):
    """Number literal."""
    def __init__(self, value: Any, raw: Optional[str] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.NUMERIC_LITERAL, line, column)
        self.value = value
        self.raw = raw

    def __repr__(self):
        return f"Number({self.value})"


class BooleanLiteral(ASTNode):
    """``true`` / ``false``."""
    def __init__(self, value: bool, line: int = 0, column: int = 0):
        super().__init__(NodeType.BOOLEAN_LITERAL, line, column)
        self.value = value

    def __repr__(self):
        return f"Boolean({'true' if self.value else 'false'})"


class NullLiteral(ASTNode):
    def __init__(self, line: int = 0, column: int = 0):
        super().__init__(NodeType.NULL_LITERAL, line, column)

    def __repr__(self):
        return "Null()"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

class ThisExpression(ASTNode):
    def __init__(self, line: int = 0, column: int = 0):
        super().__init__(NodeType.THIS, line, column)

    def __repr__(self):
        return "This()"


class Super(ASTNode):
    def __init__(self, line: int = 0, column: int = 0):
        super().__init__(NodeType.SUPER, line, column)

    def __repr__(self):
        return "Super()"


class ArrayExpression(ASTNode):
    """Array literal. Holes are stored as None."""
    fields = ('elements',)

    def __init__(self, elements: List[Optional[ASTNode]] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.ARRAY, line, column)
        self.elements = elements or []

    def __repr__(self):
        return f"Array({len(self.elements)} elements)"


class ObjectProperty(ASTNode):
    """``key: value`` entry of an object literal."""
    fields = ('key', 'value')

    def __init__(self, key: ASTNode, value: ASTNode, computed: bool = False,
                 shorthand: bool = False, method: bool = False, line: int = 0, column: int = 0,
                 kind: str = 'init'):
        super().__init__(NodeType.OBJECT_PROPERTY, line, column)
        self.key = key
        self.value = value
        self.computed = computed
        self.shorthand = shorthand
        self.method = method  # `name(params) { body }`, value is a FunctionExpression
        self.kind = kind      # init, get or set

    def __repr__(self):
        return f"Property({self.key!r})"


class ObjectExpression(ASTNode):
    """Object literal. Properties are ObjectProperty or SpreadElement."""
    fields = ('properties',)

    def __init__(self, properties: List[ASTNode] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.OBJECT, line, column)
        self.properties = properties or []

    def __repr__(self):
        return f"Object({len(self.properties)} props)"


class FunctionExpression(ASTNode):
    """``function [name](params) { body }``"""
    fields = ('id', 'params', 'body')

    def __init__(self, id: Optional['Identifier'], params: List[ASTNode], body: 'BlockStatement',
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.FUNCTION_EXPRESSION, line, column)
        self.id = id
        self.params = params
        self.body = body

    def __repr__(self):
        name = self.id.name if self.id else '<anonymous>'
        return f"FunctionExpression({name}, {len(self.params)} params)"


class ArrowFunctionExpression(ASTNode):
    """``(params) => body``; ``expression`` is True when body is not a block."""
    fields = ('params', 'body')

    def __init__(self, params: List[ASTNode], body: ASTNode, expression: bool = False,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.ARROW_FUNCTION, line, column)
        self.params = params
        self.body = body
        self.expression = expression

    def __repr__(self):
        return f"Arrow({len(self.params)} params)"


class UnaryExpression(ASTNode):
    fields = ('argument',)

    def __init__(self, operator: str, argument: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.UNARY, line, column)
        self.operator = operator
        self.argument = argument

    def __repr__(self):
        return f"Unary({self.operator}, {self.argument!r})"


class UpdateExpression(ASTNode):
    """``++x`` / ``x--``"""
    fields = ('argument',)

    def __init__(self, operator: str, argument: ASTNode, prefix: bool,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.UPDATE, line, column)
        self.operator = operator
        self.argument = argument
        self.prefix = prefix

    def __repr__(self):
        return f"Update({self.operator}, prefix={self.prefix})"


class BinaryExpression(ASTNode):
    fields = ('left', 'right')

    def __init__(self, operator: str, left: ASTNode, right: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.BINARY, line, column)
        self.operator = operator
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Binary({self.left!r} {self.operator} {self.right!r})"


class LogicalExpression(ASTNode):
    """``&&``, ``||`` and ``??``"""
    fields = ('left', 'right')

    def __init__(self, operator: str, left: ASTNode, right: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.LOGICAL, line, column)
        self.operator = operator
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Logical({self.left!r} {self.operator} {self.right!r})"


class AssignmentExpression(ASTNode):
    fields = ('left', 'right')

    def __init__(self, operator: str, left: ASTNode, right: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.ASSIGNMENT, line, column)
        self.operator = operator
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Assign({self.left!r} {self.operator} ...)"


class ConditionalExpression(ASTNode):
    fields = ('test', 'consequent', 'alternate')

    def __init__(self, test: ASTNode, consequent: ASTNode, alternate: ASTNode,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.CONDITIONAL, line, column)
        self.test = test
        self.consequent = consequent
        self.alternate = alternate

    def __repr__(self):
        return "Conditional(...)"


class CallExpression(ASTNode):
    fields = ('callee', 'arguments')

    def __init__(self, callee: ASTNode, arguments: List[ASTNode] = None,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.CALL, line, column)
        self.callee = callee
        self.arguments = arguments if arguments is not None else []

    def __repr__(self):
        return f"Call({self.callee!r}, {len(self.arguments)} args)"


class NewExpression(ASTNode):
    fields = ('callee', 'arguments')

    def __init__(self, callee: ASTNode, arguments: List[ASTNode] = None,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.NEW, line, column)
        self.callee = callee
        self.arguments = arguments if arguments is not None else []

    def __repr__(self):
        return f"New({self.callee!r}, {len(self.arguments)} args)"


class MemberExpression(ASTNode):
    """``object.property`` or ``object[property]`` when computed."""
    fields = ('object', 'property')

    def __init__(self, object: ASTNode, property: ASTNode, computed: bool = False,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.MEMBER, line, column)
        self.object = object
        self.property = property
        self.computed = computed

    def __repr__(self):
        return f"Member({self.object!r}, {self.property!r})"


class SequenceExpression(ASTNode):
    fields = ('expressions',)

    def __init__(self, expressions: List[ASTNode], line: int = 0, column: int = 0):
        super().__init__(NodeType.SEQUENCE, line, column)
        self.expressions = expressions

    def __repr__(self):
        return f"Sequence({len(self.expressions)})"


class SpreadElement(ASTNode):
    fields = ('argument',)

    def __init__(self, argument: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.SPREAD, line, column)
        self.argument = argument

    def __repr__(self):
        return f"Spread({self.argument!r})"


class ParenthesizedExpression(ASTNode):
    """Explicit grouping, kept from the source and produced by macro expansion."""
    fields = ('expression',)

    def __init__(self, expression: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.PARENTHESIZED, line, column)
        self.expression = expression

    def __repr__(self):
        return f"Paren({self.expression!r})"


class AssignmentPattern(ASTNode):
    """Parameter with a default value."""
    fields = ('left', 'right')

    def __init__(self, left: Identifier, right: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.ASSIGNMENT_PATTERN, line, column)
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Default({self.left!r})"


class RestElement(ASTNode):
    fields = ('argument',)

    def __init__(self, argument: Identifier, line: int = 0, column: int = 0):
        super().__init__(NodeType.REST_ELEMENT, line, column)
        self.argument = argument

    def __repr__(self):
        return f"Rest({self.argument!r})"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

class ExpressionStatement(ASTNode):
    fields = ('expression',)

    def __init__(self, expression: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.EXPRESSION_STATEMENT, line, column)
        self.expression = expression

    def __repr__(self):
        return f"ExpressionStatement({self.expression!r})"


class BlockStatement(ASTNode):
    fields = ('body',)

    def __init__(self, body: List[ASTNode] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.BLOCK, line, column)
        self.body = body or []

    def __repr__(self):
        return f"Block({len(self.body)} stmts)"


class EmptyStatement(ASTNode):
    def __init__(self, line: int = 0, column: int = 0):
        super().__init__(NodeType.EMPTY, line, column)

    def __repr__(self):
        return "Empty()"


class VariableDeclarator(ASTNode):
    fields = ('id', 'init')

    def __init__(self, id: Identifier, init: Optional[ASTNode] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.VARIABLE_DECLARATOR, line, column)
        self.id = id
        self.init = init

    def __repr__(self):
        return f"Declarator({self.id.name})"


class VariableDeclaration(ASTNode):
    """``var`` / ``let`` / ``const`` declaration."""
    fields = ('declarations',)

    def __init__(self, kind: str, declarations: List[VariableDeclarator], line: int = 0, column: int = 0):
        super().__init__(NodeType.VARIABLE_DECLARATION, line, column)
        self.kind = kind
        self.declarations = declarations

    def __repr__(self):
        return f"VariableDeclaration({self.kind}, {[d.id.name for d in self.declarations]})"


class FunctionDeclaration(ASTNode):
    fields = ('id', 'params', 'body')

    def __init__(self, id: Identifier, params: List[ASTNode], body: BlockStatement,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.FUNCTION_DECLARATION, line, column)
        self.id = id
        self.params = params
        self.body = body

    def __repr__(self):
        return f"Function({self.id.name}, {len(self.params)} params, {len(self.body.body)} stmts)"


class ReturnStatement(ASTNode):
    fields = ('argument',)

    def __init__(self, argument: Optional[ASTNode] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.RETURN, line, column)
        self.argument = argument

    def __repr__(self):
        return "Return(...)"


class IfStatement(ASTNode):
    fields = ('test', 'consequent', 'alternate')

    def __init__(self, test: ASTNode, consequent: ASTNode, alternate: Optional[ASTNode] = None,
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.IF, line, column)
        self.test = test
        self.consequent = consequent
        self.alternate = alternate

    def __repr__(self):
        return f"If(else={self.alternate is not None})"


class WhileStatement(ASTNode):
    fields = ('test', 'body')

    def __init__(self, test: ASTNode, body: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.WHILE, line, column)
        self.test = test
        self.body = body

    def __repr__(self):
        return "While(...)"


class ForStatement(ASTNode):
    """Classic ``for (init; test; update)`` loop. Any clause may be None."""
    fields = ('init', 'test', 'update', 'body')

    def __init__(self, init: Optional[ASTNode], test: Optional[ASTNode], update: Optional[ASTNode],
                 body: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.FOR, line, column)
        self.init = init
        self.test = test
        self.update = update
        self.body = body

    def __repr__(self):
        return "For(...)"


class ForInStatement(ASTNode):
    fields = ('left', 'right', 'body')

    def __init__(self, left: ASTNode, right: ASTNode, body: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.FOR_IN, line, column)
        self.left = left
        self.right = right
        self.body = body

    def __repr__(self):
        return "ForIn(...)"


class ForOfStatement(ASTNode):
    fields = ('left', 'right', 'body')

    def __init__(self, left: ASTNode, right: ASTNode, body: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.FOR_OF, line, column)
        self.left = left
        self.right = right
        self.body = body

    def __repr__(self):
        return "ForOf(...)"


class ThrowStatement(ASTNode):
    fields = ('argument',)

    def __init__(self, argument: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.THROW, line, column)
        self.argument = argument

    def __repr__(self):
        return "Throw(...)"


class CatchClause(ASTNode):
    fields = ('param', 'body')

    def __init__(self, param: Optional[Identifier], body: BlockStatement, line: int = 0, column: int = 0):
        super().__init__(NodeType.CATCH, line, column)
        self.param = param
        self.body = body

    def __repr__(self):
        return "Catch(...)"


class TryStatement(ASTNode):
    fields = ('block', 'handler', 'finalizer')

    def __init__(self, block: BlockStatement, handler: Optional[CatchClause] = None,
                 finalizer: Optional[BlockStatement] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.TRY, line, column)
        self.block = block
        self.handler = handler
        self.finalizer = finalizer

    def __repr__(self):
        return "Try(...)"


class BreakStatement(ASTNode):
    # label is a jump target, not a child: it never resolves to a binding
    def __init__(self, label: Optional[Identifier] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.BREAK, line, column)
        self.label = label

    def __repr__(self):
        return "Break()"


class ContinueStatement(ASTNode):
    def __init__(self, label: Optional[Identifier] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.CONTINUE, line, column)
        self.label = label

    def __repr__(self):
        return "Continue()"


class DoWhileStatement(ASTNode):
    fields = ('body', 'test')

    def __init__(self, body: ASTNode, test: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.DO_WHILE, line, column)
        self.body = body
        self.test = test

    def __repr__(self):
        return "DoWhile(...)"


class SwitchCase(ASTNode):
    """``case test:`` followed by statements; test is None for ``default:``."""
    fields = ('test', 'consequent')

    def __init__(self, test: Optional[ASTNode], consequent: List[ASTNode], line: int = 0, column: int = 0):
        super().__init__(NodeType.SWITCH_CASE, line, column)
        self.test = test
        self.consequent = consequent

    def __repr__(self):
        return f"Case({len(self.consequent)} stmts)"


class SwitchStatement(ASTNode):
    fields = ('discriminant', 'cases')

    def __init__(self, discriminant: ASTNode, cases: List[SwitchCase], line: int = 0, column: int = 0):
        super().__init__(NodeType.SWITCH, line, column)
        self.discriminant = discriminant
        self.cases = cases

    def __repr__(self):
        return f"Switch({len(self.cases)} cases)"


class LabeledStatement(ASTNode):
    fields = ('body',)

    def __init__(self, label: Identifier, body: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.LABELED, line, column)
        self.label = label
        self.body = body

    def __repr__(self):
        return f"Labeled({self.label.name})"


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------

class MethodDefinition(ASTNode):
    """Class method; kind is constructor, method, get or set."""
    fields = ('key', 'value')

    def __init__(self, key: ASTNode, value: 'FunctionExpression', kind: str = 'method',
                 static: bool = False, computed: bool = False, line: int = 0, column: int = 0):
        super().__init__(NodeType.METHOD_DEFINITION, line, column)
        self.key = key
        self.value = value
        self.kind = kind
        self.static = static
        self.computed = computed

    def __repr__(self):
        return f"Method({self.kind}, {self.key!r})"


class ClassDeclaration(ASTNode):
    fields = ('id', 'super_class', 'body')

    def __init__(self, id: Identifier, super_class: Optional[ASTNode], body: List[MethodDefinition],
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.CLASS_DECLARATION, line, column)
        self.id = id
        self.super_class = super_class
        self.body = body

    def __repr__(self):
        return f"Class({self.id.name}, {len(self.body)} methods)"


class ClassExpression(ASTNode):
    fields = ('id', 'super_class', 'body')

    def __init__(self, id: Optional[Identifier], super_class: Optional[ASTNode], body: List[MethodDefinition],
                 line: int = 0, column: int = 0):
        super().__init__(NodeType.CLASS_EXPRESSION, line, column)
        self.id = id
        self.super_class = super_class
        self.body = body

    def __repr__(self):
        name = self.id.name if self.id else '<anonymous>'
        return f"ClassExpression({name}, {len(self.body)} methods)"


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------

class ImportSpecifier(ASTNode):
    """``imported as local`` inside ``import { ... }``."""
    fields = ('imported', 'local')

    def __init__(self, imported: Identifier, local: Identifier, line: int = 0, column: int = 0):
        super().__init__(NodeType.IMPORT_SPECIFIER, line, column)
        self.imported = imported
        self.local = local

    def __repr__(self):
        if self.imported.name == self.local.name:
            return f"ImportSpecifier({self.local.name})"
        return f"ImportSpecifier({self.imported.name} as {self.local.name})"


class ImportDefaultSpecifier(ASTNode):
    fields = ('local',)

    def __init__(self, local: Identifier, line: int = 0, column: int = 0):
        super().__init__(NodeType.IMPORT_DEFAULT_SPECIFIER, line, column)
        self.local = local

    def __repr__(self):
        return f"ImportDefault({self.local.name})"


class ImportNamespaceSpecifier(ASTNode):
    fields = ('local',)

    def __init__(self, local: Identifier, line: int = 0, column: int = 0):
        super().__init__(NodeType.IMPORT_NAMESPACE_SPECIFIER, line, column)
        self.local = local

    def __repr__(self):
        return f"ImportNamespace({self.local.name})"


class ImportDeclaration(ASTNode):
    fields = ('specifiers', 'source')

    def __init__(self, specifiers: List[ASTNode], source: StringLiteral, line: int = 0, column: int = 0):
        super().__init__(NodeType.IMPORT_DECLARATION, line, column)
        self.specifiers = specifiers
        self.source = source

    def __repr__(self):
        return f"Import({self.source.value!r}, {len(self.specifiers)} specifiers)"


class ExportSpecifier(ASTNode):
    fields = ('local', 'exported')

    def __init__(self, local: Identifier, exported: Identifier, line: int = 0, column: int = 0):
        super().__init__(NodeType.EXPORT_SPECIFIER, line, column)
        self.local = local
        self.exported = exported

    def __repr__(self):
        return f"ExportSpecifier({self.local.name} as {self.exported.name})"


class ExportNamedDeclaration(ASTNode):
    """``export <declaration>`` or ``export { a, b as c } [from 'src']``."""
    fields = ('declaration', 'specifiers', 'source')

    def __init__(self, declaration: Optional[ASTNode] = None, specifiers: List[ExportSpecifier] = None,
                 source: Optional[StringLiteral] = None, line: int = 0, column: int = 0):
        super().__init__(NodeType.EXPORT_NAMED, line, column)
        self.declaration = declaration
        self.specifiers = specifiers or []
        self.source = source

    def __repr__(self):
        return f"ExportNamed({self.declaration!r}, {len(self.specifiers)} specifiers)"


class ExportDefaultDeclaration(ASTNode):
    fields = ('declaration',)

    def __init__(self, declaration: ASTNode, line: int = 0, column: int = 0):
        super().__init__(NodeType.EXPORT_DEFAULT, line, column)
        self.declaration = declaration

    def __repr__(self):
        return f"ExportDefault({self.declaration!r})"


class Program(ASTNode):
    """Top-level program node: one ES module."""
    fields = ('body',)

    def __init__(self, body: List[ASTNode] = None, filename: str = "<input>"):
        super().__init__(NodeType.PROGRAM, 1, 1)
        self.body = body or []
        self.filename = filename

    @property
    def imports(self) -> List[ImportDeclaration]:
        return [stmt for stmt in self.body if isinstance(stmt, ImportDeclaration)]

    def __repr__(self):
        return f"Program({len(self.body)} stmts, {len(self.imports)} imports)"
