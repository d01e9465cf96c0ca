"""
Code generator - converts the AST back to JavaScript source.

Literals keep their source text. Parentheses written in the source are
kept as ParenthesizedExpression nodes; the generator only adds the ones
operator precedence requires for trees built by transformations.
"""

from typing import List

from ..parser.ast_nodes import *
from ..parser.parser import BINARY_PRECEDENCE


# Expression precedence levels (higher binds tighter)
PREC_SEQUENCE = 0
PREC_ASSIGN = 1
PREC_CONDITIONAL = 2
PREC_BINARY_BASE = 2   # + BINARY_PRECEDENCE[op]
PREC_UNARY = 16
PREC_POSTFIX = 17
PREC_CALL = 18
PREC_MEMBER = 19
PREC_PRIMARY = 20

INDENT = '  '


def quote_string(value: str) -> str:
    """Quote a string for output with single quotes."""
    escaped = (value.replace('\\', '\\\\').replace("'", "\\'")
               .replace('\n', '\\n').replace('\r', '\\r').replace('\t', '\\t'))
    return f"'{escaped}'"


class CodeGenerator:
    """Generates JavaScript source from the AST."""

    def __init__(self):
        self.indent_level = 0

    def generate(self, program: Program) -> str:
        """Generate source for a whole program."""
        lines = [self.generate_statement(stmt) for stmt in program.body]
        return '\n'.join(lines) + '\n' if lines else ''

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def indent(self) -> str:
        return INDENT * self.indent_level

    def generate_block(self, block: BlockStatement) -> str:
        if not block.body:
            return '{}'
        self.indent_level += 1
        lines = [self.indent() + self.generate_statement(stmt) for stmt in block.body]
        self.indent_level -= 1
        return '{\n' + '\n'.join(lines) + '\n' + self.indent() + '}'

    def generate_body(self, node: ASTNode) -> str:
        """Body of if/while/for: a block or a single inline statement."""
        if isinstance(node, BlockStatement):
            return ' ' + self.generate_block(node)
        return ' ' + self.generate_statement(node)

    def generate_params(self, params: List[ASTNode]) -> str:
        parts = []
        for param in params:
            if isinstance(param, AssignmentPattern):
                parts.append(f"{param.left.name} = {self.generate_expression(param.right, PREC_ASSIGN)}")
            elif isinstance(param, RestElement):
                parts.append(f"...{param.argument.name}")
            else:
                parts.append(param.name)
        return '(' + ', '.join(parts) + ')'

    def generate_variable_declaration(self, node: VariableDeclaration) -> str:
        parts = []
        for declarator in node.declarations:
            if declarator.init is None:
                parts.append(declarator.id.name)
            else:
                parts.append(f"{declarator.id.name} = {self.generate_expression(declarator.init, PREC_ASSIGN)}")
        return f"{node.kind} " + ', '.join(parts)

    def generate_statement(self, node: ASTNode) -> str:
        """Generate source for one statement (without leading indentation)."""
        if isinstance(node, ExpressionStatement):
            expression = node.expression
            # A statement may not start with `function`, `class` or `{`
            if isinstance(expression, (FunctionExpression, ClassExpression, ObjectExpression)):
                return f"({self.generate_expression(expression)});"
            return self.generate_expression(expression) + ';'

        elif isinstance(node, ImportDeclaration):
            return self.generate_import(node)

        elif isinstance(node, ExportNamedDeclaration):
            if node.declaration is not None:
                return 'export ' + self.generate_statement(node.declaration)
            specs = []
            for spec in node.specifiers:
                if spec.local.name == spec.exported.name:
                    specs.append(spec.local.name)
                else:
                    specs.append(f"{spec.local.name} as {spec.exported.name}")
            text = 'export { ' + ', '.join(specs) + ' }' if specs else 'export {}'
            if node.source is not None:
                text += ' from ' + self.generate_expression(node.source)
            return text + ';'

        elif isinstance(node, ExportDefaultDeclaration):
            if isinstance(node.declaration, (FunctionDeclaration, ClassDeclaration)):
                return 'export default ' + self.generate_statement(node.declaration)
            if isinstance(node.declaration, (FunctionExpression, ClassExpression)):
                return 'export default ' + self.generate_expression(node.declaration)
            return 'export default ' + self.generate_expression(node.declaration, PREC_ASSIGN) + ';'

        elif isinstance(node, VariableDeclaration):
            return self.generate_variable_declaration(node) + ';'

        elif isinstance(node, FunctionDeclaration):
            return (f"function {node.id.name}{self.generate_params(node.params)} "
                    + self.generate_block(node.body))

        elif isinstance(node, ClassDeclaration):
            return self.generate_class(node)

        elif isinstance(node, BlockStatement):
            return self.generate_block(node)

        elif isinstance(node, EmptyStatement):
            return ';'

        elif isinstance(node, ReturnStatement):
            if node.argument is None:
                return 'return;'
            return f"return {self.generate_expression(node.argument)};"

        elif isinstance(node, IfStatement):
            text = f"if ({self.generate_expression(node.test)})" + self.generate_body(node.consequent)
            if node.alternate is not None:
                if not isinstance(node.consequent, BlockStatement):
                    text += '\n' + self.indent()
                text += ' else' if isinstance(node.consequent, BlockStatement) else 'else'
                text += self.generate_body(node.alternate)
            return text

        elif isinstance(node, WhileStatement):
            return f"while ({self.generate_expression(node.test)})" + self.generate_body(node.body)

        elif isinstance(node, ForStatement):
            if node.init is None:
                init = ''
            elif isinstance(node.init, VariableDeclaration):
                init = self.generate_variable_declaration(node.init)
            else:
                init = self.generate_expression(node.init)
            test = '' if node.test is None else ' ' + self.generate_expression(node.test)
            update = '' if node.update is None else ' ' + self.generate_expression(node.update)
            return f"for ({init};{test};{update})" + self.generate_body(node.body)

        elif isinstance(node, (ForInStatement, ForOfStatement)):
            if isinstance(node.left, VariableDeclaration):
                left = self.generate_variable_declaration(node.left)
            else:
                left = self.generate_expression(node.left, PREC_CALL)
            keyword = 'of' if isinstance(node, ForOfStatement) else 'in'
            right = self.generate_expression(node.right, PREC_ASSIGN)
            return f"for ({left} {keyword} {right})" + self.generate_body(node.body)

        elif isinstance(node, ThrowStatement):
            return f"throw {self.generate_expression(node.argument)};"

        elif isinstance(node, TryStatement):
            text = 'try ' + self.generate_block(node.block)
            if node.handler is not None:
                text += ' catch '
                if node.handler.param is not None:
                    text += f"({node.handler.param.name}) "
                text += self.generate_block(node.handler.body)
            if node.finalizer is not None:
                text += ' finally ' + self.generate_block(node.finalizer)
            return text

        elif isinstance(node, DoWhileStatement):
            text = 'do' + self.generate_body(node.body)
            text += ' ' if isinstance(node.body, BlockStatement) else '\n' + self.indent()
            return text + f"while ({self.generate_expression(node.test)});"

        elif isinstance(node, SwitchStatement):
            lines = []
            self.indent_level += 1
            for case in node.cases:
                if case.test is None:
                    lines.append(self.indent() + 'default:')
                else:
                    lines.append(self.indent() + f"case {self.generate_expression(case.test)}:")
                self.indent_level += 1
                lines.extend(self.indent() + self.generate_statement(stmt) for stmt in case.consequent)
                self.indent_level -= 1
            self.indent_level -= 1
            head = f"switch ({self.generate_expression(node.discriminant)}) "
            if not lines:
                return head + '{}'
            return head + '{\n' + '\n'.join(lines) + '\n' + self.indent() + '}'

        elif isinstance(node, LabeledStatement):
            return f"{node.label.name}: " + self.generate_statement(node.body)

        elif isinstance(node, (BreakStatement, ContinueStatement)):
            keyword = 'break' if isinstance(node, BreakStatement) else 'continue'
            if node.label is not None:
                return f"{keyword} {node.label.name};"
            return keyword + ';'

        raise TypeError(f"Cannot generate statement for {node!r}")

    def generate_import(self, node: ImportDeclaration) -> str:
        source = self.generate_expression(node.source)
        if not node.specifiers:
            return f"import {source};"

        parts = []
        named = []
        for spec in node.specifiers:
            if isinstance(spec, ImportDefaultSpecifier):
                parts.append(spec.local.name)
            elif isinstance(spec, ImportNamespaceSpecifier):
                parts.append(f"* as {spec.local.name}")
            elif spec.imported.name == spec.local.name:
                named.append(spec.local.name)
            else:
                named.append(f"{spec.imported.name} as {spec.local.name}")
        if named:
            parts.append('{ ' + ', '.join(named) + ' }')
        return f"import {', '.join(parts)} from {source};"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def precedence(self, node: ASTNode) -> int:
        if isinstance(node, SequenceExpression):
            return PREC_SEQUENCE
        if isinstance(node, (AssignmentExpression, ArrowFunctionExpression)):
            return PREC_ASSIGN
        if isinstance(node, ConditionalExpression):
            return PREC_CONDITIONAL
        if isinstance(node, (BinaryExpression, LogicalExpression)):
            return PREC_BINARY_BASE + BINARY_PRECEDENCE[node.operator]
        if isinstance(node, UnaryExpression):
            return PREC_UNARY
        if isinstance(node, UpdateExpression):
            return PREC_UNARY if node.prefix else PREC_POSTFIX
        if isinstance(node, CallExpression):
            return PREC_CALL
        if isinstance(node, NewExpression):
            return PREC_MEMBER
        if isinstance(node, MemberExpression):
            return PREC_MEMBER
        return PREC_PRIMARY

    def generate_expression(self, node: ASTNode, min_precedence: int = PREC_SEQUENCE) -> str:
        """Generate an expression, parenthesizing it if it binds looser than min_precedence."""
        text = self._generate_expression(node)
        if self.precedence(node) < min_precedence:
            return f"({text})"
        return text

    def generate_arguments(self, args: List[ASTNode]) -> str:
        return '(' + ', '.join(self.generate_expression(arg, PREC_ASSIGN) for arg in args) + ')'

    def _generate_expression(self, node: ASTNode) -> str:
        if isinstance(node, Identifier):
            return node.name

        elif isinstance(node, (StringLiteral, NumericLiteral, TemplateLiteral)):
            if node.raw is not None:
                return node.raw
            if isinstance(node, NumericLiteral):
                return repr(node.value)
            return quote_string(node.value)

        elif isinstance(node, BooleanLiteral):
            return 'true' if node.value else 'false'

        elif isinstance(node, NullLiteral):
            return 'null'

        elif isinstance(node, ThisExpression):
            return 'this'

        elif isinstance(node, Super):
            return 'super'

        elif isinstance(node, ClassExpression):
            return self.generate_class(node)

        elif isinstance(node, ParenthesizedExpression):
            return f"({self.generate_expression(node.expression)})"

        elif isinstance(node, ArrayExpression):
            items = ['' if item is None else self.generate_expression(item, PREC_ASSIGN)
                     for item in node.elements]
            # A trailing hole needs its own comma
            if node.elements and node.elements[-1] is None:
                items.append('')
            return '[' + ', '.join(items) + ']'

        elif isinstance(node, ObjectExpression):
            if not node.properties:
                return '{}'
            return '{ ' + ', '.join(self.generate_property(prop) for prop in node.properties) + ' }'

        elif isinstance(node, SpreadElement):
            return '...' + self.generate_expression(node.argument, PREC_ASSIGN)

        elif isinstance(node, FunctionExpression):
            name = f" {node.id.name}" if node.id is not None else ''
            return f"function{name}{self.generate_params(node.params)} " + self.generate_block(node.body)

        elif isinstance(node, ArrowFunctionExpression):
            if len(node.params) == 1 and isinstance(node.params[0], Identifier):
                params = node.params[0].name
            else:
                params = self.generate_params(node.params)
            if isinstance(node.body, BlockStatement):
                return f"{params} => " + self.generate_block(node.body)
            if isinstance(node.body, ObjectExpression):
                return f"{params} => ({self.generate_expression(node.body)})"
            return f"{params} => " + self.generate_expression(node.body, PREC_ASSIGN)

        elif isinstance(node, UnaryExpression):
            argument = self.generate_expression(node.argument, PREC_UNARY)
            if node.operator.isalpha():
                return f"{node.operator} {argument}"
            # Keep `- -x` and `+ +x` from fusing into update operators
            if node.operator in '+-' and argument.startswith(node.operator):
                return f"{node.operator} {argument}"
            return node.operator + argument

        elif isinstance(node, UpdateExpression):
            argument = self.generate_expression(node.argument, PREC_POSTFIX)
            if node.prefix:
                return node.operator + argument
            return argument + node.operator

        elif isinstance(node, (BinaryExpression, LogicalExpression)):
            precedence = self.precedence(node)
            right_assoc = node.operator == '**'
            left = self.generate_expression(node.left, precedence + 1 if right_assoc else precedence)
            right = self.generate_expression(node.right, precedence if right_assoc else precedence + 1)
            return f"{left} {node.operator} {right}"

        elif isinstance(node, AssignmentExpression):
            left = self.generate_expression(node.left, PREC_CALL)
            right = self.generate_expression(node.right, PREC_ASSIGN)
            return f"{left} {node.operator} {right}"

        elif isinstance(node, ConditionalExpression):
            test = self.generate_expression(node.test, PREC_CONDITIONAL + 1)
            consequent = self.generate_expression(node.consequent, PREC_ASSIGN)
            alternate = self.generate_expression(node.alternate, PREC_ASSIGN)
            return f"{test} ? {consequent} : {alternate}"

        elif isinstance(node, SequenceExpression):
            return ', '.join(self.generate_expression(item, PREC_ASSIGN) for item in node.expressions)

        elif isinstance(node, CallExpression):
            callee = self.generate_expression(node.callee, PREC_CALL)
            if isinstance(node.callee, FunctionExpression):
                callee = f"({callee})"
            return callee + self.generate_arguments(node.arguments)

        elif isinstance(node, NewExpression):
            callee = self.generate_expression(node.callee, PREC_MEMBER)
            return 'new ' + callee + self.generate_arguments(node.arguments)

        elif isinstance(node, MemberExpression):
            obj = self.generate_expression(node.object, PREC_CALL)
            if isinstance(node.object, NumericLiteral) and obj.isdigit():
                obj = f"({obj})"
            if node.computed:
                return f"{obj}[{self.generate_expression(node.property)}]"
            return f"{obj}.{node.property.name}"

        raise TypeError(f"Cannot generate expression for {node!r}")

    def generate_property(self, prop: ASTNode) -> str:
        if isinstance(prop, SpreadElement):
            return self.generate_expression(prop)

        if prop.computed:
            key = f"[{self.generate_expression(prop.key, PREC_ASSIGN)}]"
        else:
            key = self.generate_expression(prop.key)

        if prop.shorthand and isinstance(prop.value, Identifier) and prop.value.name == key:
            return key
        if prop.method and isinstance(prop.value, FunctionExpression):
            prefix = f"{prop.kind} " if prop.kind in ('get', 'set') else ''
            return self.generate_method(prefix + key, prop.value)
        return f"{key}: {self.generate_expression(prop.value, PREC_ASSIGN)}"

    def generate_method(self, head: str, function: FunctionExpression) -> str:
        return head + self.generate_params(function.params) + ' ' + self.generate_block(function.body)

    def generate_class(self, node: ASTNode) -> str:
        text = 'class'
        if node.id is not None:
            text += ' ' + node.id.name
        if node.super_class is not None:
            text += ' extends ' + self.generate_expression(node.super_class, PREC_CALL)
        if not node.body:
            return text + ' {}'

        self.indent_level += 1
        lines = []
        for method in node.body:
            head = 'static ' if method.static else ''
            if method.kind in ('get', 'set'):
                head += method.kind + ' '
            if method.computed:
                head += f"[{self.generate_expression(method.key, PREC_ASSIGN)}]"
            else:
                head += self.generate_expression(method.key)
            lines.append(self.indent() + self.generate_method(head, method.value))
        self.indent_level -= 1
        return text + ' {\n' + '\n'.join(lines) + '\n' + self.indent() + '}'


def generate(program: Program) -> str:
    """Convenience function to print a program."""
    return CodeGenerator().generate(program)
