"""
ES module parser - Builds Abstract Syntax Tree from tokens.

Recursive descent over statements, precedence climbing over binary
operators. Supports an ES module subset: imports/exports, variable,
function and class declarations, the common control-flow statements and
the expression grammar short of regex literals, template substitutions,
async functions and destructuring.
"""

from typing import List, Optional
from ..lexer import Token, TokenType
from .ast_nodes import *


# Binary operator precedence (higher binds tighter)
BINARY_PRECEDENCE = {
    '??': 1,
    '||': 2,
    '&&': 3,
    '|': 4,
    '^': 5,
    '&': 6,
    '==': 7, '!=': 7, '===': 7, '!==': 7,
    '<': 8, '>': 8, '<=': 8, '>=': 8, 'instanceof': 8, 'in': 8,
    '<<': 9, '>>': 9, '>>>': 9,
    '+': 10, '-': 10,
    '*': 11, '/': 11, '%': 11,
    '**': 12,
}

LOGICAL_OPERATORS = frozenset({'&&', '||', '??'})

ASSIGNMENT_OPERATORS = frozenset({
    '=', '+=', '-=', '*=', '/=', '%=', '**=', '<<=', '>>=', '>>>=',
    '&=', '|=', '^=', '&&=', '||=', '??=',
})

UNARY_KEYWORDS = frozenset({'typeof', 'void', 'delete'})


class Parser:
    """Parses tokens into an Abstract Syntax Tree."""

    def __init__(self, tokens: List[Token], filename: str = "<input>"):
        self.tokens = tokens
        self.filename = filename
        self.pos = 0
        self.current_token = self.tokens[0] if tokens else None
        # False while parsing a for-statement head, where `in` ends the init
        self.allow_in = True

    def error(self, message: str, token: Optional[Token] = None):
        """Raise a parser error with location information."""
        token = token or self.current_token
        if token:
            raise SyntaxError(f"{self.filename}:{token.line}:{token.column}: {message}")
        else:
            raise SyntaxError(f"{self.filename}: {message}")

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Peek at token at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
            self.current_token = self.tokens[self.pos]
        return token

    def describe(self, token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        return f"{token.type.name} ({token.value!r})"

    def expect_punct(self, value: str) -> Token:
        """Consume the given punctuator or raise error."""
        if not self.current_token.is_punct(value):
            self.error(f"Expected '{value}', got {self.describe(self.current_token)}")
        return self.advance()

    def expect_keyword(self, value: str) -> Token:
        if not self.current_token.is_keyword(value):
            self.error(f"Expected '{value}', got {self.describe(self.current_token)}")
        return self.advance()

    def eat_punct(self, value: str) -> bool:
        """Consume the punctuator if it is next."""
        if self.current_token.is_punct(value):
            self.advance()
            return True
        return False

    def consume_semicolon(self):
        """Consume a statement terminator, applying automatic semicolon insertion."""
        token = self.current_token
        if token.is_punct(';'):
            self.advance()
        elif token.is_punct('}') or token.type == TokenType.EOF or token.newline_before:
            return
        else:
            self.error(f"Expected ';', got {self.describe(token)}")

    def parse_identifier(self) -> Identifier:
        token = self.current_token
        if token.type != TokenType.NAME:
            self.error(f"Expected identifier, got {self.describe(token)}")
        self.advance()
        return Identifier(token.value, token.line, token.column)

    def parse_identifier_name(self) -> Identifier:
        """Identifier in a position where reserved words are allowed (a.default, {if: 1})."""
        token = self.current_token
        if token.type not in (TokenType.NAME, TokenType.KEYWORD):
            self.error(f"Expected property name, got {self.describe(token)}")
        self.advance()
        return Identifier(token.value, token.line, token.column)

    def parse_string_literal(self) -> StringLiteral:
        token = self.current_token
        if token.type != TokenType.STRING:
            self.error(f"Expected string, got {self.describe(token)}")
        self.advance()
        return StringLiteral(token.value, token.raw, token.line, token.column)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        """Parse the entire program."""
        program = Program(filename=self.filename)

        while self.current_token.type != TokenType.EOF:
            token = self.current_token
            if token.is_keyword('import'):
                program.body.append(self.parse_import())
            elif token.is_keyword('export'):
                program.body.append(self.parse_export())
            else:
                program.body.append(self.parse_statement())

        return program

    def parse_statement(self) -> ASTNode:
        token = self.current_token

        if token.is_punct('{'):
            return self.parse_block()
        if token.is_punct(';'):
            self.advance()
            return EmptyStatement(token.line, token.column)
        if token.type == TokenType.KEYWORD:
            if token.value in ('var', 'let', 'const'):
                node = self.parse_variable_declaration()
                self.consume_semicolon()
                return node
            if token.value == 'function':
                return self.parse_function_declaration()
            if token.value == 'class':
                return self.parse_class(ClassDeclaration)
            if token.value == 'return':
                return self.parse_return()
            if token.value == 'if':
                return self.parse_if()
            if token.value == 'while':
                return self.parse_while()
            if token.value == 'do':
                return self.parse_do_while()
            if token.value == 'switch':
                return self.parse_switch()
            if token.value == 'for':
                return self.parse_for()
            if token.value == 'throw':
                return self.parse_throw()
            if token.value == 'try':
                return self.parse_try()
            if token.value in ('break', 'continue'):
                self.advance()
                label = None
                if self.current_token.type == TokenType.NAME and not self.current_token.newline_before:
                    label = self.parse_identifier()
                self.consume_semicolon()
                if token.value == 'break':
                    return BreakStatement(label, token.line, token.column)
                return ContinueStatement(label, token.line, token.column)
            if token.value in ('import', 'export'):
                self.error(f"'{token.value}' is only allowed at the top level of a module")
            if token.value in ('with', 'debugger'):
                self.error(f"Unsupported statement: {token.value}")
        if token.type == TokenType.NAME and self.peek(1).is_punct(':'):
            label = self.parse_identifier()
            self.advance()
            return LabeledStatement(label, self.parse_statement(), token.line, token.column)

        expression = self.parse_expression()
        self.consume_semicolon()
        return ExpressionStatement(expression, token.line, token.column)

    def parse_block(self) -> BlockStatement:
        start = self.expect_punct('{')
        body = []
        while not self.current_token.is_punct('}'):
            if self.current_token.type == TokenType.EOF:
                self.error(f"Unterminated block starting at {start.line}:{start.column}")
            body.append(self.parse_statement())
        self.advance()
        return BlockStatement(body, start.line, start.column)

    def parse_variable_declaration(self) -> VariableDeclaration:
        """Parse ``var|let|const a = 1, b`` (without the terminator)."""
        start = self.advance()
        declarations = []
        while True:
            ident = self.parse_identifier()
            init = None
            if self.eat_punct('='):
                init = self.parse_assignment()
            elif start.value == 'const' and self.allow_in:
                self.error(f"Missing initializer in const declaration of '{ident.name}'")
            declarations.append(VariableDeclarator(ident, init, ident.line, ident.column))
            if not self.eat_punct(','):
                break
        return VariableDeclaration(start.value, declarations, start.line, start.column)

    def parse_params(self) -> List[ASTNode]:
        """Parse ``(a, b = 1, ...rest)``."""
        self.expect_punct('(')
        params = []
        while not self.current_token.is_punct(')'):
            token = self.current_token
            if self.eat_punct('...'):
                params.append(RestElement(self.parse_identifier(), token.line, token.column))
                if not self.current_token.is_punct(')'):
                    self.error("Rest parameter must be last")
                break
            ident = self.parse_identifier()
            if self.eat_punct('='):
                params.append(AssignmentPattern(ident, self.parse_assignment(), token.line, token.column))
            else:
                params.append(ident)
            if not self.eat_punct(','):
                break
        self.expect_punct(')')
        return params

    def parse_function_declaration(self) -> FunctionDeclaration:
        start = self.expect_keyword('function')
        if self.current_token.is_punct('*'):
            self.error("Generator functions are not supported")
        name = self.parse_identifier()
        params = self.parse_params()
        body = self.parse_block()
        return FunctionDeclaration(name, params, body, start.line, start.column)

    def parse_return(self) -> ReturnStatement:
        start = self.advance()
        argument = None
        token = self.current_token
        if not (token.is_punct(';', '}') or token.type == TokenType.EOF or token.newline_before):
            argument = self.parse_expression()
        self.consume_semicolon()
        return ReturnStatement(argument, start.line, start.column)

    def parse_if(self) -> IfStatement:
        start = self.advance()
        self.expect_punct('(')
        test = self.parse_expression()
        self.expect_punct(')')
        consequent = self.parse_statement()
        alternate = None
        if self.current_token.is_keyword('else'):
            self.advance()
            alternate = self.parse_statement()
        return IfStatement(test, consequent, alternate, start.line, start.column)

    def parse_while(self) -> WhileStatement:
        start = self.advance()
        self.expect_punct('(')
        test = self.parse_expression()
        self.expect_punct(')')
        body = self.parse_statement()
        return WhileStatement(test, body, start.line, start.column)

    def parse_do_while(self) -> DoWhileStatement:
        start = self.advance()
        body = self.parse_statement()
        self.expect_keyword('while')
        self.expect_punct('(')
        test = self.parse_expression()
        self.expect_punct(')')
        # The semicolon after do-while is always optional
        self.eat_punct(';')
        return DoWhileStatement(body, test, start.line, start.column)

    def parse_switch(self) -> SwitchStatement:
        start = self.advance()
        self.expect_punct('(')
        discriminant = self.parse_expression()
        self.expect_punct(')')
        self.expect_punct('{')
        cases = []
        seen_default = False
        while not self.current_token.is_punct('}'):
            token = self.current_token
            if token.is_keyword('case'):
                self.advance()
                test = self.parse_expression()
            elif token.is_keyword('default'):
                if seen_default:
                    self.error("More than one default clause in switch statement")
                seen_default = True
                self.advance()
                test = None
            else:
                self.error(f"Expected 'case' or 'default', got {self.describe(token)}")
            self.expect_punct(':')
            consequent = []
            while not (self.current_token.is_keyword('case', 'default') or self.current_token.is_punct('}')):
                if self.current_token.type == TokenType.EOF:
                    self.error(f"Unterminated switch starting at {start.line}:{start.column}")
                consequent.append(self.parse_statement())
            cases.append(SwitchCase(test, consequent, token.line, token.column))
        self.advance()
        return SwitchStatement(discriminant, cases, start.line, start.column)

    def parse_for(self) -> ASTNode:
        start = self.advance()
        self.expect_punct('(')

        init = None
        if not self.current_token.is_punct(';'):
            self.allow_in = False
            try:
                if self.current_token.is_keyword('var', 'let', 'const'):
                    init = self.parse_variable_declaration()
                else:
                    init = self.parse_expression()
            finally:
                self.allow_in = True

            if self.current_token.is_keyword('in') or self.current_token.is_name('of'):
                is_of = self.current_token.is_name('of')
                if isinstance(init, VariableDeclaration) and len(init.declarations) != 1:
                    self.error("Only one binding is allowed in a for-in/of head")
                self.advance()
                right = self.parse_assignment() if is_of else self.parse_expression()
                self.expect_punct(')')
                body = self.parse_statement()
                if is_of:
                    return ForOfStatement(init, right, body, start.line, start.column)
                return ForInStatement(init, right, body, start.line, start.column)

            if isinstance(init, VariableDeclaration) and init.kind == 'const':
                for declarator in init.declarations:
                    if declarator.init is None:
                        self.error(f"Missing initializer in const declaration of '{declarator.id.name}'")

        self.expect_punct(';')
        test = None if self.current_token.is_punct(';') else self.parse_expression()
        self.expect_punct(';')
        update = None if self.current_token.is_punct(')') else self.parse_expression()
        self.expect_punct(')')
        body = self.parse_statement()
        return ForStatement(init, test, update, body, start.line, start.column)

    def parse_throw(self) -> ThrowStatement:
        start = self.advance()
        if self.current_token.newline_before:
            self.error("Illegal newline after throw")
        argument = self.parse_expression()
        self.consume_semicolon()
        return ThrowStatement(argument, start.line, start.column)

    def parse_try(self) -> TryStatement:
        start = self.advance()
        block = self.parse_block()
        handler = None
        finalizer = None
        if self.current_token.is_keyword('catch'):
            catch_token = self.advance()
            param = None
            if self.eat_punct('('):
                param = self.parse_identifier()
                self.expect_punct(')')
            handler = CatchClause(param, self.parse_block(), catch_token.line, catch_token.column)
        if self.current_token.is_keyword('finally'):
            self.advance()
            finalizer = self.parse_block()
        if handler is None and finalizer is None:
            self.error("Missing catch or finally after try")
        return TryStatement(block, handler, finalizer, start.line, start.column)

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def parse_import(self) -> ImportDeclaration:
        """
        Parse an import declaration:

            import 'mod';
            import a from 'mod';
            import * as ns from 'mod';
            import { a, b as c } from 'mod';
            import a, { b } from 'mod';
        """
        start = self.expect_keyword('import')
        specifiers = []

        if self.current_token.type == TokenType.STRING:
            source = self.parse_string_literal()
            self.consume_semicolon()
            return ImportDeclaration(specifiers, source, start.line, start.column)

        if self.current_token.type == TokenType.NAME:
            local = self.parse_identifier()
            specifiers.append(ImportDefaultSpecifier(local, local.line, local.column))
            if not self.eat_punct(','):
                return self._finish_import(start, specifiers)

        token = self.current_token
        if self.eat_punct('*'):
            if not self.current_token.is_name('as'):
                self.error("Expected 'as' after '*' in import")
            self.advance()
            local = self.parse_identifier()
            specifiers.append(ImportNamespaceSpecifier(local, token.line, token.column))
        elif self.eat_punct('{'):
            while not self.current_token.is_punct('}'):
                spec_token = self.current_token
                imported = self.parse_identifier_name()
                if self.current_token.is_name('as'):
                    self.advance()
                    local = self.parse_identifier()
                else:
                    if spec_token.type == TokenType.KEYWORD:
                        self.error(f"Reserved word '{imported.name}' needs an alias", spec_token)
                    local = Identifier(imported.name, imported.line, imported.column)
                specifiers.append(ImportSpecifier(imported, local, spec_token.line, spec_token.column))
                if not self.eat_punct(','):
                    break
            self.expect_punct('}')
        else:
            self.error(f"Unexpected {self.describe(token)} in import")

        return self._finish_import(start, specifiers)

    def _finish_import(self, start: Token, specifiers: List[ASTNode]) -> ImportDeclaration:
        if not self.current_token.is_name('from'):
            self.error(f"Expected 'from', got {self.describe(self.current_token)}")
        self.advance()
        source = self.parse_string_literal()
        self.consume_semicolon()
        return ImportDeclaration(specifiers, source, start.line, start.column)

    def parse_export(self) -> ASTNode:
        start = self.expect_keyword('export')
        token = self.current_token

        if token.is_keyword('default'):
            self.advance()
            if self.current_token.is_keyword('function'):
                if self.peek(1).type == TokenType.NAME:
                    declaration = self.parse_function_declaration()
                else:
                    # Anonymous default function is a declaration: no call, no semicolon
                    declaration = self.parse_function_expression()
            elif self.current_token.is_keyword('class'):
                if self.peek(1).type == TokenType.NAME:
                    declaration = self.parse_class(ClassDeclaration)
                else:
                    declaration = self.parse_class(ClassExpression)
            else:
                declaration = self.parse_assignment()
                self.consume_semicolon()
            return ExportDefaultDeclaration(declaration, start.line, start.column)

        if token.is_keyword('var', 'let', 'const'):
            declaration = self.parse_variable_declaration()
            self.consume_semicolon()
            return ExportNamedDeclaration(declaration, line=start.line, column=start.column)

        if token.is_keyword('function'):
            declaration = self.parse_function_declaration()
            return ExportNamedDeclaration(declaration, line=start.line, column=start.column)

        if token.is_keyword('class'):
            declaration = self.parse_class(ClassDeclaration)
            return ExportNamedDeclaration(declaration, line=start.line, column=start.column)

        if self.eat_punct('{'):
            specifiers = []
            while not self.current_token.is_punct('}'):
                spec_token = self.current_token
                local = self.parse_identifier_name()
                exported = local
                if self.current_token.is_name('as'):
                    self.advance()
                    exported = self.parse_identifier_name()
                specifiers.append(ExportSpecifier(local, exported, spec_token.line, spec_token.column))
                if not self.eat_punct(','):
                    break
            self.expect_punct('}')
            source = None
            if self.current_token.is_name('from'):
                self.advance()
                source = self.parse_string_literal()
            self.consume_semicolon()
            return ExportNamedDeclaration(None, specifiers, source, start.line, start.column)

        self.error(f"Unsupported export form: {self.describe(token)}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> ASTNode:
        """Parse a (possibly comma-separated) expression."""
        start = self.current_token
        expression = self.parse_assignment()
        if self.current_token.is_punct(','):
            expressions = [expression]
            while self.eat_punct(','):
                expressions.append(self.parse_assignment())
            return SequenceExpression(expressions, start.line, start.column)
        return expression

    def parse_assignment(self) -> ASTNode:
        token = self.current_token

        # x => ...
        if token.type == TokenType.NAME and self.peek(1).is_punct('=>') \
                and not self.peek(1).newline_before:
            param = self.parse_identifier()
            self.advance()
            return self._finish_arrow([param], token)

        # (a, b) => ...
        if token.is_punct('(') and self._is_arrow_head():
            params = self.parse_params()
            if self.current_token.newline_before:
                self.error("Line terminator before arrow")
            self.expect_punct('=>')
            return self._finish_arrow(params, token)

        left = self.parse_conditional()

        if self.current_token.type == TokenType.PUNCT and self.current_token.value in ASSIGNMENT_OPERATORS:
            if not isinstance(left, (Identifier, MemberExpression)):
                self.error("Invalid assignment target")
            operator = self.advance().value
            right = self.parse_assignment()
            return AssignmentExpression(operator, left, right, token.line, token.column)

        return left

    def _is_arrow_head(self) -> bool:
        """Check whether the '(' at the current position opens arrow function parameters."""
        depth = 0
        offset = 0
        while True:
            token = self.peek(offset)
            if token is None or token.type == TokenType.EOF:
                return False
            if token.is_punct('(', '[', '{'):
                depth += 1
            elif token.is_punct(')', ']', '}'):
                depth -= 1
                if depth == 0:
                    following = self.peek(offset + 1)
                    return following is not None and following.is_punct('=>')
            offset += 1

    def _finish_arrow(self, params: List[ASTNode], start: Token) -> ArrowFunctionExpression:
        if self.current_token.is_punct('{'):
            body = self.parse_block()
            return ArrowFunctionExpression(params, body, False, start.line, start.column)
        body = self.parse_assignment()
        return ArrowFunctionExpression(params, body, True, start.line, start.column)

    def parse_conditional(self) -> ASTNode:
        token = self.current_token
        test = self.parse_binary(0)
        if not self.eat_punct('?'):
            return test
        allow_in = self.allow_in
        self.allow_in = True
        try:
            consequent = self.parse_assignment()
        finally:
            self.allow_in = allow_in
        self.expect_punct(':')
        alternate = self.parse_assignment()
        return ConditionalExpression(test, consequent, alternate, token.line, token.column)

    def _binary_operator(self) -> Optional[str]:
        token = self.current_token
        if token.type == TokenType.PUNCT and token.value in BINARY_PRECEDENCE:
            return token.value
        if token.is_keyword('instanceof'):
            return 'instanceof'
        if token.is_keyword('in') and self.allow_in:
            return 'in'
        return None

    def parse_binary(self, min_precedence: int) -> ASTNode:
        """Precedence climbing over binary and logical operators."""
        start = self.current_token
        left = self.parse_unary()

        while True:
            operator = self._binary_operator()
            if operator is None:
                break
            precedence = BINARY_PRECEDENCE[operator]
            if precedence <= min_precedence:
                break
            self.advance()
            # ** is right-associative
            next_min = precedence - 1 if operator == '**' else precedence
            right = self.parse_binary(next_min)
            if operator in LOGICAL_OPERATORS:
                left = LogicalExpression(operator, left, right, start.line, start.column)
            else:
                left = BinaryExpression(operator, left, right, start.line, start.column)

        return left

    def parse_unary(self) -> ASTNode:
        token = self.current_token
        if token.is_punct('!', '-', '+', '~') or \
                (token.type == TokenType.KEYWORD and token.value in UNARY_KEYWORDS):
            self.advance()
            argument = self.parse_unary()
            return UnaryExpression(token.value, argument, token.line, token.column)
        if token.is_punct('++', '--'):
            self.advance()
            argument = self.parse_unary()
            if not isinstance(argument, (Identifier, MemberExpression)):
                self.error("Invalid update target", token)
            return UpdateExpression(token.value, argument, True, token.line, token.column)
        return self.parse_postfix()

    def parse_postfix(self) -> ASTNode:
        start = self.current_token
        expression = self.parse_call_member()
        token = self.current_token
        if token.is_punct('++', '--') and not token.newline_before:
            if not isinstance(expression, (Identifier, MemberExpression)):
                self.error("Invalid update target", token)
            self.advance()
            return UpdateExpression(token.value, expression, False, start.line, start.column)
        return expression

    def parse_arguments(self) -> List[ASTNode]:
        self.expect_punct('(')
        args = []
        while not self.current_token.is_punct(')'):
            token = self.current_token
            if self.eat_punct('...'):
                args.append(SpreadElement(self.parse_assignment(), token.line, token.column))
            else:
                args.append(self.parse_assignment())
            if not self.eat_punct(','):
                break
        self.expect_punct(')')
        return args

    def parse_call_member(self) -> ASTNode:
        start = self.current_token

        if start.is_keyword('new'):
            self.advance()
            if self.current_token.is_keyword('new'):
                callee = self.parse_call_member()
            else:
                callee = self._parse_member_chain(self.parse_primary(), allow_call=False)
            arguments = self.parse_arguments() if self.current_token.is_punct('(') else []
            expression = NewExpression(callee, arguments, start.line, start.column)
        else:
            expression = self.parse_primary()

        return self._parse_member_chain(expression, allow_call=True)

    def _parse_member_chain(self, expression: ASTNode, allow_call: bool) -> ASTNode:
        while True:
            token = self.current_token
            if token.is_punct('.'):
                self.advance()
                prop = self.parse_identifier_name()
                expression = MemberExpression(expression, prop, False, expression.line, expression.column)
            elif token.is_punct('?.'):
                self.error("Optional chaining is not supported")
            elif token.is_punct('['):
                self.advance()
                allow_in = self.allow_in
                self.allow_in = True
                try:
                    prop = self.parse_expression()
                finally:
                    self.allow_in = allow_in
                self.expect_punct(']')
                expression = MemberExpression(expression, prop, True, expression.line, expression.column)
            elif token.is_punct('(') and allow_call:
                args = self.parse_arguments()
                expression = CallExpression(expression, args, expression.line, expression.column)
            elif token.type == TokenType.TEMPLATE:
                self.error("Tagged templates are not supported")
            else:
                return expression

    def parse_primary(self) -> ASTNode:
        token = self.current_token

        if token.type == TokenType.NAME:
            return self.parse_identifier()
        if token.type == TokenType.STRING:
            return self.parse_string_literal()
        if token.type == TokenType.TEMPLATE:
            self.advance()
            return TemplateLiteral(token.value, token.raw, token.line, token.column)
        if token.type == TokenType.NUMBER:
            self.advance()
            return NumericLiteral(token.value, token.raw, token.line, token.column)

        if token.type == TokenType.KEYWORD:
            if token.value in ('true', 'false'):
                self.advance()
                return BooleanLiteral(token.value == 'true', token.line, token.column)
            if token.value == 'null':
                self.advance()
                return NullLiteral(token.line, token.column)
            if token.value == 'this':
                self.advance()
                return ThisExpression(token.line, token.column)
            if token.value == 'function':
                return self.parse_function_expression()
            if token.value == 'class':
                return self.parse_class(ClassExpression)
            if token.value == 'super':
                self.advance()
                if not self.current_token.is_punct('(', '.', '['):
                    self.error("'super' must be called or have a property accessed")
                return Super(token.line, token.column)
            self.error(f"Unexpected keyword '{token.value}'")

        if token.is_punct('('):
            self.advance()
            allow_in = self.allow_in
            self.allow_in = True
            try:
                expression = self.parse_expression()
            finally:
                self.allow_in = allow_in
            self.expect_punct(')')
            return ParenthesizedExpression(expression, token.line, token.column)
        if token.is_punct('['):
            return self.parse_array()
        if token.is_punct('{'):
            return self.parse_object()

        self.error(f"Unexpected {self.describe(token)}")

    def parse_function_expression(self) -> FunctionExpression:
        start = self.expect_keyword('function')
        if self.current_token.is_punct('*'):
            self.error("Generator functions are not supported")
        name = self.parse_identifier() if self.current_token.type == TokenType.NAME else None
        params = self.parse_params()
        body = self.parse_block()
        return FunctionExpression(name, params, body, start.line, start.column)

    def parse_class(self, node_class) -> ASTNode:
        """
        Parse ``class [Name] [extends Base] { methods }``.

        node_class is ClassDeclaration (name required) or ClassExpression.
        Class bodies hold methods, accessors and static methods only.
        """
        start = self.expect_keyword('class')
        name = None
        if self.current_token.type == TokenType.NAME:
            name = self.parse_identifier()
        elif node_class is ClassDeclaration:
            self.error(f"Expected class name, got {self.describe(self.current_token)}")

        super_class = None
        if self.current_token.is_keyword('extends'):
            self.advance()
            super_class = self.parse_call_member()

        self.expect_punct('{')
        body = []
        while not self.current_token.is_punct('}'):
            if self.eat_punct(';'):
                continue
            if self.current_token.type == TokenType.EOF:
                self.error(f"Unterminated class body starting at {start.line}:{start.column}")
            body.append(self.parse_method())
        self.advance()
        return node_class(name, super_class, body, start.line, start.column)

    def parse_method(self) -> MethodDefinition:
        token = self.current_token
        static = False
        if token.is_name('static') and not self.peek(1).is_punct('('):
            self.advance()
            static = True
        kind = 'method'
        if self.current_token.is_name('get', 'set') and not self.peek(1).is_punct('(', '='):
            kind = self.advance().value
        if self.current_token.is_punct('*'):
            self.error("Generator methods are not supported")

        key, computed = self.parse_property_key()
        if not self.current_token.is_punct('('):
            self.error("Class fields are not supported")
        params = self.parse_params()
        body = self.parse_block()
        if kind == 'method' and not static and isinstance(key, Identifier) and key.name == 'constructor':
            kind = 'constructor'
        value = FunctionExpression(None, params, body, token.line, token.column)
        return MethodDefinition(key, value, kind, static, computed, token.line, token.column)

    def parse_array(self) -> ArrayExpression:
        start = self.expect_punct('[')
        elements = []
        while not self.current_token.is_punct(']'):
            token = self.current_token
            if token.is_punct(','):
                self.advance()
                elements.append(None)
                continue
            if self.eat_punct('...'):
                elements.append(SpreadElement(self.parse_assignment(), token.line, token.column))
            else:
                elements.append(self.parse_assignment())
            if not self.eat_punct(','):
                break
        self.expect_punct(']')
        return ArrayExpression(elements, start.line, start.column)

    def parse_object(self) -> ObjectExpression:
        start = self.expect_punct('{')
        properties = []
        while not self.current_token.is_punct('}'):
            token = self.current_token
            if self.eat_punct('...'):
                properties.append(SpreadElement(self.parse_assignment(), token.line, token.column))
            else:
                properties.append(self.parse_property())
            if not self.eat_punct(','):
                break
        self.expect_punct('}')
        return ObjectExpression(properties, start.line, start.column)

    def parse_property_key(self):
        """Parse a literal, identifier or ``[computed]`` key; returns (key, computed)."""
        token = self.current_token
        if token.type == TokenType.STRING:
            return self.parse_string_literal(), False
        if token.type == TokenType.NUMBER:
            self.advance()
            return NumericLiteral(token.value, token.raw, token.line, token.column), False
        if token.is_punct('['):
            self.advance()
            key = self.parse_assignment()
            self.expect_punct(']')
            return key, True
        return self.parse_identifier_name(), False

    def parse_property(self) -> ObjectProperty:
        token = self.current_token
        kind = 'init'
        # `get`/`set` are accessor prefixes unless used as the key itself
        if token.is_name('get', 'set') and not self.peek(1).is_punct(':', '(', ',', '}'):
            kind = self.advance().value
        key, computed = self.parse_property_key()

        if kind == 'init' and self.eat_punct(':'):
            value = self.parse_assignment()
            return ObjectProperty(key, value, computed, False, False, token.line, token.column)

        if self.current_token.is_punct('('):
            # Method shorthand: name(params) { body }
            params = self.parse_params()
            body = self.parse_block()
            value = FunctionExpression(None, params, body, token.line, token.column)
            return ObjectProperty(key, value, computed, False, True, token.line, token.column, kind)

        if kind != 'init' or token.type != TokenType.NAME or computed:
            self.error(f"Expected ':' after property key, got {self.describe(self.current_token)}")
        value = Identifier(key.name, key.line, key.column)
        return ObjectProperty(key, value, False, True, False, token.line, token.column)


def parse(source: str, filename: str = "<input>") -> Program:
    """Convenience function to lex and parse source code."""
    from ..lexer import Lexer
    tokens = Lexer(source, filename).tokenize()
    return Parser(tokens, filename).parse()
