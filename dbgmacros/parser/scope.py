"""
Lexical scopes and identifier resolution.

ScopeWalker visits a program in document order while maintaining the
chain of lexical scopes, so subclasses can ask which declaration an
identifier refers to at any point:

- imports live in the program scope
- ``var`` hoists to the nearest function (or program) scope
- ``let``/``const``/function declarations are scoped to their block
- parameters belong to the function scope, catch parameters to the clause
- class declarations are block-scoped; a named class expression sees its
  own name inside the class body
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from .ast_nodes import *


@dataclass(eq=False)
class Binding:
    """A declared name and the node that introduced it."""
    name: str
    kind: str    # module, var, let, const, function, class, param, catch
    node: ASTNode
    scope: 'Scope'


class Scope:
    """One lexical scope."""

    def __init__(self, node: ASTNode, parent: Optional['Scope'] = None, is_function: bool = False):
        self.node = node
        self.parent = parent
        self.is_function = is_function
        self.bindings: Dict[str, Binding] = {}

    def declare(self, name: str, kind: str, node: ASTNode) -> Binding:
        binding = Binding(name, kind, node, self)
        self.bindings[name] = binding
        return binding

    def get_binding(self, name: str) -> Optional[Binding]:
        """Resolve a name to its declaration, searching outward."""
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope.bindings[name]
            scope = scope.parent
        return None

    def __repr__(self):
        return f"Scope({self.node!r}, {sorted(self.bindings)})"


def declare_lexical(scope: Scope, statements: List[ASTNode]):
    """Declare the block-scoped names (imports, let/const, functions) of a statement list."""
    for stmt in statements:
        if isinstance(stmt, ExportNamedDeclaration) and stmt.declaration is not None:
            stmt = stmt.declaration
        elif (isinstance(stmt, ExportDefaultDeclaration)
              and isinstance(stmt.declaration, (FunctionDeclaration, ClassDeclaration))):
            stmt = stmt.declaration

        if isinstance(stmt, ImportDeclaration):
            for spec in stmt.specifiers:
                scope.declare(spec.local.name, 'module', spec)
        elif isinstance(stmt, VariableDeclaration) and stmt.kind != 'var':
            for declarator in stmt.declarations:
                scope.declare(declarator.id.name, stmt.kind, declarator)
        elif isinstance(stmt, FunctionDeclaration):
            scope.declare(stmt.id.name, 'function', stmt)
        elif isinstance(stmt, ClassDeclaration):
            scope.declare(stmt.id.name, 'class', stmt)


def hoist_vars(scope: Scope, node: ASTNode):
    """Declare every ``var`` reachable from node without crossing a function boundary."""
    if isinstance(node, VariableDeclaration):
        if node.kind == 'var':
            for declarator in node.declarations:
                scope.declare(declarator.id.name, 'var', declarator)
    elif isinstance(node, (BlockStatement, Program)):
        for stmt in node.body:
            hoist_vars(scope, stmt)
    elif isinstance(node, IfStatement):
        hoist_vars(scope, node.consequent)
        if node.alternate is not None:
            hoist_vars(scope, node.alternate)
    elif isinstance(node, (WhileStatement, DoWhileStatement, LabeledStatement)):
        hoist_vars(scope, node.body)
    elif isinstance(node, SwitchStatement):
        for case in node.cases:
            for stmt in case.consequent:
                hoist_vars(scope, stmt)
    elif isinstance(node, ForStatement):
        if node.init is not None:
            hoist_vars(scope, node.init)
        hoist_vars(scope, node.body)
    elif isinstance(node, (ForInStatement, ForOfStatement)):
        hoist_vars(scope, node.left)
        hoist_vars(scope, node.body)
    elif isinstance(node, TryStatement):
        hoist_vars(scope, node.block)
        if node.handler is not None:
            hoist_vars(scope, node.handler.body)
        if node.finalizer is not None:
            hoist_vars(scope, node.finalizer)
    elif isinstance(node, ExportNamedDeclaration) and node.declaration is not None:
        hoist_vars(scope, node.declaration)


class ScopeWalker:
    """
    Walks a program in document order with scope tracking.

    Subclasses override the hooks:

    - visit_statement(stmt, scope): called for every expression statement
      before its expression is walked
    - visit_reference(ident, scope): called for every identifier in reference
      position; returning a node replaces the identifier in its parent

    Binding positions (declaration ids, parameters, import/export specifiers,
    non-computed property keys and member names) and assignment targets are
    never reported as references.
    """

    def visit_statement(self, stmt: ExpressionStatement, scope: Scope):
        pass

    def visit_reference(self, ident: Identifier, scope: Scope) -> Optional[ASTNode]:
        return None

    def walk(self, program: Program) -> Scope:
        """Walk the whole program; returns the program scope."""
        scope = Scope(program, None, is_function=True)
        declare_lexical(scope, program.body)
        hoist_vars(scope, program)
        for stmt in program.body:
            self._walk(stmt, scope)
        return scope

    def _walk_expr(self, node: ASTNode, scope: Scope) -> Optional[ASTNode]:
        """Walk a node in expression position; returns a replacement or None."""
        if isinstance(node, Identifier):
            return self.visit_reference(node, scope)
        self._walk(node, scope)
        return None

    def _walk_children(self, node: ASTNode, scope: Scope, skip=()):
        for name in node.fields:
            if name in skip:
                continue
            value = getattr(node, name)
            if isinstance(value, list):
                for i, item in enumerate(value):
                    if isinstance(item, ASTNode):
                        replacement = self._walk_expr(item, scope)
                        if replacement is not None:
                            value[i] = replacement
            elif isinstance(value, ASTNode):
                replacement = self._walk_expr(value, scope)
                if replacement is not None:
                    setattr(node, name, replacement)

    def _walk_statements(self, statements: List[ASTNode], scope: Scope):
        declare_lexical(scope, statements)
        for stmt in statements:
            self._walk(stmt, scope)

    def _walk_function(self, node: ASTNode, scope: Scope):
        """Walk params and body of a function or arrow in a fresh function scope."""
        fscope = Scope(node, scope, is_function=True)
        for param in node.params:
            if isinstance(param, Identifier):
                fscope.declare(param.name, 'param', param)
            elif isinstance(param, AssignmentPattern):
                fscope.declare(param.left.name, 'param', param)
            elif isinstance(param, RestElement):
                fscope.declare(param.argument.name, 'param', param)
        for param in node.params:
            if isinstance(param, AssignmentPattern):
                replacement = self._walk_expr(param.right, fscope)
                if replacement is not None:
                    param.right = replacement

        if isinstance(node.body, BlockStatement):
            hoist_vars(fscope, node.body)
            self._walk_statements(node.body.body, fscope)
        else:
            replacement = self._walk_expr(node.body, fscope)
            if replacement is not None:
                node.body = replacement

    def _walk(self, node: ASTNode, scope: Scope):
        if isinstance(node, ExpressionStatement):
            self.visit_statement(node, scope)
            self._walk_children(node, scope)

        elif isinstance(node, BlockStatement):
            self._walk_statements(node.body, Scope(node, scope))

        elif isinstance(node, VariableDeclaration):
            for declarator in node.declarations:
                if declarator.init is not None:
                    replacement = self._walk_expr(declarator.init, scope)
                    if replacement is not None:
                        declarator.init = replacement

        elif isinstance(node, FunctionDeclaration):
            self._walk_function(node, scope)

        elif isinstance(node, FunctionExpression):
            if node.id is not None:
                # A named function expression can see its own name
                scope = Scope(node, scope)
                scope.declare(node.id.name, 'function', node)
            self._walk_function(node, scope)

        elif isinstance(node, ArrowFunctionExpression):
            self._walk_function(node, scope)

        elif isinstance(node, (ClassDeclaration, ClassExpression)):
            if node.super_class is not None:
                replacement = self._walk_expr(node.super_class, scope)
                if replacement is not None:
                    node.super_class = replacement
            if isinstance(node, ClassExpression) and node.id is not None:
                scope = Scope(node, scope)
                scope.declare(node.id.name, 'class', node)
            for method in node.body:
                self._walk(method, scope)

        elif isinstance(node, MethodDefinition):
            if node.computed:
                replacement = self._walk_expr(node.key, scope)
                if replacement is not None:
                    node.key = replacement
            self._walk(node.value, scope)

        elif isinstance(node, SwitchStatement):
            replacement = self._walk_expr(node.discriminant, scope)
            if replacement is not None:
                node.discriminant = replacement
            # All clauses share one block scope
            switch_scope = Scope(node, scope)
            declare_lexical(switch_scope, [stmt for case in node.cases for stmt in case.consequent])
            for case in node.cases:
                if case.test is not None:
                    replacement = self._walk_expr(case.test, switch_scope)
                    if replacement is not None:
                        case.test = replacement
                for stmt in case.consequent:
                    self._walk(stmt, switch_scope)

        elif isinstance(node, MemberExpression):
            self._walk_children(node, scope, skip=() if node.computed else ('property',))

        elif isinstance(node, ObjectProperty):
            self._walk_children(node, scope, skip=('value',) if node.computed else ('key', 'value'))
            replacement = self._walk_expr(node.value, scope)
            if replacement is not None:
                node.value = replacement
                node.shorthand = False

        elif isinstance(node, (AssignmentExpression, UpdateExpression)):
            target = 'left' if isinstance(node, AssignmentExpression) else 'argument'
            if isinstance(getattr(node, target), Identifier):
                self._walk_children(node, scope, skip=(target,))
            else:
                self._walk_children(node, scope)

        elif isinstance(node, ForStatement):
            loop_scope = Scope(node, scope)
            if isinstance(node.init, VariableDeclaration):
                declare_lexical(loop_scope, [node.init])
            self._walk_children(node, loop_scope)

        elif isinstance(node, (ForInStatement, ForOfStatement)):
            loop_scope = Scope(node, scope)
            if isinstance(node.left, VariableDeclaration):
                declare_lexical(loop_scope, [node.left])
                self._walk(node.left, loop_scope)
                self._walk_children(node, loop_scope, skip=('left',))
            elif isinstance(node.left, Identifier):
                self._walk_children(node, loop_scope, skip=('left',))
            else:
                self._walk_children(node, loop_scope)

        elif isinstance(node, CatchClause):
            catch_scope = Scope(node, scope)
            if node.param is not None:
                catch_scope.declare(node.param.name, 'catch', node.param)
            self._walk(node.body, catch_scope)

        elif isinstance(node, ExportNamedDeclaration):
            if node.declaration is not None:
                self._walk(node.declaration, scope)

        elif isinstance(node, ExportDefaultDeclaration):
            replacement = self._walk_expr(node.declaration, scope)
            if replacement is not None:
                node.declaration = replacement

        elif isinstance(node, (ImportDeclaration, ImportSpecifier, ImportDefaultSpecifier,
                               ImportNamespaceSpecifier, ExportSpecifier)):
            pass

        else:
            self._walk_children(node, scope)
