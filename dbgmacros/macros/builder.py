"""
Expression builder for debug macros.

Each macro call becomes a guard chain ending in the real call:

    assert($PREDICATE, $MESSAGE)
        ($DEBUG && console.assert($PREDICATE, $MESSAGE));
        ($DEBUG && !($PREDICATE) && console.assert(false, $MESSAGE));   with a predicate index

    warn($MESSAGE) / log($MESSAGE)
        ($DEBUG && console.warn($MESSAGE));

    deprecate($MESSAGE, $PREDICATE, { id, until })
        ($DEBUG && !($PREDICATE) && console.warn($MESSAGE));

With module externalization the final call stays a call to the imported
helper (``assert(false, $MESSAGE)``); with a global namespace it becomes
``$NS.assert(false, $MESSAGE)``.

Builders never touch the tree. They return a factory that produces the
guarded expression once the program-wide debug flag literal exists.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional

from ..parser.ast_nodes import *
from .options import HelperMode, NormalizedOptions


class MacroKind(Enum):
    """The supported macros, valued by their exported name."""
    ASSERT = 'assert'
    DEPRECATE = 'deprecate'
    WARN = 'warn'
    LOG = 'log'


SUPPORTED_MACROS = frozenset(kind.value for kind in MacroKind)

# console method each macro falls back to
CONSOLE_API = {
    MacroKind.ASSERT: 'assert',
    MacroKind.DEPRECATE: 'warn',
    MacroKind.WARN: 'warn',
    MacroKind.LOG: 'log',
}

GuardFactory = Callable[[BooleanLiteral], ASTNode]


class MacroUsageError(ValueError):
    """A macro call that cannot be expanded as written."""

    def __init__(self, message: str, field: Optional[str] = None,
                 filename: str = "<input>", line: int = 0, column: int = 0):
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.message = message
        self.field = field


def property_name(prop: ASTNode) -> Optional[str]:
    """Static name of an object literal property, or None."""
    if not isinstance(prop, ObjectProperty) or prop.computed:
        return None
    if isinstance(prop.key, Identifier):
        return prop.key.name
    if isinstance(prop.key, StringLiteral):
        return prop.key.value
    return None


class ExpressionBuilder:
    """Builds guarded expression factories for macro calls."""

    def __init__(self, options: NormalizedOptions, filename: str = "<input>",
                 warn: Optional[Callable[[str, str], None]] = None):
        self.helpers = options.externalize_helpers
        self.assert_predicate_index = options.debug_tools.assert_predicate_index
        self.filename = filename
        self.warn = warn or (lambda code, message: None)
        self.builders: Dict[MacroKind, Callable[[CallExpression], GuardFactory]] = {
            MacroKind.ASSERT: self.build_assert,
            MacroKind.DEPRECATE: self.build_deprecate,
            MacroKind.WARN: self.build_warn,
            MacroKind.LOG: self.build_log,
        }

    def build(self, kind: MacroKind, call: CallExpression) -> GuardFactory:
        return self.builders[kind](call)

    def error(self, message: str, node: ASTNode, field: Optional[str] = None):
        raise MacroUsageError(message, field, self.filename, node.line, node.column)

    def build_assert(self, call: CallExpression) -> GuardFactory:
        args = list(call.arguments)
        predicates = []
        index = self.assert_predicate_index
        if index is not None:
            if index < 0 or index >= len(args):
                self.warn("DBG0101", f"{self.filename}:{call.line}:{call.column}: "
                                     f"assert has no argument at predicate index {index}")
            predicates.append(self._hoist_predicate(args, index))
        return self._create_macro_expression(call, MacroKind.ASSERT, args, predicates)

    def build_warn(self, call: CallExpression) -> GuardFactory:
        return self._create_macro_expression(call, MacroKind.WARN, list(call.arguments))

    def build_log(self, call: CallExpression) -> GuardFactory:
        return self._create_macro_expression(call, MacroKind.LOG, list(call.arguments))

    def build_deprecate(self, call: CallExpression) -> GuardFactory:
        args = list(call.arguments)
        if not args:
            self.error("deprecate requires a message", call)
        self._validate_deprecate_meta(args)

        message = args[0]
        if len(args) < 2:
            self.warn("DBG0102", f"{self.filename}:{call.line}:{call.column}: "
                                 f"deprecate called without a predicate")
            args.append(BooleanLiteral(False))
            predicate = self._negate(BooleanLiteral(False))
        else:
            predicate = self._hoist_predicate(args, 1)

        return self._create_macro_expression(call, MacroKind.DEPRECATE, args, [predicate],
                                             console_args=[message])

    def _validate_deprecate_meta(self, args: List[ASTNode]):
        """A non-empty meta object literal must name both `id` and `until`."""
        if len(args) < 3:
            return
        meta = args[2]
        if not isinstance(meta, ObjectExpression) or not meta.properties:
            return
        names = {property_name(prop) for prop in meta.properties}
        for required in ('id', 'until'):
            if required not in names:
                self.error(f'deprecate\'s meta information requires an "{required}" field.',
                           meta, field=required)

    def _negate(self, predicate: ASTNode) -> UnaryExpression:
        return UnaryExpression('!', ParenthesizedExpression(predicate, predicate.line, predicate.column),
                               predicate.line, predicate.column)

    def _hoist_predicate(self, args: List[ASTNode], index: int) -> UnaryExpression:
        """
        Replace args[index] with `false` and return the negated original as a guard.

        A missing argument guards with `!(false)`. Past the end, the call is
        padded with `undefined` so `false` still lands at the predicate index;
        a negative index names no argument and leaves the call as written.
        """
        if 0 <= index < len(args):
            predicate = args[index]
            args[index] = BooleanLiteral(False, predicate.line, predicate.column)
            return self._negate(predicate)
        if index >= 0:
            while len(args) < index:
                args.append(Identifier('undefined'))
            args.append(BooleanLiteral(False))
        return self._negate(BooleanLiteral(False))

    def _final_call(self, call: CallExpression, kind: MacroKind, args: List[ASTNode],
                    console_args: Optional[List[ASTNode]]) -> CallExpression:
        mode = self.helpers.mode
        if mode == HelperMode.GLOBAL:
            callee = MemberExpression(Identifier(self.helpers.global_namespace), Identifier(kind.value))
            return CallExpression(callee, args, call.line, call.column)
        if mode == HelperMode.MODULE:
            return CallExpression(call.callee, args, call.line, call.column)
        callee = MemberExpression(Identifier('console'), Identifier(CONSOLE_API[kind]))
        return CallExpression(callee, console_args if console_args is not None else args,
                              call.line, call.column)

    def _create_macro_expression(self, call: CallExpression, kind: MacroKind, args: List[ASTNode],
                                 predicates: Optional[List[ASTNode]] = None,
                                 console_args: Optional[List[ASTNode]] = None) -> GuardFactory:
        final_call = self._final_call(call, kind, args, console_args)
        return build_logical_expressions(predicates or [], final_call)


def build_logical_expressions(predicates: List[ASTNode], final_call: ASTNode) -> GuardFactory:
    """Factory for `((flag && p1) && p2) && final_call`."""
    def build(flag: BooleanLiteral) -> ASTNode:
        expression = flag
        for node in predicates + [final_call]:
            expression = LogicalExpression('&&', expression, node, final_call.line, final_call.column)
        return expression
    return build
