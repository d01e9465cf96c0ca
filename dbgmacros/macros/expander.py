"""
Debug macro expansion.

The expander runs over one parsed program in five passes:

1. scan_imports: find the debug-tools and env-flags import declarations
   and record each macro import (assert, deprecate, warn, log)
2. substitute_env_flags: replace references to the imported debug flag
   with a boolean literal
3. recognize_and_queue: walk the program with scope tracking and queue an
   expansion for every statement-level call that resolves to a macro import
4. apply_expansions: replace each queued statement's expression with its
   guarded form, all sharing one debug flag literal
5. clean_imports: drop the macro imports (unless helpers stay in the
   module) and the substituted flag import

No statement is rewritten until every macro call has been recognized and
validated, so a bad call leaves all macro statements as written.
"""

import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..parser.ast_nodes import *
from ..parser.scope import Scope, ScopeWalker
from .builder import ExpressionBuilder, GuardFactory, MacroKind, SUPPORTED_MACROS
from .options import NormalizedOptions


@dataclass(eq=False)
class MacroBinding:
    """One `import { warn as w } from '<debug tools>'` specifier."""
    local_name: str
    kind: MacroKind
    specifier: ImportSpecifier
    declaration: ImportDeclaration


@dataclass
class ImportScan:
    macro_bindings: List[MacroBinding] = field(default_factory=list)
    # Debug-tools declarations holding at least one macro binding
    debug_declarations: List[ImportDeclaration] = field(default_factory=list)
    # Specifiers importing the debug flag, and the declarations holding them
    flag_specifiers: List[ImportSpecifier] = field(default_factory=list)
    flag_declarations: List[ImportDeclaration] = field(default_factory=list)

    def binding_for(self, node: ASTNode) -> Optional[MacroBinding]:
        for binding in self.macro_bindings:
            if binding.specifier is node:
                return binding
        return None


@dataclass(eq=False)
class PendingExpansion:
    statement: ExpressionStatement
    build: GuardFactory
    binding: MacroBinding


def _remove_declaration(program: Program, declaration: ImportDeclaration) -> bool:
    for i, stmt in enumerate(program.body):
        if stmt is declaration:
            del program.body[i]
            return True
    return False


def scan_imports(program: Program, options: NormalizedOptions,
                 log: Optional[Callable[[str], None]] = None) -> ImportScan:
    """
    Record macro and debug flag imports.

    Side-effect-only imports (no specifiers) of either source are removed
    immediately; nothing else in the tree is touched.
    """
    log = log or (lambda message: None)
    debug_source = options.debug_tools.import_source
    flags_source = options.env_flags.import_source
    flag_name = options.env_flags.flag_name
    scan = ImportScan()

    for declaration in list(program.body):
        if not isinstance(declaration, ImportDeclaration):
            continue
        source = declaration.source.value

        if source in options.feature_sources:
            log(f"Leaving feature import '{source}' for feature flag processing")

        if debug_source is not None and source == debug_source:
            if not declaration.specifiers:
                _remove_declaration(program, declaration)
                log(f"Removed bare import of '{source}'")
                continue
            found = False
            for spec in declaration.specifiers:
                if isinstance(spec, ImportSpecifier) and spec.imported.name in SUPPORTED_MACROS:
                    scan.macro_bindings.append(
                        MacroBinding(spec.local.name, MacroKind(spec.imported.name), spec, declaration))
                    found = True
            if found:
                scan.debug_declarations.append(declaration)

        if flags_source is not None and source == flags_source:
            if not declaration.specifiers:
                _remove_declaration(program, declaration)
                log(f"Removed bare import of '{source}'")
                continue
            found = False
            for spec in declaration.specifiers:
                if (flag_name is not None and isinstance(spec, ImportSpecifier)
                        and spec.imported.name == flag_name):
                    scan.flag_specifiers.append(spec)
                    found = True
            if found:
                scan.flag_declarations.append(declaration)

    for binding in scan.macro_bindings:
        log(f"Macro import: {binding.kind.value} as {binding.local_name}")
    return scan


class FlagSubstituter(ScopeWalker):
    """Replaces references to the imported debug flag with a boolean literal."""

    def __init__(self, specifiers: List[ImportSpecifier], value: bool):
        self.specifiers = specifiers
        self.value = value
        self.count = 0

    def visit_reference(self, ident: Identifier, scope: Scope) -> Optional[ASTNode]:
        binding = scope.get_binding(ident.name)
        if binding is None or not any(binding.node is spec for spec in self.specifiers):
            return None
        self.count += 1
        return BooleanLiteral(self.value, ident.line, ident.column)


def substitute_env_flags(program: Program, scan: ImportScan, options: NormalizedOptions) -> int:
    """Inline the debug flag; returns the number of references replaced."""
    if not scan.flag_specifiers:
        return 0
    substituter = FlagSubstituter(scan.flag_specifiers, options.debug_tools.is_debug)
    substituter.walk(program)
    return substituter.count


class MacroRecognizer(ScopeWalker):
    """Queues an expansion for each statement-level call to a macro import."""

    def __init__(self, scan: ImportScan, builder: ExpressionBuilder):
        self.scan = scan
        self.builder = builder
        self.local_names = {binding.local_name for binding in scan.macro_bindings}
        self.pending: List[PendingExpansion] = []

    def visit_statement(self, stmt: ExpressionStatement, scope: Scope):
        call = stmt.expression
        if not isinstance(call, CallExpression) or not isinstance(call.callee, Identifier):
            return
        if call.callee.name not in self.local_names:
            return
        # A local declaration of the same name shadows the import
        declared = scope.get_binding(call.callee.name)
        macro = self.scan.binding_for(declared.node) if declared is not None else None
        if macro is None:
            return
        self.pending.append(PendingExpansion(stmt, self.builder.build(macro.kind, call), macro))


def recognize_and_queue(program: Program, scan: ImportScan,
                        builder: ExpressionBuilder) -> List[PendingExpansion]:
    if not scan.macro_bindings:
        return []
    recognizer = MacroRecognizer(scan, builder)
    recognizer.walk(program)
    return recognizer.pending


def apply_expansions(pending: List[PendingExpansion], flag: BooleanLiteral):
    for expansion in pending:
        stmt = expansion.statement
        stmt.expression = ParenthesizedExpression(expansion.build(flag), stmt.line, stmt.column)


def _reexported_names(program: Program) -> set:
    """Local names listed in `export { ... }` without a source."""
    names = set()
    for stmt in program.body:
        if isinstance(stmt, ExportNamedDeclaration) and stmt.source is None:
            names.update(spec.local.name for spec in stmt.specifiers)
    return names


def clean_imports(program: Program, scan: ImportScan, options: NormalizedOptions):
    """
    Remove macro imports and substituted flag imports.

    A flag specifier that the module re-exports is kept, since the export
    still needs its binding.
    """
    if not options.externalize_helpers.keeps_import:
        for declaration in scan.debug_declarations:
            macro_specifiers = [b.specifier for b in scan.macro_bindings if b.declaration is declaration]
            if len(macro_specifiers) == len(declaration.specifiers):
                _remove_declaration(program, declaration)
            else:
                declaration.specifiers = [spec for spec in declaration.specifiers
                                          if not any(spec is m for m in macro_specifiers)]

    reexported = _reexported_names(program)
    removable = [spec for spec in scan.flag_specifiers if spec.local.name not in reexported]
    for declaration in scan.flag_declarations:
        declaration.specifiers = [spec for spec in declaration.specifiers
                                  if not any(spec is f for f in removable)]
        if not declaration.specifiers:
            _remove_declaration(program, declaration)


class MacroExpander:
    """
    Expands debug macros in parsed programs.

    One expander can process many programs; warnings accumulate across them.
    """

    def __init__(self, options: NormalizedOptions, verbose: bool = False):
        self.options = options
        self.verbose = verbose
        self.warnings: List[str] = []

    def log(self, message: str):
        if self.verbose:
            print(f"[macros] {message}", file=sys.stderr)

    def warn(self, code: str, message: str):
        warning = f"{code}: {message}"
        self.warnings.append(warning)
        self.log(f"Warning: {warning}")

    def get_warnings(self) -> List[str]:
        return self.warnings.copy()

    def expand(self, program: Program) -> Program:
        """Expand every macro call in program, in place; returns program."""
        scan = scan_imports(program, self.options, self.log)

        count = substitute_env_flags(program, scan, self.options)
        if count:
            self.log(f"Substituted {count} debug flag reference(s)")

        builder = ExpressionBuilder(self.options, program.filename, self.warn)
        pending = recognize_and_queue(program, scan, builder)

        used = {id(expansion.binding) for expansion in pending}
        for binding in scan.macro_bindings:
            if id(binding) not in used:
                self.warn("DBG0201", f"{program.filename}: '{binding.local_name}' "
                                     f"is imported but never called")

        flag = BooleanLiteral(self.options.debug_tools.is_debug)
        apply_expansions(pending, flag)
        clean_imports(program, scan, self.options)

        self.log(f"Expanded {len(pending)} macro call(s) in {program.filename}")
        return program
