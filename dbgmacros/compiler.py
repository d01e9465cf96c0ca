"""
Debug macro compiler.

Coordinates lexing, parsing, macro expansion and code generation.
"""

import sys
from typing import List, Optional

from .lexer import Lexer
from .parser import Parser
from .macros import (MacroExpander, MacroUsageError, NormalizedOptions, DebugToolsOptions,
                     EnvFlagsOptions, ExternalizeHelpers)
from .codegen import CodeGenerator


class MacroCompiler:
    """Main debug macro compiler class."""

    def __init__(self, options: Optional[NormalizedOptions] = None, verbose: bool = False):
        self.options = options or NormalizedOptions()
        self.verbose = verbose
        self.expander = MacroExpander(self.options, verbose=verbose)
        self.warnings: List[str] = []

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[dbgmacros] {message}", file=sys.stderr)

    def warn(self, code: str, message: str):
        warning = f"{code}: {message}"
        self.warnings.append(warning)
        if self.verbose:
            print(f"[dbgmacros] Warning: {warning}", file=sys.stderr)

    def get_warnings(self) -> List[str]:
        """Warnings from the compiler and the expander, in that order."""
        return self.warnings + self.expander.get_warnings()

    def compile_string(self, source: str, filename: str = "<input>") -> str:
        """
        Expand debug macros in module source text.

        Args:
            source: ES module source
            filename: Name used in error messages

        Returns:
            The transformed source
        """
        self.log(f"Lexing {filename}...")
        tokens = Lexer(source, filename).tokenize()
        self.log(f"  {len(tokens)} tokens")

        self.log("Parsing...")
        program = Parser(tokens, filename).parse()
        self.log(f"  {len(program.body)} top-level statements, {len(program.imports)} imports")

        if self.options.debug_tools.import_source is None and self.options.env_flags.import_source is None:
            self.warn("DBG0001", "no debug-tools or env-flags source configured; nothing to expand")

        self.log("Expanding macros...")
        program = self.expander.expand(program)

        self.log("Generating code...")
        return CodeGenerator().generate(program)

    def compile_file(self, input_path: str, output_path: Optional[str] = None) -> bool:
        """
        Expand debug macros in a source file.

        Args:
            input_path: Path to the module source
            output_path: Where to write the result (stdout if None)

        Returns:
            True if compilation succeeded, False otherwise
        """
        try:
            self.log(f"Reading {input_path}...")
            with open(input_path, 'r', encoding='utf-8') as f:
                source = f.read()

            output = self.compile_string(source, str(input_path))

            if output_path is None:
                sys.stdout.write(output)
            else:
                self.log(f"Writing {output_path}...")
                with open(output_path, 'w', encoding='utf-8') as f:
                    f.write(output)

            self.log(f"Compilation successful: {len(output)} characters")
            return True

        except FileNotFoundError:
            print(f"Error: File not found: {input_path}", file=sys.stderr)
            return False
        except SyntaxError as e:
            print(f"Error: Syntax error: {e}", file=sys.stderr)
            return False
        except MacroUsageError as e:
            print(f"Error: {e}", file=sys.stderr)
            return False
        except Exception as e:
            print(f"Error: Compilation failed: {e}", file=sys.stderr)
            if self.verbose:
                import traceback
                traceback.print_exc()
            return False


def options_from_args(args) -> NormalizedOptions:
    """Map parsed command line arguments onto expander options."""
    return NormalizedOptions(
        feature_sources=frozenset(args.feature_source or ()),
        debug_tools=DebugToolsOptions(
            import_source=args.debug_tools,
            assert_predicate_index=args.assert_predicate_index,
            is_debug=args.debug,
        ),
        env_flags=EnvFlagsOptions(
            import_source=args.env_flags,
            flag_name=args.flag_name,
        ),
        externalize_helpers=ExternalizeHelpers(
            module=args.externalize_module,
            global_namespace=args.global_namespace,
        ),
    )


def main(argv: Optional[List[str]] = None):
    """Command-line interface for the compiler."""
    import argparse

    parser = argparse.ArgumentParser(
        description='dbgmacros - Expand debug macros into DEBUG-guarded expressions'
    )
    parser.add_argument('input', help='Input ES module source file')
    parser.add_argument('-o', '--output', help='Output file (default: stdout)')
    parser.add_argument('--debug-tools', metavar='SOURCE',
                        help='Module the debug macros are imported from')
    parser.add_argument('--env-flags', metavar='SOURCE',
                        help='Module the debug flag is imported from')
    parser.add_argument('--flag-name', metavar='NAME',
                        help='Name of the debug flag exported by the env-flags module')
    parser.add_argument('--debug', dest='debug', action='store_true', default=False,
                        help='Build with the debug flag set to true')
    parser.add_argument('--no-debug', dest='debug', action='store_false',
                        help='Build with the debug flag set to false (default)')
    parser.add_argument('--assert-predicate-index', type=int, metavar='N',
                        help='Hoist assert argument N into the guard')
    parser.add_argument('--externalize-module', action='store_true',
                        help='Keep calling the imported helpers instead of console')
    parser.add_argument('--global-namespace', metavar='NS',
                        help='Call helpers on a global namespace object')
    parser.add_argument('--feature-source', action='append', metavar='SOURCE',
                        help='Feature flag module (can be used multiple times)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    compiler = MacroCompiler(options_from_args(args), verbose=args.verbose)
    compiler.log(f"Options: {compiler.options!r}")
    success = compiler.compile_file(args.input, args.output)

    for warning in compiler.get_warnings():
        print(f"Warning: {warning}", file=sys.stderr)

    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
