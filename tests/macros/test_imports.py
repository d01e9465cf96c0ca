"""Tests for debug-tools import scanning and cleanup."""

from dbgmacros.compiler import MacroCompiler
from .conftest import AssertTransform


class TestImportCleanup:

    def test_declaration_of_only_macros_is_removed(self):
        AssertTransform("""
            import { assert, warn, log, deprecate } from '@ember/debug';
            warn('x');
            log('y');
            assert('z', ok);
            deprecate('old', false, { id: 'old', until: '2.0' });
        """).outputs("""
            (false && console.warn('x'));
            (false && console.log('y'));
            (false && console.assert('z', ok));
            (false && !(false) && console.warn('old'));
        """)

    def test_other_specifiers_are_kept(self):
        AssertTransform("""
            import { warn, registerWarnHandler } from '@ember/debug';
            registerWarnHandler(handler);
            warn('x');
        """).outputs("""
            import { registerWarnHandler } from '@ember/debug';
            registerWarnHandler(handler);
            (false && console.warn('x'));
        """)

    def test_default_specifier_is_kept(self):
        AssertTransform("""
            import debug, { warn } from '@ember/debug';
            warn('x');
        """).outputs("""
            import debug from '@ember/debug';
            (false && console.warn('x'));
        """)

    def test_side_effect_import_is_removed(self):
        AssertTransform("""
            import '@ember/debug';
            run();
        """).outputs("run();")

    def test_unused_macro_import_warns_and_is_removed(self):
        AssertTransform("""
            import { warn, assert } from '@ember/debug';
            warn('x');
        """).with_warnings("DBG0201").outputs("(false && console.warn('x'));")

    def test_module_mode_keeps_unused_imports(self):
        AssertTransform("""
            import { warn, assert } from '@ember/debug';
            warn('x');
        """).externalized_to_module().outputs("""
            import { warn, assert } from '@ember/debug';
            (false && warn('x'));
        """)

    def test_several_declarations_are_all_cleaned(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            import { log, runInDebug } from '@ember/debug';
            warn('x');
            log('y');
        """).outputs("""
            import { runInDebug } from '@ember/debug';
            (false && console.warn('x'));
            (false && console.log('y'));
        """)


class TestUnrelatedImports:

    def test_other_sources_are_untouched(self):
        AssertTransform("""
            import { warn } from 'some-logger';
            warn('x');
        """).outputs("""
            import { warn } from 'some-logger';
            warn('x');
        """)

    def test_unsupported_names_are_not_macros(self):
        AssertTransform("""
            import { info } from '@ember/debug';
            info('x');
        """).without_warnings().outputs("""
            import { info } from '@ember/debug';
            info('x');
        """)

    def test_namespace_import_is_not_expanded(self):
        AssertTransform("""
            import * as debug from '@ember/debug';
            debug.warn('x');
        """).outputs("""
            import * as debug from '@ember/debug';
            debug.warn('x');
        """)

    def test_feature_sources_are_left_alone(self):
        AssertTransform("""
            import { FEATURE_A } from '@ember/features';
            import { warn } from '@ember/debug';
            if (FEATURE_A) {
              warn('a');
            }
        """).with_feature_source('@ember/features').outputs("""
            import { FEATURE_A } from '@ember/features';
            if (FEATURE_A) {
              (false && console.warn('a'));
            }
        """)

    def test_no_configured_source_passes_through(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            warn('x');
        """).with_debug_tools(None).with_warnings("DBG0001").outputs("""
            import { warn } from '@ember/debug';
            warn('x');
        """)


class TestRepeatedExpansion:

    def test_output_is_stable(self):
        source = (
            "import { warn, assert } from '@ember/debug';\n"
            "warn('x');\n"
            "assert('y', ok);\n"
        )
        assertion = AssertTransform(source).with_predicate_index(1)
        first = MacroCompiler(assertion.options()).compile_string(source, "a.js")
        second = MacroCompiler(assertion.options()).compile_string(first, "a.js")
        assert first == second

    def test_module_mode_output_is_stable(self):
        source = (
            "import { warn } from '@ember/debug';\n"
            "warn('x');\n"
        )
        assertion = AssertTransform(source).externalized_to_module()
        first = MacroCompiler(assertion.options()).compile_string(source, "a.js")
        second = MacroCompiler(assertion.options()).compile_string(first, "a.js")
        assert first == second
