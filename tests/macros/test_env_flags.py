"""Tests for debug flag substitution."""

from .conftest import AssertTransform, ENV_FLAGS


class TestFlagSubstitution:

    def test_flag_reference_becomes_literal(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            if (DEBUG) {
              setup();
            }
        """).with_env_flags().outputs("""
            if (false) {
              setup();
            }
        """)

    def test_debug_build_uses_true(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            export const isDebug = DEBUG;
        """).with_env_flags().in_debug().outputs("export const isDebug = true;")

    def test_aliased_flag(self):
        AssertTransform("""
            import { DEBUG as IS_DEBUG } from '@glimmer/env';
            const x = IS_DEBUG ? 1 : 2;
        """).with_env_flags().outputs("const x = false ? 1 : 2;")

    def test_other_specifiers_are_kept(self):
        AssertTransform("""
            import { DEBUG, CI } from '@glimmer/env';
            const x = DEBUG && CI;
        """).with_env_flags().outputs("""
            import { CI } from '@glimmer/env';
            const x = false && CI;
        """)

    def test_shorthand_property_is_expanded(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            const flags = { DEBUG };
        """).with_env_flags().outputs("const flags = { DEBUG: false };")

    def test_shadowed_flag_is_left_alone(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            function f(DEBUG) {
              return DEBUG;
            }
            const g = DEBUG;
        """).with_env_flags().outputs("""
            function f(DEBUG) {
              return DEBUG;
            }
            const g = false;
        """)

    def test_property_named_like_flag_is_left_alone(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            config.DEBUG = DEBUG;
        """).with_env_flags().outputs("config.DEBUG = false;")

    def test_side_effect_import_is_removed(self):
        AssertTransform("""
            import '@glimmer/env';
            run();
        """).with_env_flags().outputs("run();")

    def test_reexported_flag_keeps_its_import(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            export { DEBUG };
            if (DEBUG) x();
        """).with_env_flags().outputs("""
            import { DEBUG } from '@glimmer/env';
            export { DEBUG };
            if (false) x();
        """)

    def test_reexported_alias_keeps_only_that_specifier(self):
        AssertTransform("""
            import { DEBUG as IS_DEBUG, CI } from '@glimmer/env';
            export { IS_DEBUG as DEBUG };
            const x = CI;
        """).with_env_flags().outputs("""
            import { DEBUG as IS_DEBUG, CI } from '@glimmer/env';
            export { IS_DEBUG as DEBUG };
            const x = CI;
        """)

    def test_without_flag_name_nothing_changes(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            const x = DEBUG;
        """).with_env_flags(ENV_FLAGS, None).outputs("""
            import { DEBUG } from '@glimmer/env';
            const x = DEBUG;
        """)


class TestFlagWithMacros:

    def test_flag_and_macros_together(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            import { assert } from '@ember/debug';
            if (DEBUG) {
              assert('ready', isReady);
            }
        """).with_env_flags().with_predicate_index(1).in_debug().outputs("""
            if (true) {
              (true && !(isReady) && console.assert('ready', false));
            }
        """)

    def test_flag_inside_macro_arguments(self):
        AssertTransform("""
            import { DEBUG } from '@glimmer/env';
            import { warn } from '@ember/debug';
            warn('debug is', DEBUG);
        """).with_env_flags().outputs("(false && console.warn('debug is', false));")
