"""
Tests for scope resolution of macro calls.

A call is expanded only when its callee resolves to the macro import;
any closer declaration of the same name wins.
"""

from .conftest import AssertTransform


class TestShadowedMacros:

    def test_function_parameter(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            function f(warn) {
              warn('local');
            }
            warn('imported');
        """).outputs("""
            function f(warn) {
              warn('local');
            }
            (false && console.warn('imported'));
        """)

    def test_block_scoped_const(self):
        AssertTransform("""
            import { log } from '@ember/debug';
            {
              const log = console.log;
              log('local');
            }
            log('imported');
        """).outputs("""
            {
              const log = console.log;
              log('local');
            }
            (false && console.log('imported'));
        """)

    def test_hoisted_var(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            function g() {
              warn('before declaration');
              var warn = noop;
            }
        """).with_warnings("DBG0201").outputs("""
            function g() {
              warn('before declaration');
              var warn = noop;
            }
        """)

    def test_catch_parameter(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            try {
              run();
            } catch (warn) {
              warn('caught');
            }
        """).outputs("""
            try {
              run();
            } catch (warn) {
              warn('caught');
            }
        """)

    def test_nested_function_declaration(self):
        AssertTransform("""
            import { log } from '@ember/debug';
            function outer() {
              function log(message) {}
              log('inner');
            }
            log('outer');
        """).outputs("""
            function outer() {
              function log(message) {}
              log('inner');
            }
            (false && console.log('outer'));
        """)

    def test_shadowing_does_not_leak_out_of_block(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            for (let warn of handlers) {
              warn('each');
            }
            warn('after');
        """).outputs("""
            for (let warn of handlers) {
              warn('each');
            }
            (false && console.warn('after'));
        """)

    def test_class_declaration_in_block(self):
        AssertTransform("""
            import { log } from '@ember/debug';
            {
              class log {}
              log('local');
            }
            log('imported');
        """).outputs("""
            {
              class log {}
              log('local');
            }
            (false && console.log('imported'));
        """)

    def test_const_in_switch_clause(self):
        AssertTransform("""
            import { warn } from '@ember/debug';
            switch (mode) {
              case 1:
                const warn = noop;
                warn('local');
            }
            warn('imported');
        """).outputs("""
            switch (mode) {
              case 1:
                const warn = noop;
                warn('local');
            }
            (false && console.warn('imported'));
        """)

    def test_local_function_named_like_macro(self):
        AssertTransform("""
            import { assert } from '@ember/debug';
            function assert(value) {}
            assert(true);
        """).generates_code_not_matching(r"console\.assert")
