"""Tests for the compiler driver and command line interface."""

import sys

import pytest

from dbgmacros.compiler import MacroCompiler, main
from dbgmacros.macros import NormalizedOptions, DebugToolsOptions

SOURCE = (
    "import { warn } from '@ember/debug';\n"
    "warn('x');\n"
)


def run_main(monkeypatch, *argv):
    monkeypatch.setattr(sys, 'argv', ['dbgmacros.py', *argv])
    with pytest.raises(SystemExit) as info:
        main()
    return info.value.code


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "input.js"
    path.write_text(SOURCE, encoding='utf-8')
    return path


class TestMacroCompiler:

    def test_compile_string(self):
        compiler = MacroCompiler(NormalizedOptions(debug_tools=DebugToolsOptions('@ember/debug')))
        assert compiler.compile_string(SOURCE) == "(false && console.warn('x'));\n"
        assert compiler.get_warnings() == []

    def test_compile_file_to_output(self, source_file, tmp_path):
        output = tmp_path / "out.js"
        compiler = MacroCompiler(NormalizedOptions(debug_tools=DebugToolsOptions('@ember/debug', is_debug=True)))
        assert compiler.compile_file(str(source_file), str(output))
        assert output.read_text(encoding='utf-8') == "(true && console.warn('x'));\n"

    def test_missing_file(self, tmp_path, capsys):
        compiler = MacroCompiler()
        assert not compiler.compile_file(str(tmp_path / "missing.js"))
        assert "Error: File not found" in capsys.readouterr().err

    def test_syntax_error(self, tmp_path, capsys):
        path = tmp_path / "bad.js"
        path.write_text("warn(;\n", encoding='utf-8')
        assert not MacroCompiler().compile_file(str(path))
        err = capsys.readouterr().err
        assert err.startswith("Error: Syntax error:")
        assert "bad.js:1:6" in err

    def test_macro_usage_error(self, tmp_path, capsys):
        path = tmp_path / "bad.js"
        path.write_text("import { deprecate } from 'debug';\ndeprecate();\n", encoding='utf-8')
        compiler = MacroCompiler(NormalizedOptions(debug_tools=DebugToolsOptions('debug')))
        assert not compiler.compile_file(str(path))
        assert "deprecate requires a message" in capsys.readouterr().err

    def test_verbose_logging(self, capsys):
        compiler = MacroCompiler(NormalizedOptions(debug_tools=DebugToolsOptions('@ember/debug')), verbose=True)
        compiler.compile_string(SOURCE, "v.js")
        err = capsys.readouterr().err
        assert "[dbgmacros] Parsing..." in err
        assert "[macros] Macro import: warn as warn" in err
        assert "[macros] Expanded 1 macro call(s) in v.js" in err


class TestCommandLine:

    def test_writes_to_stdout(self, monkeypatch, capsys, source_file):
        assert run_main(monkeypatch, str(source_file), '--debug-tools', '@ember/debug') == 0
        assert capsys.readouterr().out == "(false && console.warn('x'));\n"

    def test_debug_and_global_namespace(self, monkeypatch, capsys, source_file):
        code = run_main(monkeypatch, str(source_file), '--debug-tools', '@ember/debug',
                        '--debug', '--global-namespace', 'Ember')
        assert code == 0
        assert capsys.readouterr().out == "(true && Ember.warn('x'));\n"

    def test_externalize_module(self, monkeypatch, capsys, source_file):
        code = run_main(monkeypatch, str(source_file), '--debug-tools', '@ember/debug',
                        '--externalize-module')
        assert code == 0
        assert capsys.readouterr().out == SOURCE.replace("warn('x');", "(false && warn('x'));")

    def test_env_flags(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "flags.js"
        path.write_text("import { DEBUG } from '@glimmer/env';\nif (DEBUG) run();\n", encoding='utf-8')
        code = run_main(monkeypatch, str(path), '--env-flags', '@glimmer/env',
                        '--flag-name', 'DEBUG', '--debug')
        assert code == 0
        assert capsys.readouterr().out == "if (true) run();\n"

    def test_predicate_index(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "assert.js"
        path.write_text("import { assert } from 'dbg';\nassert('m', ok);\n", encoding='utf-8')
        code = run_main(monkeypatch, str(path), '--debug-tools', 'dbg', '--assert-predicate-index', '1')
        assert code == 0
        assert capsys.readouterr().out == "(false && !(ok) && console.assert('m', false));\n"

    def test_output_file(self, monkeypatch, capsys, source_file, tmp_path):
        output = tmp_path / "out.js"
        assert run_main(monkeypatch, str(source_file), '-o', str(output), '--debug-tools', '@ember/debug') == 0
        assert capsys.readouterr().out == ""
        assert output.read_text(encoding='utf-8') == "(false && console.warn('x'));\n"

    def test_warnings_are_reported(self, monkeypatch, capsys, source_file):
        assert run_main(monkeypatch, str(source_file)) == 0
        captured = capsys.readouterr()
        assert captured.out == SOURCE
        assert "Warning: DBG0001" in captured.err

    def test_failure_exit_status(self, monkeypatch, capsys, tmp_path):
        assert run_main(monkeypatch, str(tmp_path / "missing.js")) == 1
