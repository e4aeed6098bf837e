import io

import pytest

import main
from tcforth import InteractiveForth, Mode, StackUnderflow, UnknownWord


def scripted(lines, prompts=None):
    """get_input replacement feeding lines, then EOF"""
    pending = list(lines)

    def get_input(prompt):
        if prompts is not None:
            prompts.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)
    return get_input


class TestDSL:

    def test_push_is_chainable(self, forth):
        forth.push(1, 2)(3)
        assert forth.values() == [1, 2, 3]

    def test_pop_and_peek(self, forth):
        forth.push(4, 5)
        assert forth.peek() == 5
        assert forth.pop() == 5
        assert forth.values() == [4]

    def test_pop_empty(self, forth):
        with pytest.raises(StackUnderflow):
            forth.pop()

    def test_run_by_name(self, forth):
        forth.execute(": square dup * ;").push(9).run('square')
        assert forth.values() == [81]

    def test_run_unknown(self, forth):
        with pytest.raises(UnknownWord):
            forth.run('missing')

    def test_run_skips_the_open_definition(self, forth):
        forth.execute(": foo 7 ;")
        forth.execute(": foo 1 2", final=False)
        forth.run('foo')
        assert forth.values() == [7]

    def test_run_cannot_reach_a_half_built_word(self, forth):
        forth.execute(": fresh 1 2", final=False)
        with pytest.raises(UnknownWord):
            forth.run('fresh')
        assert forth.values() == []

    def test_see_skips_the_open_definition(self, forth):
        forth.execute(": foo 7 ;")
        forth.execute(": foo 1 2", final=False)
        assert forth.see('foo') == ": foo 7 ;"

    def test_see(self, forth):
        forth.execute(": square dup * ;")
        assert forth.see('square') == ": square dup * ;"

    def test_repr_shows_the_stack(self, forth):
        forth.push(1, 2)
        assert repr(forth) == "<2> 1 2"

    def test_instances_are_independent(self):
        a = InteractiveForth(output=io.StringIO())
        b = InteractiveForth(output=io.StringIO())
        a.execute(": only-in-a 1 ;")
        assert a.dictionary.lookup('only-in-a') is not None
        assert b.dictionary.lookup('only-in-a') is None


class TestREPL:

    def test_runs_lines_until_bye(self, forth, output):
        forth.repl(scripted([": square dup * ;", "5 square .", "bye", "1 ."]))
        assert "25  ok\n" in output()
        assert "1 " not in output().split("25")[1]

    def test_definition_across_lines(self, forth, output):
        prompts = []
        forth.repl(scripted([": sq", "dup * ;", "3 sq ."], prompts))
        assert prompts[:3] == ["OK> ", "...> ", "OK> "]
        assert "9 " in output()

    def test_error_aborts_and_continues(self, forth, output):
        forth.repl(scripted(["7 1 0 /", "2 ."]))
        assert "Error: /: division by zero" in output()
        assert "2  ok" in output()
        assert forth.values() == []

    def test_error_inside_definition_discards_it(self, forth):
        forth.repl(scripted([": half-done 1 nonsense ;"]))
        assert forth.mode is Mode.INTERPRET
        assert forth.dictionary.lookup('half-done') is None

    def test_abort_resets_state(self, forth):
        forth.execute(": open 1", final=False)
        forth.push(3)
        forth.abort()
        assert forth.mode is Mode.INTERPRET
        assert forth.dictionary.active is None
        assert forth.values() == []


class TestCommandLine:

    def test_eval(self, capsys):
        assert main.main(['-e', '1 2 + .']) == 0
        assert capsys.readouterr().out == "3 "

    def test_file(self, tmp_path, capsys):
        program = tmp_path / "square.fth"
        program.write_text(": square dup * ;\n5 square . cr\n")
        assert main.main([str(program)]) == 0
        assert capsys.readouterr().out == "25 \n"

    def test_error_exit_status(self, capsys):
        assert main.main(['-e', ': inner 1 0 / ; inner']) == 1
        err = capsys.readouterr().err
        assert "DivisionByZero" in err
        assert "inner -> /" in err

    def test_truncated_definition_is_an_error(self, capsys):
        assert main.main(['-e', ': never-closed 1']) == 1
        assert "TruncatedDefinition" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main.main([str(tmp_path / "absent.fth")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, capsys):
        program = tmp_path / "garbled.fth"
        program.write_bytes(b"1 2 + . \xff\xfe")
        assert main.main([str(program)]) == 1
        assert "cannot read" in capsys.readouterr().err

    @pytest.mark.parametrize("value", ['0', '-3', 'deep'])
    def test_max_depth_flag_must_be_positive(self, capsys, value):
        with pytest.raises(SystemExit) as info:
            main.main(['--max-depth', value, '-e', '1 2 +'])
        assert info.value.code == 2
        assert "--max-depth" in capsys.readouterr().err

    def test_max_depth_flag(self, capsys):
        source = ": recur dup execute ; ' recur recur"
        assert main.main(['--max-depth', '20', '-e', source]) == 1
        assert "StackOverflow" in capsys.readouterr().err

    def test_max_depth_from_environment(self, monkeypatch):
        monkeypatch.setenv('TCFORTH_MAX_DEPTH', '64')
        assert main.default_max_depth() == 64

    @pytest.mark.parametrize("value", ['', 'lots', '0'])
    def test_bad_environment_value_falls_back(self, monkeypatch, value):
        monkeypatch.setenv('TCFORTH_MAX_DEPTH', value)
        assert main.default_max_depth() == main.DEFAULT_MAX_DEPTH
