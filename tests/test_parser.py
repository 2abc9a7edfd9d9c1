import pytest

from mysh.parser import Command, parse_command, parse_line
from mysh.redirect import RedirectType


def test_simple_command():
    command = parse_command("ls -l /tmp")
    assert command.name == "ls"
    assert command.args == ["ls", "-l", "/tmp"]
    assert command.redirect_type is RedirectType.NONE
    assert command.input_file is None
    assert command.output_file is None
    assert command.is_background is False


def test_tabs_and_repeated_spaces_separate_words():
    command = parse_command("echo \t a   b")
    assert command.args == ["echo", "a", "b"]


def test_input_redirect():
    command = parse_command("cat < in.txt")
    assert command.args == ["cat"]
    assert command.input_file == "in.txt"
    assert command.redirect_type is RedirectType.INPUT


def test_output_redirect():
    command = parse_command("echo hi > out.txt")
    assert command.args == ["echo", "hi"]
    assert command.output_file == "out.txt"
    assert command.redirect_type is RedirectType.OUTPUT


def test_append_redirect():
    command = parse_command("echo hi >> log.txt")
    assert command.output_file == "log.txt"
    assert command.redirect_type is RedirectType.APPEND


def test_redirect_without_spaces():
    command = parse_command("echo hi>out.txt")
    assert command.args == ["echo", "hi"]
    assert command.output_file == "out.txt"


def test_both_redirects_last_one_sets_type():
    command = parse_command("sort < a.txt > b.txt")
    assert command.args == ["sort"]
    assert command.input_file == "a.txt"
    assert command.output_file == "b.txt"
    assert command.redirect_type is RedirectType.OUTPUT


def test_background_marker_is_removed():
    command = parse_command("sleep 5 &")
    assert command.is_background is True
    assert command.args == ["sleep", "5"]


def test_ampersand_glued_to_word_is_not_background():
    command = parse_command("sleep 5&")
    assert command.is_background is False
    assert command.args == ["sleep", "5&"]


@pytest.mark.parametrize("quoted", ['"hello world"', "'hello world'"])
def test_quoted_argument(quoted):
    command = parse_command(f"echo {quoted}")
    assert command.args == ["echo", "hello world"]


def test_unterminated_quote_runs_to_end():
    command = parse_command('echo "open ended')
    assert command.args == ["echo", "open ended"]


def test_quotes_keep_redirect_symbols():
    command = parse_command("echo '>' x")
    assert command.args == ["echo", ">", "x"]
    assert command.redirect_type is RedirectType.NONE


def test_environment_variable_is_expanded(monkeypatch):
    monkeypatch.setenv("MYSH_TEST_VAR", "expanded")
    command = parse_command("echo $MYSH_TEST_VAR")
    assert command.args == ["echo", "expanded"]


def test_unset_variable_is_dropped(monkeypatch):
    monkeypatch.delenv("MYSH_UNSET_VAR", raising=False)
    command = parse_command("echo $MYSH_UNSET_VAR done")
    assert command.args == ["echo", "done"]


def test_variable_inside_quotes_is_literal(monkeypatch):
    monkeypatch.setenv("MYSH_TEST_VAR", "expanded")
    command = parse_command("echo '$MYSH_TEST_VAR'")
    assert command.args == ["echo", "$MYSH_TEST_VAR"]


def test_variable_as_command_name(monkeypatch):
    monkeypatch.setenv("MYSH_TEST_CMD", "ls")
    command = parse_command("$MYSH_TEST_CMD -a")
    assert command.name == "ls"
    assert command.args == ["ls", "-a"]


def test_parse_line_splits_pipeline():
    commands = parse_line("ls -l | grep txt | wc -l")
    assert [c.args for c in commands] == [["ls", "-l"], ["grep", "txt"], ["wc", "-l"]]


def test_parse_line_skips_empty_segments():
    commands = parse_line("ls || wc")
    assert [c.name for c in commands] == ["ls", "wc"]


def test_parse_line_strips_newline():
    commands = parse_line("pwd\n")
    assert commands == [Command(name="pwd", args=["pwd"])]


@pytest.mark.parametrize("blank", ["", "   ", "|", " | "])
def test_parse_line_blank_gives_nothing(blank):
    assert parse_line(blank) == []


def test_parse_line_keeps_redirects_per_segment():
    commands = parse_line("cat < in.txt | sort > out.txt")
    assert commands[0].input_file == "in.txt"
    assert commands[0].output_file is None
    assert commands[1].output_file == "out.txt"
    assert commands[1].input_file is None