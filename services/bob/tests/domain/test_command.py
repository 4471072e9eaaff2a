from bob.domain.command import Command, tokenize


def test_tokenize_splits_program_and_arguments():
    command = tokenize("echo hello world")
    assert command.program_name == "echo"
    assert command.arguments == ("echo", "hello", "world")


def test_tokenize_discards_empty_tokens():
    command = tokenize("echo   a\tb\n")
    assert command.arguments == ("echo", "a", "b")
    assert all(command.arguments)


def test_tokenize_skips_leading_delimiters():
    command = tokenize("\n\t  ls -l\n")
    assert command.program_name == "ls"
    assert command.argv == ["ls", "-l"]


def test_tokenize_is_repeatable():
    source = "printf %s\\n one two"
    assert tokenize(source) == tokenize(source)


def test_tokenize_has_no_quoting():
    command = tokenize('echo "a b"')
    assert command.arguments == ("echo", '"a', 'b"')


def test_tokenize_only_splits_on_space_tab_newline():
    command = tokenize("echo a\rb\x0bc")
    assert command.arguments == ("echo", "a\rb\x0bc")


def test_tokenize_blank_source_gives_empty_command():
    for source in ("", "   ", "\t\n \n"):
        command = tokenize(source)
        assert command == Command(program_name="")
        assert command.is_empty
        assert command.arguments == ()
