"""
Tests for splitting command lines and parsing segments.
"""

import pytest
from termshell.core.commands.parser import CommandParser
from termshell.core.domain.commands import CommandPart, ParsedArg, PartKind


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser()


class TestSplitByOperators:
    def test_single_command(self) -> None:
        parts = CommandParser.split_by_operators("echo hello")
        assert parts == [CommandPart(PartKind.COMMAND, "echo hello")]

    def test_all_operators_in_order(self) -> None:
        parts = CommandParser.split_by_operators("a && b || c | d >> out.txt")

        assert [p.kind for p in parts] == [
            PartKind.COMMAND,
            PartKind.AND,
            PartKind.COMMAND,
            PartKind.OR,
            PartKind.COMMAND,
            PartKind.PIPE,
            PartKind.COMMAND,
            PartKind.APPEND,
            PartKind.COMMAND,
        ]
        assert [p.value for p in parts if not p.is_operator] == [
            "a",
            "b",
            "c",
            "d",
            "out.txt",
        ]

    def test_double_pipe_is_not_two_pipes(self) -> None:
        parts = CommandParser.split_by_operators("false||echo ok")
        assert [p.kind for p in parts] == [PartKind.COMMAND, PartKind.OR, PartKind.COMMAND]

    def test_append_is_one_operator(self) -> None:
        parts = CommandParser.split_by_operators("echo hi>>log.txt")
        assert [p.value for p in parts] == ["echo hi", ">>", "log.txt"]

    @pytest.mark.parametrize(
        "line",
        ['echo "a && b"', "echo 'a || b'", 'echo "x | y >> z"'],
    )
    def test_operators_inside_quotes_are_literal(self, line: str) -> None:
        parts = CommandParser.split_by_operators(line)
        assert parts == [CommandPart(PartKind.COMMAND, line)]

    def test_single_quote_inside_double_quotes(self) -> None:
        parts = CommandParser.split_by_operators("echo \"it's | fine\" | echo")
        assert [p.kind for p in parts] == [PartKind.COMMAND, PartKind.PIPE, PartKind.COMMAND]
        assert parts[0].value == "echo \"it's | fine\""

    def test_empty_segments_are_dropped(self) -> None:
        parts = CommandParser.split_by_operators("  && echo")
        assert parts == [CommandPart(PartKind.AND, "&&"), CommandPart(PartKind.COMMAND, "echo")]

    def test_empty_line(self) -> None:
        assert CommandParser.split_by_operators("   ") == []


class TestParse:
    def test_words_form_command_name(self, parser: CommandParser) -> None:
        parsed = parser.parse("theme set background red")
        assert parsed.command_name == "theme set background red"
        assert parsed.words == ["theme", "set", "background", "red"]
        assert parsed.args == ()

    def test_flag_with_equals_value(self, parser: CommandParser) -> None:
        parsed = parser.parse("http get --timeout=30 --url=example.com")
        assert parsed.command_name == "http get"
        assert parsed.args == (
            ParsedArg("timeout", 30),
            ParsedArg("url", "example.com"),
        )

    def test_bare_flag_is_true(self, parser: CommandParser) -> None:
        parsed = parser.parse("ls -l --all")
        assert parsed.args == (ParsedArg("l", True), ParsedArg("all", True))
        assert parsed.command_name == "ls"

    def test_flag_before_quoted_word_is_left_unpaired(
        self, parser: CommandParser
    ) -> None:
        parsed = parser.parse('note add --title "My first note" body')
        assert parsed.args == (ParsedArg("title", True),)
        assert parsed.words == ["note", "add", "My first note", "body"]
        assert parsed.tokens[3].quoted is True
        assert parsed.tokens[4].quoted is False

    def test_quoted_equals_value(self, parser: CommandParser) -> None:
        parsed = parser.parse("greet --name='Ada Lovelace'")
        assert parsed.args == (ParsedArg("name", "Ada Lovelace"),)

    def test_quoted_word_is_unquoted(self, parser: CommandParser) -> None:
        parsed = parser.parse('echo "a && b"')
        assert parsed.words == ["echo", "a && b"]

    def test_value_coercion(self, parser: CommandParser) -> None:
        parsed = parser.parse("cmd --a=1 --b=2.5 --c=true --d=false --e=text")
        values = {arg.name: arg.value for arg in parsed.args}
        assert values == {"a": 1, "b": 2.5, "c": True, "d": False, "e": "text"}

    def test_unparsable_segment_yields_empty_name(self, parser: CommandParser) -> None:
        parsed = parser.parse("   ")
        assert parsed.command_name == ""
        assert parsed.args == ()

    def test_raw_is_kept(self, parser: CommandParser) -> None:
        assert parser.parse("echo  hi").raw == "echo  hi"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        ("-7", -7),
        ("3.14", 3.14),
        ("1e3", 1000.0),
        ("true", True),
        ("false", False),
        ("True", "True"),
        ("12abc", "12abc"),
    ],
)
def test_parse_value(raw: str, expected: object) -> None:
    assert CommandParser.parse_value(raw) == expected
