"""Test token classification: structural characters, words, booleans."""

from mapinfo.tokens import TokenType

from tests.conftest import EXAMPLE_SOURCE, assert_texts, assert_types


class TestStructural:
    def test_open_block(self, lex):
        assert_types(lex("{"), [TokenType.OPEN_BLOCK])

    def test_close_block(self, lex):
        assert_types(lex("}"), [TokenType.CLOSE_BLOCK])

    def test_equals(self, lex):
        tokens = lex("=")
        assert_types(tokens, [TokenType.EQUALS])
        assert tokens[0].text == "="

    def test_next_value(self, lex):
        assert_types(lex(","), [TokenType.NEXT_VALUE])

    def test_no_space_needed(self, lex):
        tokens = lex("a={b,c}")
        assert_types(
            tokens,
            [
                TokenType.IDENTIFIER,
                TokenType.EQUALS,
                TokenType.OPEN_BLOCK,
                TokenType.IDENTIFIER,
                TokenType.NEXT_VALUE,
                TokenType.IDENTIFIER,
                TokenType.CLOSE_BLOCK,
            ],
        )


class TestWords:
    def test_identifier(self, lex):
        tokens = lex("NoIntermission")
        assert_types(tokens, [TokenType.IDENTIFIER])
        assert tokens[0].number == 0.0

    def test_identifier_with_digits(self, lex):
        tokens = lex("map01 SKY_2")
        assert_types(tokens, [TokenType.IDENTIFIER, TokenType.IDENTIFIER])
        assert_texts(tokens, ["map01", "SKY_2"])

    def test_true(self, lex):
        assert_types(lex("true"), [TokenType.TRUE])

    def test_false(self, lex):
        assert_types(lex("false"), [TokenType.FALSE])

    def test_booleans_case_insensitive(self, lex):
        assert_types(lex("TRUE False tRuE"), [TokenType.TRUE, TokenType.FALSE, TokenType.TRUE])

    def test_boolean_prefix_is_identifier(self, lex):
        assert_types(lex("trueish falsey"), [TokenType.IDENTIFIER, TokenType.IDENTIFIER])

    def test_boolean_numbers(self, lex):
        t, f = lex("true false")
        assert t.as_number() == 1.0
        assert f.as_number() == 0.0

    def test_identifier_not_numeric(self, lex):
        assert lex("Sky")[0].as_number() is None


class TestExampleStream:
    def test_types(self, lex):
        assert_types(
            lex(EXAMPLE_SOURCE),
            [
                TokenType.IDENTIFIER,
                TokenType.STRING,
                TokenType.NUMBER,
                TokenType.OPEN_BLOCK,
                TokenType.IDENTIFIER,
                TokenType.EQUALS,
                TokenType.NUMBER,
                TokenType.NEXT_VALUE,
                TokenType.NUMBER,
                TokenType.NEXT_VALUE,
                TokenType.NUMBER,
                TokenType.CLOSE_BLOCK,
            ],
        )

    def test_texts(self, lex):
        tokens = lex(EXAMPLE_SOURCE)
        assert tokens[0].text == "map01"
        assert tokens[1].text == "My Map"
        assert tokens[4].text == "Music"
        assert [t.number for t in tokens if t.type == TokenType.NUMBER] == [5.0, 3.0, 4.0, 5.0]

    def test_end_of_input_yields_null(self):
        from mapinfo.lexer import Lexer

        lexer = Lexer("a")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        assert lexer.next_token().type == TokenType.NULL
        assert lexer.next_token().type == TokenType.NULL

    def test_null_not_stored(self, lex):
        assert all(t.type != TokenType.NULL for t in lex(EXAMPLE_SOURCE))

    def test_empty_source(self, lex):
        assert lex("") == []
        assert lex("   \n\t ") == []


class TestPositions:
    def test_zero_based(self, lex):
        tok = lex("map")[0]
        assert tok.begin.line == 0
        assert tok.begin.column == 0
        assert tok.begin.offset == 0

    def test_end_is_one_past(self, lex):
        tok = lex("map")[0]
        assert tok.end.column == 3
        assert tok.end.offset == 3
        assert tok.size == 3

    def test_string_span_includes_quotes(self, lex):
        tok = lex(EXAMPLE_SOURCE)[1]
        assert tok.begin.column == 6
        assert tok.end.column == 14
        assert tok.size == 8
        assert tok.raw == '"My Map"'

    def test_newline_resets_column(self, lex):
        tokens = lex("a\n  b\n\n c")
        assert [(t.begin.line, t.begin.column) for t in tokens] == [(0, 0), (1, 2), (3, 1)]

    def test_offsets_index_source(self, lex):
        source = "Map 1 {\n  Sky = SKY01\n}"
        for tok in lex(source):
            assert source[tok.begin.offset : tok.end.offset] == tok.raw

    def test_carriage_return_is_whitespace(self, lex):
        tokens = lex("a\r\nb")
        assert_texts(tokens, ["a", "b"])
        assert tokens[1].begin.line == 1
        assert tokens[1].begin.column == 0


class TestTextComparison:
    def test_equal_ignoring_case(self, lex):
        tok = lex("NoIntermission")[0]
        assert tok.text_equals_ignore_case("nointermission")
        assert tok.text_equals_ignore_case("NOINTERMISSION")

    def test_shorter_candidate_fails(self, lex):
        assert not lex("Music")[0].text_equals_ignore_case("Mus")
        assert not lex("STRASSE")[0].text_equals_ignore_case("stra\u00dfe")

    def test_longer_candidate_fails(self, lex):
        assert not lex("Music")[0].text_equals_ignore_case("MusicA")

    def test_string_compares_content(self, lex):
        assert lex('"Hangar"')[0].text_equals_ignore_case("hangar")
