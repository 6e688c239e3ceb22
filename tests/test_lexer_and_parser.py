import pytest
from hypothesis import given, strategies as st

from mal.errors import MalIncompleteInput, MalSyntaxError
from mal.printer import pr_str
from mal.reader.parser import lex, read_all, read_str, TokenStream
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import KEYWORD_PREFIX, HashMap, List, Vector, keyword


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("atom", "a")]),
        ("'a", [("macro", "'"), ("atom", "a")]),
        ("~@a", [("macro", "~@"), ("atom", "a")]),
        ("~a", [("macro", "~"), ("atom", "a")]),
        ("(a b c)", [("lparen", "("), ("atom", "a"), ("atom", "b"), ("atom", "c"), ("rparen", ")")]),
        ("[1, 2]", [("lbracket", "["), ("atom", "1"), ("atom", "2"), ("rbracket", "]")]),
        ('{"k" :v}', [("lbrace", "{"), ("string", '"k"'), ("atom", ":v"), ("rbrace", "}")]),
        ('"hello"', [("string", '"hello"')]),
        ('"a \\" b"', [("string", '"a \\" b"')]),
        (" ; comment\n a b", [("atom", "a"), ("atom", "b")]),
        (",,, a ,,,", [("atom", "a")]),
        ("", []),
        ("   \n\t", []),
    ]
)
def test_lexer_basic(source, expected):
    tokens = list(lex(source))
    assert tokens == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", Nil),
        ("true", True),
        ("false", False),
        ("123", 123),
        ("-45", -45),
        ("-", Symbol("-")),
        ("abc", Symbol("abc")),
        ("def!", Symbol("def!")),
        ('"hello"', "hello"),
        (":kw", keyword("kw")),
        ("'a", List([Symbol("quote"), Symbol("a")])),
        ("`a", List([Symbol("quasiquote"), Symbol("a")])),
        ("~a", List([Symbol("unquote"), Symbol("a")])),
        ("~@a", List([Symbol("splice-unquote"), Symbol("a")])),
        ("@a", List([Symbol("deref"), Symbol("a")])),
        ("(a b c)", List([Symbol("a"), Symbol("b"), Symbol("c")])),
    ]
)
def test_parser(source, expected):
    stream = TokenStream(lex(source))
    result = list(stream.parse_all())
    assert result[0] == expected     # Parser yields one expression
    assert type(result[0]) is type(expected)


def test_nested_lists():
    result = read_str("((a b) (c d))")
    assert result == List([List([Symbol("a"), Symbol("b")]), List([Symbol("c"), Symbol("d")])])
    assert isinstance(result[0], List)


def test_vector_literal():
    result = read_str("[1 (+ 1 1) [3]]")
    assert isinstance(result, Vector)
    assert isinstance(result[1], List)
    assert isinstance(result[2], Vector)
    assert list(result[2]) == [3]


def test_hash_map_literal():
    result = read_str('{"a" 1 :b [2]}')
    assert isinstance(result, HashMap)
    assert result == {"a": 1, keyword("b"): Vector([2])}


def test_empty_collections():
    assert read_str("()") == List()
    assert isinstance(read_str("()"), List)
    assert isinstance(read_str("[]"), Vector)
    assert read_str("{}") == HashMap()


def test_with_meta_shorthand():
    result = read_str('^{"a" 1} [1 2]')
    assert result == List([Symbol("with-meta"), Vector([1, 2]), HashMap({"a": 1})])


def test_reader_macro_wraps_whole_following_form():
    assert read_str("'(1 2)") == List([Symbol("quote"), List([1, 2])])


@pytest.mark.parametrize(
    "source, expected",
    [
        ('"a\\nb"', "a\nb"),
        ('"back\\\\slash"', "back\\slash"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('""', ""),
        ('"(not a list)"', "(not a list)"),
        ('"; not a comment"', "; not a comment"),
    ]
)
def test_string_escapes(source, expected):
    assert read_str(source) == expected


def test_keyword_is_distinct_from_string():
    kw = read_str(":abc")
    assert kw.startswith(KEYWORD_PREFIX)
    assert kw != "abc"
    assert kw != ":abc"


def test_comments_and_commas_are_separators():
    assert read_all("1, 2 ; skip me\n 3") == [1, 2, 3]
    assert read_str("(1,2,3)") == List([1, 2, 3])


def test_read_str_returns_first_form_only():
    assert read_str("1 2 3") == 1


@pytest.mark.parametrize("source", ["", "   ", "; only a comment", ",,,"])
def test_read_str_without_forms_is_none(source):
    assert read_str(source) is None
    assert read_all(source) == []


@pytest.mark.parametrize(
    "source, message",
    [
        ("(1 2", "expected ')', got EOF"),
        ("[1 2", "expected ']', got EOF"),
        ('{"a" 1', "expected '}', got EOF"),
        ("((1)", "expected ')', got EOF"),
        ('"abc', "expected '\"', got EOF"),
        ("'", "expected form, got EOF"),
        ("(1 '", "expected form, got EOF"),
    ]
)
def test_incomplete_input(source, message):
    with pytest.raises(MalIncompleteInput) as exc:
        read_all(source)
    assert exc.value.message == message


@pytest.mark.parametrize("source", [")", "]", "(1))", "(1]"])
def test_stray_closer_is_syntax_error(source):
    with pytest.raises(MalSyntaxError) as exc:
        read_all(source)
    assert not isinstance(exc.value, MalIncompleteInput)
    assert "unexpected" in exc.value.message


@pytest.mark.parametrize("source", ['{"a"}', "{1 2}", "{(a) 1}"])
def test_malformed_hash_map(source):
    with pytest.raises(MalSyntaxError):
        read_str(source)


# -----------------------------------------------------
# print -> read -> print property
# -----------------------------------------------------

_names = st.from_regex(r"[a-z][a-z0-9*+!?<>=-]{0,8}", fullmatch=True).filter(
    lambda s: s not in ("nil", "true", "false")
)

_atoms = st.one_of(
    st.sampled_from([Nil, True, False]),
    st.integers(),
    st.text().filter(lambda s: not s.startswith(KEYWORD_PREFIX)),
    _names.map(Symbol),
    _names.map(keyword),
)

_forms = st.recursive(
    _atoms,
    lambda children: st.one_of(
        st.lists(children, max_size=5).map(List),
        st.lists(children, max_size=5).map(Vector),
    ),
    max_leaves=20,
)


@given(_forms)
def test_printed_forms_read_back(form):
    printed = pr_str(form, True)
    again = read_str(printed)
    assert pr_str(again, True) == printed
