import pytest

from bibnotes.authors import coerce_author_value, normalize_authors
from bibnotes.models import (
    NormalizedAuthor,
    SingleStructuredAuthor,
    StringAuthors,
    StructuredAuthor,
    StructuredAuthorList,
)

UNKNOWN = [NormalizedAuthor("Unknown Author", "")]


def test_comma_form():
    assert normalize_authors(StringAuthors("Frye, Northrup")) == [NormalizedAuthor("Frye", "Northrup")]


def test_comma_form_keeps_full_remainder():
    out = normalize_authors(StringAuthors("Frye, Herman Northrop, Jr."))
    assert out == [NormalizedAuthor("Frye", "Herman Northrop, Jr.")]


def test_and_separated_natural_order():
    out = normalize_authors(StringAuthors("Northrup Frye and John Smith"))
    assert out == [NormalizedAuthor("Frye", "Northrup"), NormalizedAuthor("Smith", "John")]


def test_and_separator_is_case_insensitive_and_mixed_forms():
    out = normalize_authors(StringAuthors("Frye, Northrup AND John Ronald Smith"))
    assert out == [NormalizedAuthor("Frye", "Northrup"), NormalizedAuthor("Smith", "John Ronald")]


def test_braces_removed_and_single_token_is_corporate():
    assert normalize_authors(StringAuthors("{UNESCO}")) == [NormalizedAuthor("UNESCO", "")]


def test_comma_wins_over_corporate_form():
    assert normalize_authors(StringAuthors("Acme, Inc")) == [NormalizedAuthor("Acme", "Inc")]


def test_name_containing_and_is_not_split():
    out = normalize_authors(StringAuthors("Anderson, Sandra"))
    assert out == [NormalizedAuthor("Anderson", "Sandra")]


@pytest.mark.parametrize(
    "raw",
    [None, StringAuthors("Unknown Author"), StringAuthors(""), StringAuthors("{}"), StructuredAuthorList(())],
)
def test_unknown_inputs_give_single_sentinel(raw):
    assert normalize_authors(raw) == UNKNOWN


def test_structured_list():
    raw = StructuredAuthorList(
        (
            StructuredAuthor(first_name="Northrup", last_name="Frye"),
            StructuredAuthor(literal="World Health Organization"),
            StructuredAuthor(first_name="Ann"),
        )
    )
    assert normalize_authors(raw) == [
        NormalizedAuthor("Frye", "Northrup"),
        NormalizedAuthor("World Health Organization", ""),
        NormalizedAuthor("Unknown", "Ann"),
    ]


def test_single_structured_author():
    raw = SingleStructuredAuthor(StructuredAuthor(last_name="Frye"))
    assert normalize_authors(raw) == [NormalizedAuthor("Frye", "")]


def test_coerce_author_value_shapes():
    assert coerce_author_value(None) is None
    assert coerce_author_value("Frye, Northrup") == StringAuthors("Frye, Northrup")
    assert coerce_author_value({"lastName": "Frye", "firstName": "N"}) == SingleStructuredAuthor(
        StructuredAuthor(first_name="N", last_name="Frye")
    )
    assert coerce_author_value([{"literal": "ACM"}, {"family": "Smith", "given": "J"}]) == StructuredAuthorList(
        (StructuredAuthor(literal="ACM"), StructuredAuthor(first_name="J", last_name="Smith"))
    )
    assert coerce_author_value(["Frye, Northrup", "Smith, John"]) == StringAuthors(
        "Frye, Northrup and Smith, John"
    )


def test_every_shape_is_non_empty():
    shapes = [
        coerce_author_value("Frye, Northrup"),
        coerce_author_value([{"lastName": "Frye"}]),
        coerce_author_value({"literal": "ACM"}),
        coerce_author_value([]),
    ]
    for raw in shapes:
        assert normalize_authors(raw)


def test_name_key_is_a_corporate_author():
    assert coerce_author_value({"name": "UNESCO"}) == SingleStructuredAuthor(StructuredAuthor(literal="UNESCO"))
    assert normalize_authors(coerce_author_value({"name": "UNESCO"})) == [NormalizedAuthor("UNESCO", "")]
    assert normalize_authors(coerce_author_value([{"name": "UNESCO"}, {"lastName": "Frye", "firstName": "N"}])) == [
        NormalizedAuthor("UNESCO", ""),
        NormalizedAuthor("Frye", "N"),
    ]
