from datetime import date

from bibnotes.fields import extract_metadata
from bibnotes.models import NormalizedAuthor, ParsedEntry

TODAY = date(2024, 5, 1)


def test_empty_entry_gets_every_default():
    meta = extract_metadata(ParsedEntry(key="", type="", fields={}), today=TODAY)
    assert meta.title == "Untitled"
    assert meta.year == "Unknown Year"
    assert meta.authors == [NormalizedAuthor("Unknown Author", "")]
    assert meta.author_tags == []
    assert meta.abstract == "No abstract provided."
    assert meta.journal_title == "Unknown Journal"
    assert meta.citekey == "UnknownKey"
    assert meta.url == "No link provided"
    assert meta.publisher == "Unknown Publisher"
    assert (meta.volume, meta.issue, meta.pages, meta.doi) == ("N/A", "N/A", "N/A", "N/A")
    assert meta.entry_type == "Unknown Type"
    assert meta.entry_type_label == "Miscellaneous"
    assert meta.created_date == "2024-05-01"
    assert meta.last_modified == "2024-05-01"


def test_frye_scenario():
    entry = ParsedEntry(
        key="frye1982",
        type="book",
        fields={
            "author": "Frye, Northrup",
            "keywords": "Old English, Anglo-Saxon",
            "title": "The Great Code",
            "date": "1982-01-01",
        },
    )
    meta = extract_metadata(entry, today=TODAY)
    assert meta.author_tags == ["FryeN"]
    assert meta.year == "1982"
    assert meta.keyword_tags == ["#Old_English", "#Anglo_Saxon"]
    assert meta.all_tags == ["#FryeN", "#Old_English", "#Anglo_Saxon"]
    assert meta.file_name_author == "Frye"
    assert meta.entry_type_label == "Book"


def test_date_wins_over_year():
    meta = extract_metadata(ParsedEntry("k", "article", {"date": "2001-07", "year": "1999"}), today=TODAY)
    assert meta.year == "2001"
    meta = extract_metadata(ParsedEntry("k", "article", {"year": "1999"}), today=TODAY)
    assert meta.year == "1999"


def test_title_falls_back_to_shorttitle():
    meta = extract_metadata(ParsedEntry("k", "book", {"shorttitle": "Great Code"}), today=TODAY)
    assert meta.title == "Great Code"


def test_values_are_cleaned_of_braces_and_line_breaks():
    fields = {"title": "{The} Great\n    Code", "abstract": "  "}
    meta = extract_metadata(ParsedEntry("k", "book", fields), today=TODAY)
    assert meta.title == "The Great Code"
    assert meta.abstract == "No abstract provided."


def test_bibtex_field_fallbacks():
    fields = {"journal": "Modern Philology", "number": "3", "date-modified": "2023-12-24"}
    meta = extract_metadata(ParsedEntry("k", "article", fields), today=TODAY)
    assert meta.journal_title == "Modern Philology"
    assert meta.issue == "3"
    assert meta.last_modified == "2023-12-24"
    assert meta.entry_type_label == "Journal Article"


def test_entrysubtype_drives_label():
    meta = extract_metadata(ParsedEntry("k", "article", {"entrysubtype": "newspaper"}), today=TODAY)
    assert meta.entry_type == "article"
    assert meta.entry_type_label == "Newspaper Article"
