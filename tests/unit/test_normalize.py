# tests/unit/test_normalize.py
from book_stats.parsing.normalize import clean_value, normalize_key, split_genres, title_case


def test_clean_value() -> None:
    assert clean_value("  Romance ") == "Romance"
    assert clean_value("   ") is None
    assert clean_value("") is None
    assert clean_value(None) is None


def test_normalize_key_is_trimmed_lowercase() -> None:
    assert normalize_key("  Political Fiction ") == "political fiction"
    assert normalize_key("ROMANCE") == normalize_key("romance")


def test_split_genres_keeps_phrases_atomic() -> None:
    assert split_genres("Political Fiction") == ["Political Fiction"]
    assert split_genres("Romance, Tragedy") == ["Romance", "Tragedy"]
    assert split_genres("Romance,Tragedy") == ["Romance", "Tragedy"]
    assert split_genres("Drama,, ,") == ["Drama"]
    assert split_genres("") == []


def test_title_case_words() -> None:
    assert title_case("political fiction") == "Political Fiction"
    assert title_case("THE GREAT GATSBY") == "The Great Gatsby"
    assert title_case("  jane   austen ") == "Jane Austen"


def test_title_case_hyphenated_segments() -> None:
    assert title_case("mary-jane") == "Mary-Jane"
    assert title_case("coming-of-age story") == "Coming-Of-Age Story"
    assert title_case("moby-dick") == "Moby-Dick"


def test_title_case_non_letters_and_blank() -> None:
    assert title_case("1984") == "1984"
    assert title_case("") == ""
    assert title_case("   ") == "   "
