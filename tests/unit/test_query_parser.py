"""Search query parser: vocabulary matching and keyword extraction."""

from shiurbank.application.services.query_parser import extract_keywords, parse_query


def test_rebbi_name_claims_its_words() -> None:
    """Words inside a matched rebbi name are not repeated as keywords."""
    parsed = parse_query("Rabbi Cohen halacha", ["Rabbi Cohen"], [], [])
    assert parsed.rebbi_names == frozenset({"rabbi cohen"})
    assert parsed.keywords == frozenset({"halacha"})
    assert parsed.topic_names == frozenset()
    assert parsed.institution_names == frozenset()


def test_blank_query_is_empty() -> None:
    assert parse_query("   ", ["Rabbi Cohen"], ["Halacha"], []).is_empty
    assert parse_query(None, [], [], []).is_empty


def test_stop_words_and_short_tokens_dropped() -> None:
    keywords = extract_keywords("the laws of shabbos in a nutshell by me")
    assert keywords == frozenset({"laws", "shabbos", "nutshell"})


def test_punctuation_stripped_but_apostrophe_kept() -> None:
    keywords = extract_keywords("Shabbos! chazal's (kiddush)")
    assert keywords == frozenset({"shabbos", "chazal's", "kiddush"})


def test_topic_and_institution_matched_case_insensitively() -> None:
    parsed = parse_query(
        "Halacha shiur at Yeshiva University",
        ["Rav Levi"],
        ["HALACHA", "Gemara"],
        ["Yeshiva University"],
    )
    assert parsed.topic_names == frozenset({"halacha"})
    assert parsed.institution_names == frozenset({"yeshiva university"})
    assert parsed.rebbi_names == frozenset()
    assert parsed.keywords == frozenset({"shiur"})


def test_duplicate_words_collapse() -> None:
    parsed = parse_query("kiddush kiddush KIDDUSH", [], [], [])
    assert parsed.keywords == frozenset({"kiddush"})
