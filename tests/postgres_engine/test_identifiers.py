from src.postgres_engine.identifiers import format_encoding, quote_identifier, quote_literal


def test_quote_identifier_wraps_in_double_quotes():
    assert quote_identifier("app") == '"app"'


def test_quote_literal_wraps_in_single_quotes():
    assert quote_literal("UTF8") == "'UTF8'"


def test_format_encoding_leaves_default_keyword_bare():
    assert format_encoding("DEFAULT") == "DEFAULT"


def test_format_encoding_is_case_sensitive_about_default():
    assert format_encoding("Default") == "'Default'"
