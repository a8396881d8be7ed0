"""
Tests for the tokenizer and text helpers.
"""

from utils.text_utils import clean_text, normalize_skills, tokenize, unique_tokens, word_count


class TestTokenize:

    def test_lowercases_and_splits_on_punctuation(self):
        assert list(tokenize("Hello, World! node.js C++ 2024")) == [
            "hello", "world", "node", "js", "c", "2024",
        ]

    def test_is_lazy_and_restartable(self):
        text = "Python Docker"
        tokens = tokenize(text)
        assert next(tokens) == "python"
        assert list(tokenize(text)) == ["python", "docker"]

    def test_empty_text(self):
        assert list(tokenize("")) == []

    def test_accented_letters_split_tokens(self):
        assert list(tokenize("Résumé naïve")) == ["r", "sum", "na", "ve"]

    def test_cyrillic_kept(self):
        assert list(tokenize("Опыт работы")) == ["опыт", "работы"]


class TestUniqueTokens:

    def test_keeps_first_encounter_order(self):
        assert unique_tokens("beta alpha beta gamma alpha") == ["beta", "alpha", "gamma"]

    def test_length_and_exclusion_filters(self):
        result = unique_tokens("python and kubernetes from java", min_length=3, exclude={"from"})
        assert result == ["python", "kubernetes", "java"]


def test_normalize_skills():
    assert normalize_skills([" Python", "DOCKER ", "", "  "]) == {"python", "docker"}


def test_word_count():
    assert word_count("  one two\nthree\t four  ") == 4
    assert word_count("") == 0


def test_clean_text():
    assert clean_text("  a   b\t\tc\n\n\n\nd  ") == "a b c\n\nd"
