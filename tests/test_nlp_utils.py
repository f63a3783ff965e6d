import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.services.nlp_utils import (  # noqa: E402
    clean_text,
    extract_action_verbs,
    extract_sentences,
    has_quantification,
    is_stopword,
    tokenize,
    word_count,
)


class TextNormalizationTests(unittest.TestCase):
    def test_clean_text_collapses_all_whitespace(self):
        self.assertEqual(clean_text("  Senior\r\n\tEngineer   role \n"), "Senior Engineer role")

    def test_tokenize_lowercases_and_strips_punctuation(self):
        self.assertEqual(
            tokenize("Node.js, C++ & CI/CD pipelines!"),
            ["node", "js", "c", "ci", "cd", "pipelines"],
        )

    def test_tokenize_keeps_hyphenated_words(self):
        self.assertEqual(tokenize("Full-stack developer"), ["full-stack", "developer"])

    def test_tokenize_empty_text(self):
        self.assertEqual(tokenize("   "), [])

    def test_stopwords_include_grammar_and_resume_vocabulary(self):
        self.assertTrue(is_stopword("The"))
        self.assertTrue(is_stopword("must"))
        self.assertTrue(is_stopword("Experience"))
        self.assertTrue(is_stopword("skills"))
        self.assertFalse(is_stopword("python"))

    def test_word_count(self):
        self.assertEqual(word_count("one  two\nthree"), 3)
        self.assertEqual(word_count(""), 0)


class ContentSignalTests(unittest.TestCase):
    def test_extract_sentences(self):
        self.assertEqual(extract_sentences("Built it. Shipped it!\nDone"), ["Built it", "Shipped it", "Done"])

    def test_action_verbs_at_sentence_or_bullet_start(self):
        text = "Led a team of 5 engineers.\n- Built internal APIs\nWorked on reporting"
        self.assertEqual(extract_action_verbs(text), ["led", "built"])

    def test_action_verbs_ignore_mid_sentence_verbs(self):
        self.assertEqual(extract_action_verbs("The team that I led"), [])

    def test_quantification_detection(self):
        self.assertTrue(has_quantification("Reduced costs by 40% in Q3"))
        self.assertTrue(has_quantification("Mentored juniors for 3 years"))
        self.assertTrue(has_quantification("Served 2,500 hours of support"))
        self.assertFalse(has_quantification("Improved system performance"))
        self.assertFalse(has_quantification("Python 3"))


if __name__ == "__main__":
    unittest.main()
