import math
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.services.similarity import (  # noqa: E402
    bigram_similarity,
    boost_similarity,
    fit_tfidf,
    lcs_length,
    lcs_similarity,
    semantic_similarity,
    significant_tokens,
    tfidf_cosine_similarity,
)


class TfidfTests(unittest.TestCase):
    def test_idf_is_computed_over_the_pair_only(self):
        vectorizer, matrix = fit_tfidf(["alpha beta", "alpha gamma"])
        idf = dict(zip(vectorizer.get_feature_names_out(), vectorizer.idf_))
        self.assertAlmostEqual(idf["alpha"], 1.0)
        self.assertAlmostEqual(idf["beta"], math.log(3 / 2) + 1)
        self.assertAlmostEqual(idf["gamma"], math.log(3 / 2) + 1)
        self.assertEqual(matrix[0, vectorizer.vocabulary_["gamma"]], 0)
        self.assertGreater(matrix[1, vectorizer.vocabulary_["gamma"]], 0)

    def test_vectorizer_uses_significant_tokens(self):
        vectorizer, _ = fit_tfidf(["I built a C compiler", "The team built it"])
        self.assertEqual(sorted(vectorizer.vocabulary_), ["built", "compiler", "team"])

    def test_significant_tokens_drop_stopwords_and_single_chars(self):
        self.assertEqual(significant_tokens("I built a C compiler with the team"), ["built", "compiler", "team"])

    def test_cosine_without_shared_vocabulary_is_zero(self):
        self.assertEqual(tfidf_cosine_similarity("", "python docker"), 0.0)
        self.assertEqual(tfidf_cosine_similarity("pastry chef", "python docker"), 0.0)

    def test_cosine_with_empty_vocabulary_is_zero(self):
        self.assertEqual(tfidf_cosine_similarity("the and of", "to a"), 0.0)

    def test_cosine_of_identical_texts_is_one(self):
        text = "python docker python kubernetes"
        self.assertAlmostEqual(tfidf_cosine_similarity(text, text), 1.0)

    def test_cosine_ignores_document_length(self):
        self.assertAlmostEqual(
            tfidf_cosine_similarity("python docker", "python docker python docker"),
            1.0,
        )


class SequenceSimilarityTests(unittest.TestCase):
    def test_lcs_length(self):
        self.assertEqual(lcs_length(["aa", "bb", "cc", "dd"], ["aa", "cc", "dd"]), 3)
        self.assertEqual(lcs_length([], ["aa"]), 0)

    def test_lcs_truncates_long_sequences(self):
        tokens = [f"tok{i}" for i in range(150)]
        self.assertEqual(lcs_length(tokens, list(tokens)), 100)
        self.assertAlmostEqual(lcs_similarity(tokens, list(tokens)), 100 / 150)

    def test_lcs_rolling_rows_match_full_table(self):
        left = [f"tok{i % 7}" for i in range(120)]
        right = [f"tok{i % 5}" for i in range(90)]
        self.assertEqual(lcs_length(left, right), lcs_length(left[:100], right))

    def test_bigram_similarity(self):
        self.assertAlmostEqual(
            bigram_similarity(["data", "pipelines", "python"], ["data", "pipelines", "java"]),
            1 / 3,
        )
        self.assertEqual(bigram_similarity(["python"], ["python", "docker"]), 0.0)


class SemanticScoreTests(unittest.TestCase):
    def test_boost_curve_breakpoints(self):
        self.assertEqual(boost_similarity(0), 0)
        self.assertEqual(boost_similarity(10), 30)
        self.assertEqual(boost_similarity(15), 45)
        self.assertEqual(boost_similarity(20), 50)
        self.assertEqual(boost_similarity(30), 60)
        self.assertEqual(boost_similarity(40), 68)
        self.assertEqual(boost_similarity(50), 75)
        self.assertEqual(boost_similarity(100), 100)

    def test_identical_texts_score_100(self):
        text = "Built scalable Python services on Kubernetes with PostgreSQL"
        result = semantic_similarity(text, text)
        self.assertAlmostEqual(result.tfidf_cosine, 1.0)
        self.assertAlmostEqual(result.jaccard, 1.0)
        self.assertEqual(result.score, 100)

    def test_disjoint_texts_score_zero(self):
        result = semantic_similarity("Python developer", "Pastry chef")
        self.assertEqual(result.raw_score, 0.0)
        self.assertEqual(result.score, 0)

    def test_partial_overlap_is_between_bounds(self):
        result = semantic_similarity(
            "Built REST APIs in Python and Docker",
            "Looking for Python engineers who know Kubernetes",
        )
        self.assertGreater(result.score, 0)
        self.assertLess(result.score, 100)


if __name__ == "__main__":
    unittest.main()
