import random
import sys
import unittest
from dataclasses import asdict
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.services.suggestions import (  # noqa: E402
    estimate_score_impact,
    generate_suggestions,
    suggest_section_for_keyword,
)

RESUME = (
    "Summary\n"
    "Backend engineer focused on reliable services.\n"
    "Experience\n"
    "Worked on the billing system\n"
    "Skills\n"
    "Python, Docker, PostgreSQL, Redis, Terraform, Kubernetes, Linux"
)


class KeywordSuggestionTests(unittest.TestCase):
    def test_priorities_follow_missing_keyword_order(self):
        missing = [f"keyword{i}" for i in range(25)]
        suggestions = generate_suggestions(RESUME, missing, rng=random.Random(1))
        keyword_suggestions = [s for s in suggestions if s.type == "keyword"]

        self.assertEqual(len(keyword_suggestions), 20)
        high = [s for s in keyword_suggestions if s.priority == "high"]
        medium = [s for s in keyword_suggestions if s.priority == "medium"]
        self.assertEqual([s.keywords_to_add[0] for s in high], missing[:10])
        self.assertEqual([s.keywords_to_add[0] for s in medium], missing[10:20])

        for suggestion in high:
            self.assertIsNotNone(suggestion.example)
            self.assertIn(suggestion.keywords_to_add[0], suggestion.example)
        for suggestion in medium:
            self.assertIsNone(suggestion.example)

    def test_seeded_examples_are_reproducible(self):
        first = generate_suggestions(RESUME, ["graphql", "kafka"], rng=random.Random(7))
        second = generate_suggestions(RESUME, ["graphql", "kafka"], rng=random.Random(7))
        self.assertEqual([asdict(s) for s in first], [asdict(s) for s in second])

    def test_section_for_keyword(self):
        self.assertEqual(suggest_section_for_keyword("docker compose"), "Skills")
        self.assertEqual(suggest_section_for_keyword("agile delivery"), "Experience")
        self.assertEqual(suggest_section_for_keyword("stakeholder"), "Skills")


class StructureSuggestionTests(unittest.TestCase):
    def test_missing_skills_are_capped_at_five(self):
        skills = ["go", "rust", "scala", "elixir", "haskell", "ocaml", "zig"]
        suggestions = generate_suggestions(RESUME, [], skills)
        skill_suggestions = [s for s in suggestions if s.type == "skills"]
        self.assertEqual([s.keywords_to_add for s in skill_suggestions], [[s] for s in skills[:5]])
        self.assertTrue(all(s.priority == "high" for s in skill_suggestions))

    def test_weak_experience_section(self):
        suggestions = generate_suggestions(RESUME, [])
        kinds = {(s.type, s.section, s.priority) for s in suggestions}
        self.assertIn(("structure", "Experience", "high"), kinds)
        self.assertIn(("quantification", "Experience", "high"), kinds)

    def test_strong_experience_section(self):
        resume = RESUME.replace(
            "Worked on the billing system",
            "Led the billing rewrite.\nBuilt a ledger service.\nReduced costs by 30%.",
        )
        suggestions = generate_suggestions(resume, [])
        self.assertFalse([s for s in suggestions if s.section == "Experience"])

    def test_missing_summary_and_short_skills(self):
        suggestions = generate_suggestions("Experience\nLed a team", [])
        kinds = {(s.type, s.section, s.priority) for s in suggestions}
        self.assertIn(("structure", "Summary", "low"), kinds)
        self.assertIn(("formatting", "Skills", "medium"), kinds)

    def test_present_summary_and_full_skills(self):
        suggestions = generate_suggestions(RESUME, [])
        self.assertFalse([s for s in suggestions if s.section in ("Summary", "Skills")])

    def test_keyword_stuffing_warning(self):
        resume = RESUME + "\nProjects\npython python python java"
        suggestions = generate_suggestions(resume, [], keywords=["python"])
        stuffed = [s for s in suggestions if s.type == "formatting" and s.section == "projects"]
        self.assertEqual(len(stuffed), 1)
        self.assertEqual(stuffed[0].priority, "medium")


class ScoreImpactTests(unittest.TestCase):
    def test_impact_is_capped(self):
        suggestions = generate_suggestions(RESUME, [f"kw{i}" for i in range(12)])
        self.assertEqual(estimate_score_impact(suggestions), 30)

    def test_impact_counts_high_priority(self):
        suggestions = generate_suggestions(RESUME, ["graphql"])
        high = sum(1 for s in suggestions if s.priority == "high")
        self.assertEqual(estimate_score_impact(suggestions), 3 * high)


if __name__ == "__main__":
    unittest.main()
