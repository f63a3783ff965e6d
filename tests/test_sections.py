import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.services.sections import (  # noqa: E402
    analyze_section,
    analyze_sections,
    detect_sections,
    match_section_header,
    reconstruct,
    segment_sections,
)

RESUME = (
    "Jane Doe\n"
    "jane@example.com\n"
    "\n"
    "Summary\n"
    "Backend engineer.\n"
    "Work Experience:\n"
    "Built APIs.\n"
    "Education\n"
    "BS CS\n"
    "Technical Skills\n"
    "Python, SQL"
)


class SectionSegmentationTests(unittest.TestCase):
    def test_detect_sections(self):
        self.assertEqual(
            detect_sections(RESUME),
            {
                "header": "Jane Doe\njane@example.com",
                "summary": "Backend engineer.",
                "experience": "Built APIs.",
                "education": "BS CS",
                "skills": "Python, SQL",
            },
        )

    def test_header_lines_are_consumed(self):
        spans = segment_sections(RESUME)
        self.assertEqual([s.name for s in spans], ["header", "summary", "experience", "education", "skills"])
        self.assertEqual(spans[2].header, "Work Experience:")
        self.assertNotIn("Work Experience:", spans[2].content)

    def test_round_trip_reconstructs_normalized_text(self):
        text = RESUME.replace("\n", "\r\n") + "\r\n"
        self.assertEqual(reconstruct(segment_sections(text)), RESUME + "\n")

    def test_body_lines_are_not_headers(self):
        self.assertIsNone(match_section_header("Experience with distributed systems"))
        self.assertIsNone(match_section_header("Built the projects dashboard"))
        self.assertEqual(match_section_header("  PROJECTS  "), "projects")
        self.assertEqual(match_section_header("Certifications:"), "certifications")
        self.assertEqual(match_section_header("Career Objective"), "summary")

    def test_text_without_headers_goes_to_header_bucket(self):
        self.assertEqual(detect_sections("Just some text\nmore text"), {"header": "Just some text\nmore text"})

    def test_repeated_sections_are_joined(self):
        text = "Experience\nAcme Corp\nSkills\nPython\nExperience\nGlobex"
        self.assertEqual(detect_sections(text)["experience"], "Acme Corp\nGlobex")

    def test_empty_sections_are_omitted(self):
        self.assertEqual(detect_sections("Summary\nEducation\nBS CS"), {"education": "BS CS"})


class SectionAnalysisTests(unittest.TestCase):
    KEYWORDS = ["python", "docker", "sql", "aws", "redis", "kafka"]

    def test_good_quality_section(self):
        text = "Python Docker SQL AWS Redis " + "filler " * 20
        analysis = analyze_section(text, self.KEYWORDS)
        self.assertEqual(analysis.word_count, 25)
        self.assertEqual(analysis.keyword_count, 5)
        self.assertEqual(analysis.quality, "good")
        self.assertEqual(analysis.suggested_keywords, ["kafka"])
        self.assertAlmostEqual(analysis.keyword_density, 5 / 25)

    def test_short_section_quality_is_unknown(self):
        self.assertEqual(analyze_section("Python and Docker", self.KEYWORDS).quality, "unknown")

    def test_poor_and_medium_quality(self):
        filler = "filler " * 25
        self.assertEqual(analyze_section("Python " + filler, self.KEYWORDS).quality, "poor")
        self.assertEqual(analyze_section("Python SQL " + filler, self.KEYWORDS).quality, "medium")

    def test_content_flags(self):
        analysis = analyze_section("Reduced latency by 40%. Built dashboards.", self.KEYWORDS)
        self.assertTrue(analysis.has_action_verbs)
        self.assertTrue(analysis.has_quantification)

    def test_analyze_sections_covers_every_detected_section(self):
        result = analyze_sections(RESUME, ["python", "apis"])
        self.assertEqual(set(result), {"header", "summary", "experience", "education", "skills"})
        self.assertEqual(result["skills"].found_keywords, ["python"])
        self.assertEqual(result["experience"].found_keywords, ["apis"])


if __name__ == "__main__":
    unittest.main()
