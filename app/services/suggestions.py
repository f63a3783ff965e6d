"""
Rule-based improvement suggestions.

Suggestions are deterministic apart from the example sentence attached to
high priority keyword suggestions, which is drawn from a small template set.
Pass a seeded ``random.Random`` to make that choice reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence

from app.services.keywords import calculate_keyword_density
from app.services.nlp_utils import extract_action_verbs, has_quantification
from app.services.sections import detect_sections

SuggestionType = Literal["keyword", "structure", "quantification", "formatting", "skills"]
Priority = Literal["high", "medium", "low"]

HIGH_PRIORITY_KEYWORDS = 10
MEDIUM_PRIORITY_KEYWORDS = 10
MISSING_SKILLS_REPORTED = 5
MIN_ACTION_VERBS = 3
STUFFING_WARNING_DENSITY = 0.15
MIN_SKILLS_SECTION_LENGTH = 50

MAX_SCORE_IMPACT = 30
SCORE_IMPACT_PER_HIGH_PRIORITY = 3

TECHNICAL_INDICATORS = (
    "python", "java", "javascript", "react", "node", "sql", "aws", "docker",
    "kubernetes", "git", "api", "framework", "library",
)
METHODOLOGY_INDICATORS = ("agile", "scrum", "ci/cd", "devops", "testing", "deployment")

KEYWORD_EXAMPLE_TEMPLATES = (
    '"Utilized {keyword} to enhance system performance and reliability"',
    '"Implemented solutions using {keyword}, resulting in improved efficiency"',
    '"Proficient in {keyword} with hands-on experience in production environments"',
    '"Leveraged {keyword} to deliver scalable and maintainable code"',
)


@dataclass
class Suggestion:
    type: SuggestionType
    section: str
    priority: Priority
    recommendation: str
    example: Optional[str] = None
    keywords_to_add: list[str] = field(default_factory=list)


def suggest_section_for_keyword(keyword: str) -> str:
    lower_keyword = keyword.lower()
    if any(tech in lower_keyword for tech in TECHNICAL_INDICATORS):
        return "Skills"
    if any(method in lower_keyword for method in METHODOLOGY_INDICATORS):
        return "Experience"
    return "Skills"


def generate_keyword_example(keyword: str, rng: random.Random) -> str:
    return rng.choice(KEYWORD_EXAMPLE_TEMPLATES).format(keyword=keyword)


def _keyword_suggestions(missing_keywords: Sequence[str], rng: random.Random) -> list[Suggestion]:
    suggestions = []
    high = missing_keywords[:HIGH_PRIORITY_KEYWORDS]
    medium = missing_keywords[HIGH_PRIORITY_KEYWORDS:HIGH_PRIORITY_KEYWORDS + MEDIUM_PRIORITY_KEYWORDS]

    for keyword in high:
        suggestions.append(Suggestion(
            type="keyword",
            section=suggest_section_for_keyword(keyword),
            priority="high",
            recommendation=f'Add "{keyword}" to your resume if you have experience with it',
            example=generate_keyword_example(keyword, rng),
            keywords_to_add=[keyword],
        ))

    for keyword in medium:
        suggestions.append(Suggestion(
            type="keyword",
            section=suggest_section_for_keyword(keyword),
            priority="medium",
            recommendation=f'Consider including "{keyword}" if relevant to your experience',
            keywords_to_add=[keyword],
        ))

    return suggestions


def _experience_suggestions(experience: str) -> list[Suggestion]:
    suggestions = []
    if len(extract_action_verbs(experience)) < MIN_ACTION_VERBS:
        suggestions.append(Suggestion(
            type="structure",
            section="Experience",
            priority="high",
            recommendation=(
                'Start bullets with strong action verbs like "Architected", '
                '"Implemented", "Optimized", "Led", or "Delivered"'
            ),
            example=(
                'Instead of: "Was responsible for building features"\n'
                'Try: "Architected and delivered 5 new features, improving user engagement by 25%"'
            ),
        ))

    if not has_quantification(experience):
        suggestions.append(Suggestion(
            type="quantification",
            section="Experience",
            priority="high",
            recommendation="Add specific metrics and numbers to demonstrate impact",
            example=(
                'Instead of: "Improved system performance"\n'
                'Try: "Optimized database queries, reducing average response time by 40% '
                'and saving $50K annually"'
            ),
        ))
    return suggestions


def generate_suggestions(
    resume_text: str,
    missing_keywords: Sequence[str],
    missing_skills: Sequence[str] = (),
    keywords: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> list[Suggestion]:
    """
    Build the suggestion list for a resume.

    Args:
        resume_text: Raw resume text
        missing_keywords: Job keywords not found in the resume, most important first
        missing_skills: Required skills not covered by the resume
        keywords: Full job keyword set used for the stuffing check
            (defaults to ``missing_keywords``)
        rng: Source for example selection; a fresh unseeded one when omitted

    Returns:
        Suggestions ordered keyword, skills, experience, formatting, summary
    """
    rng = rng or random.Random()
    sections = detect_sections(resume_text)
    density_keywords = list(keywords) if keywords is not None else list(missing_keywords)

    suggestions = _keyword_suggestions(missing_keywords, rng)

    for skill in missing_skills[:MISSING_SKILLS_REPORTED]:
        suggestions.append(Suggestion(
            type="skills",
            section="Skills",
            priority="high",
            recommendation=f'Add "{skill}" to your Skills section if you possess this skill',
            keywords_to_add=[skill],
        ))

    experience = sections.get("experience", "")
    if experience:
        suggestions.extend(_experience_suggestions(experience))

    for name, text in sections.items():
        if calculate_keyword_density(text, density_keywords) > STUFFING_WARNING_DENSITY:
            suggestions.append(Suggestion(
                type="formatting",
                section=name,
                priority="medium",
                recommendation=(
                    f"Keyword density seems high in {name} section. Ensure keywords flow "
                    'naturally to avoid appearing as "keyword stuffing"'
                ),
            ))

    if len(sections.get("skills", "")) < MIN_SKILLS_SECTION_LENGTH:
        suggestions.append(Suggestion(
            type="formatting",
            section="Skills",
            priority="medium",
            recommendation="Add or expand your Skills section with relevant technical skills from the job description",
        ))

    if "summary" not in sections:
        suggestions.append(Suggestion(
            type="structure",
            section="Summary",
            priority="low",
            recommendation="Consider adding a Professional Summary section highlighting your key qualifications",
            example=(
                'Example: "Senior Software Engineer with 5+ years of experience in full-stack '
                "development, specializing in React, Node.js, and cloud infrastructure. Proven "
                'track record of delivering scalable solutions that increase efficiency by 30%+"'
            ),
        ))

    return suggestions


def estimate_score_impact(suggestions: Sequence[Suggestion]) -> int:
    high = sum(1 for s in suggestions if s.priority == "high")
    return min(MAX_SCORE_IMPACT, high * SCORE_IMPACT_PER_HIGH_PRIORITY)
