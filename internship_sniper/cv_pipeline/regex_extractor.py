"""
Deterministic resume parsing with fixed patterns. Used as the pipeline's final tier:
pure, total, and always returns a complete ResumeRecord.
"""

import re
from typing import Dict, List

from internship_sniper.schemas.resume_record import ExperienceEntry, ResumeRecord
from internship_sniper.utils.helpers import count_visible_chars, first_email, first_phone, linkedin_url

NO_TEXT_MESSAGE = "Could not extract text. Please try a different file format."

HEADER_SECTION = "header"
MAX_HEADER_LENGTH = 40

# Checked in this order; the first match wins
SECTION_PATTERNS = {
    "experience": re.compile(r"experience|work history|employment", re.IGNORECASE),
    "education": re.compile(r"education|academic(?!\s+projects)|qualification", re.IGNORECASE),
    "skills": re.compile(r"skills|technical skills|competencies|technologies", re.IGNORECASE),
    "projects": re.compile(r"projects|academic projects", re.IGNORECASE),
    "summary": re.compile(r"summary|profile|about me|objective", re.IGNORECASE),
}

_BROKEN_EMAIL = re.compile(r"([a-z0-9._%+-])\s*@\s*([a-z0-9.-])", re.IGNORECASE)
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
_NAME_SEPARATOR = re.compile(r"[|,\t]|\s{3,}")
_NAME_PLACES = re.compile(r"\b(?:Hyderabad|Mumbai|Bangalore|Delhi|India|Pune|Chennai|UK|USA)\b", re.IGNORECASE)
_LOCATION = re.compile(r"(?:Hyderabad|New York|London|Bangalore|Pune|Delhi)[^|\n]*", re.IGNORECASE)
_DEGREE = re.compile(r"(?:B\.Tech|Bachelor|M\.Tech|Master|B\.S\.|M\.S\.)[ \t\w]*", re.IGNORECASE)
_YEAR = re.compile(r"\d{4}")
_CGPA = re.compile(r"\d\.\d")


def normalize_resume_text(text: str) -> str:
    """Rejoin emails split around "@", unify line endings, collapse 3+ newlines to one blank line."""
    normalized = _BROKEN_EMAIL.sub(r"\1@\2", text or "")
    normalized = normalized.replace("\r\n", "\n").replace("\r", "\n")
    return _EXTRA_BLANK_LINES.sub("\n\n", normalized)


def _section_for(line: str) -> str:
    if len(line) >= MAX_HEADER_LENGTH:
        return ""
    for key, pattern in SECTION_PATTERNS.items():
        if pattern.search(line):
            return key
    return ""


def split_sections(lines: List[str]) -> Dict[str, str]:
    """
    Bucket lines under the most recent section heading. Heading lines switch the
    bucket (restarting it if seen again) and contribute no text themselves.
    """
    sections: Dict[str, str] = {HEADER_SECTION: ""}
    current = HEADER_SECTION
    for line in lines:
        heading = _section_for(line)
        if heading:
            current = heading
            sections[current] = ""
            continue
        sections[current] = sections.get(current, "") + line + "\n"
    return sections


def _first_line(section: str) -> str:
    return section.split("\n", 1)[0].strip() if section else ""


def _parse_name(first_line: str) -> str:
    name = first_line
    if _NAME_SEPARATOR.search(name):
        name = _NAME_SEPARATOR.split(name, 1)[0]
    name = _NAME_PLACES.sub("", name)
    name = re.sub(r"\s{2,}", " ", name).strip()
    return name[:50]


def _search(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text or "")
    return match.group(0).strip() if match else ""


def extract_resume_fields(text: str) -> ResumeRecord:
    """
    Parse resume text into a ResumeRecord using section headings and fixed patterns.
    Text with fewer than 10 visible characters yields an empty record whose
    summary explains that no text could be extracted.
    """
    if count_visible_chars(text) < 10:
        return ResumeRecord.empty(NO_TEXT_MESSAGE)

    normalized = normalize_resume_text(text)
    lines = [line.strip() for line in normalized.split("\n") if line.strip()]
    sections = split_sections(lines)

    education = sections.get("education", "")
    experience_text = sections.get("experience", "")
    summary_lines = [line for line in sections.get("summary", "").split("\n") if line][:3]

    experience = [ExperienceEntry()]
    if experience_text:
        experience = [
            ExperienceEntry(
                company=_first_line(experience_text),
                description=experience_text[:1500].rstrip(),
            )
        ]

    return ResumeRecord(
        name=_parse_name(lines[0] if lines else ""),
        email=first_email(normalized),
        phone=first_phone(normalized),
        location=_search(_LOCATION, normalized),
        linkedin=linkedin_url(normalized),
        summary=" ".join(summary_lines)[:500].strip(),
        experience=experience,
        degree=_search(_DEGREE, education),
        institution=_first_line(education),
        grad_year=_search(_YEAR, education),
        cgpa=_search(_CGPA, education),
        skills=sections.get("skills", "").rstrip("\n").replace("\n", ", ")[:800],
        projects=sections.get("projects", "")[:2000].rstrip(),
    )
