"""Coerce any tier's payload into the fixed ResumeRecord schema."""

from typing import Any, Dict, List

from pydantic import BaseModel

from internship_sniper.schemas.resume_record import ExperienceEntry, ResumeRecord

_STRING_FIELDS = (
    "name",
    "email",
    "phone",
    "title",
    "location",
    "linkedin",
    "summary",
    "degree",
    "institution",
    "gradYear",
    "cgpa",
    "skills",
    "projects",
)

# Keys providers sometimes emit instead of the requested ones
_FIELD_ALIASES = {
    "name": ("full_name", "fullName"),
    "linkedin": ("linkedin_url", "linkedinUrl"),
    "gradYear": ("grad_year", "graduation_year", "graduationYear"),
    "cgpa": ("gpa",),
    "summary": ("profile", "objective"),
}

_EXPERIENCE_ALIASES = {
    "company": ("company", "organization", "employer"),
    "title": ("title", "role", "position"),
    "duration": ("duration", "dates", "period"),
    "description": ("description", "details", "responsibilities"),
}

# Separator when a provider returns a list instead of a string
_LIST_SEPARATORS = {"skills": ", ", "projects": "\n"}


def _to_text(value: Any, separator: str = ", ") -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        parts = [_to_text(v, ", ") for v in value.values()]
        return " - ".join(p for p in parts if p)
    if isinstance(value, (list, tuple)):
        parts = [_to_text(v, ", ") for v in value]
        return separator.join(p for p in parts if p)
    return str(value).strip()


def _lookup(data: Dict[str, Any], key: str, aliases: tuple = ()) -> Any:
    for candidate in (key,) + tuple(aliases):
        value = data.get(candidate)
        if value not in (None, "", [], {}):
            return value
    return None


def _experience_entry(item: Any) -> ExperienceEntry:
    if isinstance(item, dict):
        return ExperienceEntry(
            **{
                field: _to_text(_lookup(item, keys[0], keys[1:]), "; ")
                for field, keys in _EXPERIENCE_ALIASES.items()
            }
        )
    return ExperienceEntry(description=_to_text(item, "\n"))


def _normalize_experience(value: Any) -> List[ExperienceEntry]:
    if isinstance(value, (list, tuple)):
        entries = [_experience_entry(item) for item in value if item not in (None, "", {})]
    elif value in (None, "", {}):
        entries = []
    else:
        entries = [_experience_entry(value)]
    return entries or [ExperienceEntry()]


def normalize_resume_record(raw: Any) -> ResumeRecord:
    """
    Fill every missing field with "" and guarantee at least one experience entry.
    Structured values (numbers, lists, nested objects) are flattened to strings.
    Pure and total: non-dict input yields an empty record.
    """
    if isinstance(raw, ResumeRecord):
        return raw if raw.experience else raw.model_copy(update={"experience": [ExperienceEntry()]})
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    if not isinstance(raw, dict):
        return ResumeRecord()

    fields = {
        key: _to_text(_lookup(raw, key, _FIELD_ALIASES.get(key, ())), _LIST_SEPARATORS.get(key, ", "))
        for key in _STRING_FIELDS
    }
    experience = _normalize_experience(_lookup(raw, "experience", ("work_experience", "workExperience")))
    return ResumeRecord(experience=experience, **fields)
