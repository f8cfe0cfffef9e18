"""Canonical structured resume record returned by the extraction pipeline."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_EMPTY_SUMMARY = "Please fill in your details manually."


class ExperienceEntry(BaseModel):
    """One position held; every field defaults to empty string."""

    company: str = Field(default="", description="Employer or organization")
    title: str = Field(default="", description="Role or job title")
    duration: str = Field(default="", description="Date range as written on the resume")
    description: str = Field(default="", description="Responsibilities and achievements")


class ResumeRecord(BaseModel):
    """
    Fixed-schema resume data. Every field is always present (possibly empty) and
    `experience` always holds at least one entry, so consumers never probe for keys.
    Serialized with the camelCase wire names (gradYear) via to_payload().
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", description="Candidate full name")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone number")
    title: str = Field(default="", description="Current or target professional title")
    location: str = Field(default="", description="City / region")
    linkedin: str = Field(default="", description="LinkedIn profile URL")
    summary: str = Field(default="", description="Profile summary or explanatory message")
    experience: List[ExperienceEntry] = Field(
        default_factory=lambda: [ExperienceEntry()],
        description="Work history, most relevant first",
    )
    degree: str = Field(default="", description="Highest or most recent degree")
    institution: str = Field(default="", description="School or university")
    grad_year: str = Field(default="", alias="gradYear", description="Graduation year")
    cgpa: str = Field(default="", description="Grade point average as written")
    skills: str = Field(default="", description="Comma-separated skills")
    projects: str = Field(default="", description="Projects section text")

    @classmethod
    def empty(cls, message: str = DEFAULT_EMPTY_SUMMARY) -> "ResumeRecord":
        """Structurally complete record with only an explanatory summary."""
        return cls(summary=message or DEFAULT_EMPTY_SUMMARY)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
