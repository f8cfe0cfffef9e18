import unittest

from internship_sniper.cv_pipeline.field_normalizer import normalize_resume_record
from internship_sniper.schemas.resume_record import ExperienceEntry, ResumeRecord

EXPECTED_KEYS = {
    "name",
    "email",
    "phone",
    "title",
    "location",
    "linkedin",
    "summary",
    "experience",
    "degree",
    "institution",
    "gradYear",
    "cgpa",
    "skills",
    "projects",
}


class FieldNormalizerTests(unittest.TestCase):
    def test_missing_fields_get_defaults(self):
        payload = normalize_resume_record({"name": "Jane Doe"}).to_payload()
        self.assertEqual(set(payload), EXPECTED_KEYS)
        self.assertEqual(payload["name"], "Jane Doe")
        self.assertEqual(payload["gradYear"], "")
        self.assertEqual(payload["experience"], [{"company": "", "title": "", "duration": "", "description": ""}])

    def test_non_dict_input_yields_empty_record(self):
        for raw in (None, "text", 12, ["a"]):
            record = normalize_resume_record(raw)
            self.assertEqual(set(record.to_payload()), EXPECTED_KEYS)
            self.assertEqual(len(record.experience), 1)

    def test_numbers_become_strings(self):
        record = normalize_resume_record({"name": "A", "gradYear": 2023, "cgpa": 8.75})
        self.assertEqual(record.grad_year, "2023")
        self.assertEqual(record.cgpa, "8.75")

    def test_structured_skills_and_projects_are_flattened(self):
        record = normalize_resume_record(
            {
                "name": "A",
                "skills": ["Python", "SQL", ""],
                "projects": [
                    {"name": "Tracker", "description": "Budget app"},
                    "Chess engine",
                ],
            }
        )
        self.assertEqual(record.skills, "Python, SQL")
        self.assertEqual(record.projects, "Tracker - Budget app\nChess engine")

    def test_skill_groups_are_flattened(self):
        record = normalize_resume_record({"skills": {"languages": ["Go", "Rust"], "tools": "Docker"}})
        self.assertEqual(record.skills, "Go, Rust - Docker")

    def test_experience_aliases_and_nulls(self):
        record = normalize_resume_record(
            {
                "experience": [
                    {"organization": "Acme", "role": "Intern", "dates": "2023", "description": None},
                    None,
                ]
            }
        )
        self.assertEqual(
            record.experience,
            [ExperienceEntry(company="Acme", title="Intern", duration="2023", description="")],
        )

    def test_empty_experience_list_gets_placeholder(self):
        record = normalize_resume_record({"name": "A", "experience": []})
        self.assertEqual(record.experience, [ExperienceEntry()])

    def test_experience_as_text(self):
        record = normalize_resume_record({"experience": "Worked at Acme"})
        self.assertEqual(record.experience[0].description, "Worked at Acme")

    def test_field_aliases(self):
        record = normalize_resume_record({"full_name": "B", "linkedin_url": "https://linkedin.com/in/b", "gpa": "3.9"})
        self.assertEqual(record.name, "B")
        self.assertEqual(record.linkedin, "https://linkedin.com/in/b")
        self.assertEqual(record.cgpa, "3.9")

    def test_record_passthrough(self):
        record = ResumeRecord(name="C", grad_year="2020")
        self.assertEqual(normalize_resume_record(record), record)
        self.assertEqual(normalize_resume_record(record.model_copy(update={"experience": []})).experience, [ExperienceEntry()])


if __name__ == "__main__":
    unittest.main()
