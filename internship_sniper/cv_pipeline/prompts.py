"""Extraction instructions sent to the AI tiers."""

import json
from typing import Dict, List

from internship_sniper.schemas.resume_record import ResumeRecord

# {"name":"",...,"experience":[{"company":"",...}],...,"projects":""}
RESUME_JSON_SHAPE = json.dumps(ResumeRecord().to_payload(), separators=(",", ":"))

VISION_EXTRACTION_PROMPT = f"""You are a resume parser. Extract ALL information from these resume page image(s) into JSON. There may be multiple pages - combine all data into one JSON object.

Respond with ONLY valid JSON. No markdown, no code blocks.

{RESUME_JSON_SHAPE}

Fill every field you can see across all pages. Use "" for missing fields."""

TEXT_PARSER_SYSTEM_PROMPT = "You are a resume parser. Respond with ONLY valid JSON."


def build_parser_messages(resume_text: str) -> List[Dict[str, str]]:
    """System + user message pair for chat models that honour a system role."""
    return [
        {"role": "system", "content": TEXT_PARSER_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Parse this resume into JSON:\n\n{resume_text}\n\nFormat:\n{RESUME_JSON_SHAPE}",
        },
    ]


def build_single_turn_messages(resume_text: str) -> List[Dict[str, str]]:
    """Everything in one user message, for models that ignore system prompts."""
    return [
        {
            "role": "user",
            "content": (
                "You are a resume parser. Extract data from this resume text into JSON.\n\n"
                f"Text:\n{resume_text}\n\n"
                f"Output strictly this JSON structure:\n{RESUME_JSON_SHAPE}"
            ),
        }
    ]
