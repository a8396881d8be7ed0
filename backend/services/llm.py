"""
Groq LLM Integration (llama-3.3-70b-versatile)
- Generates a qualitative ATS report for a resume against a job description

The model is called once per analysis (no retries). Anything that goes wrong,
from transport errors to a malformed reply, raises AIUnavailable so the caller
can switch to the heuristic report.
"""

import json
import logging
import math
import os
import re
from typing import Optional

from groq import Groq

from services.errors import AIUnavailable

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_JD = "General job market standard"
RESUME_CHAR_LIMIT = 3000

REPORT_SYSTEM_PROMPT = """You are an ATS (Applicant Tracking System) expert evaluator.
Analyze a resume against a job description and report on it.
Return ONLY valid JSON, no explanation or markdown."""

REPORT_USER_PROMPT = """
Analyze this resume text against the job description below.

--- RESUME TEXT ---
{resume}

--- JOB DESCRIPTION ---
{jd}

Return ONLY a JSON object with exactly these keys:
{{
  "aiScore": <integer 0-100>,
  "aiSummary": "<2 sentence summary>",
  "strengths": ["point 1", "point 2", "point 3"],
  "weaknesses": ["point 1", "point 2", "point 3"],
  "suggestions": ["action 1", "action 2", "action 3", "action 4", "action 5"]
}}
"""

_client: Optional[Groq] = None


def get_client() -> Groq:
    global _client
    if _client is None:
        api_key = os.getenv("GROQ_API_KEY")
        if not api_key:
            raise ValueError("GROQ_API_KEY not set in environment / .env file")
        _client = Groq(
            api_key=api_key,
            timeout=float(os.getenv("GROQ_TIMEOUT", "30")),
            max_retries=0,
        )
    return _client


def ai_enabled() -> bool:
    return bool(os.getenv("GROQ_API_KEY"))


class GroqReportGenerator:
    """Asks Groq for the report and returns the raw reply text."""

    def __init__(self, client: Optional[Groq] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or os.getenv("GROQ_MODEL", DEFAULT_MODEL)

    def generate_report(self, resume_text: str, jd_text: str) -> str:
        client = self._client or get_client()
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": REPORT_SYSTEM_PROMPT},
                {"role": "user", "content": REPORT_USER_PROMPT.format(resume=resume_text, jd=jd_text)},
            ],
            temperature=0.2,
            max_tokens=1024,
        )
        return response.choices[0].message.content or ""


def default_generator() -> Optional[GroqReportGenerator]:
    """The configured generator, or None when no API key is set."""
    return GroqReportGenerator() if ai_enabled() else None


def first_json_object(raw: str) -> Optional[str]:
    """
    Returns the first balanced {...} span in raw, or None.
    Braces inside JSON string literals are not counted.
    """
    start = raw.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(raw)):
        ch = raw[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return raw[start:i + 1]
    return None


def _string_list(value, limit: int) -> list[str]:
    if not isinstance(value, list):
        raise AIUnavailable("Report list field is not an array")
    return [str(item) for item in value][:limit]


def parse_ai_report(raw: str) -> dict:
    """
    Parses the model reply into the report shape.

    Returns:
        {
            "score": int (0-100),
            "summary": str,
            "strengths": [str] (<= 3),
            "weaknesses": [str] (<= 3),
            "suggestions": [str] (<= 5)
        }

    Raises:
        AIUnavailable: no JSON object, invalid JSON, or missing/mistyped keys
    """
    # Strip markdown fences if present
    raw = re.sub(r"^```(?:json)?\s*", "", raw.strip())
    raw = re.sub(r"\s*```$", "", raw)

    span = first_json_object(raw)
    if span is None:
        raise AIUnavailable("No JSON object in model response")

    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        raise AIUnavailable(f"Malformed JSON in model response: {e}") from e

    if not isinstance(data, dict):
        raise AIUnavailable("Model response is not a JSON object")

    ai_score = data.get("aiScore")
    if isinstance(ai_score, bool) or not isinstance(ai_score, (int, float)):
        raise AIUnavailable("aiScore missing or not a number")
    if isinstance(ai_score, float) and not math.isfinite(ai_score):
        raise AIUnavailable("aiScore is not a finite number")
    summary = data.get("aiSummary")
    if not isinstance(summary, str):
        raise AIUnavailable("aiSummary missing or not a string")

    return {
        "score": max(0, min(100, int(round(ai_score)))),
        "summary": summary,
        "strengths": _string_list(data.get("strengths"), 3),
        "weaknesses": _string_list(data.get("weaknesses"), 3),
        "suggestions": _string_list(data.get("suggestions"), 5),
    }


def generate_ai_report(generator, resume_text: str, jd_text: Optional[str]) -> dict:
    """
    Fire-once call to the report generator.

    Raises:
        AIUnavailable: generator missing, call failed, or reply unusable
    """
    if generator is None:
        raise AIUnavailable("No AI report generator configured")

    try:
        raw = generator.generate_report(resume_text[:RESUME_CHAR_LIMIT], jd_text or DEFAULT_JD)
    except AIUnavailable:
        raise
    except Exception as e:
        raise AIUnavailable(f"AI report request failed: {e}") from e

    return parse_ai_report(raw)
