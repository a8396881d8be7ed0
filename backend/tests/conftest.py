"""
Pytest configuration and shared fixtures.
"""

import io
import json

import fitz
import pytest
from docx import Document

from services.models import Candidate, Job
from services.store import InMemoryStore

STRONG_RESUME = """Jane Doe
jane.doe@example.com | 555-0100
Summary
Backend engineer with 8 years of experience building data platforms.
Experience
Senior Engineer, Acme Corp (2018 - 2024)
- Developed a streaming pipeline in Python processing 2 million events per day.
- Led a team of 5 engineers and managed a 300k budget.
- Designed and implemented an API gateway that increased throughput by 40%.
- Launched a self-service analytics portal and achieved 99.9% uptime.
- Coordinated migration to Kubernetes, created runbooks.
Education
B.Sc. Computer Science, State University, 2016
Skills
Python, Kubernetes, PostgreSQL, Docker, Terraform
Projects
Open-source contributor to FastAPI tooling.
"""


class FakeNotifier:
    """Records every message; optionally raises for some recipients."""

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send(self, to_email, subject, body_html):
        if to_email in self.fail_for:
            raise RuntimeError(f"SMTP down for {to_email}")
        self.sent.append((to_email, subject, body_html))
        return True


class FakeGenerator:
    """Report generator that returns a canned reply and remembers its inputs."""

    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def generate_report(self, resume_text, jd_text):
        self.calls.append((resume_text, jd_text))
        return self.reply


class FailingGenerator:
    def generate_report(self, resume_text, jd_text):
        raise ConnectionError("quota exceeded")


@pytest.fixture
def strong_resume() -> str:
    return STRONG_RESUME


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def notifier_factory():
    return FakeNotifier


@pytest.fixture
def failing_generator() -> FailingGenerator:
    return FailingGenerator()


@pytest.fixture
def generator_factory():
    return FakeGenerator


@pytest.fixture
def ai_reply() -> str:
    payload = {
        "aiScore": 77,
        "aiSummary": "Solid backend profile. Could target the JD more closely.",
        "strengths": ["Clear impact", "Modern stack", "Leadership", "Extra point"],
        "weaknesses": ["No certifications", "Few keywords", "Long bullets"],
        "suggestions": ["a", "b", "c", "d", "e", "f"],
    }
    return f"Sure! Here is the analysis you asked for:\n{json.dumps(payload)}\nHope this helps {{:)}}"


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_job():
    def _make(**overrides) -> Job:
        data = {
            "title": "Backend Engineer",
            "company_name": "Acme",
            "company_email": "hr@acme.test",
            "description": "Build APIs",
            "skills": ["Python"],
            "experience_required": 3,
            "location": "Remote",
        }
        data.update(overrides)
        return Job(**data)
    return _make


@pytest.fixture
def make_candidate():
    def _make(**overrides) -> Candidate:
        data = {
            "full_name": "Jane Doe",
            "email": "jane@example.test",
            "skills": ["python"],
            "experience_years": 5,
            "open_to_work": True,
        }
        data.update(overrides)
        return Candidate(**data)
    return _make


@pytest.fixture
def make_docx():
    def _make(paragraphs, table_rows=()) -> bytes:
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        if table_rows:
            table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for r, row in enumerate(table_rows):
                for c, value in enumerate(row):
                    table.cell(r, c).text = value
        buf = io.BytesIO()
        doc.save(buf)
        return buf.getvalue()
    return _make


@pytest.fixture
def make_pdf():
    def _make(text: str = "") -> bytes:
        doc = fitz.open()
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=10)
        data = doc.tobytes()
        doc.close()
        return data
    return _make
