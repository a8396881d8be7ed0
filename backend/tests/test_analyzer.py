"""
Tests for the end-to-end analysis pipeline.
"""

import random

import pytest

from services.analyzer import analyze, score_text
from services.ats_scorer import NO_JD_PLACEHOLDER, compute_baseline
from services.errors import ExtractionFailure, UnsupportedFormatError
from services.extractor import DOC_MIME, DOCX_MIME, PDF_MIME

REPORT_KEYS = {
    "score", "summary", "strengths", "weaknesses", "suggestions",
    "matched_keywords", "missing_keywords", "baseline_score", "improvements",
    "sections_found", "sections_missing", "source",
}


class TestScoreText:

    def test_ai_report_used_when_available(self, strong_resume, ai_reply, generator_factory):
        jd = "Python engineer, Kubernetes, Terraform"
        result = score_text(strong_resume, jd, generator=generator_factory(ai_reply))

        assert set(result) == REPORT_KEYS
        assert result["source"] == "ai"
        assert result["score"] == 77
        assert result["strengths"] == ["Clear impact", "Modern stack", "Leadership"]
        # keyword lists always come from the deterministic scorer
        assert result["matched_keywords"] == ["python", "engineer", "kubernetes", "terraform"]
        assert result["missing_keywords"] == []

    def test_failing_ai_falls_back(self, strong_resume, failing_generator):
        result = score_text(strong_resume, generator=failing_generator)
        baseline = compute_baseline(strong_resume)["score"]

        assert result["source"] == "heuristic"
        assert result["baseline_score"] == baseline
        # 10 action verbs and quantified, no missing sections
        assert result["score"] == min(baseline + 10, 100)

    def test_malformed_ai_reply_falls_back(self, strong_resume, generator_factory):
        result = score_text(strong_resume, generator=generator_factory("I cannot help with that."))
        assert result["source"] == "heuristic"

    def test_no_generator(self, strong_resume):
        assert score_text(strong_resume, generator=None)["source"] == "heuristic"

    def test_default_generator_disabled_without_api_key(self, strong_resume, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        assert score_text(strong_resume)["source"] == "heuristic"

    def test_empty_jd_is_ignored(self, strong_resume):
        result = score_text(strong_resume, "", generator=None)
        assert result["missing_keywords"] == [NO_JD_PLACEHOLDER]

    def test_whitespace_jd_scores_as_a_description(self, strong_resume):
        result = score_text(strong_resume, "   ", generator=None)
        assert result["missing_keywords"] == []
        assert result["matched_keywords"] == []

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400"])
    def test_non_finite_ai_score_falls_back(self, strong_resume, generator_factory, literal):
        reply = (
            f'Here: {{"aiScore": {literal}, "aiSummary": "x", "strengths": [],'
            ' "weaknesses": [], "suggestions": []}}'
        )
        result = score_text(strong_resume, generator=generator_factory(reply))
        assert result["source"] == "heuristic"
        assert 0 <= result["score"] <= 100

    def test_deterministic(self, strong_resume):
        jd = "Senior Python developer with Docker"
        first = score_text(strong_resume, jd, generator=None)
        second = score_text(strong_resume, jd, generator=None)
        assert first == second


WORDS = [
    "summary", "experience", "education", "skills", "projects", "developed", "led",
    "increased", "40%", "2019", "jane@example.com", "python", "docker", ",", "\n",
]


@pytest.mark.parametrize("seed", range(30))
def test_report_score_always_in_range(seed):
    rng = random.Random(seed)
    text = " ".join(rng.choice(WORDS) for _ in range(rng.randint(1, 2000)))
    jd = "python docker kubernetes" if seed % 3 == 0 else None
    score = score_text(text, jd, generator=None)["score"]
    assert isinstance(score, int)
    assert 0 <= score <= 100


class TestAnalyze:

    def test_docx_upload(self, make_docx, strong_resume):
        data = make_docx(strong_resume.splitlines())
        result = analyze(data, DOCX_MIME, generator=None)
        assert result["sections_missing"] == []
        assert result["source"] == "heuristic"

    def test_pdf_upload(self, make_pdf):
        result = analyze(make_pdf("Experience\nSkills: Python, Docker\njane@example.com"), PDF_MIME, generator=None)
        assert result["sections_found"] == ["experience", "skills"]

    def test_legacy_doc(self):
        with pytest.raises(UnsupportedFormatError):
            analyze(b"\xd0\xcf\x11\xe0", DOC_MIME, generator=None)

    def test_corrupt_pdf(self):
        with pytest.raises(ExtractionFailure):
            analyze(b"%PDF-garbage", PDF_MIME, generator=None)
