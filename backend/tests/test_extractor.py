"""
Tests for PDF/DOCX text extraction and upload format handling.
"""

import pytest

from services.errors import EmptyDocumentError, ExtractionFailure, UnsupportedFormatError
from services.extractor import DOC_MIME, DOCX_MIME, PDF_MIME, extract_text, resolve_mime_type


class TestResolveMimeType:

    def test_declared_type_wins(self):
        assert resolve_mime_type("cv.bin", "application/pdf") == PDF_MIME

    def test_parameters_stripped(self):
        assert resolve_mime_type("cv.pdf", "Application/PDF; charset=binary") == PDF_MIME

    @pytest.mark.parametrize("filename,expected", [
        ("cv.pdf", PDF_MIME),
        ("CV.DOCX", DOCX_MIME),
        ("old.doc", DOC_MIME),
    ])
    def test_generic_type_falls_back_to_extension(self, filename, expected):
        assert resolve_mime_type(filename, "application/octet-stream") == expected
        assert resolve_mime_type(filename, None) == expected

    def test_unknown_extension(self):
        assert resolve_mime_type("notes.txt", None) == "application/octet-stream"


class TestExtractText:

    def test_docx_paragraphs_and_tables(self, make_docx):
        data = make_docx(
            ["Jane Doe", "", "Experience", "Built   APIs"],
            table_rows=[("Skills", "Python, Docker")],
        )
        text = extract_text(data, DOCX_MIME)
        assert text == "Jane Doe\nExperience\nBuilt APIs\nSkills | Python, Docker"

    def test_pdf(self, make_pdf):
        text = extract_text(make_pdf("Jane Doe jane@example.com"), PDF_MIME)
        assert "Jane Doe" in text
        assert "jane@example.com" in text

    def test_legacy_doc_rejected(self):
        with pytest.raises(UnsupportedFormatError, match=r"\.doc"):
            extract_text(b"\xd0\xcf\x11\xe0", DOC_MIME)

    def test_other_formats_rejected(self):
        with pytest.raises(UnsupportedFormatError):
            extract_text(b"plain text", "text/plain")

    @pytest.mark.parametrize("mime", [PDF_MIME, DOCX_MIME])
    def test_corrupt_file(self, mime):
        with pytest.raises(ExtractionFailure):
            extract_text(b"definitely not a document", mime)

    def test_empty_upload(self):
        with pytest.raises(EmptyDocumentError):
            extract_text(b"", PDF_MIME)

    def test_pdf_without_text(self, make_pdf):
        with pytest.raises(EmptyDocumentError):
            extract_text(make_pdf(), PDF_MIME)

    def test_user_input_errors_are_analysis_errors(self):
        from services.errors import AnalysisError, UserInputError
        assert issubclass(UnsupportedFormatError, UserInputError)
        assert issubclass(EmptyDocumentError, UserInputError)
        assert issubclass(ExtractionFailure, AnalysisError)
