import json

import fitz  # PyMuPDF
import pytest

from conftest import make_pdf
from toc_maker import add_toc_to_pdf
from toc_maker.models import TocConfig

OUTLINE = [
    {"title": "Intro", "level": 1, "page": 1},
    {"title": "Body", "level": 1, "page": 3},
    {"title": "Detail", "level": 2, "page": 4},
]


def test_add_toc_from_outline_file(source_pdf, tmp_path) -> None:
    outline_path = tmp_path / "outline.json"
    outline_path.write_text(json.dumps(OUTLINE), encoding="utf-8")
    out = tmp_path / "out" / "with_toc.pdf"

    result = add_toc_to_pdf(source_pdf, outline_path, out)

    assert result.success, result.message
    assert result.output_path == out
    assert result.source_page_count == 5
    assert result.toc_page_count == 1
    assert result.page_count == 6
    assert result.link_count == 3
    with fitz.open(out) as doc:
        assert doc.page_count == 6
        assert "2.1 Detail" in doc[1].get_text()


def test_keyword_overrides_win_over_config(source_pdf, tmp_path) -> None:
    out = tmp_path / "with_toc.pdf"
    result = add_toc_to_pdf(
        source_pdf,
        OUTLINE,
        out,
        insert_at=1,
        title="Contents",
        config=TocConfig(insert_at=4, title="Ignored"),
    )
    assert result.success
    with fitz.open(out) as doc:
        assert "Contents" in doc[0].get_text()
        assert "Ignored" not in doc[0].get_text()


def test_uses_pdf_bookmarks_when_outline_is_none(tmp_path) -> None:
    doc = make_pdf(4)
    doc.set_toc([[1, "Start", 1], [1, "End", 4]])
    src = tmp_path / "bookmarked.pdf"
    doc.save(src)
    doc.close()

    result = add_toc_to_pdf(src, None, tmp_path / "out.pdf")
    assert result.success
    assert result.link_count == 2


def test_missing_pdf_reports_failure(tmp_path) -> None:
    out = tmp_path / "out.pdf"
    result = add_toc_to_pdf(tmp_path / "absent.pdf", OUTLINE, out)
    assert not result.success
    assert "not found" in result.message
    assert not out.exists()


def test_bad_outline_writes_nothing(source_pdf, tmp_path) -> None:
    bad = tmp_path / "outline.json"
    bad.write_text("not json", encoding="utf-8")
    out = tmp_path / "out.pdf"
    result = add_toc_to_pdf(source_pdf, bad, out)
    assert not result.success
    assert result.errors
    assert not out.exists()


def test_failed_save_closes_documents(source_pdf, tmp_path, monkeypatch) -> None:
    import toc_maker.api as api

    opened: list[fitz.Document] = []
    real_open = api.open_document
    real_synthesize = api.synthesize

    def recording_open(path):
        doc = real_open(path)
        opened.append(doc)
        return doc

    def recording_synthesize(source, outline, config):
        synthesis = real_synthesize(source, outline, config)
        opened.append(synthesis.document)
        return synthesis

    monkeypatch.setattr(api, "open_document", recording_open)
    monkeypatch.setattr(api, "synthesize", recording_synthesize)
    out = tmp_path / "taken"
    out.mkdir()

    with pytest.raises(Exception):
        add_toc_to_pdf(source_pdf, OUTLINE, out)
    assert len(opened) == 2
    assert all(doc.is_closed for doc in opened)
