import io

from docx import Document

from docgen.docs.docx_io import FIXED_PARAGRAPHS, write_docx
from docgen.docs.model import DocumentRequest, Letterhead
from docgen.docs.text import split_paragraphs


def _read(data: bytes):
    return Document(io.BytesIO(data))


def test_paragraph_count_is_fixed_block_plus_chunks():
    body = "Acme Redesign\n\nEXECUTIVE SUMMARY\nWe will deliver.\n\n\n  \nTIMELINE\n\nEight weeks."
    doc = _read(write_docx(DocumentRequest(title="proposal", body_text=body)))
    assert len(split_paragraphs(body)) == 4
    assert len(doc.paragraphs) == FIXED_PARAGRAPHS + 4


def test_letterhead_and_title_come_first():
    doc = _read(write_docx(DocumentRequest(title="proposal", body_text="Acme Redesign\n\nBody")))
    paras = doc.paragraphs
    assert paras[0].text == "TRIOSTACK TECHNOLOGIES PRIVATE LIMITED"
    assert paras[0].runs[0].bold
    assert "CIN: U62012UP2025PTC226106" in paras[1].text
    assert "Website: www.triostack.in" in paras[1].text
    assert "Email: info@triostack.in" in paras[2].text
    assert "Address: IIMT LBF" in paras[2].text
    assert paras[3].text == "PROPOSAL"
    assert paras[3].style.name == "Heading 1"
    assert paras[4].text == "Acme Redesign"


def test_letterhead_labels_are_bold_values_are_not():
    doc = _read(write_docx(DocumentRequest(title="t", body_text="x")))
    runs = doc.paragraphs[1].runs
    assert runs[0].text == "CIN: " and runs[0].bold
    assert runs[1].text == "U62012UP2025PTC226106" and not runs[1].bold


def test_custom_letterhead():
    lh = Letterhead(company_name="ACME CONSULTING LLC")
    doc = _read(write_docx(DocumentRequest(title="t", body_text="x", letterhead=lh)))
    assert doc.paragraphs[0].text == "ACME CONSULTING LLC"


def test_empty_body_has_only_fixed_paragraphs():
    doc = _read(write_docx(DocumentRequest(title="t", body_text="\n\n")))
    assert len(doc.paragraphs) == FIXED_PARAGRAPHS


def test_body_paragraphs_are_uniformly_styled():
    doc = _read(write_docx(DocumentRequest(title="t", body_text="ONE HEADING\n\nplain text")))
    sizes = {run.font.size.pt for p in doc.paragraphs[FIXED_PARAGRAPHS:] for run in p.runs}
    assert sizes == {12.0}


def test_xml_invalid_control_characters_are_dropped():
    body = "Pasted\x00 from a\x07 terminal\n\nPage one\x0cPage two"
    lh = Letterhead(company_name="ACME\x08 LTD")
    paras = _read(write_docx(DocumentRequest(title="notes\x01", body_text=body, letterhead=lh))).paragraphs
    assert paras[0].text == "ACME LTD"
    assert paras[FIXED_PARAGRAPHS - 1].text == "NOTES"
    assert paras[FIXED_PARAGRAPHS].text == "Pasted from a terminal"
    assert paras[FIXED_PARAGRAPHS + 1].text == "Page one\nPage two"
    assert len(paras) == FIXED_PARAGRAPHS + len(split_paragraphs(body))
