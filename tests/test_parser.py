import docx
import fitz
import pytest

from parser import UnsupportedDocumentType, extract_text_from_file


def test_txt_is_normalized(tmp_path):
    path = tmp_path / "resume.txt"
    path.write_text("• Led the team\r\n2018 – 2020\n", encoding="utf-8")

    extracted = extract_text_from_file(str(path))

    assert extracted.text == "- Led the team\n2018 - 2020"
    assert extracted.non_text_elements == 0


def test_docx_counts_tables(tmp_path):
    path = tmp_path / "resume.docx"
    document = docx.Document()
    document.add_paragraph("EXPERIENCE")
    document.add_paragraph("- Led the platform team")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Python"
    document.save(str(path))

    extracted = extract_text_from_file(str(path))

    assert "Led the platform team" in extracted.text
    assert extracted.non_text_elements >= 1


def test_pdf_text(tmp_path):
    path = tmp_path / "resume.pdf"
    pdf = fitz.open()
    page = pdf.new_page()
    page.insert_text((72, 72), "EXPERIENCE")
    page.insert_text((72, 90), "- Reduced cloud spend by 30% across production services in 2023")
    pdf.save(str(path))
    pdf.close()

    extracted = extract_text_from_file(str(path))

    assert "EXPERIENCE" in extracted.text
    assert "Reduced cloud spend" in extracted.text


def test_unsupported_extension(tmp_path):
    path = tmp_path / "resume.rtf"
    path.write_text("{\\rtf1 hello}")

    with pytest.raises(UnsupportedDocumentType):
        extract_text_from_file(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_text_from_file(str(tmp_path / "nope.pdf"))
