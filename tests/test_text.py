from docgen.docs.text import compose_body, split_paragraphs


def test_split_paragraphs_on_blank_and_whitespace_lines():
    text = "First line\ncontinued\n\n   \nSecond\n\n\nThird"
    assert split_paragraphs(text) == ["First line\ncontinued", "Second", "Third"]


def test_split_paragraphs_empty_input():
    assert split_paragraphs("") == []
    assert split_paragraphs("\n\n  \n") == []


def test_compose_body_puts_project_name_first():
    body = compose_body("  Acme Redesign ", "EXECUTIVE SUMMARY\n\nText")
    assert body.splitlines()[0] == "Acme Redesign"
    assert split_paragraphs(body)[0] == "Acme Redesign"
