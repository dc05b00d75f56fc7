"""Tests for the outline extractor."""

from pathlib import Path

from codeprobe_cli.outline import (
    collect_annotations,
    find_outline_end,
    outline_file,
    parse_outline,
    shallow_outline,
)


def test_parse_java_outline(sample_java_code: str):
    """Classes, fields and methods come out in file order."""
    items = parse_outline(sample_java_code, "java")

    assert [(i.name, i.category) for i in items] == [
        ("InvoiceService", "class"),
        ("invoiceRepository", "field"),
        ("issue", "method"),
        ("Listener", "interface"),
        ("onIssued", "method"),
    ]


def test_java_line_spans(sample_java_code: str):
    items = {i.name: i for i in parse_outline(sample_java_code, "java")}

    assert (items["InvoiceService"].start_line, items["InvoiceService"].end_line) == (9, 25)
    assert (items["issue"].start_line, items["issue"].end_line) == (15, 20)
    assert (items["Listener"].start_line, items["Listener"].end_line) == (22, 24)
    # fields never span lines
    assert items["invoiceRepository"].end_line == items["invoiceRepository"].start_line == 11


def test_java_signature_carries_annotations(sample_java_code: str):
    items = {i.name: i for i in parse_outline(sample_java_code, "java")}

    assert items["issue"].signature == "@Transactional @Deprecated public Invoice issue(Long orderId) {"
    assert items["InvoiceService"].signature == "@Service public class InvoiceService {"
    assert items["invoiceRepository"].signature == "private InvoiceRepository invoiceRepository;"


def test_python_signature_has_no_annotations():
    content = "@decorator\ndef handler(event):\n    return event\n"
    items = parse_outline(content, "python")

    assert len(items) == 1
    assert items[0].signature == "def handler(event):"


def test_unknown_language_yields_nothing():
    assert parse_outline("class Foo {}", None) == []
    assert parse_outline("class Foo {}", "cobol") == []


def test_empty_content_yields_nothing():
    assert parse_outline("", "java") == []


def test_outline_end_without_closing_brace():
    lines = ["class A {", "    int x;"]
    assert find_outline_end(lines, 0) == 2


def test_outline_end_on_single_line_body():
    assert find_outline_end(["void f() { }", "int y;"], 0) == 1


def test_collect_annotations_steps_over_comments():
    lines = ["", "@A", "// note", "@B", "void f() {"]
    assert collect_annotations(lines, 4) == ["@A", "@B"]


def test_item_to_dict_shape(sample_java_code: str):
    item = parse_outline(sample_java_code, "java")[0]
    data = item.to_dict()

    assert list(data) == ["name", "type", "startLine", "endLine", "signature"]
    assert data["type"] == "class"


def test_shallow_outline_drops_fields(sample_java_code: str):
    names = [i.name for i in shallow_outline(sample_java_code)]
    assert "invoiceRepository" not in names
    assert names[:2] == ["InvoiceService", "issue"]


class TestOutlineFile:
    """Per-file results used by the batch tool."""

    def test_java_file(self, write_file, sample_java_code: str):
        path = write_file("billing/InvoiceService.java", sample_java_code)
        result = outline_file(str(path))

        assert result["path"] == str(path)
        assert result["language"] == "java"
        assert result["totalItems"] == 5
        assert result["outline"][0]["name"] == "InvoiceService"

    def test_unsupported_extension(self, write_file):
        path = write_file("notes.txt", "class Foo {\n}\n")
        result = outline_file(str(path))

        assert result["language"] == "txt"
        assert result["totalItems"] == 0
        assert result["outline"] == []

    def test_missing_file(self, temp_dir: Path):
        path = str(temp_dir / "Nope.java")
        result = outline_file(path)

        assert result == {"path": path, "error": "File does not exist or is not a regular file"}

    def test_directory_is_not_a_file(self, temp_dir: Path):
        assert "error" in outline_file(str(temp_dir))

    def test_empty_java_file(self, write_file):
        path = write_file("Empty.java", "")
        result = outline_file(str(path))

        assert result["language"] == "java"
        assert result["totalItems"] == 0
        assert result["outline"] == []
