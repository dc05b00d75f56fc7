"""Tests for definition block resolution."""

from codeprobe_cli.block_range import (
    fallback_window,
    find_block_range,
    find_declaration_end,
    find_matching_brace,
    find_signature_start,
    is_signature_line,
)
from codeprobe_cli.models import BlockRange
from codeprobe_cli.outline import split_lines


def _hit(lines, text):
    return next(i for i, line in enumerate(lines) if text in line)


class TestSignatureStart:
    def test_signature_lines(self):
        assert is_signature_line("")
        assert is_signature_line("   @Override")
        assert is_signature_line(" * docs")
        assert is_signature_line("// note")
        assert not is_signature_line("int x = 1;")

    def test_includes_annotations_not_leading_blank(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        hit = _hit(lines, "issue(")
        start = find_signature_start(lines, hit)
        assert lines[start].strip() == "@Transactional"

    def test_includes_javadoc(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        hit = _hit(lines, "class InvoiceService")
        assert lines[find_signature_start(lines, hit)].strip() == "/**"

    def test_is_idempotent(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        for hit in range(len(lines)):
            start = find_signature_start(lines, hit)
            assert start <= hit
            assert find_signature_start(lines, start) == start


class TestBlockRange:
    def test_method_with_body(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        block = find_block_range(lines, _hit(lines, "issue("))
        assert block == BlockRange(start=12, end=19)
        assert lines[block.end].strip() == "}"

    def test_class_spans_nested_blocks(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        block = find_block_range(lines, _hit(lines, "class InvoiceService"))
        assert block == BlockRange(start=4, end=24)

    def test_bodyless_declaration_ends_at_semicolon(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        hit = _hit(lines, "onIssued")
        assert find_block_range(lines, hit) == BlockRange(start=hit, end=hit)

    def test_multiline_abstract_signature(self):
        lines = [
            "    List<Order> search(",
            "        String query,",
            "        int limit);",
        ]
        assert find_declaration_end(lines, 0) == 2
        assert find_block_range(lines, 0) == BlockRange(start=0, end=2)

    def test_brace_before_semicolon_is_not_bodyless(self):
        lines = ["void run() {", "    work();", "}"]
        assert find_declaration_end(lines, 0) == -1
        assert find_block_range(lines, 0) == BlockRange(start=0, end=2)

    def test_javadoc_link_above_method_is_skipped(self):
        lines = [
            "/**",
            " * Sends the {@link Invoice}.",
            " */",
            "public void send() {",
            "    deliver();",
            "}",
        ]
        assert find_block_range(lines, 3) == BlockRange(start=0, end=5)

    def test_semicolon_in_comment_above_method_is_skipped(self):
        lines = [
            "// retries once; then gives up",
            "@Retry",
            "public void send() {",
            "    deliver();",
            "}",
        ]
        assert find_block_range(lines, 2) == BlockRange(start=0, end=4)

    def test_braces_counted_per_character(self):
        lines = ["Runnable r() { return () -> { go(); }; }", "int after;"]
        assert find_matching_brace(lines, 0) == 0

    def test_unclosed_block(self):
        lines = ["void run() {", "    work();"]
        assert find_block_range(lines, 0) is None

    def test_no_brace_and_no_terminator(self):
        assert find_block_range(["// mentions run"], 0) is None

    def test_out_of_range_hit(self):
        assert find_block_range(["int x;"], 3) is None

    def test_range_contains_hit(self, sample_java_code: str):
        lines = split_lines(sample_java_code)
        for hit in range(len(lines)):
            block = find_block_range(lines, hit)
            if block is not None:
                assert block.start <= hit <= block.end


class TestFallbackWindow:
    def test_clamped_to_file(self):
        assert fallback_window(5, 2) == (0, 5)

    def test_window_around_hit(self):
        assert fallback_window(200, 50) == (40, 110)

    def test_custom_sizes(self):
        assert fallback_window(200, 50, before=2, after=3) == (48, 53)
