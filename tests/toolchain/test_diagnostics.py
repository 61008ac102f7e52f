"""Tests for Go diagnostic translation and classification."""

import pytest

from goeval.toolchain.diagnostics import GoDiagnosticClassifier, translate_diagnostics


class TestTranslateDiagnostics:
    """Tests for reformatting compiler output."""

    def test_banner_is_suppressed(self) -> None:
        raw = "# command-line-arguments\n:3:2: undefined: x\n"
        assert translate_diagnostics(raw) == "3:undefined: x"

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            (":12[/tmp/goeval_main.go:40]: undefined: y", "12:undefined: y"),
            (":12:5: undefined: y", "12:undefined: y"),
            (":12: undefined: y", "12:undefined: y"),
            ("./goeval_main.go:7:3: syntax error", "7:syntax error"),
            ("/tmp/goeval_main.go:7: syntax error", "7:syntax error"),
        ],
    )
    def test_location_shapes(self, line: str, expected: str) -> None:
        assert translate_diagnostics(line + "\n") == expected

    def test_multiple_lines_joined(self) -> None:
        raw = (
            "# command-line-arguments\n"
            ":1:1: undefined: a\n"
            ":2:1: undefined: b\n"
        )
        assert translate_diagnostics(raw) == "1:undefined: a\n2:undefined: b"

    def test_unlocated_lines_pass_through(self) -> None:
        raw = "panic: boom\n\ngoroutine 1 [running]:\nexit status 2\n"
        assert translate_diagnostics(raw) == "panic: boom\ngoroutine 1 [running]:\nexit status 2"

    def test_empty(self) -> None:
        assert translate_diagnostics("") == ""


class TestGoDiagnosticClassifier:
    """Tests for recognising falsely inferred imports."""

    @pytest.fixture
    def classifier(self) -> GoDiagnosticClassifier:
        return GoDiagnosticClassifier()

    def test_redeclared_as_imported_package_name(
        self, classifier: GoDiagnosticClassifier
    ) -> None:
        raw = ":3: time redeclared as imported package name\n"
        assert classifier.implicated_packages(raw) == {"time"}

    def test_legacy_imported_and_not_used(self, classifier: GoDiagnosticClassifier) -> None:
        raw = ':1: imported and not used: "os"\n'
        assert classifier.implicated_packages(raw) == {"os"}

    def test_current_imported_and_not_used(self, classifier: GoDiagnosticClassifier) -> None:
        raw = './goeval_main.go:4:8: "math/rand" imported and not used\n'
        assert classifier.implicated_packages(raw) == {"math/rand"}

    def test_imported_as_alias_and_not_used(self, classifier: GoDiagnosticClassifier) -> None:
        raw = ':4:8: "strings" imported as str and not used\n'
        assert classifier.implicated_packages(raw) == {"strings"}

    def test_redeclared_in_this_block(self, classifier: GoDiagnosticClassifier) -> None:
        raw = ":2:8: fmt redeclared in this block\n"
        assert classifier.implicated_packages(raw) == {"fmt"}

    def test_multiple_matches(self, classifier: GoDiagnosticClassifier) -> None:
        raw = ':1: imported and not used: "os"\n:2: sort redeclared as imported package name\n'
        assert classifier.implicated_packages(raw) == {"os", "sort"}

    def test_unrelated_errors(self, classifier: GoDiagnosticClassifier) -> None:
        assert classifier.implicated_packages(":3:2: undefined: x\n") == set()
