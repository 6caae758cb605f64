from unittest import TestCase

from ..general import const_compare, sanitize_log


class TestGeneral(TestCase):
    def test_const_compare(self):
        assert const_compare("secret", "secret")
        assert not const_compare("secret", "other")
        assert not const_compare(None, "secret")
        assert not const_compare("secret", None)

    def test_sanitize_log_strips_line_breaks(self):
        forged = "did:example:123\n2024-01-01 ERROR admin logged in\r"
        assert sanitize_log(forged) == "did:example:1232024-01-01 ERROR admin logged in"

    def test_sanitize_log_strips_control_characters(self):
        assert sanitize_log("did:a\x1b[31m\x00\u2028") == "did:a[31m"

    def test_sanitize_log_passthrough(self):
        assert sanitize_log("https://example.org/schemas/degree.json") == (
            "https://example.org/schemas/degree.json"
        )
        assert sanitize_log(None) == ""
        assert sanitize_log(42) == "42"
