import unittest

from check_http.formatting import reason_phrase, status_line


class FormattingTests(unittest.TestCase):
    def test_known_codes(self) -> None:
        cases = [
            (200, "200 OK"),
            (226, "226 IM Used"),
            (308, "308 Permanent Redirect"),
            (404, "404 Not Found"),
        ]
        for code, expected in cases:
            with self.subTest(code=code):
                self.assertEqual(status_line(code), expected)

    def test_unknown_code_has_empty_phrase(self) -> None:
        self.assertEqual(reason_phrase(999), "")
        self.assertEqual(status_line(999), "999 ")


if __name__ == "__main__":
    unittest.main()
