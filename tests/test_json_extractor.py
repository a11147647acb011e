import unittest

from utils.json_extractor import extract_json_object


class TestExtractJsonObject(unittest.TestCase):
    def test_object_inside_prose(self):
        text = 'Here is the report:\n{"aiSummaryVerdict": "Viable", "finalVerdict": {"launchDecision": "LAUNCH NOW"}}\nGood luck!'
        self.assertEqual(
            extract_json_object(text),
            {"aiSummaryVerdict": "Viable", "finalVerdict": {"launchDecision": "LAUNCH NOW"}},
        )

    def test_markdown_fence(self):
        text = '```json\n{"a": [1, 2, {"b": null}]}\n```'
        self.assertEqual(extract_json_object(text), {"a": [1, 2, {"b": None}]})

    def test_no_braces_gives_none(self):
        self.assertIsNone(extract_json_object("Sorry, I cannot help with that."))

    def test_empty_and_none(self):
        self.assertIsNone(extract_json_object(""))
        self.assertIsNone(extract_json_object(None))

    def test_braces_inside_strings_are_ignored(self):
        text = 'Result: {"note": "use } and { freely", "escaped": "quote \\" }"} trailing }'
        self.assertEqual(
            extract_json_object(text),
            {"note": "use } and { freely", "escaped": 'quote " }'},
        )

    def test_skips_non_json_brace_block(self):
        text = 'Template {productTitle} filled below: {"ok": true}'
        self.assertEqual(extract_json_object(text), {"ok": True})

    def test_unbalanced_gives_none(self):
        self.assertIsNone(extract_json_object('{"a": 1'))

    def test_invalid_json_gives_none(self):
        self.assertIsNone(extract_json_object("{not: json}"))


if __name__ == "__main__":
    unittest.main()
