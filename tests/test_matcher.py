import unittest

from remap.config import RemapOptions, SourceSpec
from remap.errors import StylesheetError
from remap.mappings import compile_mappings
from remap.matcher import match_source, merge_associations, parse_stylesheet

RED_TO_BLUE = compile_mappings({"color: red": "color: blue"})


def match(css, options=None, **source):
    return match_source(SourceSpec(css=css, **source), RED_TO_BLUE, options or RemapOptions())


class TestMatcher(unittest.TestCase):
    def test_basic_match(self):
        self.assertEqual(match("a { color: #f00 } b { color: green }"), {"color: red": {"a"}})

    def test_media_filtering(self):
        css = "@media (min-width: 2000px) { a { color: red } } b { color: red }"
        self.assertEqual(match(css), {"color: red": {"b"}})
        self.assertEqual(match(css, device_width="2000px"), {"color: red": {"a", "b"}})
        wide = RemapOptions(device_width="2000px")
        self.assertEqual(match(css, options=wide), {"color: red": {"a", "b"}})

    def test_nested_media(self):
        css = "@media screen { @media (max-width: 500px) { a { color: red } } b { color: red } }"
        self.assertEqual(match(css), {"color: red": {"b"}})

    def test_unreadable_media_is_included(self):
        self.assertEqual(match("@media (width >= 600px) { a { color: red } }"), {"color: red": {"a"}})

    def test_important(self):
        self.assertEqual(match("a { color: red !important }"), {"color: red !important": {"a"}})

    def test_duplicate_declarations_last_wins(self):
        self.assertEqual(match("a { color: red; color: green }"), {})
        self.assertEqual(match("a { color: green; color: red }"), {"color: red": {"a"}})

    def test_selector_lists(self):
        out = match("a,\n  b:is(.x, .y) { color: red }")
        self.assertEqual(out, {"color: red": {"a", "b:is(.x, .y)"}})

    def test_prefix_and_ignore(self):
        options = RemapOptions(ignore_selectors=[r"^\.skip"])
        out = match(".x, .skip, .keep a { color: red }", options=options, prefix="html.dark", match=[".keep"])
        self.assertEqual(out, {"color: red": {"html.dark .x", ".keep a"}})

    def test_rule_without_selectors(self):
        self.assertEqual(match("{ color: red }"), {"color: red": set()})

    def test_supports_and_layer_are_scanned(self):
        css = "@supports (display: grid) { a { color: red } } @layer base { b { color: red } } @layer reset;"
        self.assertEqual(match(css), {"color: red": {"a", "b"}})
        css = "@layer base { @media print { a { color: red } } @supports (gap: 1px) { b { color: red } } }"
        self.assertEqual(match(css), {"color: red": {"b"}})

    def test_other_at_rules_skipped(self):
        css = "@font-face { color: red } @keyframes spin { from { color: red } }"
        self.assertEqual(match(css), {})

    def test_parse_error_propagates(self):
        with self.assertRaises(StylesheetError):
            match("a { color: red } b")

    def test_parse_stylesheet(self):
        rules = parse_stylesheet("a, b { color: red; margin: 0 } @media print { c { color: red } }")
        self.assertEqual(rules, [(["a", "b"], [("color", "red", False), ("margin", "0", False)])])

    def test_merge_is_union(self):
        a = {"color: red": {"a"}, "x": {"1"}}
        b = {"color: red": {"b"}, "y": set()}
        merged = merge_associations([a, b])
        self.assertEqual(merged, {"color: red": {"a", "b"}, "x": {"1"}, "y": set()})
        self.assertEqual(list(merged), ["color: red", "x", "y"])
        self.assertEqual(merge_associations([b, a]), merged)


if __name__ == '__main__':
    unittest.main()
