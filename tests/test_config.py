import re
import unittest

from remap.config import RemapOptions, SourceSpec, options_from_env


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        options = RemapOptions()
        self.assertEqual(options.line_length, 80)
        self.assertEqual(options.limit_special, 25)
        self.assertEqual((options.device_type, options.device_width), ("screen", "1024px"))
        self.assertTrue(options.combine)
        self.assertFalse(options.comments)

    def test_invalid_order(self):
        with self.assertRaises(ValueError):
            RemapOptions(order="alphabetical")

    def test_ignore_patterns_compiled(self):
        options = RemapOptions(ignore_selectors=[r"^\.x", re.compile("y")])
        self.assertTrue(all(isinstance(p, re.Pattern) for p in options.ignore_selectors))

    def test_from_env(self):
        env = {
            "REMAP_COMMENTS": "true",
            "REMAP_ORDER": "SOURCE",
            "REMAP_LINE_LENGTH": "40",
            "REMAP_COMBINE": "false",
            "REMAP_IGNORE_SELECTORS": r"^\.a, ^\.b",
        }
        options = options_from_env(env)
        self.assertTrue(options.comments)
        self.assertEqual(options.order, "source")
        self.assertEqual(options.line_length, 40)
        self.assertFalse(options.combine)
        self.assertEqual([p.pattern for p in options.ignore_selectors], [r"^\.a", r"^\.b"])

    def test_overrides_win(self):
        options = options_from_env({"REMAP_LINE_LENGTH": "40"}, line_length=100, comments=None)
        self.assertEqual(options.line_length, 100)
        self.assertFalse(options.comments)

    def test_source_from_dict(self):
        spec = SourceSpec.from_dict({"css": "a{}", "prefix": "html", "match": [".x"], "deviceWidth": "500px"})
        self.assertEqual((spec.prefix, spec.match, spec.device_width), ("html", [".x"], "500px"))


if __name__ == '__main__':
    unittest.main()
