import unittest

from remap.media import media_matches, to_px


class TestMedia(unittest.TestCase):
    def test_width_features(self):
        self.assertFalse(media_matches("(min-width: 2000px)", "screen", "1024px"))
        self.assertTrue(media_matches("(min-width: 2000px)", "screen", "2000px"))
        self.assertTrue(media_matches("screen and (max-width: 1200px)", "screen", "1024px"))
        self.assertTrue(media_matches("only screen and (min-width: 600px) and (max-width: 1100px)"))
        self.assertTrue(media_matches("(min-width: 64em)", "screen", "1024px"))

    def test_types(self):
        self.assertFalse(media_matches("print"))
        self.assertTrue(media_matches("all"))
        self.assertTrue(media_matches("not print"))
        self.assertTrue(media_matches("print, screen"))
        self.assertTrue(media_matches(""))

    def test_unknown_features_do_not_match(self):
        self.assertFalse(media_matches("(prefers-color-scheme: dark)"))
        self.assertFalse(media_matches("screen and (orientation: landscape)"))

    def test_unreadable_queries_raise(self):
        for query in ("(width >= 600px)", "screen (min-width: 10px)", "and", "(min-width: 10vw)"):
            with self.assertRaises(ValueError, msg=query):
                media_matches(query)

    def test_to_px(self):
        self.assertEqual(to_px("10px"), 10)
        self.assertEqual(to_px("2rem"), 32)
        self.assertEqual(to_px("0"), 0)


if __name__ == '__main__':
    unittest.main()
