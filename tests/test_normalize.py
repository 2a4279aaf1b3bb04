import unittest

from remap.normalize import normalize, normalize_hex_color, tighten_function_args


class TestNormalize(unittest.TestCase):
    def test_idempotent(self):
        samples = [
            ("color", "Red !important"),
            ("color", "rgba(0, 0, 0, 0.5)"),
            ("border", "1px solid #ABC"),
            ("background", "url(A.png) RED"),
            ("background", "linear-gradient(-180deg, #0679fc, #0361cc 90%)"),
            ("font", "12px Arial, sans-serif"),
            ("content", '"Hello"'),
            ("transition", "m, a(1) z(2)"),
            ("width", "10.5px"),
            ("background", 'url("A B.png") red'),
            ("background", "calc(100% - 10px) center no-repeat"),
        ]
        for prop, value in samples:
            once = normalize(value, prop)
            self.assertEqual(normalize(once, prop), once, (prop, value))

    def test_shorthand_order(self):
        self.assertEqual(normalize("1px solid red", "border"), normalize("solid 1px red", "border"))
        self.assertNotEqual(normalize("1px 2px", "width"), normalize("2px 1px", "width"))

    def test_color_equivalence(self):
        expected = normalize("red", "color")
        self.assertEqual(expected, "#ff0000ff")
        for value in ("#f00", "#ff0000", "#ff0000ff", "RED", "#F00F"):
            self.assertEqual(normalize(value, "color"), expected, value)

    def test_hex_lengths(self):
        self.assertEqual(normalize_hex_color("#abc"), "#aabbccff")
        self.assertEqual(normalize_hex_color("#abcd"), "#aabbccdd")
        self.assertEqual(normalize_hex_color("#aabbcc"), "#aabbccff")
        self.assertEqual(normalize_hex_color("#aabbcc80"), "#aabbcc80")

    def test_function_spacing_and_leading_zero(self):
        self.assertEqual(normalize("rgba(0, 0, 0, 0.5)", "color"), "rgba(0,0,0,.5)")
        self.assertEqual(normalize("0.5em", "width"), ".5em")
        self.assertEqual(normalize("10.5px", "width"), "10.5px")
        self.assertEqual(tighten_function_args("a, b(1, 2)"), "a, b(1,2)")

    def test_important_is_stripped(self):
        self.assertEqual(normalize("blue !important", "color"), normalize("blue", "color"))
        self.assertEqual(normalize("blue ! IMPORTANT", "color"), normalize("blue", "color"))

    def test_shorthand_tokens_keep_functions_whole(self):
        self.assertEqual(normalize('url("A B.png") red', "background"), 'red url("A B.png")')
        self.assertEqual(normalize("calc(100% - 10px) 0", "margin"), "0 calc(100% - 10px)")

    def test_case(self):
        self.assertEqual(normalize('"Hello"', "content"), '"Hello"')
        self.assertEqual(normalize("url(A.PNG)", "background-image"), "url(A.PNG)")
        self.assertEqual(normalize("url(A.png) RED", "background"), "red url(A.png)")
        self.assertEqual(normalize("Block", "display"), "block")

    def test_whitespace_style(self):
        self.assertEqual(normalize("1px   solid\n#000", "border"), normalize("1px solid #000", "border"))


if __name__ == '__main__':
    unittest.main()
