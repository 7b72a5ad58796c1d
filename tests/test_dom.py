import unittest

from infostream.extraction.dom import DomAnalyzer


HTML = """
<html><body>
  <section class="latest news">
    <h2>Latest   Reports</h2>
    <ul class="items"><li><a class="title big" href="/r/1">First  report</a></li></ul>
  </section>
</body></html>
"""


class TestDomAnalyzer(unittest.TestCase):
    def setUp(self):
        self.dom = DomAnalyzer(HTML)
        self.anchor = self.dom.first("a")

    def test_text_collapses_whitespace(self):
        self.assertEqual(self.dom.text(self.dom.first("h2")), "Latest Reports")
        self.assertEqual(self.dom.text(None), "")

    def test_attr_joins_multi_valued_class(self):
        self.assertEqual(self.dom.attr(self.anchor, "class"), "title big")
        self.assertEqual(self.dom.attr(self.anchor, "href"), "/r/1")
        self.assertEqual(self.dom.attr(self.anchor, "missing"), "")

    def test_closest_and_ancestors(self):
        self.assertEqual(self.dom.closest(self.anchor, ("section",)).name, "section")
        self.assertEqual(self.dom.closest(self.anchor, ("ul", "ol")).get("class"), ["items"])
        names = [el.name for el in self.dom.ancestors(self.anchor)]
        self.assertEqual(names[:3], ["li", "ul", "section"])
        self.assertNotIn("[document]", names)

    def test_heading_level_and_siblings(self):
        h2 = self.dom.first("h2")
        self.assertEqual(self.dom.heading_level(h2), 2)
        self.assertIsNone(self.dom.heading_level(self.anchor))
        self.assertEqual([s.name for s in self.dom.next_siblings(h2)], ["ul"])

    def test_anchors_includes_root_anchor(self):
        self.assertEqual(self.dom.anchors(self.anchor), [self.anchor])
        self.assertEqual(len(self.dom.anchors()), 1)

    def test_dom_path_is_coarse(self):
        self.assertEqual(self.dom.dom_path(self.anchor), "section/ul/li/a.title")

    def test_malformed_markup_is_tolerated(self):
        dom = DomAnalyzer("<div><a href='/x'>broken <b>markup</div></a>")
        self.assertEqual(len(dom.anchors()), 1)


if __name__ == "__main__":
    unittest.main()
