import unittest

from infostream.extraction.dom import DomAnalyzer
from infostream.segmentation.titles import (
    UNTITLED,
    find_common_keywords,
    label_from_titles,
    path_to_label,
    select_best_title,
    suggest_page_title,
    truncate,
)


class TestSelectBestTitle(unittest.TestCase):
    titles = ["Harbor expansion approved", "Harbor traffic rises"]

    def test_keeps_plausible_label(self):
        self.assertEqual(select_best_title("Public Notices", self.titles), "Public Notices")

    def test_breadcrumb_label_uses_last_segment(self):
        self.assertEqual(select_best_title("Home > Disclosure > Notices", self.titles), "Notices")

    def test_boilerplate_label_is_rederived(self):
        self.assertEqual(select_best_title("Page 2", self.titles), "Harbor")
        self.assertEqual(select_best_title("zwgk gsgg", self.titles), "Harbor")

    def test_out_of_range_label_is_rederived(self):
        self.assertEqual(select_best_title("x", self.titles), "Harbor")
        self.assertEqual(select_best_title("A" * 60, self.titles), "Harbor")

    def test_no_members_keeps_label(self):
        self.assertEqual(select_best_title("Notices", []), "Notices")
        self.assertEqual(select_best_title("", []), UNTITLED)


class TestLabelFromTitles(unittest.TestCase):
    def test_repeated_short_title_wins(self):
        titles = ["Budget", "Budget", "Council approves the annual plan"]
        self.assertEqual(label_from_titles(titles), "Budget")

    def test_shared_keyword(self):
        titles = ["Harbor expansion approved", "Harbor traffic rises", "Ferry route opens"]
        self.assertEqual(label_from_titles(titles), "Harbor")

    def test_medium_length_title(self):
        titles = ["A very long headline about the regional economy", "Port reopens"]
        self.assertEqual(label_from_titles(titles), "Port reopens")

    def test_falls_back_to_truncated_first_title(self):
        titles = [
            "Regional economy grows faster than forecast this year",
            "Ministers gather for closed door summit tonight",
        ]
        self.assertEqual(label_from_titles(titles), "Regional economy grows fast...")

    def test_empty(self):
        self.assertEqual(label_from_titles(["", "  "]), UNTITLED)

    def test_keywords_skip_numbers_and_stopwords(self):
        titles = ["The 2024 budget", "The 2024 plan", "budget review"]
        self.assertEqual(find_common_keywords(titles), ["budget"])

    def test_truncate(self):
        self.assertEqual(truncate("abcdef", 10), "abcdef")
        self.assertEqual(truncate("abcdefghijkl", 10), "abcdefg...")


class TestPathToLabel(unittest.TestCase):
    def test_known_patterns(self):
        self.assertEqual(path_to_label("/news/2024"), "News")
        self.assertEqual(path_to_label("/notice"), "Announcements")
        self.assertEqual(path_to_label("/zwgk/gsgg"), "Government Affairs")

    def test_unknown_pattern_is_rendered(self):
        self.assertEqual(path_to_label("/foo/bar"), "foo bar")
        self.assertEqual(path_to_label("/"), "Articles")


class TestSuggestPageTitle(unittest.TestCase):
    url = "https://example.com/notices/"

    def test_breadcrumb_container(self):
        dom = DomAnalyzer('<div class="breadcrumb"><a href="/">Home</a> &gt; <a href="/n/">Public Notices</a></div>')
        self.assertEqual(suggest_page_title(dom, self.url), "Public Notices")

    def test_breadcrumb_text_pattern(self):
        dom = DomAnalyzer("<html><body><div class='bar'>当前位置：首页 &gt; 政务公开 &gt; 通知公告</div></body></html>")
        self.assertEqual(suggest_page_title(dom, self.url), "通知公告")
        dom = DomAnalyzer("<html><body><p>You are here: Home &gt; Services &gt; Permits</p></body></html>")
        self.assertEqual(suggest_page_title(dom, self.url), "Permits")

    def test_title_suffix_is_stripped(self):
        dom = DomAnalyzer("<html><head><title>Notices and Bulletins - Example City</title></head><body></body></html>")
        self.assertEqual(suggest_page_title(dom, self.url), "Notices and Bulletins")

    def test_h1_then_hostname(self):
        dom = DomAnalyzer("<html><body><h1>Press Room</h1></body></html>")
        self.assertEqual(suggest_page_title(dom, self.url), "Press Room")
        self.assertEqual(suggest_page_title(DomAnalyzer("<p>x</p>"), self.url), "example.com")


if __name__ == "__main__":
    unittest.main()
