import unittest

from segmentation_fixtures import PAGE_URL

from infostream.segmentation.config import SegmentationConfig
from infostream.segmentation.patterns import PathPatternSegmenter


def anchors(prefix, count, label="Story"):
    return "".join(f'<li><a href="{prefix}/{i}.html">{label} {i} from {prefix}</a></li>' for i in range(count))


class TestPathPatternSegmenter(unittest.TestCase):
    def test_groups_by_two_segment_pattern(self):
        html = f'<div class="content"><ul>{anchors("/news/2024", 4)}{anchors("/events/spring", 3)}</ul></div>'
        groups = PathPatternSegmenter().segment(PAGE_URL, html)
        self.assertEqual([g.label for g in groups], ["News", "Events"])
        self.assertEqual([len(g.articles) for g in groups], [4, 3])
        self.assertTrue(all(g.source_strategy == "pattern" for g in groups))

    def test_nav_container_vetoes_whole_pattern(self):
        html = (
            f'<div class="main-menu"><ul>{anchors("/about/team", 3)}</ul></div>'
            f'<div class="content"><ul>{anchors("/press/2024", 4)}</ul></div>'
            f'<footer><a href="/press/2024/99.html">Press archive in footer</a></footer>'
            f'<div class="content"><ul>{anchors("/blog/posts", 3)}</ul></div>'
        )
        groups = PathPatternSegmenter().segment(PAGE_URL, html)
        self.assertEqual([g.label for g in groups], ["Blog"])

    def test_page_level_classes_do_not_veto(self):
        html = (
            f'<html><body class="has-sidebar"><main><ul>{anchors("/news/2024", 5)}</ul></main></body></html>'
        )
        groups = PathPatternSegmenter().segment(PAGE_URL, html)
        self.assertEqual([g.label for g in groups], ["News"])
        self.assertEqual(len(groups[0].articles), 5)

    def test_only_nearest_classed_element_is_checked(self):
        html = (
            f'<div class="layout sidebar"><div class="story-list"><ul>{anchors("/news/2024", 3)}</ul></div></div>'
            f'<div class="unavailable"><ul>{anchors("/press/2024", 3)}</ul></div>'
            f'<ul class="main-nav">{anchors("/about/team", 3)}</ul>'
        )
        groups = PathPatternSegmenter().segment(PAGE_URL, html)
        self.assertEqual(sorted(g.label for g in groups), ["News", "Press Releases"])

    def test_shallow_and_small_patterns_are_ignored(self):
        html = (
            '<a href="/about">About the agency</a><a href="/contact">Contact details</a>'
            + anchors("/tiny/set", 2)
        )
        self.assertEqual(PathPatternSegmenter().segment(PAGE_URL, html), [])

    def test_unknown_pattern_label_is_readable(self):
        html = f"<ul>{anchors('/foo/bar', 3, label='Harbor')}</ul>"
        groups = PathPatternSegmenter().segment(PAGE_URL, html)
        self.assertEqual(groups[0].label, "foo bar")

    def test_caps(self):
        html = "".join(f"<ul>{anchors(f'/s{k}/list', 3 + k)}</ul>" for k in range(10))
        config = SegmentationConfig(pattern_cap=3, pattern_member_cap=5)
        groups = PathPatternSegmenter(config).segment(PAGE_URL, html)
        self.assertEqual(len(groups), 3)
        self.assertEqual([len(g.articles) for g in groups], [5, 5, 5])
        self.assertEqual(groups[0].score, 12.0)


if __name__ == "__main__":
    unittest.main()
