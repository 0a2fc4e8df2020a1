"""Tests for search term highlighting."""
from utils.highlighter import highlight


def test_highlights_original_form():
    assert highlight("أحمد محمد", "احمد") == "<mark>أحمد</mark> محمد"


def test_highlights_every_occurrence():
    assert highlight("علي و على", "علي") == "<mark>علي</mark> و <mark>على</mark>"


def test_escapes_html_outside_and_inside_marks():
    assert highlight("<b>علي</b>", "علي") == "&lt;b&gt;<mark>علي</mark>&lt;/b&gt;"


def test_custom_tags():
    assert highlight("1042", "104", "*", "*") == "*104*2"


def test_no_match_returns_escaped_text():
    assert highlight("سارة & منى", "احمد") == "سارة &amp; منى"


def test_empty_text():
    assert highlight(None, "احمد") == ""
    assert highlight("", "احمد") == ""
    assert highlight("احمد", "") == "احمد"


def test_highlights_flexible_match_without_alif():
    assert highlight("محمد حسن", "احمد") == "م<mark>حمد</mark> حسن"
