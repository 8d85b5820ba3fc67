"""Tests for markup stripping.

WHY: Caption text reaches the screen only through strip_markup(). Glued
words ("line<br>break") or torn words ("don<b>'</b>t") are visible bugs.
"""

import pytest

from caption_sync.core.markup import INLINE_TAGS, strip_markup


class TestStripMarkup:

    def test_inline_tags_and_punctuation(self):
        assert strip_markup("<b>hi</b> <i>there</i>!") == "hi there!"

    def test_comment_removed(self):
        assert strip_markup("<!-- x --> y") == "y"

    def test_inline_tag_inside_word(self):
        assert strip_markup("don<b>'</b>t") == "don't"

    def test_block_tag_separates_words(self):
        assert strip_markup("line<br>break") == "line break"
        assert strip_markup("one<p>two</p>three") == "one two three"

    def test_whitespace_collapses(self):
        assert strip_markup("  lots \t of\n\n space  ") == "lots of space"

    def test_no_double_separator(self):
        assert strip_markup("a <br> <br/> b") == "a b"

    def test_script_block_removed(self):
        assert strip_markup("before<script type='x'>alert(1) < 2</script>after") == "beforeafter"

    def test_script_end_tag_case_insensitive(self):
        assert strip_markup("a <SCRIPT>x</Script > b") == "a b"

    def test_entities_decoded_after_tags(self):
        assert strip_markup("&lt;i&gt;literal&lt;/i&gt; &amp; more") == "<i>literal</i> & more"

    def test_tag_attributes(self):
        assert strip_markup('<font color="#ff0000">red</font> text') == "red text"

    def test_uppercase_inline_tag(self):
        assert strip_markup("it<I>a</I>lic") == "italic"

    @pytest.mark.parametrize("fragment, expected", [
        ("text <b", "text"),
        ("text <!-- never closed", "text"),
        ("text <script>never closed", "text"),
    ])
    def test_unterminated_markup_ends_scan(self, fragment, expected):
        assert strip_markup(fragment) == expected

    def test_empty_and_markup_only(self):
        assert strip_markup("") == ""
        assert strip_markup("<br/><!-- c -->") == ""

    def test_repeated_calls_are_independent(self):
        first = strip_markup("<i>alpha</i> <br>beta")
        strip_markup("<!-- dangling")
        assert strip_markup("<i>alpha</i> <br>beta") == first == "alpha beta"

    def test_inline_whitelist(self):
        assert {"b", "i", "span", "a"} <= INLINE_TAGS
        assert "br" not in INLINE_TAGS
