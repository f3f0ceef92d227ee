"""
Tests for clipboard normalisation and the allow-list sanitiser.
"""

from content_designer.models import ClipboardPayload
from content_designer.normalizer import HtmlSanitizer, TextNormalizer, convert_emphasis


def test_html_variant_preferred_over_plain_text():
    normalizer = TextNormalizer()
    payload = ClipboardPayload(html='<p>From <b>HTML</b></p>', plain_text='From text')

    assert normalizer.normalize_clipboard(payload) == '<p>From <strong>HTML</strong></p>'


def test_plain_text_used_when_html_has_no_text():
    normalizer = TextNormalizer()
    payload = ClipboardPayload(html='<p> </p><br>', plain_text='First para\n\nSecond para')

    assert normalizer.normalize_clipboard(payload) == '<p>First para</p><p>Second para</p>'


def test_empty_payload_normalises_to_empty_string():
    normalizer = TextNormalizer()

    assert normalizer.normalize_clipboard(ClipboardPayload()) == ''
    assert normalizer.normalize_clipboard(None) == ''


def test_disallowed_tags_unwrapped_and_scripts_dropped():
    normalizer = TextNormalizer()
    markup = '<div><span>Keep me</span><script>alert(1)</script></div><style>p{}</style>'

    assert normalizer.normalize_html(markup) == 'Keep me'


def test_attributes_filtered_and_unsafe_links_dropped():
    normalizer = TextNormalizer()
    markup = ('<p class="x" onclick="evil()"><a href="https://example.org" data-x="1">ok</a>'
              '<a href="javascript:alert(1)">bad</a></p>')

    result = normalizer.normalize_html(markup)

    assert result == '<p><a href="https://example.org">ok</a><a>bad</a></p>'


def test_inline_styles_become_semantic_tags():
    normalizer = TextNormalizer()
    markup = '<p><span style="font-weight: bold">Bold</span> and <span style="font-style:italic">it</span></p>'

    assert normalizer.normalize_html(markup) == '<p><strong>Bold</strong> and <em>it</em></p>'


def test_newlines_collapsed_in_html():
    normalizer = TextNormalizer()

    assert normalizer.normalize_html('<p>one\ntwo   three</p>') == '<p>one two three</p>'


def test_plain_text_is_escaped():
    normalizer = TextNormalizer()

    assert normalizer.normalize_plain_text('a < b & c') == '<p>a &lt; b &amp; c</p>'


def test_plain_text_single_newlines_become_spaces():
    normalizer = TextNormalizer()

    assert normalizer.normalize_plain_text('line one\nline two') == '<p>line one line two</p>'


def test_convert_emphasis():
    assert convert_emphasis('**bold** and *it*') == '<strong>bold</strong> and <em>it</em>'
    assert convert_emphasis('__bold__ and _it_') == '<strong>bold</strong> and <em>it</em>'


def test_convert_emphasis_ignores_snake_case_and_loose_stars():
    assert convert_emphasis('snake_case_name') == 'snake_case_name'
    assert convert_emphasis('2 * 3 * 4') == '2 * 3 * 4'


def test_parser_sanitizer_keeps_block_wrappers():
    normalizer = TextNormalizer()
    markup = '<div class="content-block" data-block-id="x1" data-block-type="paragraph" style="color:red"><p>Hi</p></div>'

    result = normalizer.sanitize_for_parser(markup)

    assert result == '<div data-block-id="x1" data-block-type="paragraph" class="content-block"><p>Hi</p></div>'


def test_sanitizer_is_reusable_with_custom_allow_list():
    sanitizer = HtmlSanitizer(('p',), ())

    assert sanitizer.sanitize('<p id="a"><em>x</em></p>') == '<p>x</p>'
    assert sanitizer.sanitize('') == ''


def test_alpha_list_style_survives_as_type_attribute():
    markup = '<ol style="list-style-type: lower-alpha; margin: 0"><li>One</li></ol>'

    assert TextNormalizer().normalize_html(markup) == '<ol type="a"><li>One</li></ol>'
