"""
This module contains the TextNormalizer class, which turns clipboard payloads
and editing-surface markup into canonical allow-listed HTML.
"""
import html
import logging
import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .html_utils import LEGACY_FORMATTING, is_alpha_list_style, parse_inline_style
from .models import ClipboardPayload

logger = logging.getLogger(__name__)

CLIPBOARD_TAGS = ('p', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
                  'strong', 'em', 'u', 'ul', 'ol', 'li', 'br', 'a')
CLIPBOARD_ATTRS = ('href', 'target', 'rel', 'type')

PARSER_TAGS = CLIPBOARD_TAGS + ('div', 'span')
PARSER_ATTRS = CLIPBOARD_ATTRS + ('data-block-id', 'data-block-type', 'data-list-type', 'class')

REMOVED_WITH_CONTENT = ('script', 'style', 'template', 'noscript', 'head', 'title', 'meta', 'link')
VOID_TAGS = ('br',)
UNSAFE_URL_RE = re.compile(r'^\s*(javascript|vbscript|data):', re.IGNORECASE)

BOLD_WEIGHTS = ('bold', 'bolder', '700', '800', '900')

_MARKDOWN_BOLD_RE = re.compile(r'\*\*(.+?)\*\*|__(.+?)__')
_MARKDOWN_STAR_ITALIC_RE = re.compile(r'(?<![\w*])\*(?=\S)(.+?)(?<=\S)\*(?![\w*])')
_MARKDOWN_UNDERSCORE_ITALIC_RE = re.compile(r'(?<![\w_])_(?=\S)(.+?)(?<=\S)_(?![\w_])')


class HtmlSanitizer:
    """Allow-list filter implemented as a tree transform over a parsed fragment"""

    def __init__(self, allowed_tags: Iterable[str], allowed_attrs: Iterable[str],
                 semantic_styles: bool = False):
        """
        Initialize the sanitizer

        Args:
            allowed_tags: Tag names kept in the output
            allowed_attrs: Attribute names kept on kept tags
            semantic_styles: Rewrite bold/italic/underline inline styles into tags
        """
        self.allowed_tags = frozenset(allowed_tags)
        self.allowed_attrs = tuple(allowed_attrs)
        self.semantic_styles = semantic_styles

    def sanitize(self, markup: Optional[str]) -> str:
        """Return markup restricted to the allow-list, keeping the text of stripped tags"""
        if not markup:
            return ''

        soup = BeautifulSoup(markup, 'html.parser')
        _mark_alpha_lists(soup)
        if self.semantic_styles:
            self._apply_semantic_styles(soup)

        return ''.join(self._visit(child) for child in soup.children)

    def _visit(self, node) -> str:
        if isinstance(node, PreformattedString):
            return ''
        if isinstance(node, NavigableString):
            return html.escape(str(node), quote=False)
        if not isinstance(node, Tag):
            return ''

        name = LEGACY_FORMATTING.get(node.name, node.name)
        if name in REMOVED_WITH_CONTENT:
            return ''

        inner = ''.join(self._visit(child) for child in node.children)
        if name not in self.allowed_tags:
            return inner
        if name in VOID_TAGS:
            return f'<{name}>'
        return f'<{name}{self._attributes(node)}>{inner}</{name}>'

    def _attributes(self, element: Tag) -> str:
        attrs = ''
        for attr in self.allowed_attrs:
            value = element.get(attr)
            if value is None:
                continue
            if isinstance(value, list):
                value = ' '.join(value)
            if attr == 'href' and UNSAFE_URL_RE.match(value):
                continue
            attrs += f' {attr}="{html.escape(value)}"'
        return attrs

    @staticmethod
    def _apply_semantic_styles(soup: BeautifulSoup):
        """Wrap the contents of styled elements in strong/em/u"""
        for element in soup.find_all(style=True):
            style = parse_inline_style(element.get('style'))

            wrappers = []
            if style.get('font-weight') in BOLD_WEIGHTS:
                wrappers.append('strong')
            if style.get('font-style') == 'italic':
                wrappers.append('em')
            if 'underline' in style.get('text-decoration', ''):
                wrappers.append('u')

            for name in wrappers:
                wrapper = soup.new_tag(name)
                for child in list(element.contents):
                    wrapper.append(child.extract())
                element.append(wrapper)


def _mark_alpha_lists(soup: BeautifulSoup):
    """Carry an alphabetic list-style-type over to type="a", which survives filtering"""
    for element in soup.find_all('ol', style=True):
        if not element.get('type') and is_alpha_list_style(element.get('style')):
            element['type'] = 'a'


class TextNormalizer:
    """Normalizes clipboard and editing-surface input into canonical HTML"""

    def __init__(self):
        self.clipboard_sanitizer = HtmlSanitizer(CLIPBOARD_TAGS, CLIPBOARD_ATTRS,
                                                 semantic_styles=True)
        self.parser_sanitizer = HtmlSanitizer(PARSER_TAGS, PARSER_ATTRS)

    def normalize_clipboard(self, payload: Optional[ClipboardPayload]) -> str:
        """
        Normalize a clipboard payload, preferring its HTML variant

        Args:
            payload: Clipboard data with optional html and plain_text variants

        Returns:
            Canonical HTML, or an empty string when neither variant has content
        """
        if payload is None:
            return ''

        if payload.html and payload.html.strip():
            normalized = self.normalize_html(payload.html)
            if _has_text(normalized):
                return normalized
            logger.debug("HTML clipboard variant had no text, trying plain text")

        if payload.plain_text and payload.plain_text.strip():
            return self.normalize_plain_text(payload.plain_text)

        return ''

    def normalize_html(self, markup: str) -> str:
        """Sanitize pasted HTML to the clipboard allow-list"""
        flattened = markup.replace('\r\n', ' ').replace('\n', ' ')
        cleaned = self.clipboard_sanitizer.sanitize(flattened)
        return re.sub(r'\s+', ' ', cleaned).strip()

    def normalize_plain_text(self, text: str) -> str:
        """Convert plain text with markdown-like emphasis into paragraphs"""
        paragraphs = []
        for run in text.replace('\r\n', '\n').split('\n\n'):
            if not run.strip():
                continue
            formatted = convert_emphasis(html.escape(run.strip(), quote=False))
            paragraphs.append(f"<p>{formatted.replace(chr(10), ' ')}</p>")
        return ''.join(paragraphs)

    def sanitize_for_parser(self, markup: str) -> str:
        """Sanitize to the parser allow-list, which keeps editor block wrappers"""
        return self.parser_sanitizer.sanitize(markup)


def convert_emphasis(text: str) -> str:
    """Rewrite **bold**, __bold__, *italic* and _italic_ markers into tags"""
    text = _MARKDOWN_BOLD_RE.sub(
        lambda match: f'<strong>{match.group(1) or match.group(2)}</strong>', text)
    text = _MARKDOWN_STAR_ITALIC_RE.sub(r'<em>\1</em>', text)
    return _MARKDOWN_UNDERSCORE_ITALIC_RE.sub(r'<em>\1</em>', text)


def _has_text(markup: str) -> bool:
    return bool(markup) and bool(BeautifulSoup(markup, 'html.parser').get_text().strip())
