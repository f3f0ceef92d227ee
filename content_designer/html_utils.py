"""
This module contains helpers for stripping, reformatting and extracting text
from HTML content fragments.
"""
import html
import re
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .models import ContentBlock


FORMATTING_TAGS = ('strong', 'em', 'u', 'a')
LEGACY_FORMATTING = {'b': 'strong', 'i': 'em'}
BLOCK_LEVEL_TAGS = ('p', 'div', 'li', 'ul', 'ol', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6')
ALPHA_LIST_STYLES = ('lower-alpha', 'upper-alpha', 'lower-latin', 'upper-latin')

_LINK_RE = re.compile(r'<a\b[^>]*>.*?</a>', re.IGNORECASE | re.DOTALL)
_LIST_MARKUP_RE = re.compile(r'<ul|<ol')
_ITEM_MARKERS = (
    re.compile(r'^\s*\d+\.\s+'),
    re.compile(r'^\s*[a-zA-Z]\.\s+'),
    re.compile(r'^\s*(?:i{1,3}|iv|v|vi{0,3}|ix|x)\.\s+', re.IGNORECASE),
    re.compile(r'^\s*\([a-zA-Z0-9]+\)\s+'),
    re.compile(r'^\s*[•·▪▫‣⁃-]\s+'),
)
_LIST_INDICATOR_RE = re.compile(r'^(\d+[.)]\s+|[a-zA-Z][.)]\s+|[•·▪▫‣⁃-]\s*)')

Blockish = Union[str, ContentBlock]


def _soup(fragment: str) -> BeautifulSoup:
    return BeautifulSoup(fragment, 'html.parser')


def strip_html(fragment: Optional[str]) -> str:
    """Strip all HTML tags from content, returning plain text"""
    if not fragment or not isinstance(fragment, str):
        return ''
    return _soup(fragment).get_text()


def _link_attributes(element: Tag) -> str:
    href = element.get('href') or ''
    target = element.get('target') or ''
    rel = element.get('rel') or ''
    if isinstance(rel, list):
        rel = ' '.join(rel)

    attrs = f' href="{html.escape(href)}"'
    if target:
        attrs += f' target="{html.escape(target)}"'
    if rel:
        attrs += f' rel="{html.escape(rel)}"'
    if href and not target:
        attrs += ' target="_blank" rel="noopener noreferrer"'
    return attrs


def _keep_formatting(node) -> str:
    if isinstance(node, PreformattedString):
        return ''
    if isinstance(node, NavigableString):
        return html.escape(str(node), quote=False)
    if not isinstance(node, Tag):
        return ''

    inner = ''.join(_keep_formatting(child) for child in node.children)
    tag = LEGACY_FORMATTING.get(node.name, node.name)

    if tag == 'a':
        return f'<a{_link_attributes(node)}>{inner}</a>'
    if tag in FORMATTING_TAGS:
        return f'<{tag}>{inner}</{tag}>'
    return inner


def strip_html_keep_formatting(fragment: Optional[str]) -> str:
    """Strip HTML but preserve formatting tags (strong, em, u) and links"""
    if not fragment or not isinstance(fragment, str):
        return ''
    return ''.join(_keep_formatting(child) for child in _soup(fragment).children)


def truncate_title(title: Optional[str], max_length: int = 30) -> str:
    """Truncate title to max_length, preferring word boundaries"""
    if not title:
        return 'Tab'
    if len(title) <= max_length:
        return title

    truncated = title[:max_length]
    last_space = truncated.rfind(' ')
    if last_space > max_length - 10:
        return truncated[:last_space] + '...'
    return truncated + '...'


def clean_text(text: Optional[str]) -> str:
    """Clean and trim text content"""
    if not text or not isinstance(text, str):
        return ''
    return text.strip()


def _block_content(block: Blockish) -> str:
    if isinstance(block, str):
        return block
    return block.content or ''


def _as_html_text(block: Blockish, preserve_formatting: bool) -> str:
    if preserve_formatting:
        return strip_html_keep_formatting(_block_content(block)).strip()
    return html.escape(strip_html(_block_content(block)).strip(), quote=False)


def join_content_blocks(blocks: List[Blockish], preserve_formatting: bool = False) -> str:
    """Join blocks into one run of text separated by spaces"""
    if not blocks:
        return ''
    texts = (_as_html_text(block, preserve_formatting) for block in blocks)
    return ' '.join(text for text in texts if text)


def join_content_blocks_as_html(blocks: List[Blockish], preserve_formatting: bool = True) -> str:
    """Join blocks as a sequence of HTML paragraphs"""
    if not blocks:
        return ''
    texts = (_as_html_text(block, preserve_formatting) for block in blocks)
    return ''.join(f'<p>{text}</p>' for text in texts if text)


def join_content_blocks_preserve_html(blocks: List[Blockish]) -> str:
    """Join blocks preserving all raw HTML (including lists)"""
    if not blocks:
        return ''
    return '\n'.join(_block_content(block) for block in blocks)


def contains_list_markup(blocks: List[Blockish]) -> bool:
    """Whether any block carries literal list markup"""
    return any(_LIST_MARKUP_RE.search(_block_content(block)) for block in blocks)


def clean_list_item_content(content: Optional[str]) -> str:
    """Clean list item content by removing numbering and excess whitespace"""
    if not content or not isinstance(content, str):
        return ''

    links: List[str] = []

    def _hold_link(match):
        links.append(match.group(0))
        return f'__LINK_{len(links) - 1}__'

    cleaned = _LINK_RE.sub(_hold_link, content)
    cleaned = re.sub(r'^<p[^>]*>|</p>$', '', cleaned, flags=re.IGNORECASE)
    for marker in _ITEM_MARKERS:
        cleaned = marker.sub('', cleaned, count=1)
    cleaned = cleaned.lstrip()
    cleaned = cleaned.replace('&nbsp;', ' ')
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()

    if _LIST_INDICATOR_RE.match(cleaned):
        cleaned = _LIST_INDICATOR_RE.sub('', cleaned, count=1).strip()

    for index, link in enumerate(links):
        cleaned = cleaned.replace(f'__LINK_{index}__', link)

    return cleaned


def extract_list_items(fragment: Optional[str]) -> List[str]:
    """Extract list items from HTML content preserving formatting"""
    if not fragment or not isinstance(fragment, str):
        return []

    soup = _soup(fragment)
    items: List[str] = []

    list_items = soup.find_all('li')
    paragraphs = soup.find_all('p')
    if list_items:
        for item in list_items:
            content = clean_list_item_content(item.decode_contents().strip())
            if content:
                items.append(content)
    elif paragraphs:
        for paragraph in paragraphs:
            content = clean_list_item_content(paragraph.decode_contents().strip())
            if content:
                items.append(content)
    else:
        for line in re.split(r'\n|<br\s*/?>', soup.decode(), flags=re.IGNORECASE):
            content = clean_list_item_content(line.strip())
            if content and len(content) > 2:
                items.append(content)

    return [item for item in items if item.strip()]


def html_to_lines(fragment: Optional[str]) -> List[str]:
    """Plain text lines of a fragment, one per block-level element or break"""
    if not fragment or not isinstance(fragment, str):
        return []

    soup = _soup(fragment)
    for br in soup.find_all('br'):
        br.replace_with('\n')
    for element in soup.find_all(BLOCK_LEVEL_TAGS):
        element.append('\n')

    lines = (line.strip() for line in soup.get_text().split('\n'))
    return [line for line in lines if line]


def parse_inline_style(style_string: Optional[str]) -> Dict[str, str]:
    """Parse inline CSS style string"""
    style_dict = {}
    if style_string:
        for item in style_string.split(';'):
            if ':' in item:
                key, value = item.split(':', 1)
                style_dict[key.strip().lower()] = value.strip().lower()
    return style_dict


def is_alpha_list_style(style_string: Optional[str]) -> bool:
    """Whether an inline style sets an alphabetic list-style-type"""
    style = parse_inline_style(style_string)
    return style.get('list-style-type') in ALPHA_LIST_STYLES
