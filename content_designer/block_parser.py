"""
This module contains the BlockParser class, which splits canonical HTML into
an ordered sequence of typed content blocks.
"""
import html
import logging
import re
from typing import List, Optional, Set

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .heuristics import analyze_list_marker, marker_length, should_be_heading
from .html_utils import is_alpha_list_style, strip_html, strip_html_keep_formatting
from .models import ContentBlock, BLOCK_TYPES, LIST_TYPES, new_block_id
from .normalizer import TextNormalizer

logger = logging.getLogger(__name__)

HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
LIST_TAGS = ('ul', 'ol')
INLINE_TAGS = ('strong', 'em', 'u', 'a', 'br', 'span')
INDICATOR_CLASSES = ('component-indicator', 'suggestion-indicator')

_ALPHA_ITEM_RE = re.compile(r'^[a-z][.)]\s', re.IGNORECASE)


def _classes(element: Tag) -> List[str]:
    classes = element.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    return classes


def is_indicator(node) -> bool:
    """Whether node is an editing-surface badge rather than content"""
    return isinstance(node, Tag) and any(name in INDICATOR_CLASSES for name in _classes(node))


def detect_list_type(element: Tag) -> Optional[str]:
    """Detect the list type of a ul/ol element"""
    if element is None:
        return None
    if element.name == 'ul':
        return 'bulletList'
    if element.name != 'ol':
        return None

    if element.get('type') in ('a', 'A') or is_alpha_list_style(element.get('style')):
        return 'alphaList'

    items = element.find_all('li')
    if len(items) >= 2:
        first_text = items[0].get_text().strip()
        second_text = items[1].get_text().strip()
        if _ALPHA_ITEM_RE.match(first_text) and _ALPHA_ITEM_RE.match(second_text):
            return 'alphaList'

    return 'numericList'


def _node_markup(node) -> str:
    if isinstance(node, NavigableString):
        return html.escape(str(node), quote=False)
    return str(node)


class BlockParser:
    """Parses canonical HTML into content blocks"""

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        self.normalizer = normalizer or TextNormalizer()

    def parse(self, content: Optional[str], convert_lists: bool = True) -> List[ContentBlock]:
        """
        Parse HTML or plain text into structured blocks

        Args:
            content: Canonical HTML, editing-surface markup or plain text
            convert_lists: Turn paragraphs carrying list markers into list items

        Returns:
            Ordered list of content blocks, empty only for empty input
        """
        if not content or not content.strip():
            return []

        if '<' not in content:
            content = ''.join(f'<p>{html.escape(run, quote=False)}</p>'
                              for run in content.split('\n\n'))

        clean_html = self.normalizer.sanitize_for_parser(content)
        soup = BeautifulSoup(clean_html, 'html.parser')

        blocks: List[ContentBlock] = []
        seen_ids: Set[str] = set()
        pending_inline = []

        for node in list(soup.children):
            if isinstance(node, PreformattedString) or is_indicator(node):
                continue
            if isinstance(node, NavigableString) or node.name in INLINE_TAGS:
                pending_inline.append(node)
                continue

            blocks.extend(self._inline_block(pending_inline))
            pending_inline = []
            blocks.extend(self._parse_element(node))

        blocks.extend(self._inline_block(pending_inline))

        if not blocks and strip_html(clean_html).strip():
            blocks.append(ContentBlock.create(f'<p>{clean_html}</p>'))

        for block in blocks:
            if block.id in seen_ids:
                block.id = new_block_id()
            seen_ids.add(block.id)

        if convert_lists:
            blocks = self.convert_paragraph_lists(blocks)
        logger.debug("Parsed %d blocks", len(blocks))
        return blocks

    def _inline_block(self, nodes) -> List[ContentBlock]:
        """Gather stray top-level inline content into one paragraph"""
        markup = ''.join(_node_markup(node) for node in nodes).strip()
        if not strip_html(markup).strip():
            return []
        return [ContentBlock.create(f'<p>{markup}</p>')]

    def _parse_element(self, element: Tag) -> List[ContentBlock]:
        """Create the blocks for one top-level element"""
        if not element.get_text().strip():
            return []

        block_id = element.get('data-block-id') or new_block_id()

        if element.name in HEADING_TAGS:
            return [ContentBlock(id=block_id, type='heading', content=str(element))]

        if element.name in LIST_TAGS:
            return self._list_blocks(element)

        if element.name == 'div' and 'content-block' in _classes(element):
            return [self._unwrap_content_block(element, block_id)]

        if element.name == 'p':
            text = element.get_text().strip()
            block_type = 'paragraph'
            if not analyze_list_marker(text).is_list and should_be_heading(text):
                block_type = 'heading'
            logger.debug("Paragraph classified as %s: %.40s", block_type, text)
            return [ContentBlock(id=block_id, type=block_type, content=str(element))]

        return [ContentBlock(id=block_id, type='paragraph', content=str(element))]

    def _list_blocks(self, element: Tag) -> List[ContentBlock]:
        """Decompose a list into one block per item, flattening nested lists"""
        list_type = detect_list_type(element)
        blocks = []

        items = element.find_all('li', recursive=False)
        if not items:
            text = strip_html_keep_formatting(element.decode_contents()).strip()
            return [ContentBlock.create(f'<p>{text}</p>', 'list',
                                        list_type=list_type, component=list_type)]

        for item in items:
            nested_lists = [child.extract() for child in item.find_all(LIST_TAGS, recursive=False)]
            text = strip_html_keep_formatting(item.decode_contents()).strip()
            if strip_html(text).strip():
                blocks.append(ContentBlock(
                    id=item.get('data-block-id') or new_block_id(),
                    type='list',
                    content=f'<p>{text}</p>',
                    list_type=list_type,
                    component=list_type
                ))
            for nested in nested_lists:
                blocks.extend(self._list_blocks(nested))

        return blocks

    def _unwrap_content_block(self, element: Tag, block_id: str) -> ContentBlock:
        """Recover a block from the editing surface's wrapper markup"""
        content_element = element.find('div', class_='block-content')
        if content_element is not None:
            content = content_element.decode_contents().strip()
        else:
            content = ''.join(_node_markup(child) for child in element.children
                              if not is_indicator(child)).strip()

        block_type = element.get('data-block-type') or 'paragraph'
        if block_type not in BLOCK_TYPES:
            block_type = 'paragraph'

        list_type = element.get('data-list-type')
        if list_type not in LIST_TYPES:
            list_type = None
        if block_type == 'list' and list_type is None:
            list_type = self._infer_list_type(content)

        return ContentBlock(id=block_id, type=block_type, content=content, list_type=list_type)

    def _infer_list_type(self, content: str) -> str:
        soup = BeautifulSoup(content, 'html.parser')
        list_element = soup.find(LIST_TAGS)
        if list_element is not None:
            return detect_list_type(list_element)
        return analyze_list_marker(soup.get_text()).list_type or 'bulletList'

    def convert_paragraph_lists(self, blocks: List[ContentBlock]) -> List[ContentBlock]:
        """Convert paragraphs that carry textual list markers into list item blocks"""
        result = []
        run_type = None

        for block in blocks:
            analysis = None
            if block.type == 'paragraph':
                analysis = analyze_list_marker(strip_html(block.content))

            if analysis is None or not analysis.is_list:
                run_type = None
                result.append(block)
                continue

            if analysis.list_type != run_type:
                logger.debug("Starting %s run at block %s", analysis.list_type, block.id)
                run_type = analysis.list_type

            result.append(ContentBlock(
                id=block.id,
                type='paragraph',
                content=f'<p>{self._remove_marker(block.content)}</p>',
                list_type=analysis.list_type,
                component=analysis.list_type
            ))

        return result

    @staticmethod
    def _remove_marker(content: str) -> str:
        """Drop the leading list marker from content, preserving inline formatting"""
        soup = BeautifulSoup(content, 'html.parser')
        text = soup.get_text()
        remaining = len(text) - len(text.lstrip()) + marker_length(text)

        for node in soup.find_all(string=True):
            if remaining <= 0:
                break
            value = str(node)
            if len(value) <= remaining:
                remaining -= len(value)
                node.replace_with('')
            else:
                node.replace_with(value[remaining:])
                remaining = 0

        return strip_html_keep_formatting(str(soup)).strip()
