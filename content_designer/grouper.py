"""
Content grouping for multi-section components.

Partitions a run of blocks into groups (tabs, slides, sections or columns),
either at explicit split indices or automatically at heading-like blocks.
"""
import math
import re
from typing import List, Optional, Sequence

from .heuristics import is_block_heading
from .html_utils import strip_html, truncate_title
from .models import ContentBlock, Group

HEADING_MARKUP_RE = re.compile(r'<h[1-6]', re.IGNORECASE)
MAX_BALANCED_COLUMNS = 3


def _group_from_blocks(blocks: List[ContentBlock]) -> Optional[Group]:
    if not blocks:
        return None
    if is_block_heading(blocks[0]):
        return Group(title=blocks[0].content, content=blocks[1:])
    return Group(title='', content=list(blocks))


def group_by_manual_splits(blocks: List[ContentBlock], split_points: Sequence[int]) -> List[Group]:
    """
    Partition blocks at explicit split indices

    Args:
        blocks: The block run
        split_points: Positions of the first block of each new group; indices
            outside (0, len(blocks)] are ignored

    Returns:
        Groups in order; a heading-like first block becomes the group title
    """
    groups = []
    start = 0

    for index in sorted(set(split_points)):
        if start < index <= len(blocks):
            group = _group_from_blocks(blocks[start:index])
            if group:
                groups.append(group)
            start = index

    if start < len(blocks):
        group = _group_from_blocks(blocks[start:])
        if group:
            groups.append(group)

    return groups


def group_by_headings(blocks: List[ContentBlock]) -> List[Group]:
    """Start a new group at every heading-like block"""
    groups: List[Group] = []
    current = None

    for block in blocks:
        if is_block_heading(block):
            current = Group(title=block.content, content=[])
            groups.append(current)
        elif current is None:
            current = Group(title='', content=[block])
            groups.append(current)
        else:
            current.content.append(block)

    return groups


def group_in_columns(blocks: List[ContentBlock]) -> List[Group]:
    """Split blocks into up to three balanced columns"""
    if not blocks:
        return []

    target_columns = min(MAX_BALANCED_COLUMNS, math.ceil(len(blocks) / 2))
    per_column = math.ceil(len(blocks) / target_columns)

    return [_group_from_blocks(blocks[start:start + per_column])
            for start in range(0, len(blocks), per_column)]


def _has_heading(blocks: List[ContentBlock]) -> bool:
    return any(is_block_heading(block) for block in blocks)


def _with_fallback_titles(groups: List[Group], label: str) -> List[Group]:
    return [Group(title=group.title or f'{label} {index}', content=group.content)
            for index, group in enumerate(groups, start=1)]


def group_for_tabs(blocks: List[ContentBlock], split_points: Optional[Sequence[int]] = None) -> List[Group]:
    """Group blocks into tabs with short plain-text titles"""
    if split_points:
        groups = group_by_manual_splits(blocks, split_points)
    else:
        groups = group_by_headings(blocks)

    tabs = []
    for index, group in enumerate(groups, start=1):
        title = strip_html(group.title).strip()
        tabs.append(Group(title=truncate_title(title) if title else f'Tab {index}',
                          content=group.content))
    return tabs


def group_for_carousel(blocks: List[ContentBlock], split_points: Optional[Sequence[int]] = None) -> List[Group]:
    """Group blocks into carousel slides"""
    if split_points:
        groups = group_by_manual_splits(blocks, split_points)
    else:
        groups = group_by_headings(blocks)
    return _with_fallback_titles(groups, 'Slide')


def group_for_accordion(blocks: List[ContentBlock], split_points: Optional[Sequence[int]] = None) -> List[Group]:
    """
    Group blocks into accordion sections

    None auto-detects sections from headings, while any list (including an
    empty one) is treated as manual splits, so [] yields a single section.
    """
    if split_points is None:
        groups = group_by_headings(blocks)
    else:
        groups = group_by_manual_splits(blocks, split_points)
    return _with_fallback_titles(groups, 'Section')


def group_for_stylised_box(blocks: List[ContentBlock], split_points: Optional[Sequence[int]] = None) -> List[Group]:
    """Group blocks into stylised-box cards, falling back to balanced columns"""
    if split_points:
        return group_by_manual_splits(blocks, split_points)
    if _has_heading(blocks):
        return group_by_headings(blocks)
    return group_in_columns(blocks)


def auto_detect_split_points(blocks: List[ContentBlock]) -> List[int]:
    """
    Split indices for a freshly applied multi-section component

    Splits before every heading after the first block, or before every block
    after the first when the run has no headings.
    """
    split_points = [index for index, block in enumerate(blocks)
                    if index > 0 and (block.type == 'heading'
                                      or HEADING_MARKUP_RE.search(block.content or ''))]
    if split_points:
        return split_points
    return list(range(1, len(blocks)))
