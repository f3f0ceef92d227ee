"""
This module contains the ContentEditor class, which applies editing actions to
an EditorState and returns the resulting state.
"""
import html
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .block_parser import BlockParser
from .grouper import auto_detect_split_points
from .models import (
    ClipboardPayload, ComponentRunKey, ContentBlock, CustomisationKey, EditorState,
    IconCustomisation, IndentKey, COMPONENT_REGISTRY, new_block_id
)
from .normalizer import TextNormalizer

logger = logging.getLogger(__name__)

FULL_REPLACEMENT_RATIO = 0.5
MAX_INDENT_LEVEL = 3


class ContentEditor:
    """Applies paste, edit and component actions to editor state"""

    def __init__(self, normalizer: Optional[TextNormalizer] = None,
                 parser: Optional[BlockParser] = None):
        self.normalizer = normalizer or TextNormalizer()
        self.parser = parser or BlockParser(self.normalizer)

    def paste(self, state: EditorState, payload: ClipboardPayload) -> EditorState:
        """Replace content with a clipboard payload; empty payloads change nothing"""
        normalized = self.normalizer.normalize_clipboard(payload)
        if not normalized:
            logger.debug("Clipboard payload had no content, ignoring paste")
            return state

        blocks = self.parser.parse(normalized)
        if not blocks:
            return state

        logger.info("Pasted %d blocks", len(blocks))
        return self.text_change(state, blocks)

    def edit(self, state: EditorState, surface_html: str) -> EditorState:
        """
        Re-parse editing-surface markup, keeping components of surviving blocks

        Text typed into an existing block is kept as typed; only blocks that
        are new to the surface go through list-marker conversion.
        """
        previous = {block.id: block for block in state.blocks}
        blocks = []

        for block in self.parser.parse(surface_html, convert_lists=False):
            original = previous.get(block.id)
            if original is not None:
                block = replace(block, component=original.component,
                                list_type=original.list_type or block.list_type)
            elif block.type == 'list' and block.list_type and not block.component:
                block = replace(block, component=block.list_type)
            else:
                block = self.parser.convert_paragraph_lists([block])[0]
            blocks.append(block)

        return self.text_change(state, blocks)

    def text_change(self, state: EditorState, blocks: List[ContentBlock]) -> EditorState:
        """
        Install a new block sequence

        When fewer than half of the previous block ids survive the change is a
        full replacement and the split-point store, selection and cursor are
        cleared. Otherwise store entries, selection and cursor that reference
        vanished blocks are dropped.
        """
        existing_ids = set(state.block_ids())
        preserved = sum(1 for block in blocks if block.id in existing_ids)
        ratio = preserved / len(state.blocks) if state.blocks else 0

        if ratio < FULL_REPLACEMENT_RATIO:
            logger.debug("Full replacement (%.2f of ids preserved)", ratio)
            return EditorState(blocks=list(blocks))

        new_ids = {block.id for block in blocks}
        cursor = state.cursor_block_id if state.cursor_block_id in new_ids else None
        return EditorState(
            blocks=list(blocks),
            split_points=state.split_points.prune(new_ids),
            selected_ids=[block_id for block_id in state.selected_ids if block_id in new_ids],
            cursor_block_id=cursor
        )

    def select(self, state: EditorState, block_ids: Sequence[str],
               cursor_block_id: Optional[str] = None) -> EditorState:
        """Set the selection and cursor, ignoring unknown ids"""
        known = set(state.block_ids())
        cursor = cursor_block_id if cursor_block_id in known else None
        return replace(state, selected_ids=[i for i in block_ids if i in known],
                       cursor_block_id=cursor)

    def _target_ids(self, state: EditorState, target_ids: Optional[Sequence[str]]) -> List[str]:
        if target_ids is None:
            target_ids = state.selected_ids or (
                [state.cursor_block_id] if state.cursor_block_id else [])
        wanted = set(target_ids)
        return [block_id for block_id in state.block_ids() if block_id in wanted]

    def apply_component(self, state: EditorState, component: str,
                        target_ids: Optional[Sequence[str]] = None,
                        split_points: Optional[List[int]] = None,
                        indent_levels: Optional[Dict[str, int]] = None,
                        customisation: Optional[IconCustomisation] = None) -> EditorState:
        """
        Assign a component to target blocks and store its parameters

        Args:
            state: Current editor state
            component: Component id to apply
            target_ids: Blocks to apply to; defaults to the selection, then the cursor
            split_points: Explicit split indices for multi-section components
            indent_levels: Per-block indentation levels for list components
            customisation: Icon and colour for icon lists

        Returns:
            New state; unchanged when there are no target blocks
        """
        ids = self._target_ids(state, target_ids)
        if not ids:
            logger.debug("No target blocks for %s, ignoring", component)
            return state

        targets = set(ids)
        blocks = [replace(block, component=component) if block.id in targets else block
                  for block in state.blocks]

        spec = COMPONENT_REGISTRY.get(component)
        if split_points is None and spec is not None and spec.smart_grouping:
            split_points = auto_detect_split_points([b for b in blocks if b.id in targets])

        store = state.split_points
        run_ids = tuple(ids)
        if split_points is not None:
            store = store.set(ComponentRunKey(component, run_ids), list(split_points))
        if indent_levels is not None:
            store = store.set(IndentKey(component, run_ids), clamp_levels(indent_levels))
        if customisation is not None:
            store = store.set(CustomisationKey(component, run_ids), customisation)

        logger.info("Applied %s to %d blocks", component, len(ids))
        return replace(state, blocks=blocks, split_points=store)

    def remove_component(self, state: EditorState, block_id: str) -> EditorState:
        """Clear a block's component and every store entry that references it"""
        blocks = [replace(block, component=None) if block.id == block_id else block
                  for block in state.blocks]
        return replace(state, blocks=blocks, split_points=state.split_points.without_block(block_id))

    def split_block(self, state: EditorState, block_id: str,
                    before_html: str, after_html: str) -> EditorState:
        """
        Split a block at the cursor, inserting the second half as a new block

        The new block has no component unless the split block is a list item,
        in which case it stays an item of the same list.
        """
        index = next((i for i, block in enumerate(state.blocks) if block.id == block_id), None)
        if index is None or not before_html.strip() or not after_html.strip():
            return state

        current = state.blocks[index]
        blocks = list(state.blocks)
        blocks[index] = replace(current, content=_wrap_fragment(before_html))
        new_block = ContentBlock(id=new_block_id(), type=current.type,
                                 content=_wrap_fragment(after_html))
        if current.list_type:
            new_block.list_type = current.list_type
            new_block.component = current.component or current.list_type
        blocks.insert(index + 1, new_block)

        return self.text_change(replace(state, cursor_block_id=new_block.id), blocks)


def _wrap_fragment(fragment: str) -> str:
    fragment = fragment.strip()
    if fragment.startswith('<'):
        return fragment
    return f'<p>{fragment}</p>'


def clamp_levels(levels: Dict[str, int]) -> Dict[str, int]:
    """Clamp indentation levels to 0..3"""
    return {block_id: max(0, min(MAX_INDENT_LEVEL, int(level))) for block_id, level in levels.items()}


def change_indent(levels: Dict[str, int], blocks: List[ContentBlock],
                  block_id: str, delta: int) -> Dict[str, int]:
    """
    Indent or outdent one list item

    An increase is refused when it would put the item more than one level
    deeper than the previous item; decreases are never refused.
    """
    ids = [block.id for block in blocks]
    if block_id not in ids:
        return dict(levels)

    index = ids.index(block_id)
    current = levels.get(block_id, 0)
    new_level = max(0, min(MAX_INDENT_LEVEL, current + delta))

    if delta > 0 and index > 0 and new_level > levels.get(ids[index - 1], 0) + 1:
        return dict(levels)

    updated = dict(levels)
    updated[block_id] = new_level
    return updated


def render_editor_markup(blocks: List[ContentBlock], suggestions: Optional[Dict[str, str]] = None) -> str:
    """Markup for the editing surface, one wrapper per block"""
    suggestions = suggestions or {}
    wrappers = []

    for block in blocks:
        block_id = html.escape(block.id)
        classes = 'content-block has-component' if block.component else 'content-block'
        list_attr = f' data-list-type="{html.escape(block.list_type)}"' if block.list_type else ''

        indicators = ''
        if block.component:
            indicators += (f'<span class="component-indicator" contenteditable="false">'
                           f'<span class="component-chip">{html.escape(block.component)}</span>'
                           f'<button class="remove-btn" data-block-id="{block_id}">×</button></span>')
        elif suggestions.get(block.id):
            indicators += (f'<span class="suggestion-indicator" contenteditable="false">'
                           f'<span class="suggestion-chip">{html.escape(suggestions[block.id])}</span></span>')

        wrappers.append(
            f'<div class="{classes}" data-block-id="{block_id}" '
            f'data-block-type="{html.escape(block.type)}"{list_attr}>'
            f'{indicators}<div class="block-content">{block.content}</div></div>'
        )

    return '\n'.join(wrappers)
