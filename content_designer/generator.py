"""
This module contains the HtmlGenerator class for rendering content blocks.
"""
import hashlib
import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import templates
from .classifier import ContentClassifier
from .data_parser import DocumentParser
from .editor import ContentEditor
from .grouper import (
    group_for_accordion, group_for_carousel, group_for_stylised_box, group_for_tabs
)
from .html_utils import (
    clean_list_item_content, contains_list_markup, extract_list_items,
    join_content_blocks, join_content_blocks_as_html, join_content_blocks_preserve_html,
    strip_html, strip_html_keep_formatting
)
from .models import (
    ContentBlock, EditorState, Group, IconCustomisation, SplitPointStore,
    is_multi_block_component
)
from .objectives import parse_objectives
from .readability import ReadabilityAnalyzer, ReadabilityStats

logger = logging.getLogger(__name__)

BOX_COMPONENTS = tuple(templates.BOX_STYLES)
LIST_COMPONENTS = ('bulletList', 'alphaList', 'numericList')
MAX_BOX_TITLE_LENGTH = 100


@dataclass
class RenderResult:
    """Outcome of a render job"""
    output_path: str
    block_count: int = 0
    suggestions: Dict[str, str] = field(default_factory=dict)
    stats: ReadabilityStats = field(default_factory=ReadabilityStats)
    components: Dict[str, int] = field(default_factory=dict)


ProgressCallback = Callable[[str, Dict[str, Any]], None]


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _run_digest(blocks: List[ContentBlock]) -> str:
    joined = '-'.join(block.id for block in blocks)
    return hashlib.md5(joined.encode('utf-8')).hexdigest()[:10]


def build_nested_list(list_type: str, items: List[str], levels: List[int]) -> str:
    """
    Render list items as nested lists following per-item indentation levels

    Nested lists open inside the preceding item; an item that starts deeper
    than any open item gets an unmarked container item. Every opened tag is
    closed, so the result is well-formed for any level sequence.
    """
    close_tag = templates.list_close_tag(list_type)
    markup = templates.LIST_OPEN_TAGS[list_type]
    item_open = [False]

    for item, level in zip(items, levels):
        level = max(0, min(3, level))

        while len(item_open) - 1 > level:
            if item_open.pop():
                markup += '</li>'
            markup += close_tag

        while len(item_open) - 1 < level:
            if not item_open[-1]:
                markup += '<li style="list-style: none;">'
                item_open[-1] = True
            markup += templates.NESTED_LIST_OPEN_TAGS[list_type]
            item_open.append(False)

        if item_open[-1]:
            markup += '</li>'
        markup += f'<li>{item}'
        item_open[-1] = True

    while item_open:
        if item_open.pop():
            markup += '</li>'
        markup += close_tag

    return markup


class HtmlGenerator:
    """Generates templated HTML from content blocks"""

    def __init__(self, classifier: Optional[ContentClassifier] = None,
                 editor: Optional[ContentEditor] = None,
                 readability: Optional[ReadabilityAnalyzer] = None):
        """
        Initialize the HTML generator

        Args:
            classifier: Classifier used for learning-objective cues and suggestions
            editor: Editor used to build state for render jobs
            readability: Analyzer used for render-job statistics
        """
        self.classifier = classifier or ContentClassifier()
        self.editor = editor or ContentEditor()
        self.readability = readability or ReadabilityAnalyzer()

    def generate(self, blocks: List[ContentBlock], split_points: Optional[SplitPointStore] = None) -> str:
        """
        Render a block sequence to one HTML fragment

        Args:
            blocks: Ordered content blocks
            split_points: Stored split points, indentation and customisation

        Returns:
            Fragment wrapped in an article element, or '' when there are no blocks
        """
        if not blocks:
            return ''

        store = split_points or SplitPointStore()
        fragments = []
        index = 0

        while index < len(blocks):
            block = blocks[index]

            if block.component:
                run = [block]
                if is_multi_block_component(block.component):
                    while (index + len(run) < len(blocks)
                           and blocks[index + len(run)].component == block.component):
                        run.append(blocks[index + len(run)])
                fragments.append(self.render_component(block.component, run, store))
                index += len(run)
                continue

            if block.type == 'list' and block.list_type:
                fragments.append(self.render_component(block.list_type, [block], store))
            else:
                fragments.append(block.content)
            index += 1

        return '<article role="article">\n' + '\n'.join(fragments) + '\n</article>'

    def render_component(self, component: str, blocks: List[ContentBlock],
                         store: SplitPointStore) -> str:
        """Render one run of blocks sharing a component"""
        ids = [block.id for block in blocks]
        logger.debug("Rendering %s for %d block(s)", component, len(blocks))

        if component in ('heading', 'moduleTitle'):
            text = _escape(strip_html(blocks[0].content).strip())
            if component == 'moduleTitle':
                return templates.module_title(text)
            return templates.heading(text, 'h3')

        if component == 'learningObjectives':
            suggestions = self.classifier.classify(blocks)
            objectives = parse_objectives(blocks, 'learningObjectives' in suggestions.values())
            return templates.learning_objectives(objectives.title, objectives.sub_heading,
                                                 objectives.objectives)

        if component in BOX_COMPONENTS:
            return self.render_box(component, blocks)

        if component == 'iconList':
            return templates.icon_list(self.list_items(blocks),
                                       **self._icon_options(store.customisation(component, ids)))

        if component == 'numberedList':
            return templates.numbered_list(self.list_items(blocks))

        if component in LIST_COMPONENTS:
            return self.render_list(component, blocks, store.indent_levels(component, ids))

        if component == 'textColumns':
            if contains_list_markup(blocks):
                return templates.text_columns(join_content_blocks_preserve_html(blocks))
            return templates.text_columns(join_content_blocks_as_html(blocks, False))

        if component == 'accordion':
            groups = group_for_accordion(blocks, store.split_points(component, ids))
            return templates.accordion(self._sections(groups, join_content_blocks_as_html, True))

        if component == 'carousel':
            groups = group_for_carousel(blocks, store.split_points(component, ids))
            return templates.carousel(self._sections(groups, join_content_blocks, True),
                                      f'carousel-{_run_digest(blocks)}')

        if component == 'tabs':
            groups = group_for_tabs(blocks, store.split_points(component, ids))
            return templates.tabs(self._sections(groups, join_content_blocks, False),
                                  f'tab-{_run_digest(blocks)}')

        if component == 'stylizedContentBox':
            return self.render_stylised_box(blocks, store.split_points(component, ids))

        logger.warning("Unknown component %s, passing content through", component)
        return '\n'.join(block.content for block in blocks)

    @staticmethod
    def _icon_options(customisation: IconCustomisation) -> Dict[str, str]:
        return {'icon': customisation.icon, 'colour': customisation.colour}

    @staticmethod
    def list_items(blocks: List[ContentBlock]) -> List[str]:
        """Cleaned item markup: one per block, or split from a single block"""
        if len(blocks) > 1:
            items = (clean_list_item_content(strip_html_keep_formatting(block.content))
                     for block in blocks)
            return [item for item in items if item]
        return extract_list_items(blocks[0].content)

    def render_list(self, component: str, blocks: List[ContentBlock], indent_levels: Dict[str, int]) -> str:
        """Render a bullet, alpha or numeric list, nested when any item is indented"""
        if len(blocks) > 1:
            pairs = [(clean_list_item_content(strip_html_keep_formatting(block.content)),
                      indent_levels.get(block.id, 0)) for block in blocks]
        else:
            first_level = indent_levels.get(blocks[0].id, 0)
            pairs = [(item, first_level if position == 0 else 0)
                     for position, item in enumerate(extract_list_items(blocks[0].content))]

        pairs = [(item, level) for item, level in pairs if item]
        items = [item for item, _ in pairs]

        if any(level > 0 for _, level in pairs):
            return build_nested_list(component, items, [level for _, level in pairs])
        return templates.flat_list(component, items)

    def render_box(self, component: str, blocks: List[ContentBlock]) -> str:
        """Render a callout box, titled when the run opens with a short heading"""
        first_text = strip_html(blocks[0].content).strip()
        first_is_heading = (blocks[0].type == 'heading'
                            or (len(first_text) < MAX_BOX_TITLE_LENGTH
                                and '.' not in first_text and len(blocks) > 1))
        has_list = contains_list_markup(blocks)

        def join(subset: List[ContentBlock], separator: str) -> str:
            if has_list:
                return join_content_blocks_preserve_html(subset)
            return separator.join(strip_html_keep_formatting(block.content) for block in subset)

        if len(blocks) > 1 and first_is_heading:
            return templates.box(component, _escape(first_text),
                                 join(blocks[1:], templates.TITLED_PARAGRAPH_BREAK))
        return templates.box(component, None, join(blocks, '<br>'))

    @staticmethod
    def _group_body(group: Group, joiner, preserve_formatting: bool) -> str:
        if contains_list_markup(group.content):
            return join_content_blocks_preserve_html(group.content)
        return joiner(group.content, preserve_formatting)

    def _sections(self, groups: List[Group], joiner, preserve_formatting: bool) -> List[templates.SectionItem]:
        return [templates.SectionItem(title=_escape(strip_html(group.title).strip()),
                                      content=self._group_body(group, joiner, preserve_formatting))
                for group in groups]

    def render_stylised_box(self, blocks: List[ContentBlock], split_points: Optional[List[int]]) -> str:
        """Render card columns; a leading title-only group becomes the overall title"""
        groups = group_for_stylised_box(blocks, split_points)
        title = None
        if len(groups) > 1 and groups[0].title and not groups[0].content:
            title = _escape(strip_html(groups[0].title).strip())
            groups = groups[1:]
        return templates.stylized_content_box(self._sections(groups, join_content_blocks, False), title)

    def generate_from_json_data(self, data_path: str, output_path: str = "output.html",
                                progress: Optional[ProgressCallback] = None) -> RenderResult:
        """
        Generate HTML from a render-job document

        Args:
            data_path: Path to the render-job JSON file
            output_path: Path for the output HTML file
            progress: Called with a stage name and details as the job advances
        """
        report = progress or (lambda stage, details: None)
        logger.info("Generating HTML from %s", data_path)

        document = DocumentParser(data_path).parse()
        state = self.editor.paste(EditorState(), document.payload)

        if not state.blocks:
            logger.warning("No content blocks found in %s, writing an empty fragment", data_path)

        logger.info("Found %d block(s) to process", len(state.blocks))
        report('parsed', {'blockCount': len(state.blocks)})

        for assignment in document.components:
            out_of_range = [i for i in assignment.blocks if not 0 <= i < len(state.blocks)]
            if out_of_range:
                raise ValueError(f"Block indices out of range for {assignment.component}: {out_of_range}")

            ids = [state.blocks[i].id for i in assignment.blocks]
            indent_levels = None
            if assignment.indent_levels is not None:
                indent_levels = {state.blocks[i].id: level
                                 for i, level in assignment.indent_levels.items()
                                 if 0 <= i < len(state.blocks)}

            state = self.editor.apply_component(
                state, assignment.component, target_ids=ids,
                split_points=assignment.split_points,
                indent_levels=indent_levels,
                customisation=assignment.customisation
            )

        components: Dict[str, int] = {}
        for block in state.blocks:
            if block.component:
                components[block.component] = components.get(block.component, 0) + 1
        report('componentsApplied', {'components': components})

        markup = self.generate(state.blocks, state.split_points)
        Path(output_path).write_text(markup, encoding='utf-8')
        report('rendered', {'outputBytes': len(markup.encode('utf-8'))})

        stats = self.readability.analyze(state.blocks)
        suggestions = self.classifier.classify(state.blocks)

        logger.info("HTML saved to: %s", output_path)
        logger.info("Components applied: %d", sum(components.values()))

        return RenderResult(output_path=str(output_path), block_count=len(state.blocks),
                            suggestions=suggestions, stats=stats, components=components)
