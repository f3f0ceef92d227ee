"""
Core module for the content designer.
"""
from .generator import HtmlGenerator, RenderResult, build_nested_list
from .data_parser import DocumentParser
from .normalizer import TextNormalizer, HtmlSanitizer
from .block_parser import BlockParser
from .classifier import ContentClassifier, classify_content
from .editor import ContentEditor, change_indent, render_editor_markup
from .readability import ReadabilityAnalyzer, ReadabilityStats

from .models import (
    ContentBlock, Group, EditorState, ClipboardPayload, IconCustomisation,
    SplitPointStore, ComponentRunKey, IndentKey, CustomisationKey,
    ComponentSpec, ComponentAssignment, RenderDocument, COMPONENT_REGISTRY
)

from .grouper import (
    group_for_tabs, group_for_carousel, group_for_accordion, group_for_stylised_box,
    auto_detect_split_points
)

from .heuristics import ListMarker, analyze_list_marker, should_be_heading

__all__ = [
    'HtmlGenerator',
    'RenderResult',
    'DocumentParser',
    'TextNormalizer',
    'HtmlSanitizer',
    'BlockParser',
    'ContentClassifier',
    'ContentEditor',
    'ReadabilityAnalyzer',

    # Data classes
    'ContentBlock', 'Group', 'EditorState', 'ClipboardPayload', 'IconCustomisation',
    'SplitPointStore', 'ComponentRunKey', 'IndentKey', 'CustomisationKey',
    'ComponentSpec', 'ComponentAssignment', 'RenderDocument', 'COMPONENT_REGISTRY',
    'ReadabilityStats', 'ListMarker',

    'group_for_tabs', 'group_for_carousel', 'group_for_accordion', 'group_for_stylised_box',
    'auto_detect_split_points',

    'analyze_list_marker', 'should_be_heading', 'classify_content',
    'change_indent', 'render_editor_markup', 'build_nested_list',
]
