"""
Data models for the content designer pipeline.

This module contains the dataclasses used to represent content blocks,
component groups, the split-point store and its typed keys, the component
catalogue, editor state and render-job documents.
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Tuple, Union


BLOCK_TYPES = ('paragraph', 'heading', 'list')
LIST_TYPES = ('bulletList', 'alphaList', 'numericList')


def new_block_id() -> str:
    """Mint a fresh unique block id"""
    return str(uuid.uuid4())


@dataclass
class ContentBlock:
    """Represents one semantic unit of authored content"""
    id: str
    type: str = 'paragraph'
    content: str = ""
    list_type: Optional[str] = None
    component: Optional[str] = None

    @classmethod
    def create(cls, content: str, block_type: str = 'paragraph', **kwargs) -> 'ContentBlock':
        """Create a block with a freshly minted id"""
        return cls(id=new_block_id(), type=block_type, content=content, **kwargs)

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'ContentBlock':
        """Create block from a camelCase mapping"""
        return cls(
            id=data.get('id') or new_block_id(),
            type=data.get('type', 'paragraph'),
            content=data.get('content', ''),
            list_type=data.get('listType'),
            component=data.get('component')
        )

    def to_data(self) -> Dict[str, Any]:
        """Serialise block to a camelCase mapping"""
        data = {
            'id': self.id,
            'type': self.type,
            'content': self.content,
            'component': self.component,
        }
        if self.list_type:
            data['listType'] = self.list_type
        return data


@dataclass
class Group:
    """A sub-group (tab, slide, section or column) of a block run"""
    title: str = ""
    content: List[ContentBlock] = field(default_factory=list)


@dataclass(frozen=True)
class IconCustomisation:
    """Icon glyph and colour chosen for an icon list"""
    icon: str = 'circle-check'
    colour: str = '#198754'

    @classmethod
    def from_data(cls, data: Optional[Dict[str, Any]]) -> 'IconCustomisation':
        """Create customisation from a mapping, filling defaults"""
        data = data or {}
        return cls(
            icon=data.get('icon') or 'circle-check',
            colour=data.get('colour') or data.get('color') or '#198754'
        )


@dataclass(frozen=True)
class ComponentRunKey:
    """Key for split indices stored against a component run"""
    component: str
    block_ids: Tuple[str, ...]
    prefix = ''

    def references(self, block_id: str) -> bool:
        """Whether this key mentions the given block id"""
        return block_id in self.block_ids

    def as_string(self) -> str:
        """External string form of the key"""
        parts = [self.component, *self.block_ids]
        if self.prefix:
            parts.insert(0, self.prefix)
        return '-'.join(parts)


@dataclass(frozen=True)
class IndentKey(ComponentRunKey):
    """Key for per-block indentation levels of a list run"""
    prefix = 'indent'


@dataclass(frozen=True)
class CustomisationKey(ComponentRunKey):
    """Key for the customisation record of a run"""
    prefix = 'customisation'


SplitKey = Union[ComponentRunKey, IndentKey, CustomisationKey]
SplitValue = Union[List[int], Dict[str, int], IconCustomisation]


class SplitPointStore:
    """Key-value store for split points, indentation levels and customisation"""

    def __init__(self, entries: Optional[Dict[SplitKey, SplitValue]] = None):
        self._entries: Dict[SplitKey, SplitValue] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: SplitKey) -> bool:
        return key in self._entries

    def __eq__(self, other) -> bool:
        if not isinstance(other, SplitPointStore):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"SplitPointStore({self.to_dict()!r})"

    def get(self, key: SplitKey, default=None):
        """Return the value stored under key"""
        return self._entries.get(key, default)

    def split_points(self, component: str, block_ids) -> Optional[List[int]]:
        """Split indices stored for an exact component run"""
        return self._entries.get(ComponentRunKey(component, tuple(block_ids)))

    def indent_levels(self, component: str, block_ids) -> Dict[str, int]:
        """Indentation levels stored for an exact list run"""
        return self._entries.get(IndentKey(component, tuple(block_ids))) or {}

    def customisation(self, component: str, block_ids) -> IconCustomisation:
        """Customisation stored for an exact run, or the defaults"""
        return self._entries.get(CustomisationKey(component, tuple(block_ids))) or IconCustomisation()

    def set(self, key: SplitKey, value: SplitValue) -> 'SplitPointStore':
        """Return a copy with key set to value"""
        entries = dict(self._entries)
        entries[key] = value
        return SplitPointStore(entries)

    def prune(self, existing_ids) -> 'SplitPointStore':
        """Return a copy without entries referencing vanished block ids"""
        existing = set(existing_ids)
        return SplitPointStore({
            key: value for key, value in self._entries.items()
            if all(block_id in existing for block_id in key.block_ids)
        })

    def without_block(self, block_id: str) -> 'SplitPointStore':
        """Return a copy without entries whose key references block_id"""
        return SplitPointStore({
            key: value for key, value in self._entries.items()
            if not key.references(block_id)
        })

    def items(self):
        return self._entries.items()

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to the external string-keyed form"""
        result = {}
        for key, value in self._entries.items():
            if isinstance(value, IconCustomisation):
                value = {'icon': value.icon, 'colour': value.colour}
            result[key.as_string()] = value
        return result


@dataclass(frozen=True)
class ComponentSpec:
    """Catalogue entry for a design component"""
    id: str
    name: str
    description: str
    single_block: bool = True
    multi_block: bool = True
    smart_grouping: bool = False
    supports_indent: bool = False
    supports_customisation: bool = False


COMPONENT_REGISTRY: Dict[str, ComponentSpec] = {spec.id: spec for spec in (
    ComponentSpec('moduleTitle', 'Module Title', 'Large centred title for modules',
                  multi_block=False),
    ComponentSpec('heading', 'Styled Heading', 'Formatted heading with proper styling',
                  multi_block=False),
    ComponentSpec('learningObjectives', 'Learning Outcomes', 'Numbered list of learning outcomes',
                  single_block=False),
    ComponentSpec('infoBox', 'Info Box', 'Highlighted information callout'),
    ComponentSpec('summaryBox', 'Summary Box', 'Key points summary callout'),
    ComponentSpec('exerciseBox', 'Exercise Box', 'Activity or question callout'),
    ComponentSpec('resourceBox', 'Resource Box', 'Links and further reading callout'),
    ComponentSpec('iconList', 'Icon List', 'List with a custom icon per item',
                  supports_customisation=True),
    ComponentSpec('numberedList', 'Numbered List', 'Circled number list for steps'),
    ComponentSpec('bulletList', 'Bullet List', 'Standard bulleted list',
                  supports_indent=True),
    ComponentSpec('alphaList', 'Alpha List', 'Lettered list (a, b, c)',
                  supports_indent=True),
    ComponentSpec('numericList', 'Numeric List', 'Numbered list (1, 2, 3)',
                  supports_indent=True),
    ComponentSpec('accordion', 'Accordion', 'Collapsible sections',
                  single_block=False, smart_grouping=True),
    ComponentSpec('carousel', 'Carousel', 'Slides with navigation controls',
                  single_block=False, smart_grouping=True),
    ComponentSpec('tabs', 'Tabs', 'Tabbed panels',
                  single_block=False, smart_grouping=True),
    ComponentSpec('stylizedContentBox', 'Stylised Content Box', 'Card columns in a shaded box',
                  single_block=False, smart_grouping=True),
    ComponentSpec('textColumns', 'Text Columns', 'Multi-column flowing text',
                  single_block=False),
)}


def is_multi_block_component(component: Optional[str]) -> bool:
    """Whether a component consumes runs of consecutive blocks"""
    spec = COMPONENT_REGISTRY.get(component or '')
    return bool(spec and spec.multi_block)


@dataclass
class EditorState:
    """Snapshot of one editing session"""
    blocks: List[ContentBlock] = field(default_factory=list)
    split_points: SplitPointStore = field(default_factory=SplitPointStore)
    selected_ids: List[str] = field(default_factory=list)
    cursor_block_id: Optional[str] = None

    def block_ids(self) -> List[str]:
        """Ids of the active block sequence in order"""
        return [block.id for block in self.blocks]

    def find(self, block_id: str) -> Optional[ContentBlock]:
        """Return the block with the given id"""
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None


@dataclass
class ClipboardPayload:
    """Clipboard data offered by the editing surface"""
    html: Optional[str] = None
    plain_text: Optional[str] = None

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'ClipboardPayload':
        """Create payload from a camelCase mapping"""
        return cls(html=data.get('html'), plain_text=data.get('plainText'))


@dataclass
class ComponentAssignment:
    """One apply-component request inside a render document"""
    component: str
    blocks: List[int] = field(default_factory=list)
    split_points: Optional[List[int]] = None
    indent_levels: Optional[Dict[int, int]] = None
    customisation: Optional[IconCustomisation] = None

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'ComponentAssignment':
        """Create assignment from parsed JSON data"""
        component = data.get('component')
        if not component:
            raise ValueError("Component assignment is missing 'component'")

        indices = data.get('blocks', [])
        if not isinstance(indices, list) or not all(isinstance(i, int) for i in indices):
            raise ValueError(f"Assignment for {component} must list integer block indices")

        assignment = cls(component=component, blocks=indices)

        try:
            if data.get('splitPoints') is not None:
                assignment.split_points = [int(i) for i in data['splitPoints']]

            if data.get('indentLevels') is not None:
                assignment.indent_levels = {
                    int(index): int(level) for index, level in data['indentLevels'].items()
                }

            if data.get('customisation') is not None:
                assignment.customisation = IconCustomisation.from_data(data['customisation'])
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed parameters for {component}: {e}") from e

        return assignment


@dataclass
class RenderDocument:
    """A render job: raw content plus component assignments"""
    payload: ClipboardPayload
    components: List[ComponentAssignment] = field(default_factory=list)

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'RenderDocument':
        """Create document from parsed JSON data"""
        if not isinstance(data, dict):
            raise ValueError("Render document must be a JSON object")

        payload = ClipboardPayload.from_data(data)
        if not payload.html and not payload.plain_text:
            raise ValueError("Render document needs 'html' or 'plainText'")

        components = data.get('components') or []
        if not isinstance(components, list) or not all(isinstance(c, dict) for c in components):
            raise ValueError("'components' must be a list of objects")

        return cls(
            payload=payload,
            components=[ComponentAssignment.from_data(item) for item in components]
        )
