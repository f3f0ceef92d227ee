"""
Fixed HTML template catalogue for design components.

Every argument is expected to be HTML-safe already; callers escape plain text.
The markup assumes the Font Awesome icon font and Bootstrap's carousel and tab
behaviour are available on the host page.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

HEADING_COLOUR = '#1f4040'
DEFAULT_ICON = 'circle-check'
DEFAULT_ICON_COLOUR = '#198754'

ICON_OPTIONS = ('circle-check', 'circle-xmark', 'arrow-right', 'star', 'circle-question',
                'link', 'flag', 'map-pin', 'info-circle')

COLOUR_NAMES: Dict[str, str] = {
    'blue': '#0066cc',
    'light blue': '#4a90e2',
    'dark blue': '#003d7a',
    'green': '#198754',
    'red': '#dc3545',
    'orange': '#fd7e14',
    'yellow': '#ffc107',
    'purple': '#6f42c1',
    'pink': '#e91e63',
    'teal': '#20c997',
    'cyan': '#17a2b8',
    'indigo': '#6610f2',
    'brown': '#795548',
    'grey': '#6c757d',
    'gray': '#6c757d',
    'black': '#212529',
    'gold': '#b8860b',
    'silver': '#6c757d',
    'bronze': '#cd7f32',
}

_HEX_COLOUR_RE = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_ICON_NAME_RE = re.compile(r'^[a-z0-9-]+$')


@dataclass(frozen=True)
class BoxStyle:
    """Accent colour, text colour and icon of a callout box"""
    accent: str
    icon: str
    titleless_text: str = 'white'
    titleless_background: Optional[str] = None


BOX_STYLES: Dict[str, BoxStyle] = {
    'infoBox': BoxStyle(accent='#586fb5', icon='fa-info-circle'),
    'summaryBox': BoxStyle(accent='#1f4040', icon='fa-list-check',
                           titleless_text='#1f4040', titleless_background='#f6f6f4'),
    'exerciseBox': BoxStyle(accent='#a85b8b', icon='fa-question-circle'),
    'resourceBox': BoxStyle(accent='#109294', icon='fa-link'),
}

TITLED_PARAGRAPH_BREAK = '</p><p style="margin-top:0.618rem;margin-bottom:0px;">'


@dataclass
class SectionItem:
    """Title and body of one accordion section, slide, tab or card"""
    title: str = ""
    content: str = ""


def module_title(title: str) -> str:
    return f"""
<h2 style="text-transform: none; line-height: 1.25; margin-bottom: 1.618rem; color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif; text-align: center;">
  {title}
</h2>"""


HEADING_STYLES = {
    'h3': f'text-transform: none; margin-top: 1.618rem; margin-bottom: 1.618rem; color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif;',
    'h4': f'text-transform: none; margin-top: 1.382rem; margin-bottom: 1.382rem; color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif;',
}


def heading(text: str, level: str = 'h3') -> str:
    if level not in HEADING_STYLES:
        level = 'h3'
    return f'<{level} style="{HEADING_STYLES[level]}">{text}</{level}>'


def _numbered_item(number: int, item: str) -> str:
    return f"""
  <li style="list-style: none; margin-bottom: 0.9rem; padding-left: 36px; position: relative;">
    <span style="position: absolute; left: 0px; top: -2px; line-height: 0px; background: {HEADING_COLOUR}; border-radius: 50%;">
      <span style="color: white; font-weight: bold; font-size: 90%; display: inline-block; padding: 50% 9px;">{number}</span>
    </span>
    {item}
  </li>"""


def learning_objectives(title: str, sub_heading: str, objectives: List[str]) -> str:
    objectives_list = ''.join(_numbered_item(i, item) for i, item in enumerate(objectives, start=1))

    return f"""
    <div>
      <h3 style="text-transform: none; margin-bottom: 1rem; color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif;">
        {title}
      </h3>
      <p style="text-transform: none; margin-top: 0rem; color: {HEADING_COLOUR}; font-size:1.382rem; font-family: fields, Georgia, sans-serif;">
        {sub_heading}
      </p>
      <ol style="padding-left: 0px; margin-top: 1.382rem; margin-bottom: 1.618rem;">
        {objectives_list}
      </ol>
    </div>
  """


def box(component: str, title: Optional[str], content: str) -> str:
    """Callout box; titled and titleless variants use different layouts"""
    style = BOX_STYLES[component]
    if title:
        return f"""
        <div style="background:#f6f6f4;color:#494946;border-radius:2px;padding:0;margin:1.236rem 0;">
          <h4 style="font-family: inherit; font-weight: 500; color:white;font-size:1.118rem;line-height:1.118rem;text-transform:none;border-radius:0;border-top-right-radius:2px;border-top-left-radius:2px;background:{style.accent};margin:0;padding:1.146rem;">
            <i class="fa {style.icon} fa-2x" style="font-size:1.118rem;line-height:1.118rem;"></i>&nbsp; {title}
          </h4>
          <div style="padding:1.146rem;background:#f6f6f4;border-radius:2px;">
            <p style="margin-top:0;padding-top:0;margin-bottom:0;padding-bottom:0;">{content}</p>
          </div>
        </div>
      """

    background = style.titleless_background or style.accent
    return f"""
        <div style="margin: 1.618rem 0; padding: 1.618rem; border-radius: 2px; color: {style.titleless_text}; background: {background}; text-align: center; font-weight: bold;">
          <i class="fa {style.icon} fa-2x" style="margin-bottom: 0.764rem; color: {style.titleless_text}; display: block;"></i>
          <p style="margin: 0;">{content}</p>
        </div>
      """


def text_columns(content: str) -> str:
    return f"""
<article style="column-count: auto; column-width: 460px; column-gap: 2.618rem; margin: 1rem 0; column-rule: 1px solid #f6f4f4;">
  {content}
</article>"""


def numbered_list(items: List[str]) -> str:
    entries = ''.join(_numbered_item(i, item) for i, item in enumerate(items, start=1))
    return f"""
<ol style="padding-left: 0px; margin-top: 1.2rem; margin-bottom: 1.382rem;">
  {entries}
</ol>"""


LIST_OPEN_TAGS = {
    'bulletList': '<ul style="margin-top: 1rem;">',
    'alphaList': '<ol type="a" style="margin-top: 1rem;">',
    'numericList': '<ol style="margin-top: 1rem;">',
}
NESTED_LIST_OPEN_TAGS = {
    'bulletList': '<ul style="margin-top: 0.5rem; margin-bottom: 0.5rem;">',
    'alphaList': '<ol type="a" style="margin-top: 0.5rem; margin-bottom: 0.5rem;">',
    'numericList': '<ol style="margin-top: 0.5rem; margin-bottom: 0.5rem;">',
}


def list_close_tag(list_type: str) -> str:
    return '</ul>' if list_type == 'bulletList' else '</ol>'


def flat_list(list_type: str, items: List[str]) -> str:
    entries = ''.join(f'<li>{item}</li>' for item in items)
    return f"""
{LIST_OPEN_TAGS[list_type]}
  {entries}
{list_close_tag(list_type)}"""


def ensure_colour_contrast(colour: Optional[str]) -> str:
    """Map colour names to accessible hex values, defaulting to green"""
    if not colour:
        return DEFAULT_ICON_COLOUR

    named = COLOUR_NAMES.get(colour.strip().lower())
    if named:
        return named

    # hex colours are assumed dark enough for a white background
    if _HEX_COLOUR_RE.match(colour.strip()):
        return colour.strip()

    return DEFAULT_ICON_COLOUR


def icon_list(items: List[str], icon: str = DEFAULT_ICON, colour: str = DEFAULT_ICON_COLOUR) -> str:
    safe_colour = ensure_colour_contrast(colour)
    safe_icon = icon if icon and _ICON_NAME_RE.match(icon) else DEFAULT_ICON
    entries = ''.join(f"""
  <li style="list-style: none; margin-bottom: 0.618rem; padding-left: 36px; position: relative;">
    <i class="fa fa-{safe_icon}" style="position: absolute; left: 0px; top: 2px; color: {safe_colour}; font-size: 20px;"></i>
    {item}
  </li>""" for item in items)

    return f"""
<ul style="padding-left: 0px; margin-top: 1rem;">
  {entries}
</ul>"""


def accordion(items: List[SectionItem]) -> str:
    sections = ''.join(f"""
  <details {'open' if i == 0 else ''} style="border-bottom: 2px solid white;">
    <summary style="cursor: pointer; font-weight: 700; color: {HEADING_COLOUR}; background: rgba(31,64,64,0.2); padding: 1rem; padding-left: 1.146rem; border-radius: 0px; border-top-right-radius: 2px; border-top-left-radius: 2px;">
      {item.title}
    </summary>
    <div style="padding: 1rem; background: #f6f6f4; border-radius: 0px; border-bottom-right-radius: 2px; border-bottom-left-radius: 2px;">
      {item.content}
    </div>
  </details>""" for i, item in enumerate(items))

    return f"""
<div style="margin-bottom: 1.618rem;">
  {sections}
</div>"""


def carousel(items: List[SectionItem], carousel_id: str) -> str:
    indicators = ''.join(f"""
    <li {'class="active"' if i == 0 else ''} style="background-color: {HEADING_COLOUR}; width: 12px; height: 12px; border-radius: 50%;" data-target="#{carousel_id}" data-slide-to="{i}"></li>"""
                         for i in range(len(items)))

    slides = ''
    for i, item in enumerate(items):
        title = ''
        if item.title:
            title = f"""<h4 style="text-transform: none; margin: 0 0 1rem 0; color: {HEADING_COLOUR}; font-family: Georgia, serif; font-size: 1.2rem;">
          {item.title}
        </h4>"""
        slides += f"""
    <div class="carousel-item {'active' if i == 0 else ''}" style="padding: 1.618rem 5.382rem 4rem 5.382rem; background: #f6f6f4; border-radius: 3px;">
      <div>
        {title}
        <p style="margin: 0; line-height: 1.7; font-size: 0.95em;">
          {item.content}
        </p>
      </div>
    </div>"""

    return f"""
<div id="{carousel_id}" class="carousel slide" style="margin-top: 1.618rem; margin-bottom: 1.618rem;" data-ride="carousel" data-interval="false">
  <ol class="carousel-indicators" style="bottom: 0rem;">
    {indicators}
  </ol>

  <div class="carousel-inner">
    {slides}
  </div>

  <a class="carousel-control-prev" style="position: absolute; top: 50%; left: 1rem; transform: translateY(-50%); z-index: 5; text-decoration: none; width: 3rem; height: 3rem; display: flex; align-items: center; justify-content: center;" role="button" href="#{carousel_id}" data-slide="prev">
    <i class="fas fa-chevron-left" style="background-color: {HEADING_COLOUR}; color: #ffffff; border-radius: 50%; width: 2.5rem; height: 2.5rem; display: flex; align-items: center; justify-content: center; font-size: 1.2rem;"></i>
    <span class="sr-only">Previous</span>
  </a>

  <a class="carousel-control-next" style="position: absolute; top: 50%; right: 1rem; transform: translateY(-50%); z-index: 5; text-decoration: none; width: 3rem; height: 3rem; display: flex; align-items: center; justify-content: center;" role="button" href="#{carousel_id}" data-slide="next">
    <i class="fas fa-chevron-right" style="background-color: {HEADING_COLOUR}; color: #ffffff; border-radius: 50%; width: 2.5rem; height: 2.5rem; display: flex; align-items: center; justify-content: center; font-size: 1.2rem;"></i>
    <span class="sr-only">Next</span>
  </a>
</div>"""


def tabs(items: List[SectionItem], tab_id: str) -> str:
    buttons = ''.join(f"""
  <li class="nav-item" role="presentation">
    <button id="{tab_id}-{i}-tab" class="nav-link {'active' if i == 0 else ''}" role="tab" type="button" data-toggle="tab" data-target="#{tab_id}-{i}" aria-controls="{tab_id}-{i}" aria-selected="{'true' if i == 0 else 'false'}" style="border-top-left-radius: 3px; border-top-right-radius: 3px; color: {HEADING_COLOUR};">{item.title or f'Tab {i + 1}'}</button>
  </li>""" for i, item in enumerate(items))

    panels = ''.join(f"""
  <div id="{tab_id}-{i}" class="tab-pane {'active' if i == 0 else ''}" role="tabpanel" aria-labelledby="{tab_id}-{i}-tab" style="padding: 0.618rem;">{item.content or ''}</div>"""
                     for i, item in enumerate(items))

    return (f'<ul id="{tab_id}" class="nav nav-tabs" role="tablist" style="background: #f6f6f4; '
            f'border-top-left-radius: 3px; border-top-right-radius: 3px;">{buttons}</ul>\n'
            f'<div class="tab-content" style="margin-bottom: 1.618rem; border: 1px solid #dee2e6; '
            f'border-top: 0px; border-bottom-left-radius: 3px; border-bottom-right-radius: 3px;">{panels}</div>')


def stylized_content_box(items: List[SectionItem], title: Optional[str] = None) -> str:
    heading_markup = ''
    if title:
        heading_markup = (f'<h4 style="text-transform: none; margin-top: 1rem; margin-bottom: 0.5rem; '
                          f'color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif;">{title}</h4>')

    cards = ''
    for item in items:
        card_title = ''
        if item.title and item.title.strip():
            card_title = f"""
    <h4 style="text-transform: none; margin: 0 0 1rem 0; color: {HEADING_COLOUR}; font-family: fields, Georgia, sans-serif;">{item.title}</h4>"""
        card_body = ''
        if item.content:
            card_body = f"""
    <p style="margin: 0; line-height: 1.7; font-size: 0.95em;">{item.content}</p>"""
        cards += f"""
  <div style="flex: 1; min-width: 280px;">{card_title}{card_body}
  </div>"""

    return (f'{heading_markup}\n<div style="margin: 1.618rem 0; padding: 1.618rem; border-radius: 2px; '
            f'color: {HEADING_COLOUR}; background: #f6f6f4; display: flex; flex-wrap: wrap; gap: 2rem;">'
            f'{cards}</div>')
