"""
Lightweight Markdown Renderer

Converts the small Markdown subset used in question text to HTML:
headings (1-6), fenced and inline code, blockquotes, horizontal rules,
unordered and ordered lists, bold, italic, strikethrough and links.

Pass order matters:
1. Fenced code blocks are cut out first so nothing rewrites their content
2. Block constructs (headings, blockquote, hr, list items) per line
3. Consecutive list items are wrapped into a single <ul>/<ol>
4. Inline code is cut out, then bold before italic so ** is consumed first
5. Links

Nested structures (lists inside blockquotes, nested lists) are not supported.
"""

import re
import html
from typing import Dict, List

_FENCED_CODE = re.compile(r'```[^\n`]*\n?(.*?)```', re.DOTALL)
_INLINE_CODE = re.compile(r'`([^`\n]+)`')
_HEADING = re.compile(r'^(#{1,6}) (.*)$')
_BLOCKQUOTE = re.compile(r'^> (.*)$')
_HR = re.compile(r'^---$')
_UNORDERED_ITEM = re.compile(r'^- (.*)$')
_ORDERED_ITEM = re.compile(r'^\d+\. (.*)$')
_BOLD = re.compile(r'\*\*([^*]+)\*\*')
_ITALIC = re.compile(r'\*([^*\n]+)\*')
_STRIKE = re.compile(r'~~([^~]+)~~')
_LINK = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')

# STX is stripped from the input; NUL belongs to the math placeholders passing through
_PLACEHOLDER = '\x02MD{}\x02'
_PLACEHOLDER_PATTERN = re.compile('\x02MD(\\d+)\x02')


class _Stash:
    """Holds rendered fragments behind placeholders until the final pass."""

    def __init__(self):
        self._items: Dict[int, str] = {}

    def put(self, fragment: str) -> str:
        key = len(self._items)
        self._items[key] = fragment
        return _PLACEHOLDER.format(key)

    def restore(self, text: str) -> str:
        return _PLACEHOLDER_PATTERN.sub(
            lambda m: self._items.get(int(m.group(1)), m.group(0)), text
        )


def _render_block_line(line: str) -> str:
    heading = _HEADING.match(line)
    if heading:
        level = len(heading.group(1))
        return f'<h{level}>{heading.group(2)}</h{level}>'

    quote = _BLOCKQUOTE.match(line)
    if quote:
        return f'<blockquote>{quote.group(1)}</blockquote>'

    if _HR.match(line):
        return '<hr>'

    return line


def _render_blocks(text: str) -> str:
    """Per-line block constructs plus list grouping."""
    output: List[str] = []
    list_tag = None

    for line in text.split('\n'):
        unordered = _UNORDERED_ITEM.match(line)
        ordered = None if unordered else _ORDERED_ITEM.match(line)
        item = unordered or ordered

        if item:
            tag = 'ul' if unordered else 'ol'
            if list_tag != tag:
                if list_tag:
                    output[-1] += f'</{list_tag}>'
                output.append(f'<{tag}><li>{item.group(1)}</li>')
                list_tag = tag
            else:
                output[-1] += f'<li>{item.group(1)}</li>'
            continue

        if list_tag:
            output[-1] += f'</{list_tag}>'
            list_tag = None
        output.append(_render_block_line(line))

    if list_tag:
        output[-1] += f'</{list_tag}>'

    return '\n'.join(output)


def _render_inline(text: str, stash: _Stash) -> str:
    text = _INLINE_CODE.sub(
        lambda m: stash.put(f'<code>{html.escape(m.group(1), quote=False)}</code>'),
        text
    )
    text = _BOLD.sub(r'<strong>\1</strong>', text)
    text = _ITALIC.sub(r'<em>\1</em>', text)
    text = _STRIKE.sub(r'<del>\1</del>', text)
    text = _LINK.sub(
        r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>',
        text
    )
    return text


def render_markdown(text) -> str:
    """
    Render the supported Markdown subset to HTML.

    Args:
        text: Markdown source; None/non-str gives ""

    Returns:
        HTML string
    """
    if not isinstance(text, str) or not text:
        return ''

    text = text.replace('\x02', '')
    stash = _Stash()
    text = _FENCED_CODE.sub(
        lambda m: stash.put(
            f'<pre><code>{html.escape(m.group(1), quote=False)}</code></pre>'
        ),
        text
    )
    text = _render_blocks(text)
    text = _render_inline(text, stash)
    return stash.restore(text)
