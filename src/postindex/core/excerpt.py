"""Post excerpts: the first paragraph of a markdown body"""

from markdown_it import MarkdownIt


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def excerpt(body: str, parser_config: str = 'gfm-like') -> str:
    """Return the plain text of the first paragraph in body, or '' if there is none."""
    tokens = _make_parser(parser_config).parse(body)
    for i, tok in enumerate(tokens):
        if tok.type != 'paragraph_open':
            continue
        inline = tokens[i + 1]
        parts = []
        for child in inline.children or []:
            if child.type in ('text', 'code_inline'):
                parts.append(child.content)
            elif child.type in ('softbreak', 'hardbreak'):
                parts.append(' ')
        return ''.join(parts).strip()
    return ''
