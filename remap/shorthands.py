from __future__ import annotations

# Properties whose value is a space separated list of longhand values.
SHORTHAND_PROPERTIES = frozenset({
    'all', 'animation', 'background', 'border', 'border-block', 'border-block-color',
    'border-block-end', 'border-block-start', 'border-block-style', 'border-block-width',
    'border-bottom', 'border-color', 'border-image', 'border-inline', 'border-inline-color',
    'border-inline-end', 'border-inline-start', 'border-inline-style', 'border-inline-width',
    'border-left', 'border-radius', 'border-right', 'border-style', 'border-top',
    'border-width', 'column-rule', 'columns', 'flex', 'flex-flow', 'font', 'gap', 'grid',
    'grid-area', 'grid-column', 'grid-gap', 'grid-row', 'grid-template', 'inset',
    'list-style', 'margin', 'mask', 'mask-border', 'offset', 'outline', 'overflow',
    'padding', 'place-content', 'place-items', 'place-self', 'scroll-margin',
    'scroll-padding', 'text-decoration', 'text-emphasis', 'transition',
})


def is_shorthand(prop: str) -> bool:
    return (prop or '').strip().lower() in SHORTHAND_PROPERTIES
