"""
Attribute extraction for open component tags.
Collects the attribute names already typed inside a tag so they are not suggested again.
"""

from __future__ import annotations

import re

# Either a quoted value (skipped) or an attribute name followed by ="/=' or a boundary.
# The lookbehind keeps the match at the start of a token, so unquoted values
# such as the `foo` in `size=foo` are not mistaken for attributes.
_re_attribute_token = re.compile(
    r"""
    "[^"]*"?
    | '[^']*'?
    | (?<![\w\-:.@=$])
      [:@]?
      (?P<name>[a-z][a-z0-9\-:.]*)
      (?==["']|[\s/>]|$)
    """,
    re.IGNORECASE | re.VERBOSE,
)
_re_tag_name = re.compile(r"^<[^\s/>]*")


def extract_attributes(tag_text: str) -> frozenset[str]:
    """Extract the lower-cased attribute names present in a tag.

    Handles plain (``disabled``), valued (``name="x"``), bound (``:options``),
    event (``@click``) and namespaced (``wire:model.live``) attributes. Leading
    ``:``/``@`` sigils are stripped.

    Args:
        tag_text: Text of the tag from ``<`` up to the cursor. A text that does
            not start with ``<`` is treated as a bare attribute list.

    Returns:
        Set of attribute names.
    """
    # Skip the tag name itself, e.g. "<flux:button"
    start = 0
    tag_name_match = _re_tag_name.match(tag_text)
    if tag_name_match:
        start = tag_name_match.end()

    names = set()
    for match in _re_attribute_token.finditer(tag_text, start):
        name = match.group("name")
        if name:
            names.add(name.lower())
    return frozenset(names)
