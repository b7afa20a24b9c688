"""
schemadoc JSON-LD Renderer

This module turns a DescriptorRecord into the text that is embedded in a
documentation page. Everything here is pure: no document is touched, so the
output can be inspected, diffed and tested on its own.

Output Format:
    - Compact JSON by default (no whitespace between tokens)
    - Non-ASCII characters are written as-is, not escaped
    - Keys are emitted in DESCRIPTOR_KEYS order unless sort_keys is set
    - With escape_html, "<", ">" and "&" inside strings become \\u003c,
      \\u003e and \\u0026 so the payload can never close its <script> element.
      The parsed value is identical either way.
"""

import json
from dataclasses import dataclass
from html import escape
from typing import Any, Optional

from schemadoc.schema import DescriptorRecord

JSONLD_CONTENT_TYPE = "application/ld+json"

_HTML_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


@dataclass
class PublishOptions:
    """
    Configuration options for rendering and publishing the descriptor.

    Attributes:
        indent: Indentation for pretty output (None for compact JSON)
        sort_keys: Emit keys in sorted (canonical) order
        escape_html: Escape characters that could terminate a <script> element
        content_type: Type attribute of the embedded data node
    """
    indent: Optional[int] = None
    sort_keys: bool = False
    escape_html: bool = True
    content_type: str = JSONLD_CONTENT_TYPE


def serialize_descriptor(
    record: DescriptorRecord,
    options: Optional[PublishOptions] = None,
) -> str:
    """
    Serialize a descriptor to JSON-LD text.

    Args:
        record: The descriptor to serialize
        options: Rendering options (uses defaults if not provided)

    Returns:
        The JSON-LD payload as a string
    """
    options = options or PublishOptions()

    if options.indent is None:
        separators = (",", ":")
    else:
        separators = (",", ": ")

    payload = json.dumps(
        record.to_jsonld(),
        indent=options.indent,
        separators=separators,
        sort_keys=options.sort_keys,
        ensure_ascii=False,
    )

    if options.escape_html:
        for char, replacement in _HTML_UNSAFE.items():
            payload = payload.replace(char, replacement)

    return payload


def parse_payload(payload: str) -> DescriptorRecord:
    """
    Parse a JSON-LD payload back into a DescriptorRecord.

    Raises:
        ValueError: If the text is not JSON or does not describe a complete record
    """
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Payload is not valid JSON: {e}")
    return DescriptorRecord.from_jsonld(data)


def canonical_json(record: DescriptorRecord) -> str:
    """Return the sorted-key compact serialization used for comparisons."""
    return serialize_descriptor(
        record, PublishOptions(sort_keys=True, escape_html=False)
    )


def render_script_tag(
    record: DescriptorRecord,
    options: Optional[PublishOptions] = None,
) -> str:
    """
    Render the complete <script> element carrying the descriptor.

    Useful for pasting into templates that are not built by MkDocs.
    """
    options = options or PublishOptions()
    payload = serialize_descriptor(record, options)
    return render_data_element(options.content_type, payload)


def render_data_element(content_type: str, payload: str) -> str:
    """Wrap an already serialized payload in a typed <script> element."""
    return f'<script type="{escape(content_type, quote=True)}">{payload}</script>'
