"""
Helpers turning raw response text into structured documents.

Booru XML endpoints happily emit HTML named entities (``&hellip;``,
``&eacute;``) and double-escaped ones (``&amp;quot;``), neither of which an
XML parser accepts or decodes the way a reader expects. ``decode_entities``
normalises the text so ``ElementTree`` can take it.
"""
import json
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from html.entities import html5
from typing import Any, Dict, List, Optional

from ..booru.errors import DecodeError

XML_PREDEFINED_ENTITIES = {"amp", "lt", "gt", "quot", "apos"}

_ENTITY_PATTERN = re.compile(r"&(amp;)?([a-zA-Z][a-zA-Z0-9]*|#[0-9]+|#[xX][0-9a-fA-F]+);")

_XML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&apos;"}

DATETIME_FORMATS = (
    "%a %b %d %H:%M:%S %z %Y",  # Gelbooru
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def _replace_entity(match: re.Match) -> str:
    name = match.group(2)
    if name.startswith("#") or name in XML_PREDEFINED_ENTITIES:
        # Also collapses the double-escaped form.
        return f"&{name};"

    decoded = html5.get(f"{name};")
    if decoded is None:
        # Unknown to HTML as well, keep it as literal text.
        return f"&amp;{name};"
    return "".join(_XML_ESCAPES.get(char, char) for char in decoded)


def decode_entities(text: str) -> str:
    """Replace HTML-only named entities with their characters."""
    return _ENTITY_PATTERN.sub(_replace_entity, text)


def load_xml(text: str) -> ET.Element:
    try:
        return ET.fromstring(decode_entities(text).strip())
    except ET.ParseError as e:
        raise DecodeError(f"Malformed XML response: {e}") from e


def xml_records(root: ET.Element) -> List[Dict[str, str]]:
    """Attributes of every child element, the way booru XML lists are shaped."""
    return [dict(child.attrib) for child in root]


def load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Malformed JSON response: {e}") from e


def _as_utc(value: datetime) -> datetime:
    # Timestamps without an offset are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse the many timestamp shapes boorus return.

    Accepts unix seconds, Sankaku's ``{"s": seconds}``, ISO 8601 and the
    textual formats in ``DATETIME_FORMATS``. Returns ``None`` for empty
    values and raises ``ValueError`` for anything else.
    """
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        value = value.get("s")
        if value is None:
            raise ValueError("Timestamp object without seconds")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    value = str(value).strip()
    if value.isdigit():
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    try:
        return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        pass
    for fmt in DATETIME_FORMATS:
        try:
            return _as_utc(datetime.strptime(value, fmt))
        except ValueError:
            continue
    raise ValueError(f"Unrecognised timestamp '{value}'")
