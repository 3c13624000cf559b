from .documents import decode_entities, load_json, load_xml, parse_datetime, xml_records

__all__ = [
    "decode_entities",
    "load_json",
    "load_xml",
    "parse_datetime",
    "xml_records",
]
