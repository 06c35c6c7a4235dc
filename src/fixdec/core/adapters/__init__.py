"""
Interchange adapters для fixdec

Байтовые, JSON и DB-driver хуки поверх текстового формата Number.
"""

from .interchange import (
    dumps,
    loads,
    marshal_json,
    marshal_parts,
    marshal_text,
    scan,
    unmarshal_json,
    unmarshal_parts,
    unmarshal_text,
    unmarshal_value,
    value,
)

__all__ = [
    # Text
    "marshal_text",
    "unmarshal_text",
    # JSON
    "marshal_json",
    "unmarshal_json",
    # DB driver hooks
    "scan",
    "value",
    # JSON documents
    "dumps",
    "loads",
    # Structured form
    "marshal_parts",
    "unmarshal_parts",
    "unmarshal_value",
]
