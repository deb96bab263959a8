"""
Request payload model for the Veritas API.

An envelope names a default database and table and carries a list of
per-key objects. Each object is either a key with a map of subkey values
(put/increment) or a key with a list of subkey names (get/delete).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import quote_plus

from .exceptions import EncodingError


@dataclass
class KeyValues:
    """Key with subkey -> value pairs (strings for data, integers for counters)."""
    key: str
    values: Dict[str, Union[str, int]] = field(default_factory=dict)
    db_override: Optional[str] = None
    table_override: Optional[str] = None


@dataclass
class KeySubkeys:
    """Key with an ordered list of subkey names."""
    key: str
    values: List[str] = field(default_factory=list)
    db_override: Optional[str] = None
    table_override: Optional[str] = None


ObjectEntry = Union[KeyValues, KeySubkeys]


@dataclass
class RequestEnvelope:
    """JSON document describing one or more key operations."""
    default_db: str
    default_table: str
    objects: List[ObjectEntry] = field(default_factory=list)

    @property
    def key_count(self) -> int:
        """Number of distinct top-level keys, i.e. the mutations a write makes."""
        return len({entry.key for entry in self.objects})


def encode_entry(entry: ObjectEntry) -> Dict[str, Any]:
    """Convert one object entry into its wire dict."""
    if isinstance(entry, KeyValues):
        values: Any = dict(entry.values)
    elif isinstance(entry, KeySubkeys):
        values = list(entry.values)
    else:
        raise EncodingError(f"Unsupported object entry: {type(entry).__name__}")

    encoded: Dict[str, Any] = {"k": entry.key}
    # Overrides are omitted entirely when unset
    if entry.db_override:
        encoded["db_override"] = entry.db_override
    if entry.table_override:
        encoded["table_override"] = entry.table_override
    encoded["v"] = values
    return encoded


def encode_envelope(envelope: RequestEnvelope) -> str:
    """
    Serialize an envelope to compact JSON.

    Raises:
        EncodingError: If the envelope is incomplete or holds values
            that cannot be represented as JSON
    """
    if not envelope.default_db:
        raise EncodingError("default_db cannot be empty")
    if not envelope.default_table:
        raise EncodingError("default_table cannot be empty")
    if not envelope.objects:
        raise EncodingError("envelope must contain at least one object")

    document = {
        "default_db": envelope.default_db,
        "default_table": envelope.default_table,
        "objects": [encode_entry(entry) for entry in envelope.objects],
    }
    try:
        return json.dumps(document, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Unable to serialize envelope: {e}") from e


def encode_path_segment(text: str) -> str:
    """
    Query-escape text for embedding in a URL path.

    ',' and ':' are left literal because the server's path parser expects them.
    """
    escaped = quote_plus(text)
    return escaped.replace("%2C", ",").replace("%3A", ":")


def envelope_from_subkeys(db: str, table: str, keymap: Mapping[str, Sequence[str]]) -> RequestEnvelope:
    """Build an envelope of KeySubkeys entries from {key: [subkey, ...]}."""
    envelope = RequestEnvelope(default_db=db, default_table=table)
    for key, subkeys in keymap.items():
        if isinstance(subkeys, str):
            raise EncodingError(f"Subkeys for key '{key}' must be a list, not a string")
        envelope.objects.append(KeySubkeys(key=key, values=list(subkeys)))
    return envelope


def envelope_from_values(db: str, table: str, keymap: Mapping[str, Mapping[str, Union[str, int]]]) -> RequestEnvelope:
    """Build an envelope of KeyValues entries from {key: {subkey: value}}."""
    envelope = RequestEnvelope(default_db=db, default_table=table)
    for key, values in keymap.items():
        envelope.objects.append(KeyValues(key=key, values=dict(values)))
    return envelope
