"""Tell document fields apart from subcollections in an exported blob.

The legacy file format stores a document's fields and its subcollections
side by side in one JSON object, so the importer has to guess which keys
are which. A subcollection is a mapping of document keys to document
blobs, and a document blob is an object, so any object value that itself
holds an object is treated as a subcollection.

The guess is wrong for a field holding a map of maps, e.g.
``{"address": {"geo": {"lat": 1}}}`` is read back as an ``address``
subcollection with one ``geo`` document. Files written in the strict
format avoid this by splitting every blob into ``__fields__`` and
``__subcollections__``.
"""
from typing import Any, Dict, Tuple

from .errors import MalformedFileError

FIELDS_KEY = "__fields__"
SUBCOLLECTIONS_KEY = "__subcollections__"


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def looks_like_doc_collection(value: Dict[str, Any]) -> bool:
    return any(_is_object(child) for child in value.values())


def classify(blob: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a legacy document blob into (fields, subcollections)."""
    fields: Dict[str, Any] = {}
    subcollections: Dict[str, Any] = {}
    for key, value in blob.items():
        if _is_object(value) and looks_like_doc_collection(value):
            subcollections[key] = value
        else:
            fields[key] = value
    return fields, subcollections


def join_strict(fields: Dict[str, Any], subcollections: Dict[str, Any]) -> Dict[str, Any]:
    return {FIELDS_KEY: fields, SUBCOLLECTIONS_KEY: subcollections}


def split_strict(blob: Any, path: str = "") -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a strict document blob into (fields, subcollections)."""
    if not _is_object(blob):
        raise MalformedFileError(f"Document {path} is not an object")
    unknown = set(blob) - {FIELDS_KEY, SUBCOLLECTIONS_KEY}
    if unknown:
        raise MalformedFileError(
            f"Document {path} has unexpected keys in strict format: "
            + ", ".join(sorted(unknown))
        )
    fields = blob.get(FIELDS_KEY, {})
    subcollections = blob.get(SUBCOLLECTIONS_KEY, {})
    if not _is_object(fields) or not _is_object(subcollections):
        raise MalformedFileError(
            f"Document {path}: {FIELDS_KEY} and {SUBCOLLECTIONS_KEY} must be objects"
        )
    return fields, subcollections
