import json
import logging
from collections import Counter
from typing import Any, Dict

from .classifier import join_strict
from .encoding import encode_value
from .errors import STORE_ERRORS, ExportError

LOGGER = logging.getLogger(__name__)


def _read_documents(db, collection_path: str):
    try:
        return list(db.collection(collection_path).stream())
    except STORE_ERRORS as e:
        raise ExportError(collection_path) from e


def _child_collection_names(doc, collection_path: str):
    try:
        return [col.id for col in doc.reference.collections()]
    except STORE_ERRORS as e:
        raise ExportError(
            collection_path,
            f"Failed to list subcollections of {collection_path}/{doc.id}"
        ) from e


def _export_collection(db, collection_path: str, strict: bool, stats: Counter) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    docs = _read_documents(db, collection_path)
    LOGGER.debug("Read %d documents from %s", len(docs), collection_path)
    for doc in docs:
        data = doc.to_dict() or {}
        subcollections: Dict[str, Any] = {}
        for name in _child_collection_names(doc, collection_path):
            subcollections[name] = _export_collection(
                db, f"{collection_path}/{doc.id}/{name}", strict, stats)
        if strict:
            result[doc.id] = join_strict(data, subcollections)
        else:
            data.update(subcollections)
            result[doc.id] = data
        stats["documents"] += 1
    return result


def export_collection(db, collection_path: str, strict: bool = False) -> Dict[str, Any]:
    """Read a collection and all of its subcollections into a nested dict.

    Returns a mapping of document id to document blob. In the default
    format a blob is the document's fields with each subcollection added
    under its name; with ``strict=True`` the two are kept apart under
    ``__fields__`` and ``__subcollections__``.

    Raises:
        ExportError: a read failed; ``path`` is the collection involved.
    """
    return _export_collection(db, collection_path, strict, Counter())


def export_to_file(db, collection_name: str, output_file: str, strict: bool = False) -> int:
    """Export ``collection_name`` to ``output_file``, replacing the file.

    Returns the number of documents written to the file, at all depths.
    """
    stats: Counter = Counter()
    data = _export_collection(db, collection_name, strict, stats)
    text = json.dumps({collection_name: data}, indent=2,
                      ensure_ascii=False, default=encode_value)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(text)
    LOGGER.info('Exported "%s" (%d documents) to %s',
                collection_name, stats["documents"], output_file)
    return stats["documents"]
