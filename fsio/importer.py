import json
import logging
from typing import Any, Dict

from .classifier import classify, split_strict
from .errors import STORE_ERRORS, ImportWriteError, MalformedFileError

LOGGER = logging.getLogger(__name__)


def _split(doc_data: Any, doc_path: str, strict: bool):
    if strict:
        return split_strict(doc_data, doc_path)
    if not isinstance(doc_data, dict):
        raise MalformedFileError(f"Document {doc_path} is not an object")
    return classify(doc_data)


def _write_document(db, doc_path: str, fields: Dict[str, Any], dry_run: bool):
    if dry_run:
        LOGGER.info("DRYRUN: would write %s with fields: %s",
                    doc_path, list(fields.keys()))
        return
    try:
        # No merge: the document ends up holding exactly ``fields``.
        db.document(doc_path).set(fields)
    except STORE_ERRORS as e:
        raise ImportWriteError(doc_path) from e
    LOGGER.debug("Wrote %s", doc_path)


def import_subtree(db, parent_path: str, blob: Dict[str, Any],
                   strict: bool = False, dry_run: bool = False) -> int:
    """Write every document of ``blob`` under ``parent_path``, depth first.

    Each document is written before any of its subcollections. Returns the
    number of documents written.
    """
    count = 0
    for doc_id, doc_data in blob.items():
        doc_path = f"{parent_path}/{doc_id}"
        fields, subcollections = _split(doc_data, doc_path, strict)
        _write_document(db, doc_path, fields, dry_run)
        count += 1
        for sub_name, sub_data in subcollections.items():
            if not isinstance(sub_data, dict):
                raise MalformedFileError(
                    f"Collection {doc_path}/{sub_name} is not an object")
            count += import_subtree(
                db, f"{doc_path}/{sub_name}", sub_data, strict, dry_run)
    return count


def import_tree(db, data: Any, strict: bool = False, dry_run: bool = False) -> int:
    """Import every root collection found in ``data``."""
    if not isinstance(data, dict):
        raise MalformedFileError("Top level of the import file must be an object")
    total = 0
    for collection_name, collection_data in data.items():
        if not isinstance(collection_data, dict):
            raise MalformedFileError(
                f'Collection "{collection_name}" must map document ids to objects')
        count = import_subtree(
            db, collection_name, collection_data, strict, dry_run)
        LOGGER.info('Imported collection "%s" (%d documents)',
                    collection_name, count)
        total += count
    return total


def import_from_file(db, file_path: str, strict: bool = False, dry_run: bool = False) -> int:
    with open(file_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedFileError(f"{file_path} is not valid JSON: {e}") from e
    total = import_tree(db, data, strict, dry_run)
    LOGGER.info("Imported %d documents from %s", total, file_path)
    return total
