import copy

import pytest
from google.api_core.exceptions import ServiceUnavailable


class FakeCollectionRef:
    def __init__(self, db, path):
        self._db = db
        self.path = path
        self.id = path.split("/")[-1]

    def stream(self):
        if self.path in self._db.fail_reads:
            raise ServiceUnavailable(f"cannot read {self.path}")
        prefix = self.path + "/"
        for doc_path, fields in list(self._db.docs.items()):
            rest = doc_path[len(prefix):]
            if doc_path.startswith(prefix) and "/" not in rest:
                yield FakeSnapshot(rest, copy.deepcopy(fields),
                                   FakeDocumentRef(self._db, doc_path))


class FakeDocumentRef:
    def __init__(self, db, path):
        self._db = db
        self.path = path
        self.id = path.split("/")[-1]

    def set(self, data, merge=False):
        if self.path in self._db.fail_writes:
            raise ServiceUnavailable(f"cannot write {self.path}")
        self._db.writes.append((self.path, copy.deepcopy(data)))
        if merge:
            self._db.docs.setdefault(self.path, {}).update(copy.deepcopy(data))
        else:
            self._db.docs[self.path] = copy.deepcopy(data)

    def get(self):
        return self._db.docs.get(self.path)

    def collections(self):
        prefix = self.path + "/"
        names = []
        for doc_path in self._db.docs:
            if doc_path.startswith(prefix):
                name = doc_path[len(prefix):].split("/")[0]
                if name not in names:
                    names.append(name)
        return [FakeCollectionRef(self._db, prefix + name) for name in names]


class FakeSnapshot:
    def __init__(self, id_, data, reference):
        self.id = id_
        self._data = data
        self.reference = reference

    def to_dict(self):
        return self._data


class FakeFirestore:
    """In-memory stand-in for the parts of ``firestore.Client`` we use.

    Documents are stored flat, keyed by full path; a subcollection exists
    as soon as one document lives under it, as in Firestore.
    """

    def __init__(self, docs=None):
        self.docs = dict(docs or {})
        self.writes = []
        self.fail_reads = set()
        self.fail_writes = set()

    def collection(self, path):
        return FakeCollectionRef(self, path)

    def document(self, path):
        return FakeDocumentRef(self, path)


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def make_db():
    """Build a fake client preloaded with ``{doc_path: fields}``."""
    return FakeFirestore
