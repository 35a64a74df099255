import copy

from planner_core import log_action
from .errors import NotFoundError
from .identifiers import default_generator


class CollectionRepository:
    """
    One in-memory collection hydrated from a single store key.
    Every successful mutation writes the whole collection back (write-through).
    A failed write leaves the in-memory state as it is and marks the
    repository dirty until a later save goes through.
    """

    key = None
    kind = "item"

    def __init__(self, store, id_factory=None):
        self.store = store
        self.new_id = id_factory or default_generator
        self._items = []
        self.dirty = False
        self.hydrate()

    def normalize(self, record):
        raise NotImplementedError

    def hydrate(self):
        items = []
        for raw in self.store.load(self.key):
            record = self.normalize(raw)
            if record is None:
                log_action("storage_record_skipped", {"key": self.key, "record": repr(raw)[:200]})
                continue
            items.append(record)
            self._observe(record)
        self._items = items
        self.dirty = False

    def _observe(self, record):
        observe = getattr(self.new_id, "observe", None)
        if observe is not None:
            observe(record["id"])

    def list(self):
        return copy.deepcopy(self._items)

    def get(self, entity_id):
        return copy.deepcopy(self._find(entity_id))

    def _find(self, entity_id):
        for item in self._items:
            if item["id"] == entity_id:
                return item
        raise NotFoundError(self.kind, entity_id)

    def _append(self, record):
        self._items.append(record)
        self._persist()
        return copy.deepcopy(record)

    def remove(self, entity_id):
        remaining = [i for i in self._items if i["id"] != entity_id]
        if len(remaining) == len(self._items):
            return
        self._items = remaining
        self._persist()

    def _persist(self):
        self.dirty = not self.store.save(self.key, self._items)
        return not self.dirty

    @property
    def last_write_error(self):
        return self.store.write_error(self.key) if self.dirty else None

    def flush(self):
        """Retry a failed write. Returns True when the disk matches memory."""
        if not self.dirty:
            return True
        return self._persist()
