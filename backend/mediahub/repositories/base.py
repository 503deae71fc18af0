"""Generic MongoEngine repository base.

Persistence-only concerns shared by all repositories:

- Safe id coercion (malformed ids behave like missing documents).
- Atomic single-document updates that touch only the named fields and skip
  full-document validation.
- Per-repository updatable-field whitelists (no mass assignment).
- Raw aggregation passthrough.

Repositories never implement use cases; services own orchestration.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Generic, TypeVar, cast

from bson import ObjectId
from mongoengine import Document

from mediahub.models.base import utcnow

D = TypeVar("D", bound=Document)


def to_object_id(value: Any) -> ObjectId | None:
    """Coerce ``value`` to an :class:`~bson.ObjectId`, or ``None`` if impossible.

    :param value: ObjectId, 24-char hex string, or anything else.
    :returns: The ObjectId, or ``None`` when ``value`` is not a valid id.
    :rtype: ObjectId | None
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class BaseRepository(Generic[D]):
    """Thin, typed access to one MongoEngine document class.

    Subclasses set :attr:`model` and override :meth:`_updatable_fields`.
    """

    model: type[D]

    # ---------------------------- Whitelists ----------------------------

    def _updatable_fields(self) -> set[str]:
        """Fields that :meth:`set_fields` may write. Empty by default."""
        return set()

    # ---------------------------- Reads ----------------------------

    def get(self, doc_id: Any, *, exclude: Iterable[str] = ()) -> D | None:
        """Fetch a document by id.

        :param doc_id: Document id (ObjectId or hex string).
        :param exclude: Field names left out of the projection.
        :returns: The document or ``None`` (also for malformed ids).
        """
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        qs = self.model.objects(id=oid)
        if exclude:
            qs = qs.exclude(*exclude)
        return cast(D | None, qs.first())

    def find_one(self, raw_filter: Mapping[str, Any], *, exclude: Iterable[str] = ()) -> D | None:
        """Return the first document matching a raw MongoDB filter."""
        qs = self.model.objects(__raw__=dict(raw_filter))
        if exclude:
            qs = qs.exclude(*exclude)
        return cast(D | None, qs.first())

    def exists(self, raw_filter: Mapping[str, Any]) -> bool:
        """Return ``True`` when at least one document matches ``raw_filter``."""
        return self.model.objects(__raw__=dict(raw_filter)).only("id").first() is not None

    # ---------------------------- Writes ----------------------------

    def add(self, **fields: Any) -> D:
        """Insert a new document with full validation.

        :raises mongoengine.errors.NotUniqueError: On duplicate keys.
        """
        doc = self.model(**fields)
        doc.save(force_insert=True)
        return doc

    def set_fields(
        self,
        doc_id: Any,
        *,
        values: Mapping[str, Any] | None = None,
        unset: Iterable[str] = (),
        exclude: Iterable[str] = (),
    ) -> D | None:
        """Atomically ``$set``/``$unset`` whitelisted fields on one document.

        Only the named fields are written; the rest of the document is neither
        loaded nor re-validated. ``updated_at`` is refreshed in the same write.

        :param doc_id: Target document id.
        :param values: Field → new value.
        :param unset: Fields to remove.
        :param exclude: Fields left out of the returned projection.
        :returns: The updated document, or ``None`` when it does not exist.
        :raises ValueError: If a field is not whitelisted.
        :raises mongoengine.errors.NotUniqueError: On duplicate keys.
        """
        values = dict(values or {})
        unset = list(unset)
        illegal = (set(values) | set(unset)) - self._updatable_fields()
        if illegal:
            raise ValueError(f"Fields not updatable: {sorted(illegal)}")

        oid = to_object_id(doc_id)
        if oid is None:
            return None

        update: dict[str, Any] = {f"set__{name}": value for name, value in values.items()}
        update.update({f"unset__{name}": True for name in unset})
        update["set__updated_at"] = utcnow()

        qs = self.model.objects(id=oid)
        if exclude:
            qs = qs.exclude(*exclude)
        return cast(D | None, qs.modify(new=True, **update))

    # ---------------------------- Aggregation ----------------------------

    def aggregate(self, pipeline: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
        """Run ``pipeline`` against the model's collection and return all rows."""
        return list(self.model.objects.aggregate([dict(stage) for stage in pipeline]))
