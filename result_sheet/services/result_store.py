# result_sheet/services/result_store.py
"""
Persistence for SemesterResult rows.

Rows are never upserted: re-uploading a sheet adds new rows, and lookups
return the most recently inserted one.
"""
from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Protocol

from pymongo import DESCENDING
from pymongo.collection import Collection

from result_sheet.models.schemas import SemesterResult, StudentAggregate


class ResultStore(Protocol):
    def insert_all(self, results: List[SemesterResult]) -> int: ...

    def find_all(self) -> List[SemesterResult]: ...

    def find_latest(self, index_no: str) -> Optional[SemesterResult]: ...

    def update_many_by_index_no(self, index_no: str, aggregate: StudentAggregate) -> int: ...


def to_document(result: SemesterResult) -> Dict[str, Any]:
    # json mode turns year_gpa int keys into strings, which MongoDB requires
    return result.model_dump(mode="json")


def aggregate_fields(aggregate: StudentAggregate) -> Dict[str, Any]:
    return aggregate.model_dump(mode="json")


class MongoResultStore:
    def __init__(self, collection: Collection):
        self.collection = collection

    def insert_all(self, results: List[SemesterResult]) -> int:
        if not results:
            return 0
        res = self.collection.insert_many([to_document(r) for r in results])
        return len(res.inserted_ids)

    def find_all(self) -> List[SemesterResult]:
        return [SemesterResult.model_validate(doc) for doc in self.collection.find({}).sort("_id", 1)]

    def find_latest(self, index_no: str) -> Optional[SemesterResult]:
        doc = self.collection.find_one({"index_no": index_no}, sort=[("_id", DESCENDING)])
        if not doc:
            return None
        return SemesterResult.model_validate(doc)

    def update_many_by_index_no(self, index_no: str, aggregate: StudentAggregate) -> int:
        res = self.collection.update_many(
            {"index_no": index_no},
            {"$set": aggregate_fields(aggregate)},
        )
        return res.matched_count


class InMemoryResultStore:
    """Process-local store, used by tests and offline runs."""

    def __init__(self):
        self._lock = threading.Lock()
        self._docs: List[Dict[str, Any]] = []

    def insert_all(self, results: List[SemesterResult]) -> int:
        docs = [to_document(r) for r in results]
        with self._lock:
            self._docs.extend(docs)
        return len(docs)

    def find_all(self) -> List[SemesterResult]:
        with self._lock:
            docs = list(self._docs)
        return [SemesterResult.model_validate(doc) for doc in docs]

    def find_latest(self, index_no: str) -> Optional[SemesterResult]:
        with self._lock:
            for doc in reversed(self._docs):
                if doc["index_no"] == index_no:
                    return SemesterResult.model_validate(doc)
        return None

    def update_many_by_index_no(self, index_no: str, aggregate: StudentAggregate) -> int:
        fields = aggregate_fields(aggregate)
        matched = 0
        with self._lock:
            for doc in self._docs:
                if doc["index_no"] == index_no:
                    doc.update(fields)
                    matched += 1
        return matched
