"""
Shared fixtures: an in-memory stand-in for the ClickHouse query client.

``InMemoryClickHouseClient`` implements the ``QueryClient`` protocol. It
stores JSONEachRow payloads per table and evaluates the search and delete
statements built by ``SearchQueryBuilder`` (distances computed with numpy,
predicates with ``tests.predicate_eval``), so store behaviour can be tested
without a server.
"""

import json
import re
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pytest

from tests.predicate_eval import evaluate_predicate

SEARCH_PATTERN = re.compile(
    r"WITH \{query_vector:Array\(Float32\)\} AS reference_vector\n"
    r"SELECT (?P<id>\w+), (?P<content>\w+), (?P<metadata>\w+), "
    r"(?P<function>\w+)\((?P<embedding>\w+), reference_vector\) AS distance\n"
    r"FROM (?P<table>[\w.]+)\n"
    r"WHERE distance >= \{similarity_threshold:Float64\}"
    r"(?:\n  AND \((?P<filter>.*)\))?\n"
    r"ORDER BY distance\n"
    r"LIMIT \{top_k:UInt32\}$",
    re.DOTALL,
)
DELETE_PATTERN = re.compile(r"DELETE FROM (?P<table>[\w.]+) WHERE (?P<predicate>.*)$", re.DOTALL)


def cosine_distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(1.0 - np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))


def l2_distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(a - b))


DISTANCE_FUNCTIONS = {
    "cosineDistance": cosine_distance,
    "L2Distance": l2_distance,
}


class InMemoryClickHouseClient:
    """
    QueryClient keeping tables in memory.

    Every call is recorded in ``calls`` as ``(method, args)``. Setting
    ``fail_with`` makes the next calls raise that exception.
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.fail_with: Optional[BaseException] = None
        self.closed = False

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self.fail_with is not None:
            raise self.fail_with

    def insert(self, table: str, payload: bytes, timeout: float) -> None:
        self._record("insert", table, payload, timeout)
        rows = self.tables.setdefault(table, [])
        for line in payload.decode("utf-8").splitlines():
            if line:
                rows.append(json.loads(line))

    def query(self, sql: str, parameters: Mapping[str, Any], timeout: float) -> List[Dict[str, Any]]:
        self._record("query", sql, dict(parameters), timeout)
        match = SEARCH_PATTERN.match(sql)
        if not match:
            raise ValueError(f"Unsupported query: {sql}")

        distance = DISTANCE_FUNCTIONS[match.group("function")]
        reference = np.asarray(json.loads(parameters["query_vector"]), dtype=float)
        threshold = parameters["similarity_threshold"]
        predicate = match.group("filter")
        metadata_column = match.group("metadata")

        results = []
        for row in self.tables.get(match.group("table"), []):
            row_distance = distance(np.asarray(row[match.group("embedding")], dtype=float), reference)
            if not row_distance >= threshold:
                continue
            if predicate is not None and evaluate_predicate(predicate, self._lookup(row)) is not True:
                continue
            results.append({
                match.group("id"): row[match.group("id")],
                match.group("content"): row[match.group("content")],
                metadata_column: row[metadata_column],
                "distance": row_distance,
            })
        results.sort(key=lambda r: r["distance"])
        return results[:parameters["top_k"]]

    def execute(self, sql: str, timeout: float) -> None:
        self._record("execute", sql, timeout)
        match = DELETE_PATTERN.match(sql)
        if not match:
            # DDL is accepted and ignored
            return
        rows = self.tables.get(match.group("table"), [])
        predicate = match.group("predicate")
        self.tables[match.group("table")] = [
            row for row in rows if evaluate_predicate(predicate, self._lookup(row)) is not True
        ]

    def close(self) -> None:
        self.calls.append(("close", ()))
        self.closed = True

    @staticmethod
    def _lookup(row: Dict[str, Any]):
        def lookup(path):
            value = row.get(path[0])
            for part in path[1:]:
                if not isinstance(value, dict):
                    return None
                value = value.get(part)
            return value
        return lookup


@pytest.fixture
def fake_client() -> InMemoryClickHouseClient:
    return InMemoryClickHouseClient()
