#!/usr/bin/env python3
"""
Memory Service
Simulated vector memory for logs - hash-based embeddings + cosine similarity.
Swap generate_embedding for a real embedding model without touching callers.
"""

import math
from datetime import datetime, timedelta
from typing import Dict, List, Any

EMBEDDING_DIMENSIONS = 100


def hash_string(text: str) -> int:
    """
    32-bit signed polynomial rolling hash (hash * 31 + code unit).
    Iterates UTF-16 code units so astral characters hash as surrogate pairs.
    """
    data = text.encode('utf-16-le')
    hash_value = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        hash_value = (hash_value * 31 + code) & 0xFFFFFFFF
    if hash_value >= 0x80000000:
        hash_value -= 0x100000000
    return hash_value


def generate_embedding(text: str) -> List[float]:
    """Deterministic 100-dimensional pseudo-embedding with values in [-1, 1]"""
    embedding = []
    for i in range(EMBEDDING_DIMENSIONS):
        hash_value = abs(hash_string(text + str(i)))
        embedding.append((hash_value % 200 - 100) / 100)
    return embedding


def cosine_similarity(a: List[float], b: List[float]) -> float:
    """Cosine similarity; 0 for zero vectors and vectors of different length"""
    if len(a) != len(b):
        return 0.0

    dot_product = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot_product += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot_product / (math.sqrt(norm_a) * math.sqrt(norm_b))


def document_to_log(document: Dict[str, Any]) -> Dict[str, Any]:
    """Strip the embedding off a memory document"""
    return {
        'id': document['id'],
        'content': document['content'],
        'type': document['type'],
        'timestamp': document['timestamp'],
        'structured': document.get('structured'),
    }


class MemoryService:
    """In-memory document store with similarity search over log content"""

    def __init__(self):
        self._documents: List[Dict[str, Any]] = []
        self._initialized = False

    def initialize(self):
        # A real vector database client would be set up here
        self._initialized = True
        print("✓ Memory service initialized (simulated)")

    def is_ready(self) -> bool:
        return self._initialized

    def _check_ready(self) -> bool:
        if not self._initialized:
            print("⚠ Memory service not initialized")
            return False
        return True

    def store_log(self, log: Dict[str, Any]) -> bool:
        """
        Store a log as a memory document. Storing a log whose id is
        already present replaces that document in place.
        """
        if not self._check_ready():
            return False

        document = {
            'id': log['id'],
            'content': log['content'],
            'timestamp': log['timestamp'],
            'type': log['type'],
            'structured': log.get('structured'),
            'embedding': generate_embedding(log['content']),
        }

        for i, existing in enumerate(self._documents):
            if existing['id'] == document['id']:
                self._documents[i] = document
                return True

        self._documents.append(document)
        return True

    def delete_log(self, log_id: str) -> bool:
        """Remove the document belonging to a deleted log"""
        if not self._check_ready():
            return False

        before = len(self._documents)
        self._documents = [doc for doc in self._documents if doc['id'] != log_id]
        return len(self._documents) < before

    def semantic_search(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        """Return up to `limit` logs ranked by similarity to the query"""
        if not self._check_ready() or limit <= 0:
            return []

        query_embedding = generate_embedding(query)
        scored = [
            (cosine_similarity(query_embedding, doc['embedding']), position, doc)
            for position, doc in enumerate(self._documents)
        ]
        # Highest similarity first, earlier insertion wins ties
        scored.sort(key=lambda item: (-item[0], item[1]))

        results = []
        for similarity, _, doc in scored[:limit]:
            log = document_to_log(doc)
            log['similarity'] = similarity
            results.append(log)
        return results

    def get_logs_by_date_range(self, start_date: datetime, end_date: datetime) -> List[Dict[str, Any]]:
        """All logs with start_date <= timestamp <= end_date, in insertion order"""
        if not self._check_ready():
            return []

        return [
            document_to_log(doc) for doc in self._documents
            if start_date <= doc['timestamp'] <= end_date
        ]

    def get_logs_by_day(self, target_date: datetime) -> List[Dict[str, Any]]:
        day_start = datetime(target_date.year, target_date.month, target_date.day)
        day_end = day_start + timedelta(days=1) - timedelta(microseconds=1)
        return self.get_logs_by_date_range(day_start, day_end)

    def get_all_documents(self) -> List[Dict[str, Any]]:
        if not self._check_ready():
            return []
        return [{**doc, 'embedding': list(doc['embedding'])} for doc in self._documents]

    def __len__(self):
        return len(self._documents)
