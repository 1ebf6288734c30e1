"""Qdrant adapter for persisting diagnosis records.

Each diagnosis becomes one point: the content embedding is the vector, the
rest of the record (query embedding included) is the payload. The collection
is created on first write, sized to the first vector seen.
"""

import logging
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

from ....core.domain import DiagnosisRecord, HistoryEntry
from ....core.domain.exceptions import StorageError
from ....core.ports.store_port import DiagnosisStorePort

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "analysis_logs"


class QdrantDiagnosisStore(DiagnosisStorePort):
    """Stores diagnoses as points in a Qdrant collection."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        collection_name: str = DEFAULT_COLLECTION,
        vector_size: int | None = None,
    ) -> None:
        """Initialize the Qdrant store.

        Args:
            url: Qdrant cluster URL.
            api_key: Qdrant API key.
            collection_name: Collection holding diagnosis points.
            vector_size: Embedding dimension; taken from the first record when None.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self.vector_size = vector_size
        self._client: QdrantClient | None = None

    def _get_client(self) -> "QdrantClient":
        """Get or create Qdrant client connection."""
        if not self._client:
            try:
                from qdrant_client import QdrantClient

                self._client = QdrantClient(url=self.url, api_key=self.api_key or None)
                logger.info("Connected to Qdrant at: %s", self.url)
            except Exception as e:
                raise StorageError(
                    f"Failed to connect to Qdrant at {self.url}",
                    cause=e,
                    context={"url": self.url},
                ) from e
        return self._client

    def _ensure_collection(self, vector_size: int) -> None:
        from qdrant_client.http import models

        client = self._get_client()
        existing = {c.name for c in client.get_collections().collections}
        if self.collection_name in existing:
            return

        logger.info("Creating collection %s (dim=%d)", self.collection_name, vector_size)
        client.create_collection(
            collection_name=self.collection_name,
            vectors_config=models.VectorParams(
                size=vector_size,
                distance=models.Distance.COSINE,
            ),
        )
        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        from qdrant_client.http import models

        client = self._get_client()
        client.create_payload_index(
            collection_name=self.collection_name,
            field_name="url",
            field_schema=models.PayloadSchemaType.KEYWORD,
        )
        # Required for server-side ordering in recent()
        client.create_payload_index(
            collection_name=self.collection_name,
            field_name="created_at",
            field_schema=models.PayloadSchemaType.DATETIME,
        )

    def setup(self, reset: bool = False) -> None:
        """Create the collection, deleting it first when ``reset``.

        Without a known vector size the collection is left to the first write.
        An existing collection gets any missing payload indexes.
        """
        try:
            client = self._get_client()
            if reset:
                client.delete_collection(collection_name=self.collection_name)
                logger.warning("Deleted collection: %s", self.collection_name)
            elif self.collection_name in {c.name for c in client.get_collections().collections}:
                self._ensure_indexes()
            if self.vector_size:
                self._ensure_collection(self.vector_size)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(
                "Failed to set up Qdrant collection",
                cause=e,
                context={"collection": self.collection_name},
            ) from e

    def persist(self, record: DiagnosisRecord) -> str:
        """Upsert one diagnosis point and return its id."""
        from qdrant_client.models import PointStruct

        point_id = str(uuid.uuid4())
        payload = {
            "url": record.url,
            "target_query": record.target_query,
            "page_title": record.page_title,
            "content_preview": record.content_preview,
            "similarity_score": record.similarity_score,
            "query_embedding": record.query_embedding,
            "advice": record.analysis.to_json_dict(),
            "analysis_source": record.analysis_source,
            "created_at": record.created_at,
        }

        try:
            self._ensure_collection(self.vector_size or len(record.content_embedding))
            self._get_client().upsert(
                collection_name=self.collection_name,
                points=[PointStruct(id=point_id, vector=record.content_embedding, payload=payload)],
            )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(
                "Failed to store diagnosis in Qdrant",
                cause=e,
                context={"collection": self.collection_name, "url": record.url},
            ) from e
        return point_id

    def recent(self, limit: int = 10) -> list[HistoryEntry]:
        """Return the newest diagnoses first.

        Ordering is done by Qdrant on the ``created_at`` datetime index, so
        only ``limit`` points are read.
        """
        from qdrant_client.http import models

        client = self._get_client()
        try:
            existing = {c.name for c in client.get_collections().collections}
            if self.collection_name not in existing:
                return []
            points, _ = client.scroll(
                collection_name=self.collection_name,
                limit=limit,
                order_by=models.OrderBy(key="created_at", direction=models.Direction.DESC),
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            raise StorageError(
                "Failed to read diagnosis history from Qdrant",
                cause=e,
                context={"collection": self.collection_name},
            ) from e

        entries = []
        for point in points:
            payload = point.payload or {}
            entries.append(
                HistoryEntry(
                    id=str(point.id),
                    url=payload.get("url", ""),
                    target_query=payload.get("target_query", ""),
                    page_title=payload.get("page_title", ""),
                    similarity_score=payload.get("similarity_score", 0.0),
                    created_at=payload.get("created_at", ""),
                )
            )
        return entries

    def ping(self) -> bool:
        try:
            self._get_client().get_collections()
            return True
        except Exception as e:
            logger.warning("Qdrant ping failed: %s", e)
            return False
