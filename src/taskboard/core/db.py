"""Mapping between stored MongoDB documents and pydantic models."""

from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.collection import AsyncCollection

from taskboard.core.pagination import skip_for


def owned_by(doc_id: UUID, owner_id: UUID) -> dict[str, Any]:
    """Filter matching a single document only while it belongs to `owner_id`."""
    return {"_id": doc_id, "owner_id": owner_id}


class MongoModel(BaseModel):
    """Stored document keyed by a UUID: `_id` in MongoDB, `id` in API output."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(populate_by_name=True, json_schema_serialization_defaults_required=True)

    def to_mongo(self) -> dict[str, Any]:
        return {"_id": self.id, **self.model_dump(exclude={"id"})}

    @classmethod
    async def find_page(
        cls,
        collection: AsyncCollection[dict[str, Any]],
        query: dict[str, Any],
        *,
        sort: list[tuple[str, int]],
        page: int,
        limit: int,
    ) -> tuple[list[Self], int]:
        """Load one page of documents matching `query`.

        Returns:
            The page's models and the total number of matches

        A page starting at or past the last match is empty and is answered without running the find.
        """
        total = await collection.count_documents(query)
        skip = skip_for(page, limit)
        if skip >= total:
            return [], total

        cursor = collection.find(query).sort(sort).skip(skip).limit(limit)
        return [cls.model_validate(doc) async for doc in cursor], total
