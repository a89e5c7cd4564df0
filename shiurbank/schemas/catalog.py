"""Catalog API schemas: topics and rebbeim."""

from shiurbank.application.dtos.series import RebbiResult, TopicResult
from shiurbank.schemas.base import CamelModel, SuccessResponse


class TopicItem(CamelModel):
    topic_id: int
    name: str

    @classmethod
    def from_result(cls, topic: TopicResult) -> "TopicItem":
        return cls(topic_id=topic.topic_id, name=topic.name)


class RebbiItem(CamelModel):
    rebbi_id: int
    title: str | None = None
    first_name: str
    last_name: str
    full_name: str

    @classmethod
    def from_result(cls, rebbi: RebbiResult) -> "RebbiItem":
        return cls(
            rebbi_id=rebbi.rebbi_id,
            title=rebbi.title,
            first_name=rebbi.first_name,
            last_name=rebbi.last_name,
            full_name=rebbi.full_name,
        )


class TopicListResponse(SuccessResponse):
    topics: list[TopicItem]


class RebbiListResponse(SuccessResponse):
    rebbeim: list[RebbiItem]
