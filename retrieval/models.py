from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from vector_store.models import QueryResult


class IngestRequest(BaseModel):
    doc_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    chunk_chars: Optional[int] = Field(None, gt=0)
    overlap_chars: Optional[int] = Field(None, ge=0)
    source: Optional[str] = None


class IngestResponse(BaseModel):
    doc_id: str
    chunks: int


class IngestResult(BaseModel):
    doc_id: str
    chunk_ids: list[int] = Field(default_factory=list)
    skipped_empty: int = 0

    @property
    def chunks(self) -> int:
        return len(self.chunk_ids)


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    k: Optional[int] = None


class SearchHit(BaseModel):
    id: int
    doc_id: str
    text: str
    score: float

    @classmethod
    def from_result(cls, result: QueryResult) -> "SearchHit":
        return cls(id=result.chunk_id, doc_id=result.doc_id, text=result.text, score=result.score)


class SearchResponse(BaseModel):
    items: list[SearchHit] = Field(default_factory=list)


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatContextRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    k: Optional[int] = None


class EmbedRequest(BaseModel):
    texts: list[str] = Field(..., min_length=1)


class EmbedResponse(BaseModel):
    vectors: list[list[float]]


class HealthStatus(BaseModel):
    status: str
    model_loaded: bool
    db_ready: bool
    ready: bool
    details: dict = Field(default_factory=dict)


class DocumentSummary(BaseModel):
    doc_id: str
    source: Optional[str] = None
    created_at: Optional[datetime] = None
    chunk_count: int
