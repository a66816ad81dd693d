from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from vector_store.exceptions import (
    CollaboratorUnavailableError,
    DimensionMismatchError,
    OperationCancelledError,
    RetrievalError,
    ValidationError,
)

from .config import RetrievalConfig
from .models import (
    ChatContextRequest,
    DocumentSummary,
    EmbedRequest,
    EmbedResponse,
    HealthStatus,
    IngestRequest,
    IngestResponse,
    SearchHit,
    SearchRequest,
    SearchResponse,
)
from .service import RetrievalService

_STATUS_CODES = (
    (ValidationError, 400),
    (DimensionMismatchError, 409),
    (OperationCancelledError, 499),
    (CollaboratorUnavailableError, 503),
)


def _http_error(exc: RetrievalError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def create_app(
    config: RetrievalConfig | None = None,
    service: RetrievalService | None = None,
) -> FastAPI:
    if config is None and service is None:
        load_dotenv()
    cfg = config or (service.config if service else RetrievalConfig.from_env())
    service = service or RetrievalService.from_config(cfg)

    app = FastAPI(
        title="Offline RAG Retrieval Service",
        version="1.0.0",
        description="Chunking, embedding and exhaustive cosine retrieval over SQLite.",
    )
    # the browser client calls this API from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.service = service

    @app.get("/health", response_model=HealthStatus)
    def health() -> HealthStatus:
        return service.health()

    @app.get("/documents", response_model=list[DocumentSummary])
    def documents() -> list[DocumentSummary]:
        try:
            return service.list_documents()
        except RetrievalError as exc:
            raise _http_error(exc) from exc

    @app.post("/embed", response_model=EmbedResponse)
    def embed(request: EmbedRequest) -> EmbedResponse:
        try:
            return EmbedResponse(vectors=service.embed_texts(request.texts))
        except RetrievalError as exc:
            raise _http_error(exc) from exc

    @app.post("/ingest", response_model=IngestResponse)
    def ingest(request: IngestRequest) -> IngestResponse:
        try:
            result = service.ingest(
                request.doc_id,
                request.text,
                chunk_size=request.chunk_chars,
                overlap=request.overlap_chars,
                source=request.source,
            )
        except RetrievalError as exc:
            raise _http_error(exc) from exc
        return IngestResponse(doc_id=result.doc_id, chunks=result.chunks)

    @app.post("/search", response_model=SearchResponse)
    def search(request: SearchRequest) -> SearchResponse:
        try:
            results = service.retrieve_top_k(
                request.query, request.k, policy=cfg.search_policy
            )
        except RetrievalError as exc:
            raise _http_error(exc) from exc
        return SearchResponse(items=[SearchHit.from_result(r) for r in results])

    @app.post("/chat/context", response_model=SearchResponse)
    def chat_context(request: ChatContextRequest) -> SearchResponse:
        try:
            results = service.chat_context(request.messages, request.k)
        except RetrievalError as exc:
            raise _http_error(exc) from exc
        return SearchResponse(items=[SearchHit.from_result(r) for r in results])

    return app
