"""
Command-line entry point for the offline retrieval engine.

Usage:
    offline-rag serve --port 8000
    offline-rag ingest handbook docs/handbook.txt --source upload
    offline-rag search "how do I reset the device?" -k 3
    offline-rag health
    offline-rag documents
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vector_store.exceptions import RetrievalError, format_error_chain

from .config import RetrievalConfig
from .logging_config import get_logger, setup_logging
from .models import SearchHit
from .service import RetrievalService

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="offline-rag",
        description="Chunk, embed and search documents in a local SQLite index.",
    )
    parser.add_argument("--db", help="SQLite database path (overrides OFFLINE_RAG_DB_PATH)")
    parser.add_argument(
        "--embedder",
        choices=["ollama", "sentence-transformers", "hashing"],
        help="Embedding backend (overrides OFFLINE_RAG_EMBEDDER)",
    )
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    ingest = subparsers.add_parser("ingest", help="Ingest a UTF-8 text file")
    ingest.add_argument("doc_id")
    ingest.add_argument("path", type=Path)
    ingest.add_argument("--source")
    ingest.add_argument("--chunk-chars", type=int)
    ingest.add_argument("--overlap-chars", type=int)

    search = subparsers.add_parser("search", help="Top-K search")
    search.add_argument("query")
    search.add_argument("-k", type=int, default=None)

    subparsers.add_parser("health", help="Report embedder and store readiness")
    subparsers.add_parser("documents", help="List ingested documents")
    return parser


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    config = RetrievalConfig.from_env()
    if args.db:
        config.db_path = args.db
    if args.embedder:
        config.embedder_backend = args.embedder
    if args.log_level:
        config.log_level = args.log_level
    setup_logging(config.log_level)

    if args.command == "serve":
        import uvicorn

        from .app import create_app

        uvicorn.run(create_app(config), host=args.host, port=args.port)
        return 0

    service = RetrievalService.from_config(config)
    try:
        if args.command == "ingest":
            try:
                text = args.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Cannot read %s: %s", args.path, e)
                print(f"Error: cannot read {args.path}: {e}", file=sys.stderr)
                return 1
            result = service.ingest(
                args.doc_id,
                text,
                chunk_size=args.chunk_chars,
                overlap=args.overlap_chars,
                source=args.source,
            )
            _print_json({"doc_id": result.doc_id, "chunks": result.chunks})
        elif args.command == "search":
            results = service.retrieve_top_k(args.query, args.k, policy=config.search_policy)
            _print_json([SearchHit.from_result(r).model_dump() for r in results])
        elif args.command == "health":
            health = service.health()
            _print_json(health.model_dump(mode="json"))
            return 0 if health.ready else 1
        elif args.command == "documents":
            _print_json([d.model_dump(mode="json") for d in service.list_documents()])
    except RetrievalError as e:
        logger.error(format_error_chain(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
