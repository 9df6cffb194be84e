"""CLI entry point for the reverse image search runner."""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from revsearch.errors import EngineError
from revsearch.messaging.redis_client import RedisMessageBus
from revsearch.models import ImageRecord
from revsearch.pipeline.orchestrator import SearchOrchestrator
from revsearch.utils.config import settings
from revsearch.utils.datauri import bytes_to_data_url
from revsearch.utils.logger import get_logger
from revsearch.web import ENGINES
from revsearch.web.http import close_http_client
from revsearch.web.search_engine import SearchResult

log = get_logger(__name__)


def load_image(path: Path) -> ImageRecord:
    """Read a local image file into an ImageRecord."""
    data = path.read_bytes()
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return ImageRecord(
        data_url=bytes_to_data_url(data, mime_type),
        filename=path.name,
        mime_type=mime_type,
        size=len(data),
    )


def print_results(results: Optional[List[SearchResult]]) -> None:
    if results is None:
        print("\nSearch session expired.\n")
        return
    print(f"\n{len(results)} results:")
    for i, r in enumerate(results, 1):
        print(f"  [{i}] {r.page_url}")
        print(f"      image: {r.image_url}")
        if r.text:
            print(f"      {r.text}")
    print()


async def run(task_id: Optional[str], engine: str, image_path: Optional[Path]) -> int:
    bus = RedisMessageBus()
    try:
        if image_path is not None:
            task_id = await bus.queue_task(load_image(image_path), search={"assetType": "image"})
            print(f"Queued task {task_id}")

        orchestrator = SearchOrchestrator(bus)
        try:
            results = await orchestrator.run(ENGINES[engine], engine, task_id)
        except EngineError as exc:
            print(f"\nError: {exc}\n")
            return 1
        except Exception:
            log.exception("Search task %s failed", task_id)
            return 1

        print_results(results)
        return 0
    finally:
        await close_http_client()
        await bus.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Reverse image search runner")
    parser.add_argument("task_id", nargs="?", help="Queued task to run")
    parser.add_argument("--engine", "-e", default=settings.default_engine,
                        choices=sorted(ENGINES), help="Search engine")
    parser.add_argument("--image", type=Path,
                        help="Queue this image file as a new task, then run it")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.verbose:
        import logging
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.task_id and not args.image:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(run(args.task_id, args.engine, args.image)))


if __name__ == "__main__":
    main()
