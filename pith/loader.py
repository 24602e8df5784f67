"""
Loads fact records written by the extraction stage.

Each fact file holds either one record or a list of records. Files are read
concurrently through the admission limiter; a bad file is reported and
skipped rather than failing the whole load.
"""
import asyncio
import json
from pathlib import Path
from typing import List, Dict, Any, Sequence, Tuple

from pydantic import ValidationError

from .errors import PithError, ErrorCode
from .models import FileFact, parse_facts
from .utils.concurrency import run_limited
from .utils.logger import get_logger

logger = get_logger("loader")


def read_fact_file(path: str) -> List[FileFact]:
    """Read and validate one fact file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise PithError(ErrorCode.FILE_NOT_FOUND, f"Fact file {path} does not exist")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = json.load(f)
    except json.JSONDecodeError as e:
        raise PithError(ErrorCode.PARSE_ERROR, f"Invalid JSON in {path}: {e}") from e

    records: List[Dict[str, Any]] = content if isinstance(content, list) else [content]
    try:
        return parse_facts(records)
    except ValidationError as e:
        raise PithError(ErrorCode.PARSE_ERROR, f"Invalid fact record in {path}: {e.errors()[0]['msg']}") from e


async def load_fact_files(paths: Sequence[str], max_concurrent: int) -> Tuple[List[FileFact], List[Exception]]:
    """Load many fact files with bounded concurrency. Returns (facts, errors)."""
    tasks = [lambda path=path: asyncio.to_thread(read_fact_file, path) for path in paths]
    outcomes = await run_limited(tasks, max_concurrent, return_exceptions=True)

    facts: List[FileFact] = []
    errors: List[Exception] = []
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, Exception):
            logger.error(f"Error loading {path}: {outcome}")
            errors.append(outcome)
            continue
        facts.extend(outcome)

    logger.info(f"Loaded {len(facts)} fact records from {len(paths)} files, {len(errors)} errors")
    return facts, errors
