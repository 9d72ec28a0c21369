"""
Shared fixtures

vault: a temporary directory of notes, filled per test through write()
log_records: captures loguru records emitted during a test
"""

from pathlib import Path
from typing import Callable, Dict, List

import pytest
from loguru import logger


@pytest.fixture
def vault(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Return a function writing {relative path: content} notes below tmp_path"""

    def write(notes: Dict[str, str]) -> Path:
        for name, content in notes.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture
def log_records() -> List[dict]:
    """Collect loguru records at INFO and above"""
    records: List[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="INFO")
    yield records
    logger.remove(handler_id)
