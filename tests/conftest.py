from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest
import structlog

FIXTURE_BUILD_ROOT = Path(__file__).parent / "fixtures" / "build_root"

WAREHOUSE_ARTIFACT = Path(
    "artifacts", "contracts", "rainbowbridge.sol", "RainbowWarehouse.json"
)
ERC20_ARTIFACT = Path("artifacts", "contracts", "mocks", "MockERC20.sol", "MockERC20.json")


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Per-test (uncached) structlog processors; module loggers stay stdlib-backed."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A writable copy of the fixture project with both contracts compiled."""
    root = tmp_path / "project"
    shutil.copytree(FIXTURE_BUILD_ROOT, root)
    return root
