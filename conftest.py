import sys
from pathlib import Path

import pytest

# Fail fast if Python version is unsupported (datetime.fromisoformat needs 3.11 parsing rules)
if sys.version_info < (3, 11):
    print(
        f"ERROR: This project requires Python 3.11+ (found {sys.version.split()[0]}).",
        file=sys.stderr,
    )
    sys.exit(1)


ROOT_DIR = Path(__file__).parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def _isolate_workbench_env(monkeypatch):
    """Keep QUERYLENS_* variables from the developer shell out of tests."""
    for key in (
        "QUERYLENS_DEFAULT_PAGE_SIZE",
        "QUERYLENS_PAGE_SIZE_OPTIONS",
        "QUERYLENS_AUTOSAVE_DELAY_SECONDS",
        "QUERYLENS_STALE_RESPONSE_POLICY",
    ):
        monkeypatch.delenv(key, raising=False)
