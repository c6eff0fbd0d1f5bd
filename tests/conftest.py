import sys
from pathlib import Path


def _add_to_path(*paths: Path) -> None:
    for path in paths:
        if str(path) not in sys.path:
            sys.path.insert(0, str(path))


_ROOT = Path(__file__).resolve().parents[1]
_add_to_path(_ROOT / "src", _ROOT / "tests" / "unit")
