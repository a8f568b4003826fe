"""Route modules import cleanly on their own, in a fresh interpreter."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent / "src"


@pytest.mark.parametrize("module", ["auth", "export", "layout", "summary", "transactions"])
def test_route_module_imports_before_app(module):
    env = {**os.environ, "PYTHONPATH": str(SRC_DIR)}
    result = subprocess.run(
        [sys.executable, "-c", f"import finfly.api.routes.{module} as m; assert m.router"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0, result.stderr
