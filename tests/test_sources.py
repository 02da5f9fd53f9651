from __future__ import annotations

import warnings
from pathlib import Path

import pytest

PACKAGE_DIR = Path(__file__).resolve().parent.parent / "timeline_chart"


@pytest.mark.parametrize("path", sorted(PACKAGE_DIR.glob("*.py")), ids=lambda p: p.name)
def test_module_compiles_without_escape_warnings(path):
    source = path.read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, str(path), "exec")
