import os
from typing import Any

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_parser import parse

# Start coverage in subprocesses spawned by CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


def parse_ok(source: str) -> Program:
    """Parses `source` and fails the test with every recorded error if it did not parse."""
    result = parse(source)
    if result.errors:
        pytest.fail(
            f"parser has {len(result.errors)} errors:\n" + "\n".join(result.errors)
        )
    return result.program


@pytest.fixture  # type: ignore[misc]
def parsed() -> Any:
    return parse_ok
