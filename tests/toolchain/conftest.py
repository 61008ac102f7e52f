"""Shared fixtures and helpers for toolchain tests.

## Mock Process Factory

- `create_mock_process()` - Popen mock whose communicate() returns canned output

## Usage Example

```python
def test_go_run(toolchain, mock_popen, process_factory):
    mock_popen.return_value = process_factory(output="60000\\n")
    result = toolchain.run("package main\\n")
    assert result.output == "60000\\n"
```
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from subprocess import TimeoutExpired
from unittest.mock import MagicMock, patch

import pytest

from goeval.core.config import EvalConfig
from goeval.toolchain.go import GoToolchain


def create_mock_process(
    output: str = "",
    returncode: int = 0,
    never_finish: bool = False,
    partial_output: str = "",
) -> MagicMock:
    """Create a mock Popen process for testing.

    Args:
        output: Combined stdout/stderr returned by communicate().
        returncode: Exit code exposed as process.returncode.
        never_finish: If True, the first communicate() raises TimeoutExpired
            and the second (after kill) returns partial_output.
        partial_output: Output returned after the process is killed.

    Returns:
        MagicMock configured to behave like a Popen process

    """
    mock_process = MagicMock()
    mock_process.returncode = returncode

    if never_finish:
        mock_process.returncode = -9
        mock_process.communicate.side_effect = [
            TimeoutExpired(cmd=["go"], timeout=5),
            (partial_output, None),
        ]
    else:
        mock_process.communicate.return_value = (output, None)

    return mock_process


@pytest.fixture
def process_factory() -> Callable[..., MagicMock]:
    """Expose create_mock_process to tests as a fixture."""
    return create_mock_process


@pytest.fixture
def eval_config(tmp_path: Path) -> EvalConfig:
    """Config writing programs into a per-test temp dir."""
    return EvalConfig(tmpdir=str(tmp_path))


@pytest.fixture
def toolchain(eval_config: EvalConfig) -> GoToolchain:
    """GoToolchain bound to the per-test config."""
    return GoToolchain(eval_config)


@pytest.fixture
def mock_popen() -> Iterator[MagicMock]:
    """Patch Popen as imported by the go toolchain module."""
    with patch("goeval.toolchain.go.Popen") as mock:
        yield mock
