"""
Summary: Validate module header docstring schemas for publish and platform modules.
Why: Prevent regression to inconsistent header formats across touched files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

REPO_ROOT: Path = Path(__file__).resolve().parents[1]
HEADER_OPEN: str = '"""'
HEADER_CLOSE: str = '"""'
SUMMARY_PREFIX: str = "Summary: "
WHY_PREFIX: str = "Why: "
SUMMARY_OFFSET: int = 1
WHY_OFFSET: int = 2
CLOSE_OFFSET: int = 3
HEADER_LENGTH: int = 4

TARGET_MODULES: tuple[Path, ...] = (
    Path("src/appstage/features/publish/__init__.py"),
    Path("src/appstage/features/publish/domain/errors.py"),
    Path("src/appstage/features/publish/domain/models.py"),
    Path("src/appstage/features/publish/domain/runtime_identifier.py"),
    Path("src/appstage/features/publish/usecases/ports.py"),
    Path("src/appstage/features/publish/usecases/build_invoker.py"),
    Path("src/appstage/features/publish/usecases/publish_cache.py"),
    Path("src/appstage/features/publish/adapters/filesystem_adapter.py"),
    Path("tests/test_module_header_schema.py"),
)


@pytest.mark.parametrize("module_path", TARGET_MODULES, ids=lambda path: str(path))
def test_module_headers_follow_summary_why_schema(module_path: Path) -> None:
    """Ensure module header docstring uses Summary and Why lines."""

    content_lines = (REPO_ROOT / module_path).read_text(encoding="utf-8").splitlines()
    start_index = next(
        (index for index, line in enumerate(content_lines) if line.strip()),
        None,
    )
    assert start_index is not None, f"{module_path} must not be empty"

    assert len(content_lines) >= start_index + HEADER_LENGTH, (
        f"{module_path} must provide at least {HEADER_LENGTH} header lines"
    )

    opening_line = content_lines[start_index].strip()
    assert opening_line == HEADER_OPEN, f"{module_path} must start with header docstring"

    summary_line = content_lines[start_index + SUMMARY_OFFSET]
    why_line = content_lines[start_index + WHY_OFFSET]
    closing_line = content_lines[start_index + CLOSE_OFFSET].strip()

    assert summary_line.startswith(SUMMARY_PREFIX), (
        f"{module_path} summary line must begin with '{SUMMARY_PREFIX}'"
    )
    assert why_line.startswith(WHY_PREFIX), (
        f"{module_path} why line must begin with '{WHY_PREFIX}'"
    )
    assert closing_line == HEADER_CLOSE, (
        f"{module_path} header must close with triple quotes"
    )

    assert summary_line.removeprefix(SUMMARY_PREFIX).strip(), (
        f"{module_path} summary text cannot be empty"
    )
    assert why_line.removeprefix(WHY_PREFIX).strip(), (
        f"{module_path} why text cannot be empty"
    )


WHERE_PREFIX: str = "Where: "
WHAT_PREFIX: str = "What: "

LOCATED_MODULES: tuple[Path, ...] = (
    Path("src/appstage/config/settings.py"),
    Path("src/appstage/platform/process.py"),
    Path("src/appstage/platform/retry.py"),
    Path("src/appstage/platform/logging/scopes.py"),
)


@pytest.mark.parametrize("module_path", LOCATED_MODULES, ids=lambda path: str(path))
def test_platform_headers_follow_where_what_why_schema(module_path: Path) -> None:
    """Ensure Where/What/Why headers open the module and name its real location."""

    content_lines = (REPO_ROOT / module_path).read_text(encoding="utf-8").splitlines()
    assert content_lines, f"{module_path} must not be empty"

    where_line, what_line, why_line = content_lines[0], content_lines[1], content_lines[2]

    assert where_line == f"{HEADER_OPEN}{WHERE_PREFIX}{module_path.as_posix()}", (
        f"{module_path} must open with a Where line naming its own path"
    )
    assert what_line.startswith(WHAT_PREFIX) and what_line.removeprefix(WHAT_PREFIX).strip(), (
        f"{module_path} what line must begin with '{WHAT_PREFIX}' and carry text"
    )
    assert why_line.startswith(WHY_PREFIX) and why_line.removeprefix(WHY_PREFIX).strip(), (
        f"{module_path} why line must begin with '{WHY_PREFIX}' and carry text"
    )
    assert HEADER_CLOSE in {line.strip() for line in content_lines[3:8]}, (
        f"{module_path} header must close with triple quotes"
    )
