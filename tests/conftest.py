"""Pytest configuration and fixtures for omnifocus-mcp tests."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from omnifocus_mcp.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch, tmp_path):
    """Keep settings independent of the developer's environment and env files."""
    for var in ("OMNIFOCUS_MCP_OSASCRIPT", "OMNIFOCUS_MCP_TIMEOUT", "OMNIFOCUS_MCP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_export():
    """A raw database export as produced by the OmniJS dump script."""
    return {
        "exportDate": "2025-03-01T09:00:00.000Z",
        "tasks": [
            {
                "id": "t1",
                "name": "Draft outline",
                "note": "Chapters 1-3",
                "taskStatus": "Available",
                "flagged": True,
                "dueDate": "2025-03-15T17:00:00",
                "deferDate": None,
                "estimatedMinutes": 45,
                "tags": ["g1", "g2"],
                "projectId": "p1",
                "parentTaskId": None,
                "childIds": ["t2"],
                "sequential": True,
                "completedByChildren": False,
                "inInbox": False,
            },
            {
                "id": "t2",
                "name": "Research sources",
                "note": "",
                "taskStatus": "Next",
                "flagged": False,
                "dueDate": None,
                "deferDate": "2025-03-02T08:00:00",
                "estimatedMinutes": 120,
                "tags": ["g3"],
                "projectId": "p1",
                "parentTaskId": "t1",
                "childIds": [],
                "sequential": False,
                "completedByChildren": False,
                "inInbox": False,
            },
            {
                "id": "t3",
                "name": "Send invoice",
                "note": "",
                "taskStatus": "Completed",
                "flagged": False,
                "dueDate": None,
                "deferDate": None,
                "estimatedMinutes": None,
                "tags": [],
                "projectId": "p1",
                "parentTaskId": None,
                "childIds": [],
                "sequential": False,
                "completedByChildren": False,
                "inInbox": False,
            },
            {
                "id": "t4",
                "name": "Buy milk",
                "note": "",
                "taskStatus": "Available",
                "flagged": False,
                "dueDate": None,
                "deferDate": None,
                "estimatedMinutes": 0,
                "tags": ["missing"],
                "projectId": None,
                "parentTaskId": None,
                "childIds": None,
                "sequential": False,
                "completedByChildren": False,
                "inInbox": True,
            },
        ],
        "projects": {
            "p1": {
                "id": "p1",
                "name": "Book",
                "status": "Active",
                "folderId": "f1",
                "dueDate": None,
                "flagged": False,
                "taskIds": ["t1", "t2", "t3"],
            },
            "p2": {
                "id": "p2",
                "name": "Someday",
                "status": "OnHold",
                "folderId": None,
                "dueDate": "2025-04-01T12:00:00",
                "flagged": True,
                "taskIds": [],
            },
        },
        "folders": {
            "f1": {
                "id": "f1",
                "name": "Writing",
                "parentFolderId": None,
                "projectIds": ["p1"],
                "subfolderIds": [],
            },
        },
        "tags": {
            "g1": {"id": "g1", "name": "urgent", "parentTagId": None, "active": True},
            "g2": {"id": "g2", "name": "us", "parentTagId": None, "active": True},
            "g3": {"id": "g3", "name": "unique", "parentTagId": None, "active": True},
        },
    }


@pytest.fixture
def mock_subprocess_success():
    """Mock subprocess.run to return an empty successful run."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        yield mock_run


@pytest.fixture
def mock_subprocess_with_export(sample_export):
    """Mock subprocess.run to return the sample database export."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(returncode=0, stdout=json.dumps(sample_export), stderr="")
        yield mock_run


@pytest.fixture
def mock_subprocess_error():
    """Mock subprocess.run to simulate an osascript error."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = MagicMock(
            returncode=1,
            stdout="",
            stderr="execution error: OmniFocus got an error: Application isn't running. (-600)",
        )
        yield mock_run


@pytest.fixture
def mock_subprocess_timeout():
    """Mock subprocess.run to simulate a timeout."""
    with patch("subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="osascript", timeout=60)
        yield mock_run

