"""Unit tests for the JSONL session store."""

import json
import os

import pytest

from sessiontree.core.errors import SessionListingError
from sessiontree.core.store import SessionStore, encode_project_dir, read_session_summary


def write_session(path, header: dict | None, entries: list[dict] | None = None, mtime: int | None = None):
    lines = []
    if header is not None:
        lines.append(json.dumps({"type": "session", **header}))
    lines.extend(json.dumps(entry) for entry in entries or [])
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def user_message(text: str) -> dict:
    return {"type": "message", "message": {"role": "user", "content": [{"type": "text", "text": text}]}}


@pytest.mark.unit
def test_encode_project_dir():
    assert encode_project_dir("/home/me/app") == "--home-me-app--"


@pytest.mark.unit
def test_read_summary_collects_fields(tmp_path):
    path = write_session(
        tmp_path / "s.jsonl",
        {"id": "abc", "cwd": "/home/me/app", "timestamp": "2025-01-02T03:04:05Z"},
        [
            user_message("first question\nwith detail"),
            {"type": "message", "message": {"role": "assistant", "content": "answer"}},
            user_message("second question"),
            {"type": "session_info", "name": "Old name"},
            {"type": "session_info", "name": "Parser work"},
        ],
    )

    summary = read_session_summary(path)

    assert summary is not None
    assert summary.session_id == "abc"
    assert summary.cwd == "/home/me/app"
    assert summary.created_at.isoformat() == "2025-01-02T03:04:05+00:00"
    assert summary.first_line == "first question\nwith detail"
    assert summary.display_name == "Parser work"
    assert summary.message_count == 3


@pytest.mark.unit
def test_read_summary_without_timestamp_uses_mtime(tmp_path):
    path = write_session(tmp_path / "s.jsonl", {"cwd": "/x"}, mtime=1_700_000_000)

    summary = read_session_summary(path)

    assert summary is not None
    assert summary.created_at == summary.modified_at
    assert summary.modified_at.timestamp() == 1_700_000_000


@pytest.mark.unit
def test_read_summary_rejects_foreign_file(tmp_path):
    path = write_session(tmp_path / "s.jsonl", None, [user_message("hi")])

    assert read_session_summary(path) is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_project_sorted_by_modification(tmp_path):
    project = tmp_path / encode_project_dir("/home/me/app")
    project.mkdir()
    write_session(project / "old.jsonl", {"cwd": "/home/me/app"}, mtime=1_000)
    write_session(project / "new.jsonl", {"cwd": "/home/me/app"}, mtime=2_000)
    (project / "notes.txt").write_text("ignored", encoding="utf-8")

    sessions = await SessionStore(tmp_path).list_project("/home/me/app")

    assert [os.path.basename(s.path) for s in sessions] == ["new.jsonl", "old.jsonl"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_project_without_project_dir_is_empty(tmp_path):
    assert await SessionStore(tmp_path).list_project("/nowhere") == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_all_spans_projects(tmp_path):
    for cwd, mtime in (("/a", 1_000), ("/b", 3_000)):
        project = tmp_path / encode_project_dir(cwd)
        project.mkdir()
        write_session(project / "s.jsonl", {"cwd": cwd}, mtime=mtime)

    sessions = await SessionStore(tmp_path).list_all()

    assert [s.cwd for s in sessions] == ["/b", "/a"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_sessions_root_raises(tmp_path):
    store = SessionStore(tmp_path / "absent")

    with pytest.raises(SessionListingError):
        await store.list_all()
    with pytest.raises(SessionListingError):
        await store.list_project("/a")
