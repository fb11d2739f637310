"""Shared test helpers."""

import json

from PySide6.QtCore import QCoreApplication

PROJECT_PATH = "/home/wiz/projects/myapp"
ENCODED_PROJECT = "-home-wiz-projects-myapp"


def wait_for_worker(manager):
    """Wait for any background session worker to finish and deliver its signal."""
    if manager._worker is not None:
        manager._worker.wait(5000)
    QCoreApplication.processEvents()


def make_line(**fields) -> str:
    return json.dumps(fields)


def user_line(uuid, content, parent=None, **extra) -> str:
    return make_line(
        type="user",
        uuid=uuid,
        parentUuid=parent,
        timestamp="2026-02-13T10:00:00.000Z",
        message={"role": "user", "content": content},
        **extra,
    )


def assistant_line(uuid, parent, tools=(), text="") -> str:
    blocks = [{"type": "text", "text": text}] if text else []
    blocks += [
        {"type": "tool_use", "id": f"toolu_{uuid}_{i}", "name": name, "input": {}}
        for i, name in enumerate(tools)
    ]
    return make_line(
        type="assistant",
        uuid=uuid,
        parentUuid=parent,
        timestamp="2026-02-13T10:00:01.000Z",
        message={"role": "assistant", "content": blocks},
    )


def tool_result_line(uuid, parent, file_path, original=None) -> str:
    result = {"filePath": file_path}
    if original is not None:
        result["originalFile"] = original
    return make_line(
        type="user",
        uuid=uuid,
        parentUuid=parent,
        timestamp="2026-02-13T10:00:02.000Z",
        message={"role": "user", "content": [{"type": "tool_result", "tool_use_id": "x", "content": "ok"}]},
        toolUseResult=result,
    )


def snapshot_line(message_id, backups: dict) -> str:
    tracked = {
        path: {"backupFileName": name, "version": version}
        for path, (name, version) in backups.items()
    }
    return make_line(
        type="file-history-snapshot",
        messageId=message_id,
        snapshot={"messageId": message_id, "trackedFileBackups": tracked},
        isSnapshotUpdate=False,
    )
