from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from weekplanner.cmd.api.main import create_app
from weekplanner.core.errors import NotFoundError, ValidationError
from weekplanner.services import AttachmentBinder, LocalFileStorage

from conftest import MISSING_ID, TASK


def _upload(client, name="plan.pdf", content=b"%PDF-1.4 plan", **data):
    return client.post(
        "/tasks/upload",
        files={"file": (name, content, "application/pdf")},
        data=data,
    )


def test_upload_stores_file_without_touching_tasks(client, settings):
    task = client.post("/tasks", json=TASK).json()

    response = _upload(client, task_id=task["id"])

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "plan.pdf" in response.text
    assert (Path(settings.upload_dir) / "plan.pdf").read_bytes() == b"%PDF-1.4 plan"
    assert client.get(f"/tasks/{task['id']}").json()["file"] is None


def test_upload_with_same_name_overwrites(client, settings):
    _upload(client, content=b"first")
    _upload(client, content=b"second")

    assert (Path(settings.upload_dir) / "plan.pdf").read_bytes() == b"second"


def test_upload_strips_directories_from_filename(client, settings):
    response = _upload(client, name="../../escape.txt", content=b"x")

    assert response.status_code == 200
    assert (Path(settings.upload_dir) / "escape.txt").exists()
    assert not (Path(settings.upload_dir).parent.parent / "escape.txt").exists()


def test_upload_without_file_is_rejected(client):
    response = client.post("/tasks/upload", data={"task_id": MISSING_ID})

    assert response.status_code == 422
    assert response.json()["error_code"] == 1


def test_upload_over_size_limit_is_rejected(settings, store):
    settings.max_upload_size_mb = 0
    client = TestClient(create_app(settings, store))

    response = _upload(client)

    assert response.status_code == 413
    assert not (Path(settings.upload_dir) / "plan.pdf").exists()


def test_attach_sets_task_file_after_upload(client):
    task = client.post("/tasks", json=TASK).json()
    _upload(client)

    response = client.put(f"/tasks/{task['id']}/file", json={"filename": "plan.pdf"})

    assert response.status_code == 200
    assert response.json() == dict(task, file="plan.pdf")


def test_attach_unknown_file_is_404(client):
    task = client.post("/tasks", json=TASK).json()

    response = client.put(f"/tasks/{task['id']}/file", json={"filename": "missing.pdf"})

    assert response.status_code == 404
    assert client.get(f"/tasks/{task['id']}").json()["file"] is None


def test_attach_to_unknown_task_is_404(client):
    _upload(client)

    response = client.put(f"/tasks/{MISSING_ID}/file", json={"filename": "plan.pdf"})

    assert response.status_code == 404


def test_bind_file_only_acknowledges(planner, tmp_path):
    binder = AttachmentBinder(LocalFileStorage(str(tmp_path)), planner)

    receipt = binder.bind_file("plan.pdf", task_id=MISSING_ID)

    assert receipt.filename == "plan.pdf"
    assert receipt.task_id == MISSING_ID


@pytest.mark.asyncio
async def test_attach_checks_storage_before_task(planner, tmp_path):
    binder = AttachmentBinder(LocalFileStorage(str(tmp_path)), planner)
    task = await planner.create_task(TASK)

    with pytest.raises(NotFoundError):
        await binder.attach(task.id, "plan.pdf")

    assert (await planner.get_task(task.id)).file is None


@pytest.mark.parametrize("filename", ["", None, ".."])
def test_storage_rejects_empty_filenames(tmp_path, filename):
    with pytest.raises(ValidationError):
        LocalFileStorage(str(tmp_path)).save(filename, b"x")
