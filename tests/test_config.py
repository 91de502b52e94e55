import json
import os

from app_deploy.config import (
    CONFIG_FILENAME,
    get_config_path,
    get_workspace_root,
    load_config,
    load_targets,
    save_config,
)
from app_deploy.contracts import DeployTargetApp


def test_missing_config_is_empty(tmp_path):
    assert load_config(config_dir=str(tmp_path)) == {"targets": []}


def test_invalid_json_is_empty(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
    assert load_config(config_dir=str(tmp_path)) == {"targets": []}


def test_load_normalizes_entries(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    payload = {
        "targets": [
            {"name": "viewer", "app": "tools/viewer", "arguments": ["--open", "${file}"], "separator": ","},
            {"name": "sftp", "type": "sftp", "host": "example.org"},
            "garbage",
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    config = load_config(str(path))
    assert config["targets"] == [
        {"name": "viewer", "type": "app", "app": "tools/viewer", "separator": ",", "arguments": ["--open", "${file}"]},
        {"name": "sftp", "type": "sftp"},
    ]

    targets = load_targets(config_dir=str(tmp_path))
    assert targets == [
        DeployTargetApp(name="viewer", type="app", app="tools/viewer", arguments=["--open", "${file}"], separator=","),
    ]


def test_save_then_load(tmp_path):
    target = DeployTargetApp(name="editor", type="app", app="/usr/bin/editor", arguments=["${file}"])
    written = save_config([target, {"name": "other", "app": "x"}], config_dir=str(tmp_path / "cfg"))

    assert written == os.path.join(str(tmp_path / "cfg"), CONFIG_FILENAME)
    assert [t.name for t in load_targets(written)] == ["editor", "other"]


def test_get_config_path(tmp_path):
    assert get_config_path(str(tmp_path)) == os.path.join(str(tmp_path), CONFIG_FILENAME)


def test_workspace_root(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DEPLOY_WORKSPACE", str(tmp_path))
    assert get_workspace_root() == str(tmp_path)

    monkeypatch.delenv("APP_DEPLOY_WORKSPACE")
    monkeypatch.chdir(tmp_path)
    assert os.path.realpath(get_workspace_root()) == os.path.realpath(str(tmp_path))
