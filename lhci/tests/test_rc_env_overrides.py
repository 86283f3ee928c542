from __future__ import annotations

import json
import pathlib

from lhci.configs.options import load_env_overrides, resolve_options


def test_env_overrides_nested_and_camel_cased():
    env = {
        "LHCI_TOKEN": "abc",
        "LHCI_SERVER_BASE_URL": "http://localhost:9001",
        "LHCI_BUILD_CONTEXT__CURRENT_HASH": "deadbeef",
        "LHCI_NUMBER_OF_RUNS": "5",
        "LHCI_UPLOAD_ENABLED": "TRUE",
        "LHCI_NO_LIGHTHOUSERC": "",
        "LHCI_": "ignored",
        "PATH": "/usr/bin",
    }
    assert load_env_overrides(env) == {
        "token": "abc",
        "serverBaseUrl": "http://localhost:9001",
        "buildContext": {"currentHash": "deadbeef"},
        "numberOfRuns": 5,
        "uploadEnabled": True,
    }


def test_env_overrides_custom_prefix():
    assert load_env_overrides({"CI_X__Y": "[1, 2]", "LHCI_Z": "1"}, prefix="CI_") == {"x": {"y": [1, 2]}}


def test_resolve_options_layers_env_over_rc(tmp_path: pathlib.Path):
    (tmp_path / "base.json").write_text(json.dumps({"ci": {"upload": {"target": "temporary-public-storage"}}}), encoding="utf-8")
    rc = tmp_path / "lighthouserc.json"
    rc.write_text(json.dumps({"ci": {"extends": "base.json", "collect": {"numberOfRuns": 3}}}), encoding="utf-8")
    resolved = resolve_options(argv=[], env={"LHCI_NUMBER_OF_RUNS": "1"}, cwd=tmp_path)
    assert resolved.rc_path == rc
    assert resolved.options == {"target": "temporary-public-storage", "numberOfRuns": 1}
    assert resolved.sources == [tmp_path / "base.json", rc]


def test_resolve_options_without_rc_file(tmp_path: pathlib.Path):
    (tmp_path / "lighthouserc.json").write_text("{}", encoding="utf-8")
    resolved = resolve_options(argv=["--no-lighthouserc"], env={"LHCI_TOKEN": "t"}, cwd=tmp_path)
    assert resolved.rc_path is None
    assert resolved.sources == []
    assert resolved.options == {"token": "t"}


def test_resolve_options_explicit_path(tmp_path: pathlib.Path):
    rc = tmp_path / "custom.json"
    rc.write_text(json.dumps({"ci": {"server": {"port": 9009}}}), encoding="utf-8")
    resolved = resolve_options(str(rc), argv=[], env={})
    assert resolved.rc_path == rc
    assert resolved.options == {"port": 9009}


def test_env_override_constants_stay_strings():
    env = {"LHCI_TOKEN": "null", "LHCI_A": "NaN", "LHCI_B": "Infinity", "LHCI_C": "-Infinity"}
    assert load_env_overrides(env) == {"token": "null", "a": "NaN", "b": "Infinity", "c": "-Infinity"}
