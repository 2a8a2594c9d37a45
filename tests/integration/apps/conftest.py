from __future__ import annotations

import json
from typing import Any

import pytest


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        assert expected in capsys.readouterr().out

    return _run


@pytest.fixture
def run_print_config(capsys, parse_printed_config):
    def _run(mod, config_path: str, *extra: str) -> dict[str, Any]:
        mod.main(["--config", config_path, *extra, "--print-config"])
        return parse_printed_config(capsys.readouterr().out)

    return _run
