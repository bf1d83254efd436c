from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import respx

from order_workflow.cli import main as cli_main
from order_workflow.logging.init import reset_logging
from order_workflow.store.workbook import WorkbookTableStore

URL = "https://orders.example.com/upload"


def test_cli_approve(write_config, sample_workbook: Path, capsys):
    reset_logging()
    code = cli_main(["approve"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO 2 item(s) moved to 'Approved'" in out
    assert "SUMMARY action=approve status=success moved=2 elapsed_sec=" in out

    store = WorkbookTableStore.open(sample_workbook)
    assert len(store.read_all("Approved")) == 3
    assert len(store.read_all("Raw Responses")) == 2


def test_cli_config_missing(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["approve"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config:" in out


def test_cli_workbook_missing(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["approve"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR workbook: workbook not found" in out


def test_cli_no_selection_writes_error_log(write_config, sample_workbook: Path, temp_workdir: Path, capsys):
    reset_logging()
    assert cli_main(["approve"]) == 0
    capsys.readouterr()

    reset_logging()
    code = cli_main(["approve"])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR approve: no rows checked in 'Requested'" in out
    assert "SUMMARY action=approve status=failed moved=0" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    assert '"error_type": "NO_SELECTION"' in logs[0].read_text(encoding="utf-8")


def test_cli_download(write_config, sample_workbook: Path, temp_workdir: Path, capsys):
    reset_logging()
    cli_main(["approve"])
    reset_logging()
    code = cli_main(["download"])
    out = capsys.readouterr().out
    assert code == 0
    exports = list((temp_workdir / "exports").glob("Order_*.csv"))
    assert len(exports) == 1
    lines = exports[0].read_text(encoding="utf-8").split("\n")
    assert [line.split("||")[1:] for line in lines] == [["Widget", "2", "alice"], ["Bolt", "10", "carol"]]
    assert "SUMMARY action=download status=success moved=2" in out

    store = WorkbookTableStore.open(sample_workbook)
    assert len(store.read_all("Approved")) == 1
    assert len(store.read_all("Ordered")) == 3


def test_cli_download_nothing_to_do(write_config, sample_workbook: Path, capsys):
    reset_logging()
    code = cli_main(["download"])
    out = capsys.readouterr().out
    assert code == 0
    assert "status=nothing_to_do" in out


@respx.mock
def test_cli_send_success(write_config, sample_workbook: Path, capsys):
    respx.post(URL).mock(return_value=httpx.Response(200, text="thanks"))
    reset_logging()
    cli_main(["approve"])
    reset_logging()
    code = cli_main(["send"])
    out = capsys.readouterr().out
    assert code == 0
    assert "server response: thanks" in out
    assert len(WorkbookTableStore.open(sample_workbook).read_all("Ordered")) == 3


@respx.mock
def test_cli_send_failure(write_config, sample_workbook: Path, capsys):
    respx.post(URL).mock(return_value=httpx.Response(503, text="maintenance"))
    reset_logging()
    cli_main(["approve"])
    reset_logging()
    code = cli_main(["send"])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR send: server replied with status 503" in out
    store = WorkbookTableStore.open(sample_workbook)
    assert len(store.read_all("Approved")) == 3
    assert len(store.read_all("Ordered")) == 1


@respx.mock
def test_cli_env_file_overrides_endpoint(write_config, sample_workbook: Path, temp_workdir: Path, capsys, monkeypatch):
    # teardown で元に戻すため先に monkeypatch 経由で登録
    monkeypatch.setenv("ORDER_ENDPOINT_URL", "https://placeholder.invalid/")
    (temp_workdir / ".env").write_text("ORDER_ENDPOINT_URL=https://alt.example.com/in\n", encoding="utf-8")
    default_route = respx.post(URL).mock(return_value=httpx.Response(200, text="default"))
    alt_route = respx.post("https://alt.example.com/in").mock(return_value=httpx.Response(200, text="alt"))

    reset_logging()
    cli_main(["approve"])
    reset_logging()
    assert cli_main(["send"]) == 0
    assert alt_route.call_count == 1
    assert default_route.call_count == 0


def test_cli_debug_mode(write_config, sample_workbook: Path, capsys):
    reset_logging()
    code = cli_main(["--debug", "approve"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG workbook:" in out


def test_cli_unknown_command(temp_workdir: Path):
    with pytest.raises(SystemExit) as e:
        cli_main(["archive"])
    assert e.value.code == 2
