"""
Tests for the epdqplus CLI.

The HTTP transport is replaced with the recording fake from conftest so
the commands run end to end without network access.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from typer.testing import CliRunner

from epdqplus import cli
from epdqplus.config import Settings

runner = CliRunner()

_CARD_ARGS = [
    "--amount",
    "49.95",
    "--currency",
    "USD",
    "--card-number",
    "5569510117486571",
    "--expiration",
    "05/15",
]


@pytest.fixture()
def fake(monkeypatch: pytest.MonkeyPatch, make_transport: Any) -> Any:
    transport = make_transport()
    monkeypatch.setattr(cli, "HttpxTransport", lambda timeout: transport)
    monkeypatch.setattr(
        cli,
        "settings",
        Settings(_env_file=None, EPDQ_PSPID="MYSHOP", EPDQ_LOGIN="apiuser", EPDQ_PASSWORD="pw"),
    )
    return transport


class TestSubmit:
    def test_approved_json(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["--json", "submit", *_CARD_ARGS])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["is_success"] is True
        assert payload["authorization"] == "98765"
        assert payload["result_code"] == "1234"

    def test_credentials_from_settings(self, fake: Any) -> None:
        runner.invoke(cli.app, ["submit", *_CARD_ARGS])
        fields = fake.last_fields
        assert fields["PSPID"] == "MYSHOP"
        assert fields["USERID"] == "apiuser"
        assert fields["OPERATION"] == "SAL"
        assert fields["AMOUNT"] == "4995"
        assert fields["ED"] == "0515"

    def test_options_override_settings(self, fake: Any) -> None:
        runner.invoke(cli.app, ["submit", *_CARD_ARGS, "--pspid", "OTHER", "--cvv2", "377"])
        assert fake.last_fields["PSPID"] == "OTHER"
        assert fake.last_fields["CVC"] == "377"

    def test_extra_fields(self, fake: Any) -> None:
        result = runner.invoke(
            cli.app,
            ["submit", *_CARD_ARGS, "--field", "order_number=ORDER0001", "-f", "name=B Obama"],
        )
        assert result.exit_code == 0, result.output
        assert fake.last_fields["ORDERID"] == "ORDER0001"
        assert fake.last_fields["CN"] == "B Obama"

    def test_bad_field_syntax(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["submit", *_CARD_ARGS, "--field", "order_number"])
        assert result.exit_code == 1
        assert "key=value" in result.output
        assert fake.calls == []

    def test_empty_field_key(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["submit", *_CARD_ARGS, "--field", "=ORDER0001"])
        assert result.exit_code == 1
        assert fake.calls == []

    def test_test_flag_selects_test_server(self, fake: Any) -> None:
        runner.invoke(cli.app, ["--test", "submit", *_CARD_ARGS])
        endpoint, _ = fake.calls[0]
        assert endpoint.host == "mdepayments.epdq.co.uk"

    def test_server_defaults_to_setting(self, fake: Any, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli.settings, "EPDQ_TEST_MODE", True)
        runner.invoke(cli.app, ["submit", *_CARD_ARGS])
        endpoint, _ = fake.calls[0]
        assert endpoint.host == "mdepayments.epdq.co.uk"

    def test_live_flag_overrides_test_mode_setting(
        self, fake: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(cli.settings, "EPDQ_TEST_MODE", True)
        runner.invoke(cli.app, ["--live", "submit", *_CARD_ARGS])
        endpoint, _ = fake.calls[0]
        assert endpoint.host == "payments.epdq.co.uk"

    def test_shasign_signs_request(self, fake: Any) -> None:
        runner.invoke(cli.app, ["submit", *_CARD_ARGS, "--shasign", "phrase"])
        assert len(fake.last_fields["SHASIGN"]) == 128

    def test_declined_exit_code(self, fake: Any, declined_xml: str) -> None:
        fake.body = declined_xml
        result = runner.invoke(cli.app, ["--json", "submit", *_CARD_ARGS])
        assert result.exit_code == 2
        payload = json.loads(result.stdout)
        assert payload["is_success"] is False
        assert payload["failure_status"] == "declined"
        assert payload["error_message"] == "Failed: Status: 0, Error: 50001113, Message:Not enough money"

    def test_validation_error_exit_code(self, fake: Any) -> None:
        args = [a if a != "05/15" else "0515" for a in _CARD_ARGS]
        result = runner.invoke(cli.app, ["submit", *args])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert fake.calls == []

    def test_table_output(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["submit", *_CARD_ARGS])
        assert result.exit_code == 0, result.output
        assert "Transaction Result" in result.output
        assert "98765" in result.output


class TestInfo:
    def test_info_json(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["--json", "info"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["gateway_name"] == "Barclaycard EPDQ+ API Direct Link"
        assert payload["supported_actions"] == ["Normal Authorization"]

    def test_info_shows_endpoint(self, fake: Any) -> None:
        result = runner.invoke(cli.app, ["--test", "info"])
        assert result.exit_code == 0, result.output
        assert "https://mdepayments.epdq.co.uk/ncol/test/orderdirect.asp" in result.output
