"""Unit tests for CLI argument parsing and the error boundary."""
from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from aave_aptos.cli import _run, build_parser, main
from aave_aptos.errors import NotFoundError


class TestBuildParser:
    def test_supply_command(self) -> None:
        args = build_parser().parse_args(["supply", "--symbol", "DAI", "--amount", "100"])
        assert args.command == "supply"
        assert args.symbol == "DAI"
        assert args.amount == 100
        assert args.private_key is None

    def test_amount_keeps_precision(self) -> None:
        big = str(2**200)
        args = build_parser().parse_args(["borrow", "--symbol", "DAI", "--amount", big])
        assert args.amount == 2**200

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["repay", "--symbol", "DAI", "--amount", "-1"])

    def test_repeatable_flags(self) -> None:
        args = build_parser().parse_args(
            ["mint-underlyings", "--to", "0x1", "--to", "0x2", "--amount", "5",
             "--symbol", "DAI", "--symbol", "USDC"]
        )
        assert args.to == ["0x1", "0x2"]
        assert args.symbol == ["DAI", "USDC"]

    def test_private_key_flag(self) -> None:
        args = build_parser().parse_args(
            ["transfer-coins", "--to", "0x1", "--amount", "1", "-k", "0xabc"]
        )
        assert args.private_key == "0xabc"

    def test_global_flags(self) -> None:
        args = build_parser().parse_args(
            ["--config", "/tmp/c.yaml", "--log-level", "DEBUG", "--network", "local",
             "get-protocol-data"]
        )
        assert args.config == "/tmp/c.yaml"
        assert args.log_level == "DEBUG"
        assert args.network == "local"

    def test_unknown_network_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--network", "devnet", "get-protocol-data"])

    def test_fund_signer_default_index(self) -> None:
        assert build_parser().parse_args(["fund-signer"]).index == 0

    def test_no_command(self) -> None:
        assert build_parser().parse_args([]).command is None


class TestMain:
    def test_no_command_exits_1(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["aave-aptos"])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1

    @pytest.mark.asyncio
    async def test_operational_error_reported_on_stderr(
        self, sample_yaml_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = build_parser().parse_args(
            ["--config", str(sample_yaml_path), "get-asset-price", "--asset", "0x1"]
        )
        with patch(
            "aave_aptos.cli.operations.get_asset_price",
            AsyncMock(side_effect=NotFoundError("no such asset")),
        ):
            await _run(args)

        assert "Error: no such asset" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_prints_result(
        self, sample_yaml_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = build_parser().parse_args(
            ["--config", str(sample_yaml_path), "get-asset-price-and-timestamp",
             "--asset", "0x1"]
        )
        with patch(
            "aave_aptos.cli.operations.get_asset_price_and_timestamp",
            AsyncMock(return_value=(150, 1700000000)),
        ):
            await _run(args)

        assert "0x1: 150 @ 1700000000" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_timeout_reported_on_stderr(
        self, sample_yaml_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = build_parser().parse_args(
            ["--config", str(sample_yaml_path), "get-asset-price", "--asset", "0x1"]
        )
        with patch(
            "aave_aptos.cli.operations.get_asset_price",
            AsyncMock(side_effect=asyncio.TimeoutError()),
        ):
            await _run(args)

        assert "Error: TimeoutError" in capsys.readouterr().err
