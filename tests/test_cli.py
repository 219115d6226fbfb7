"""Tests for the rent-vs-buy command line."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from rent_vs_buy.cli import CONFIG_ENV_VAR, app
from rent_vs_buy.config import scenario_to_dict
from rent_vs_buy.schemas import DEFAULT_SCENARIO

runner = CliRunner()

CASH_PURCHASE_ARGS = [
    "run",
    "--years", "1",
    "--home-price", "120000",
    "--down-payment-pct", "100",
    "--buy-closing-cost-pct", "0",
    "--sell-cost-pct", "0",
    "--property-tax-rate-pct", "0",
    "--home-insurance-annual", "0",
    "--maintenance-rate-pct", "0",
    "--home-appreciation-pct", "0",
    "--rent-monthly", "1000",
    "--rent-growth-pct", "0",
    "--renters-insurance-monthly", "0",
    "--investment-return-pct", "0",
]


def test_run_with_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 0, result.output
    assert "Horizon: 10 years" in result.output
    assert "Up-front cash to buy: $146,250" in result.output
    assert "Better outcome:" in result.output


def test_run_cash_purchase(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = runner.invoke(app, CASH_PURCHASE_ARGS)
    assert result.exit_code == 0, result.output
    assert "End home value: $120,000" in result.output
    assert "Buy net worth after sale: $132,000" in result.output
    assert "Rent net worth: $120,000" in result.output
    assert "Better outcome: buying" in result.output
    assert "Buy wins by: $12,000" in result.output
    assert "Break-even month: 1 (~1 mo)" in result.output


def test_run_show_timeline(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = runner.invoke(app, CASH_PURCHASE_ARGS + ["--show-timeline"])
    assert result.exit_code == 0, result.output
    timeline = json.loads(result.output[result.output.index("[") :])
    assert len(timeline) == 13
    assert timeline[-1]["buy_net_worth"] == 132_000
    assert timeline[12]["month"] == 12


def test_run_reads_config_from_env(monkeypatch, tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"years": 4, "rentMonthly": 100}))
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 0, result.output
    assert "Horizon: 4 years" in result.output
    assert "Break-even month: never within the horizon" in result.output


def test_options_override_config(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"years": 4}))
    result = runner.invoke(app, ["run", "--config", str(path), "--years", "7"])
    assert result.exit_code == 0, result.output
    assert "Horizon: 7 years" in result.output


def test_out_of_range_options_are_clamped(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = runner.invoke(app, ["run", "--years", "1000"])
    assert result.exit_code == 0, result.output
    assert "Horizon: 50 years" in result.output


def test_bad_config_is_a_usage_error(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"bedrooms": 3}))
    result = runner.invoke(app, ["run", "--config", str(path)])
    assert result.exit_code == 2


def test_bad_log_level_is_a_usage_error(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    result = runner.invoke(app, ["run", "--log-level", "chatty"])
    assert result.exit_code == 2


def test_defaults_prints_reference_scenario():
    result = runner.invoke(app, ["defaults"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == scenario_to_dict(DEFAULT_SCENARIO)


def test_huge_config_values_are_clamped(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    path = tmp_path / "scenario.json"
    path.write_text('{"years": 1' + "0" * 400 + "}")
    result = runner.invoke(app, ["run", "--config", str(path)])
    assert result.exit_code == 0, result.output
    assert "Horizon: 50 years" in result.output
