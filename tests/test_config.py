from __future__ import annotations

import pytest

from mayan_cli.config import DEFAULT_RPC_URL, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("MAYAN_RPC_URL", "SOLANA_RPC_URL", "RPC_URL", "MAYAN_REQUEST_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings()

    assert settings.rpc_url == DEFAULT_RPC_URL
    assert settings.explorer_base_url.startswith("https://explorer-api.mayan.finance/")
    assert settings.bid_history_limit == 100


def test_solana_rpc_url_env_is_honoured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOLANA_RPC_URL", "https://custom.rpc.test")

    assert Settings().rpc_url == "https://custom.rpc.test"


def test_prefixed_env_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAYAN_REQUEST_TIMEOUT_SECONDS", "2.5")

    assert Settings().request_timeout_seconds == 2.5


def test_explicit_value_wins() -> None:
    assert Settings(rpc_url="https://explicit.rpc.test").rpc_url == "https://explicit.rpc.test"
