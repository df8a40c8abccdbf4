"""
Tests for configuration loading.
"""
import pytest

from config import FactoryConfig, DEFAULT_RPC_URL, DEFAULT_FACTORY_ADDRESS, DEFAULT_GAS_LIMIT
from tests.helpers import TEST_PRIV_KEY

ENV_VARS = [
    "GAME_FACTORY_RPC_URL",
    "GAME_FACTORY_ADDRESS",
    "GAME_FACTORY_ABI_PATH",
    "GAME_FACTORY_GAS_LIMIT",
    "GAME_FACTORY_RECEIPT_TIMEOUT",
    "GAME_FACTORY_CURRENCY",
    "GAME_FACTORY_POA",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("PRIVATE_KEY", TEST_PRIV_KEY)

    config = FactoryConfig.from_env()

    assert config.private_key == TEST_PRIV_KEY
    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.factory_address == DEFAULT_FACTORY_ADDRESS
    assert config.gas_limit == DEFAULT_GAS_LIMIT == 3000000
    assert config.abi_path is None
    assert config.use_poa_middleware is True
    assert config.currency_symbol == "CHZ"


def test_private_key_gets_0x_prefix(monkeypatch):
    monkeypatch.setenv("PRIVATE_KEY", TEST_PRIV_KEY[2:])

    assert FactoryConfig.from_env().private_key == TEST_PRIV_KEY


def test_overrides(monkeypatch):
    monkeypatch.setenv("PRIVATE_KEY", TEST_PRIV_KEY)
    monkeypatch.setenv("GAME_FACTORY_RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("GAME_FACTORY_GAS_LIMIT", "500000")
    monkeypatch.setenv("GAME_FACTORY_POA", "off")
    monkeypatch.setenv("GAME_FACTORY_ABI_PATH", "out/GameFactory.sol/GameFactory.json")

    config = FactoryConfig.from_env()

    assert config.rpc_url == "http://localhost:8545"
    assert config.gas_limit == 500000
    assert config.use_poa_middleware is False
    assert config.abi_path == "out/GameFactory.sol/GameFactory.json"


def test_missing_private_key(monkeypatch):
    monkeypatch.delenv("PRIVATE_KEY", raising=False)

    with pytest.raises(KeyError):
        FactoryConfig.from_env()


def test_repr_hides_private_key():
    config = FactoryConfig(private_key=TEST_PRIV_KEY)

    assert TEST_PRIV_KEY[2:] not in repr(config)
