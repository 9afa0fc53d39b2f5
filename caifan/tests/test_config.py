import logging

from caifan.recommendations.config import _env_seed


def test_seed_read_from_environment(monkeypatch):
    monkeypatch.setenv("CAIFAN_RANDOM_SEED", " 42 ")
    assert _env_seed() == 42


def test_unset_seed_means_unseeded(monkeypatch):
    monkeypatch.delenv("CAIFAN_RANDOM_SEED", raising=False)
    assert _env_seed() is None


def test_non_integer_seed_is_ignored_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("CAIFAN_RANDOM_SEED", "abc")
    with caplog.at_level(logging.WARNING, logger="caifan.recommendations.config"):
        assert _env_seed() is None
    assert "CAIFAN_RANDOM_SEED" in caplog.text
