import dataclasses
import json

import pytest

from checkin_rewards.core.config import reset_settings
from checkin_rewards.infrastructure.attendance import reward_catalog as catalog_module
from checkin_rewards.infrastructure.attendance.reward_catalog import (
    RewardCatalog,
    build_catalog_from_config,
    get_reward_catalog,
    reload_reward_catalog,
)

from .conftest import ADMIN, URIS


def test_tiers_are_ascending_with_token_id_equal_to_threshold(catalog):
    tiers = catalog.tiers_ascending()
    assert [t.threshold_days for t in tiers] == [30, 90, 180, 365, 730]
    assert [t.name for t in tiers] == ["Bronze", "Silver", "Gold", "Platinum", "Diamond"]
    assert all(t.token_id == t.threshold_days for t in tiers)
    assert [t.metadata_uri for t in tiers] == URIS
    assert catalog.lowest_threshold == 30
    assert catalog.admin == ADMIN


def test_lookup_by_threshold_and_token(catalog):
    assert catalog.tier_by_threshold(180).name == "Gold"
    assert catalog.tier_by_threshold(100) is None
    assert catalog.tier_by_token_id(730).name == "Diamond"
    assert catalog.uri(30) == URIS[0]
    assert catalog.uri(31) == ""


def test_tiers_are_immutable(catalog):
    tier = catalog.tiers_ascending()[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        tier.metadata_uri = "ipfs://other"
    assert isinstance(catalog.tiers_ascending(), tuple)


@pytest.mark.parametrize("uris", [URIS[:4], URIS + ["ipfs://extra"], []])
def test_wrong_number_of_uris_is_rejected(uris):
    with pytest.raises(ValueError):
        RewardCatalog(admin=ADMIN, metadata_uris=uris)


def test_empty_uri_and_admin_are_rejected():
    with pytest.raises(ValueError):
        RewardCatalog(admin=ADMIN, metadata_uris=URIS[:4] + [""])
    with pytest.raises(ValueError):
        RewardCatalog(admin="  ", metadata_uris=URIS)


def test_build_from_config_falls_back_to_default_uris():
    catalog = build_catalog_from_config({})
    assert len(catalog.tiers_ascending()) == 5
    assert catalog.uri(30).startswith("ipfs://")


def test_admin_override_wins():
    catalog = build_catalog_from_config({"admin": "0xfile", "metadata_uris": URIS}, admin_override="0xenv")
    assert catalog.admin == "0xenv"


@pytest.fixture
def isolated_catalog_cache(monkeypatch):
    monkeypatch.setattr(catalog_module, "_catalog_cached", None)
    reset_settings()
    yield
    reset_settings()


def test_loads_catalog_from_config_file(tmp_path, monkeypatch, isolated_catalog_cache):
    path = tmp_path / "tiers.json"
    path.write_text(json.dumps({"admin": "0xOwner", "metadata_uris": URIS}), encoding="utf-8")
    monkeypatch.setenv("REWARD_TIERS_CONFIG_PATH", str(path))
    monkeypatch.delenv("ATTENDANCE_ADMIN_ACCOUNT", raising=False)

    catalog = get_reward_catalog()

    assert catalog.admin == "0xOwner"
    assert catalog.uri(365) == URIS[3]
    assert get_reward_catalog() is catalog


def test_missing_config_file_uses_defaults(tmp_path, monkeypatch, isolated_catalog_cache):
    monkeypatch.setenv("REWARD_TIERS_CONFIG_PATH", str(tmp_path / "missing.json"))
    monkeypatch.setenv("ATTENDANCE_ADMIN_ACCOUNT", "0xenvadmin")

    catalog = reload_reward_catalog()

    assert catalog.admin == "0xenvadmin"
    assert [t.threshold_days for t in catalog.tiers_ascending()] == [30, 90, 180, 365, 730]


def test_packaged_config_is_valid(monkeypatch, isolated_catalog_cache):
    monkeypatch.delenv("REWARD_TIERS_CONFIG_PATH", raising=False)
    monkeypatch.delenv("ATTENDANCE_ADMIN_ACCOUNT", raising=False)
    catalog = get_reward_catalog()
    assert all(t.metadata_uri.startswith("ipfs://") for t in catalog.tiers_ascending())
