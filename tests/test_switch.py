"""Tests for the network switch workflow."""

import json

import pytest

from chiactl.config.config import ConfigStore
from chiactl.config.networking import build_field_updates
from chiactl.submodules.switch import SwitchNetwork
from chiactl.troubleshoot.errors import (
    InvalidArgument, RpcFailure, ServiceUnreachable, ServiceQueryFailure,
    ServiceStopFailure, ServiceStartFailure, CacheRelocationFailure,
    ConfigFieldFailure, ConfigSaveFailure,
)

from conftest import FakeNodeService, RecordingConfigStore, RecordingCacheFiles, write_config


def build_switch(config_store,node_service,cache_files):
    return SwitchNetwork({
        "config_store": config_store,
        "node_service": node_service,
        "cache_files": cache_files,
    })


def seed_active_cache(chia_root):
    db = chia_root / "db"
    (db / "sub-epoch-summaries").write_text("mainnet summaries")
    (db / "height-to-hash").write_text("mainnet heights")


def journal_path(chia_root):
    return chia_root / "db" / ".network_switch.json"


def test_same_network_is_rejected_without_side_effects(chia_root, config_store, node_service, cache_files):
    with pytest.raises(InvalidArgument):
        build_switch(config_store,node_service,cache_files).switch("mainnet")

    assert node_service.calls == []
    assert cache_files.moves == []
    assert config_store.set_calls == 0
    assert not (chia_root / "db" / "mainnet").exists()


def test_empty_target_is_rejected(config_store, node_service, cache_files):
    with pytest.raises(InvalidArgument):
        build_switch(config_store,node_service,cache_files).switch("")
    assert node_service.calls == []


def test_switch_mainnet_to_testnet(chia_root, config_store, node_service, cache_files):
    seed_active_cache(chia_root)

    result = build_switch(config_store,node_service,cache_files).switch("testneta")

    assert node_service.calls == [
        ("is_running","chia_full_node"),
        ("stop_service","chia_full_node"),
        ("start_service","chia_full_node"),
    ]
    db = chia_root / "db"
    assert (db / "mainnet" / "sub-epoch-summaries").read_text() == "mainnet summaries"
    assert (db / "mainnet" / "height-to-hash").read_text() == "mainnet heights"
    assert not (db / "sub-epoch-summaries").exists()
    assert not (db / "height-to-hash").exists()
    assert (db / "testneta").is_dir()

    reloaded = ConfigStore.load(str(chia_root))
    for dotted, value in build_field_updates("testneta").items():
        assert reloaded.get_field_by_path(dotted) == value
    # fields outside the switch table are untouched
    assert reloaded.get_field_by_path("full_node.rpc_port") == 8555
    assert reloaded.get_field_by_path("full_node.introducer_peer.enable_private_networks") is False

    assert config_store.save_calls == 1
    assert not journal_path(chia_root).exists()
    assert result.stopped and result.restarted
    assert result.archived == ["sub-epoch-summaries","height-to-hash"]
    assert result.restored == []
    assert result.warnings == []


def test_switch_restores_archived_target_cache(chia_root, config_store, node_service, cache_files):
    seed_active_cache(chia_root)
    archive = chia_root / "db" / "testneta"
    archive.mkdir()
    (archive / "sub-epoch-summaries").write_text("testneta summaries")
    (archive / "height-to-hash").write_text("testneta heights")

    result = build_switch(config_store,node_service,cache_files).switch("testneta")

    db = chia_root / "db"
    assert (db / "sub-epoch-summaries").read_text() == "testneta summaries"
    assert (db / "height-to-hash").read_text() == "testneta heights"
    assert (db / "mainnet" / "height-to-hash").read_text() == "mainnet heights"
    assert list(archive.iterdir()) == []
    assert result.restored == ["sub-epoch-summaries","height-to-hash"]


def test_switch_back_to_mainnet(tmp_path, mainnet_config):
    root = tmp_path / "root"
    (root / "db" / "mainnet").mkdir(parents=True)
    mainnet_config.update({"selected_network": "testneta"})
    write_config(root,mainnet_config)
    (root / "db" / "mainnet" / "height-to-hash").write_text("mainnet heights")

    store = RecordingConfigStore.load(str(root))
    build_switch(store,FakeNodeService(),RecordingCacheFiles(str(root))).switch("mainnet")

    reloaded = ConfigStore.load(str(root))
    assert reloaded.selected_network == "mainnet"
    assert reloaded.get_field_by_path("full_node.port") == 8444
    assert reloaded.get_field_by_path("full_node.peers_file_path") == "peers.dat"
    assert (root / "db" / "height-to-hash").read_text() == "mainnet heights"


def test_node_not_running_is_not_stopped_or_started(chia_root, config_store, cache_files):
    node_service = FakeNodeService(running=False)
    result = build_switch(config_store,node_service,cache_files).switch("testneta")

    assert node_service.calls == [("is_running","chia_full_node")]
    assert not result.stopped and not result.restarted
    assert ConfigStore.load(str(chia_root)).selected_network == "testneta"


def test_unreachable_daemon_is_treated_as_stopped(chia_root, config_store, cache_files):
    node_service = FakeNodeService(is_running_error=ServiceUnreachable("connection refused"))
    build_switch(config_store,node_service,cache_files).switch("testneta")

    assert node_service.calls == [("is_running","chia_full_node")]
    assert ConfigStore.load(str(chia_root)).selected_network == "testneta"


def test_status_query_failure(chia_root, config_store, cache_files):
    node_service = FakeNodeService(is_running_error=RpcFailure("bad certificate"))
    with pytest.raises(ServiceQueryFailure):
        build_switch(config_store,node_service,cache_files).switch("testneta")

    assert cache_files.moves == []
    assert config_store.set_calls == 0


@pytest.mark.parametrize("node_service", [
    FakeNodeService(stop_result=False),
    FakeNodeService(stop_error=RpcFailure("daemon said no")),
])
def test_stop_failure_leaves_everything_in_place(chia_root, config_store, cache_files, node_service):
    seed_active_cache(chia_root)
    with pytest.raises(ServiceStopFailure):
        build_switch(config_store,node_service,cache_files).switch("testneta")

    assert ("start_service","chia_full_node") not in node_service.calls
    assert cache_files.moves == []
    assert config_store.set_calls == 0
    assert (chia_root / "db" / "height-to-hash").read_text() == "mainnet heights"
    assert ConfigStore.load(str(chia_root)).selected_network == "mainnet"


@pytest.mark.parametrize("node_service", [
    FakeNodeService(start_result=False),
    FakeNodeService(start_error=RpcFailure("daemon went away")),
])
def test_restart_failure_is_a_warning(chia_root, config_store, cache_files, node_service):
    result = build_switch(config_store,node_service,cache_files).switch("testneta")

    assert not result.restarted
    assert len(result.warnings) == 1
    assert isinstance(result.warnings[0],ServiceStartFailure)
    assert ConfigStore.load(str(chia_root)).selected_network == "testneta"


def test_missing_config_section_fails_before_any_call(tmp_path, mainnet_config):
    root = tmp_path / "root"
    (root / "db").mkdir(parents=True)
    del mainnet_config["seeder"]
    write_config(root,mainnet_config)
    store = RecordingConfigStore.load(str(root))
    node_service = FakeNodeService()
    cache_files = RecordingCacheFiles(str(root))

    with pytest.raises(ConfigFieldFailure, match="seeder"):
        build_switch(store,node_service,cache_files).switch("testneta")

    assert node_service.calls == []
    assert cache_files.moves == []
    assert store.set_calls == 0
    assert not (root / "db" / "mainnet").exists()


def test_relocation_failure(chia_root, config_store, node_service, cache_files):
    seed_active_cache(chia_root)
    # a directory where the archived file must land
    blocker = chia_root / "db" / "mainnet" / "height-to-hash"
    blocker.mkdir(parents=True)
    (blocker / "keep").write_text("x")

    with pytest.raises(CacheRelocationFailure):
        build_switch(config_store,node_service,cache_files).switch("testneta")

    assert ("start_service","chia_full_node") not in node_service.calls
    assert config_store.set_calls == 0
    assert json.loads(journal_path(chia_root).read_text())["stage"] == "relocating"


def test_save_failure_can_be_resumed(chia_root, config_store, cache_files, monkeypatch):
    seed_active_cache(chia_root)

    def failing_save():
        raise ConfigSaveFailure("disk full")

    monkeypatch.setattr(config_store,"save",failing_save)
    node_service = FakeNodeService()
    with pytest.raises(ConfigSaveFailure):
        build_switch(config_store,node_service,cache_files).switch("testneta")

    assert ("start_service","chia_full_node") not in node_service.calls
    assert json.loads(journal_path(chia_root).read_text()) == {
        "from": "mainnet",
        "to": "testneta",
        "stage": "relocated",
    }
    assert ConfigStore.load(str(chia_root)).selected_network == "mainnet"
    assert (chia_root / "db" / "mainnet" / "height-to-hash").exists()

    # running the same switch again finishes the job without moving anything
    store = RecordingConfigStore.load(str(chia_root))
    second_cache_files = RecordingCacheFiles(str(chia_root))
    result = build_switch(store,FakeNodeService(),second_cache_files).switch("testneta")

    assert result.resumed
    assert second_cache_files.moves == []
    assert store.save_calls == 1
    assert not journal_path(chia_root).exists()
    assert ConfigStore.load(str(chia_root)).selected_network == "testneta"
    assert (chia_root / "db" / "mainnet" / "height-to-hash").read_text() == "mainnet heights"


def test_stale_journal_blocks_a_different_switch(chia_root, config_store, node_service, cache_files):
    journal_path(chia_root).write_text(json.dumps({"from": "mainnet", "to": "testnet11", "stage": "relocating"}))

    with pytest.raises(CacheRelocationFailure, match="testnet11"):
        build_switch(config_store,node_service,cache_files).switch("testneta")

    assert node_service.calls == []
    assert cache_files.moves == []


def test_unfinished_relocation_is_not_resumed(chia_root, config_store, node_service, cache_files):
    journal_path(chia_root).write_text(json.dumps({"from": "mainnet", "to": "testneta", "stage": "relocating"}))

    with pytest.raises(CacheRelocationFailure):
        build_switch(config_store,node_service,cache_files).switch("testneta")
    assert node_service.calls == []


def test_leftover_journal_of_completed_switch_is_cleared(chia_root, config_store, node_service, cache_files):
    # the previous switch testneta -> mainnet saved its config but left the journal behind
    journal_path(chia_root).write_text(json.dumps({"from": "testneta", "to": "mainnet", "stage": "relocated"}))
    seed_active_cache(chia_root)

    result = build_switch(config_store,node_service,cache_files).switch("testneta")

    assert not result.resumed
    assert result.archived == ["sub-epoch-summaries","height-to-hash"]
    assert not journal_path(chia_root).exists()
    assert ConfigStore.load(str(chia_root)).selected_network == "testneta"
