"""Pytest configuration and shared fixtures for chiactl tests."""

import copy
import logging

import pytest
import yaml

from chiactl.config.config import ConfigStore
from chiactl.submodules.cache_files import CacheFiles
from chiactl.troubleshoot.errors import ServiceUnreachable


MAINNET_CONFIG = {
    "selected_network": "mainnet",
    "self_hostname": "localhost",
    "daemon_port": 55400,
    "daemon_ssl": {
        "private_crt": "config/ssl/daemon/private_daemon.crt",
        "private_key": "config/ssl/daemon/private_daemon.key",
    },
    "private_ssl_ca": {
        "crt": "config/ssl/ca/private_ca.crt",
        "key": "config/ssl/ca/private_ca.key",
    },
    "logging": {"log_level": "WARNING"},
    "data_layer": {"host_port": 8575, "rpc_port": 8562},
    "farmer": {
        "full_node_peers": [{"host": "localhost", "port": 8444}],
        "port": 8447,
        "rpc_port": 8559,
    },
    "full_node": {
        "port": 8444,
        "rpc_port": 8555,
        "database_path": "db/blockchain_v2_CHALLENGE.sqlite",
        "dns_servers": ["dns-introducer.chia.net"],
        "peers_file_path": "db/peers.dat",
        "introducer_peer": {
            "host": "introducer.chia.net",
            "port": 8444,
            "enable_private_networks": False,
        },
        "target_peer_count": 40,
        "sync_blocks_behind_threshold": 300,
    },
    "harvester": {"rpc_port": 8560},
    "introducer": {"port": 8444},
    "seeder": {
        "port": 8444,
        "other_peers_port": 8444,
        "bootstrap_peers": ["node.chia.net"],
        "crawler": {"rpc_port": 8561},
    },
    "timelord": {
        "full_node_peers": [{"host": "localhost", "port": 8444}],
        "rpc_port": 8557,
    },
    "wallet": {
        "dns_servers": ["dns-introducer.chia.net"],
        "full_node_peers": [{"host": "localhost", "port": 8444}],
        "introducer_peer": {"host": "introducer.chia.net", "port": 8444},
        "wallet_peers_file_path": "wallet/db/wallet_peers.dat",
        "rpc_port": 9256,
        "trusted_peers": {
            "trusted_node_1": "config/ssl/full_node/public_full_node.crt",
        },
    },
}


class FakeNodeService():
    """Records every administrative call, answers from the constructor arguments."""

    def __init__(self,running=True,is_running_error=None,stop_result=True,stop_error=None,
                 start_result=True,start_error=None,network_name=None,version=None):
        self.calls = []
        self.running = running
        self.is_running_error = is_running_error
        self.stop_result = stop_result
        self.stop_error = stop_error
        self.start_result = start_result
        self.start_error = start_error
        self.network_name = network_name
        self.version = version


    def is_running(self,service):
        self.calls.append(("is_running",service))
        if self.is_running_error: raise self.is_running_error
        return self.running


    def stop_service(self,service):
        self.calls.append(("stop_service",service))
        if self.stop_error: raise self.stop_error
        return self.stop_result


    def start_service(self,service):
        self.calls.append(("start_service",service))
        if self.start_error: raise self.start_error
        return self.start_result


    def get_network_info(self):
        self.calls.append(("get_network_info",None))
        if self.network_name is None:
            raise ServiceUnreachable("daemon refused the connection")
        return {"network_name": self.network_name, "network_prefix": "txch"}


    def get_version(self):
        self.calls.append(("get_version",None))
        if self.version is None:
            raise ServiceUnreachable("daemon refused the connection")
        return self.version


class RecordingConfigStore(ConfigStore):

    def __init__(self,root,config_file=None):
        super().__init__(root,config_file)
        self.set_calls = 0
        self.save_calls = 0


    def set_fields(self,updates):
        self.set_calls += 1
        return super().set_fields(updates)


    def save(self):
        self.save_calls += 1
        return super().save()


class RecordingCacheFiles(CacheFiles):

    def __init__(self,root):
        super().__init__(root)
        self.moves = []


    def move_and_overwrite(self,source,destination):
        self.moves.append((source,destination))
        return super().move_and_overwrite(source,destination)


def write_config(root,config_obj):
    config_dir = root / "config"
    config_dir.mkdir(parents=True,exist_ok=True)
    with open(config_dir / "config.yaml","w") as f:
        yaml.safe_dump(config_obj,f,default_flow_style=False,sort_keys=False)
    return config_dir / "config.yaml"


@pytest.fixture
def mainnet_config():
    return copy.deepcopy(MAINNET_CONFIG)


@pytest.fixture
def chia_root(tmp_path,mainnet_config):
    root = tmp_path / "chia_root"
    (root / "db").mkdir(parents=True)
    write_config(root,mainnet_config)
    return root


@pytest.fixture
def config_store(chia_root):
    return RecordingConfigStore.load(str(chia_root))


@pytest.fixture
def cache_files(chia_root):
    return RecordingCacheFiles(str(chia_root))


@pytest.fixture
def node_service():
    return FakeNodeService()


@pytest.fixture(autouse=True)
def _clear_chia_env(monkeypatch):
    monkeypatch.delenv("CHIA_ROOT",raising=False)
    monkeypatch.delenv("CHIACTL_LOG_LEVEL",raising=False)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    logger = logging.getLogger("chiactl")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
