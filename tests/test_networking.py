"""Tests for network profile resolution and the field update table."""

from chiactl.config.networking import resolve_profile, build_field_updates, MAINNET


def test_resolve_mainnet():
    profile = resolve_profile(MAINNET)
    assert profile.introducer_host == "introducer.chia.net"
    assert profile.dns_introducer_host == "dns-introducer.chia.net"
    assert profile.full_node_port == 8444
    assert profile.peers_file_path == "peers.dat"
    assert profile.wallet_peers_file_path == "wallet/db/wallet_peers.dat"
    assert profile.bootstrap_peers == ["node.chia.net"]


def test_resolve_testneta():
    profile = resolve_profile("testneta")
    assert profile.introducer_host == "introducer-testneta.chia.net"
    assert profile.dns_introducer_host == "dns-introducer-testneta.chia.net"
    assert profile.full_node_port == 58444
    assert profile.peers_file_path == "peers-testneta.dat"
    assert profile.wallet_peers_file_path == "wallet/db/wallet_peers-testneta.dat"
    assert profile.bootstrap_peers == ["node-testneta.chia.net"]


def test_non_mainnet_networks_share_structure():
    one, two = resolve_profile("testnet11"), resolve_profile("mynet")
    assert one.full_node_port == two.full_node_port == 58444
    assert one.introducer_host.replace("testnet11","X") == two.introducer_host.replace("mynet","X")


def test_field_updates_cover_every_network_field():
    updates = build_field_updates("testneta")
    assert set(updates) == {
        "selected_network",
        "farmer.full_node_peers",
        "full_node.database_path",
        "full_node.dns_servers",
        "full_node.peers_file_path",
        "full_node.port",
        "full_node.introducer_peer.host",
        "full_node.introducer_peer.port",
        "introducer.port",
        "seeder.port",
        "seeder.other_peers_port",
        "seeder.bootstrap_peers",
        "timelord.full_node_peers",
        "wallet.dns_servers",
        "wallet.full_node_peers",
        "wallet.introducer_peer.host",
        "wallet.introducer_peer.port",
        "wallet.wallet_peers_file_path",
    }


def test_field_updates_values_for_testnet():
    updates = build_field_updates("testneta")
    assert updates["selected_network"] == "testneta"
    assert updates["full_node.database_path"] == "db/blockchain_v2_testneta.sqlite"
    assert updates["full_node.dns_servers"] == ["dns-introducer-testneta.chia.net"]
    assert updates["wallet.dns_servers"] == ["dns-introducer-testneta.chia.net"]
    assert updates["seeder.bootstrap_peers"] == ["node-testneta.chia.net"]
    for peers_path in ["farmer.full_node_peers","timelord.full_node_peers","wallet.full_node_peers"]:
        assert updates[peers_path] == [{"host": "localhost", "port": 58444}]
    for port_path in ["full_node.port","full_node.introducer_peer.port","introducer.port",
                      "seeder.port","seeder.other_peers_port","wallet.introducer_peer.port"]:
        assert updates[port_path] == 58444


def test_field_updates_do_not_share_lists_with_the_profile():
    profile = resolve_profile("testneta")
    updates = build_field_updates("testneta",profile)
    updates["seeder.bootstrap_peers"].append("extra")
    assert profile.bootstrap_peers == ["node-testneta.chia.net"]
