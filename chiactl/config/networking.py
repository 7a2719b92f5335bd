from collections import namedtuple

MAINNET = "mainnet"

NetworkProfile = namedtuple("NetworkProfile",[
    "introducer_host",
    "dns_introducer_host",
    "full_node_port",
    "peers_file_path",
    "wallet_peers_file_path",
    "bootstrap_peers",
])


def resolve_profile(network_name):
    if network_name == MAINNET:
        return NetworkProfile(
            introducer_host="introducer.chia.net",
            dns_introducer_host="dns-introducer.chia.net",
            full_node_port=8444,
            peers_file_path="peers.dat",
            wallet_peers_file_path="wallet/db/wallet_peers.dat",
            bootstrap_peers=["node.chia.net"],
        )

    return NetworkProfile(
        introducer_host=f"introducer-{network_name}.chia.net",
        dns_introducer_host=f"dns-introducer-{network_name}.chia.net",
        full_node_port=58444,
        peers_file_path=f"peers-{network_name}.dat",
        wallet_peers_file_path=f"wallet/db/wallet_peers-{network_name}.dat",
        bootstrap_peers=[f"node-{network_name}.chia.net"],
    )


def local_full_node_peers(port):
    return [{"host": "localhost", "port": port}]


def build_field_updates(network_name,profile=None):
    # every network dependent field, applied together with selected_network
    profile = profile or resolve_profile(network_name)
    port = profile.full_node_port

    return {
        "selected_network": network_name,
        "farmer.full_node_peers": local_full_node_peers(port),
        "full_node.database_path": f"db/blockchain_v2_{network_name}.sqlite",
        "full_node.dns_servers": [profile.dns_introducer_host],
        "full_node.peers_file_path": profile.peers_file_path,
        "full_node.port": port,
        "full_node.introducer_peer.host": profile.introducer_host,
        "full_node.introducer_peer.port": port,
        "introducer.port": port,
        "seeder.port": port,
        "seeder.other_peers_port": port,
        "seeder.bootstrap_peers": list(profile.bootstrap_peers),
        "timelord.full_node_peers": local_full_node_peers(port),
        "wallet.dns_servers": [profile.dns_introducer_host],
        "wallet.full_node_peers": local_full_node_peers(port),
        "wallet.introducer_peer.host": profile.introducer_host,
        "wallet.introducer_peer.port": port,
        "wallet.wallet_peers_file_path": profile.wallet_peers_file_path,
    }
