import logging

from ..node_service import RpcClient, SERVICE_RPC
from ..troubleshoot.errors import ChiactlError

SERVICE_LABELS = {
    "full_node": "Full Node",
    "wallet": "Wallet",
    "farmer": "Farmer",
    "harvester": "Harvester",
    "crawler": "Crawler",
    "data_layer": "Data Layer",
    "timelord": "Timelord",
}


class ShowNetwork():

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.config_store = command_obj["config_store"]
        self.daemon = command_obj["node_service"]
        self.functions = command_obj["functions"]
        self.retry_policy = command_obj.get("retry_policy",None)
        # service -> client factory, replaced in tests
        self.rpc_factory = command_obj.get("rpc_factory",self._build_rpc_client)


    def _build_rpc_client(self,service):
        return RpcClient(self.config_store.config_obj,self.config_store.root,service,self.retry_policy)


    def get_daemon_network(self):
        try:
            return self.daemon.get_network_info().get("network_name") or "Not Running"
        except ChiactlError as e:
            self.log.debug(f"error getting network info from daemon [{e}]")
            return "Not Running"


    def get_service_network(self,service):
        client = self.rpc_factory(service)
        try:
            return client.get_network_info().get("network_name") or "Not Running"
        except ChiactlError as e:
            self.log.debug(f"error getting network info from {service} [{e}]")
            return "Not Running"
        finally:
            client.close()


    def get_network_rows(self):
        rows = [
            ("Config",self.config_store.selected_network),
            ("Daemon",self.get_daemon_network()),
        ]
        for service in SERVICE_RPC:
            rows.append((SERVICE_LABELS[service],self.get_service_network(service)))
        return rows


    def print_network_info(self):
        self.functions.print_table(self.get_network_rows())
