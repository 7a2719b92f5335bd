import logging

from os import path, walk
from re import search

from ..config.config_path import ConfigPath
from ..troubleshoot.errors import ChiactlError, ConfigFieldFailure

SIZE_COLUMN_WIDTH = 14

# typically small or transient files hidden unless --all-files
EXCLUSIONS = [
    r"\.DS_Store$",
    r"data_layer/db/server_files_location.*/.*delta.*",
    r"wallet/db/temp.*",
    r"run/.*",
]

PORT_FIELDS = [
    ("Full Node Port","full_node.port"),
    ("Full Node RPC","full_node.rpc_port"),
    ("Wallet RPC","wallet.rpc_port"),
    ("Farmer Port","farmer.port"),
    ("Farmer RPC","farmer.rpc_port"),
    ("Harvester RPC","harvester.rpc_port"),
    ("Crawler RPC","seeder.crawler.rpc_port"),
    ("Seeder Port","seeder.port"),
    ("Data Layer Host Port","data_layer.host_port"),
    ("Data Layer RPC","data_layer.rpc_port"),
    ("Timelord RPC","timelord.rpc_port"),
]


def is_excluded(rel_path):
    rel_path = rel_path.replace(path.sep,"/")
    return any(search(pattern,rel_path) for pattern in EXCLUSIONS)


class Debug():

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.config_store = command_obj["config_store"]
        self.functions = command_obj["functions"]
        self.daemon = command_obj["node_service"]
        self.show_network = command_obj["show_network"]
        self.sort = command_obj.get("sort",False)
        self.all_files = command_obj.get("all_files",False)


    def get_version_rows(self):
        try:
            chia_version = self.daemon.get_version() or "unknown"
        except ChiactlError as e:
            self.log.debug(f"error getting version from daemon [{e}]")
            chia_version = "Not Running"
        return [
            ("chiactl",self.functions.chiactl_version),
            ("chia-blockchain",chia_version),
        ]


    def get_port_rows(self):
        rows = []
        for label, dotted in PORT_FIELDS:
            try:
                value = ConfigPath(dotted).get(self.config_store.config_obj)
            except ConfigFieldFailure:
                value = "not configured"
            rows.append((label,value))
        return rows


    def collect_files(self):
        files = []
        root = self.config_store.root
        for dirpath, _, filenames in walk(root):
            for f in filenames:
                full_path = path.join(dirpath,f)
                rel_path = path.relpath(full_path,root)
                if not self.all_files and is_excluded(rel_path):
                    continue
                try:
                    files.append((self.functions.get_size(full_path),rel_path))
                except OSError as e:
                    self.log.debug(f"unable to size file [{full_path}] [{e}]")
        if self.sort:
            files.sort(key=lambda file_info: file_info[0],reverse=True)
        return files


    def print_debug(self):
        self.functions.print_header_title({"line1": "VERSION INFORMATION","newline": "top"})
        self.functions.print_table(self.get_version_rows())

        self.functions.print_header_title({"line1": "NETWORK INFORMATION","newline": "top"})
        self.show_network.print_network_info()

        self.functions.print_header_title({"line1": "PORT INFORMATION","newline": "top"})
        self.functions.print_table(self.get_port_rows())

        self.functions.print_header_title({"line1": "FILE SIZES","newline": "both"})
        print(f"  Scanning: {self.config_store.root}")
        print(f"  {'Size':<{SIZE_COLUMN_WIDTH}} File")
        print(f"  {'-' * 60}")
        for file_size, rel_path in self.collect_files():
            print(f"  {self.functions.get_human_size(file_size):<{SIZE_COLUMN_WIDTH}} {rel_path}")
