import logging

from ..config.networking import local_full_node_peers
from ..troubleshoot.errors import InvalidArgument

# chia's initial config ships this placeholder as the only trusted peer
EXAMPLE_TRUSTED_PEERS = {
    "0ThisisanexampleNodeID7ff9d60f1c3fa270c213c0ad0cb89c01274634a7c3cb9": "Does_not_matter",
}


class RemoveTrustedPeers():

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.config_store = command_obj["config_store"]
        self.functions = command_obj.get("functions",None)
        self.remove_all = command_obj.get("remove_all",False)


    def get_reset_fields(self):
        port = self.config_store.get_field_by_path("full_node.port")
        return {
            "wallet.trusted_peers": dict(EXAMPLE_TRUSTED_PEERS),
            "wallet.full_node_peers": local_full_node_peers(port),
        }


    def process_remove(self):
        if not self.remove_all:
            # removing one peer needs its node id, which only the peer handshake provides
            raise InvalidArgument("only --all is supported, single peers must be removed with chia itself")

        updates = self.get_reset_fields()
        self.config_store.validate_fields(updates)

        if self.functions and not self.functions.confirm_action({
            "yes_no_default": "n",
            "return_on": "y",
            "prompt": "Are you sure you would like to remove all trusted peers?",
            "exit_if": False,
        }):
            self.log.error("Cancelled")
            return False

        self.config_store.set_fields(updates)
        self.config_store.save()
        self.log.info("Removed all trusted peers")
        if self.functions:
            self.functions.print_paragraphs([
                ["Removed all trusted peers.",1,"green"],
                ["Restart your chia services for the configuration to take effect.",2],
            ])
        return True


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
