import json
import logging

from .coins import convert_xch_to_mojos
from ..troubleshoot.errors import InvalidArgument

DATA_FORMATS = ["hex","utf8"]


def convert_format(value,from_format,to_format):
    # "0x7631" hex -> utf8 "v1", "v1" utf8 -> hex "0x7631"
    value = str(value)
    if value.startswith("0x"):
        value = value[2:]

    if from_format == "hex" and to_format == "utf8":
        try:
            return bytes.fromhex(value).decode("utf-8")
        except ValueError as e:
            raise InvalidArgument(f"unable to convert [{value}] from hex to utf8 [{e}]")
    if from_format == "utf8" and to_format == "hex":
        return "0x" + value.encode("utf-8").hex()

    raise InvalidArgument(f"unsupported conversion from [{from_format}] to [{to_format}]")


class DataLayer():
    """Mirror and key/value helpers for the data layer service.

    Every request goes through the data layer RPC client handed in as
    ``data_layer_rpc``; only its ``fetch(endpoint, data)`` is used.
    """

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.functions = command_obj.get("functions",None)
        self.data_layer = command_obj["data_layer_rpc"]

        self.store_id = command_obj.get("store_id",None)
        self.fee = convert_xch_to_mojos(command_obj.get("fee","0"))
        self.input_format = command_obj.get("input_format","hex")
        self.output_format = command_obj.get("output_format","utf8")


    # ==== GETTERS ====

    def get_subscriptions(self):
        if self.store_id:
            return [self.store_id]
        response = self.data_layer.fetch("subscriptions")
        return response.get("store_ids") or []


    def get_owned_mirrors(self,store_id):
        response = self.data_layer.fetch("get_mirrors",{"id": store_id})
        return [mirror for mirror in response.get("mirrors") or [] if mirror.get("ours")]


    # ==== PROCESSORS ====

    def process_show_mirrors(self):
        results = []
        for store_id in self.get_subscriptions():
            mirrors = self.get_owned_mirrors(store_id)
            if not mirrors:
                self.log.info(f"no owned mirrors for this datastore | store [{store_id}]")
                continue
            result = {"store_id": store_id, "mirrors": mirrors}
            print(json.dumps(result,indent=2))
            results.append(result)
        return results


    def process_delete_mirrors(self):
        self.log.debug(f"fee for all transactions | mojos [{self.fee}]")

        owned = []
        for store_id in self.get_subscriptions():
            self.log.info(f"checking subscription | store [{store_id}]")
            mirrors = self.get_owned_mirrors(store_id)
            if not mirrors:
                self.log.info(f"no owned mirrors for this datastore | store [{store_id}]")
            owned.extend((store_id,mirror["coin_id"]) for mirror in mirrors)

        if not owned:
            if self.functions:
                self.functions.print_paragraphs([["No owned mirrors found.",1,"yellow"]])
            return []

        if self.functions:
            self.functions.print_paragraphs([
                ["Deleting",0], [str(len(owned)),0,"yellow","bold"], ["owned mirrors with a fee of",0],
                [f"{self.fee} mojos",0,"yellow","bold"], ["each.",2],
            ])
            if not self.functions.confirm_action({
                "yes_no_default": "n",
                "return_on": "y",
                "prompt": "Delete these mirrors?",
                "exit_if": False,
            }):
                self.log.error("Cancelled")
                return None

        deleted = []
        for store_id, coin_id in owned:
            self.log.info(f"deleting mirror | store [{store_id}] mirror [{coin_id}]")
            self.data_layer.fetch("delete_mirror",{"coin_id": coin_id, "fee": self.fee})
            deleted.append(coin_id)
        print(f"  Deleted {len(deleted)} mirrors")
        return deleted


    def process_convert_keys_values(self):
        if not self.store_id:
            raise InvalidArgument("store id is required, use --id <store_id>")
        for data_format in [self.input_format,self.output_format]:
            if data_format not in DATA_FORMATS:
                raise InvalidArgument(f"unsupported format [{data_format}], expected one of {DATA_FORMATS}")

        response = self.data_layer.fetch("get_keys_values",{"id": self.store_id})
        output = dict(response)
        output["keys_values"] = [
            {
                "atom": key_value.get("atom"),
                "hash": key_value.get("hash"),
                "key": convert_format(key_value["key"],self.input_format,self.output_format),
                "value": convert_format(key_value["value"],self.input_format,self.output_format),
            }
            for key_value in response.get("keys_values") or []
        ]
        print(json.dumps(output,indent=2))
        return output


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
