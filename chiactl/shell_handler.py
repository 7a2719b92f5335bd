import logging

from sys import exit
from termcolor import colored

from .functions import Functions
from .node_service import DaemonClient, RpcClient, RetryPolicy
from .config.config import CommandOptions, ConfigStore
from .config.valid_commands import pull_valid_command, pull_short_cut_map
from .submodules.switch import SwitchNetwork
from .submodules.show import ShowNetwork
from .submodules.edit import EditConfig, parse_set_values
from .submodules.debug import Debug
from .submodules.coins import SplitLargestCoin
from .submodules.datalayer import DataLayer
from .submodules.trusted_peers import RemoveTrustedPeers
from .troubleshoot.errors import Error_codes, ChiactlError, InvalidArgument
from .troubleshoot.logger import Logging


def parse_global_options(argv_list):
    # pulls global options out of the argument list, anywhere before or after the command
    option_values = {"root": None, "log_level": None, "skip_confirm": False, "retries": 0}
    remaining = []
    args = iter(argv_list)
    for arg in args:
        if arg in ["--root","--log-level","--retries"]:
            try:
                value = next(args)
            except StopIteration:
                raise InvalidArgument(f"option [{arg}] requires a value")
            option_values[arg[2:].replace("-","_")] = value
        elif arg.startswith("--root=") or arg.startswith("--log-level=") or arg.startswith("--retries="):
            key, value = arg[2:].split("=",1)
            option_values[key.replace("-","_")] = value
        elif arg in ["-y","--yes"]:
            option_values["skip_confirm"] = True
        else:
            remaining.append(arg)

    try:
        retries = int(option_values.pop("retries"))
    except ValueError:
        raise InvalidArgument("option [--retries] must be a number")
    if retries < 0:
        raise InvalidArgument("option [--retries] must not be negative")

    options = CommandOptions(**option_values)
    options.retries = retries
    return options, remaining


def pull_option_values(argv_list,flags):
    # flags=(dict) flag -> key, every value flag may repeat
    values, positional = {}, []
    args = iter(argv_list)
    for arg in args:
        if arg in flags:
            try:
                values.setdefault(flags[arg],[]).append(next(args))
            except StopIteration:
                raise InvalidArgument(f"option [{arg}] requires a value")
        else:
            positional.append(arg)
    return values, positional


class ShellHandler:

    def __init__(self,argv_list):
        self.functions = Functions()
        self.error_messages = Error_codes(self.functions)

        try:
            self.options, self.argv_list = parse_global_options(argv_list)
        except ChiactlError as e:
            self.handle_error(e)

        self.log_obj = Logging("main",self.options.root,self.options.log_level)
        self.log = logging.getLogger("chiactl")

        self.functions = Functions(self.options)
        self.error_messages = Error_codes(self.functions)
        self.retry_policy = RetryPolicy(max_attempts=self.options.retries+1)

        self.called_command = None
        self.config_store = None


    # ==== SETTERS ====

    def _set_config_store(self,config_file=None):
        self.config_store = ConfigStore.load(self.options.root,config_file)
        self.log.debug(f"chia root discovered [{self.options.root}]")


    def _set_daemon(self):
        return DaemonClient(self.config_store.config_obj,self.options.root,self.retry_policy)


    def _set_rpc_client(self,service):
        return RpcClient(self.config_store.config_obj,self.options.root,service,self.retry_policy)


    # ==== CHECKS ====

    def check_valid_command(self):
        valid_commands, valid_short_cuts = pull_valid_command()
        short_cut_map = pull_short_cut_map()

        if len(self.argv_list) < 1:
            self.functions.print_help({"hint": "None"})

        self.called_command = self.argv_list[0]
        self.command_args = self.argv_list[1:]

        if self.called_command in valid_short_cuts:
            self.called_command = short_cut_map[self.called_command]
        if self.called_command not in valid_commands:
            self.log.warning(f"invalid command requested [{self.called_command}]")
            self.functions.print_help({"hint": "unknown"})


    # ==== CLI ====

    def start_cli(self):
        self.check_valid_command()
        self.log.info(f"chiactl command requested [{self.called_command}] args [{self.command_args}]")

        try:
            return_value = self.route_command()
        except ChiactlError as e:
            self.handle_error(e)
        return self.handle_exit(return_value)


    def route_command(self):
        command = self.called_command
        if command == "help":
            self.functions.print_help({"exit_code": 0})
        elif command == "version":
            return self.show_version()

        if command != "edit_config":
            self.functions.check_for_help(self.command_args,command)

        if command == "switch_network":
            return self.switch_network(self.command_args)
        elif command == "show_network":
            return self.show_network(self.command_args)
        elif command == "edit_config":
            return self.edit_config(self.command_args)
        elif command == "debug":
            return self.debug(self.command_args)
        elif command == "split_largest_coin":
            return self.split_largest_coin(self.command_args)
        elif command == "show_my_mirrors":
            return self.show_my_mirrors(self.command_args)
        elif command == "delete_mirrors":
            return self.delete_mirrors(self.command_args)
        elif command == "convert_keys_values":
            return self.convert_keys_values(self.command_args)
        elif command == "remove_trusted_peer":
            return self.remove_trusted_peer(self.command_args)


    def show_version(self):
        print(f"  chiactl {colored(self.functions.chiactl_version,'yellow')}")
        return 0


    def switch_network(self,command_args):
        if len(command_args) != 1:
            raise InvalidArgument("switch_network requires exactly one argument, the network name")
        network_name = command_args[0]

        self._set_config_store()
        self.functions.print_header_title({"line1": "SWITCH NETWORK","newline": "both"})

        switcher = SwitchNetwork({
            "config_store": self.config_store,
            "node_service": self._set_daemon(),
            "functions": self.functions,
        })
        result = switcher.switch(network_name)

        for warning in result.warnings:
            self.functions.print_paragraphs([
                ["",1],[" WARNING ",0,"white,on_red"], [str(warning),1,"yellow"],
                ["The network switch completed, start the full node manually:",1],
                ["chia start node",2,"yellow","bold"],
            ])
        self.functions.print_paragraphs([
            ["Switched from",0], [result.current,0,"yellow","bold"],
            ["to",0], [result.target,2,"green","bold"],
        ])
        return 0


    def show_network(self,command_args):
        if command_args:
            raise InvalidArgument(f"show_network takes no arguments {command_args}")
        self._set_config_store()
        ShowNetwork({
            "config_store": self.config_store,
            "node_service": self._set_daemon(),
            "functions": self.functions,
            "retry_policy": self.retry_policy,
        }).print_network_info()
        return 0


    def edit_config(self,command_args):
        if command_args == ["help"]:
            self.functions.print_help({"extended": "edit_config","exit_code": 0})

        dry_run = "--dry-run" in command_args
        command_args = [arg for arg in command_args if arg != "--dry-run"]
        values, positional = pull_option_values(command_args,{
            "-s": "set", "--set": "set",
            "--config": "config", "-c": "config",
        })
        if positional:
            raise InvalidArgument(f"unexpected arguments {positional}")

        config_file = values.get("config",[None])[-1]
        self._set_config_store(config_file)
        EditConfig({
            "config_store": self.config_store,
            "functions": self.functions,
            "set_values": parse_set_values(values.get("set",[])),
            "dry_run": dry_run,
        }).process_edit()
        return 0


    def debug(self,command_args):
        unknown = [arg for arg in command_args if arg not in ["--sort","--all-files"]]
        if unknown:
            raise InvalidArgument(f"unexpected arguments {unknown}")

        self._set_config_store()
        daemon = self._set_daemon()
        Debug({
            "config_store": self.config_store,
            "functions": self.functions,
            "node_service": daemon,
            "show_network": ShowNetwork({
                "config_store": self.config_store,
                "node_service": daemon,
                "functions": self.functions,
                "retry_policy": self.retry_policy,
            }),
            "sort": "--sort" in command_args,
            "all_files": "--all-files" in command_args,
        }).print_debug()
        return 0


    def split_largest_coin(self,command_args):
        values, positional = pull_option_values(command_args,{
            "-a": "amount_per_coin", "--amount-per-coin": "amount_per_coin",
            "-n": "number_of_coins", "--number-of-coins": "number_of_coins",
            "-i": "wallet_id", "--id": "wallet_id",
            "-m": "fee", "--fee": "fee",
            "-f": "fingerprint", "--fingerprint": "fingerprint",
        })
        if positional:
            raise InvalidArgument(f"unexpected arguments {positional}")
        values = {key: value[-1] for key, value in values.items()}
        for key in ["number_of_coins","wallet_id","fingerprint"]:
            if key in values and not values[key].isdigit():
                raise InvalidArgument(f"option [{key}] must be a number")

        self._set_config_store()
        wallet_rpc = self._set_rpc_client("wallet")
        try:
            SplitLargestCoin({
                "functions": self.functions,
                "wallet_rpc": wallet_rpc,
                **values,
            }).process_split()
        finally:
            wallet_rpc.close()
        return 0


    def show_my_mirrors(self,command_args):
        values, positional = pull_option_values(command_args,{"--id": "store_id"})
        if positional:
            raise InvalidArgument(f"unexpected arguments {positional}")
        return self._run_data_layer("process_show_mirrors",values)


    def delete_mirrors(self,command_args):
        values, positional = pull_option_values(command_args,{"-m": "fee", "--fee": "fee"})
        if positional:
            raise InvalidArgument(f"unexpected arguments {positional}")
        return self._run_data_layer("process_delete_mirrors",values)


    def convert_keys_values(self,command_args):
        values, positional = pull_option_values(command_args,{
            "--id": "store_id",
            "--input-format": "input_format",
            "--output-format": "output_format",
        })
        if positional:
            raise InvalidArgument(f"unexpected arguments {positional}")
        if "store_id" not in values:
            raise InvalidArgument("convert_keys_values requires --id <store_id>")
        return self._run_data_layer("process_convert_keys_values",values)


    def _run_data_layer(self,process,values):
        values = {key: value[-1] for key, value in values.items()}
        self._set_config_store()
        data_layer_rpc = self._set_rpc_client("data_layer")
        try:
            data_layer = DataLayer({
                "functions": self.functions,
                "data_layer_rpc": data_layer_rpc,
                **values,
            })
            getattr(data_layer,process)()
        finally:
            data_layer_rpc.close()
        return 0


    def remove_trusted_peer(self,command_args):
        remove_all = "--all" in command_args or "-a" in command_args
        command_args = [arg for arg in command_args if arg not in ["--all","-a"]]
        values, positional = pull_option_values(command_args,{"--config": "config", "-c": "config"})
        if positional:
            raise InvalidArgument(
                f"unexpected arguments {positional}, only --all is supported"
            )

        self._set_config_store(values.get("config",[None])[-1])
        RemoveTrustedPeers({
            "config_store": self.config_store,
            "functions": self.functions,
            "remove_all": remove_all,
        }).process_remove()
        return 0


    # ==== HANDLERS ====

    def handle_error(self,error):
        self.error_messages.error_code_messages({
            "error_code": error.error_code,
            "line_code": error.line_code,
            "extra": str(error),
        })


    def handle_exit(self,return_value):
        self.log.info(f"chiactl command [{self.called_command}] complete")
        exit(return_value or 0)
