import json
import logging

from os import path, remove, replace
from types import SimpleNamespace

from .cache_files import CacheFiles
from ..config.networking import build_field_updates, resolve_profile
from ..node_service import FULL_NODE_SERVICE
from ..troubleshoot.errors import (
    ChiactlError, InvalidArgument, IOFailure, ServiceUnreachable,
    ServiceQueryFailure, ServiceStopFailure, ServiceStartFailure,
    CacheRelocationFailure, ConfigFieldFailure,
)


class SwitchNetwork():
    """Switch a chia installation from its selected network to another.

    Every filesystem and configuration mutation happens after the full node
    is confirmed stopped, and the node is only restarted after the new
    configuration is saved.  A journal under ``db/`` records the cache
    relocation stage so an interrupted switch can be resumed by running the
    same switch again.
    """

    def __init__(self,command_obj):
        self.command_obj = command_obj
        self.log = logging.getLogger("chiactl")

        self.config_store = command_obj["config_store"]
        self.node_service = command_obj["node_service"]
        self.functions = command_obj.get("functions",None)
        self.cache_files = command_obj.get("cache_files") or CacheFiles(self.config_store.root)
        self.service_name = command_obj.get("service_name",FULL_NODE_SERVICE)

        self.journal_file = path.join(self.cache_files.db_dir,".network_switch.json")


    # ==== SETTERS ====

    def _set_result(self,current,target):
        self.result = SimpleNamespace(
            current=current,
            target=target,
            stopped=False,
            restarted=False,
            resumed=False,
            archived=[],
            restored=[],
            warnings=[],
        )


    def _set_journal(self,stage):
        tmp_file = f"{self.journal_file}.tmp"
        try:
            with open(tmp_file,"w") as f:
                json.dump({"from": self.result.current, "to": self.result.target, "stage": stage},f)
            replace(tmp_file,self.journal_file)
        except OSError as e:
            raise CacheRelocationFailure(f"unable to write switch journal [{self.journal_file}] [{e}]")


    # ==== GETTERS ====

    def _get_journal(self):
        if not path.isfile(self.journal_file):
            return None
        try:
            with open(self.journal_file,"r") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise CacheRelocationFailure(f"unable to read switch journal [{self.journal_file}] [{e}]")


    def _get_is_running(self):
        try:
            return self.node_service.is_running(self.service_name)
        except ServiceUnreachable as e:
            # nothing listening on the administrative channel, nothing to stop
            self._print_log_msg("info",f"administrative channel unreachable, treating full node as stopped [{e}]")
            return False
        except ChiactlError as e:
            raise ServiceQueryFailure(f"error checking full node status [{e}]")


    # ==== PARSERS / PROCESSORS ====

    def switch(self,target):
        current = self.config_store.selected_network
        self.handle_arguments(current,target)
        self._set_result(current,target)
        self._print_log_msg("info",f"swapping to network [{target}] from [{current}]")

        self.handle_journal()

        updates = build_field_updates(target,resolve_profile(target))
        self.config_store.validate_fields(updates)

        self.process_archive_dirs()
        self.process_stop()
        self.process_cache_files()
        self.process_config(updates)
        self.process_restart()

        self._print_log_msg("info",f"network switch complete [{current}] -> [{target}]")
        return self.result


    def process_archive_dirs(self):
        for network in [self.result.current,self.result.target]:
            self.cache_files.ensure_archive_dir(network)


    def process_stop(self):
        self._print_log_msg("debug","checking if full node is running")
        if not self._get_is_running():
            self._print_log_msg("info","full node is not running")
            return

        self._print_status("Stopping full node","running")
        try:
            stopped = self.node_service.stop_service(self.service_name)
        except ChiactlError as e:
            self._print_status("Stopping full node","failed")
            raise ServiceStopFailure(f"error stopping full node service [{e}]")
        if not stopped:
            self._print_status("Stopping full node","failed")
            raise ServiceStopFailure("unknown error stopping full node. Stop chia services manually and try again")

        self.result.stopped = True
        self._print_status("Stopping full node","complete")
        self._print_log_msg("info","successfully stopped full node service")


    def process_cache_files(self):
        if self.result.resumed:
            self._print_log_msg("info","cache files already relocated by an interrupted switch, skipping")
            return

        self._print_status("Relocating network cache files","running")
        self._set_journal("relocating")
        try:
            self.result.archived = self.cache_files.archive_active(self.result.current)
            self.result.restored = self.cache_files.restore_archived(self.result.target)
        except IOFailure as e:
            self._print_status("Relocating network cache files","failed")
            raise CacheRelocationFailure(str(e))
        self._set_journal("relocated")

        self._print_status("Relocating network cache files","complete")
        self._print_log_msg("info",f"cache files archived {self.result.archived} restored {self.result.restored}")


    def process_config(self,updates):
        self._print_status("Updating configuration","running")
        try:
            self.config_store.set_fields(updates)
        except ConfigFieldFailure:
            self._print_status("Updating configuration","failed")
            raise
        except ChiactlError as e:
            self._print_status("Updating configuration","failed")
            raise ConfigFieldFailure(str(e))

        self._print_log_msg("debug","saving config")
        self.config_store.save()
        self._print_status("Updating configuration","complete")
        self.handle_journal_cleanup()


    def process_restart(self):
        if not self.result.stopped: return

        self._print_status("Starting full node","running")
        try:
            started = self.node_service.start_service(self.service_name)
            if not started:
                raise ServiceStartFailure("unknown error starting full node")
        except ChiactlError as e:
            warning = e if isinstance(e,ServiceStartFailure) else ServiceStartFailure(f"error starting full node [{e}]")
            self._print_status("Starting full node","failed")
            self._print_log_msg("error",str(warning))
            self.result.warnings.append(warning)
            return

        self.result.restarted = True
        self._print_status("Starting full node","complete")
        self._print_log_msg("info","successfully started full node")


    # ==== HANDLERS ====

    def handle_arguments(self,current,target):
        if not isinstance(target,str) or target.strip() == "":
            raise InvalidArgument("a network name is required")
        if target == current:
            raise InvalidArgument(f"current network name and new network name are the same [{current}]")


    def handle_journal(self):
        journal = self._get_journal()
        if journal is None: return

        if journal.get("to") == self.result.current and journal.get("stage") == "relocated":
            # config already saved for that switch, only the journal removal failed
            self._print_log_msg("warning",f"removing journal of completed switch [{journal.get('from')}] -> [{journal.get('to')}]")
            self.handle_journal_cleanup()
            return

        if (journal.get("from"),journal.get("to")) == (self.result.current,self.result.target) and journal.get("stage") == "relocated":
            self._print_log_msg("warning",f"resuming interrupted switch [{self.result.current}] -> [{self.result.target}]")
            self.result.resumed = True
            return

        raise CacheRelocationFailure(
            f"an interrupted switch from [{journal.get('from')}] to [{journal.get('to')}] stopped at stage [{journal.get('stage')}]; "
            f"verify the cache files under [{self.cache_files.db_dir}] and remove [{self.journal_file}] before switching again"
        )


    def handle_journal_cleanup(self):
        try:
            if path.isfile(self.journal_file):
                remove(self.journal_file)
        except OSError as e:
            self._print_log_msg("warning",f"unable to remove switch journal [{self.journal_file}] [{e}]")


    # ==== PRINTERS ====

    def _print_status(self,text_start,status):
        if not self.functions: return
        color = {"running": "yellow", "complete": "green", "failed": "red"}[status]
        self.functions.print_cmd_status({
            "text_start": text_start,
            "brackets": self.result.target,
            "status": status,
            "status_color": color,
            "newline": status != "running",
        })


    def _print_log_msg(self,log_type,msg):
        log_method = getattr(self.log, log_type, None)
        log_method(f"{self.__class__.__name__} request --> {msg}")


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
