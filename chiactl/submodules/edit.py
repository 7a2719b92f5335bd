import logging

from copy import deepcopy

from ..config.config_path import ConfigPath
from ..troubleshoot.errors import InvalidArgument


def parse_set_values(set_args):
    # ["full_node.port=58444", ...] -> {"full_node.port": "58444"}
    values = {}
    for set_arg in set_args:
        if "=" not in set_arg:
            raise InvalidArgument(f"invalid --set value [{set_arg}], expected <path>=<value>")
        key, value = set_arg.split("=",1)
        if key.strip() == "":
            raise InvalidArgument(f"invalid --set value [{set_arg}], path is empty")
        values[key.strip()] = value
    return values


class EditConfig():

    def __init__(self,command_obj):
        self.log = logging.getLogger("chiactl")
        self.config_store = command_obj["config_store"]
        self.functions = command_obj.get("functions",None)
        self.set_values = command_obj.get("set_values",{})
        self.dry_run = command_obj.get("dry_run",False)
        self.environment = command_obj.get("environment",None)


    def process_edit(self):
        if not self.set_values:
            raise InvalidArgument("no values requested, use -s <path>=<value>")

        original = deepcopy(self.config_store.config_obj)
        self.config_store.fill_values_from_environment(self.environment)

        changes = []
        for dotted, value in self.set_values.items():
            config_path = ConfigPath(dotted)
            current = config_path.get(original) if config_path.exists(original) else None
            if current is None:
                self.log.info(f"Config value not found [{dotted}]")
            changes.append((config_path,current,value))

        self.config_store.validate_fields(self.set_values)

        if self.dry_run:
            self.log.info("DRY RUN: The following changes would be made to the config file")
            for config_path, current, value in changes:
                self.log.info(f"Would change config value | path [{config_path}] current_value [{current}] new_value [{value}]")
                self._print_change(config_path,current,value)
            self.log.info("DRY RUN: No changes were made to the config file")
            return changes

        self.config_store.set_fields(self.set_values)
        self.config_store.save()
        for config_path, current, value in changes:
            self._print_change(config_path,current,value)
        return changes


    def _print_change(self,config_path,current,value):
        if not self.functions: return
        verb = "would change" if self.dry_run else "changed"
        self.functions.print_paragraphs([
            [str(config_path),0,"yellow","bold"], [verb,0], [str(current),0,"magenta"],
            ["->",0], [str(value),1,"green"],
        ])
