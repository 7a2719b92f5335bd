import yaml
import logging

from os import path, environ, replace, remove, getpid
from copy import deepcopy

from .config_path import ConfigPath
from ..troubleshoot.errors import ConfigLoadFailure, ConfigSaveFailure, ConfigFieldFailure


def get_chia_root(root=None):
    if root:
        return path.abspath(path.expanduser(root))
    env_root = environ.get("CHIA_ROOT")
    if env_root:
        return path.abspath(path.expanduser(env_root))
    return path.join(path.expanduser("~"),".chia","mainnet")


class CommandOptions():
    # global options, built once by the shell handler and passed to every command

    def __init__(self,root=None,log_level=None,skip_confirm=False,quiet=False):
        self.root = get_chia_root(root)
        self.log_level = log_level
        self.skip_confirm = skip_confirm
        self.quiet = quiet


    def __repr__(self):
        return f"CommandOptions(root={self.root!r}, log_level={self.log_level!r}, skip_confirm={self.skip_confirm!r})"


class ConfigStore():

    def __init__(self,root,config_file=None):
        self.log = logging.getLogger("chiactl")
        self.root = root
        self.yaml_file = config_file or path.join(root,"config","config.yaml")
        self.config_obj = None


    @classmethod
    def load(cls,root,config_file=None):
        store = cls(root,config_file)
        store.build_yaml_dict()
        return store


    def build_yaml_dict(self):
        self.log.debug(f"configuration load requested [{self.yaml_file}]")
        try:
            with open(self.yaml_file, 'r', encoding='utf-8') as f:
                yaml_data = f.read()
        except OSError as e:
            raise ConfigLoadFailure(f"unable to read configuration file [{self.yaml_file}] [{e}]")

        try:
            config_obj = yaml.safe_load(yaml_data)
        except yaml.YAMLError as e:
            raise ConfigLoadFailure(f"configuration file [{self.yaml_file}] is not valid yaml [{e}]")

        if not isinstance(config_obj,dict):
            raise ConfigLoadFailure(f"configuration file [{self.yaml_file}] does not contain a configuration document")

        self.config_obj = config_obj
        self.log.debug(f"configuration loaded [{self.yaml_file}]")


    @property
    def selected_network(self):
        network = self.config_obj.get("selected_network")
        if not network:
            raise ConfigLoadFailure(f"configuration file [{self.yaml_file}] has no selected_network")
        return network


    def get_field_by_path(self,config_path):
        if not isinstance(config_path,ConfigPath):
            config_path = ConfigPath(config_path)
        return config_path.get(self.config_obj)


    def set_field_by_path(self,config_path,value):
        if not isinstance(config_path,ConfigPath):
            config_path = ConfigPath(config_path)
        value = config_path.set(self.config_obj,value)
        self.log.debug(f"configuration field set [{config_path}] value [{value}]")
        return value


    def validate_fields(self,updates):
        # updates=(dict) ConfigPath or str -> value
        # returns a new dict of ConfigPath -> coerced value without touching the document
        validated = {}
        for config_path, value in updates.items():
            if not isinstance(config_path,ConfigPath):
                config_path = ConfigPath(config_path)
            validated[config_path] = config_path.validate(self.config_obj,value)
        return validated


    def set_fields(self,updates):
        # the whole set is validated against a copy first, nothing is applied on failure
        validated = self.validate_fields(updates)
        staged = deepcopy(self.config_obj)
        for config_path, value in validated.items():
            config_path.set(staged,value)
            self.log.debug(f"configuration field staged [{config_path}] value [{value}]")
        self.config_obj = staged
        return validated


    def fill_values_from_environment(self,environment=None):
        # CHIA__FULL_NODE__PORT=58444 -> full_node.port
        environment = environ if environment is None else environment
        applied = {}
        for key, value in environment.items():
            if not key.startswith("CHIA__"): continue
            dotted = ".".join(part.lower() for part in key[len("CHIA__"):].split("__"))
            try:
                applied[dotted] = self.set_field_by_path(dotted,value)
            except ConfigFieldFailure as e:
                raise ConfigFieldFailure(f"environment variable [{key}] could not be applied [{e}]")
            self.log.info(f"configuration value from environment [{key}] -> [{dotted}]")
        return applied


    def save(self):
        tmp_file = f"{self.yaml_file}.{getpid()}.tmp"
        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.config_obj, f, default_flow_style=False, sort_keys=False)
            replace(tmp_file,self.yaml_file)
        except (OSError, yaml.YAMLError) as e:
            if path.exists(tmp_file):
                remove(tmp_file)
            raise ConfigSaveFailure(f"unable to save configuration file [{self.yaml_file}] [{e}]")
        self.log.info(f"configuration saved [{self.yaml_file}]")


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
