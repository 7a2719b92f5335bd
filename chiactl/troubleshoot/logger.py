import logging
import time

from os import path, makedirs, environ
from termcolor import cprint
from sys import exit

from logging.handlers import RotatingFileHandler

class Logging():

    def __init__(self,caller,root=None,level=None):
        self.log_file_name = "chiactl.log"
        self.caller = caller
        self.root = root

        root_exists = bool(root) and path.isdir(root)
        self.log_path = path.join(root,"log") if root_exists else None
        self.full_log_path = path.join(self.log_path,self.log_file_name) if root_exists else None

        self.level = level
        self.logger = logging.getLogger("chiactl")

        try:
            self.check_for_log_file()
            self.get_log_level()
            self.log_setup()
        except PermissionError:
            print("  There was an permission error found")
            print("  Does the process have proper permissions on the chia root?")
            print("  Please verify and try again.")
            exit("permissions error")
        except OSError as e:
            print("  Unknown logging error was found.")
            print("  Please try again.")
            print(f"  Error: {e}")
            exit(1)


    def log_setup(self):
        level_mapping = {
            "NOTSET": logging.NOTSET,
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARN": logging.WARN,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL
        }
        self.logger.setLevel(level_mapping[self.level])

        if self.test_for_handler(): return

        formatter = logging.Formatter(
            '%(asctime)s [%(process)d]: %(levelname)s : %(message)s',
            '%b %d %H:%M:%S')
        formatter.converter = time.gmtime  # UTC

        if self.full_log_path:
            log_handler = RotatingFileHandler(self.full_log_path, maxBytes=8*1024*1024, backupCount=8)
        else:
            log_handler = logging.NullHandler()
        log_handler.setFormatter(formatter)
        self.logger.addHandler(log_handler)

        if self.caller != "init":
            self.logger.info(f"Logger module initialized with level [{self.level}] caller [{self.caller}]")


    def check_for_log_file(self):
        if not self.log_path: return
        if not path.isdir(self.log_path):
            cprint("  Log path not found under chia root.","red")
            cprint("  Creating log directory for chiactl","yellow")
            makedirs(self.log_path,exist_ok=True)


    def test_for_handler(self):
        return len(self.logger.handlers) > 0


    def get_log_level(self):
        if self.level is None:
            self.level = environ.get("CHIACTL_LOG_LEVEL","INFO")
        self.level = str(self.level).strip().upper()

        levels = ["NOTSET","DEBUG","INFO","WARN","WARNING","ERROR","CRITICAL"]
        if self.level not in levels: self.level = "INFO"


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
