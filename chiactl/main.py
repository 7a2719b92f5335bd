import logging

from sys import argv, exit
from termcolor import colored

from .shell_handler import ShellHandler


def cli_commands(argv_list):
    try:
        current_shell = ShellHandler(argv_list[1:])
        current_shell.start_cli()
    except KeyboardInterrupt:
        keyboardInterrupt()


def keyboardInterrupt():
    log = logging.getLogger("chiactl")
    log.critical("user terminated chiactl prematurely with keyboard interrupt")
    print("")
    print(colored("  user terminating chiactl prematurely","red"))
    exit(1)


def main():
    cli_commands(argv)


if __name__ == "__main__":
    main()
