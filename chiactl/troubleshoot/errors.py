import logging

from sys import exit
from types import SimpleNamespace

# glossary of line_code
# =======================

# config_error
#     load
#     field
#     save

# invalid_argument
# io_error

# service_query
# service_stop
# service_start

# cache_relocation
# rpc_error
# service_unreachable

# unknown_error


class ChiactlError(Exception):
    error_code = "err-000"
    line_code = "unknown_error"

    def __init__(self,msg,error_code=None):
        super().__init__(msg)
        if error_code is not None:
            self.error_code = error_code


class SwitchError(ChiactlError):
    pass


class InvalidArgument(SwitchError):
    error_code = "arg-101"
    line_code = "invalid_argument"


class IOFailure(SwitchError):
    error_code = "io-201"
    line_code = "io_error"


class ServiceQueryFailure(SwitchError):
    error_code = "svc-301"
    line_code = "service_query"


class ServiceStopFailure(SwitchError):
    error_code = "svc-311"
    line_code = "service_stop"


class ServiceStartFailure(SwitchError):
    error_code = "svc-321"
    line_code = "service_start"


class CacheRelocationFailure(SwitchError):
    error_code = "cch-401"
    line_code = "cache_relocation"


class ConfigFieldFailure(SwitchError):
    error_code = "cfg-501"
    line_code = "config_error"


class ConfigSaveFailure(SwitchError):
    error_code = "cfg-511"
    line_code = "config_error"


class ConfigLoadFailure(ChiactlError):
    error_code = "cfg-521"
    line_code = "config_error"


class RpcFailure(ChiactlError):
    error_code = "rpc-601"
    line_code = "rpc_error"


class ServiceUnreachable(RpcFailure):
    error_code = "rpc-611"
    line_code = "service_unreachable"


class Error_codes():

    def __init__(self,functions,debug=False):
        self.log = logging.getLogger("chiactl")
        self.debug = debug
        self.functions = functions


    def error_code_messages(self,command_obj):
        # error_code=(str), line_code=(str), extra=(str), extra2=(str)
        var = SimpleNamespace(**command_obj)
        var.extra = command_obj.get("extra",False)
        var.extra2 = command_obj.get("extra2",False)

        self.error_code = var.error_code
        self.line_code = var.line_code
        self.print_error("start")

        if self.debug:
            print("error debugs:",var.error_code,var.line_code,var.extra,var.extra2)
            return

        self.log.critical(f"error code [{var.error_code}] line code [{var.line_code}] message [{var.extra}]")

        if var.line_code == "invalid_argument":
            self.functions.print_paragraphs([
                ["Invalid request.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["Suggestion:",0,"yellow","bold"], ["Verify the command arguments and try again.",2],
                ["command: ",0], ["chiactl <command> help",2,"yellow","bold"],
            ])

        elif var.line_code == "io_error":
            self.functions.print_paragraphs([
                ["A filesystem operation failed.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["Suggestion:",0,"yellow","bold"], ["Verify the permissions and free space of the chia root directory.",2],
            ])

        elif var.line_code == "config_error":
            self.functions.print_paragraphs([
                ["Unable to process the chia configuration file.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
            ])
            if var.error_code == ConfigFieldFailure.error_code:
                self.functions.print_paragraphs([
                    ["Suggestion:",0,"yellow","bold"], ["Verify the field path exists in",0],
                    ["config.yaml",0,"cyan"], ["and the value matches its type.",2],
                ])
            elif var.error_code == ConfigSaveFailure.error_code:
                self.functions.print_paragraphs([
                    ["The configuration was",0,"red"], ["not",0,"red","bold"], ["saved.",1,"red"],
                    ["Cache files may have already been moved. Rerun the same command to resume.",2,"magenta"],
                ])
            else:
                self.functions.print_paragraphs([
                    ["Suggestion:",0,"yellow","bold"], ["Verify",0], ["CHIA_ROOT",0,"cyan"],
                    ["or the",0], ["--root",0,"yellow"], ["option points to an initialized chia installation.",2],
                ])

        elif var.line_code == "service_query":
            self.functions.print_paragraphs([
                ["Unable to determine if the full node service is running.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["Nothing was changed.",2,"magenta"],
            ])

        elif var.line_code == "service_stop":
            self.functions.print_paragraphs([
                ["Unable to stop the full node service.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["Suggestion:",0,"yellow","bold"], ["Stop chia services manually and try again.",2],
            ])

        elif var.line_code == "service_start":
            self.functions.print_paragraphs([
                ["Unable to start the full node service.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["Suggestion:",0,"yellow","bold"], ["Start chia services manually.",2],
            ])

        elif var.line_code == "cache_relocation":
            self.functions.print_paragraphs([
                ["Unable to relocate the network cache files.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
                ["The configuration has",0,"red"], ["not",0,"red","bold"], ["been changed.",1,"red"],
                ["Inspect the",0], ["db",0,"cyan"], ["directory of the chia root before trying again.",2],
            ])

        elif var.line_code in ["rpc_error","service_unreachable"]:
            self.functions.print_paragraphs([
                ["Unable to communicate with the chia services.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[var.extra,2,"red"],
            ])
            if var.line_code == "service_unreachable":
                self.functions.print_paragraphs([
                    ["Suggestion:",0,"yellow","bold"], ["Verify chia is running:",0],
                    ["chia start node",2,"yellow","bold"],
                ])

        else:
            self.functions.print_paragraphs([
                ["An unknown error occurred.",2,"red","bold"],
                ["Error Message:",0,"yellow","bold"],[str(var.extra),2,"red"],
            ])

        self.print_error("end")
        exit(1)


    def print_error(self,section):
        if section == "start":
            self.functions.print_paragraphs([
                ["",1],[" ERROR ",0,"yellow,on_red","bold"],
                ["code:",0,"red"],[str(self.error_code),1,"yellow"],
            ])
        else:
            self.functions.print_paragraphs([
                ["chiactl terminated",1,"red","bold"],
            ])


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
