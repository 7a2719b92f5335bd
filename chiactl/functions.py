import logging

from textwrap import TextWrapper
from termcolor import colored, cprint
from time import sleep
from shutil import get_terminal_size
from os import path, walk
from sys import exit, stdin
from select import select

from hurry.filesize import size, alternative

from . import __version__
from .troubleshoot.help import build_help


class Functions():

    def __init__(self,options=None):
        self.options = options
        self.log = logging.getLogger("chiactl")
        self.quiet = getattr(options,"quiet",False)

        self.chiactl_version = f"v{__version__}"

    # =============================
    # getter functions
    # =============================

    def get_size(self,start_path='.'):
        if path.isfile(start_path):
            return path.getsize(start_path)
        total_size = 0
        for dirpath, _, filenames in walk(start_path):
            for f in filenames:
                fp = path.join(dirpath, f)
                # skip if it is symbolic link
                if not path.islink(fp):
                    total_size += path.getsize(fp)
        return total_size


    def get_human_size(self,num_bytes):
        if num_bytes < 1024:
            return f"{num_bytes} B"
        return size(num_bytes, system=alternative)

    # =============================
    # print functions
    # =============================

    def print_clear_line(self):
        console_size = get_terminal_size()
        print(f"{' ': >{console_size.columns-2}}",end="\r")


    def print_cmd_status(self,command_obj):
        # status=(str) "running", "successful", "complete"
        # text_start=(str) wording before brackets
        # text_end=(str) wording after brackets  # default ""
        # brackets=(str) string to be in yellow and brackets # default False
        # newline={bool} # default False
        # delay={float} # how long to pause to allow user to see
        if self.quiet: return

        text_start = command_obj["text_start"]
        text_end = command_obj.get('text_end',"")
        text_color = command_obj.get('text_color',"cyan")
        status = command_obj.get("status","")
        brackets = command_obj.get('brackets',False)
        delay = command_obj.get('delay',0)

        newline = command_obj.get('newline',False)
        status_color = command_obj.get('status_color',"default")
        bold = command_obj.get('bold',False)

        if status_color == "default":
            status_color = "yellow" if status == "running" else "green"
            status_color = "red" if status == "failed" else status_color

        padding = 50 - (len(text_start)+(len(brackets)-2)) if brackets else 55 - len(text_start)
        if padding < 0:
            padding = 0

        status = colored(status,status_color,attrs=['bold'])
        attrs = ['bold'] if bold else None

        text_start = colored(text_start,text_color,attrs=attrs)
        text_end = colored(text_end,text_color,attrs=attrs)

        if brackets:
            l_bracket = colored("[",text_color,attrs=attrs)
            r_bracket = colored("]",text_color,attrs=attrs)
            brackets = colored(brackets,"yellow",attrs=["bold"])
            text_start = f"{text_start} {l_bracket}{brackets}{r_bracket} {text_end:.<{padding}} {status}"
        else:
            text_start = f"{text_start} {text_end:.<{padding}} {status}"

        self.print_clear_line()
        print(" ",text_start,end="\r")

        if newline:
            print("")

        sleep(delay)


    def print_paragraphs(self,paragraphs,wrapper_obj=None):
        # paragraph=(list)
        # [0] = line
        # [1] = newlines (optional default = 1)
            # -1 = no space
            # 0 = same line with white space
            # 2 - X = number of newlines
        # [2] = color (optional default = cyan) "color,on_color" for background
        # [3] = attributes (optional) "bold" or "bold,underline"
        console_size = get_terminal_size()

        initial_indent = subsequent_indent = "  "
        if wrapper_obj is not None:
            initial_indent = wrapper_obj.get("indent","  ")
            subsequent_indent = wrapper_obj.get("sub_indent","  ")

        console_setup = TextWrapper()
        console_setup.initial_indent = initial_indent
        console_setup.subsequent_indent = subsequent_indent
        console_setup.width = (console_size.columns - 2)

        last_line = ""

        for current in paragraphs:
            line = str(current[0])
            newlines = current[1] if len(current) > 1 else 1

            color, on_color = "cyan", None
            if len(current) > 2:
                color = current[2]
                if "," in color:
                    color, on_color = color.split(",")
            attrs = current[3].split(",") if len(current) > 3 else None
            line = colored(line,color,on_color,attrs=attrs)

            do_print = True
            if newlines == 0 and last_line == "":
                last_line = line
                do_print = False
            elif newlines == -1:
                last_line = last_line+line
                do_print = False
            elif newlines == 0:
                last_line = last_line+" "+line
                do_print = False
            elif last_line != "":
                line = last_line+" "+line
                last_line = ""

            if do_print:
                print(console_setup.fill(line))
                for _ in range(1,newlines):
                    print("")


    def print_header_title(self,command_obj):
        #line1=(str), newline=(str) top, bottom, both
        #single_color=(str) default: yellow
        #single_bg=(str) default: on_blue
        line1 = command_obj["line1"]
        newline = command_obj.get("newline", False)
        single_color = command_obj.get("single_color", "yellow")
        single_bg = command_obj.get("single_bg", "on_blue")

        if "on_" not in single_bg:
            single_bg = f"on_{single_bg}"

        if newline == "top" or newline == "both":
            print("")

        line1 = f" * {line1} * "
        print("  ",end="")
        cprint(f'{line1:-^40}',single_color,single_bg,attrs=["bold"])

        if newline == "bottom" or newline == "both":
            print("")


    def print_table(self,rows,width=None):
        # rows=(list of tuples) label, value
        if not rows: return
        width = width or max(len(label) for label, _ in rows) + 1
        for label, value in rows:
            print(f"  {colored(f'{label:<{width}}','cyan')} {colored(str(value),'yellow')}")


    def print_help(self,command_obj):
        hint = command_obj.get("hint","None")
        extended = command_obj.get("extended",False)
        exit_code = command_obj.get("exit_code",1)

        self.log.info("Help file print out")
        print(f"  CHIACTL VERSION: [{colored(self.chiactl_version,'yellow')}]")
        print(build_help(extended))

        if hint == "unknown":
            print(colored('  Unknown command entered','red'),"\n")
        elif isinstance(hint,str) and hint != "None":
            cprint(f"  {hint}","cyan")

        exit(exit_code)


    def check_for_help(self,argv_list,extended):
        if "help" in argv_list:
            self.print_help({
                "extended": extended,
                "exit_code": 0,
            })


    def test_for_premature_enter_press(self):
        try:
            return stdin.isatty() and bool(select([stdin], [], [], 0)[0])
        except (OSError, ValueError):
            return False


    def confirm_action(self,command_obj):
        self.log.debug("confirm action request")

        yes_no_default = command_obj.get("yes_no_default")
        return_on = command_obj.get("return_on")

        prompt = command_obj.get("prompt")
        prompt_color = command_obj.get("prompt_color","cyan")
        exit_if = command_obj.get("exit_if",True)

        if getattr(self.options,"skip_confirm",False):
            self.log.debug(f"confirm action skipped by request [{prompt}]")
            return True

        prompt = f"  {colored(f'{prompt}',prompt_color)} {colored('[',prompt_color)}{colored(yes_no_default,'yellow')}{colored(']: ',prompt_color)}"

        valid_options = ["y","n","yes","no",return_on,yes_no_default]

        if self.test_for_premature_enter_press():
            # there was information waiting in stdin, clearing
            input()

        while True:
            confirm = input(prompt).strip().lower()
            if confirm == "" or confirm in valid_options:
                break
            print(colored("  incorrect input","red"))

        if confirm == "":
            confirm = yes_no_default
        if confirm[0] == str(return_on).lower()[0]:
            return True

        if exit_if:
            print(colored("  Action has been cancelled","green"))
            exit(0)

        return False


if __name__ == "__main__":
    print("This class module is not designed to be run independently, please refer to the documentation")
