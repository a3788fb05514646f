import sys

from rich import print_json
from rich.pretty import pprint

from gnuopts import *

__prog__ = "demo"

settings = {
    "verbose": False,
    "log": "info",
    "color": "auto",
    "interactive": False,
    "clean": False,
    "jobs": None,
    "machine": None,
}


@option("-h", "--help", descr="display this help and exit")
def show_help(_):
    program.help()
    sys.exit(0)


@option("--version", descr="output version information and exit")
def show_version(_):
    print("%s %s" % (__prog__, __version__))
    sys.exit(0)


@option("-v", "--verbose", descr="explain what is being done")
def verbose(_):
    settings["verbose"] = True


@option("--log", policy=Policy.REQUIRED, metavar="LEVEL", descr="set log level (trace, debug, info, warn, error)")
def log(value):
    settings["log"] = value


@option("-c", "--color", policy=Policy.OPTIONAL_FOR_LONG, metavar="WHEN", descr="colorize output; WHEN is always, never or auto")
def color(value):
    settings["color"] = "always" if value is None else value


@option("-i", "--interactive", descr="force interactive shell even when tasks are given")
def interactive(_):
    settings["interactive"] = True


@option("--clean", descr="rebuild build files")
def clean(_):
    settings["clean"] = True


@option("-j", policy=Policy.REQUIRED, metavar="JOBS", descr="run JOBS tasks at once")
def jobs(value):
    settings["jobs"] = value


@option("--machine-readable-output", policy=Policy.OPTIONAL_FOR_LONG, metavar="FORMAT", descr="print results as FORMAT (default json)")
def machine(value):
    settings["machine"] = "json" if value is None else value


program = Program(
    show_help,
    show_version,
    verbose,
    log,
    color,
    interactive,
    clean,
    jobs,
    machine,
    prog=__prog__,
    usage="[OPTION]... [TASK]...",
    blurb="Demonstration of GNU-style option parsing.",
    footer="Report bugs to the project issue tracker.",
    shell=True,
)


if __name__ == '__main__':
    tasks = program.parse()
    if settings["machine"] == "json":
        print_json(data={"settings": settings, "tasks": tasks})
    else:
        pprint({"settings": settings, "tasks": tasks})
