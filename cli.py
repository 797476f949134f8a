import sys
import traceback

from errors import BfError, BfRuntimeError, SourceUnavailable
from program import Program
from vm import VM


VERSION = "1.1.0"

USAGE = """\
A simple Brainfuck interpreter.
Usage: bf [options] <filename>
  options:
    -c, --comment  Enable comment feature: ';'.
    -d, --debug    Enable debug feature: '#'.
    -v, --version  Show program version and exit.
    -h, --help     Show this help message and exit.
        --trace    Show Python traceback on fatal errors."""


def show_help(file=None):
    print(USAGE, file=file or sys.stdout)


def read_file(path) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise SourceUnavailable(path, e.strerror)


def report(err, trace: bool = False):
    if trace:
        traceback.print_exc()
    elif isinstance(err, BfRuntimeError):
        print(err.format(), file=sys.stderr)
    else:
        print(f"Error: {err}", file=sys.stderr)


def cmd_run(path, comment: bool = False, debug: bool = False, trace: bool = False) -> int:
    try:
        code = read_file(path)
        program = Program.from_source(code)
        vm = VM(
            program,
            comment_enabled=comment,
            debug_enabled=debug,
            color=debug and sys.stderr.isatty(),
        )
        vm.run()
    except BfError as e:
        report(e, trace=trace)
        return 1
    return 0


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        show_help()
        return 1

    comment = False
    debug = False
    trace = False
    path = None

    # flags come first; the first other argument is the source file
    for arg in argv:
        if arg in ("-c", "--comment"):
            comment = True
        elif arg in ("-d", "--debug"):
            debug = True
        elif arg in ("-cd", "-dc"):
            comment = True
            debug = True
        elif arg == "--trace":
            trace = True
        elif arg in ("-v", "--version"):
            print(f"bf {VERSION}")
            return 0
        elif arg in ("-h", "--help"):
            show_help()
            return 0
        else:
            path = arg
            break

    if path is None:
        print("Error: no source file given.", file=sys.stderr)
        show_help(sys.stderr)
        return 1

    return cmd_run(path, comment=comment, debug=debug, trace=trace)


if __name__ == "__main__":
    sys.exit(main())
