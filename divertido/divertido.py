import sys
from typing import List, Optional

from .lexer import Lexer
from .parser import Parser
from .interpreter import Interpreter
from .errors import DivertidoError


PROMPT = "divertido :> "

# Shown on stderr when the command line is wrong.
ERROR_HELP_PAGE = [
    "Program  :   Divertido",
    "Usage    :   divertido [command]",
    "Command  :",
    "    repl     :   runs a divertido repl.",
    "    filename :   runs the given file.",
    "    help     :   prints this page.",
]

HELP_PAGE = [
    "Program: Divertido",
    "Usage: divertido [command]",
    "Command:",
    "    repl:       runs a divertido repl.",
    "    filename:   runs the given file.",
]


class Divertido:
    def __init__(self, output=None):
        self.output = output
        self.had_error = False

    def run(self, source: str):
        """Runs one program through a fresh Lexer -> Parser -> Interpreter chain."""
        tokens = Lexer(source).scan_tokens()
        statements = Parser(tokens).parse()
        Interpreter(self.output).interpret(statements)

    def run_source(self, source: str) -> int:
        """Runs a program and reports any error. Returns the process exit code."""
        try:
            self.run(source)
        except DivertidoError as error:
            self.had_error = True
            print(error, file=sys.stderr)
        return 1 if self.had_error else 0

    def run_file(self, path: str) -> int:
        try:
            with open(path, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError:
            return print_help(f"Could not open file '{path}'")
        return self.run_source(source)

    def run_prompt(self) -> int:
        """Reads and runs lines until end of input. The first error ends the session."""
        while True:
            try:
                line = input(PROMPT)
            except (KeyboardInterrupt, EOFError):
                print()
                return 0
            if not line: continue
            self.run_source(line)
            if self.had_error:
                return 1


def print_help(error: Optional[str] = None) -> int:
    """Prints the help page. With an error it goes to stderr and the exit code is 1."""
    if error is None:
        for line in HELP_PAGE:
            print(line)
        return 0

    print(f"Error    :   {error}.", file=sys.stderr)
    print(file=sys.stderr)
    for line in ERROR_HELP_PAGE:
        print(line, file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    divertido = Divertido()

    if len(args) == 0:
        return divertido.run_prompt()
    if len(args) > 1:
        return print_help("Invalid number of commands")

    command = args[0]
    if command == "repl":
        return divertido.run_prompt()
    if command == "help":
        return print_help()
    return divertido.run_file(command)


if __name__ == "__main__":
    sys.exit(main())
