"""Interactive read-evaluate-print loop for Monkey. Uses cmd as backend."""

import cmd

from .environment import Environment
from .evaluator import Evaluator
from . import FRONTENDS


class Repl(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey Programming Language !"
    prompt = "@ "

    def __init__(self, evaluator=None, frontend='pratt', *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.parse = FRONTENDS[frontend]
        self.env = Environment()  # lives for the whole session

    def default(self, line):
        """Evaluates one line of Monkey source."""
        program, errors = self.parse(line)
        if errors:
            for err in errors:
                self.stdout.write(err + "\n")
            return
        result = self.evaluator.run(program, self.env)
        self.stdout.write(result.inspect() + "\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def start(stdin=None, stdout=None, evaluator=None, frontend='pratt'):
    """Run a session reading from `stdin` and writing to `stdout`."""
    repl = Repl(evaluator, frontend, stdin=stdin, stdout=stdout)
    if stdin is not None:
        repl.use_rawinput = False
    repl.cmdloop()
    return repl
