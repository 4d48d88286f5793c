"""
Console logger used by the dispatcher and by tasks.

All output goes through rich consoles: info/echo to stdout, warn/debug and
faults to stderr. abort() is the single fatal path available to tasks and
collaborators: it never returns.
"""
from rich.console import Console

from .faults import AbortError, FaultCode, trigger
from .utils import Unset


class Logger:
    """
    Logger/abort collaborator.

    Parameters
    - out, err: rich consoles for regular and diagnostic output.
    - debug: when False, debug() is silent and faults print their message only.
    - shell: when True, faults are rendered with their rich header/panel.
    """

    def __init__(self, out=Unset, err=Unset, /, *, debug=False, shell=False, fancy=False, colorful=False, prog="lein"):
        self.out = Console() if out is Unset else out
        self.err = Console(stderr=True) if err is Unset else err
        self.debugging = debug
        self.shell = shell
        self.fancy = fancy
        self.colorful = colorful
        self.prog = prog

    @property
    def options(self):
        """rendering options merged into every fault this logger surfaces."""
        return {"prog": self.prog, "shell": self.shell, "fancy": self.fancy, "colorful": self.colorful, "console": self.err}

    def echo(self, *message):
        self.out.print(*message, highlight=False, markup=False)

    def info(self, *message):
        self.out.print(" ".join(map(str, message)), highlight=False, markup=False)

    def warn(self, *message):
        self.err.print(" ".join(map(str, message)), highlight=False, markup=False)

    def debug(self, *message):
        if self.debugging:
            self.err.print(" ".join(map(str, message)), highlight=False, markup=False)

    def abort(self, *message, status=1):
        """join the message parts and raise an AbortError carrying status."""
        trigger(AbortError(
            " ".join(map(str, message)),
            title="aborted",
            code=FaultCode.ABORTED,
            status=status,
        ), **self.options)

    def fault(self, error):
        """print a caught fault: its rich rendering in shell mode, else the bare message."""
        if self.shell:
            self.err.print(error)
        elif error.message:
            self.err.print(error.message, highlight=False, markup=False)

    def print_exception(self):
        """render the exception currently being handled with a rich traceback."""
        self.err.print_exception(show_locals=self.debugging)


__all__ = (
    "Logger",
)
