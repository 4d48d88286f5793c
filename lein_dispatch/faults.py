"""
lein-dispatch faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while resolving and dispatching a task.
- DispatchException / DispatchWarning: base types that carry message + options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault.
- exit_status(): classify a caught exception as "has an attached exit code" or not.

Propagation
- Every fatal condition funnels through trigger(), which raises the fault.
  Only the top-level runner catches it and decides between printing the
  message alone and printing a full trace (debug).
- Warnings never stop the run; they are printed to the error console.

Host overrides (optional, read from __main__)
- __prog__: program name in fault headers.
- __styles__: style overrides merged into the default palette.
- __codes__: FaultCode → label remapping.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the dispatcher (stable identifiers).

    grouping
    - resolution (2110x): TASK_NOT_FOUND
    - preconditions (2111x): MISSING_PROJECT, ARITY_MISMATCH
    - execution (2112x): UNHANDLED_TASK, ABORTED
    - warnings (2210x): VERSION_TOO_OLD, TASK_CHAINING
    """
    # --- resolution errors ---
    TASK_NOT_FOUND   = 21101

    # --- precondition errors ---
    MISSING_PROJECT  = 21111
    ARITY_MISMATCH   = 21112

    # --- execution errors ---
    UNHANDLED_TASK   = 21121
    ABORTED          = 21122

    # --- warnings ---
    VERSION_TOO_OLD  = 22101
    TASK_CHAINING    = 22102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = text(getattr(main, "__prog__", options.get("prog", "lein")), "prog-name")

    header = Text.assemble(
        "[ ",
        prog,
        " - ",
        text(options["code"].normalize() if "code" in options else "", "code"),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), title_style),
        " ]"
    )
    body = [text(fault.message, message_style)]
    if options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(options["hint"], "hint")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class DispatchException(Exception):
    """
    Fatal dispatch fault: message plus read-only options.

    Well-known options
    - title, code, hint: rendering.
    - status: process exit code attached to the fault (default 1).
    - colorful, fancy, prog: runtime rendering switches merged by trigger().
    """

    def __init__(self, message="", /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def status(self):
        return self.options.get("status", 1)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title", "error-message")

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class TaskNotFoundError(DispatchException): ...
class MissingProjectError(DispatchException): ...
class ArityMismatchError(DispatchException): ...
class UnhandledTaskError(DispatchException): ...
class AbortError(DispatchException): ...


class DispatchWarning(Warning):
    """
    Non-fatal dispatch fault; printed to the error console when triggered.
    """

    def __init__(self, message="", /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title", "warning-message")

    def __trigger__(self):
        target = self.options.get("console", console)
        if self.options.get("shell", False):
            target.print(self)
        else:
            target.print(self.message, highlight=False, markup=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class VersionTooOldWarning(DispatchWarning): ...
class TaskChainingWarning(DispatchWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(...) before triggering.
    - exceptions are raised; warnings are printed and trigger() returns None.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def exit_status(error, /):
    """
    return the exit code attached to a caught exception, or Unset.

    faults carry their own status; SystemExit carries its code; anything else
    is an unexpected failure and has no attached status.
    """
    if isinstance(error, DispatchException):
        return error.status
    if isinstance(error, SystemExit):
        return error.code if isinstance(error.code, int) else 1
    return Unset


__all__ = (
    "FaultCode",
    "DispatchException",
    "TaskNotFoundError",
    "MissingProjectError",
    "ArityMismatchError",
    "UnhandledTaskError",
    "AbortError",
    "DispatchWarning",
    "VersionTooOldWarning",
    "TaskChainingWarning",
    "trigger",
    "exit_status",
)
