"""
Alias resolution: raw command-line tokens to a canonical task.

Sources, in priority order
1. ALIASES: static built-in table (read-only, process-wide).
2. The loaded project's alias table.
3. ProfileAliases: user-level aliases, consulted only when no project is
   loaded, and consumed on first use.

A value is either a single token or a tuple of tokens; the tuple form names a
task followed by arguments bound ahead of the user's own.
"""
import threading

from .utils import Unset, coalesce, freeze

ALIASES = freeze({
    "-h": "help", "-help": "help", "--help": "help", "-?": "help",
    "-v": "version", "-version": "version", "--version": "version",
    "überjar": "uberjar",
    # TODO: these should add profiles rather than replace the active set
    "-o": ("with-profile", "offline,dev,user,default"),
    "-U": ("with-profile", "update,dev,user,default"),
    "cp": "classpath", "halp": "help",
    "with-profiles": "with-profile",
    "readme": ("help", "readme"),
    "tutorial": ("help", "tutorial"),
    "sample": ("help", "sample"),
})


class ProfileAliases:
    """
    Pool of user profile aliases, drained over the process lifetime.

    take() is the only read: it returns the value and removes the key in one
    step, so a key yields its value at most once.
    """

    def __init__(self, aliases=(), /):
        self._aliases = {
            key: value if isinstance(value, str) else tuple(value)
            for key, value in dict(aliases).items()
        }
        self._lock = threading.Lock()

    def take(self, key, default=Unset, /):
        with self._lock:
            return self._aliases.pop(key, default)

    def __contains__(self, key, /):
        with self._lock:
            return key in self._aliases

    def __len__(self):
        with self._lock:
            return len(self._aliases)

    def __repr__(self):
        with self._lock:
            return "profile-aliases(%s)" % ", ".join(map(repr, sorted(self._aliases)))


def lookup_alias(token, project, /, profile=Unset, not_found=Unset):
    """
    resolve token through the alias sources.

    returns the first hit among the static table, the project's aliases and
    (without a project) the profile pool; otherwise the token itself, or
    not_found ("help" by default) when there is no token at all.
    """
    if token in ALIASES:
        return ALIASES[token]
    if project and token in project.aliases:
        return project.aliases[token]
    if not project and profile:
        if (value := profile.take(token)) is not Unset:
            return value
    if token is not None:
        return token
    return coalesce(not_found, "help")


def task_args(args, project, /, profile=Unset):
    """
    split raw tokens into (task, args).

    '<task> --help' style input is redirected to ("help", [<task>]) before any
    other resolution takes place.
    """
    args = list(args)
    if len(args) > 1 and ALIASES.get(args[1]) == "help":
        return "help", [args[0]]
    return lookup_alias(args[0] if args else None, project, profile), args[1:]


__all__ = (
    "ALIASES",
    "ProfileAliases",
    "lookup_alias",
    "task_args",
)
