"""
Runtime settings for the dispatcher.

Settings are immutable once built. from_env() reads the process environment;
keyword overrides win over the environment.

Environment
- LEIN_VERSION: version of the running tool (compared with a project's minimum).
- DEBUG: truthy value enables debug output and full traces.
- LEIN_PROG: program name used in guidance lines (default "lein").
- LEIN_COLORFUL: truthy value enables colored fault rendering.
"""
import copy
import os

from .utils import freeze

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_bool(name, /, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class Settings:
    """
    Dispatcher settings.

    - version: running tool version (None when unknown; the minimum-version check is then skipped).
    - debug: debug logging and full traces for failures with an exit code.
    - prog: program name shown in guidance lines and fault headers.
    - shell / fancy / colorful: fault rendering switches (rich header, panel, colors).
    - prefix: namespace prefix stripped from discovered task names.
    - excluded: internal namespace segments never offered as tasks.
    - project_file: project file name quoted when a task needs a project.
    """
    __slots__ = ("version", "debug", "prog", "shell", "fancy", "colorful", "prefix", "excluded", "project_file")

    def __init__(
            self,
            *,
            version=None,
            debug=False,
            prog="lein",
            shell=False,
            fancy=False,
            colorful=False,
            prefix="leiningen",
            excluded=("core", "main", "util"),
            project_file="project.clj",
    ):
        object.__setattr__(self, "version", version)
        object.__setattr__(self, "debug", bool(debug))
        object.__setattr__(self, "prog", prog)
        object.__setattr__(self, "shell", bool(shell))
        object.__setattr__(self, "fancy", bool(fancy))
        object.__setattr__(self, "colorful", bool(colorful))
        object.__setattr__(self, "prefix", prefix)
        object.__setattr__(self, "excluded", freeze(excluded))
        object.__setattr__(self, "project_file", project_file)

    def __setattr__(self, name, value, /):
        raise AttributeError("settings are read-only")

    def __repr__(self):
        return "settings(%s)" % ", ".join("%s=%r" % (name, getattr(self, name)) for name in self.__slots__)

    def __replace__(self, /, **overrides):
        return type(self)(**{name: getattr(self, name) for name in self.__slots__} | overrides)

    def replace(self, /, **overrides):
        return copy.replace(self, **overrides)

    @classmethod
    def from_env(cls, /, **overrides):
        """build settings from the environment; keyword overrides take precedence."""
        return cls(**{
            "version": os.getenv("LEIN_VERSION"),
            "debug": _env_bool("DEBUG"),
            "prog": os.getenv("LEIN_PROG", "lein"),
            "colorful": _env_bool("LEIN_COLORFUL"),
        } | overrides)


__all__ = (
    "Settings",
)
