"""
Loaded project configuration, as seen by the dispatcher.

Reading and parsing the project file happens elsewhere; this module only
models the parts the dispatcher consumes:

- aliases: name → token or token sequence (sequences become tuples).
- raw_aliases: the alias table as declared before profiles were merged
  (the "without profiles" view); kept in step with aliases.
- min_version: minimum tool version the project requires.

ProjectConfig is immutable. without_alias() derives a copy for a single
invocation, so other holders of the same configuration never observe the
removal.
"""
import re

from .faults import FaultCode, VersionTooOldWarning, trigger
from .utils import Unset, freeze


def _normalize(aliases):
    return freeze({
        key: value if isinstance(value, str) else tuple(value)
        for key, value in dict(aliases).items()
    })


class ProjectConfig:
    __slots__ = ("aliases", "raw_aliases", "min_version", "extras")

    def __init__(self, aliases=(), /, *, min_version=None, raw_aliases=Unset, **extras):
        aliases = _normalize(aliases)
        object.__setattr__(self, "aliases", aliases)
        object.__setattr__(self, "raw_aliases", aliases if raw_aliases is Unset else _normalize(raw_aliases))
        object.__setattr__(self, "min_version", min_version)
        object.__setattr__(self, "extras", freeze(extras))

    def __setattr__(self, name, value, /):
        raise AttributeError("project configuration is read-only")

    def __getitem__(self, key, /):
        return self.extras[key]

    def __repr__(self):
        return "project(aliases=%r, min_version=%r)" % (dict(self.aliases), self.min_version)

    def __eq__(self, other, /):
        if not isinstance(other, ProjectConfig):
            return NotImplemented
        return (
            self.aliases == other.aliases and
            self.raw_aliases == other.raw_aliases and
            self.min_version == other.min_version and
            self.extras == other.extras
        )

    __hash__ = None

    def without_alias(self, key, /):
        """
        return a copy with key removed from both alias tables.

        the receiver is left untouched; a missing key yields an equal copy.
        """
        return type(self)(
            {name: value for name, value in self.aliases.items() if name != key},
            min_version=self.min_version,
            raw_aliases={name: value for name, value in self.raw_aliases.items() if name != key},
            **self.extras,
        )


def _segments(version):
    return [int(segment) for segment in re.findall(r"\d+", version.split("-", 1)[0])]


def version_satisfies(v1, v2, /):
    """
    True when version v1 is at least v2.

    only numeric segments before the first '-' are compared, pairwise and
    from the left; extra segments on either side are ignored.
    """
    for first, second in zip(_segments(v1), _segments(v2)):
        if first != second:
            return first > second
    return True


_MIN_VERSION_WARNING = """\
*** Warning: This project requires %s %s, but you have %s ***

Get the latest version by executing "%s upgrade"."""


def verify_min_version(project, version, logger, /):
    """warn, without failing, when the running version is older than the project minimum."""
    if not project.min_version or not version:
        return
    if version_satisfies(version, project.min_version):
        return
    trigger(VersionTooOldWarning(
        _MIN_VERSION_WARNING % (logger.prog, project.min_version, version, logger.prog),
        title="version too old",
        code=FaultCode.VERSION_TOO_OLD,
        required=project.min_version,
        running=version,
    ), **logger.options)


__all__ = (
    "ProjectConfig",
    "version_satisfies",
    "verify_min_version",
)
