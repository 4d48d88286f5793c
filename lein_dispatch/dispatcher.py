"""
Dispatcher: raw command-line tokens in, one task invocation out.

Flow
- task_args(): alias/help redirection → (task name, remaining args).
- run(): minimum-version warning, chaining warning, then apply_task();
  every failure is classified here and turned into an exit status.
- apply_task(): strip the alias that produced this invocation from a
  per-invocation copy of the project, resolve the task, check the project
  requirement and the arity, then invoke the task exactly once.

Failure classification (run)
- faults with an attached status: message only (full trace with debug).
- anything else: full trace and status 1.

Known gap: only the one alias whose value is the invoked task is removed;
longer alias cycles (a → b → c → a) are not detected.
"""
import functools
import sys

from .aliases import ProfileAliases, task_args
from .config import Settings
from .faults import (
    ArityMismatchError,
    DispatchException,
    FaultCode,
    MissingProjectError,
    TaskChainingWarning,
    UnhandledTaskError,
    exit_status,
    trigger,
)
from .logger import Logger
from .project import verify_min_version
from .tasks import TaskRegistry, matching_arity, resolve_task, task_not_found
from .utils import Unset, coalesce


def _display(task_name):
    return task_name if isinstance(task_name, str) else " ".join(map(str, task_name))


class Dispatcher:
    """
    Process-level orchestrator.

    Owns the settings, the logger and the profile alias pool; the pool is
    drained across every run() of the same dispatcher.
    """

    def __init__(self, registry, /, settings=Unset, profile=Unset, logger=Unset):
        self.registry = registry
        self.settings = Settings() if settings is Unset else settings
        self.profile = profile if isinstance(profile, ProfileAliases) else ProfileAliases(coalesce(profile, ()))
        self.logger = Logger(
            debug=self.settings.debug,
            shell=self.settings.shell,
            fancy=self.settings.fancy,
            colorful=self.settings.colorful,
            prog=self.settings.prog,
        ) if logger is Unset else logger

    def task_args(self, args, project, /):
        return task_args(args, project, self.profile)

    def warn_chaining(self, task_name, args, /):
        """warn about the pre-"do" comma chaining syntax ("lein javac, test")."""
        tokens = [_display(task_name), *map(str, args)]
        if any(token.endswith(",") for token in tokens) and "do" not in tokens:
            trigger(TaskChainingWarning(
                "task chaining has been moved to the \"do\" task.\n"
                "For example, \"%(prog)s javac, test\" should now be called "
                "as \"%(prog)s do javac, test\"\n"
                "See `%(prog)s help do` for details." % {"prog": self.logger.prog},
                title="task chaining",
                code=FaultCode.TASK_CHAINING,
            ), **self.logger.options)

    def apply_task(self, task_name, project, args, /):
        """resolve task_name and apply project and args if the arity matches."""
        args = list(args)
        name = _display(task_name)

        if project:
            alias = next((key for key, value in project.aliases.items() if value == task_name), task_name)
            project = project.without_alias(alias)

        task = resolve_task(task_name, self.registry, functools.partial(
            task_not_found, registry=self.registry, logger=self.logger
        ))

        if not project and not task.no_project_needed:
            trigger(MissingProjectError(
                "Couldn't find %s, which is needed for %s" % (self.settings.project_file, name),
                title="missing project",
                code=FaultCode.MISSING_PROJECT,
                task=name,
            ), **self.logger.options)

        if matching_arity(task, args) is Unset:
            trigger(ArityMismatchError(
                "Wrong number of arguments to %s task.\nExpected %s" % (
                    name, " or ".join(map(str, task.shapes))
                ),
                title="wrong number of arguments",
                code=FaultCode.ARITY_MISMATCH,
                task=name,
                args=tuple(args),
                shapes=task.shapes,
            ), **self.logger.options)

        self.logger.debug("Applying task", name, "to", args)
        return task(project, *args)

    def run(self, args, project=Unset, /):
        """
        dispatch one command line; returns the process exit status.

        0 on success; the status attached to a fault (SystemExit included);
        1 for any other failure raised while resolving or running the task.
        """
        project = coalesce(project)
        try:
            task_name, args = self.task_args(args, project)
            if project and project.min_version:
                verify_min_version(project, self.settings.version, self.logger)
            self.warn_chaining(task_name, args)
            self.apply_task(task_name, project, args)
        except (Exception, SystemExit) as error:
            if (status := exit_status(error)) is Unset:
                fault = UnhandledTaskError(
                    "%s: %s" % (type(error).__name__, error),
                    title="unhandled task error",
                    code=FaultCode.UNHANDLED_TASK,
                    cause=error,
                )
                self.logger.print_exception()
                if self.settings.shell:
                    self.logger.fault(fault)
                return fault.status
            if self.settings.debug:
                self.logger.print_exception()
            elif isinstance(error, DispatchException):
                self.logger.fault(error)
            return status
        return 0


def main(argv=Unset, /, project=Unset, registry=Unset, profile=Unset):
    """
    command-line entry point.

    settings come from the environment; without an explicit registry, tasks
    are discovered under the configured prefix.
    """
    settings = Settings.from_env()
    if registry is Unset:
        registry = TaskRegistry(prefix=settings.prefix, excluded=settings.excluded)
        registry.discover()
    dispatcher = Dispatcher(registry, settings, profile)
    sys.exit(dispatcher.run(sys.argv[1:] if argv is Unset else argv, project))


__all__ = (
    "Dispatcher",
    "main",
)
