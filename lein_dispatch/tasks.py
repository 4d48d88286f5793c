"""
Task layer: descriptors, registry, resolution and arity checks.

What this module provides
- Fixed / Variadic: explicit parameter shapes. The project is always passed
  first and is never part of a shape, so Fixed("a", "b") accepts exactly two
  arguments and Variadic("a", rest="more") accepts one or more.
- Task: immutable descriptor wrapping a callback(project, *args) with its
  shapes and its "no project needed" capability. Shapes are read from the
  callback's signature unless given explicitly.
- task(...): create a Task or a decorator that produces one.
- TaskRegistry: explicit name → Task mapping, filled by register() or by
  discover() over a module glob.
- resolve_task(): lookup plus partial application of alias-bound arguments.
- matching_arity(): the first shape accepting a given argument list.
- task_not_found(): default miss handler (guidance, suggestions, exit 1).

Quick start
    from lein_dispatch import TaskRegistry

    registry = TaskRegistry()

    @registry.task(no_project_needed=True)
    def echo(project, *words):
        print(*words)

    resolve_task(("echo", "hello"), registry)(None, "world")  # prints: hello world
"""
import functools
import importlib
import inspect
import re
from inspect import Parameter

from .faults import FaultCode, TaskNotFoundError, trigger
from .logger import Logger
from .suggest import suggestions
from .utils import Unset, coalesce, freeze, mglob, rename


class Fixed:
    """Shape accepting exactly len(names) arguments."""
    __slots__ = ("names",)

    def __init__(self, *names):
        object.__setattr__(self, "names", tuple(names))

    def __setattr__(self, name, value, /):
        raise AttributeError("shapes are read-only")

    def matches(self, count, /):
        return count == len(self.names)

    def drop(self, count, /):
        """remove up to count leading slots."""
        return type(self)(*self.names[count:])

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return self.names == other.names

    def __hash__(self):
        return hash((type(self), self.names))

    def __str__(self):
        return "[%s]" % " ".join(self.names)

    def __repr__(self):
        return "fixed(%s)" % ", ".join(map(repr, self.names))


class Variadic:
    """Shape accepting len(names) or more arguments; extras are collected in rest."""
    __slots__ = ("names", "rest")

    def __init__(self, *names, rest="args"):
        object.__setattr__(self, "names", tuple(names))
        object.__setattr__(self, "rest", rest)

    def __setattr__(self, name, value, /):
        raise AttributeError("shapes are read-only")

    def matches(self, count, /):
        return count >= len(self.names)

    def drop(self, count, /):
        """remove up to count leading fixed slots; the variadic tail always stays."""
        return type(self)(*self.names[count:], rest=self.rest)

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return (self.names, self.rest) == (other.names, other.rest)

    def __hash__(self):
        return hash((type(self), self.names, self.rest))

    def __str__(self):
        return "[%s]" % " ".join(self.names + ("&", self.rest))

    def __repr__(self):
        return "variadic(%s)" % ", ".join([*map(repr, self.names), "rest=%r" % self.rest])


def _shapes(callback):
    """
    read the accepted shapes from a callback's signature.

    - the first positional parameter receives the project and is skipped.
    - required positionals are fixed slots; each optional positional adds one
      more accepted count (one Fixed shape per count).
    - *args turns the shape into a single Variadic over the required slots.
    - keyword-only parameters must have defaults; they are never filled.
    """
    parameters = list(inspect.signature(callback).parameters.values())
    positionals = [
        parameter for parameter in parameters
        if parameter.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if not positionals and not any(parameter.kind is Parameter.VAR_POSITIONAL for parameter in parameters):
        raise TypeError("task callback must accept the project as its first argument")

    for parameter in parameters:
        if parameter.kind is Parameter.KEYWORD_ONLY and parameter.default is Parameter.empty:
            raise TypeError("task callback keyword-only parameter %r must have a default" % parameter.name)

    required = [parameter.name for parameter in positionals[1:] if parameter.default is Parameter.empty]
    optional = [parameter.name for parameter in positionals[1:] if parameter.default is not Parameter.empty]

    for parameter in parameters:
        if parameter.kind is Parameter.VAR_POSITIONAL:
            return (Variadic(*required, rest=parameter.name),)

    return tuple(Fixed(*required, *optional[:index]) for index in range(len(optional) + 1))


class Task:
    """
    Immutable task descriptor.

    Attributes
    - callback: callable(project, *args) implementing the task.
    - name: canonical task name (defaults to the callback name, underscores as dashes).
    - shapes: accepted argument shapes, project slot excluded.
    - no_project_needed: True when the task can run without a loaded project.
    - bound: arguments applied ahead of time (see partial()).
    """
    __slots__ = ("callback", "name", "shapes", "no_project_needed", "bound")

    def __init__(self, callback, /, name=Unset, shapes=Unset, *, no_project_needed=False, bound=()):
        if not callable(callback):
            raise TypeError("task callback must be callable")
        shapes = freeze(_shapes(callback) if shapes is Unset else shapes)
        if not shapes or not all(isinstance(shape, Fixed | Variadic) for shape in shapes):
            raise TypeError("task shapes must be a non-empty sequence of fixed or variadic shapes")
        name = str(coalesce(name, getattr(callback, "__name__", "").replace("_", "-"))).strip()
        if not name:
            raise ValueError("task name must be a non-empty string")
        object.__setattr__(self, "callback", callback)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "shapes", shapes)
        object.__setattr__(self, "no_project_needed", bool(no_project_needed))
        object.__setattr__(self, "bound", freeze(bound))

    def __setattr__(self, name, value, /):
        raise AttributeError("tasks are read-only")

    def __call__(self, project, /, *args):
        return self.callback(project, *args)

    def partial(self, *bound):
        """
        bind leading arguments ahead of time.

        the result forwards (project, *bound, *args) to this task and accepts
        the shapes of this task with len(bound) leading slots removed.
        """
        if not bound:
            return self
        callback = self.callback

        @rename(getattr(callback, "__name__", self.name))
        def partial(project, /, *args):
            return callback(project, *bound, *args)

        return type(self)(
            partial,
            self.name,
            [shape.drop(len(bound)) for shape in self.shapes],
            no_project_needed=self.no_project_needed,
            bound=self.bound + bound,
        )

    def __repr__(self):
        return "task(name=%r, shapes=%r, no_project_needed=%r, bound=%r)" % (
            self.name, self.shapes, self.no_project_needed, self.bound
        )


def task(source=Unset, /, *args, **kwargs):
    """
    Create a Task or return a decorator to build it later.

    - task(func, name="x")            → Task
    - @task(no_project_needed=True)   → decorator
    - @task                           → Task
    """
    @rename("task")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@task() must be applied to a callable")
        return Task(source, *args, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


class TaskRegistry:
    """
    Explicit mapping from canonical names to tasks.

    Populated once at startup, by register()/task() or by discover(), and
    read-only for the rest of the run by convention.
    """

    def __init__(self, tasks=(), /, *, prefix="leiningen", excluded=("core", "main", "util")):
        self._tasks = {}
        self.prefix = prefix
        self.excluded = freeze(excluded)
        for object in tasks:
            self.register(object)

    def register(self, task, /):
        """add a task under its name; a different task under the same name is an error."""
        if not isinstance(task, Task):
            raise TypeError("register() argument must be a task")
        if self._tasks.setdefault(task.name, task) is not task:
            raise ValueError("task name %r is already in use" % task.name)
        return task

    def task(self, source=Unset, /, *args, **kwargs):
        """task(...) that also registers the result here."""
        if source is not Unset:
            return self.register(task(source, *args, **kwargs))
        return lambda source, /: self.register(task(source, *args, **kwargs))

    def lookup(self, name, default=Unset, /):
        return self._tasks.get(name, default)

    def names(self):
        return sorted(self._tasks)

    def __contains__(self, name, /):
        return name in self._tasks

    def __iter__(self):
        return iter(self.names())

    def __len__(self):
        return len(self._tasks)

    def __repr__(self):
        return "task-registry(%s)" % ", ".join(map(repr, self.names()))

    def visible(self, module, /):
        """True when module is a direct child of the prefix outside the internal namespaces."""
        pattern = r"%s\.%s[^.]+" % (
            re.escape(self.prefix),
            "(?!%s)" % "|".join(map(re.escape, self.excluded)) if self.excluded else "",
        )
        return re.fullmatch(pattern, module) is not None

    def discover(self, pattern=Unset, /):
        """
        import task modules and register the tasks they define.

        the module glob defaults to '<prefix>.*'. every Task found in the
        globals of a visible module is registered (tasks already registered
        are skipped). returns the sorted, distinct names of the visible
        modules.
        """
        modules = sorted(set(filter(self.visible, mglob(coalesce(pattern, self.prefix + ".*")))))

        def imp(module):
            try:
                return importlib.import_module(module)
            except ImportError:
                raise TypeError("unable to import module %r" % module) from None

        for module in map(imp, modules):
            for _, object in inspect.getmembers(module, lambda object: isinstance(object, Task)):
                if self._tasks.get(object.name) is not object:
                    self.register(object)

        return modules


def matching_arity(task, args, /):
    """the first shape of task accepting len(args) arguments, or Unset."""
    for shape in task.shapes:
        if shape.matches(len(args)):
            return shape
    return Unset


def task_not_found(name, /, registry, logger=Unset):
    """
    default miss handler: print guidance and suggestions, then exit 1.

    never returns; raises TaskNotFoundError with an empty message since the
    guidance has already been printed.
    """
    logger = Logger() if logger is Unset else logger
    logger.info("'%s' is not a task. See '%s help'." % (name, logger.prog))
    if candidates := suggestions(name, registry.names(), registry.prefix):
        logger.info("")
        logger.info("Did you mean this?")
        for candidate in candidates:
            logger.info("        ", candidate)
    trigger(TaskNotFoundError(
        "",
        title="task not found",
        code=FaultCode.TASK_NOT_FOUND,
        task=name,
        suggestions=tuple(candidates),
        status=1,
    ), **logger.options)


def resolve_task(target, registry, /, not_found=Unset):
    """
    look up a task and apply alias-bound arguments.

    target is a task name or a (name, *bound) sequence from a multi-token alias.
    on a miss, not_found(name) is called and its result returned; the default
    handler never returns.
    """
    name, *bound = (target,) if isinstance(target, str) else tuple(target)
    if (found := registry.lookup(name)) is Unset:
        return coalesce(not_found, functools.partial(task_not_found, registry=registry))(name)
    return found.partial(*bound)


__all__ = (
    "Fixed",
    "Variadic",
    "Task",
    "task",
    "TaskRegistry",
    "matching_arity",
    "task_not_found",
    "resolve_task",
)
