from rich.pretty import pprint

from lein_dispatch import *


registry = TaskRegistry()


@registry.task(no_project_needed=True)
def classpath(project, *paths):
    pprint(paths)


@registry.task(no_project_needed=True)
def echo(project, first, second="", /):
    pprint((first, second))


if __name__ == '__main__':
    pprint(registry)
    main(registry=registry, profile={"say": ("echo", "hello")})
