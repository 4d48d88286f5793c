from lein_dispatch import task


@task(name="utils-internal", no_project_needed=True)
def internal(project):
    raise AssertionError("internal namespaces are never dispatched")
