__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'lein-dispatch'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .aliases import *
from .config import *
from .faults import *
from .logger import *
from .dispatcher import *
from .project import *
from .suggest import *
from .tasks import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every layer, leaf to root
__all__ += aliases.__all__  # type: ignore[attr-defined]
__all__ += config.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += logger.__all__  # type: ignore[attr-defined]
__all__ += project.__all__  # type: ignore[attr-defined]
__all__ += suggest.__all__  # type: ignore[attr-defined]
__all__ += tasks.__all__  # type: ignore[attr-defined]
__all__ += dispatcher.__all__  # type: ignore[attr-defined]
