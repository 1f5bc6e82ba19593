__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argtree'
__license__ = 'MIT'
__version__ = "0.1.0"

from .commands import *
from .completion import *
from .faults import *
from .programs import *
from .routing import *
from .shapes import *
from .tokens import *
from . import selectors

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "selectors",
)

# Load the exposed API of the command tree
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the completion advisor
__all__ += completion.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the programs
__all__ += programs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the router and input builder
__all__ += routing.__all__  # type: ignore[attr-defined]
# Load the exposed API of the validator contract
__all__ += shapes.__all__  # type: ignore[attr-defined]
# Load the exposed API of the token parser
__all__ += tokens.__all__  # type: ignore[attr-defined]
