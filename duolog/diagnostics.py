"""Internal diagnostics for duolog itself.

duolog modules report configuration changes through ordinary stdlib
loggers under the ``duolog`` namespace. A single rich handler on the
namespace root renders them on stderr. The namespace does not propagate,
so installing the stdlib bridge on the root logger never feeds duolog's
own chatter back into duolog sinks.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


NAMESPACE = "duolog"


def _namespace_root() -> logging.Logger:
    root = logging.getLogger(NAMESPACE)
    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def get_internal_logger(name: str) -> logging.Logger:
    """
    Get the diagnostic logger for a duolog module.

    Args:
        name: Module name (``__name__``). Names outside the ``duolog``
            namespace are nested under it.

    Returns:
        Stdlib logger whose records are rendered by the namespace handler.
    """
    _namespace_root()
    if name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
