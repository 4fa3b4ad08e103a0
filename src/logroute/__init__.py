"""
logroute – in-process log-record routing.

Import path convention::

    from logroute.routing import LoggerRegistry, StreamHandler, TemplateFormatter
    from logroute.kernel.errors import ConfigurationError, SinkError
    from logroute.config import RouterFactory, configure_from_dict
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
