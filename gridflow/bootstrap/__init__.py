"""
bootstrap/ - Configuration and entry points
"""

from .config import (
    GridConfig,
    LoggingConfig,
    GridflowConfig,
    load_config,
)

from .entrypoints import (
    setup_logging,
    run_relayout,
    cli_main,
)

__all__ = [
    "GridConfig",
    "LoggingConfig",
    "GridflowConfig",
    "load_config",
    "setup_logging",
    "run_relayout",
    "cli_main",
]
