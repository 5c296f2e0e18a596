"""Risk Advisor – Logging setup.

Configures the root handlers once from :class:`RiskAdvisorConfig` and
hands out loggers under the ``riskadvisor`` namespace.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from riskadvisor.core.config import RiskAdvisorConfig, get_config


def setup_logging(config: Optional[RiskAdvisorConfig] = None) -> None:
    """Configure application-wide logging.

    Installs a console handler and a ``config.log_file`` handler on the
    root logger and sets the ``riskadvisor`` level. Repeated calls are
    no-ops while the root logger already has handlers.

    Args:
        config: Optional configuration object. If omitted, the global
            configuration will be loaded via :func:`get_config`.
    """

    if config is None:
        config = get_config()

    root_logger = logging.getLogger()

    # Avoid attaching duplicate handlers if setup_logging is called again.
    if root_logger.handlers:
        return

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(config.log_file)
    file_handler.setFormatter(formatter)

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    advisor_logger = logging.getLogger("riskadvisor")
    advisor_logger.setLevel(log_level)

def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for the given module.

    Args:
        name: Module-level ``__name__`` or any descriptive logger name.
            A leading ``riskadvisor.`` prefix is not duplicated.

    Returns:
        A :class:`logging.Logger` instance under the ``riskadvisor``
        namespace.
    """

    setup_logging()
    if name == "riskadvisor" or name.startswith("riskadvisor."):
        return logging.getLogger(name)
    return logging.getLogger(f"riskadvisor.{name}")
