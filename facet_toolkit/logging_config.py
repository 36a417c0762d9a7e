from __future__ import annotations

"""Central logging configuration for Facet Toolkit.

Import and call :func:`setup_logging` once when the host starts the engine.
"""

import logging
import logging.config
import os

from facet_toolkit.config import ConfigManager

__all__ = ["setup_logging"]

_SELECTION_LOGGER = 'facet_toolkit.core.services.selection_service'
_TREE_LOGGER = 'facet_toolkit.core.services.tree_build_service'


def setup_logging() -> None:
    """Configure logging for the engine using the packaged/user YAML config."""
    log_dir = os.environ.get("FACET_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "facet.log")

    try:
        logging_config = dict(ConfigManager().get_logging_config())

        if logging_config.get("version"):
            handlers = logging_config.get("handlers") or {}
            if "file" in handlers:
                handlers["file"] = dict(handlers["file"], filename=log_file)
                logging_config["handlers"] = dict(handlers)

            logging.config.dictConfig(logging_config)
            logging.info("===== Logging initialised from config files =====")
        else:
            _setup_minimal_logging()
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
        # dictConfig reports every schema problem as one of these
        _setup_minimal_logging()
        logging.getLogger(__name__).error("Error loading logging config: %s", exc)

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up console-only logging when the YAML config is unusable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
        'loggers': {
            _SELECTION_LOGGER: {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False,
            }
        }
    }

    logging.config.dictConfig(minimal_config)
    logging.warning("===== Logging initialised with minimal fallback =====")


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - FACET_DEBUG_SELECTION=true -> DEBUG for the selection and tree services
    - FACET_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    debug_selection = os.environ.get('FACET_DEBUG_SELECTION', '').strip().lower() in {'1', 'true', 'yes', 'on'}
    extra_modules = os.environ.get('FACET_DEBUG_MODULES', '').strip()
    targets = []
    if debug_selection:
        targets.append(_SELECTION_LOGGER)
        targets.append(_TREE_LOGGER)
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])

    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(
            h.level == logging.NOTSET or h.level <= logging.DEBUG for h in logger.handlers
        )
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            h.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
