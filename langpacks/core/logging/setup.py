# langpacks/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from langpacks.app.globals import config, configBool
from .formatters import DevFormatter, JsonFormatter, RedactingFormatter
from .filters import RecurringSuppressFilter

__all__ = ["configureLogging"]

# Marks handlers installed by configureLogging() so a second call replaces them
_HANDLER_MARK = "_langpacksHandler"



def configureLogging(*, level: int | None = None) -> None:
    """
    Initiate the logging configuration for the `langpacks` logger tree.
    
    Dev mode (logging.devMode):
      - Console pretty logs (DEBUG)
    Otherwise:
      - Console INFO
    Always:
      - JSON file log with rotation when logging.file is set
      - Path and credential redaction
      - Optional recurring suppression (logging.suppressRecurringMessages.enabled)
    """
    devMode = configBool("logging.devMode", False)
    rootLevel = level if level is not None else (logging.DEBUG if devMode else logging.INFO)
    
    logger = logging.getLogger("langpacks")
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(rootLevel)
    
    handlers: list[logging.Handler] = []
    
    consoleHandler = logging.StreamHandler()
    consoleHandler.setFormatter(RedactingFormatter(DevFormatter()))
    handlers.append(consoleHandler)
    
    logFile = config("logging.file", None)
    if logFile:
        fileHandler = logging.handlers.RotatingFileHandler(
            logFile,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fileHandler.setFormatter(RedactingFormatter(JsonFormatter()))
        handlers.append(fileHandler)
    
    suppressFilter: RecurringSuppressFilter | None = None
    if configBool("logging.suppressRecurringMessages.enabled", False):
        levelName = str(config("logging.suppressRecurringMessages.summaryLevel", "INFO")).upper()
        suppressFilter = RecurringSuppressFilter(
            windowSeconds=int(config("logging.suppressRecurringMessages.windowSeconds", 60)),
            maxPerWindow=int(config("logging.suppressRecurringMessages.maxPerWindow", 5)),
            summaryLevel=getattr(logging, levelName, logging.INFO),
        )
    
    for handler in handlers:
        handler.setLevel(rootLevel)
        if suppressFilter is not None:
            handler.addFilter(suppressFilter)
        setattr(handler, _HANDLER_MARK, True)
        logger.addHandler(handler)
    
    # Records are fully handled here
    logger.propagate = False
