import logging
import os
import sys
from pathlib import Path

import pytest

from langpacks.app.config import resetConfig
from langpacks.app.globals import getTraceHub
from langpacks.core.logging import clearLogContext



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



def _reset_langpacks_logger() -> None:
    # configureLogging() detaches the tree from root, which hides records from caplog
    logger = logging.getLogger("langpacks")
    for handler in list(logger.handlers):
        if getattr(handler, "_langpacksHandler", False):
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)



@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch):
    monkeypatch.delenv("LANGPACKS_CONFIG", raising=False)
    resetConfig()
    getTraceHub().clear()
    yield
    resetConfig()
    clearLogContext()
    getTraceHub().clear()
    _reset_langpacks_logger()



@pytest.fixture()
def read_only(monkeypatch):
    """
    Paths added to the returned set report as not writable. Tests usually
    run as root, where os.access() says yes to everything.
    """
    denied: set[Path] = set()
    
    def _isWritable(path) -> bool:
        return os.path.exists(path) and Path(path) not in denied
    
    monkeypatch.setattr("langpacks.content.fsutil.isWritable", _isWritable)
    return denied
