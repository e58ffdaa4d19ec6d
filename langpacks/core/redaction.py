# langpacks/core/redaction.py
from __future__ import annotations

import os
import re

__all__ = ["redactText"]



# Precompiled sensitive-data regex patterns
_SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(?iu)(Bearer\s+)[A-Za-z0-9._\-]+"), r"\1***"),
    (re.compile(r'(?iu)("password"\s*:\s*")[^"]+(")'), r"\1***\2"),
    (re.compile(r'(?iu)("api[_\-]?key"\s*:\s*")[^"]+(")'), r"\1***\2"),
    (re.compile(r'(?iu)(token=)[^&\s"\\]+'), r'\1***'),
]



def _homeDir() -> str | None:
    home = os.path.expanduser("~")
    # "~" is returned unchanged when no home can be determined
    if not home or home == "~" or home == os.sep:
        return None
    return home.rstrip(os.sep)



def redactText(text: str) -> str:
    """
    Return sanitized text: credentials are replaced by *** and the user's
    home directory (which shows up in every package path) by "~".
    """
    if not text:
        return text
    out = text
    for pattern, repl in _SENSITIVE_PATTERNS:
        out = pattern.sub(repl, out)
    home = _homeDir()
    if home:
        out = out.replace(home + os.sep, "~" + os.sep)
    return out
