"""Exception definitions for towboat"""

from pathlib import Path
from typing import Optional, Union

from ..constants import ErrorCode, HINT_FORCE_OR_ADOPT, HINT_MANUAL_MODIFICATION


class TowboatError(Exception):
    """Base exception for towboat

    Every error aborts the whole run. ``path`` names the offending file and
    ``hint`` carries the remediation shown to the user.
    """

    def __init__(self,
                 message: str,
                 error_code: str = None,
                 path: Optional[Union[str, Path]] = None,
                 hint: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code
        self.path = Path(path) if path is not None else None
        self.hint = hint


class ConfigurationError(TowboatError):
    """Manifest missing where required, or unparsable"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, path)


class MissingSourceError(TowboatError):
    """A discovered source vanished before deployment"""

    def __init__(self, source: Union[str, Path]):
        message = f"Source file does not exist: {source}"
        super().__init__(message, ErrorCode.MISSING_SOURCE, source)


class TargetExistsError(TowboatError):
    """Target already exists and neither force nor adopt was requested"""

    def __init__(self, target: Union[str, Path], message: str = None):
        if message is None:
            message = f"Target already exists: {target}"
        super().__init__(message, ErrorCode.TARGET_EXISTS, target, HINT_FORCE_OR_ADOPT)


class ManualModificationError(TowboatError):
    """Cache-detected drift of a materialized target without force"""

    def __init__(self, target: Union[str, Path]):
        message = f"Target was modified since it was deployed: {target}"
        super().__init__(message, ErrorCode.MANUAL_MODIFICATION, target, HINT_MANUAL_MODIFICATION)


class IoError(TowboatError):
    """Generic read/write/create/symlink failure"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCode.IO_ERROR, path)


class PathError(TowboatError):
    """Relative path computation failure"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, ErrorCode.PATH_ERROR, path)
