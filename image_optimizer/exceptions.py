"""
Custom exception classes for the image optimization pipeline.
"""
from pathlib import Path
from typing import Optional


class OptimizerException(Exception):
    """Base exception for all optimizer errors."""
    pass

class InvalidConfigError(OptimizerException):
    """Raised when pipeline options are missing or inconsistent."""
    pass


"""
Custom exception classes for directory scanning and filtering.
"""
class ScanError(OptimizerException):
    """Base exception for directory scan errors."""
    pass

class NotADirectoryPathError(ScanError):
    """Raised when a path exists but is not a directory."""
    pass

class EmptyDirectoryError(ScanError):
    """Raised when a directory has no entries at all."""
    pass

class NoMatchingFilesError(ScanError):
    """Raised when no entry matches the allowed extensions and a statistic would be undefined."""
    pass


"""
Custom exception classes for file access and image processing.
"""
class FileAccessError(OptimizerException):
    """Filesystem stat/read/write/copy failed."""
    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path

class TransformError(OptimizerException):
    """Resize or recompression capability failed."""
    pass
