from .base import RawMessage, Scanner, SourceScanner, decode_source
from .erb import ErbScanner
from .python import PythonScanner
from .registry import ScannerRegistry, builtin_scanners, default_registry
from .ruby import RubyScanner

__all__ = [
    "ErbScanner",
    "PythonScanner",
    "RawMessage",
    "RubyScanner",
    "Scanner",
    "ScannerRegistry",
    "SourceScanner",
    "builtin_scanners",
    "decode_source",
    "default_registry",
]
