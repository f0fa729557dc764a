from .catalog import Catalog, CatalogStats
from .entry import Entry, EntryKey
from .errors import DuplicateKeyError, EncodingError, ParseError, PokitError
from .header import HeaderOptions, generate_header
from .merge import merge
from .parser import POParser, pofile, pofile_from_text
from .writer import POWriter

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogStats",
    "DuplicateKeyError",
    "EncodingError",
    "Entry",
    "EntryKey",
    "HeaderOptions",
    "POParser",
    "POWriter",
    "ParseError",
    "PokitError",
    "generate_header",
    "merge",
    "pofile",
    "pofile_from_text",
]
