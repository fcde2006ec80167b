"""
Module: catalog

Purpose:
    Catalog provider for the wizard: parses the quickget OS list and
    loads it from a file or URL.

Key Functions:
    - load_os_list(): Load the catalog from a file or URL
    - parse_os_list(): Parse an already-decoded payload

Used By:
    - gui.workers: CatalogWorker
"""

from .loader import CatalogError, is_url, load_os_list, save_os_list
from .parser import ParseError, dump_os, parse_os, parse_os_list, parse_record

__all__ = [
    "load_os_list",
    "save_os_list",
    "is_url",
    "CatalogError",
    "parse_os_list",
    "parse_os",
    "parse_record",
    "dump_os",
    "ParseError",
]
