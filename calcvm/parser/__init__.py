"""Parser package for calcvm.

The precedence layers live in :mod:`calcvm.parser.expressions`; the
:class:`Parser` class that drives them is exposed at the package level for
convenience.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from .parser import Parser, parse_source

__all__ = ["Parser", "parse_source"]
