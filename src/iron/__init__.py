"""
Iron Programming Language Implementation

A small, dynamically typed, Lisp-like scripting language meant to be
embedded in Python programs, with a core library of traversal
combinators (not, push, do, foreach, map).
"""

__version__ = "0.1.0"


from ._error import *
from ._value import *
from ._scope import *
from ._func import *
from ._engine import *
from ._fmt import *
from ._parse import *
from ._interp import *

from . import ast, builtin, stdlib
