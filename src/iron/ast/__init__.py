"""AST nodes designed for evaluation."""

from ._base import *
from ._expr import *
from ._form import *
from ._literal import *
