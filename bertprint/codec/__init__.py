"""
bertprint codec — decode Erlang External Term Format and print it.

| Layer                  | Purpose                                    |
<----------------------- + ------------------------------------------->
| **Symbol table**       | Append-only arena for atom names           |
| **Term model**         | Immutable tagged union of decoded values   |
| **Decoder**            | BERT / BERT2 bytes → term tree             |
| **Pretty printer**     | Term tree → indented Erlang-like text      |
| **Graph export**       | networkx tree, Graphviz rendering          |
"""

from . import core as _core
from . import decoder as _decoder
from . import errors as _errors
from . import graph as _graph
from . import printer as _printer
from . import symtable as _symtable
from .cli import main, parse_args, read_source

from .core import *
from .decoder import *
from .errors import *
from .graph import *
from .printer import *
from .symtable import *

__all__ = []
for module in (_symtable, _core, _errors, _decoder, _printer, _graph):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args', 'read_source']
__all__ = list(dict.fromkeys(__all__))
