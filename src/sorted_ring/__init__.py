"""Sorted multiset collection on a sentinel-terminated cyclic ring."""

from ring_core import errors as _errors
from ring_core import ordering as _ordering
from ring_core import config as _config
from sorted_ring import collection as _collection
from sorted_ring import iterator as _iterator
from ring_core.config import *
from ring_core.errors import *
from ring_core.ordering import *
from sorted_ring.collection import *
from sorted_ring.iterator import *

__all__ = []
__all__ += _config.__all__
__all__ += _errors.__all__
__all__ += _ordering.__all__
__all__ += _collection.__all__
__all__ += _iterator.__all__
