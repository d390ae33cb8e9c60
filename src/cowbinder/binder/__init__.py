"""User-facing binder handle, references and iterators."""

from cowbinder.binder.handle import Binder
from cowbinder.binder.iteration import BinderIterator
from cowbinder.binder.reference import ValueRef

__all__ = [
    "Binder",
    "BinderIterator",
    "ValueRef",
]
