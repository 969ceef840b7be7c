'''Common functionality for components.

Functions to build function registers and retrievers around them.
There should normally be no need to use these functions directly.
'''

import logging
import warnings
from typing import Callable, Dict, Optional, Type, Union


logger = logging.getLogger(__name__)


def marker(register: Dict[str, Callable],
           name: str,
           signature,
           ) -> Callable:
    '''A registration decorator factory.

    The decorator registers the function under its own name. If called with
    a string instead, it returns a decorator registering under that key, for
    names that are not valid identifiers (such as ``remove-large``).
    '''
    def mark_function(func_or_key):
        if isinstance(func_or_key, str):
            def mark_as(func):
                register[func_or_key] = func
                return func
            return mark_as
        register[func_or_key.__name__] = func_or_key
        return func_or_key
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           signature,
           error: Type[Exception] = KeyError,
           ) -> Callable[[str], Callable]:
    '''A register retriever factory.'''
    def get(func_def: str) -> signature:
        try:
            return register[func_def]
        except (KeyError, TypeError):
            raise error(f'unknown {name}: {func_def}')
    get.__doc__ = f'Return a {name} function by its name.'
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                signature,
                error: Type[Exception] = KeyError,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''A register implicit retriever/passthrough function factory.'''
    get = getter(register, name, signature, error=error)

    def construct(func_def: Union[str, signature]) -> signature:
        return func_def if hasattr(func_def, '__call__') else get(func_def)
    construct.__doc__ = (
        f'Construct a {name} function.\n\n'
        f'Get a {name} function by its name from the register. If a custom\n'
        'callable is given, pass it through unchanged.'
    )
    return construct


def fallback(register: Dict[str, Callable],
             name: str,
             signature,
             default: str,
             warning: Type[Warning] = UserWarning,
             ) -> Callable[[Optional[Union[str, Callable]]], Callable]:
    '''A register retriever factory that degrades to a default entry.

    Unknown names produce a warning instead of an error and the default
    entry is returned.
    '''
    def construct_or_default(func_def: Optional[Union[str, signature]]
                             ) -> signature:
        if hasattr(func_def, '__call__'):
            return func_def
        if func_def is None:
            return register[default]
        try:
            return register[func_def]
        except (KeyError, TypeError):
            logger.warning('unknown %s %r, using %s', name, func_def, default)
            warnings.warn(
                f'unknown {name}: {func_def!r}, defaulting to {default!r}',
                warning,
                stacklevel=3,
            )
            return register[default]
    return construct_or_default


def register_functions(register: Dict[str, Callable],
                       name: str,
                       signature,
                       error: Type[Exception] = KeyError,
                       ):
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register, name, signature),
        getter(register, name, signature, error=error),
        constructer(register, name, signature, error=error),
    )
