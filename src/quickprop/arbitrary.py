# src/quickprop/arbitrary.py
"""Default generators and shrinkers for Python types.

``arbitrary(tp)`` returns a ``(generator, shrinker)`` pair for a type
annotation; ``arguments_for(fn)`` does the same for every parameter of a
function and bundles the results into a TupleGenerator/TupleShrinker pair,
which is how annotated functions become properties.

Supported annotations:
    int, bool, str, bytes, None
    list[T], set[T], frozenset[T], dict[K, V]
    tuple[A, B, ...] (fixed arity) and tuple[T, ...] (variable length)
    T | None (no shrinking: None has no smaller representative of T)
    Ok[T] | Err[E] (no shrinking)
    anything added with register()
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from typing import Any

from quickprop.contracts.errors import UnsupportedTypeError
from quickprop.contracts.outcome import Err, Ok
from quickprop.engine.generate import (
    PRINTABLE,
    BoolGenerator,
    CharGenerator,
    CollectionGenerator,
    Constant,
    Generator,
    IntegerGenerator,
    OptionalGenerator,
    ResultGenerator,
    TupleGenerator,
    UnsignedIntegerGenerator,
    as_string,
)
from quickprop.engine.shrink import (
    BoolShrinker,
    CharShrinker,
    CollectionShrinker,
    EmptyShrinker,
    IntegerShrinker,
    Shrinker,
    TupleShrinker,
    UnsignedIntegerShrinker,
)

type Arbitrary = tuple[Generator[Any], Shrinker[Any]]

_REGISTRY: dict[Any, Callable[[], Arbitrary]] = {
    int: lambda: (IntegerGenerator(), IntegerShrinker()),
    bool: lambda: (BoolGenerator(), BoolShrinker()),
    str: lambda: (
        CollectionGenerator(CharGenerator(PRINTABLE), as_string),
        CollectionShrinker(CharShrinker(PRINTABLE), as_string),
    ),
    bytes: lambda: (
        CollectionGenerator(UnsignedIntegerGenerator(bits=8), bytes),
        CollectionShrinker(UnsignedIntegerShrinker(), bytes),
    ),
    type(None): lambda: (Constant(None), EmptyShrinker()),
}


def register(tp: Any, factory: Callable[[], Arbitrary]) -> None:
    """Register (or replace) the default generator/shrinker pair for a type."""
    _REGISTRY[tp] = factory


def arbitrary(annotation: Any) -> Arbitrary:
    """Default ``(generator, shrinker)`` pair for a type annotation.

    Raises:
        UnsupportedTypeError: If the annotation is not supported.
    """
    if annotation is None:
        annotation = type(None)
    factory = _REGISTRY.get(annotation)
    if factory is not None:
        return factory()

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin in (typing.Union, types.UnionType):
        return _union(annotation, args)
    if origin is list:
        generator, shrinker = arbitrary(_single_arg(annotation, args))
        return CollectionGenerator(generator, list), CollectionShrinker(shrinker, list)
    if origin in (set, frozenset):
        generator, shrinker = arbitrary(_single_arg(annotation, args))
        return CollectionGenerator(generator, origin), CollectionShrinker(shrinker, origin)
    if origin is dict:
        if len(args) != 2:
            raise UnsupportedTypeError(annotation, "dict needs key and value types")
        key_gen, key_shrink = arbitrary(args[0])
        value_gen, value_shrink = arbitrary(args[1])
        return (
            CollectionGenerator(TupleGenerator(key_gen, value_gen), dict),
            CollectionShrinker(TupleShrinker(key_shrink, value_shrink), dict),
        )
    if origin is tuple:
        return _tuple(annotation, args)
    raise UnsupportedTypeError(annotation)


def _single_arg(annotation: Any, args: tuple[Any, ...]) -> Any:
    if len(args) != 1:
        raise UnsupportedTypeError(annotation, "expected exactly one type argument")
    return args[0]


def _tuple(annotation: Any, args: tuple[Any, ...]) -> Arbitrary:
    if len(args) == 2 and args[1] is Ellipsis:
        generator, shrinker = arbitrary(args[0])
        return CollectionGenerator(generator, tuple), CollectionShrinker(shrinker, tuple)
    pairs = [arbitrary(arg) for arg in args]
    return (
        TupleGenerator(*(generator for generator, _ in pairs)),
        TupleShrinker(*(shrinker for _, shrinker in pairs)),
    )


def _union(annotation: Any, args: tuple[Any, ...]) -> Arbitrary:
    members = [arg for arg in args if arg is not type(None)]
    if len(members) == 1 and len(args) == 2:
        generator, _ = arbitrary(members[0])
        return OptionalGenerator(generator), EmptyShrinker()
    origins = {typing.get_origin(arg) or arg: arg for arg in args}
    if set(origins) == {Ok, Err}:
        ok_gen, _ = arbitrary(_payload(origins[Ok]))
        err_gen, _ = arbitrary(_payload(origins[Err]))
        return ResultGenerator(ok_gen, err_gen), EmptyShrinker()
    raise UnsupportedTypeError(annotation, "only T | None and Ok[T] | Err[E] unions are supported")


def _payload(annotation: Any) -> Any:
    args = typing.get_args(annotation)
    if not args:
        raise UnsupportedTypeError(annotation, "Ok/Err need a payload type, e.g. Ok[int]")
    return args[0]


def arguments_for(fn: Callable[..., Any]) -> tuple[TupleGenerator, TupleShrinker]:
    """Bundle generator and shrinker for a function's parameters.

    Every parameter must be positional and annotated.

    Raises:
        UnsupportedTypeError: For unannotated, variadic or keyword-only
            parameters, or unsupported annotations.
    """
    hints = typing.get_type_hints(fn)
    generators: list[Generator[Any]] = []
    shrinkers: list[Shrinker[Any]] = []
    for name, parameter in inspect.signature(fn).parameters.items():
        if parameter.kind not in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            raise UnsupportedTypeError(parameter, f"parameter {name!r} must be positional")
        if name not in hints:
            raise UnsupportedTypeError(parameter, f"parameter {name!r} has no annotation")
        generator, shrinker = arbitrary(hints[name])
        generators.append(generator)
        shrinkers.append(shrinker)
    return TupleGenerator(*generators), TupleShrinker(*shrinkers)
