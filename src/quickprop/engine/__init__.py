# src/quickprop/engine/__init__.py
"""Engine: generation, shrinking, candidate trees, properties and the runner."""

from quickprop.engine.generate import (
    UNCONSTRAINED,
    BoolGenerator,
    CharGenerator,
    CollectionGenerator,
    Constant,
    GenerateContext,
    Generator,
    IntegerGenerator,
    MappedGenerator,
    OneOf,
    OptionalGenerator,
    ResultGenerator,
    TupleGenerator,
    UnsignedIntegerGenerator,
    as_string,
    draw_size,
    sample,
)
from quickprop.engine.property import ForAll, Property, as_property, constant_property, for_all
from quickprop.engine.rose import Rose
from quickprop.engine.runner import Runner, quickcheck, quicktest
from quickprop.engine.schedule import size_for
from quickprop.engine.shrink import (
    BoolShrinker,
    CharShrinker,
    CollectionShrinker,
    EmptyShrinker,
    IntegerShrinker,
    OptionalShrinker,
    ResultShrinker,
    Shrinker,
    TupleShrinker,
    UnsignedIntegerShrinker,
)

__all__ = [
    "UNCONSTRAINED",
    "BoolGenerator",
    "BoolShrinker",
    "CharGenerator",
    "CharShrinker",
    "CollectionGenerator",
    "CollectionShrinker",
    "Constant",
    "EmptyShrinker",
    "ForAll",
    "GenerateContext",
    "Generator",
    "IntegerGenerator",
    "IntegerShrinker",
    "MappedGenerator",
    "OneOf",
    "OptionalGenerator",
    "OptionalShrinker",
    "Property",
    "ResultGenerator",
    "ResultShrinker",
    "Rose",
    "Runner",
    "Shrinker",
    "TupleGenerator",
    "TupleShrinker",
    "UnsignedIntegerGenerator",
    "UnsignedIntegerShrinker",
    "as_property",
    "as_string",
    "constant_property",
    "draw_size",
    "for_all",
    "quickcheck",
    "quicktest",
    "sample",
    "size_for",
]
