"""ABI struct base for the contract bindings."""

from dataclasses import fields
from typing import Any, ClassVar, Dict, Tuple, Type, TypeVar

from eth_abi import decode, encode

T = TypeVar("T", bound="AbiStruct")


class AbiStruct:
    """Mixin for frozen dataclasses that mirror a Solidity struct.

    Subclasses set ``ABI_TYPE`` to the tuple type of the struct, with
    fields in declaration order. Fields that are themselves structs are
    listed in ``NESTED``.
    """

    ABI_TYPE: ClassVar[str]
    NESTED: ClassVar[Dict[str, Type["AbiStruct"]]] = {}

    def as_abi_tuple(self) -> Tuple[Any, ...]:
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, AbiStruct):
                value = value.as_abi_tuple()
            values.append(value)
        return tuple(values)

    @classmethod
    def from_abi_tuple(cls: Type[T], values: Tuple[Any, ...]) -> T:
        kwargs = {}
        for f, value in zip(fields(cls), values):
            nested = cls.NESTED.get(f.name)
            if nested is not None:
                value = nested.from_abi_tuple(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def abi_encode(self) -> bytes:
        """ABI-encode the struct as a single tuple argument."""
        return encode([self.ABI_TYPE], [self.as_abi_tuple()])

    @classmethod
    def abi_decode(cls: Type[T], data: bytes) -> T:
        (values,) = decode([cls.ABI_TYPE], data)
        return cls.from_abi_tuple(values)
