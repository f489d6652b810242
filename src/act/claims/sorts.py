"""
Sorts of the claim language and the ABI types that map onto them.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Sort(Enum):
    """Logical sort of an expression."""
    INTEGER = "int"
    BOOLEAN = "bool"
    BYTES = "bytes"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AbiType:
    """A declared ABI type.

    Attributes:
        name: Canonical type name (e.g. "uint256")
        sort: Sort the type is reasoned about in
        bounds: Inclusive (min, max) range for bounded integer types
    """
    name: str
    sort: Sort
    bounds: Optional[Tuple[int, int]] = None

    def __str__(self) -> str:
        return self.name


_UINT_RE = re.compile(r"uint(\d*)")
_INT_RE = re.compile(r"int(\d*)")
_BYTES_RE = re.compile(r"bytes(\d+)")


def _width(digits: str) -> Optional[int]:
    width = int(digits) if digits else 256
    if width < 8 or width > 256 or width % 8 != 0:
        return None
    return width


def parse_abi_type(name: str) -> Optional[AbiType]:
    """Resolve a type name to an AbiType, or None if it is not recognized.

    Mapping:
        uint<N> / int<N> / address -> Integer, with the type's range
        bool -> Boolean
        bytes / bytes<N> / string -> Bytes
    """
    m = _UINT_RE.fullmatch(name)
    if m:
        width = _width(m.group(1))
        if width is None:
            return None
        return AbiType(f"uint{width}", Sort.INTEGER, (0, 2 ** width - 1))

    m = _INT_RE.fullmatch(name)
    if m:
        width = _width(m.group(1))
        if width is None:
            return None
        return AbiType(f"int{width}", Sort.INTEGER, (-(2 ** (width - 1)), 2 ** (width - 1) - 1))

    if name == "address":
        return AbiType("address", Sort.INTEGER, (0, 2 ** 160 - 1))

    if name == "bool":
        return AbiType("bool", Sort.BOOLEAN)

    if name in ("bytes", "string"):
        return AbiType(name, Sort.BYTES)

    m = _BYTES_RE.fullmatch(name)
    if m and 1 <= int(m.group(1)) <= 32:
        return AbiType(name, Sort.BYTES)

    return None


# Block and transaction values every expression may mention.
ENVIRONMENT = {
    "CALLER": parse_abi_type("address"),
    "ORIGIN": parse_abi_type("address"),
    "THIS": parse_abi_type("address"),
    "CALLVALUE": parse_abi_type("uint256"),
    "TIMESTAMP": parse_abi_type("uint256"),
    "BLOCKNUMBER": parse_abi_type("uint256"),
}
