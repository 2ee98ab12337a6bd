"""Typed views and signature strings for ABI entries.

Publication never rewrites descriptor entries; these models are parsed on
demand by consumers that need typed access (call encoders, event decoders,
form generators). Unknown keys are kept, missing optional keys default the
way the Solidity ABI specification defaults them (``type`` is
``"function"`` when omitted).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

EntryType = Literal["function", "event", "error", "constructor", "fallback", "receive"]

NAMED_ENTRY_TYPES = frozenset({"function", "event", "error"})
READ_ONLY_MUTABILITY = frozenset({"view", "pure"})


class AbiParameter(BaseModel):
    """A function/event/error parameter or return value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: str = ""
    type: str
    internal_type: str | None = Field(default=None, alias="internalType")
    indexed: bool | None = None
    components: tuple[AbiParameter, ...] | None = None

    def canonical_type(self) -> str:
        """Type string used in selectors; tuples expand to ``(t1,t2)[]``."""
        if not self.type.startswith("tuple"):
            return self.type
        suffix = self.type[len("tuple") :]
        inner = ",".join(c.canonical_type() for c in self.components or ())
        return f"({inner}){suffix}"

    def human_readable(self) -> str:
        parts = [self.canonical_type()]
        if self.indexed:
            parts.append("indexed")
        if self.name:
            parts.append(self.name)
        return " ".join(parts)


class AbiEntry(BaseModel):
    """One ABI entry: function, event, error, constructor, fallback or receive."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    type: EntryType = "function"
    name: str | None = None
    inputs: tuple[AbiParameter, ...] = ()
    outputs: tuple[AbiParameter, ...] = ()
    state_mutability: str | None = Field(default=None, alias="stateMutability")
    anonymous: bool | None = None

    @property
    def is_read_only(self) -> bool:
        return self.type == "function" and self.state_mutability in READ_ONLY_MUTABILITY

    @property
    def is_unnamed(self) -> bool:
        """Function, event or error entry that is missing its name."""
        return self.type in NAMED_ENTRY_TYPES and not self.name

    @property
    def is_payable(self) -> bool:
        return self.state_mutability == "payable"

    def signature(self) -> str:
        """Canonical signature, e.g. ``deposit(uint256)``."""
        args = ",".join(p.canonical_type() for p in self.inputs)
        if self.type in NAMED_ENTRY_TYPES:
            return f"{self.name or ''}({args})"
        return f"{self.type}({args})"

    def human_readable(self) -> str:
        """Readable form with names, e.g.

        ``function balanceOf(address account) view returns (uint256)``
        ``event Deposited(address indexed from, uint256 amount)``
        """
        args = ", ".join(p.human_readable() for p in self.inputs)
        head = f"{self.type} {self.name or ''}" if self.type in NAMED_ENTRY_TYPES else self.type
        text = f"{head}({args})"
        if self.type == "event" and self.anonymous:
            text += " anonymous"
        if self.state_mutability and self.state_mutability != "nonpayable":
            text += f" {self.state_mutability}"
        if self.outputs:
            returns = ", ".join(p.human_readable() for p in self.outputs)
            text += f" returns ({returns})"
        return text


def thaw(value: Any) -> Any:
    """Deep-copy frozen descriptor content back into plain JSON-compatible data."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def entry_type(raw: Mapping[str, Any]) -> str:
    return raw.get("type", "function")


def parse_entry(raw: Mapping[str, Any]) -> AbiEntry:
    """Parse one raw entry; raises pydantic.ValidationError if it is not ABI-shaped."""
    return AbiEntry.model_validate(thaw(raw))


def parse_entries(entries: Iterable[Mapping[str, Any]]) -> tuple[AbiEntry, ...]:
    return tuple(parse_entry(raw) for raw in entries)


def entries_of_type(
    entries: Iterable[Mapping[str, Any]], kind: str
) -> tuple[AbiEntry, ...]:
    return tuple(parse_entry(raw) for raw in entries if entry_type(raw) == kind)


def function_names(entries: Iterable[Mapping[str, Any]]) -> tuple[str, ...]:
    """Function names in declaration order, overloads collapsed."""
    names: list[str] = []
    for raw in entries:
        name = raw.get("name")
        if entry_type(raw) == "function" and name and name not in names:
            names.append(name)
    return tuple(names)


def find_functions(
    entries: Iterable[Mapping[str, Any]], name: str
) -> tuple[AbiEntry, ...]:
    """All overloads of ``name``; empty when the contract has no such function."""
    return tuple(
        entry for entry in entries_of_type(entries, "function") if entry.name == name
    )


def split_by_mutability(
    entries: Sequence[Mapping[str, Any]],
) -> tuple[tuple[AbiEntry, ...], tuple[AbiEntry, ...]]:
    """Split functions into (read-only calls, state-changing transactions)."""
    functions = entries_of_type(entries, "function")
    reads = tuple(f for f in functions if f.is_read_only)
    writes = tuple(f for f in functions if not f.is_read_only)
    return reads, writes


def duplicate_signatures(entries: Iterable[Mapping[str, Any]]) -> tuple[str, ...]:
    """Signatures declared more than once for the same entry type.

    Unnamed function/event/error entries are skipped.
    """
    seen: set[tuple[str, str]] = set()
    duplicates: list[str] = []
    for entry in parse_entries(entries):
        if entry.is_unnamed:
            continue
        key = (entry.type, entry.signature())
        if key in seen and key[1] not in duplicates:
            duplicates.append(key[1])
        seen.add(key)
    return tuple(duplicates)


__all__ = [
    "AbiEntry",
    "AbiParameter",
    "duplicate_signatures",
    "entries_of_type",
    "entry_type",
    "find_functions",
    "function_names",
    "parse_entries",
    "parse_entry",
    "split_by_mutability",
    "thaw",
]
