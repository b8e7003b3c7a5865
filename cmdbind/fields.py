r"""
Cmdbind field discovery.

Overview
- Records
  • An options record is a dataclass instance whose leaf fields hold strings.
    A field whose value is itself a dataclass instance is a nested record and
    is unwrapped in place.
  • A record may instead describe itself by implementing __describe__(), which
    returns its leaf descriptors directly.

- Descriptors
  • Field: the discovery-time view of one leaf (identifier, descr, required
    tag and the live owner record). Field.set(value) writes into the owner, so
    the caller's record sees every resolved value.

- Tags
  • Declared through dataclasses.field(metadata={"desc": ..., "required": ...})
    or the option(...) shorthand. The "required" tag is kept raw here; it is
    parsed when options are bound, so a malformed value surfaces as a
    configuration fault of the command being executed.

Quick example:
    >>> from dataclasses import dataclass, field
    >>> from cmdbind.fields import option, discover
    >>> @dataclass
    ... class Database:
    ...     Host: str = option("database host", required="true")
    ...     Port: str = option(default="5432")
    ...
    >>> @dataclass
    ... class Serve:
    ...     Database: Database = field(default_factory=Database)
    ...     LogLevel: str = option("log verbosity")
    ...
    >>> [field.identifier for field in discover(Serve())]
    ['Host', 'Port', 'LogLevel']
"""
import dataclasses
from collections.abc import Iterable
from typing import NamedTuple

from .utils import Unset


class Field(NamedTuple):
    """
    Leaf field descriptor.

    - identifier: str
      The attribute name inside its owner record.
    - descr: str | None
      Free-text description tag.
    - required: Unset | bool | str
      Raw "required" tag; Unset when the tag is absent.
    - owner: object
      The live record that stores the field (never a copy).
    """
    identifier: str
    descr: str | None
    required: object
    owner: object

    def set(self, value, /):
        setattr(self.owner, self.identifier, value)


def option(descr=Unset, /, required=Unset, default=""):
    """
    Declare a leaf option field on a dataclass record.

    Parameters
    - descr: Unset | str
      Free-text description stored under the "desc" tag.
    - required: Unset | bool | str
      Requiredness tag; textual values ("true", "0", ...) are parsed at bind time.
    - default: str
      Zero value of the field.

    Returns
    - a dataclasses.Field carrying the tags as metadata.
    """
    if not isinstance(descr, str | Unset):
        raise TypeError("option() 'descr' must be a string")
    if not isinstance(required, str | bool | Unset):
        raise TypeError("option() 'required' must be a string or a bool")
    metadata = {}
    if descr is not Unset:
        metadata["desc"] = descr
    if required is not Unset:
        metadata["required"] = required
    return dataclasses.field(default=default, metadata=metadata)


def isrecord(object, /):
    """
    Return True when the object can be walked by discover().
    """
    if isinstance(object, type):
        return False
    return dataclasses.is_dataclass(object) or callable(getattr(object, "__describe__", None))


def _unwrap(record, path=frozenset()):
    if id(record) in path:
        raise TypeError(f"{type(record).__name__} record contains itself")
    path |= {id(record)}

    if callable(describe := getattr(record, "__describe__", None)):
        fields = describe()
        if not isinstance(fields, Iterable):
            raise TypeError(f"{type(record).__name__}.__describe__() must return an iterable of fields")
        for field in fields:
            if not isinstance(field, Field):
                raise TypeError(f"{type(record).__name__}.__describe__() must yield Field descriptors")
            yield field
        return

    for declared in dataclasses.fields(record):
        value = getattr(record, declared.name)
        # Nested records splice their leaves in place of the field.
        if isrecord(value):
            yield from _unwrap(value, path)
            continue
        yield Field(
            declared.name,
            declared.metadata.get("desc"),
            declared.metadata.get("required", Unset),
            record,
        )


def discover(record, /):
    """
    Flatten a record into its leaf field descriptors.

    The walk is depth-first and keeps declaration order at every level, so a
    nested record's leaves appear contiguously where the nested field was
    declared. There is no depth limit; the same record may appear twice on
    separate branches but never inside itself.

    Raises
    - TypeError: when the record is neither a dataclass instance nor implements
      __describe__(), or when a record is nested inside itself.
    """
    if not isrecord(record):
        raise TypeError("discover() argument must be a dataclass instance or implement __describe__()")
    return list(_unwrap(record))


__all__ = (
    "Field",
    "option",
    "isrecord",
    "discover",
)
