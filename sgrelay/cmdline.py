"""Command-line parser that splits arguments into flags, parameters and positionals."""

from __future__ import annotations

import re
from collections import Counter
from enum import IntFlag
from typing import Any, Iterable, Iterator, Sequence

_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class Mode(IntFlag):
    """Parsing modes; they may be combined with ``|``."""

    PREFER_FLAG_FOR_UNREG_OPTION = 1 << 0
    PREFER_PARAM_FOR_UNREG_OPTION = 1 << 1
    NO_SPLIT_ON_EQUALSIGN = 1 << 2
    SINGLE_DASH_IS_MULTIFLAG = 1 << 3


def _trim_leading_dashes(name: str) -> str:
    trimmed = name.lstrip("-")
    return trimmed if trimmed else name


def _is_number(arg: str) -> bool:
    return _NUMBER_PREFIX.match(arg) is not None


def _is_option(arg: str) -> bool:
    if not arg or _is_number(arg):
        return False
    return arg.startswith("-")


def _names(names: str | Iterable[str]) -> list[str]:
    return [names] if isinstance(names, str) else list(names)


class ArgParser:
    """Splits a command line into flags, ``name value`` parameters and positional arguments.

    An argument starting with ``-`` (and not a number) is an option. ``name=value``
    becomes a parameter unless ``NO_SPLIT_ON_EQUALSIGN`` is set. An option followed by
    a non-option becomes a parameter when its name is registered or when
    ``PREFER_PARAM_FOR_UNREG_OPTION`` is set; otherwise it is a flag.
    """

    def __init__(
        self,
        argv: Sequence[str] | None = None,
        mode: Mode | int = Mode.PREFER_FLAG_FOR_UNREG_OPTION,
        params: Iterable[str] = (),
    ) -> None:
        self._registered: set[str] = set()
        self._flags: Counter[str] = Counter()
        self._params: list[tuple[str, str]] = []
        self._positional: list[str] = []
        self.add_param(*params)
        if argv is not None:
            self.parse(argv, mode)

    def add_param(self, *args: str) -> None:
        """Register option names that always take the following argument as value."""
        for name in args:
            self._registered.add(_trim_leading_dashes(name))

    def _is_param(self, name: str) -> bool:
        return name in self._registered

    def parse(self, argv: Sequence[str], mode: Mode | int = Mode.PREFER_FLAG_FOR_UNREG_OPTION) -> None:
        """Parse ``argv``, discarding the results of any earlier parse."""
        mode = Mode(mode)
        if (
            Mode.PREFER_FLAG_FOR_UNREG_OPTION in mode
            and Mode.PREFER_PARAM_FOR_UNREG_OPTION in mode
        ):
            raise ValueError("PREFER_FLAG and PREFER_PARAM modes are mutually exclusive")
        self._flags = Counter()
        self._params = []
        self._positional = []

        args = list(argv)
        prefer_param = Mode.PREFER_PARAM_FOR_UNREG_OPTION in mode
        i = 0
        while i < len(args):
            arg = args[i]
            i += 1
            if not _is_option(arg):
                self._positional.append(arg)
                continue

            name = _trim_leading_dashes(arg)

            if Mode.NO_SPLIT_ON_EQUALSIGN not in mode and "=" in name:
                key, _, val = name.partition("=")
                self._params.append((key, val))
                continue

            if (
                len(arg) - len(name) == 1
                and Mode.SINGLE_DASH_IS_MULTIFLAG in mode
                and not self._is_param(name)
            ):
                keep_param = ""
                if name and self._is_param(name[-1]):
                    keep_param = name[-1]
                    name = name[:-1]
                self._flags.update(name)
                if not keep_param:
                    continue
                name = keep_param

            if i >= len(args) or _is_option(args[i]):
                self._flags[name] += 1
                continue

            if self._is_param(name) or prefer_param:
                self._params.append((name, args[i]))
                i += 1
            else:
                self._flags[name] += 1

    @property
    def flags(self) -> Counter[str]:
        """Every flag seen, with the number of times it appeared."""
        return Counter(self._flags)

    @property
    def params(self) -> list[tuple[str, str]]:
        """All ``(name, value)`` pairs, ordered by name, then by appearance."""
        return sorted(self._params, key=lambda pair: pair[0])

    @property
    def pos_args(self) -> list[str]:
        """Positional arguments in order."""
        return list(self._positional)

    def flag(self, *args: str) -> bool:
        """Return whether any of the given flags appeared."""
        return any(_trim_leading_dashes(name) in self._flags for name in args)

    def value(self, names: str | Iterable[str], default: Any = None) -> Any:
        """Return the first value found for any of ``names``, else ``default``."""
        for name in _names(names):
            wanted = _trim_leading_dashes(name)
            for key, val in self.params:
                if key == wanted:
                    return val
        return default

    def all_values(self, name: str) -> list[str]:
        """Return every value given for ``name`` in order of appearance."""
        wanted = _trim_leading_dashes(name)
        return [val for key, val in self._params if key == wanted]

    def positional(self, index: int, default: Any = None) -> Any:
        """Return the positional argument at ``index``, else ``default``."""
        if 0 <= index < len(self._positional):
            return self._positional[index]
        return default

    def __getitem__(self, key: int | str | Iterable[str]) -> bool | str:
        """``parser[i]`` gives a positional (``""`` if missing); a name or names test flags."""
        if isinstance(key, bool):
            raise TypeError("key must be an index or flag name(s)")
        if isinstance(key, int):
            return self.positional(key, "")
        if isinstance(key, str):
            return self.flag(key)
        return self.flag(*key)

    def __len__(self) -> int:
        return len(self._positional)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._positional))