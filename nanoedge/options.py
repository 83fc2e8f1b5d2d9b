"""Command line option parsing with long-name prefixes and short letters."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class OptSpec:
    """One accepted option: long name, result value, short letter, argument."""

    name: str | None
    value: Hashable
    short: str | None = None
    takes_arg: bool = False


class OptionError(ValueError):
    """An option on the command line could not be parsed."""

    def __init__(self, option: str, message: str) -> None:
        super().__init__(message)
        self.option = option


class InvalidOption(OptionError):
    """The option is unknown or malformed."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option {option} is invalid.")


class AmbiguousOption(OptionError):
    """A long option prefix matches several options."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option {option} is ambiguous (specify in full).")


class MissingArgument(OptionError):
    """An option that needs an argument was given none."""

    def __init__(self, option: str) -> None:
        super().__init__(option, f"Option {option} requires argument.")


def _find_long(word: str, name: str, specs: Sequence[OptSpec]) -> OptSpec:
    if not name:
        raise InvalidOption(word)
    candidates = [s for s in specs if s.name and s.name.startswith(name)]
    for spec in candidates:
        if spec.name == name:
            return spec
    if not candidates:
        raise InvalidOption(word)
    if len(candidates) > 1:
        raise AmbiguousOption(word)
    return candidates[0]


def parse_options(
    argv: Sequence[str], specs: Sequence[OptSpec]
) -> tuple[list[tuple[Hashable, str | None]], list[str]]:
    """Parse leading options from ``argv``.

    Returns the ``(value, argument)`` pairs in command-line order and the
    arguments left after the options. Parsing stops at the first word that
    is not an option, or after ``--``.
    """
    args = list(argv)
    parsed: list[tuple[Hashable, str | None]] = []
    idx = 0
    while idx < len(args):
        word = args[idx]
        if len(word) < 2 or not word.startswith("-"):
            break
        if word == "--":
            idx += 1
            break

        argument: str | None = None
        if word.startswith("--"):
            name, sep, inline = word[2:].partition("=")
            spec = _find_long(word, name, specs)
            if sep and not spec.takes_arg:
                raise InvalidOption(word)
            if spec.takes_arg:
                if sep:
                    argument = inline
                elif idx + 1 < len(args):
                    idx += 1
                    argument = args[idx]
                else:
                    raise MissingArgument(word)
        else:
            letter, rest = word[1], word[2:]
            spec = next((s for s in specs if s.short == letter), None)
            if spec is None:
                raise InvalidOption(word)
            if spec.takes_arg:
                if rest:
                    argument = rest
                elif idx + 1 < len(args):
                    idx += 1
                    argument = args[idx]
                else:
                    raise MissingArgument(word)
            elif rest:
                raise InvalidOption(word)

        parsed.append((spec.value, argument))
        idx += 1
    return parsed, args[idx:]