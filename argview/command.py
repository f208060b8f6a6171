"""
Argview command layer: an immutable, queryable view over a raw argv.

What this module provides
- Command: built once from the process argument list (index 0 is the
  executable). Construction runs every classifier of argview.parsers exactly
  once and stores the results as read-only fields:
  • argv, argc, executable
  • options, definitions, mops
  • first_arg, last_arg, double_hyphen_argv, last_option_index
- Query methods: presence checks, membership tests (single, all, any),
  positional lookups, help/version/usage predicates and allow-list
  validation. None of them mutate the view or re-classify argv.

Quick start
    import sys
    from argview import Command

    command = Command(sys.argv)
    if command.is_help_request():
        print("usage: tool [-v] [--out=PATH] FILE...")
    elif command.contains_mops("-v"):
        ...
    path = command.get_definition_for("--out")   # None when absent
    files = command.get_arguments_after_double_hyphen() or ()

Design notes
- Absence is modelled as None, never as an empty collection: mops and
  double_hyphen_argv are None when there is nothing to report, so callers
  can tell "not present" from "present but not matching".
- Collections are exposed as tuples and read-only mappings.
- Two views built from equal argv compare (and hash) equal.

See also
- argview.parsers for the token rules.
- argview.faults for the construction fault.
"""
import functools
import operator
import re
from collections.abc import Iterable

from . import parsers
from .faults import FaultCode, EmptyArgumentsError, trigger
from .utils import Unset, coalesce, freeze, mirror, rename


def _needle(caller, needle):
    if not isinstance(needle, str):
        raise TypeError(f"{caller}() argument must be a string")
    return needle


def _needles(caller, needles):
    # A bare string is iterable too; reject it instead of matching its characters.
    if isinstance(needles, str) or not isinstance(needles, Iterable):
        raise TypeError(f"{caller}() argument must be an iterable of strings")
    return tuple(_needle(caller, needle) for needle in needles)


class CommandType(type):
    """
    Metaclass that publishes Command fields as read-only properties.

    Responsibilities
    - Expose every name listed in __introspectable__ through mirror(), backed
      by the private "_{name}" attribute set at construction.
    - Provide stable __repr__/__rich_repr__ for diagnostics and rich.pretty.
    - Derive __typename__ from the class name (camel-case split with hyphens).

    __displayable__ (if set) narrows which fields __rich_repr__ reports;
    otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation, e.g. command(argv=('app',), ...).
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Command(metaclass=CommandType):
    """
    Immutable view over the argument list of one process invocation.

    Fields (read-only)
    - argv: tuple of every token, argv[0] being the executable path.
    - argc: len(argv).
    - executable: argv[0].
    - options: option names before the first '--', in argv order.
    - definitions: option name → definition for "--name=value" tokens before '--'.
    - mops: expanded short options ("-abc" → "-a", "-b", "-c"), or None.
    - first_arg / last_arg: argv[1] / argv[-1], or None with no arguments.
    - double_hyphen_argv: tokens after the first '--', or None.
    - last_option_index: argv index of the rightmost option before '--', or 0.

    Construction
    - Command(argv, /, *, shell=False, fancy=False, colorful=True)
    - An empty argv is a caller contract violation: EmptyArgumentsError is
      raised, or printed with rich followed by exit status 1 when shell=True.
    """

    __introspectable__ = (
        "argv",
        "argc",
        "executable",
        "options",
        "definitions",
        "mops",
        "first_arg",
        "last_arg",
        "double_hyphen_argv",
        "last_option_index",
    )

    # argc, executable, first_arg and last_arg are read straight off argv; repr leaves them out.
    __displayable__ = (
        "argv",
        "options",
        "definitions",
        "mops",
        "double_hyphen_argv",
        "last_option_index",
    )

    def __init__(self, argv, /, *, shell=False, fancy=False, colorful=True):
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("Command() argument must be an iterable of strings")
        argv = tuple(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("Command() argument must be an iterable of strings")
        if not argv:
            trigger(
                EmptyArgumentsError(
                    "expected the executable path at first position, got no arguments at all",
                    code=FaultCode.EMPTY_ARGUMENTS,
                    title="empty arguments",
                    hint="build the command from sys.argv or a list that starts with the program path",
                ),
                shell=shell,
                fancy=fancy,
                colorful=colorful,
            )

        self._argv = argv
        self._argc = len(argv)
        self._executable = argv[0]
        self._options = parsers.parse_options(argv)
        self._definitions = freeze(parsers.parse_definitions(argv))
        self._mops = parsers.parse_mops(self._options)
        self._first_arg = parsers.parse_first_argument(argv)
        self._last_arg = parsers.parse_last_argument(argv)
        self._double_hyphen_argv = parsers.parse_double_hyphen_arguments(argv)
        self._last_option_index = parsers.parse_last_option_index(argv)

    def __str__(self):
        return f"Command: '{" ".join(self._argv)}'"

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self._argv == other._argv

    def __hash__(self):
        return hash((type(self), self._argv))

    # --- presence -------------------------------------------------------

    def has_args(self):
        return self._argc > 1

    def has_definitions(self):
        return bool(self._definitions)

    def has_options(self):
        return bool(self._options)

    def has_mops(self):
        return self._mops is not None

    def has_double_hyphen_args(self):
        return self._double_hyphen_argv is not None

    # --- membership -----------------------------------------------------

    def contains_arg(self, needle, /):
        """
        True when needle equals one of the arguments (the executable excluded).
        """
        return _needle("contains_arg", needle) in self._argv[1:]

    def contains_option(self, needle, /):
        return _needle("contains_option", needle) in self._options

    def contains_definition(self, needle, /):
        return _needle("contains_definition", needle) in self._definitions

    def contains_mops(self, needle, /):
        """
        True when needle is one of the expanded short options; False when the
        command has no short options at all.
        """
        _needle("contains_mops", needle)
        if self._mops is None:
            return False
        return needle in self._mops

    def contains_all_args(self, needles, /):
        return all(needle in self._argv[1:] for needle in _needles("contains_all_args", needles))

    def contains_any_args(self, needles, /):
        return any(needle in self._argv[1:] for needle in _needles("contains_any_args", needles))

    def contains_all_options(self, needles, /):
        return all(needle in self._options for needle in _needles("contains_all_options", needles))

    def contains_any_options(self, needles, /):
        return any(needle in self._options for needle in _needles("contains_any_options", needles))

    def contains_all_definitions(self, needles, /):
        return all(needle in self._definitions for needle in _needles("contains_all_definitions", needles))

    def contains_any_definitions(self, needles, /):
        return any(needle in self._definitions for needle in _needles("contains_any_definitions", needles))

    def contains_all_mops(self, needles, /):
        """
        True when every needle is an expanded short option.

        Always False without short options, even for an empty needle collection.
        """
        needles = _needles("contains_all_mops", needles)
        if self._mops is None:
            return False
        return all(needle in self._mops for needle in needles)

    def contains_any_mops(self, needles, /):
        needles = _needles("contains_any_mops", needles)
        if self._mops is None:
            return False
        return any(needle in self._mops for needle in needles)

    def contains_sequence(self, needles, /):
        """
        True when the arguments start with needles, in order and without gaps.

        contains_sequence(["sub1", "sub2"]) matches "app sub1 sub2 ..." but
        neither "app sub2 sub1" nor "app -x sub1 sub2".
        """
        needles = _needles("contains_sequence", needles)
        if len(needles) > self._argc - 1:
            return False
        return self._argv[1:1 + len(needles)] == needles

    # --- lookups --------------------------------------------------------

    def get_argument_at(self, index, /):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("get_argument_at() argument must be an integer")
        if not 0 <= index < self._argc:
            return None
        return self._argv[index]

    def get_index_of(self, needle, /):
        """
        Return the argv index of the first token equal to needle, or None.
        """
        try:
            return self._argv.index(_needle("get_index_of", needle))
        except ValueError:
            return None

    def get_argument_after(self, needle, /):
        """
        Return the token right after the first occurrence of needle.

        None when needle is absent or is the last token.
        """
        index = self.get_index_of(_needle("get_argument_after", needle))
        if index is None or index >= self._argc - 1:
            return None
        return self._argv[index + 1]

    def get_arguments_after(self, needle, /):
        """
        Return every token after the first occurrence of needle, as a tuple.

        None when needle is absent or is the last token.
        """
        index = self.get_index_of(_needle("get_arguments_after", needle))
        if index is None or index >= self._argc - 1:
            return None
        return self._argv[index + 1:]

    def get_definition_for(self, needle, /):
        return self._definitions.get(_needle("get_definition_for", needle))

    def get_executable(self):
        return self._executable

    def get_argument_first(self):
        return self._first_arg

    def get_argument_last(self):
        return self._last_arg

    def get_arguments_after_double_hyphen(self):
        return self._double_hyphen_argv

    def get_index_of_last_option(self):
        return self._last_option_index

    def has_args_after(self, needle, /, count=1):
        """
        True when at least count tokens follow the first occurrence of needle.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError("has_args_after() count must be an integer")
        index = self.get_index_of(_needle("has_args_after", needle))
        if index is None:
            return False
        return self._argc - 1 - index >= count

    def next_arg_is_in(self, needle, supported, /):
        """
        True when the token right after needle is one of supported.
        """
        supported = _needles("next_arg_is_in", supported)
        following = self.get_argument_after(_needle("next_arg_is_in", needle))
        return following is not None and following in supported

    # --- convenience predicates ----------------------------------------

    def is_help_request(self):
        return "-h" in self._options or "--help" in self._options

    def is_version_request(self):
        return "-v" in self._options or "--version" in self._options

    def is_usage_request(self):
        return "--usage" in self._options

    def is_quiet_request(self):
        return "-q" in self._options or "--quiet" in self._options

    # --- validation ----------------------------------------------------

    def has_invalid_options(self, valid, /):
        """
        True when any parsed option is missing from the valid allow-list.
        """
        valid = frozenset(_needles("has_invalid_options", valid))
        return any(option not in valid for option in self._options)

    def has_invalid_definitions(self, valid, /):
        """
        True when any parsed definition name is missing from the valid allow-list.
        """
        valid = frozenset(_needles("has_invalid_definitions", valid))
        return any(option not in valid for option in self._definitions)


__all__ = (
    "CommandType",
    "Command",
)
