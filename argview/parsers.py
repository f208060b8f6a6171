"""
Argview classifiers: pure functions over a raw argument list.

Every function takes the full ordered argument list (index 0 is the
executable, never classified) or an already-derived sequence, and returns
one classification. Nothing here keeps state or performs I/O, so calling a
classifier twice on the same input always yields the same result.

Token vocabulary
- option:        starts with '-', and is neither '-' nor '--'.
- short option:  option with exactly one leading hyphen ("-o", "-abc").
- long option:   option with exactly two leading hyphens ("--opt").
- definition:    option containing '=' ("--opt=value"); split on the first '='.
- double hyphen: the literal '--'; option/definition scanning stops there.
- single hyphen: the literal '-' (stdin/stdout placeholder); never an option.
- mops:          short option with more than one character after the hyphen;
                 "-abc" expands to "-a", "-b", "-c". Expansion iterates code
                 points, so combining sequences are not kept together.

Example
    >>> argv = ["app", "-vx", "--out=a=b", "file", "--", "-raw"]
    >>> parse_options(argv)
    ('-vx', '--out')
    >>> dict(parse_definitions(argv))
    {'--out': 'a=b'}
    >>> parse_double_hyphen_arguments(argv)
    ('-raw',)
    >>> parse_mops(parse_options(argv))
    ('-v', '-x')
"""
from .faults import FaultCode, MalformedDefinitionError

DOUBLE_HYPHEN = "--"
SINGLE_HYPHEN = "-"


def is_double_hyphen(token, /):
    return token == DOUBLE_HYPHEN


def is_single_hyphen(token, /):
    return token == SINGLE_HYPHEN


def is_option(token, /):
    """
    True when token is an option: starts with '-' and is neither '-' nor '--'.
    """
    return token.startswith("-") and not is_single_hyphen(token) and not is_double_hyphen(token)


def is_short_option(token, /):
    return is_option(token) and not token.startswith("--")


def is_long_option(token, /):
    return is_option(token) and token.startswith("--") and not token.startswith("---")


def is_definition_option(token, /):
    return is_option(token) and "=" in token


def is_mops_option(token, /):
    # "-o=v" is a definition of "-o", not a bundle of switches.
    return is_short_option(token) and len(token.partition("=")[0]) > 2


def get_definition_parts(token, /):
    """
    Split a definition option into (option, definition) at the first '='.

    Everything after the first '=' belongs to the definition, including any
    further '=' characters; "--opt=" yields an empty definition.

    Raises MalformedDefinitionError when token has no '=' at all; callers are
    expected to check is_definition_option() first.
    """
    option, separator, definition = token.partition("=")
    if not separator:
        raise MalformedDefinitionError(
            f"cannot split {token!r} into an option and a definition",
            code=FaultCode.MALFORMED_DEFINITION,
            title="malformed definition",
            hint="pass only tokens shaped like --option=definition",
        )
    return option, definition


def _scan(argv):
    """
    Yield (index, token) for every argument before the first '--'.
    """
    for index, token in enumerate(argv[1:], start=1):
        if is_double_hyphen(token):
            return
        yield index, token


def parse_options(argv, /):
    """
    Return the option names of argv, in argv order.

    Definition options contribute only their name ("--opt=v" → "--opt").
    A lone '-' is skipped; scanning stops entirely at the first '--'.
    """
    options = []
    for _, token in _scan(argv):
        if not is_option(token):
            continue
        if is_definition_option(token):
            option, _ = get_definition_parts(token)
            options.append(option)
        else:
            options.append(token)
    return tuple(options)


def parse_definitions(argv, /):
    """
    Return a mapping of option name → definition for every definition option
    that appears before the first '--'. A repeated name keeps its last value.
    """
    definitions = {}
    for _, token in _scan(argv):
        if is_definition_option(token):
            option, definition = get_definition_parts(token)
            definitions[option] = definition
    return definitions


def parse_first_argument(argv, /):
    return argv[1] if len(argv) > 1 else None


def parse_last_argument(argv, /):
    return argv[-1] if len(argv) > 1 else None


def parse_double_hyphen_arguments(argv, /):
    """
    Return every token after the first '--', uninterpreted.

    None when argv has no '--' or when nothing follows it. The executable
    at index 0 is never taken for the sentinel.
    """
    for index, token in enumerate(argv[1:], start=1):
        if is_double_hyphen(token):
            return tuple(argv[index + 1:]) or None
    return None


def parse_mops(options, /):
    """
    Expand the short options of an already-parsed options sequence.

    Single-character short options pass through, longer ones are split into
    one "-<char>" per character, and long options are ignored. Returns None
    (not an empty tuple) when there were no short options at all.
    """
    mops = []
    for option in options:
        if is_mops_option(option):
            mops.extend("-" + char for char in option[1:])
        elif is_short_option(option):
            mops.append(option)
    return tuple(mops) or None


def parse_last_option_index(argv, /):
    """
    Return the argv index of the rightmost option before the first '--',
    or 0 when there is none.
    """
    index = 0
    for position, token in _scan(argv):
        if is_option(token):
            index = position
    return index


__all__ = (
    # Constants
    "DOUBLE_HYPHEN",
    "SINGLE_HYPHEN",

    # Predicates
    "is_double_hyphen",
    "is_single_hyphen",
    "is_option",
    "is_short_option",
    "is_long_option",
    "is_definition_option",
    "is_mops_option",

    # Splitters
    "get_definition_parts",

    # Classifiers
    "parse_options",
    "parse_definitions",
    "parse_first_argument",
    "parse_last_argument",
    "parse_double_hyphen_arguments",
    "parse_mops",
    "parse_last_option_index",
)
