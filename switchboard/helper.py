"""
Help rendering for an ArgParser.

Layout
    NAME [OPTIONS] <positional...>
    <help option description>
    Positional argument:
    N,  sum these [repeated, min args = 1]
    Options:
    -s,  --sum,  add args [default = false]
         --mult,  multiply args [default = false]
    -h,  --help,  Display this help and exit

- the positional option prints its long name without dashes.
- options without a short name are padded so long names line up.
- multi-value options show "[repeated, min args = N]"; others show
  "[default = X]" when a default exists (booleans as true/false).
- the help option is listed last and its own description becomes the program
  description line; without a help option both lines are omitted.

Palette keys (override through __styles__ in __main__)
- usage-label, program-name, description-section, group-label
- option-name, flag-name, help-name, metavar, argument-description, annotation
"""
from collections import defaultdict

from rich.text import Text

from .options import Kind

_HELP_LINE = "Display this help and exit"


def _literal(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render(parser, /, *, colorful=True):
    """
    Build the help screen of parser as a rich Text.
    """
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "annotation": "dim #9CA3AF",

        # === Names / metavars ===
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "help-name": "bold #FF4D94",
        "metavar": "bold #FFD600",  # AMBER for positionals
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    registry = parser.registry

    try:
        helper = registry.find_help()
    except LookupError:
        helper = None
    try:
        positional = registry.find_positional()
    except LookupError:
        positional = None

    def line(option):
        text = Text()
        if option.positional:
            text.append(option.long_name, styler("metavar"))
        else:
            style = styler(
                "help-name" if option.kind is Kind.HELP else "flag-name" if option.kind is Kind.FLAG else "option-name"
            )
            if option.short_name is not None:
                text.append("-" + option.short_name, style).append(",  ")
            else:
                text.append("     ")
            text.append("--" + option.long_name, style)
        text.append(",  ")

        if option.kind is Kind.HELP:
            return text.append(_HELP_LINE, styler("argument-description"))

        text.append(option.description, styler("argument-description"))
        if option.multivalue:
            annotation = "[repeated, min args = %d]" % option.min_args
        elif option.has_default():
            annotation = "[default = %s]" % _literal(option.default)
        else:
            return text
        if option.description:
            text.append(" ")
        return text.append(annotation, styler("annotation"))

    lines = []

    usage = Text()
    usage.append(parser.name, styler("program-name"))
    usage.append(" ")
    usage.append("[OPTIONS]", styler("usage-label"))
    if positional is not None:
        usage.append(" ")
        usage.append("<%s%s>" % (positional.long_name, "..." * positional.multivalue), styler("metavar"))
    lines.append(usage)

    if helper is not None and helper.description:
        lines.append(Text(helper.description, styler("description-section")))

    if positional is not None:
        lines.append(Text("Positional argument:", styler("group-label")))
        lines.append(line(positional))

    lines.append(Text("Options:", styler("group-label")))
    for option in registry:
        if option.kind is not Kind.HELP and not option.positional:
            lines.append(line(option))
    if helper is not None:
        lines.append(line(helper))

    return Text("\n").join(lines).append("\n")


__all__ = (
    "render",
)
