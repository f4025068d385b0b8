"""
Switchboard help synthesis: plain-text documentation from schema metadata.

- render_registry_help(registry): optional description header, one line per
  registered command (name followed by its -parameter names), and a footer
  pointing at the "-help" shorthand.
- render_command_help(command): name, aliases, description, then every
  parameter in declared order with its data type, aliases and description.

Both functions only format already-validated schemas; displaying the text is
the job of the help sink handed to the dispatcher.
"""
PADDING = 2

FOOTER = "For more help on the usage of individual commands enter the name of the command followed by '-help'."


def render_registry_help(registry, /):
    """
    Render the registry-wide help text.

    Example
        Description: greeting tools

        Commands:
          greet -name, -times
          version

        For more help on the usage of individual commands enter ...
    """
    lines = []
    if registry.descr:
        lines.append("Description: %s" % registry.descr)
        lines.append("")

    lines.append("Commands:")
    for command in registry:
        usage = ", ".join("-" + parameter.name for parameter in command.parameters)
        lines.append((" " * PADDING + "%s %s" % (command.name, usage)).rstrip())

    lines.append("")
    lines.append(FOOTER)
    return "\n".join(lines)


def render_command_help(command, /):
    """
    Render the help text of a single command.
    """
    lines = ["Command: %s" % command.name]
    if command.aliases:
        lines.append("Aliases: %s" % ", ".join(command.aliases))
    if command.descr:
        lines.append("Description: %s" % command.descr)

    if command.parameters:
        lines.append("")
        lines.append("Parameters:")
        indent = " " * PADDING
        for index, parameter in enumerate(command.parameters):
            if index:
                lines.append("")
            lines.append(indent + "Parameter: %s" % parameter.name)
            lines.append(indent + "Data Type: %s" % parameter.typename)
            if parameter.ordinal is not None:
                lines.append(indent + "Position: %d" % parameter.ordinal)
            if parameter.aliases:
                lines.append(indent + "Aliases: %s" % ", ".join(parameter.aliases))
            if parameter.descr:
                lines.append(indent + "Description: %s" % parameter.descr)

    return "\n".join(lines)


__all__ = (
    "render_registry_help",
    "render_command_help",
)
