"""
Helpers module behavioral tests (help text synthesis).

Scope
- Validate the registry-wide help layout (description, command lines, footer).
- Validate the single-command help layout (aliases, description, parameters).

Conventions
- Test method names follow CamelCase per project convention.
- Expected texts are spelled out in full to pin the layout.
"""

from __future__ import annotations

import unittest
from decimal import Decimal
from unittest import TestCase

from switchboard import Command, Parameter, Registry
from switchboard.helpers import FOOTER, render_command_help, render_registry_help


def noop(parameters):
    pass


class TestRenderHelp(TestCase):
    """Behavioral tests for render_registry_help() and render_command_help()."""

    def setUp(self):
        self.registry = Registry(descr="greeting tools")
        self.greet = self.registry.register(Command(noop, "greet", ("g", "hi"), (
            Parameter("name", "n", ordinal=1, descr="who to greet"),
            Parameter("times", "t", ordinal=2, type=int),
        ), "say hello"))
        self.version = self.registry.register(Command(noop, "version"))

    def testRegistryHelp(self):
        self.assertEqual(render_registry_help(self.registry), "\n".join((
            "Description: greeting tools",
            "",
            "Commands:",
            "  greet -name, -times",
            "  version",
            "",
            FOOTER,
        )))

    def testRegistryHelpWithoutDescription(self):
        registry = Registry()
        registry.register(Command(noop, "Ping"))
        self.assertEqual(render_registry_help(registry), "\n".join((
            "Commands:",
            "  ping",
            "",
            FOOTER,
        )))

    def testFooterMentionsHelpShorthand(self):
        self.assertIn("'-help'", FOOTER)

    def testCommandHelp(self):
        self.assertEqual(render_command_help(self.greet), "\n".join((
            "Command: greet",
            "Aliases: g, hi",
            "Description: say hello",
            "",
            "Parameters:",
            "  Parameter: name",
            "  Data Type: str",
            "  Position: 1",
            "  Aliases: n",
            "  Description: who to greet",
            "",
            "  Parameter: times",
            "  Data Type: int",
            "  Position: 2",
            "  Aliases: t",
        )))

    def testMinimalCommandHelp(self):
        self.assertEqual(render_command_help(self.version), "Command: version")

    def testNamedOnlyParameterHasNoPosition(self):
        command = Command(noop, "scale", parameters=(Parameter("ratio", type=Decimal),))
        self.assertEqual(render_command_help(command), "\n".join((
            "Command: scale",
            "",
            "Parameters:",
            "  Parameter: ratio",
            "  Data Type: Decimal",
        )))


if __name__ == "__main__":
    unittest.main()
