"""
Switchboard dispatch surface: input → tokenize → resolve → invoke.

What this module provides
- Dispatcher: runs a prompt against a registry, invokes the bound action and
  routes help text to the help sink (helper) and faults to the error sink
  (fallback). The core never decides how either is displayed.
- invoke(dispatcher, prompt): convenience runner.
- console_helper / console_fallback: ready-made sinks printing with rich.

Prompts
- Unset: sys.argv[1:] (command name first).
- str: a console line, split on the space character only.
- Iterable[str]: a pre-tokenized argument vector.

Failure policy
- parse and resolution faults go to the fallback; they are never raised.
- a missing sink is a setup defect: SinkNotConfiguredError is raised.
- exceptions raised by an action propagate untouched.

Quick start
    from switchboard import Registry, Parameter, Dispatcher
    from switchboard.dispatch import console_helper, console_fallback

    registry = Registry()

    @registry.command(aliases=("g",), parameters=(Parameter("name", "n", ordinal=1),))
    def greet(parameters):
        print("hello, %s" % parameters.get("name", "world"))

    dispatcher = Dispatcher(registry, helper=console_helper, fallback=console_fallback)
    dispatcher.dispatch("g Alice")
"""
import copy
import logging
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .commands import Registry
from .faults import *
from .resolver import Bound, resolve
from .tokenizer import split, tokenize
from .utils import *

logger = logging.getLogger(__name__)

console = Console()
errconsole = Console(stderr=True)


def console_helper(text, /):
    """
    Help sink: print help text to stdout, without markup interpretation.
    """
    console.print(Text(text))


def console_fallback(fault, /, *, fancy=False, colorful=True):
    """
    Error sink: render a fault (see DispatchFault.__rich__) to stderr.
    """
    errconsole.print(copy.replace(fault, fancy=fancy, colorful=colorful))


class Dispatcher:
    """
    Bind a registry to its help and error sinks and run prompts against it.

    Sinks
    - helper: Callable[[str], object], receives rendered help text.
    - fallback: Callable[[DispatchFault], object], receives parse/resolution faults.
    Either can be given to the constructor or set once with the decorator-style
    methods of the same name.
    """

    def __init__(self, registry, /, helper=Unset, fallback=Unset):
        if not isinstance(registry, Registry):
            raise TypeError("dispatcher 'registry' must be a registry")
        self._registry = registry
        self._helper = Unset
        self._fallback = Unset
        if helper is not Unset:
            self.helper(helper)
        if fallback is not Unset:
            self.fallback(fallback)

    registry = mirror("registry")

    def helper(self, helper, /):
        """
        Register the help sink (once). Returns it, enabling @dispatcher.helper.
        """
        if not callable(helper):
            raise TypeError("dispatcher helper must be callable")
        if self._helper is not Unset:
            raise TypeError("dispatcher helper cannot be overridden")
        self._helper = helper
        return helper

    def fallback(self, fallback, /):
        """
        Register the error sink (once). Returns it, enabling @dispatcher.fallback.
        """
        if not callable(fallback):
            raise TypeError("dispatcher fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError("dispatcher fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    @staticmethod
    def _tokens(prompt):
        if prompt is Unset:
            return sys.argv[1:]
        elif isinstance(prompt, str):
            return split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("dispatch() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("dispatch() argument must be a string or an iterable of strings")

    def resolve(self, prompt=Unset, /):
        """
        Tokenize and resolve a prompt without invoking anything.

        Returns a Bound or a fault (see resolver.resolve).
        """
        return resolve(tokenize(self._tokens(prompt)), self._registry, self._helper)

    def dispatch(self, prompt=Unset, /):
        """
        Resolve a prompt and act on the outcome.

        Returns the action's return value, or None when a fault was handed to
        the fallback.
        """
        outcome = self.resolve(prompt)
        if isinstance(outcome, Bound):
            logger.debug("invoking %r", getattr(outcome.action, "__name__", outcome.action))
            return outcome.action(dict(outcome.parameters))

        if not callable(self._fallback):
            raise SinkNotConfiguredError(
                "an error sink has not been configured",
                hint="pass fallback=... to the dispatcher, e.g. fallback=console_fallback",
                fault=outcome,
            )
        logger.debug("dispatch failed: %s", outcome)
        self._fallback(outcome)
        return None

    def __invoke__(self, prompt=Unset):
        return self.dispatch(prompt)

    def __repr__(self):
        return "dispatcher(registry=%r, helper=%r, fallback=%r)" % (self._registry, self._helper, self._fallback)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for dispatchers.

    - object must implement __invoke__(prompt) (Dispatcher does).
    - prompt follows Dispatcher.dispatch (Unset → sys.argv[1:]).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Dispatcher",
    "invoke",
    "console_helper",
    "console_fallback",
)
