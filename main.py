from rich.pretty import pprint

from switchboard import *
from switchboard.dispatch import console_helper, console_fallback

registry = Registry(descr="greeting tools")


@registry.command(
        aliases=("g",),
        parameters=(
            Parameter("name", "n", ordinal=1, descr="who to greet"),
            Parameter("times", "t", ordinal=2, type=int, descr="how many greetings"),
        ),
)
def greet(parameters):
    """say hello"""
    for _ in range(int(parameters.get("times", 1))):
        print("hello, %s" % parameters.get("name", "world"))


dispatcher = Dispatcher(registry, helper=console_helper, fallback=console_fallback)


if __name__ == '__main__':
    pprint(registry.lookup("greet"))
    invoke(dispatcher)
