import re

from rich.pretty import pprint

from argclay import *

EMAIL = re.compile(r"[a-z0-9-_.]+@[a-z0-9-_.]+", re.IGNORECASE)


def _email(raw):
    if EMAIL.fullmatch(raw):
        return raw
    raise ParseError("'%s' is not a recognized email address" % raw.replace("'", "\\'"))


email = ArgumentType(_email, "EMAIL")


def build():
    # a command with a few options
    person = (
        Command("Describe a person.")
        .required(string, "name")
        .required(number, "age", flags=["a", "age"], description="The persons age in years.")
        .flag("dead", description="Whether this person is dead.")
    )

    # choice() only accepts a set of predetermined values
    device = (
        Command("Input your device details.")
        .required(choice("DEVICE_TYPE", ["phone", "laptop", "desktop"]), "type")
        .required(integer, "serialNumber", flags=["s", "serial", "serial-number"], description="The devices serial number.")
        .optional(string, "friendlyName", flags=["n", "name", "friendly-name"], description="A friendly name for the device.")
        .flag("lost", description="Whether this device was lost.")
    )

    signup = (
        Command("Register for an imaginary account.")
        .required(string, "name", flags=["name"], description="Your name.")
        .required(email, "email", flags=["email"], description="Your email address.")
    )

    create = Command("Create a new resource.")
    destroy = (
        Command("Destroy a given resource.")
        .required(string, "resource")
        .required(choice("CONFIRM", ["y", "yes", "ok"]), "confirm", flags=["confirm"], description="Confirm this action.")
    )

    manage = (
        CommandGroup("Manage imaginary resources.")
        .subcommand("create", create)
        .subcommand("destroy", destroy)
    )

    return (
        CommandGroup("Argclay example command.")
        .subcommand("person", person)
        .subcommand("device", device)
        .subcommand("signup", signup)
        .subcommand("manage", manage)
    )


if __name__ == '__main__':
    pprint(build().run())
