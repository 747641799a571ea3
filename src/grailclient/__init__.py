"""grailclient - client-side state core for the vinyl catalog."""

__version__ = "0.1.0"
