import collections.abc
import configparser
import json
import os
import pathlib

from quanta.core import iotools


# read version from installed package
from importlib.metadata import version
__version__ = version("quanta")


class Environment(collections.abc.Mapping):
    """A collection of settings from one section of a configuration file.

    The configuration file is the first 'quanta.ini' found in the current
    working directory, the user's home directory, '~/.config', '/etc/quanta',
    the directory named by the QUANTA_INI environment variable, and the
    package directory, in that order. A missing section behaves like an empty
    one.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        """The name of the configuration section to select."""
        home = pathlib.Path('~').expanduser()
        paths = [
            pathlib.Path.cwd(), # The current working directory
            home, # The user's home directory
            home / '.config', # Linux standard (local)
            '/etc/quanta', # Linux standard (global)
            os.environ.get('QUANTA_INI'), # A known environment variable
            pathlib.Path(__file__).parent, # The package top
        ]
        config = configparser.ConfigParser(interpolation=None)
        path = iotools.search(paths, 'quanta.ini')
        if path is not None:
            config.read(path, encoding='utf-8')
        self._config = dict(config[name]) if config.has_section(name) else {}
        self.path = path

    def __len__(self) -> int:
        """The number of available parameter values."""
        return len(self._config)

    def __iter__(self):
        """Iterate over available parameter values."""
        yield from self._config

    def __getitem__(self, key: str):
        """Access parameter values by mapping key."""
        if key in self._config:
            return self._config[key]
        raise KeyError(
            f"[{self.name}] has no value for {key!r}"
        ) from None

    def __str__(self) -> str:
        return json.dumps(
            dict(self._config),
            indent=4,
            sort_keys=True,
        )

    def __repr__(self) -> str:
        return f"{__package__}.Environment[{self.name}]({self.path}):\n{self}"
