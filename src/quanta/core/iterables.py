import abc
import collections
import itertools
import typing


T = typing.TypeVar('T')


@typing.runtime_checkable
class Displayable(typing.Protocol):
    """Protocol for classes that use `~iterables.ReprStrMixin`."""

    @property
    @abc.abstractmethod
    def display(self) -> typing.Mapping[str, str]: ...


class DisplayMap:
    """An attribute mapping for string formatting."""

    def __init__(self, instance: Displayable) -> None:
        self._instance = instance

    def __getitem__(self, name: str) -> str:
        """Get the named attribute and call it if necessary."""
        attr = getattr(self._instance, name)
        this = attr() if callable(attr) else attr
        return str(this)


class Display(collections.UserDict):
    """A dict-like object for string representations.

    Each value is a template in `str.format` syntax whose fields name
    attributes of the displayed instance.
    """

    def __init__(self, **templates: str):
        mapping = {'__str__': '', '__repr__': '', **templates}
        super().__init__(mapping)

    def __setitem__(self, __k: str, __s: str) -> None:
        if __k not in {'__str__', '__repr__'}:
            raise KeyError(f"Can't set value of {__k!r}")
        self.data[__k] = __s


class ReprStrMixin:
    """A mixin class that provides support for `__repr__` and `__str__`.

    Subclasses set the class attribute `display` to a `~iterables.Display`
    whose templates refer to instance attributes by name.
    """

    display = Display()

    def __str__(self) -> str:
        """A simplified representation of this object."""
        return self._get_display('__str__')

    def __repr__(self) -> str:
        """An unambiguous representation of this object."""
        string = self._get_display('__repr__')
        module = f"{self.__module__.replace('quanta.', '')}."
        name = self.__class__.__qualname__
        return f"{module}{name}({string or self})"

    def _get_display(self, method: str):
        """Helper method for `__str__` and `__repr__`."""
        target = self.display[method]
        return target.format_map(DisplayMap(self))


def runs(
    items: typing.Iterable[T],
    key: typing.Callable[[T], typing.Any],
) -> typing.Iterator[typing.List[T]]:
    """Yield consecutive items that share a key, as lists.

    This is `itertools.groupby` without the keys, for callers that only care
    about the groups themselves.
    """
    for _, group in itertools.groupby(items, key=key):
        yield list(group)


def show_at_most(
    n: int,
    values: typing.Iterable[typing.Any],
    separator: str=',',
) -> str:
    """Create a string with at most `n` values."""
    seq = list(values)
    if len(seq) <= n:
        return separator.join(str(v) for v in seq)
    truncated = [*seq[:n-1], '...', seq[-1]]
    return separator.join(str(v) for v in truncated)
