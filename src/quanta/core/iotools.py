import os
import pathlib
import typing


PathLike = typing.Union[str, os.PathLike]


class NonExistentPathError(Exception):

    def __init__(self, path: str=None):
        self._path = path

    @property
    def path(self) -> str:
        if self._path is None:
            self._path = "The requested path"
        return self._path

    def __str__(self):
        return f"{self.path} does not exist."


def full_path(path: PathLike) -> pathlib.Path:
    """Expand and resolve `path`, which must exist."""
    result = pathlib.Path(path).expanduser().resolve()
    if not result.exists():
        raise NonExistentPathError(result)
    return result


def search(
    paths: typing.Iterable[typing.Optional[PathLike]],
    file: PathLike,
) -> typing.Optional[pathlib.Path]:
    """Search `paths` for `file`.

    Parameters
    ----------
    paths : iterable of path-like
        The paths to search, in the order given. Members that are `None` or
        that are not directories on the current file system are skipped.

    file : path-like
        The file to locate.

    Returns
    -------
    path or `None`
        The full path to the file, if found.
    """
    for p in paths:
        if p is None:
            continue
        directory = pathlib.Path(p).expanduser()
        if directory.is_dir():
            test = directory / str(file)
            if test.exists():
                return full_path(test)
    return None
