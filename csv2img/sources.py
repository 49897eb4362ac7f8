from __future__ import annotations

from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional
from urllib.parse import unquote, urlparse

import requests

from csv2img.parser import parse
from csv2img.table import Table

DEFAULT_TIMEOUT = 20


class CsvError(Exception):
    """Base class for failures while obtaining CSV text."""

    def __init__(self, url: str, data: bytes = b"", message: str = "") -> None:
        self.url = url
        self.data = data
        super().__init__(message or url)


class InvalidDownloadResource(CsvError):
    """The network resource could not be decoded as UTF-8."""

    def __init__(self, url: str, data: bytes) -> None:
        super().__init__(url, data, f"downloaded resource is not valid UTF-8: {url} ({len(data)} bytes)")


class InvalidLocalResource(CsvError):
    """The local file is missing or not valid UTF-8."""

    def __init__(self, url: str, data: bytes = b"") -> None:
        super().__init__(url, data, f"invalid local resource: {url}")


class CannotAccessFile(CsvError):
    """The local file exists but is not readable."""

    def __init__(self, url: str) -> None:
        super().__init__(url, b"", f"cannot access file: {url}")


def _local_path(path: str) -> str:
    """Accept plain paths and ``file://`` URLs."""
    if path.startswith("file://"):
        return unquote(urlparse(path).path)
    return path


@contextmanager
def open_resource(path: str) -> Iterator[BinaryIO]:
    """Open a local file for reading; the handle is always released."""
    local = _local_path(path)
    try:
        f = open(local, "rb")
    except FileNotFoundError as e:
        raise InvalidLocalResource(path) from e
    except IsADirectoryError as e:
        raise InvalidLocalResource(path) from e
    except PermissionError as e:
        raise CannotAccessFile(path) from e
    try:
        yield f
    finally:
        f.close()


def read_file_text(path: str) -> str:
    with open_resource(path) as f:
        data = f.read()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidLocalResource(path, data) from e


def read_url_text(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    data = r.content
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidDownloadResource(url, data) from e


def from_url(
    url: str,
    separator: str = ",",
    max_length: Optional[int] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Table:
    return parse(read_url_text(url, timeout=timeout), separator=separator, max_length=max_length)


def from_file(path: str, separator: str = ",", max_length: Optional[int] = None) -> Table:
    return parse(read_file_text(path), separator=separator, max_length=max_length)
