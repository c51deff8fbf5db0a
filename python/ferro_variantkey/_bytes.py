"""Input coercion shared by the codec modules."""

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def as_bytes(value: BytesLike, name: str) -> bytes:
    """Return ``value`` as ``bytes``, ASCII-encoding ``str`` input.

    Raises:
        TypeError: If ``value`` is not bytes-like or a string
        ValueError: If a string contains non-ASCII characters
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        try:
            return value.encode("ascii")
        except UnicodeEncodeError as e:
            raise ValueError(f"{name} must be ASCII: {value!r}") from e
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes or str, not {type(value).__name__}")
