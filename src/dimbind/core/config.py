"""
The config module is responsible for managing the configuration of dimbind and is based on the Donfig python library.

Example:
    The maximum rank accepted for dimension-indexed arrays defaults to 32, which is also its upper limit. It can be lowered
    programmatically, either globally or for the duration of a ``with`` block:

    ```python
    from dimbind.core.config import config

    with config.set({"max_rank": 8}):
        ...
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the value with an environment
    variable. The environment variable ``DIMBIND_MAX_RANK`` can be set to ``8``. The double
    underscore ``__`` is used to indicate nested access, e.g. ``DIMBIND_JSON__STRICT_INTEGERS=False``.

    ```bash
    export DIMBIND_MAX_RANK=8
    ```

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any

from donfig import Config as DConfig

from dimbind.core.common import MAX_RANK


class BadConfigError(ValueError):
    """Raised when a configuration value is invalid."""


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "DIMBIND_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for dimbind
config = Config(
    "dimbind",
    defaults=[
        {
            "max_rank": MAX_RANK,
            "json_indent": 2,
            "json": {"strict_integers": True},
        }
    ],
)


def parse_max_rank(data: Any) -> int:
    if isinstance(data, int) and not isinstance(data, bool) and 0 <= data <= MAX_RANK:
        return data
    msg = f"Expected an integer in [0, {MAX_RANK}] for 'max_rank', got {data!r} instead."
    raise BadConfigError(msg)
