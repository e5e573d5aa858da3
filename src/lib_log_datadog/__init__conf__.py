"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_datadog"
title = "Datadog events transport for Python logging"
version = "1.0.0"
author = "lib_log_datadog maintainers"
shell_command = "lib_log_datadog"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Write the metadata banner line by line through ``writer``.

    Examples
    --------
    >>> print_info(writer=lambda line: print(line, end=""))  # doctest: +ELLIPSIS
    Info for lib_log_datadog:
    ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
