from __future__ import annotations

import logging
import subprocess

from protoc_gen_go_copy.errors import FormatError, GenerationError


def format_source(source: str, gofmt: str = "gofmt") -> str:
    """Run Go source through gofmt.

    Raises FormatError, carrying the unformatted source, when gofmt rejects
    it, and GenerationError when gofmt cannot be run. An empty gofmt returns
    the source as is.
    """
    if not gofmt:
        logging.debug("Formatting disabled, writing Go source unformatted")
        return source
    try:
        result = subprocess.run(
            [gofmt],
            input=source.encode("utf-8"),
            check=True,
            capture_output=True,
        )
    except FileNotFoundError as e:
        raise GenerationError(f"{gofmt!r} not found; install Go or pass gofmt= to skip formatting") from e
    except subprocess.CalledProcessError as e:
        message = e.stderr.decode("utf-8", errors="ignore").strip()
        raise FormatError(message or f"{gofmt} exited with status {e.returncode}", source) from e
    return result.stdout.decode("utf-8")
