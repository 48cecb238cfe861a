from __future__ import annotations

import os
import uuid

import structlog

from .exceptions import DataDirectoryNotWritableError
from .settings import Settings

log = structlog.get_logger()


# PUBLIC_INTERFACE
def resolve_data_path(settings: Settings) -> str:
    """
    Return the absolute path of the JSON data file.

    An explicit data_path wins; otherwise data_directory/data_file_name is used,
    with a relative directory resolved against the working directory.
    """
    if settings.data_path:
        return os.path.abspath(settings.data_path)
    return os.path.abspath(os.path.join(settings.data_directory, settings.data_file_name))


# PUBLIC_INTERFACE
def ensure_writable(file_path: str) -> None:
    """
    Create the data file's directory and prove it is writable with a probe file.

    Raises:
        DataDirectoryNotWritableError: if the directory cannot be created or written.
    """
    directory = os.path.dirname(file_path)
    if not directory:
        raise DataDirectoryNotWritableError("Data directory could not be determined.", file_path)

    probe = os.path.join(directory, f"write-test-{uuid.uuid4().hex}.tmp")
    try:
        os.makedirs(directory, exist_ok=True)
        with open(probe, "w", encoding="utf-8") as f:
            f.write("probe")
    except OSError as e:
        raise DataDirectoryNotWritableError(f"Data directory '{directory}' is not writable.", file_path) from e
    finally:
        try:
            os.remove(probe)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning("Could not remove probe file", path=probe, error=str(e))
