"""Small JSON-on-disk helpers shared by the token cache and the analysis reports."""

import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional, Union

PathLike = Union[str, Path]


def ensure_dir(directory: PathLike) -> None:
    if directory:
        Path(directory).mkdir(parents=True, exist_ok=True)


def ensure_parent_dir(path: PathLike) -> None:
    ensure_dir(Path(path).parent)


def write_json(path: PathLike, data: Any) -> None:
    """
    Dump `data` as indented UTF-8 JSON and swap it into place.

    A half-written report never replaces a good one: the document is
    written and fsynced to a sibling temp file, which then takes the
    target's name through os.replace.
    """
    target = Path(path)
    ensure_parent_dir(target)

    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def read_json(
    path: PathLike,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Load a JSON document, or `default` when there is nothing usable.

    A missing file silently yields `default`. Undecodable content also
    yields `default`, after passing the error to `on_error` if given.
    """
    source = Path(path)
    if not source.exists():
        return default

    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if on_error is not None:
            on_error(e)
        return default
