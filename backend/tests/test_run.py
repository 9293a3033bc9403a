from __future__ import annotations

from pathlib import Path

import main
import run


def test_reload_dir_is_the_backend_directory() -> None:
    assert run.BACKEND_DIR == Path(main.__file__).resolve().parent
    assert (run.BACKEND_DIR / "splitstream").is_dir()
