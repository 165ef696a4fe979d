# backend/tugas/core/static.py
from pathlib import Path
from typing import Sequence

from starlette.staticfiles import StaticFiles


class LayeredStaticFiles(StaticFiles):
    """
    StaticFiles over several directories mounted at the same path.
    A file is looked up in each directory in order and the first hit wins.
    Missing directories are skipped, so a checkout without built assets still starts.
    """

    def __init__(self, *, directories: Sequence[Path], html: bool = False) -> None:
        first, *rest = [Path(d) for d in directories]
        super().__init__(directory=first, html=html, check_dir=False)
        self.all_directories = [*self.all_directories, *rest]

    async def check_config(self) -> None:
        # StaticFiles would raise here when the first directory is missing
        return None
