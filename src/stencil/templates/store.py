import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

PART_SUFFIX = ".part"


class TemplateStore:
    """
    directory of downloaded template archives, laid out as
    {root}/{name}/{name}-{version}.zip.

    archives are written through staging() so that only complete downloads
    ever appear under their final name.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def archive_path(self, package_name: str, version: str) -> Path:
        return self.root / package_name / f"{package_name}-{version}.zip"

    def has_archive(self, package_name: str, version: str) -> bool:
        return self.archive_path(package_name, version).is_file()

    @contextmanager
    def staging(self, package_name: str, version: str) -> Iterator[Path]:
        """
        yield a temporary path to write an archive to.

        on normal exit the file is moved onto the archive path. on any
        exception, KeyboardInterrupt included, it is deleted.
        """
        target = self.archive_path(package_name, version)
        target.parent.mkdir(parents=True, exist_ok=True)
        part = target.with_name(target.name + PART_SUFFIX)

        try:
            yield part
        except BaseException:
            part.unlink(missing_ok=True)
            raise

        part.replace(target)
        logger.debug(f"stored {target}")
