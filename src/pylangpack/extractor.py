"""Safe extraction of language pack zip archives.

Every entry of a pack must live below a module directory
(``backend/Resources/Private/Language/de.locallang.xlf``); a bare file at
the archive root rejects the whole archive. Entry names are checked before
anything is written, so a rejected archive leaves the destination untouched.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path, PurePosixPath

from pylangpack.exceptions import LanguagePackExtractionError

_logger = logging.getLogger(__name__)


def _entry_target(destination: Path, name: str) -> tuple[Path, bool]:
    """Map an entry name to ``(target_path, is_directory)`` inside *destination*."""
    if "/" not in name:
        raise LanguagePackExtractionError(f"Module directory missing in zip entry {name!r}", entry=name)
    if "\\" in name or name.startswith("/") or PurePosixPath(name).is_absolute():
        raise LanguagePackExtractionError(f"Unsafe zip entry {name!r}", entry=name)

    is_directory = name.endswith("/")
    segments = [segment for segment in name.split("/") if segment not in ("", ".")]
    if not segments:
        raise LanguagePackExtractionError(f"Empty zip entry name {name!r}", entry=name)
    if ".." in segments or any(":" in segment for segment in segments):
        raise LanguagePackExtractionError(f"Unsafe zip entry {name!r}", entry=name)

    target = destination.joinpath(*segments)
    root = destination.resolve()
    if not target.resolve().is_relative_to(root):
        raise LanguagePackExtractionError(f"Zip entry {name!r} escapes {destination}", entry=name)
    return target, is_directory


def extract_archive(archive: bytes | Path, destination: Path) -> list[Path]:
    """Extract a language pack archive into *destination*.

    Parameters
    ----------
    archive : bytes or Path
        Raw zip content, or the path of a zip file.
    destination : Path
        Directory to extract into. Created if missing.

    Returns
    -------
    list[Path]
        Files written, in archive order.

    Raises
    ------
    LanguagePackExtractionError
        If the archive cannot be read, an entry name is malformed or would
        escape *destination*, or writing a file fails. The caller must treat
        *destination* as inconsistent when this is raised after writing began.
    """
    source = io.BytesIO(archive) if isinstance(archive, bytes) else archive
    try:
        zf = zipfile.ZipFile(source)
    except (zipfile.BadZipFile, OSError) as exc:
        raise LanguagePackExtractionError(f"Unable to open zip archive: {exc}") from exc

    written: list[Path] = []
    with zf:
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LanguagePackExtractionError(f"Could not create {destination}: {exc}") from exc

        plan = [(info, *_entry_target(destination, info.filename)) for info in zf.infolist()]

        for info, target, is_directory in plan:
            try:
                if is_directory:
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(zf.read(info))
            except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
                raise LanguagePackExtractionError(
                    f"Could not write file {info.filename}: {exc}",
                    entry=info.filename,
                ) from exc
            written.append(target)

    _logger.debug("Extracted %d files into %s", len(written), destination)
    return written
