"""Selective zip extraction and directory-to-zip packing."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Callable, Iterable, Optional

from distdeploy.modules.repackage.domain import ArchiveError

log = logging.getLogger(__name__)

SkipPredicate = Callable[[str], bool]


def contains_any(tokens: Iterable[str]) -> SkipPredicate:
    """Skip entries whose stored name contains any of ``tokens``."""
    needles = tuple(token for token in tokens if token)

    def _skip(name: str) -> bool:
        return any(needle in name for needle in needles)

    return _skip


def starts_with_any(prefixes: Iterable[str]) -> SkipPredicate:
    """Skip entries stored under any of ``prefixes``."""
    heads = tuple(prefix for prefix in prefixes if prefix)

    def _skip(name: str) -> bool:
        return bool(heads) and name.startswith(heads)

    return _skip


def pack_directory(source_dir: Path, archive_path: Path) -> int:
    """Zip every regular file under ``source_dir`` into ``archive_path``.

    Entry names are the forward-slash paths relative to ``source_dir``, written
    in lexicographic order so the same tree always produces the same entry
    sequence. Directories are implied by file paths and never stored. Returns
    the number of entries written.
    """
    files = sorted(
        (item for item in source_dir.rglob("*") if item.is_file()),
        key=lambda item: item.relative_to(source_dir).as_posix(),
    )
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    log.debug("Packing %d files from %s into %s", len(files), source_dir, archive_path)
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for item in files:
            zf.write(item, item.relative_to(source_dir).as_posix())
    log.info("Packed %s (%d entries)", archive_path, len(files))
    return len(files)


def unpack_archive(
    archive: Path,
    dest_dir: Path,
    skip: Optional[SkipPredicate] = None,
) -> int:
    """Extract ``archive`` into ``dest_dir`` honouring a skip predicate.

    ``skip`` sees the raw stored entry name. Existing files are overwritten,
    so when several archives are unpacked into one directory the last writer
    wins. Returns the number of file entries extracted.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    root = dest_dir.resolve()
    extracted = 0
    skipped = 0
    try:
        zf = zipfile.ZipFile(archive, "r")
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"{archive} is not a readable zip archive") from exc
    with zf:
        for info in zf.infolist():
            name = info.filename
            if skip is not None and skip(name):
                skipped += 1
                continue
            target = (dest_dir / name).resolve()
            if target != root and root not in target.parents:
                raise ArchiveError(f"entry {name!r} in {archive} escapes {dest_dir}")
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            extracted += 1
    log.info("Extracted %s -> %s (%d files, %d skipped)", archive, dest_dir, extracted, skipped)
    return extracted
