"""
Bundle packaging.

Turns an assembled bundle into a reproducible ZIP archive or writes it out
as a directory tree.
"""

import io
import re
import zipfile
from pathlib import Path
from typing import List, Union

from ..logging_config import get_logger
from .core.generator import GeneratorError
from .core.schema import GeneratedCodeBundle

logger = get_logger(__name__)

ARCHIVE_SUFFIX = "-generated-code.zip"

# ZIP timestamps cannot predate 1980
_EPOCH = (1980, 1, 1, 0, 0, 0)


class PackagingError(GeneratorError):
    """Exception raised when a bundle cannot be packaged or written."""

    pass


def suggest_archive_name(project_name: str) -> str:
    """
    Default archive file name for a project.

    Whitespace runs become a single ``-``; every other character is kept.

    Example:
        >>> suggest_archive_name("Customer Intake Form!")
        'Customer-Intake-Form!-generated-code.zip'
    """
    return re.sub(r"\s+", "-", project_name.strip()) + ARCHIVE_SUFFIX


def _archive_timestamp(bundle: GeneratedCodeBundle):
    stamp = bundle.generated_at.timetuple()[:6]
    return max(stamp, _EPOCH)


def package_bundle(bundle: GeneratedCodeBundle) -> bytes:
    """
    Build an in-memory ZIP archive of a bundle.

    Entries are written in category order, then in the order each emitter
    produced them. All entries share the bundle's ``generated_at`` stamp, so
    packaging the same bundle twice gives identical bytes.

    Args:
        bundle: Assembled bundle; never modified

    Returns:
        Archive bytes

    Raises:
        PackagingError: On duplicate archive paths or archive failures
    """
    date_time = _archive_timestamp(bundle)
    buffer = io.BytesIO()
    seen = set()

    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for generated in bundle.iter_files():
                path = generated.archive_path
                if path in seen:
                    raise PackagingError(f"Duplicate archive path: {path}")
                seen.add(path)

                info = zipfile.ZipInfo(path, date_time=date_time)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, generated.content.encode("utf-8"))
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        raise PackagingError(f"Failed to package {bundle.project_name}: {e}") from e

    data = buffer.getvalue()
    logger.info("Packaged %d files for %s (%d bytes)", len(seen), bundle.project_name, len(data))
    return data


def write_archive(bundle: GeneratedCodeBundle, output_path: Union[str, Path]) -> Path:
    """Package a bundle and write the archive to ``output_path``."""
    path = Path(output_path)
    data = package_bundle(bundle)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise PackagingError(f"Failed to write {path}: {e}") from e
    return path


def write_bundle(bundle: GeneratedCodeBundle, output_dir: Union[str, Path]) -> List[Path]:
    """
    Write every file of a bundle under a directory.

    Args:
        bundle: Assembled bundle
        output_dir: Root directory; created when missing

    Returns:
        Paths written, in archive order

    Raises:
        PackagingError: If a file cannot be written
    """
    root = Path(output_dir)
    written = []
    for generated in bundle.iter_files():
        target = root / generated.archive_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.content, encoding="utf-8")
        except OSError as e:
            raise PackagingError(f"Failed to write {target}: {e}") from e
        written.append(target)

    logger.info("Wrote %d files to %s", len(written), root)
    return written
