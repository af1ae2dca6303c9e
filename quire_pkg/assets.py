"""Copying of the static assets tree into the output directory."""

import os
import shutil
import logging

from .errors import BuildError

logger = logging.getLogger('Quire.assets')


def copy_static_assets(static_dir, output_dir) -> int:
    """
    Copy every file below static_dir to the same relative path under output_dir.

    A missing static directory is not an error; nothing is copied.

    Returns:
        Number of files copied

    Raises:
        BuildError: A directory could not be created or a file could not be copied
    """
    if not static_dir or not os.path.isdir(static_dir):
        logger.debug(f"No static directory at {static_dir}, skipping asset copy")
        return 0

    copied = 0
    for root, dirs, files in os.walk(static_dir):
        dirs.sort()
        rel_dir = os.path.relpath(root, static_dir)
        dest_dir = output_dir if rel_dir == os.curdir else os.path.join(output_dir, rel_dir)
        try:
            os.makedirs(dest_dir, exist_ok=True)
        except (IOError, OSError) as e:
            raise BuildError('create directory', dest_dir, e) from e

        for filename in sorted(files):
            src_path = os.path.join(root, filename)
            dest_path = os.path.join(dest_dir, filename)
            try:
                shutil.copyfile(src_path, dest_path)
            except (IOError, OSError) as e:
                raise BuildError('copy asset', src_path, e) from e
            logger.debug(f"Copied asset: {src_path} -> {dest_path}")
            copied += 1

    return copied
