import logging
import os
from pathlib import Path

import numpy as np

from egis_capture.config import CAPTURE_SIZE, HEIGHT_SUBSAMPLE, IMG_HEIGHT, IMG_WIDTH, MAX_SAMPLE
from egis_capture.errors import FileWriteError

log = logging.getLogger(__name__)

LINE_FEED = 0x0a


def pgm_header(width=IMG_WIDTH, height=IMG_HEIGHT):
    return f"P5\n{width} {height // HEIGHT_SUBSAMPLE}\n{MAX_SAMPLE}\n".encode('ascii')


def fingerprint_rows(data):
    """
    Lays the capture out as IMG_HEIGHT rows of IMG_WIDTH bytes.

    Each row holds IMG_WIDTH - 1 samples followed by a line feed. Samples are
    taken consecutively starting at index 1, so byte 0 and everything after
    index IMG_HEIGHT * (IMG_WIDTH - 1) never make it into the image. Files
    written by earlier tools use the same layout.
    """
    if len(data) != CAPTURE_SIZE:
        raise ValueError(f"expected {CAPTURE_SIZE} bytes, got {len(data)}")

    cols = IMG_WIDTH - 1
    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    pixels = raw[1:1 + IMG_HEIGHT * cols].reshape((IMG_HEIGHT, cols))
    feed = np.full((IMG_HEIGHT, 1), LINE_FEED, dtype=np.uint8)
    return np.hstack([pixels, feed])


def _delete_file(file_path):
    try:
        os.remove(file_path)
    except OSError as e:
        print(f"Couldn't delete existing fingerprint: {e}")
        return False
    return True


def save_fingerprint(data, file_name, directory="."):
    """
    Writes the capture to ``<directory>/<file_name>.pgm``.

    An existing file is removed first. If writing fails the partial file is
    removed as well and None is returned; otherwise the path is returned.
    """
    file_path = Path(directory) / f"{file_name}.pgm"
    body = fingerprint_rows(data).tobytes()

    if file_path.exists():
        _delete_file(file_path)

    try:
        with open(file_path, 'wb') as f:
            f.write(pgm_header())
            f.write(body)
    except OSError as e:
        err = FileWriteError(file_path, e)
        print(err)
        log.error('%s; removing partial file', err)
        if file_path.exists():
            _delete_file(file_path)
        return None

    log.info('Wrote %s (%d bytes of samples)', file_path, len(body))
    return file_path
