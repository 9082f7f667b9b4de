import logging

import numpy as np
import usb.core

from egis_capture.config import CaptureSettings
from egis_capture.errors import ConfigurationError, TransferError
from egis_capture.session import configure_endpoint
from egis_capture.signals import DEVICE_SIGNALS

log = logging.getLogger(__name__)


class CaptureBuffer:
    """
    Fixed-size buffer shared by every read of the capture handshake.

    Each successful read is copied over the start of the buffer and the rest
    is left untouched, so a short read keeps the tail of an earlier, longer
    one. The buffer is never cleared between reads.
    """

    def __init__(self, size):
        self.data = bytearray(size)
        self.last_read_length = 0
        self.reads = 0
        self.failed_reads = 0
        self.failed_writes = 0

    def __len__(self):
        return len(self.data)

    def __bytes__(self):
        return bytes(self.data)

    def overlay(self, chunk):
        n = min(len(chunk), len(self.data))
        self.data[:n] = bytes(chunk[:n])
        self.last_read_length = n
        self.reads += 1

    def contrast(self):
        return float(np.std(np.frombuffer(bytes(self.data), dtype=np.uint8)))


def _send_signal(dev, address, signal, timeout):
    try:
        return dev.write(address, signal, timeout=timeout)
    except (usb.core.USBError, ValueError) as e:
        print(f"could not communicate with device: {e}")
        log.debug('%s', TransferError('write', address, e))
    return None


def _read_response(dev, address, size, timeout):
    try:
        return dev.read(address, size, timeout=timeout)
    except (usb.core.USBError, ValueError) as e:
        print(f"could not read from endpoint: {e}")
        log.debug('%s', TransferError('read', address, e))
    return None


def run_handshake(dev, endpoint, settings, signals=DEVICE_SIGNALS):
    """
    Writes every signal and reads one response after each, in order.

    Individual transfer failures are reported and skipped; the sequence is
    never retried or cut short. Returns the CaptureBuffer.
    """
    buf = CaptureBuffer(settings.capture_size)
    for i, signal in enumerate(signals):
        if _send_signal(dev, settings.output_address, signal, settings.timeout_ms) is None:
            buf.failed_writes += 1
        else:
            log.debug('signal %d/%d sent: %s', i + 1, len(signals), signal.hex(' '))

        data = _read_response(dev, endpoint.address, settings.capture_size, settings.timeout_ms)
        if data is None:
            buf.failed_reads += 1
        else:
            buf.overlay(data)
            log.debug('signal %d/%d response: %d bytes', i + 1, len(signals), len(data))
    return buf


def get_fingerprint(dev, endpoint, settings=None, signals=DEVICE_SIGNALS):
    """
    Configures the endpoint and runs the capture handshake.

    Returns the CaptureBuffer, or None if the endpoint could not be configured.
    """
    settings = settings or CaptureSettings()
    print(f"Reading from endpoint: {endpoint}")

    try:
        configure_endpoint(dev, endpoint)
    except ConfigurationError as e:
        print(f"could not configure endpoint: {e}")
        log.error('configuration aborted at %s: %s', e.step, e.cause)
        return None

    buf = run_handshake(dev, endpoint, settings, signals)
    log.info('Capture done: %d/%d reads ok, %d writes failed, last read %d bytes, contrast %.2f',
             buf.reads, len(signals), buf.failed_writes, buf.last_read_length, buf.contrast())
    return buf
