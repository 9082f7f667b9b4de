"""Raw fingerprint capture for the Egis 1c7a:0570 USB sensor."""

from egis_capture.config import CaptureSettings
from egis_capture.device import kernel_driver_detached, open_device
from egis_capture.driver import CaptureBuffer, get_fingerprint
from egis_capture.endpoint import Endpoint, find_readable_endpoint
from egis_capture.errors import (
    ConfigurationError,
    DeviceNotFound,
    EndpointNotFound,
    FileWriteError,
    FingerprintError,
    TransferError,
)
from egis_capture.image import save_fingerprint
from egis_capture.session import configure_endpoint
from egis_capture.signals import DEVICE_SIGNALS

__version__ = "0.1.0"
