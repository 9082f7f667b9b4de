import logging
import os

from egis_capture.config import CAPTURE_SIZE, CaptureSettings
from egis_capture.device import device_info, kernel_driver_detached, open_device
from egis_capture.driver import get_fingerprint
from egis_capture.endpoint import find_readable_endpoint
from egis_capture.errors import DeviceNotFound, EndpointNotFound
from egis_capture.image import save_fingerprint
from egis_capture.session import claimed_interface

log = logging.getLogger(__name__)


def capture_fingerprint(settings=None):
    """
    Runs one full capture against the sensor described by ``settings``.

    Raises DeviceNotFound / EndpointNotFound before touching the device.
    Returns the written image path, or None if nothing could be saved.
    """
    settings = settings or CaptureSettings()

    dev = open_device(settings.vendor_id, settings.product_id)
    if dev is None:
        raise DeviceNotFound(settings.vendor_id, settings.product_id)
    if log.isEnabledFor(logging.DEBUG):
        log.debug('device info: %s', device_info(dev))

    endpoint = find_readable_endpoint(dev)
    if endpoint is None:
        raise EndpointNotFound()

    # release before reattach: the interface scope sits inside the driver scope
    with kernel_driver_detached(dev, endpoint.iface):
        with claimed_interface(dev, endpoint):
            finger_print = get_fingerprint(dev, endpoint, settings)
            if finger_print is None:
                print("Couldn't retrieve data from device")
                return None
            # the raster layout is fixed to CAPTURE_SIZE bytes
            data = bytes(finger_print)[:CAPTURE_SIZE].ljust(CAPTURE_SIZE, b'\x00')
            return save_fingerprint(data, settings.file_name, settings.directory)


def main():
    logging.basicConfig(level=os.environ.get('EGIS_CAPTURE_LOG_LEVEL', 'WARNING').upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        path = capture_fingerprint(CaptureSettings())
    except (DeviceNotFound, EndpointNotFound) as e:
        print(e)
        return 0

    if path is not None:
        print("Fingerprint saved")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
