import contextlib
import logging

import usb.core
import usb.util

from egis_capture.config import TIMEOUT_MS

log = logging.getLogger(__name__)

# Standard GET_STATUS request, answered by every device once it is opened.
_GET_STATUS = (0x80, 0x00, 0, 0, 2)


def open_device(vendor_id, product_id):
    """Returns the first matching device that can actually be opened."""
    for dev in usb.core.find(find_all=True, idVendor=vendor_id, idProduct=product_id):
        try:
            dev.ctrl_transfer(*_GET_STATUS, timeout=TIMEOUT_MS)
        except usb.core.USBError as e:
            print(f"Couldnt access device: {e}")
            continue
        log.info('Opened device %04x:%04x (bus %s, address %s)',
                 vendor_id, product_id, getattr(dev, 'bus', '?'), getattr(dev, 'address', '?'))
        return dev

    return None


def _read_string(dev, index):
    if not index:
        return None
    try:
        return usb.util.get_string(dev, index)
    except (usb.core.USBError, ValueError) as e:
        log.debug('could not read string descriptor %d: %s', index, e)
        return None


def device_info(dev):
    info = {
        'manufacturer': _read_string(dev, dev.iManufacturer),
        'product': _read_string(dev, dev.iProduct),
        'serial_number': _read_string(dev, dev.iSerialNumber),
        'active_configuration': None,
    }
    try:
        info['active_configuration'] = dev.get_active_configuration().bConfigurationValue
    except usb.core.USBError as e:
        log.debug('no active configuration: %s', e)
    return info


@contextlib.contextmanager
def kernel_driver_detached(dev, iface):
    """
    Detaches the kernel driver from ``iface`` for the duration of the block.

    The driver is reattached on exit only if it was detached here. Failure of
    either step is logged and otherwise ignored.
    """
    detached = False
    try:
        if dev.is_kernel_driver_active(iface):
            dev.detach_kernel_driver(iface)
            detached = True
            log.debug('Detached kernel driver from interface %d', iface)
    except (usb.core.USBError, NotImplementedError) as e:
        log.warning('could not detach kernel driver from interface %d: %s', iface, e)

    try:
        yield detached
    finally:
        if detached:
            try:
                dev.attach_kernel_driver(iface)
                log.debug('Reattached kernel driver to interface %d', iface)
            except (usb.core.USBError, NotImplementedError) as e:
                log.warning('could not reattach kernel driver to interface %d: %s', iface, e)
