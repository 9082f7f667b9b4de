import logging
from collections import namedtuple

import usb.core
import usb.util

log = logging.getLogger(__name__)

# All four fields come from one configuration -> interface -> endpoint walk.
Endpoint = namedtuple('Endpoint', ['config', 'iface', 'setting', 'address'])


def _is_readable(ep, transfer_type):
    return (usb.util.endpoint_direction(ep.bEndpointAddress) == usb.util.ENDPOINT_IN
            and usb.util.endpoint_type(ep.bmAttributes) == transfer_type)


def find_readable_endpoint(dev, transfer_type=usb.util.ENDPOINT_TYPE_BULK):
    """
    Returns the first IN endpoint of the given transfer type, or None.

    Configurations are walked by index, interfaces/alt settings and endpoints
    in descriptor order. If the device has several matching endpoints only the
    first one is ever returned.
    """
    for n in range(dev.bNumConfigurations):
        try:
            cfg = dev[n]
        except usb.core.USBError as e:
            log.debug('skipping configuration %d: %s', n, e)
            continue

        for intf in cfg:
            for ep in intf:
                if _is_readable(ep, transfer_type):
                    endpoint = Endpoint(config=cfg.bConfigurationValue,
                                        iface=intf.bInterfaceNumber,
                                        setting=intf.bAlternateSetting,
                                        address=ep.bEndpointAddress)
                    log.debug('found readable endpoint %s', endpoint)
                    return endpoint

    return None
