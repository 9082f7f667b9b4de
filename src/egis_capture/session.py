import contextlib
import logging

import usb.core
import usb.util

from egis_capture.errors import ConfigurationError

log = logging.getLogger(__name__)


def configure_endpoint(dev, endpoint):
    """
    Selects the configuration, claims the interface and picks the alt setting.

    The steps run in that order and the first failure raises
    ConfigurationError naming the step; nothing after it is attempted.
    """
    steps = [
        ('set_configuration', lambda: dev.set_configuration(endpoint.config)),
        ('claim_interface', lambda: usb.util.claim_interface(dev, endpoint.iface)),
        ('set_alt_setting', lambda: dev.set_interface_altsetting(
            interface=endpoint.iface, alternate_setting=endpoint.setting)),
    ]
    for name, step in steps:
        try:
            step()
        except usb.core.USBError as e:
            raise ConfigurationError(name, e) from e
        log.debug('%s ok', name)


@contextlib.contextmanager
def claimed_interface(dev, endpoint):
    """Releases the interface and the device handle however the block exits."""
    try:
        yield dev
    finally:
        try:
            usb.util.release_interface(dev, endpoint.iface)
        except usb.core.USBError as e:
            log.warning('could not release interface %d: %s', endpoint.iface, e)
        usb.util.dispose_resources(dev)
