import pytest
import usb.util

from .mocks import MockUsbDevice, bulk_device


@pytest.fixture(autouse=True)
def fake_usb_util(monkeypatch):
    """Route the usb.util helpers that need a libusb context to the mock."""
    monkeypatch.setattr(usb.util, "claim_interface", lambda dev, iface: dev.claim_interface(iface))
    monkeypatch.setattr(usb.util, "release_interface", lambda dev, iface: dev.release_interface(iface))
    monkeypatch.setattr(usb.util, "dispose_resources", lambda dev: dev.dispose())


@pytest.fixture()
def device() -> MockUsbDevice:
    return bulk_device()
