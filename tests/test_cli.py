import logging

import pytest
import usb.core
import usb.util

from egis_capture import cli
from egis_capture.config import CAPTURE_SIZE, CaptureSettings
from egis_capture.errors import DeviceNotFound, EndpointNotFound

from .mocks import MockConfiguration, MockEndpoint, MockInterface, MockUsbDevice, bulk_device

HEADER = b"P5\n115 56\n255\n"


@pytest.fixture()
def usb_bus(monkeypatch):
    devices = []
    monkeypatch.setattr(usb.core, "find", lambda find_all=False, **match: iter(devices))
    monkeypatch.setattr(usb.util, "get_string", lambda dev, index: "Egis")
    return devices


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_capture_success(usb_bus, workdir, capsys):
    dev = bulk_device(kernel_driver_active=True, reader=lambda n, size: b"\x2a" * size)
    usb_bus.append(dev)

    assert cli.main() == 0

    content = (workdir / "fingerprint.pgm").read_bytes()
    assert content.startswith(HEADER)
    body = content[len(HEADER):]
    assert len(body) == 284 * 114 + 284
    assert body.count(b"\n") == 284
    assert "Fingerprint saved" in capsys.readouterr().out

    names = dev.call_names()
    assert names.count("write") == 23
    assert names.index("release_interface") < names.index("attach_kernel_driver")
    assert names[-1] == "attach_kernel_driver"


def test_no_device(usb_bus, workdir, capsys):
    assert cli.main() == 0
    assert "could not find device 1c7a:0570" in capsys.readouterr().out
    assert list(workdir.iterdir()) == []


def test_no_readable_endpoint(usb_bus, workdir, capsys):
    cfg = MockConfiguration(1, [MockInterface(0, 0, [MockEndpoint(0x04)])])
    dev = MockUsbDevice([cfg], kernel_driver_active=True)
    usb_bus.append(dev)

    assert cli.main() == 0
    assert "no readable bulk endpoint" in capsys.readouterr().out.lower()
    assert list(workdir.iterdir()) == []
    assert "detach_kernel_driver" not in dev.call_names()


def test_configuration_failure_releases_everything(usb_bus, workdir, capsys):
    dev = bulk_device(kernel_driver_active=True, fail_on={"claim_interface"})
    usb_bus.append(dev)

    assert cli.main() == 0
    out = capsys.readouterr().out
    assert "Couldn't retrieve data from device" in out
    assert "Fingerprint saved" not in out
    assert not (workdir / "fingerprint.pgm").exists()
    assert dev.call_names()[-3:] == ["release_interface", "dispose_resources", "attach_kernel_driver"]


def test_capture_fingerprint_raises(usb_bus, tmp_path):
    with pytest.raises(DeviceNotFound):
        cli.capture_fingerprint(CaptureSettings(directory=str(tmp_path)))

    usb_bus.append(MockUsbDevice([MockConfiguration(1, [])]))
    with pytest.raises(EndpointNotFound):
        cli.capture_fingerprint(CaptureSettings(directory=str(tmp_path)))


def test_capture_fingerprint_with_custom_name(usb_bus, tmp_path):
    usb_bus.append(bulk_device(reader=lambda n, size: bytes(CAPTURE_SIZE)))
    path = cli.capture_fingerprint(CaptureSettings(file_name="left-thumb", directory=str(tmp_path)))
    assert path == tmp_path / "left-thumb.pgm"
    assert path.exists()


@pytest.mark.parametrize("capture_size", [40000, 1000])
def test_capture_size_other_than_raster_size(usb_bus, tmp_path, capture_size):
    usb_bus.append(bulk_device(reader=lambda n, size: b"\x2a" * size))
    settings = CaptureSettings(capture_size=capture_size, directory=str(tmp_path))
    path = cli.capture_fingerprint(settings)
    body = path.read_bytes()[len(HEADER):]
    assert len(body) == 284 * 115
    if capture_size > CAPTURE_SIZE:
        assert body == (b"\x2a" * 114 + b"\n") * 284
    else:
        pixels = body.replace(b"\n", b"")
        assert body.count(b"\n") == 284
        assert pixels[:999] == b"\x2a" * 999
        assert pixels[999:] == bytes(284 * 114 - 999)


def test_device_info_skipped_below_debug(usb_bus, tmp_path, monkeypatch, caplog):
    def fail_get_string(dev, index):
        raise AssertionError("string descriptors read at WARNING level")

    monkeypatch.setattr(usb.util, "get_string", fail_get_string)
    caplog.set_level(logging.WARNING, logger="egis_capture.cli")
    usb_bus.append(bulk_device())
    assert cli.capture_fingerprint(CaptureSettings(directory=str(tmp_path))) is not None
