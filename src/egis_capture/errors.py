class FingerprintError(Exception):
    pass


class DeviceNotFound(FingerprintError):
    def __init__(self, vendor_id, product_id):
        super().__init__('could not find device %04x:%04x' % (vendor_id, product_id))
        self.vendor_id = vendor_id
        self.product_id = product_id


class EndpointNotFound(FingerprintError):
    def __init__(self):
        super().__init__('No readable bulk endpoint')


class ConfigurationError(FingerprintError):
    """One of set_configuration / claim_interface / set_alt_setting was rejected."""

    def __init__(self, step, cause):
        super().__init__('%s failed: %s' % (step, cause))
        self.step = step
        self.cause = cause


class TransferError(FingerprintError):
    def __init__(self, kind, address, cause):
        super().__init__('%s on 0x%02x failed: %s' % (kind, address, cause))
        self.kind = kind
        self.address = address
        self.cause = cause


class FileWriteError(FingerprintError):
    def __init__(self, path, cause):
        super().__init__("Couldn't write to fingerprint file %s: %s" % (path, cause))
        self.path = path
        self.cause = cause
