from dataclasses import dataclass

# --- Hardware Constants ---
VENDOR_ID = 0x1c7a
PRODUCT_ID = 0x0570
OUTPUT_ADDRESS = 0x04
TIMEOUT_MS = 1000
CAPTURE_SIZE = 32512

# --- Image Constants ---
IMG_WIDTH = 115
IMG_HEIGHT = 284
HEIGHT_SUBSAMPLE = 5
MAX_SAMPLE = 255

FINGERPRINT_FILENAME = "fingerprint"


@dataclass(frozen=True)
class CaptureSettings:
    """Everything the capture path needs to know about the target sensor."""

    vendor_id: int = VENDOR_ID
    product_id: int = PRODUCT_ID
    output_address: int = OUTPUT_ADDRESS
    timeout_ms: int = TIMEOUT_MS
    capture_size: int = CAPTURE_SIZE
    file_name: str = FINGERPRINT_FILENAME
    directory: str = "."
