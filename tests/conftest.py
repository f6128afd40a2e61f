import pytest

ORIGINAL = bytes([0x00, 0x01, 0x02, 0x03])
MODIFIED = bytes([0x00, 0xFF, 0x02, 0x03])


@pytest.fixture
def original_file(tmp_path):
    p = tmp_path / "firmware.bin"
    p.write_bytes(ORIGINAL)
    return p
