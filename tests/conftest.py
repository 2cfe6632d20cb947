import pytest

from tests.elfimage import SHT_NOBITS, SHT_PROGBITS, build_elf

ESP32_SECTIONS = [
    (".text", SHT_PROGBITS, 0x400D0010, 0x100),
    (".dram0.bss", SHT_NOBITS, 0x3FFB0000, 0x40),
    (".comment", SHT_PROGBITS, 0, 4),
]


@pytest.fixture
def make_elf(tmp_path):
    def _make(sections=ESP32_SECTIONS, name="app.elf"):
        path = tmp_path / name
        path.write_bytes(build_elf(sections))
        return path
    return _make


@pytest.fixture(autouse=True)
def session_log(tmp_path, monkeypatch):
    """Keep the session log out of the user's home directory."""
    log_file = tmp_path / "logs" / "session.jsonl"
    monkeypatch.setattr("espsegs.main.LOG_FILE", log_file)
    return log_file
