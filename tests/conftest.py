import pytest
from structlog.testing import capture_logs

from wire_builders import sample_datagram


@pytest.fixture
def sample_packet() -> bytes:
    return sample_datagram()


@pytest.fixture
def captured_logs():
    with capture_logs() as logs:
        yield logs
