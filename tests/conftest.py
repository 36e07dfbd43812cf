import pytest

from bme280_fakes import FakeSMBus, loaded_smbus


@pytest.fixture
def fake_smbus() -> FakeSMBus:
    return loaded_smbus()
