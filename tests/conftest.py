import pytest

from clinic import Clinic
from config import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path)


@pytest.fixture
def clinic(settings: Settings) -> Clinic:
    return Clinic.open(settings)
