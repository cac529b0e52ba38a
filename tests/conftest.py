import pytest
from keybench.keygen import KeyGenerator
from keybench.randsrc import SeededRandomSource


@pytest.fixture
def seeded():
    return SeededRandomSource(seed=1234)


@pytest.fixture
def generator(seeded):
    return KeyGenerator(random_source=seeded)
